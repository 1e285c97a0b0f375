"""WormBase Gateway: WormBase REST/search access exposed as MCP tools and an HTTP surface.

Import either from submodules or via the facade here.
"""

from .catalogue import ENTITY_TYPES, ENTITY_TYPES_URI, EntityType, entity_types_document
from .clients.wormbase import SearchResponse, SearchResult, WormBaseClient
from .utils.http import UpstreamError

__version__ = "1.0.0"

__all__ = [
    "ENTITY_TYPES", "ENTITY_TYPES_URI", "EntityType", "entity_types_document",
    "SearchResponse", "SearchResult", "WormBaseClient",
    "UpstreamError",
]
