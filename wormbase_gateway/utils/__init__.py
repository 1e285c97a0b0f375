"""Shared utilities for the WormBase Gateway.

- http:      outbound GET helper, fixed headers, UpstreamError
- normalize: widget payload simplification (envelopes, references, wrappers)
"""

from .http import DEFAULT_HEADERS, UpstreamError, get_json, new_client
from .normalize import clean_widget_data, simplify_value

__all__ = [
    # http
    "DEFAULT_HEADERS", "UpstreamError", "get_json", "new_client",
    # normalize
    "clean_widget_data", "simplify_value",
]
