from .wormbase import SearchResponse, SearchResult, WormBaseClient

__all__ = ["SearchResponse", "SearchResult", "WormBaseClient"]
