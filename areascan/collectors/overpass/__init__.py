"""
OpenStreetMap element source

Components:
- API client: Overpass API communication with mirror fallback
- Query: TagFilter -> Overpass QL
- Parser: Response parsing into TaggedElement
- Cache: Raw response caching
- Collector: ElementSource implementation
"""

from .api_client import OverpassAPIClient
from .collector import ElementSource, OverpassElementSource
from .query import build_query

__all__ = [
    "OverpassAPIClient",
    "ElementSource",
    "OverpassElementSource",
    "build_query",
]
