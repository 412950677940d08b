"""
Element source backed by Overpass

Ties together query building, the API client, caching and parsing
"""

from typing import List, Optional, Protocol, Sequence

from loguru import logger

from ...config import PipelineConfig, get_config
from ...models import Coordinate, TagFilter, TaggedElement
from .api_client import OverpassAPIClient
from .cache import OverpassCache
from .parser import OverpassResponseParser
from .query import build_query


class ElementSource(Protocol):
    """Anything that can return tagged elements around a point"""

    def fetch_elements(
        self,
        center: Coordinate,
        radius_m: int,
        filters: Sequence[TagFilter],
        limit: Optional[int] = None
    ) -> List[TaggedElement]:
        """Raises SourceUnavailable when no result can be obtained"""
        ...


class OverpassElementSource:
    """
    Fetch tagged elements from OpenStreetMap via Overpass API

    Supports caching raw responses to disk for debugging and reuse.
    """

    def __init__(
        self,
        config: Optional[PipelineConfig] = None,
        cache_dir: Optional[str] = None,
        api_client: Optional[OverpassAPIClient] = None
    ):
        self.config = config or get_config()
        self.api_client = api_client or OverpassAPIClient(self.config.api)
        self.cache = OverpassCache(cache_dir)
        self.parser = OverpassResponseParser()

    def fetch_elements(
        self,
        center: Coordinate,
        radius_m: int,
        filters: Sequence[TagFilter],
        limit: Optional[int] = None
    ) -> List[TaggedElement]:
        """
        Fetch elements matching any filter within radius_m of center

        Raises:
            SourceUnavailable: If every Overpass mirror fails
        """
        query = build_query(
            center, radius_m, filters, limit,
            timeout=self.config.api.overpass_query_timeout
        )

        cache_path = self.cache.get_cache_path(center, radius_m, query)
        data = self.cache.load(cache_path) if cache_path else None

        if data is None:
            logger.info(f"Fetching {len(filters)} filter(s) within {radius_m}m of ({center.lat}, {center.lon})")
            data = self.api_client.query(query)
            if cache_path:
                self.cache.save(cache_path, data)

        elements = self.parser.parse_elements(data)
        logger.info(f"Fetched {len(elements)} elements")
        return elements
