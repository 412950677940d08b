"""
Overpass response caching

Stores raw Overpass responses on disk, keyed by center, radius and query
"""

import os
import json
import hashlib
from typing import Dict, Any, Optional

from loguru import logger

from ...models import Coordinate


class OverpassCache:
    """Handles caching of Overpass responses to disk"""

    def __init__(self, cache_dir: Optional[str] = None):
        self.cache_dir = cache_dir

    def get_cache_path(self, center: Coordinate, radius_m: int, query: str) -> Optional[str]:
        """Get cache file path for an Overpass query"""
        if not self.cache_dir:
            return None
        cache_key = f"{center.lat:.6f}_{center.lon:.6f}_{radius_m:.0f}_{query}"
        cache_hash = hashlib.md5(cache_key.encode()).hexdigest()[:12]
        return os.path.join(self.cache_dir, f"overpass_{cache_hash}.json")

    def load(self, cache_path: str) -> Optional[Dict[str, Any]]:
        """
        Load response from cache if it exists

        Anything that is not an Overpass payload (a dict holding an
        ``elements`` list) is treated as a miss so it gets refetched.
        """
        if not os.path.exists(cache_path):
            return None
        try:
            with open(cache_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to load cache {cache_path}: {e}")
            return None

        if not isinstance(data, dict) or not isinstance(data.get("elements"), list):
            logger.warning(f"Ignoring cache {cache_path}: not an Overpass response")
            return None

        logger.info(f"Loaded {len(data['elements'])} Overpass elements from cache: {cache_path}")
        return data

    def save(self, cache_path: str, data: Dict[str, Any]):
        """Save response to cache"""
        if not self.cache_dir:
            return
        try:
            os.makedirs(os.path.dirname(cache_path), exist_ok=True)
            with open(cache_path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            logger.info(f"Saved Overpass data to cache: {cache_path}")
        except (OSError, TypeError) as e:
            logger.warning(f"Failed to save cache {cache_path}: {e}")
