"""
Location text -> coordinate lookup using Nominatim
"""

import time
from typing import Optional

import requests
from loguru import logger

from ..config import APIConfig, get_config
from ..errors import InvalidInput, LocationNotFound, SourceUnavailable
from ..models import Coordinate


class NominatimGeocoder:
    """Resolve free-text locations with the OpenStreetMap Nominatim API"""

    def __init__(self, api_config: Optional[APIConfig] = None):
        self.api = api_config or get_config().api
        self._last_request_time = 0.0
        self._min_request_interval = self.api.min_request_interval

    def _rate_limit(self):
        """Nominatim usage policy: at most one request per second"""
        elapsed = time.time() - self._last_request_time
        if elapsed < self._min_request_interval:
            time.sleep(self._min_request_interval - elapsed)
        self._last_request_time = time.time()

    def geocode(self, address: str) -> Coordinate:
        """
        Get the best-match coordinate for an address or place name

        Raises:
            InvalidInput: Blank address
            LocationNotFound: No match
            SourceUnavailable: Nominatim unreachable or returned garbage
        """
        if not address or not address.strip():
            raise InvalidInput("location is required")

        self._rate_limit()
        try:
            response = requests.get(
                f"{self.api.nominatim_url.rstrip('/')}/search",
                params={"q": address.strip(), "format": "json", "limit": 1},
                headers={"User-Agent": self.api.user_agent},
                timeout=self.api.request_timeout
            )
            response.raise_for_status()
            results = response.json()
        except (requests.exceptions.RequestException, ValueError) as e:
            logger.error(f"Geocoding failed for '{address}': {e}")
            raise SourceUnavailable(f"Geocoding service unavailable: {e}") from e

        if not results:
            raise LocationNotFound(f"Location not found: {address}")

        best = results[0]
        try:
            coordinate = Coordinate(lat=float(best["lat"]), lon=float(best["lon"]))
        except (KeyError, TypeError, ValueError) as e:
            raise SourceUnavailable(f"Unexpected geocoding response for '{address}': {e}") from e

        logger.info(f"Geocoded '{address}' -> ({coordinate.lat}, {coordinate.lon})")
        return coordinate
