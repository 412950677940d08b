"""
Overpass response parser

Parses Overpass API responses into TaggedElement objects
"""

from typing import Dict, Any, List

from loguru import logger
from pydantic import ValidationError

from ...models import TaggedElement


class OverpassResponseParser:
    """Parses Overpass API responses"""

    @staticmethod
    def parse_elements(data: Dict[str, Any]) -> List[TaggedElement]:
        """
        Parse Overpass response into tagged elements

        Handles 'out body' (node lat/lon) and 'out center' (way center)
        formats; entries with unknown type or bad fields are skipped.

        Args:
            data: JSON response from Overpass API

        Returns:
            Elements in response order
        """
        elements = []
        skipped = 0

        for element in data.get("elements") or []:
            if not isinstance(element, dict) or element.get("type") not in ("node", "way", "relation"):
                skipped += 1
                continue

            lat = element.get("lat")
            lon = element.get("lon")
            if lat is None and isinstance(element.get("center"), dict):
                lat = element["center"].get("lat")
                lon = element["center"].get("lon")

            tags = element.get("tags") or {}
            try:
                elements.append(TaggedElement(
                    id=element.get("id"),
                    kind=element["type"],
                    tags={str(k): str(v) for k, v in tags.items()},
                    lat=lat,
                    lon=lon,
                ))
            except (ValidationError, AttributeError) as e:
                logger.debug(f"Skipping malformed element {element.get('id')}: {e}")
                skipped += 1

        if skipped:
            logger.debug(f"Skipped {skipped} unparseable Overpass elements")
        return elements
