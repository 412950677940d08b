"""
Data collectors for Area Scan

- OverpassElementSource: tagged POI / road / transit elements from OpenStreetMap
- NominatimGeocoder: location text to coordinates
"""

from .overpass import ElementSource, OverpassElementSource, OverpassAPIClient
from .geocoder import NominatimGeocoder

__all__ = [
    "ElementSource",
    "OverpassElementSource",
    "OverpassAPIClient",
    "NominatimGeocoder",
]
