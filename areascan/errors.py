"""
Error types raised by Area Scan
"""


class ScanError(Exception):
    """Base class for all scan failures"""


class SourceUnavailable(ScanError):
    """The element source could not be reached (all mirrors/attempts exhausted)"""


class InvalidInput(ScanError, ValueError):
    """Bad center coordinates, radius or location text, rejected before fetching"""


class LocationNotFound(InvalidInput):
    """Geocoder returned no match for the location text"""
