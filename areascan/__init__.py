"""
Area Scan - business gap and accessibility scoring from OpenStreetMap data
"""

from .config import PipelineConfig, get_config, validate_config
from .errors import ScanError, SourceUnavailable, InvalidInput, LocationNotFound
from .models import (
    Coordinate, TaggedElement, TagFilter, CategoryCounts, CategoryShare,
    Recommendation, AccessibilityReport, AreaScan
)
from .analysis import compute_gap_recommendations, compute_accessibility_report
from .pipeline import AreaScanPipeline

__version__ = "1.0.0"

__all__ = [
    "PipelineConfig",
    "get_config",
    "validate_config",
    "ScanError",
    "SourceUnavailable",
    "InvalidInput",
    "LocationNotFound",
    "Coordinate",
    "TaggedElement",
    "TagFilter",
    "CategoryCounts",
    "CategoryShare",
    "Recommendation",
    "AccessibilityReport",
    "AreaScan",
    "compute_gap_recommendations",
    "compute_accessibility_report",
    "AreaScanPipeline",
]
