"""
Scoring engine for Area Scan
"""

from .thresholds import score_from_count, presence_score, blend, clamp, round_half_up
from .counter import count_categories, count_signals, tag_value, extractors_for
from .gap_analyzer import GapAnalyzer, compute_gap_recommendations
from .accessibility_analyzer import AccessibilityAnalyzer, compute_accessibility_report

__all__ = [
    "score_from_count",
    "presence_score",
    "blend",
    "clamp",
    "round_half_up",
    "count_categories",
    "count_signals",
    "tag_value",
    "extractors_for",
    "GapAnalyzer",
    "compute_gap_recommendations",
    "AccessibilityAnalyzer",
    "compute_accessibility_report",
]
