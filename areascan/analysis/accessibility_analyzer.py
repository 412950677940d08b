"""
Accessibility analysis - road, transit and logistics scores from
counted signals around the center point
"""

from typing import Dict, Iterable, Optional, Sequence

from loguru import logger

from ..config import AccessibilityConfig, ScoringMode, SignalSpec, get_config
from ..models import AccessibilityReport, CategoryCounts, TaggedElement
from .counter import count_signals
from .thresholds import blend, presence_score, score_from_count


class AccessibilityAnalyzer:
    """
    Blend per-signal tier scores into three sub-scores

    road      = 0.55 major roads + 0.25 parking + 0.20 fuel
    transit   = 0.45 bus + 0.25 rail + 0.20 metro + 0.10 airport (presence)
    logistics = 0.50 warehouses + 0.30 courier + 0.20 post office
    """

    def __init__(self, config: Optional[AccessibilityConfig] = None):
        self.config = config or get_config().accessibility

    @staticmethod
    def signal_score(spec: SignalSpec, count: int) -> int:
        if spec.mode == ScoringMode.PRESENCE:
            return presence_score(count)
        return score_from_count(count, spec.thresholds)

    def sub_score(self, specs: Sequence[SignalSpec], counts: Optional[CategoryCounts]) -> int:
        if counts is None:
            counts = CategoryCounts()
        scores = {spec.name: self.signal_score(spec, counts.get(spec.name)) for spec in specs}
        weights = {spec.name: spec.weight for spec in specs}
        return blend(scores, weights)

    def summary(self, counts: Dict[str, int]) -> str:
        return " | ".join(
            f"{label}: {counts.get(name, 0)}" for label, name in self.config.summary_fields
        )

    def analyze(
        self,
        road_counts: Optional[CategoryCounts],
        transit_counts: Optional[CategoryCounts],
        logistics_counts: Optional[CategoryCounts],
        unavailable: Iterable[str] = ()
    ) -> AccessibilityReport:
        """
        Build the report; a missing counts object scores its group as 0

        Args:
            road_counts: Counts keyed by road signal name
            transit_counts: Counts keyed by transit signal name
            logistics_counts: Counts keyed by logistics signal name
            unavailable: Groups whose fetch failed, carried onto the report

        Returns:
            AccessibilityReport
        """
        by_group = {"road": road_counts, "transit": transit_counts, "logistics": logistics_counts}

        raw_counts: Dict[str, int] = {}
        scores: Dict[str, int] = {}
        for group, specs in self.config.groups():
            group_counts = by_group[group] if by_group[group] is not None else CategoryCounts()
            for spec in specs:
                raw_counts[spec.name] = group_counts.get(spec.name)
            scores[group] = self.sub_score(specs, group_counts)

        report = AccessibilityReport(
            road_score=scores["road"],
            transit_score=scores["transit"],
            logistics_score=scores["logistics"],
            counts=raw_counts,
            summary=self.summary(raw_counts),
            radius_m=self.config.radius_m,
            unavailable=list(unavailable),
        )
        logger.info(
            f"Accessibility: road={report.road_score} transit={report.transit_score} "
            f"logistics={report.logistics_score} ({report.summary})"
        )
        return report

    def analyze_elements(
        self,
        road_elements: Optional[Sequence[TaggedElement]],
        transport_elements: Optional[Sequence[TaggedElement]],
        logistics_elements: Optional[Sequence[TaggedElement]]
    ) -> AccessibilityReport:
        """Count signals per group and score; None marks a fetch that failed"""
        lists = {
            "road": road_elements,
            "transit": transport_elements,
            "logistics": logistics_elements,
        }
        unavailable = [group for group, elements in lists.items() if elements is None]
        counts = {
            group: count_signals(lists[group], specs)
            for group, specs in self.config.groups()
        }
        if unavailable:
            logger.warning(f"Accessibility degraded, no data for: {', '.join(unavailable)}")
        return self.analyze(counts["road"], counts["transit"], counts["logistics"], unavailable)


def compute_accessibility_report(
    road_elements: Optional[Sequence[TaggedElement]],
    transport_elements: Optional[Sequence[TaggedElement]],
    logistics_elements: Optional[Sequence[TaggedElement]],
    config: Optional[AccessibilityConfig] = None
) -> AccessibilityReport:
    return AccessibilityAnalyzer(config).analyze_elements(
        road_elements, transport_elements, logistics_elements
    )
