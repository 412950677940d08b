"""
Business gap analysis - compares observed supply per category against
a density-adjusted ideal and ranks the shortfalls
"""

from typing import List, Optional, Sequence

from loguru import logger

from ..config import GapConfig, NeedDefinition, get_config
from ..models import CategoryCounts, Recommendation, TaggedElement
from .counter import count_categories, extractors_for
from .thresholds import clamp, round_half_up


class GapAnalyzer:
    """
    Score how underserved each business category is

    density factor = clamp(total / 500, 0.6, 2.0)
    dynamic ideal  = max(1, round(ideal * density factor))
    score          = clamp(round(max(ideal - existing, 0) / ideal * 100))
    """

    def __init__(self, config: Optional[GapConfig] = None):
        self.config = config or get_config().gap

    def density_factor(self, total_elements: int) -> float:
        ratio = max(total_elements, 0) / self.config.reference_density
        return clamp(ratio, self.config.min_density_factor, self.config.max_density_factor)

    @staticmethod
    def dynamic_ideal(baseline: int, density_factor: float) -> int:
        return max(1, round_half_up(baseline * density_factor))

    def reason(self, gap: int, score: int, existing: int) -> str:
        if gap == 0:
            text = "Already well served in this area (high competition)."
        elif score >= self.config.strong_opportunity_score:
            text = "High demand and low supply: strong opportunity to start."
        elif score >= self.config.moderate_gap_score:
            text = "Moderate gap: could work with good differentiation."
        else:
            text = "Small gap: only worth it if you have a unique angle."
        return f"{text} (Existing: {existing})"

    def evaluate(
        self,
        counts: CategoryCounts,
        total_elements: int,
        needs: Optional[Sequence[NeedDefinition]] = None
    ) -> List[Recommendation]:
        """Score every need, unfiltered, in need-table order"""
        needs = self.config.needs if needs is None else needs
        factor = self.density_factor(total_elements)

        results = []
        for need in needs:
            existing = counts.get(need.key)
            ideal = self.dynamic_ideal(need.ideal, factor)
            gap = max(ideal - existing, 0)
            score = int(clamp(round_half_up(gap / ideal * 100)))
            results.append(Recommendation(
                key=need.key,
                label=need.label,
                score=score,
                reason=self.reason(gap, score, existing),
                existing=existing,
            ))
        return results

    def analyze(
        self,
        counts: CategoryCounts,
        total_elements: int,
        needs: Optional[Sequence[NeedDefinition]] = None,
        top_k: Optional[int] = None
    ) -> List[Recommendation]:
        """
        Ranked opportunities: score > 0, descending score, first top_k

        Equal scores keep need-table order.
        """
        top_k = self.config.top_k if top_k is None else top_k
        scored = [r for r in self.evaluate(counts, total_elements, needs) if r.score > 0]
        ranked = sorted(scored, key=lambda r: -r.score)[:max(top_k, 0)]

        logger.info(
            f"Gap analysis: {len(ranked)} opportunities from {total_elements} elements "
            f"(density factor {self.density_factor(total_elements):.2f})"
        )
        return ranked


def compute_gap_recommendations(
    elements: Sequence[TaggedElement],
    needs: Optional[Sequence[NeedDefinition]] = None,
    top_k: Optional[int] = None,
    config: Optional[GapConfig] = None
) -> List[Recommendation]:
    """Count categories in one element list and rank the gaps"""
    config = config or get_config().gap
    counts = count_categories(
        elements,
        extractors_for(config.category_tags),
        config.fallback_category,
    )
    return GapAnalyzer(config).analyze(counts, counts.total, needs, top_k)
