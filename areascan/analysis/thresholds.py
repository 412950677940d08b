"""
Threshold scoring helpers

Stepwise count -> score mapping plus the rounding/clamping every score
passes through before it leaves the analyzers.
"""

import math
from typing import Mapping, Sequence


def clamp(value: float, low: float = 0, high: float = 100) -> float:
    return max(low, min(high, value))


def round_half_up(value: float) -> int:
    """Round to nearest integer with .5 going up (round(12.5) -> 13, not 12)"""
    return int(math.floor(value + 0.5))


def score_from_count(count: int, thresholds: Sequence[int]) -> int:
    """
    Map a raw count to a tier score in {0, 25, 50, 75, 100}

    Each threshold reached (count >= threshold, in ascending order) steps
    the score up one tier. Not interpolated: one below thresholds[3]
    scores 75.

    Args:
        count: Non-negative element count
        thresholds: 4 ascending breakpoints, e.g. (1, 3, 6, 10)

    Returns:
        Tier score
    """
    if count <= 0:
        return 0

    score = 0
    for tier, threshold in enumerate(thresholds[:4], start=1):
        if count >= threshold:
            score = tier * 25
    return score


def presence_score(count: int) -> int:
    """100 if anything is present, else 0"""
    return 100 if count > 0 else 0


def blend(scores: Mapping[str, int], weights: Mapping[str, float]) -> int:
    """Weighted sum of sub-scores, rounded half up and clamped to [0, 100]"""
    total = 0.0
    for name, weight in weights.items():
        total += scores.get(name, 0) * weight
    return int(clamp(round_half_up(total)))
