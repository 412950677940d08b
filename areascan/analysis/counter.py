"""
Category counting

Buckets tagged elements into named categories. Two flavours:
- count_categories: each element lands in exactly one bucket, chosen by
  an ordered list of key extractors (first hit wins, else fallback)
- count_signals: each signal counts every element its TagFilter matches,
  so one element may feed several signals
"""

from typing import Callable, Dict, Iterable, List, Mapping, Optional, Sequence

from loguru import logger

from ..config import SignalSpec
from ..models import CategoryCounts, TaggedElement


KeyExtractor = Callable[[Mapping[str, str]], Optional[str]]


def tag_value(key: str) -> KeyExtractor:
    """Extractor returning the value of one tag, or None when absent/empty"""
    def extract(tags: Mapping[str, str]) -> Optional[str]:
        return tags.get(key) or None
    extract.__name__ = f"tag_value_{key}"
    return extract


def extractors_for(tag_keys: Sequence[str]) -> List[KeyExtractor]:
    return [tag_value(key) for key in tag_keys]


def category_key(
    tags: Mapping[str, str],
    extractors: Sequence[KeyExtractor],
    fallback: str = "other"
) -> str:
    for extractor in extractors:
        key = extractor(tags)
        if key:
            return key
    return fallback


def count_categories(
    elements: Iterable[TaggedElement],
    extractors: Sequence[KeyExtractor],
    fallback: str = "other"
) -> CategoryCounts:
    """
    Count elements per category key

    Args:
        elements: Tagged elements from one fetch
        extractors: Ordered key extractors, evaluated first to last
        fallback: Bucket for elements no extractor matches

    Returns:
        CategoryCounts with total = number of elements seen
    """
    counts: Dict[str, int] = {}
    total = 0
    for element in elements:
        key = category_key(element.tags, extractors, fallback)
        counts[key] = counts.get(key, 0) + 1
        total += 1

    logger.debug(f"Counted {total} elements into {len(counts)} categories")
    return CategoryCounts(counts=counts, total=total)


def count_signals(
    elements: Optional[Iterable[TaggedElement]],
    specs: Sequence[SignalSpec]
) -> CategoryCounts:
    """Count matching elements per signal; missing element list counts as empty"""
    counts = {spec.name: 0 for spec in specs}
    total = 0
    for element in elements or ():
        total += 1
        for spec in specs:
            if spec.tag_filter.matches(element):
                counts[spec.name] += 1
    return CategoryCounts(counts=counts, total=total)
