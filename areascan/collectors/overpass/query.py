"""
Overpass QL query building

Renders TagFilter predicates into an around-radius union query
"""

import re
from typing import Optional, Sequence

from ...models import Coordinate, TagFilter


# Characters with a meaning in POSIX extended regular expressions
_ERE_SPECIAL = re.compile(r"([.\[\]()*+?{}|^$\\])")


def _ere_escape(text: str) -> str:
    """Escape a literal for an Overpass ~ selector (POSIX ERE, not Python re)"""
    return _ERE_SPECIAL.sub(r"\\\1", text)


def _quote(text: str) -> str:
    return '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'


def render_filter(tag_filter: TagFilter) -> str:
    """Tag selector part, e.g. ["amenity"="fuel"]"""
    key = _quote(tag_filter.key)
    if tag_filter.value is not None:
        return f"[{key}={_quote(tag_filter.value)}]"
    if tag_filter.one_of is not None:
        alternatives = "|".join(_ere_escape(v) for v in tag_filter.one_of)
        return f"[{key}~{_quote(f'^({alternatives})$')}]"
    if tag_filter.pattern is not None:
        return f"[{key}~{_quote(tag_filter.pattern)}]"
    return f"[{key}]"


def build_query(
    center: Coordinate,
    radius_m: int,
    filters: Sequence[TagFilter],
    limit: Optional[int] = None,
    timeout: int = 25
) -> str:
    """
    Build an Overpass union query for all filters around a point

    Args:
        center: Query center
        radius_m: Search radius in meters
        filters: One statement per filter and element kind
        limit: Max elements in the output (None = no limit)
        timeout: Server-side query timeout in seconds

    Returns:
        Overpass QL string
    """
    around = f"(around:{int(radius_m)},{center.lat},{center.lon})"
    statements = []
    for tag_filter in filters:
        selector = render_filter(tag_filter)
        for kind in tag_filter.kinds:
            statements.append(f"  {kind}{around}{selector};")

    out = f"out body {limit};" if limit else "out body;"
    return "\n".join([f"[out:json][timeout:{timeout}];", "(", *statements, ");", out])
