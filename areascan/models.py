"""
Pydantic models for Area Scan data structures

Elements come in from the element source, counts and scores go out
to the caller. Everything here is frozen once built.
"""

import re
import uuid
from datetime import datetime, timezone
from typing import List, Optional, Dict, Literal, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator


ElementKind = Literal["node", "way", "relation"]


# ============================================================
# Input Models
# ============================================================

class Coordinate(BaseModel):
    model_config = ConfigDict(frozen=True)

    lat: float
    lon: float


class TaggedElement(BaseModel):
    """One observed OSM node or way with its free-form tags"""
    model_config = ConfigDict(frozen=True)

    id: Optional[int] = None
    kind: ElementKind = "node"
    tags: Dict[str, str] = Field(default_factory=dict)
    lat: Optional[float] = None
    lon: Optional[float] = None


class TagFilter(BaseModel):
    """
    Structured tag predicate

    Modes (at most one of value / one_of / pattern may be set):
      - key exists:          TagFilter(key="amenity")
      - key equals value:    TagFilter(key="amenity", value="fuel")
      - key is one of set:   TagFilter(key="amenity", one_of=("bank", "atm"))
      - key matches regex:   TagFilter(key="highway", pattern="motorway|trunk")
    """
    model_config = ConfigDict(frozen=True)

    key: str
    value: Optional[str] = None
    one_of: Optional[Tuple[str, ...]] = None
    pattern: Optional[str] = None
    kinds: Tuple[ElementKind, ...] = ("node",)

    @model_validator(mode="after")
    def _check_mode(self) -> "TagFilter":
        modes = [m for m in (self.value, self.one_of, self.pattern) if m is not None]
        if len(modes) > 1:
            raise ValueError(f"TagFilter on '{self.key}' sets more than one match mode")
        if self.one_of is not None and not self.one_of:
            raise ValueError(f"TagFilter on '{self.key}' has an empty value set")
        if not self.kinds:
            raise ValueError(f"TagFilter on '{self.key}' matches no element kinds")
        return self

    def matches(self, element: TaggedElement) -> bool:
        if element.kind not in self.kinds:
            return False
        tag = element.tags.get(self.key)
        if tag is None:
            return False
        if self.value is not None:
            return tag == self.value
        if self.one_of is not None:
            return tag in self.one_of
        if self.pattern is not None:
            return re.search(self.pattern, tag) is not None
        return True


# ============================================================
# Result Models
# ============================================================

class CategoryShare(BaseModel):
    name: str
    count: int = Field(ge=0)


class CategoryCounts(BaseModel):
    """Read-only category -> count map built once per scan"""
    model_config = ConfigDict(frozen=True)

    counts: Dict[str, int] = Field(default_factory=dict)
    total: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def _check_counts(self) -> "CategoryCounts":
        for key, count in self.counts.items():
            if count < 0:
                raise ValueError(f"Negative count for category '{key}': {count}")
        return self

    def get(self, key: str) -> int:
        return self.counts.get(key, 0)

    def top(self, n: int) -> List[CategoryShare]:
        """Largest n categories, descending; ties keep first-seen order"""
        ranked = sorted(self.counts.items(), key=lambda item: -item[1])
        return [CategoryShare(name=name, count=count) for name, count in ranked[:max(n, 0)]]

    def __contains__(self, key: str) -> bool:
        return key in self.counts

    def __len__(self) -> int:
        return len(self.counts)


class Recommendation(BaseModel):
    key: str
    label: str
    score: int = Field(ge=0, le=100)
    reason: str
    existing: int = Field(ge=0)


class AccessibilityReport(BaseModel):
    road_score: int = Field(ge=0, le=100)
    transit_score: int = Field(ge=0, le=100)
    logistics_score: int = Field(ge=0, le=100)
    counts: Dict[str, int] = Field(default_factory=dict)
    summary: str = ""
    radius_m: Optional[int] = None
    unavailable: List[str] = Field(default_factory=list)


class AreaScan(BaseModel):
    """Complete scan result for one center point and radius"""

    scan_id: str = Field(default_factory=lambda: f"SCAN-{datetime.now().strftime('%Y%m%d%H%M%S')}-{str(uuid.uuid4())[:4]}")
    created_at: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    location: Optional[str] = None
    center: Coordinate
    radius_m: int

    total_elements: int = Field(ge=0)
    density_label: str
    top_categories: List[CategoryShare] = Field(default_factory=list)
    recommendations: List[Recommendation] = Field(default_factory=list)
    accessibility: Optional[AccessibilityReport] = None

    # Debug view of the raw gap-fetch elements
    sample_elements: List[TaggedElement] = Field(default_factory=list)
