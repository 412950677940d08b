"""
Configuration settings for Area Scan

All tables (needs, thresholds, weights) are frozen dataclasses and tuples.
Analyzers receive them explicitly, so tests can swap in alternate tables
with dataclasses.replace().
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple

from .models import TagFilter


ThresholdTable = Tuple[int, int, int, int]


@dataclass(frozen=True)
class APIConfig:
    """API endpoints and request settings"""
    # Overpass mirrors, tried in this order
    overpass_urls: Tuple[str, ...] = (
        "https://overpass-api.de/api/interpreter",
        "https://overpass.kumi.systems/api/interpreter",
    )
    overpass_query_timeout: int = 25  # Server-side [timeout:N] in the query

    # Nominatim (geocoding)
    nominatim_url: str = "https://nominatim.openstreetmap.org"

    # Request settings
    request_timeout: float = 30.0  # Per attempt, seconds
    attempts_per_mirror: int = 1
    retry_delay: float = 1.0
    min_request_interval: float = 1.0

    # User agent for API requests
    user_agent: str = "AreaScan/1.0"


@dataclass(frozen=True)
class NeedDefinition:
    """Baseline 'ideal' supply of one business category at reference density"""
    key: str
    label: str
    ideal: int


DEFAULT_NEEDS: Tuple[NeedDefinition, ...] = (
    NeedDefinition("pharmacy", "Pharmacy", 8),
    NeedDefinition("hospital", "Clinic / Hospital", 3),
    NeedDefinition("cafe", "Cafe", 12),
    NeedDefinition("restaurant", "Restaurant", 15),
    NeedDefinition("fast_food", "Fast Food Outlet", 10),
    NeedDefinition("gym", "Gym / Fitness Center", 4),
    NeedDefinition("supermarket", "Supermarket", 6),
    NeedDefinition("bank", "Bank / ATM", 6),
    NeedDefinition("school", "Tuition / Coaching Center", 4),
)


@dataclass(frozen=True)
class GapConfig:
    """Business gap analysis settings"""
    needs: Tuple[NeedDefinition, ...] = DEFAULT_NEEDS

    # Density factor = clamp(total / reference_density, min, max)
    reference_density: int = 500
    min_density_factor: float = 0.6
    max_density_factor: float = 2.0

    top_k: int = 5

    # Reason bands (score >= band)
    strong_opportunity_score: int = 70
    moderate_gap_score: int = 40

    # Category key = first of these tags present on an element
    category_tags: Tuple[str, ...] = ("amenity", "shop", "tourism", "leisure")
    fallback_category: str = "other"
    top_categories: int = 8

    # What the gap fetch asks the element source for
    fetch_filters: Tuple[TagFilter, ...] = (
        TagFilter(key="amenity"),
        TagFilter(key="shop"),
    )
    element_limit: int = 1200


class ScoringMode(str, Enum):
    TIERED = "tiered"      # threshold table -> {0,25,50,75,100}
    PRESENCE = "presence"  # 100 if any present, else 0


@dataclass(frozen=True)
class SignalSpec:
    """One counted signal inside an accessibility group"""
    name: str
    tag_filter: TagFilter
    weight: float
    thresholds: ThresholdTable = (1, 2, 4, 7)
    mode: ScoringMode = ScoringMode.TIERED


ROAD_SIGNALS: Tuple[SignalSpec, ...] = (
    SignalSpec(
        "major_road_ways",
        TagFilter(key="highway", pattern="motorway|trunk|primary|secondary", kinds=("way",)),
        0.55,
        (1, 3, 6, 10),
    ),
    SignalSpec("parking", TagFilter(key="amenity", value="parking"), 0.25, (1, 3, 6, 10)),
    SignalSpec("fuel", TagFilter(key="amenity", value="fuel"), 0.20, (1, 2, 4, 7)),
)

TRANSIT_SIGNALS: Tuple[SignalSpec, ...] = (
    SignalSpec("bus_stops", TagFilter(key="highway", value="bus_stop"), 0.45, (5, 15, 30, 60)),
    SignalSpec("railway_stations", TagFilter(key="railway", value="station"), 0.25),
    SignalSpec("metro_stations", TagFilter(key="station", value="subway"), 0.20),
    SignalSpec(
        "airports",
        TagFilter(key="aeroway", value="aerodrome"),
        0.10,
        mode=ScoringMode.PRESENCE,
    ),
)

LOGISTICS_SIGNALS: Tuple[SignalSpec, ...] = (
    SignalSpec(
        "warehouses",
        TagFilter(key="building", value="warehouse", kinds=("node", "way")),
        0.50,
    ),
    SignalSpec("courier", TagFilter(key="office", value="courier"), 0.30),
    SignalSpec("post_office", TagFilter(key="amenity", value="post_office"), 0.20),
)


@dataclass(frozen=True)
class AccessibilityConfig:
    """Road / transit / logistics scoring settings"""
    radius_m: int = 2500
    element_limit: int = 1500

    road: Tuple[SignalSpec, ...] = ROAD_SIGNALS
    transit: Tuple[SignalSpec, ...] = TRANSIT_SIGNALS
    logistics: Tuple[SignalSpec, ...] = LOGISTICS_SIGNALS

    # (label, signal name) pairs for the one-line summary
    summary_fields: Tuple[Tuple[str, str], ...] = (
        ("Roads", "major_road_ways"),
        ("Bus", "bus_stops"),
        ("Rail", "railway_stations"),
        ("Metro", "metro_stations"),
        ("Warehouses", "warehouses"),
    )

    def groups(self) -> Tuple[Tuple[str, Tuple[SignalSpec, ...]], ...]:
        return (("road", self.road), ("transit", self.transit), ("logistics", self.logistics))


@dataclass(frozen=True)
class PipelineConfig:
    """Pipeline configuration"""
    # Gap-analysis search radius around the center point (meters)
    search_radius_m: int = 1000

    # Density label: total < low -> Low, total < medium -> Medium, else High
    density_low_below: int = 120
    density_medium_below: int = 350

    # Raw elements kept on the result for inspection
    sample_elements: int = 10

    # Run the three accessibility fetches in parallel
    concurrent_fetches: bool = True

    api: APIConfig = field(default_factory=APIConfig)
    gap: GapConfig = field(default_factory=GapConfig)
    accessibility: AccessibilityConfig = field(default_factory=AccessibilityConfig)


# Global config instance
config = PipelineConfig()


def get_config() -> PipelineConfig:
    """Get global configuration"""
    return config


def _check_thresholds(name: str, thresholds, errors: list) -> None:
    if len(thresholds) != 4:
        errors.append(f"{name}: threshold table needs 4 entries, got {len(thresholds)}")
        return
    if any(not isinstance(t, int) or t < 0 for t in thresholds):
        errors.append(f"{name}: thresholds must be non-negative integers, got {list(thresholds)}")
        return
    if any(b < a for a, b in zip(thresholds, thresholds[1:])):
        errors.append(f"{name}: thresholds must be ascending, got {list(thresholds)}")


def validate_config(config: PipelineConfig) -> None:
    """
    Validate configuration tables.
    Raises ValueError listing every problem found.
    """
    errors = []

    if config.search_radius_m is None or config.search_radius_m <= 0:
        errors.append(f"search_radius_m must be positive, got {config.search_radius_m}")
    if config.density_low_below > config.density_medium_below:
        errors.append("density_low_below must not exceed density_medium_below")

    # API
    if not config.api.overpass_urls:
        errors.append("api.overpass_urls must list at least one mirror")
    if config.api.request_timeout <= 0:
        errors.append(f"api.request_timeout must be positive, got {config.api.request_timeout}")
    if config.api.attempts_per_mirror < 1:
        errors.append(f"api.attempts_per_mirror must be >= 1, got {config.api.attempts_per_mirror}")

    # Gap analysis
    gap = config.gap
    seen = set()
    for need in gap.needs:
        if need.key in seen:
            errors.append(f"gap.needs: duplicate key '{need.key}'")
        seen.add(need.key)
        if need.ideal < 1:
            errors.append(f"gap.needs: ideal for '{need.key}' must be >= 1, got {need.ideal}")
    if gap.reference_density <= 0:
        errors.append(f"gap.reference_density must be positive, got {gap.reference_density}")
    if not 0 < gap.min_density_factor <= gap.max_density_factor:
        errors.append(
            f"gap density bounds invalid: min={gap.min_density_factor}, max={gap.max_density_factor}"
        )
    if gap.top_k < 1:
        errors.append(f"gap.top_k must be >= 1, got {gap.top_k}")
    if not 0 <= gap.moderate_gap_score <= gap.strong_opportunity_score <= 100:
        errors.append("gap reason bands must satisfy 0 <= moderate <= strong <= 100")
    if not gap.category_tags:
        errors.append("gap.category_tags must name at least one tag")

    # Accessibility
    for group_name, specs in config.accessibility.groups():
        if not specs:
            errors.append(f"accessibility.{group_name} has no signals")
            continue
        total_weight = sum(spec.weight for spec in specs)
        if not math.isclose(total_weight, 1.0, abs_tol=1e-9):
            errors.append(f"accessibility.{group_name} weights sum to {total_weight}, expected 1.0")
        for spec in specs:
            if spec.weight < 0:
                errors.append(f"accessibility.{group_name}.{spec.name}: negative weight")
            if spec.mode == ScoringMode.TIERED:
                _check_thresholds(f"accessibility.{group_name}.{spec.name}", spec.thresholds, errors)

    if errors:
        error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        raise ValueError(error_msg)
