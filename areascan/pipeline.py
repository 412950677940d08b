"""
Main Pipeline Orchestrator for Area Scans

  1. Input: Lat/Lon or location text (geocoded)
  2. Fetch amenity/shop elements around the center (gap fetch)
  3. Count categories, derive density label and top categories
  4. Rank business gaps against density-adjusted ideals
  5. Fetch road / transit / logistics elements (best effort)
  6. Score accessibility
  7. Assemble scan result

The gap fetch is all-or-nothing: without it there is no element total
and so no density factor. Accessibility degrades per group instead.
"""

import json
import math
import os
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence, Tuple

from loguru import logger

from .analysis import AccessibilityAnalyzer, GapAnalyzer, count_categories, extractors_for
from .collectors import ElementSource, NominatimGeocoder, OverpassElementSource
from .config import PipelineConfig, SignalSpec, get_config, validate_config
from .errors import InvalidInput, SourceUnavailable
from .models import AccessibilityReport, AreaScan, Coordinate, TaggedElement


class AreaScanPipeline:
    """
    Main pipeline to scan an area for business gaps and accessibility

    Usage:
        pipeline = AreaScanPipeline()
        result = pipeline.run(lat=12.9716, lon=77.5946, radius_m=1000)
        pipeline.save(result, "output/scan.json")
    """

    def __init__(
        self,
        config: Optional[PipelineConfig] = None,
        source: Optional[ElementSource] = None,
        geocoder: Optional[NominatimGeocoder] = None,
        cache_dir: Optional[str] = None
    ):
        self.config = config or get_config()
        validate_config(self.config)

        self.source = source or OverpassElementSource(self.config, cache_dir=cache_dir)
        self.geocoder = geocoder or NominatimGeocoder(self.config.api)

        self.gap_analyzer = GapAnalyzer(self.config.gap)
        self.accessibility_analyzer = AccessibilityAnalyzer(self.config.accessibility)

    def validate_request(self, lat, lon, radius_m) -> Tuple[Coordinate, int]:
        """
        Check center and radius before anything is fetched

        Raises:
            InvalidInput: Listing every problem found
        """
        errors = []

        for name, value, bound in (("lat", lat, 90.0), ("lon", lon, 180.0)):
            if value is None:
                errors.append(f"{name} is required")
            elif isinstance(value, bool) or not isinstance(value, (int, float)):
                errors.append(f"{name} must be a number, got {value!r}")
            elif not math.isfinite(value) or abs(value) > bound:
                errors.append(f"{name} must be within [-{bound:g}, {bound:g}], got {value}")

        if radius_m is None:
            errors.append("radius_m is required")
        elif isinstance(radius_m, bool) or not isinstance(radius_m, (int, float)):
            errors.append(f"radius_m must be a number, got {radius_m!r}")
        elif not math.isfinite(radius_m) or radius_m <= 0:
            errors.append(f"radius_m must be positive, got {radius_m}")

        if errors:
            raise InvalidInput("Invalid scan request: " + "; ".join(errors))

        return Coordinate(lat=float(lat), lon=float(lon)), int(math.ceil(radius_m))

    def density_label(self, total_elements: int) -> str:
        if total_elements < self.config.density_low_below:
            return "Low"
        if total_elements < self.config.density_medium_below:
            return "Medium"
        return "High"

    def run(
        self,
        lat: float,
        lon: float,
        radius_m: Optional[float] = None,
        location: Optional[str] = None,
        include_accessibility: bool = True
    ) -> AreaScan:
        """
        Run the complete scan

        Args:
            lat: Latitude of the center
            lon: Longitude of the center
            radius_m: Gap search radius (default from config)
            location: Location text the center came from, if any
            include_accessibility: Also fetch and score accessibility

        Returns:
            AreaScan result

        Raises:
            InvalidInput: Bad center or radius
            SourceUnavailable: Gap fetch failed on every mirror
        """
        if radius_m is None:
            radius_m = self.config.search_radius_m
        center, radius = self.validate_request(lat, lon, radius_m)
        gap_config = self.config.gap

        logger.info(f"Starting area scan for ({center.lat}, {center.lon}), radius {radius}m")

        # ============================================================
        # STAGE 1: Gap fetch
        # ============================================================
        logger.info("Stage 1: Fetching amenities and shops...")
        try:
            elements = self.source.fetch_elements(
                center, radius, gap_config.fetch_filters, gap_config.element_limit
            )
        except SourceUnavailable as e:
            logger.error(f"Analysis failed: {e}")
            raise

        # ============================================================
        # STAGE 2: Category inventory
        # ============================================================
        logger.info("Stage 2: Counting categories...")
        counts = count_categories(
            elements,
            extractors_for(gap_config.category_tags),
            gap_config.fallback_category,
        )
        top_categories = counts.top(gap_config.top_categories)
        density = self.density_label(counts.total)
        logger.info(f"{counts.total} elements, {len(counts)} categories, density {density}")

        # ============================================================
        # STAGE 3: Business gaps
        # ============================================================
        logger.info("Stage 3: Ranking business gaps...")
        recommendations = self.gap_analyzer.analyze(counts, counts.total)

        # ============================================================
        # STAGE 4: Accessibility (best effort)
        # ============================================================
        accessibility = None
        if include_accessibility:
            logger.info("Stage 4: Scoring accessibility...")
            try:
                accessibility = self.collect_accessibility(center)
            except SourceUnavailable as e:
                logger.warning(f"Accessibility skipped: {e}")

        scan = AreaScan(
            location=location,
            center=center,
            radius_m=radius,
            total_elements=counts.total,
            density_label=density,
            top_categories=top_categories,
            recommendations=recommendations,
            accessibility=accessibility,
            sample_elements=list(elements[:self.config.sample_elements]),
        )
        logger.info(f"Scan complete. Scan ID: {scan.scan_id}")
        return scan

    def run_location(
        self,
        location: str,
        radius_m: Optional[float] = None,
        include_accessibility: bool = True
    ) -> AreaScan:
        """Geocode location text, then run the scan around it"""
        center = self.geocoder.geocode(location)
        return self.run(
            center.lat,
            center.lon,
            radius_m=radius_m,
            location=location,
            include_accessibility=include_accessibility,
        )

    def collect_accessibility(self, center: Coordinate) -> AccessibilityReport:
        """
        Fetch the three signal groups and score them

        A group whose fetch fails scores 0 and is listed as unavailable.

        Raises:
            SourceUnavailable: If all three fetches fail
        """
        groups = self.config.accessibility.groups()

        if self.config.concurrent_fetches:
            with ThreadPoolExecutor(max_workers=len(groups)) as executor:
                futures = [
                    executor.submit(self._fetch_group, center, name, specs)
                    for name, specs in groups
                ]
                results = [future.result() for future in futures]
        else:
            results = [self._fetch_group(center, name, specs) for name, specs in groups]

        if all(result is None for result in results):
            raise SourceUnavailable("All accessibility fetches failed")

        road, transit, logistics = results
        return self.accessibility_analyzer.analyze_elements(road, transit, logistics)

    def _fetch_group(
        self,
        center: Coordinate,
        group: str,
        specs: Sequence[SignalSpec]
    ) -> Optional[List[TaggedElement]]:
        """Fetch elements for one accessibility group; None if the source is down"""
        acc = self.config.accessibility
        try:
            return self.source.fetch_elements(
                center,
                acc.radius_m,
                [spec.tag_filter for spec in specs],
                acc.element_limit,
            )
        except SourceUnavailable as e:
            logger.warning(f"{group} fetch unavailable, scoring it as 0: {e}")
            return None

    def save(self, scan: AreaScan, output_path: str) -> str:
        """Save scan result to JSON file"""
        os.makedirs(os.path.dirname(output_path) or ".", exist_ok=True)

        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(scan.model_dump(mode="json"), f, indent=2, ensure_ascii=False)

        logger.info(f"Saved area scan to {output_path}")
        return output_path
