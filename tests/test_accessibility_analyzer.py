from dataclasses import replace

import pytest

from areascan.analysis.accessibility_analyzer import (
    AccessibilityAnalyzer, compute_accessibility_report
)
from areascan.config import AccessibilityConfig
from areascan.models import CategoryCounts
from tests.helpers import node, way


@pytest.fixture
def analyzer():
    return AccessibilityAnalyzer(AccessibilityConfig())


def counts(**values):
    return CategoryCounts(counts=values, total=sum(values.values()))


def test_full_road_access(analyzer):
    report = analyzer.analyze(counts(major_road_ways=10, parking=10, fuel=7), None, None)
    assert report.road_score == 100
    assert report.counts["major_road_ways"] == 10
    assert report.counts["fuel"] == 7


def test_airport_only_transit(analyzer):
    report = analyzer.analyze(
        None,
        counts(bus_stops=0, railway_stations=0, metro_stations=0, airports=1),
        None,
    )
    assert report.transit_score == 10


def test_airport_is_presence_not_tiered(analyzer):
    one = analyzer.analyze(None, counts(airports=1), None)
    many = analyzer.analyze(None, counts(airports=9), None)
    assert one.transit_score == many.transit_score == 10


def test_half_points_round_up(analyzer):
    # 0.25 * 50 = 12.5
    assert analyzer.analyze(counts(parking=3), None, None).road_score == 13
    # 0.50 * 25 = 12.5
    assert analyzer.analyze(None, None, counts(warehouses=1)).logistics_score == 13


def test_weighted_blends(analyzer):
    assert analyzer.analyze(None, counts(bus_stops=14), None).transit_score == 11
    assert analyzer.analyze(counts(major_road_ways=6), None, None).road_score == 41
    full = counts(bus_stops=60, railway_stations=7, metro_stations=7, airports=2)
    assert analyzer.analyze(None, full, None).transit_score == 100
    full = counts(warehouses=7, courier=7, post_office=7)
    assert analyzer.analyze(None, None, full).logistics_score == 100


def test_missing_counts_score_zero(analyzer):
    report = analyzer.analyze(None, None, None)
    assert (report.road_score, report.transit_score, report.logistics_score) == (0, 0, 0)
    assert set(report.counts) == {
        "major_road_ways", "parking", "fuel",
        "bus_stops", "railway_stations", "metro_stations", "airports",
        "warehouses", "courier", "post_office",
    }
    assert all(v == 0 for v in report.counts.values())


def test_summary_line(analyzer):
    report = analyzer.analyze(
        counts(major_road_ways=4),
        counts(bus_stops=12, railway_stations=1, metro_stations=2),
        counts(warehouses=3),
    )
    assert report.summary == "Roads: 4 | Bus: 12 | Rail: 1 | Metro: 2 | Warehouses: 3"
    assert report.radius_m == 2500


def test_scores_always_in_range(analyzer):
    for n in (0, 1, 2, 5, 9, 30, 61, 1000):
        report = analyzer.analyze(
            counts(major_road_ways=n, parking=n, fuel=n),
            counts(bus_stops=n, railway_stations=n, metro_stations=n, airports=n),
            counts(warehouses=n, courier=n, post_office=n),
        )
        for score in (report.road_score, report.transit_score, report.logistics_score):
            assert isinstance(score, int)
            assert 0 <= score <= 100


def test_alternate_weights():
    config = AccessibilityConfig()
    road = tuple(replace(spec, weight=w) for spec, w in zip(config.road, (0.0, 1.0, 0.0)))
    analyzer = AccessibilityAnalyzer(replace(config, road=road))
    assert analyzer.analyze(counts(major_road_ways=10, parking=1), None, None).road_score == 25


def test_report_from_elements():
    road = [way(highway="trunk") for _ in range(6)] + [node(amenity="fuel")]
    transport = [node(railway="station", station="subway"), node(aeroway="aerodrome")]
    logistics = [way(building="warehouse"), node(building="warehouse")]
    logistics += [node(office="courier"), node(office="courier")]

    report = compute_accessibility_report(road, transport, logistics)

    assert report.counts["major_road_ways"] == 6
    assert report.counts["railway_stations"] == 1
    assert report.counts["metro_stations"] == 1
    assert report.counts["warehouses"] == 2
    # 0.55 * 75 + 0.20 * 25
    assert report.road_score == 46
    # 0.25 * 25 + 0.20 * 25 + 0.10 * 100
    assert report.transit_score == 21
    # 0.50 * 50 + 0.30 * 50
    assert report.logistics_score == 40
    assert report.unavailable == []


def test_unavailable_groups_degrade_to_zero():
    transport = [node(highway="bus_stop") for _ in range(30)]
    report = compute_accessibility_report(None, transport, None)
    assert report.road_score == 0
    assert report.logistics_score == 0
    assert report.transit_score == 34
    assert report.unavailable == ["road", "logistics"]


def test_empty_lists_are_not_unavailable():
    report = compute_accessibility_report([], [], [])
    assert report.unavailable == []
    assert report.summary == "Roads: 0 | Bus: 0 | Rail: 0 | Metro: 0 | Warehouses: 0"
