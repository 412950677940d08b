import pytest

from areascan.analysis.thresholds import (
    blend, clamp, presence_score, round_half_up, score_from_count
)

TABLES = [
    (1, 3, 6, 10),
    (1, 2, 4, 7),
    (5, 15, 30, 60),
    (0, 0, 0, 0),
    (2, 2, 9, 9),
]


@pytest.mark.parametrize("count,expected", [
    (0, 0),
    (1, 25),
    (2, 25),
    (3, 50),
    (5, 50),
    (6, 75),
    (9, 75),
    (10, 100),
    (250, 100),
])
def test_major_road_tiers(count, expected):
    assert score_from_count(count, (1, 3, 6, 10)) == expected


def test_bus_stop_tiers():
    assert score_from_count(4, (5, 15, 30, 60)) == 0
    assert score_from_count(5, (5, 15, 30, 60)) == 25
    assert score_from_count(59, (5, 15, 30, 60)) == 75
    assert score_from_count(60, (5, 15, 30, 60)) == 100


def test_one_below_top_threshold_is_75_not_interpolated():
    for table in TABLES[:3]:
        assert score_from_count(table[3] - 1, table) == 75


def test_zero_count_scores_zero_even_with_zero_thresholds():
    assert score_from_count(0, (0, 0, 0, 0)) == 0
    assert score_from_count(1, (0, 0, 0, 0)) == 100


@pytest.mark.parametrize("table", TABLES)
def test_scores_are_tiers_and_monotonic(table):
    previous = 0
    for count in range(0, 150):
        score = score_from_count(count, table)
        assert score in {0, 25, 50, 75, 100}
        assert score >= previous
        previous = score


def test_presence_score():
    assert presence_score(0) == 0
    assert presence_score(1) == 100
    assert presence_score(40) == 100


def test_round_half_up():
    assert round_half_up(12.5) == 13
    assert round_half_up(13.5) == 14
    assert round_half_up(12.4999) == 12
    assert round_half_up(0.5) == 1
    assert round_half_up(0) == 0


def test_clamp():
    assert clamp(-5) == 0
    assert clamp(150) == 100
    assert clamp(42) == 42
    assert clamp(0.1, 0.6, 2.0) == 0.6


def test_blend_rounds_and_clamps():
    assert blend({"a": 50}, {"a": 0.25, "b": 0.75}) == 13
    assert blend({"a": 100, "b": 100}, {"a": 0.9, "b": 0.9}) == 100
    assert blend({}, {"a": 1.0}) == 0
