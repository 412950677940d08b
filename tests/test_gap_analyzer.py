from dataclasses import replace

import pytest

from areascan.analysis.gap_analyzer import GapAnalyzer, compute_gap_recommendations
from areascan.config import DEFAULT_NEEDS, GapConfig, NeedDefinition
from areascan.models import CategoryCounts
from tests.helpers import node

PHARMACY = (NeedDefinition("pharmacy", "Pharmacy", 8),)


@pytest.fixture
def analyzer():
    return GapAnalyzer(GapConfig())


@pytest.mark.parametrize("total,expected", [
    (0, 0.6),
    (100, 0.6),
    (300, 0.6),
    (500, 1.0),
    (750, 1.5),
    (1000, 2.0),
    (25000, 2.0),
])
def test_density_factor(analyzer, total, expected):
    assert analyzer.density_factor(total) == pytest.approx(expected)


def test_density_factor_always_bounded(analyzer):
    for total in range(0, 5000, 13):
        assert 0.6 <= analyzer.density_factor(total) <= 2.0


@pytest.mark.parametrize("baseline,factor,expected", [
    (8, 1.0, 8),
    (8, 0.6, 5),
    (6, 0.6, 4),
    (15, 2.0, 30),
    (1, 0.6, 1),
    (0, 0.6, 1),
    (1, 0.01, 1),
])
def test_dynamic_ideal(baseline, factor, expected):
    assert GapAnalyzer.dynamic_ideal(baseline, factor) == expected


def test_dynamic_ideal_never_below_one(analyzer):
    for baseline in range(0, 25):
        for total in range(0, 3000, 37):
            assert analyzer.dynamic_ideal(baseline, analyzer.density_factor(total)) >= 1


def test_moderate_gap_scenario(analyzer):
    counts = CategoryCounts(counts={"pharmacy": 4}, total=500)
    [rec] = analyzer.analyze(counts, 500, PHARMACY)
    assert rec.key == "pharmacy"
    assert rec.label == "Pharmacy"
    assert rec.score == 50
    assert rec.existing == 4
    assert rec.reason.startswith("Moderate gap")
    assert rec.reason.endswith("(Existing: 4)")


def test_well_served_scenario(analyzer):
    counts = CategoryCounts(counts={"pharmacy": 10}, total=500)
    [rec] = analyzer.evaluate(counts, 500, PHARMACY)
    assert rec.score == 0
    assert rec.reason.startswith("Already well served")
    assert "(Existing: 10)" in rec.reason
    assert analyzer.analyze(counts, 500, PHARMACY) == []


def test_empty_area_scenario(analyzer):
    counts = CategoryCounts()
    recs = analyzer.analyze(counts, 0)
    assert [r.key for r in recs] == ["pharmacy", "hospital", "cafe", "restaurant", "fast_food"]
    assert all(r.score == 100 for r in recs)
    assert all(r.existing == 0 for r in recs)
    assert all("strong opportunity" in r.reason for r in recs)


@pytest.mark.parametrize("ideal,existing,score,band", [
    (8, 2, 75, "High demand"),
    (10, 3, 70, "High demand"),
    (10, 4, 60, "Moderate gap"),
    (5, 3, 40, "Moderate gap"),
    (5, 4, 20, "Small gap"),
    (8, 7, 13, "Small gap"),
])
def test_reason_bands(analyzer, ideal, existing, score, band):
    needs = (NeedDefinition("cafe", "Cafe", ideal),)
    counts = CategoryCounts(counts={"cafe": existing}, total=500)
    [rec] = analyzer.evaluate(counts, 500, needs)
    assert rec.score == score
    assert rec.reason.startswith(band)
    assert f"(Existing: {existing})" in rec.reason


def test_sorted_descending_and_capped(analyzer):
    counts = CategoryCounts(
        counts={"pharmacy": 6, "cafe": 1, "restaurant": 14, "gym": 2, "bank": 3, "school": 0},
        total=500,
    )
    recs = analyzer.analyze(counts, 500)
    assert len(recs) == 5
    scores = [r.score for r in recs]
    assert scores == sorted(scores, reverse=True)
    assert recs[0].score == 100


def test_top_k_override(analyzer):
    recs = analyzer.analyze(CategoryCounts(), 0, top_k=2)
    assert len(recs) == 2
    assert analyzer.analyze(CategoryCounts(), 0, top_k=0) == []


def test_ties_keep_need_table_order(analyzer):
    needs = (NeedDefinition("gym", "Gym", 4), NeedDefinition("bank", "Bank", 4))
    recs = analyzer.analyze(CategoryCounts(), 500, needs)
    assert [r.key for r in recs] == ["gym", "bank"]
    recs = analyzer.analyze(CategoryCounts(), 500, tuple(reversed(needs)))
    assert [r.key for r in recs] == ["bank", "gym"]


def test_empty_needs(analyzer):
    assert analyzer.analyze(CategoryCounts(counts={"cafe": 3}, total=3), 3, ()) == []
    empty = GapAnalyzer(replace(GapConfig(), needs=()))
    assert empty.analyze(CategoryCounts(), 0) == []


def test_idempotent(analyzer):
    counts = CategoryCounts(counts={"cafe": 5, "bank": 1}, total=420)
    assert analyzer.analyze(counts, 420) == analyzer.analyze(counts, 420)


def test_scores_always_in_range():
    analyzer = GapAnalyzer(GapConfig())
    for total in (0, 1, 250, 499, 500, 501, 999, 1000, 7000):
        for existing in (0, 1, 3, 7, 12, 40):
            counts = CategoryCounts(counts={n.key: existing for n in DEFAULT_NEEDS}, total=total)
            recs = analyzer.analyze(counts, total, top_k=20)
            for rec in analyzer.evaluate(counts, total):
                assert isinstance(rec.score, int)
                assert 0 <= rec.score <= 100
            assert [r.score for r in recs] == sorted((r.score for r in recs), reverse=True)
            assert all(r.score > 0 for r in recs)


def test_compute_from_elements():
    elements = [node(amenity="pharmacy") for _ in range(4)]
    elements += [node(shop="clothes") for _ in range(496)]
    recs = compute_gap_recommendations(elements, PHARMACY)
    assert len(recs) == 1
    assert recs[0].score == 50


def test_compute_uses_category_priority():
    # amenity outranks shop, so these are cafes not bakeries
    elements = [node(amenity="cafe", shop="bakery") for _ in range(12)]
    needs = (NeedDefinition("cafe", "Cafe", 12),)
    # total 12 -> density 0.6 -> ideal 7, fully served
    assert compute_gap_recommendations(elements, needs) == []


def test_compute_default_table_on_empty():
    recs = compute_gap_recommendations([])
    assert len(recs) == 5
    assert all(r.score == 100 for r in recs)
