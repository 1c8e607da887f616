"""Tests for lifeindex.scoring.life_index."""

import dataclasses
from datetime import datetime

import pytest

from lifeindex.core.exceptions import InvalidInputError, UnknownMetricError
from lifeindex.scoring.catalog import DEFAULT_CATALOG, MetricCatalog
from lifeindex.scoring.life_index import CompositeScore, LifeIndexScorer, ScoreMode, round_score
from lifeindex.scoring.metrics import MetricType


@pytest.fixture
def ten_k_catalog():
    """Catalog with a 10k step goal."""
    return DEFAULT_CATALOG.with_overrides(targets={"steps": (10_000, 15_000)})


class TestRoundScore:
    def test_half_up(self):
        assert round_score(12.5) == 13
        assert round_score(78.5) == 79

    def test_clamped(self):
        assert round_score(-3) == 0
        assert round_score(100.4) == 100
        assert round_score(140) == 100


@pytest.mark.smoke
class TestEndToEnd:
    def test_goal_met_final(self, ten_k_catalog):
        result = LifeIndexScorer(ten_k_catalog).calculate_final_score({MetricType.STEPS: 10_000})
        assert result.value == 100
        assert result.label == "Excellent"
        assert result.mode is ScoreMode.FINAL

    def test_halfway_at_midday_not_penalized(self, ten_k_catalog, noon):
        scorer = LifeIndexScorer(ten_k_catalog)
        live = scorer.calculate_score({MetricType.STEPS: 5000}, at=noon)
        assert live.value == 100
        assert live.mode is ScoreMode.LIVE
        assert live.day_progress == pytest.approx(0.5)

        final = scorer.calculate_final_score({MetricType.STEPS: 5000})
        assert final.value == 50
        assert final.label == "Fair"

    def test_short_sleep(self, scorer):
        # 5 hours against [420, 540]: one full band-width short
        result = scorer.calculate_final_score({MetricType.SLEEP_DURATION: 300})
        assert result.value == 0
        assert result.label == "Poor"

    def test_empty_readings_is_insufficient_data(self, scorer, noon):
        assert scorer.calculate_score({}, at=noon) is None
        assert scorer.calculate_final_score({}) is None

    def test_all_none_is_insufficient_data(self, scorer):
        assert scorer.calculate_final_score({"steps": None, "heartRate": None}) is None

    def test_healthy_day(self, scorer, full_day_readings, noon):
        assert scorer.calculate_final_score(full_day_readings).value == 100
        assert scorer.calculate_score(full_day_readings, at=noon).value == 100


class TestRenormalization:
    def test_two_metrics(self, scorer):
        # steps 4000/8000 -> 0.5 (w 0.15), sleep in band -> 1.0 (w 0.20)
        result = scorer.calculate_final_score({"steps": 4000, "sleepDuration": 470})
        expected = round(100 * (0.15 * 0.5 + 0.20 * 1.0) / (0.15 + 0.20))
        assert result.value == expected == 79

    def test_independent_of_absent_weights(self, scorer):
        reshuffled = DEFAULT_CATALOG.with_overrides(
            weights={
                "heartRate": 0.30,
                "heartRateVariability": 0.0,
                "restingHeartRate": 0.05,
                "bloodOxygen": 0.05,
                "activeCalories": 0.05,
                "mindfulMinutes": 0.05,
                "workoutMinutes": 0.15,
            }
        )
        readings = {"steps": 4000, "sleepDuration": 470}
        assert LifeIndexScorer(reshuffled).calculate_final_score(readings).value == (
            scorer.calculate_final_score(readings).value
        )

    def test_single_metric_uses_full_weight(self, scorer):
        # resting HR 80 vs [50, 70]: 1 - 10/20
        assert scorer.calculate_final_score({"restingHeartRate": 80}).value == 50

    def test_zero_weight_metrics_alone_are_insufficient(self):
        catalog = DEFAULT_CATALOG.with_overrides(weights={"mindfulMinutes": 0.0, "workoutMinutes": 0.10})
        assert LifeIndexScorer(catalog).calculate_final_score({"mindfulMinutes": 30}) is None


class TestTimeAwareness:
    def test_morning_steps(self, scorer):
        six_am = datetime(2025, 6, 15, 6, 0)
        # factor 0.25 -> goal 2000
        assert scorer.calculate_score({"steps": 1000}, at=six_am).value == 50
        # full-day goal 8000 -> 0.125
        assert scorer.calculate_final_score({"steps": 1000}).value == 13

    def test_midnight_small_activity(self, scorer):
        midnight = datetime(2025, 6, 15, 0, 0)
        assert scorer.calculate_score({"steps": 10}, at=midnight).value == 100

    def test_band_metrics_not_scaled(self, scorer, noon):
        readings = {"restingHeartRate": 80}
        assert scorer.calculate_score(readings, at=noon).value == scorer.calculate_final_score(readings).value

    def test_time_aware_false_matches_final(self, scorer, noon):
        readings = {"steps": 3000, "heartRate": 110}
        live_off = scorer.calculate_score(readings, at=noon, time_aware=False)
        final = scorer.calculate_final_score(readings)
        assert live_off == final
        assert live_off.day_progress == 1.0


class TestBreakdown:
    @pytest.fixture
    def mixed(self):
        # steps 0.5, sleep 1.0, heart rate 130 vs [60, 100] -> 0.25
        return {"steps": 4000, "sleepDuration": 470, "heartRate": 130}

    def test_sorted_best_first(self, scorer, mixed):
        entries = scorer.breakdown(mixed)
        assert [e.metric for e in entries] == [
            MetricType.SLEEP_DURATION,
            MetricType.STEPS,
            MetricType.HEART_RATE,
        ]
        assert [e.normalized_score for e in entries] == pytest.approx([1.0, 0.5, 0.25])

    def test_contributions_sum_to_100(self, scorer, mixed):
        entries = scorer.breakdown(mixed)
        assert sum(e.contribution_pct for e in entries) == pytest.approx(100.0)
        by_metric = {e.metric: e.contribution_pct for e in entries}
        assert by_metric[MetricType.STEPS] == pytest.approx(25.0)
        assert by_metric[MetricType.SLEEP_DURATION] == pytest.approx(66.667, rel=1e-3)

    def test_top_and_weakest(self, scorer, mixed):
        result = scorer.calculate_final_score(mixed)
        assert result.top_contributor.metric is MetricType.SLEEP_DURATION
        assert result.weakest_area.metric is MetricType.HEART_RATE

    def test_single_entry_has_no_weakest(self, scorer):
        result = scorer.calculate_final_score({"steps": 9000})
        assert result.top_contributor.metric is MetricType.STEPS
        assert result.weakest_area is None

    def test_all_zero_falls_back_to_weight_shares(self, scorer):
        entries = scorer.breakdown({"steps": 0, "sleepDuration": 0})
        assert sum(e.contribution_pct for e in entries) == pytest.approx(100.0)
        by_metric = {e.metric: e.contribution_pct for e in entries}
        assert by_metric[MetricType.SLEEP_DURATION] == pytest.approx(100 * 0.20 / 0.35)
        assert scorer.calculate_final_score({"steps": 0, "sleepDuration": 0}).value == 0

    def test_raw_values_kept(self, scorer, mixed):
        entries = {e.metric: e for e in scorer.breakdown(mixed)}
        assert entries[MetricType.HEART_RATE].raw_value == 130
        assert entries[MetricType.HEART_RATE].weight == 0.10

    def test_empty(self, scorer):
        assert scorer.breakdown({}) == []

    def test_to_dict(self, scorer, mixed):
        d = scorer.calculate_final_score(mixed).to_dict()
        assert d["score"] == scorer.calculate_final_score(mixed).value
        assert d["mode"] == "final"
        assert d["top_contributor"] == "sleepDuration"
        assert d["weakest_area"] == "heartRate"
        assert len(d["breakdown"]) == 3


class TestErrors:
    def test_unknown_metric(self, scorer):
        with pytest.raises(UnknownMetricError):
            scorer.calculate_final_score({"stepz": 100})

    def test_negative_value(self, scorer, noon):
        with pytest.raises(InvalidInputError):
            scorer.calculate_score({"steps": -100}, at=noon)

    def test_label(self, scorer):
        assert scorer.label(85) == "Excellent"
        assert scorer.label(10) == "Poor"


class TestInjectedCatalog:
    def test_custom_catalog_is_used(self):
        catalog = MetricCatalog(
            targets={**DEFAULT_CATALOG.targets, MetricType.SLEEP_DURATION: (360, 600)},
            weights=DEFAULT_CATALOG.weights,
        )
        scorer = LifeIndexScorer(catalog)
        assert scorer.calculate_final_score({"sleepDuration": 380}).value == 100
        assert LifeIndexScorer().calculate_final_score({"sleepDuration": 380}).value < 100


class TestResultImmutability:
    READINGS = {"steps": 4000, "sleepDuration": 470}

    def test_hashable(self, scorer):
        first = scorer.calculate_final_score(self.READINGS)
        second = scorer.calculate_final_score(self.READINGS)
        assert hash(first) == hash(second)
        assert len({first, second}) == 1

    def test_breakdown_is_read_only(self, scorer):
        result = scorer.calculate_final_score(self.READINGS)
        assert isinstance(result.breakdown, tuple)
        with pytest.raises(AttributeError):
            result.breakdown.clear()
        with pytest.raises(TypeError):
            result.breakdown[0] = result.breakdown[1]
        with pytest.raises(dataclasses.FrozenInstanceError):
            result.breakdown = ()
        assert len(result.breakdown) == 2
        assert result.value == 79

    def test_list_breakdown_is_frozen_on_construction(self):
        result = CompositeScore(value=50, label="Fair", mode=ScoreMode.FINAL, day_progress=1.0, breakdown=[])
        assert result.breakdown == ()
