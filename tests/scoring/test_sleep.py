"""Tests for lifeindex.scoring.sleep."""

import pytest

from lifeindex.core.exceptions import InvalidInputError
from lifeindex.scoring.sleep import (
    SleepScorer,
    SleepStages,
    duration_score,
    interruptions_score,
    quality_score,
    sleep_label,
)


@pytest.fixture
def sleep_scorer():
    return SleepScorer()


class TestDurationScore:
    def test_full_marks_from_seven_hours(self):
        assert duration_score(420) == 1.0
        assert duration_score(600) == 1.0

    def test_one_hour_short(self):
        assert duration_score(360) == pytest.approx(1 - 0.35**1.3)

    def test_penalty_grows_with_deficit(self):
        assert duration_score(300) < duration_score(360) < duration_score(400)

    def test_never_negative(self):
        assert duration_score(0) == 0.0


class TestStageScores:
    def test_ideal_stages(self):
        stages = SleepStages(awake_minutes=20, rem_minutes=100, core_minutes=290, deep_minutes=90)
        assert quality_score(stages) == 1.0
        assert interruptions_score(stages) == 1.0

    def test_restless_night(self):
        stages = SleepStages(awake_minutes=200, rem_minutes=100, core_minutes=290, deep_minutes=90)
        # awake share 200/680, past the last step
        assert interruptions_score(stages) == pytest.approx(max(0.3, 1 - 200 / 680))

    def test_no_stage_data(self):
        assert not SleepStages().has_stage_data

    def test_negative_stage_raises(self):
        with pytest.raises(InvalidInputError):
            SleepStages(deep_minutes=-10)


class TestSleepScorer:
    def test_missing_or_zero_is_none(self, sleep_scorer):
        assert sleep_scorer.calculate_score(None) is None
        assert sleep_scorer.calculate_score(0) is None

    def test_duration_only(self, sleep_scorer):
        result = sleep_scorer.calculate_score(450)
        assert result.value == 100
        assert result.label == "Excellent"
        assert set(result.components) == {"duration"}

    def test_short_night_without_stages(self, sleep_scorer):
        result = sleep_scorer.calculate_score(360)
        assert result.value == 74
        assert result.label == "Good"

    def test_with_stages(self, sleep_scorer):
        # deep 10% -> 0.833, REM 10% -> 0.667, awake 60/540 -> 0.75
        stages = SleepStages(awake_minutes=60, rem_minutes=48, core_minutes=384, deep_minutes=48)
        result = sleep_scorer.calculate_score(480, stages)
        assert result.value == 88
        assert result.label == "Great"
        assert set(result.components) == {"duration", "quality", "interruptions"}

    def test_negative_raises(self, sleep_scorer):
        with pytest.raises(InvalidInputError):
            sleep_scorer.calculate_score(-30)

    def test_to_dict(self, sleep_scorer):
        assert sleep_scorer.calculate_score(450).to_dict()["score"] == 100


class TestSleepLabel:
    @pytest.mark.parametrize(
        ("score", "label"),
        [(96, "Excellent"), (95, "Great"), (81, "Great"), (80, "Good"), (61, "Good"), (60, "Fair"), (40, "Poor")],
    )
    def test_breakpoints(self, score, label):
        assert sleep_label(score) == label


class TestSleepScoreImmutability:
    def test_components_are_read_only(self, sleep_scorer):
        result = sleep_scorer.calculate_score(480)
        with pytest.raises(TypeError):
            result.components["duration"] = 0.0
        assert hash(result) == hash(sleep_scorer.calculate_score(480))
