"""
Metric types and the value objects shared by every scorer.

``MetricType`` values keep the camelCase names used by the health-data
layer (``heartRateVariability``, ``sleepDuration`` …) so readings can be
passed straight through from exported JSON.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum

from lifeindex.core.exceptions import InvalidInputError, UnknownMetricError


class Directionality(StrEnum):
    """How a metric's value relates to its target range."""

    BAND = "band"  # healthy value lies inside [low, high]
    CUMULATIVE = "cumulative"  # accumulates over the day toward `low`


class MetricType(StrEnum):
    """The closed set of metrics the LifeIndex understands."""

    STEPS = "steps"
    HEART_RATE = "heartRate"
    RESTING_HEART_RATE = "restingHeartRate"
    HEART_RATE_VARIABILITY = "heartRateVariability"
    BLOOD_OXYGEN = "bloodOxygen"
    ACTIVE_CALORIES = "activeCalories"
    SLEEP_DURATION = "sleepDuration"
    MINDFUL_MINUTES = "mindfulMinutes"
    WORKOUT_MINUTES = "workoutMinutes"

    @property
    def unit(self) -> str:
        return _UNITS[self]

    @property
    def directionality(self) -> Directionality:
        return _DIRECTIONALITY[self]

    @property
    def is_cumulative(self) -> bool:
        return _DIRECTIONALITY[self] is Directionality.CUMULATIVE

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @classmethod
    def parse(cls, key: MetricType | str) -> MetricType:
        """Resolve a metric key, accepting camelCase, snake_case or any casing.

        Raises:
            UnknownMetricError: If the key names no known metric.
        """
        if isinstance(key, cls):
            return key
        if not isinstance(key, str):
            raise UnknownMetricError(f"Metric key must be a string, got {type(key).__name__}")
        folded = key.strip().replace("_", "").replace("-", "").lower()
        metric = _FOLDED_NAMES.get(folded)
        if metric is None:
            raise UnknownMetricError(f"Unknown metric type {key!r}. Known: {[m.value for m in cls]}")
        return metric


_UNITS: dict[MetricType, str] = {
    MetricType.STEPS: "count",
    MetricType.HEART_RATE: "bpm",
    MetricType.RESTING_HEART_RATE: "bpm",
    MetricType.HEART_RATE_VARIABILITY: "ms",
    MetricType.BLOOD_OXYGEN: "fraction",
    MetricType.ACTIVE_CALORIES: "kcal",
    MetricType.SLEEP_DURATION: "minutes",
    MetricType.MINDFUL_MINUTES: "minutes",
    MetricType.WORKOUT_MINUTES: "minutes",
}

_DIRECTIONALITY: dict[MetricType, Directionality] = {
    MetricType.STEPS: Directionality.CUMULATIVE,
    MetricType.HEART_RATE: Directionality.BAND,
    MetricType.RESTING_HEART_RATE: Directionality.BAND,
    MetricType.HEART_RATE_VARIABILITY: Directionality.BAND,
    MetricType.BLOOD_OXYGEN: Directionality.BAND,
    MetricType.ACTIVE_CALORIES: Directionality.CUMULATIVE,
    MetricType.SLEEP_DURATION: Directionality.BAND,
    MetricType.MINDFUL_MINUTES: Directionality.CUMULATIVE,
    MetricType.WORKOUT_MINUTES: Directionality.CUMULATIVE,
}

_DISPLAY_NAMES: dict[MetricType, str] = {
    MetricType.STEPS: "Steps",
    MetricType.HEART_RATE: "Heart Rate",
    MetricType.RESTING_HEART_RATE: "Resting HR",
    MetricType.HEART_RATE_VARIABILITY: "HRV",
    MetricType.BLOOD_OXYGEN: "Blood Oxygen",
    MetricType.ACTIVE_CALORIES: "Active Calories",
    MetricType.SLEEP_DURATION: "Sleep",
    MetricType.MINDFUL_MINUTES: "Mindfulness",
    MetricType.WORKOUT_MINUTES: "Workouts",
}

_FOLDED_NAMES: dict[str, MetricType] = {}
for _metric in MetricType:
    _FOLDED_NAMES[_metric.value.lower()] = _metric
    _FOLDED_NAMES[_metric.name.replace("_", "").lower()] = _metric
_FOLDED_NAMES["hrv"] = MetricType.HEART_RATE_VARIABILITY


@dataclass(frozen=True)
class TargetRange:
    """Closed interval ``[low, high]`` in the metric's unit."""

    low: float
    high: float

    def __post_init__(self):
        if not (math.isfinite(self.low) and math.isfinite(self.high)):
            raise InvalidInputError(f"Target bounds must be finite, got [{self.low}, {self.high}]")
        if self.low < 0:
            raise InvalidInputError(f"Target low must be non-negative, got {self.low}")
        if self.low > self.high:
            raise InvalidInputError(f"Target low {self.low} exceeds high {self.high}")

    @property
    def width(self) -> float:
        return self.high - self.low

    def __contains__(self, value: float) -> bool:
        return self.low <= value <= self.high

    def to_dict(self) -> dict:
        return {"low": self.low, "high": self.high}


def validate_value(value: float, name: str = "value") -> float:
    """Return ``value`` as a float, rejecting negatives, NaN and infinities.

    Raises:
        InvalidInputError: For booleans, non-numbers, negative or non-finite values.
    """
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise InvalidInputError(f"{name} must be a number, got {type(value).__name__}")
    value = float(value)
    if not math.isfinite(value):
        raise InvalidInputError(f"{name} must be finite, got {value}")
    if value < 0:
        raise InvalidInputError(f"{name} must be non-negative, got {value}")
    return value


def parse_readings(readings: Mapping[MetricType | str, float | None]) -> dict[MetricType, float]:
    """Validate a day's readings and key them by MetricType.

    Metrics mapped to ``None`` are absent, exactly like a missing key.

    Raises:
        UnknownMetricError: For keys outside the metric set.
        InvalidInputError: For negative or non-finite values, or duplicate keys
            that resolve to the same metric.
    """
    if not isinstance(readings, Mapping):
        raise InvalidInputError(f"Readings must be a mapping, got {type(readings).__name__}")

    parsed: dict[MetricType, float] = {}
    for key, value in readings.items():
        metric = MetricType.parse(key)
        if value is None:
            continue
        if metric in parsed:
            raise InvalidInputError(f"Duplicate reading for {metric.value!r} (key {key!r})")
        parsed[metric] = validate_value(value, name=metric.value)
    return parsed
