"""
Metric catalog: target range and weight for every metric type.

The catalog is an immutable configuration object.  Scorers receive one at
construction time, so tests and consumers can swap in alternate weight sets
without touching module state.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from loguru import logger

from lifeindex.core.exceptions import ConfigurationError, InvalidInputError

from .metrics import MetricType, TargetRange

if TYPE_CHECKING:
    from lifeindex.core.config import Config

WEIGHT_SUM_TOLERANCE = 1e-6

# Weights total 1.0; sleep and the activity/HRV trio carry the most.
DEFAULT_WEIGHTS: Mapping[MetricType, float] = MappingProxyType(
    {
        MetricType.STEPS: 0.15,
        MetricType.HEART_RATE: 0.10,
        MetricType.HEART_RATE_VARIABILITY: 0.15,
        MetricType.RESTING_HEART_RATE: 0.10,
        MetricType.BLOOD_OXYGEN: 0.10,
        MetricType.ACTIVE_CALORIES: 0.10,
        MetricType.SLEEP_DURATION: 0.20,
        MetricType.MINDFUL_MINUTES: 0.05,
        MetricType.WORKOUT_MINUTES: 0.05,
    }
)

DEFAULT_TARGETS: Mapping[MetricType, TargetRange] = MappingProxyType(
    {
        MetricType.STEPS: TargetRange(8000, 12000),
        MetricType.HEART_RATE: TargetRange(60, 100),
        MetricType.HEART_RATE_VARIABILITY: TargetRange(30, 80),
        MetricType.RESTING_HEART_RATE: TargetRange(50, 70),
        MetricType.BLOOD_OXYGEN: TargetRange(0.95, 1.0),
        MetricType.ACTIVE_CALORIES: TargetRange(300, 600),
        MetricType.SLEEP_DURATION: TargetRange(420, 540),  # 7-9 hours
        MetricType.MINDFUL_MINUTES: TargetRange(5, 30),
        MetricType.WORKOUT_MINUTES: TargetRange(20, 60),
    }
)


def _coerce_target(metric: MetricType, raw: Any) -> TargetRange:
    if isinstance(raw, TargetRange):
        return raw
    try:
        if isinstance(raw, Mapping):
            return TargetRange(float(raw["low"]), float(raw["high"]))
        low, high = raw
        return TargetRange(float(low), float(high))
    except (KeyError, TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid target for {metric.value!r}: {raw!r} ({e})") from e


@dataclass(frozen=True)
class MetricCatalog:
    """Read-only lookup of target range and weight per metric type.

    Attributes:
        targets: TargetRange for every MetricType.
        weights: Non-negative weight for every MetricType, summing to 1.0.
    """

    targets: Mapping[MetricType, TargetRange] = field(default_factory=lambda: DEFAULT_TARGETS)
    weights: Mapping[MetricType, float] = field(default_factory=lambda: DEFAULT_WEIGHTS)

    def __post_init__(self):
        try:
            targets = {m: _coerce_target(m, v) for m, v in ((MetricType.parse(k), v) for k, v in self.targets.items())}
            weights = {MetricType.parse(k): v for k, v in self.weights.items()}
        except InvalidInputError as e:
            raise ConfigurationError(str(e)) from e

        missing_targets = [m.value for m in MetricType if m not in targets]
        missing_weights = [m.value for m in MetricType if m not in weights]
        if missing_targets:
            raise ConfigurationError(f"Catalog is missing targets for: {missing_targets}")
        if missing_weights:
            raise ConfigurationError(f"Catalog is missing weights for: {missing_weights}")

        for metric, weight in weights.items():
            if isinstance(weight, bool) or not isinstance(weight, int | float) or not math.isfinite(weight):
                raise ConfigurationError(f"Weight for {metric.value!r} must be a finite number, got {weight!r}")
            if weight < 0:
                raise ConfigurationError(f"Weight for {metric.value!r} is negative: {weight}")

        total = sum(weights.values())
        if abs(total - 1.0) > WEIGHT_SUM_TOLERANCE:
            raise ConfigurationError(f"Catalog weights must sum to 1.0, got {total:.6f}")

        for metric, target in targets.items():
            if metric.is_cumulative and target.low <= 0:
                raise ConfigurationError(f"Daily goal for {metric.value!r} must be positive, got {target.low}")
            if not metric.is_cumulative and target.width <= 0:
                raise ConfigurationError(
                    f"Band for {metric.value!r} must have low < high, got [{target.low}, {target.high}]"
                )

        # Freeze normalized copies so callers can't mutate the catalog behind our back
        object.__setattr__(self, "targets", MappingProxyType({m: targets[m] for m in MetricType}))
        object.__setattr__(self, "weights", MappingProxyType({m: float(weights[m]) for m in MetricType}))

    def target_range(self, metric: MetricType | str) -> TargetRange:
        """Return the full-day target range for a metric.

        Raises:
            UnknownMetricError: If ``metric`` is not a known metric type.
        """
        return self.targets[MetricType.parse(metric)]

    def weight(self, metric: MetricType | str) -> float:
        """Return the catalog weight for a metric.

        Raises:
            UnknownMetricError: If ``metric`` is not a known metric type.
        """
        return self.weights[MetricType.parse(metric)]

    def with_overrides(
        self,
        targets: Mapping[MetricType | str, Any] | None = None,
        weights: Mapping[MetricType | str, float] | None = None,
    ) -> MetricCatalog:
        """Return a new catalog with some targets and/or weights replaced.

        The result is validated as a whole, so weight overrides must keep the
        total at 1.0.
        """
        merged_targets: dict[MetricType, Any] = dict(self.targets)
        merged_weights: dict[MetricType, float] = dict(self.weights)
        try:
            for key, value in (targets or {}).items():
                merged_targets[MetricType.parse(key)] = value
            for key, value in (weights or {}).items():
                merged_weights[MetricType.parse(key)] = value
        except InvalidInputError as e:
            raise ConfigurationError(str(e)) from e
        return MetricCatalog(targets=merged_targets, weights=merged_weights)

    @classmethod
    def from_config(cls, config: Config) -> MetricCatalog:
        """Build a catalog from the ``scoring.catalog`` section of a Config.

        Only the metrics named in the config are overridden; the rest keep
        their built-in values.
        """
        catalog_cfg = config.validated().scoring.catalog
        targets = {metric: (t.low, t.high) for metric, t in catalog_cfg.targets.items()}
        catalog = DEFAULT_CATALOG.with_overrides(targets=targets, weights=catalog_cfg.weights)
        if targets or catalog_cfg.weights:
            logger.debug(
                f"Catalog overrides applied: targets={sorted(targets)}, weights={sorted(catalog_cfg.weights)}"
            )
        return catalog

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            metric.value: {
                "target": self.targets[metric].to_dict(),
                "weight": self.weights[metric],
                "unit": metric.unit,
                "directionality": metric.directionality.value,
            }
            for metric in MetricType
        }


DEFAULT_CATALOG = MetricCatalog()
