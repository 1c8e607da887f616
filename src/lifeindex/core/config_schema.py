"""Pydantic models for config validation.

``Config.validated()`` returns a typed ``LifeIndexConfig``.  Metric keys in
the ``scoring.catalog`` section are resolved through ``MetricType.parse``, so
``heartRate``, ``heart_rate`` and the lower-cased form produced by
environment variables all name the same metric.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from lifeindex.scoring.metrics import MetricType


class TargetRangeConfig(BaseModel):
    """A target range override for one metric."""

    low: float = Field(ge=0)
    high: float = Field(ge=0)

    @model_validator(mode="after")
    def _ordered(self) -> TargetRangeConfig:
        if self.low > self.high:
            raise ValueError(f"low ({self.low}) must not exceed high ({self.high})")
        return self


class CatalogConfig(BaseModel):
    """Per-metric overrides of the built-in catalog.

    Whether the resulting weights still sum to 1.0 is checked when the
    catalog is built, since overrides merge onto the defaults.
    """

    targets: dict[MetricType, TargetRangeConfig] = {}
    weights: dict[MetricType, float] = {}

    @field_validator("targets", "weights", mode="before")
    @classmethod
    def _parse_metric_keys(cls, v: Any) -> Any:
        if isinstance(v, dict):
            return {MetricType.parse(k): value for k, value in v.items()}
        return v

    @field_validator("weights")
    @classmethod
    def _non_negative(cls, v: dict[MetricType, float]) -> dict[MetricType, float]:
        negative = sorted(m.value for m, w in v.items() if w < 0)
        if negative:
            raise ValueError(f"weights must be non-negative: {negative}")
        return v


class RecoverySettings(BaseModel):
    """Tuning knobs for the recovery score."""

    hrv_weight: float = Field(default=0.40, ge=0)
    resting_hr_weight: float = Field(default=0.30, ge=0)
    sleep_weight: float = Field(default=0.30, ge=0)
    hrv_baseline: float = Field(default=50.0, gt=0)
    resting_hr_baseline: float = Field(default=62.0, gt=0)
    sleep_low: float = Field(default=420.0, gt=0)
    sleep_high: float = Field(default=540.0, gt=0)
    oversleep_window: float = Field(default=180.0, gt=0)
    oversleep_floor: float = Field(default=0.5, ge=0, le=1)
    rest_threshold: int = Field(default=40, ge=0, le=100)

    @model_validator(mode="after")
    def _check(self) -> RecoverySettings:
        total = self.hrv_weight + self.resting_hr_weight + self.sleep_weight
        if abs(total - 1.0) > 1e-6:
            raise ValueError(f"recovery weights must sum to 1.0, got {total:.6f}")
        if self.sleep_low > self.sleep_high:
            raise ValueError("sleep_low must not exceed sleep_high")
        return self


class ScoringConfig(BaseModel):
    """Everything the scorers can be tuned with."""

    catalog: CatalogConfig = CatalogConfig()
    recovery: RecoverySettings = RecoverySettings()


class LoggingConfig(BaseModel):
    """Log sink settings."""

    level: str = "WARNING"
    file: str | None = None

    @field_validator("level")
    @classmethod
    def _upper(cls, v: str) -> str:
        return v.upper()


class LifeIndexConfig(BaseModel):
    """Root configuration model.

    Uses ``extra="allow"`` so consumers can bolt on custom sections
    without touching this schema.
    """

    model_config = ConfigDict(extra="allow")

    scoring: ScoringConfig = ScoringConfig()
    logging: LoggingConfig = LoggingConfig()
