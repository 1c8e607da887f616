"""
Recovery score: how ready the body is for strain today.

Three factors with fixed weights: HRV (40%), resting heart rate (30%) and
sleep duration (30%).  Missing factors are left out and the remaining
weights renormalized; with no factors at all there is no score.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from loguru import logger

from lifeindex.core.exceptions import ConfigurationError, InvalidInputError

from .labels import ScoreTier, label_for, tier_for, validate_score
from .life_index import round_score
from .metrics import validate_value

if TYPE_CHECKING:
    from lifeindex.core.config import Config

# Scores below this suggest a rest day.
REST_THRESHOLD = 40

RECOVERY_DESCRIPTIONS: dict[ScoreTier, str] = {
    ScoreTier.EXCELLENT: "Fully recovered",
    ScoreTier.GOOD: "Mostly recovered",
    ScoreTier.FAIR: "Partially recovered",
    ScoreTier.POOR: "Rest recommended",
}


@dataclass(frozen=True)
class RecoveryConfig:
    """Weights, reference values and thresholds for the recovery score."""

    hrv_weight: float = 0.40
    resting_hr_weight: float = 0.30
    sleep_weight: float = 0.30
    hrv_baseline: float = 50.0  # ms
    resting_hr_baseline: float = 62.0  # bpm
    sleep_low: float = 420.0  # minutes
    sleep_high: float = 540.0
    oversleep_window: float = 180.0  # minutes past sleep_high to reach the floor
    oversleep_floor: float = 0.5
    rest_threshold: int = REST_THRESHOLD

    def __post_init__(self):
        weights = (self.hrv_weight, self.resting_hr_weight, self.sleep_weight)
        if any(w < 0 for w in weights):
            raise ConfigurationError(f"Recovery weights must be non-negative, got {weights}")
        if abs(sum(weights) - 1.0) > 1e-6:
            raise ConfigurationError(f"Recovery weights must sum to 1.0, got {sum(weights):.6f}")
        if self.hrv_baseline <= 0 or self.resting_hr_baseline <= 0:
            raise ConfigurationError("Recovery baselines must be positive")
        if not 0 < self.sleep_low <= self.sleep_high:
            raise ConfigurationError(f"Invalid sleep band [{self.sleep_low}, {self.sleep_high}]")
        if self.oversleep_window <= 0 or not 0 <= self.oversleep_floor <= 1:
            raise ConfigurationError("Oversleep window must be positive and floor within [0, 1]")
        if not 0 <= self.rest_threshold <= 100:
            raise ConfigurationError(f"Rest threshold must be within 0-100, got {self.rest_threshold}")

    @classmethod
    def from_config(cls, config: Config) -> RecoveryConfig:
        """Build from the ``scoring.recovery`` section of a Config."""
        settings = config.validated().scoring.recovery
        return cls(**settings.model_dump())


@dataclass(frozen=True)
class RecoveryScore:
    """A recovery score with per-factor detail.

    ``factors`` maps "hrv", "resting_heart_rate" and "sleep" to their [0, 1]
    scores, for the factors that were supplied only.  It is read-only.
    """

    value: int
    label: str
    description: str
    should_rest: bool
    factors: Mapping[str, float] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        object.__setattr__(self, "factors", MappingProxyType(dict(self.factors)))

    def __int__(self) -> int:
        return self.value

    def to_dict(self) -> dict:
        return {
            "score": self.value,
            "label": self.label,
            "description": self.description,
            "should_rest": self.should_rest,
            "factors": {name: round(score, 4) for name, score in self.factors.items()},
        }


class RecoveryScorer:
    """Fixed-weight composite of HRV, resting heart rate and sleep."""

    def __init__(self, config: RecoveryConfig | None = None):
        self.config = config or RecoveryConfig()

    def hrv_score(self, hrv: float) -> float:
        """Higher is better, saturating at the baseline."""
        return min(1.0, hrv / self.config.hrv_baseline)

    def resting_hr_score(self, resting_heart_rate: float) -> float:
        """Lower is better, saturating at or below the baseline."""
        if resting_heart_rate <= 0:
            raise InvalidInputError(f"resting_heart_rate must be positive, got {resting_heart_rate}")
        return min(1.0, self.config.resting_hr_baseline / resting_heart_rate)

    def sleep_score(self, sleep_minutes: float) -> float:
        """1.0 inside the sleep band; proportional below it; gentle penalty above."""
        cfg = self.config
        if cfg.sleep_low <= sleep_minutes <= cfg.sleep_high:
            return 1.0
        if sleep_minutes < cfg.sleep_low:
            return max(0.0, sleep_minutes / cfg.sleep_low)
        excess = sleep_minutes - cfg.sleep_high
        return max(cfg.oversleep_floor, 1.0 - excess / cfg.oversleep_window)

    def calculate_score(
        self,
        hrv: float | None = None,
        resting_heart_rate: float | None = None,
        sleep_minutes: float | None = None,
    ) -> RecoveryScore | None:
        """Compute the recovery score from whichever factors are present.

        Args:
            hrv: Heart rate variability in ms.
            resting_heart_rate: Resting heart rate in bpm (must be > 0).
            sleep_minutes: Total sleep in minutes.

        Returns:
            RecoveryScore, or None when all three inputs are absent.

        Raises:
            InvalidInputError: For negative or non-finite inputs.
        """
        cfg = self.config
        components: list[tuple[str, float, float]] = []

        if hrv is not None:
            components.append(("hrv", self.hrv_score(validate_value(hrv, "hrv")), cfg.hrv_weight))
        if resting_heart_rate is not None:
            rhr = validate_value(resting_heart_rate, "resting_heart_rate")
            components.append(("resting_heart_rate", self.resting_hr_score(rhr), cfg.resting_hr_weight))
        if sleep_minutes is not None:
            sleep = validate_value(sleep_minutes, "sleep_minutes")
            components.append(("sleep", self.sleep_score(sleep), cfg.sleep_weight))

        if not components:
            logger.debug("No recovery inputs present; recovery score unavailable")
            return None

        total_weight = sum(w for _, _, w in components)
        if total_weight <= 0:
            return None

        weighted = sum(score * w for _, score, w in components)
        value = round_score(weighted / total_weight * 100)
        logger.debug(f"Recovery score {value} from {[name for name, _, _ in components]}")

        return RecoveryScore(
            value=value,
            label=label_for(value),
            description=RECOVERY_DESCRIPTIONS[tier_for(value)],
            should_rest=self.should_rest(value),
            factors={name: score for name, score, _ in components},
        )

    def label(self, score: int) -> str:
        return label_for(score)

    def should_rest(self, score: int) -> bool:
        """True when the score is below the configured rest threshold."""
        return validate_score(score) < self.config.rest_threshold
