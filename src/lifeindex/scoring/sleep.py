"""
Sleep score (0-100) from duration and, when available, sleep stages.

Three components:
- Duration (50%): full marks from 7 hours, non-linear penalty below
- Quality (30%): deep and REM share of time asleep
- Interruptions (20%): awake share of time in bed

Without stage data only the duration component counts.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from loguru import logger

from .life_index import round_score
from .metrics import validate_value

DURATION_WEIGHT = 0.50
QUALITY_WEIGHT = 0.30
INTERRUPTIONS_WEIGHT = 0.20

IDEAL_SLEEP_MINUTES = (420.0, 480.0)  # 7-8 hours

DEEP_SHARE_TARGET = (0.12, 0.20)
REM_SHARE_TARGET = (0.15, 0.25)

# (max awake share, score), checked in order
_INTERRUPTION_STEPS = ((0.05, 1.0), (0.10, 0.90), (0.15, 0.75), (0.20, 0.60))

SLEEP_LABELS = ((96, "Excellent"), (81, "Great"), (61, "Good"), (41, "Fair"), (0, "Poor"))


@dataclass(frozen=True)
class SleepStages:
    """Minutes spent in each stage during one night."""

    awake_minutes: float = 0.0
    rem_minutes: float = 0.0
    core_minutes: float = 0.0
    deep_minutes: float = 0.0

    def __post_init__(self):
        for name in ("awake_minutes", "rem_minutes", "core_minutes", "deep_minutes"):
            validate_value(getattr(self, name), name)

    @property
    def total_asleep_minutes(self) -> float:
        return self.rem_minutes + self.core_minutes + self.deep_minutes

    @property
    def total_minutes(self) -> float:
        return self.total_asleep_minutes + self.awake_minutes

    @property
    def has_stage_data(self) -> bool:
        return self.total_asleep_minutes > 0


@dataclass(frozen=True)
class SleepScore:
    value: int
    label: str
    components: Mapping[str, float] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        object.__setattr__(self, "components", MappingProxyType(dict(self.components)))

    def to_dict(self) -> dict:
        return {
            "score": self.value,
            "label": self.label,
            "components": {name: round(v, 4) for name, v in self.components.items()},
        }


def duration_score(minutes: float) -> float:
    """1.0 from 7 hours up; below, 1 hour short costs ~12%, 2 hours ~40%."""
    if minutes >= IDEAL_SLEEP_MINUTES[0]:
        return 1.0
    deficit_hours = (IDEAL_SLEEP_MINUTES[0] - minutes) / 60
    return max(0.0, 1.0 - (deficit_hours * 0.35) ** 1.3)


def _share_score(share: float, target: tuple[float, float]) -> float:
    low, high = target
    if low <= share <= high:
        return 1.0
    if share > high:
        return 0.95
    return max(0.4, share / low)


def quality_score(stages: SleepStages) -> float:
    """Deep sleep weighs 60%, REM 40%."""
    asleep = stages.total_asleep_minutes
    if asleep <= 0:
        return 0.5
    deep = _share_score(stages.deep_minutes / asleep, DEEP_SHARE_TARGET)
    rem = _share_score(stages.rem_minutes / asleep, REM_SHARE_TARGET)
    return deep * 0.6 + rem * 0.4


def interruptions_score(stages: SleepStages) -> float:
    total = stages.total_minutes
    if total <= 0:
        return 1.0
    awake_share = stages.awake_minutes / total
    for ceiling, score in _INTERRUPTION_STEPS:
        if awake_share <= ceiling:
            return score
    return max(0.3, 1.0 - awake_share)


def sleep_label(score: int) -> str:
    for minimum, label in SLEEP_LABELS:
        if score >= minimum:
            return label
    return SLEEP_LABELS[-1][1]


class SleepScorer:
    """Scores a night of sleep."""

    def calculate_score(self, sleep_minutes: float | None, stages: SleepStages | None = None) -> SleepScore | None:
        """Return the sleep score, or None without a positive sleep duration."""
        if sleep_minutes is None:
            return None
        minutes = validate_value(sleep_minutes, "sleep_minutes")
        if minutes <= 0:
            return None

        components = {"duration": duration_score(minutes)}
        weights = {"duration": DURATION_WEIGHT}

        if stages is not None and stages.has_stage_data:
            components["quality"] = quality_score(stages)
            components["interruptions"] = interruptions_score(stages)
            weights["quality"] = QUALITY_WEIGHT
            weights["interruptions"] = INTERRUPTIONS_WEIGHT

        total_weight = sum(weights.values())
        composite = sum(components[name] * weights[name] for name in components) / total_weight
        value = round_score(composite * 100)
        logger.debug(f"Sleep score {value} from components {sorted(components)}")
        return SleepScore(value=value, label=sleep_label(value), components=components)
