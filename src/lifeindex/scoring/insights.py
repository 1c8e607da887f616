"""
Priority-ranked dashboard insights.

Implements:
- Rule-based insight candidates from a day's sleep, steps and resting heart rate
- A compound alert for short sleep with an elevated resting heart rate
- A rest nudge when the recovery score is below the rest threshold
- The weekly step trend (declining, or the plain 7-day average)
- Ranking by priority, highest first, keeping the top four

Step insights are phrased against a fixed 10k goal, independent of the
catalog's step target.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum

from loguru import logger

from .life_index import DailyReadings
from .metrics import MetricType, parse_readings, validate_value
from .recovery import REST_THRESHOLD, RecoveryScore

MAX_INSIGHTS = 4
STEP_GOAL = 10_000

SHORT_SLEEP_MINUTES = 360
MIN_SLEEP_MINUTES = 420
MAX_SLEEP_MINUTES = 540

ELEVATED_RESTING_HR = 80
COMPOUND_RESTING_HR = 70
ATHLETIC_RESTING_HR = 55
HEALTHY_RESTING_HR = 65

# A recent 3-day step average below this share of the earlier days is a decline.
STEP_DECLINE_RATIO = 0.8


class InsightTone(StrEnum):
    """How an insight should be presented."""

    ALERT = "alert"
    CAUTION = "caution"
    POSITIVE = "positive"
    INFO = "info"

    @property
    def color(self) -> str:
        return _TONE_COLORS[self]


_TONE_COLORS = {
    InsightTone.ALERT: "red",
    InsightTone.CAUTION: "orange",
    InsightTone.POSITIVE: "green",
    InsightTone.INFO: "blue",
}


@dataclass(frozen=True)
class Insight:
    text: str
    priority: int
    tone: InsightTone

    def to_dict(self) -> dict:
        return {"text": self.text, "priority": self.priority, "tone": self.tone.value}


def _hours_minutes(minutes: float) -> str:
    return f"{int(minutes // 60)}h {int(minutes) % 60}m"


def sleep_insight(sleep_minutes: float) -> Insight:
    duration = _hours_minutes(sleep_minutes)
    if sleep_minutes < SHORT_SLEEP_MINUTES:
        return Insight(
            f"Only {duration} of sleep. This significantly impacts recovery and focus.", 90, InsightTone.ALERT
        )
    if sleep_minutes < MIN_SLEEP_MINUTES:
        return Insight(
            f"You slept {duration}, under the 7hr minimum. Aim for 7+ tonight.", 60, InsightTone.CAUTION
        )
    if sleep_minutes <= MAX_SLEEP_MINUTES:
        return Insight(f"Great sleep: {duration} is in the ideal 7-9hr range.", 20, InsightTone.POSITIVE)
    return Insight(f"You slept {duration}, a bit over the 9hr mark.", 30, InsightTone.INFO)


def steps_insight(steps: float) -> Insight | None:
    """None for a day with no steps yet."""
    pct = int(steps / STEP_GOAL * 100)
    if steps <= 0:
        return None
    if steps < STEP_GOAL / 2:
        return Insight(
            f"Only {int(steps)} steps ({pct}%). Try to get moving, every step counts.", 75, InsightTone.CAUTION
        )
    if steps < STEP_GOAL:
        remaining = int(STEP_GOAL - steps)
        return Insight(f"{pct}% to your 10k goal. {remaining} steps to go!", 50, InsightTone.INFO)
    if steps < STEP_GOAL * 1.5:
        return Insight(f"{int(steps)} steps. 10k goal smashed!", 20, InsightTone.POSITIVE)
    return Insight(f"{int(steps)} steps. Exceptional day!", 15, InsightTone.POSITIVE)


def resting_hr_insight(resting_heart_rate: float) -> Insight | None:
    """None in the unremarkable 66-80 bpm range."""
    bpm = int(resting_heart_rate)
    if resting_heart_rate > ELEVATED_RESTING_HR:
        return Insight(
            f"Resting HR {bpm} bpm is elevated. Stay hydrated and manage stress.", 85, InsightTone.CAUTION
        )
    if resting_heart_rate <= ATHLETIC_RESTING_HR:
        return Insight(f"Resting HR {bpm} bpm: strong cardiovascular fitness.", 25, InsightTone.INFO)
    if resting_heart_rate <= HEALTHY_RESTING_HR:
        return Insight(f"Resting HR {bpm} bpm: healthy range.", 30, InsightTone.INFO)
    return None


def step_trend_insight(weekly_steps: Sequence[float]) -> Insight | None:
    """Compare the last 3 days against the earlier ones; needs at least 3 days."""
    steps = [validate_value(s, "weekly_steps") for s in weekly_steps]
    if len(steps) < 3:
        return None

    if len(steps) >= 5:
        recent, older = steps[-3:], steps[:-3]
        recent_avg = sum(recent) / len(recent)
        older_avg = sum(older) / len(older)
        if recent_avg < older_avg * STEP_DECLINE_RATIO:
            return Insight(
                f"Step count declining this week. Your recent avg ({int(recent_avg)}) "
                f"is below your earlier avg ({int(older_avg)}).",
                65,
                InsightTone.CAUTION,
            )

    average = sum(steps) / len(steps)
    return Insight(f"7-day step avg: {int(average)}. Consistency is key.", 15, InsightTone.INFO)


def build_insights(
    readings: DailyReadings,
    recovery: RecoveryScore | int | None = None,
    weekly_steps: Sequence[float] = (),
    limit: int = MAX_INSIGHTS,
) -> list[Insight]:
    """Rank today's insights, highest priority first.

    Args:
        readings: Today's readings.
        recovery: Today's recovery score, if known.
        weekly_steps: Daily step totals for the trailing week, oldest first.
        limit: Maximum number of insights returned.

    Returns:
        Up to ``limit`` insights.  Equal priorities keep rule order.

    Raises:
        InvalidInputError: For invalid readings or step totals.
        UnknownMetricError: For keys outside the metric set.
    """
    parsed = parse_readings(readings)
    sleep = parsed.get(MetricType.SLEEP_DURATION)
    steps = parsed.get(MetricType.STEPS)
    rhr = parsed.get(MetricType.RESTING_HEART_RATE)

    candidates: list[Insight | None] = []
    if sleep is not None:
        candidates.append(sleep_insight(sleep))
    if steps is not None:
        candidates.append(steps_insight(steps))
    if rhr is not None:
        candidates.append(resting_hr_insight(rhr))

    if sleep is not None and rhr is not None and sleep < MIN_SLEEP_MINUTES and rhr > COMPOUND_RESTING_HR:
        candidates.append(
            Insight(
                "Poor sleep combined with elevated heart rate. Your body may need extra recovery today.",
                95,
                InsightTone.ALERT,
            )
        )

    if recovery is not None and int(recovery) < REST_THRESHOLD:
        candidates.append(
            Insight(
                f"Recovery score is {int(recovery)}/100. Consider a lighter workout or rest day.",
                88,
                InsightTone.CAUTION,
            )
        )

    candidates.append(step_trend_insight(weekly_steps))

    ranked = sorted((c for c in candidates if c is not None), key=lambda c: c.priority, reverse=True)
    logger.debug(f"{len(ranked)} insight candidates, keeping {min(limit, len(ranked))}")
    return ranked[:limit]
