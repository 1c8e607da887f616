"""Final scores across recent days: the weekly history strip."""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, timedelta

from .life_index import DailyReadings, LifeIndexScorer

# Days in the trailing window, today included.
WEEKLY_WINDOW_DAYS = 7


@dataclass(frozen=True)
class DayScore:
    day: date
    score: int
    label: str


@dataclass(frozen=True)
class ScoreHistory:
    """Final scores for the days that had data, oldest first."""

    entries: tuple[DayScore, ...] = ()
    yesterday: int | None = None
    weekly_average: int | None = None

    def __post_init__(self):
        object.__setattr__(self, "entries", tuple(self.entries))

    def to_dict(self) -> dict:
        return {
            "entries": [{"date": e.day.isoformat(), "score": e.score, "label": e.label} for e in self.entries],
            "yesterday": self.yesterday,
            "weekly_average": self.weekly_average,
        }


def build_history(
    days: Mapping[date, DailyReadings],
    today: date,
    scorer: LifeIndexScorer | None = None,
) -> ScoreHistory:
    """Score the trailing week against full-day targets.

    Only days in ``[today - 6, today]`` are scored; older days and days after
    ``today`` are ignored.  Days with no readings are left out rather than
    counted as 0.  The weekly average is the floor of the mean of the scored
    days.

    Args:
        days: Date -> that day's readings.
        today: Last day of the window; also picks out yesterday's score.
        scorer: Scorer to use; defaults to one with the built-in catalog.
    """
    scorer = scorer or LifeIndexScorer()
    window_start = today - timedelta(days=WEEKLY_WINDOW_DAYS - 1)

    entries = []
    for day in sorted(days):
        if not window_start <= day <= today:
            continue
        composite = scorer.calculate_final_score(days[day])
        if composite is None:
            continue
        entries.append(DayScore(day=day, score=composite.value, label=composite.label))

    yesterday_date = today - timedelta(days=1)
    yesterday = next((e.score for e in entries if e.day == yesterday_date), None)
    average = sum(e.score for e in entries) // len(entries) if entries else None

    return ScoreHistory(entries=tuple(entries), yesterday=yesterday, weekly_average=average)
