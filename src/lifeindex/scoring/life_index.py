"""
LifeIndex aggregator: the daily 0-100 wellness score.

Implements:
- Live scoring for the current day, with cumulative targets scaled by how
  much of the day has passed
- Final scoring for past days and end-of-day reports (unscaled targets)
- A ranked per-metric breakdown with contribution percentages
- Top contributor / weakest area selection

Weights are renormalized over the metrics actually present, so a day without
blood-oxygen data is scored on the other metrics alone instead of losing
that metric's share of the ceiling.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum

from loguru import logger

from .catalog import DEFAULT_CATALOG, MetricCatalog
from .labels import label_for
from .metrics import MetricType, parse_readings
from .normalizer import score_metric
from .progress import day_progress_factor, scaled_target

DailyReadings = Mapping[MetricType | str, float | None]


class ScoreMode(Enum):
    """Which target set a composite was computed against."""

    LIVE = "live"  # day-progress scaled, current day only
    FINAL = "final"  # full-day targets


@dataclass(frozen=True)
class ScoreBreakdownEntry:
    """One metric's share of a composite score."""

    metric: MetricType
    normalized_score: float
    raw_value: float
    weight: float
    contribution_pct: float = 0.0

    def to_dict(self) -> dict:
        return {
            "metric": self.metric.value,
            "normalized_score": round(self.normalized_score, 4),
            "raw_value": self.raw_value,
            "weight": self.weight,
            "contribution_pct": round(self.contribution_pct, 2),
        }


@dataclass(frozen=True)
class CompositeScore:
    """A LifeIndex score with its label and breakdown.

    Attributes:
        value: Integer score, 0-100.
        label: Qualitative tier ("Excellent", "Good", "Fair", "Poor").
        mode: LIVE (scaled targets, today only) or FINAL.
        day_progress: Factor applied to cumulative targets (1.0 for FINAL).
        breakdown: Entries sorted by normalized score, best first (a tuple).
    """

    value: int
    label: str
    mode: ScoreMode
    day_progress: float
    breakdown: tuple[ScoreBreakdownEntry, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "breakdown", tuple(self.breakdown))

    def __int__(self) -> int:
        return self.value

    @property
    def top_contributor(self) -> ScoreBreakdownEntry | None:
        return top_contributor(self.breakdown)

    @property
    def weakest_area(self) -> ScoreBreakdownEntry | None:
        return weakest_area(self.breakdown)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        top = self.top_contributor
        weakest = self.weakest_area
        return {
            "score": self.value,
            "label": self.label,
            "mode": self.mode.value,
            "day_progress": round(self.day_progress, 4),
            "breakdown": [entry.to_dict() for entry in self.breakdown],
            "top_contributor": top.metric.value if top else None,
            "weakest_area": weakest.metric.value if weakest else None,
        }


def round_score(value: float) -> int:
    """Round half-up and clamp into [0, 100]."""
    rounded = int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    return min(100, max(0, rounded))


def top_contributor(breakdown: Sequence[ScoreBreakdownEntry]) -> ScoreBreakdownEntry | None:
    """The entry contributing the largest share of the weighted total."""
    if not breakdown:
        return None
    return max(breakdown, key=lambda e: e.contribution_pct)


def weakest_area(breakdown: Sequence[ScoreBreakdownEntry]) -> ScoreBreakdownEntry | None:
    """The entry contributing the smallest share; needs at least two entries."""
    if len(breakdown) < 2:
        return None
    return min(breakdown, key=lambda e: e.contribution_pct)


class LifeIndexScorer:
    """Weighted composite of every metric present in a day's readings."""

    def __init__(self, catalog: MetricCatalog = DEFAULT_CATALOG):
        self.catalog = catalog

    def breakdown(self, readings: DailyReadings, factor: float = 1.0) -> list[ScoreBreakdownEntry]:
        """Score each present metric and rank them, best first.

        Args:
            readings: Metric type -> value for one day.
            factor: Day-progress factor for cumulative targets (1.0 = full day).

        Returns:
            Entries sorted by normalized score (descending, ties in catalog
            order).  Contribution percentages sum to 100 whenever the list
            is non-empty.
        """
        parsed = parse_readings(readings)

        scored: list[tuple[MetricType, float, float, float]] = []
        for metric in MetricType:
            if metric not in parsed:
                continue
            value = parsed[metric]
            target = scaled_target(metric, self.catalog.target_range(metric), factor)
            normalized = score_metric(value, target, metric)
            scored.append((metric, normalized, value, self.catalog.weight(metric)))

        if not scored:
            return []

        weighted_total = sum(n * w for _, n, _, w in scored)
        weight_total = sum(w for _, _, _, w in scored)

        entries = []
        for metric, normalized, value, weight in scored:
            if weighted_total > 0:
                pct = normalized * weight / weighted_total * 100
            elif weight_total > 0:
                # Everything scored zero: report plain weight shares instead
                pct = weight / weight_total * 100
            else:
                pct = 100 / len(scored)
            entries.append(ScoreBreakdownEntry(metric, normalized, value, weight, pct))

        return sorted(entries, key=lambda e: e.normalized_score, reverse=True)

    def calculate_score(
        self,
        readings: DailyReadings,
        at: datetime,
        time_aware: bool = True,
    ) -> CompositeScore | None:
        """Score a day's readings.

        Args:
            readings: Metric type -> value for one day.
            at: The current instant; only consulted when ``time_aware``.
            time_aware: Scale cumulative targets by day progress (live score).

        Returns:
            The composite, or None when no metric is present.
        """
        factor = day_progress_factor(at) if time_aware else 1.0
        return self._score(readings, factor, ScoreMode.LIVE if time_aware else ScoreMode.FINAL)

    def calculate_final_score(self, readings: DailyReadings) -> CompositeScore | None:
        """Score a day against full-day targets, for any day that is not today."""
        return self._score(readings, 1.0, ScoreMode.FINAL)

    def label(self, score: int) -> str:
        return label_for(score)

    def _score(self, readings: DailyReadings, factor: float, mode: ScoreMode) -> CompositeScore | None:
        entries = self.breakdown(readings, factor)
        if not entries:
            logger.debug("No metrics present; LifeIndex score unavailable")
            return None

        weight_total = sum(e.weight for e in entries)
        if weight_total <= 0:
            logger.debug(f"Present metrics {[e.metric.value for e in entries]} all carry zero weight")
            return None

        composite = sum(e.normalized_score * e.weight for e in entries) / weight_total
        value = round_score(composite * 100)
        logger.debug(f"LifeIndex {mode.value} score {value} from {len(entries)} metrics (day progress {factor:.3f})")

        return CompositeScore(
            value=value,
            label=label_for(value),
            mode=mode,
            day_progress=factor,
            breakdown=entries,
        )
