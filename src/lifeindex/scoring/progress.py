"""Day-progress scaling for cumulative metrics.

A step goal of 8,000 is unreachable at 8 a.m.  For the live score of the
current day, cumulative targets shrink in proportion to how much of the
calendar day has elapsed; band targets are never scaled.
"""

from datetime import datetime, timedelta

from lifeindex.core.exceptions import InvalidInputError

from .metrics import MetricType, TargetRange

SECONDS_PER_DAY = 24 * 60 * 60

# One minute's worth of day.  A zero factor would put any activity "over target".
MIN_DAY_PROGRESS = 1 / 1440


def start_of_day(now: datetime) -> datetime:
    """Midnight of ``now``'s calendar day, in ``now``'s own timezone."""
    return now.replace(hour=0, minute=0, second=0, microsecond=0)


def day_progress_factor(now: datetime) -> float:
    """Fraction of ``now``'s calendar day that has elapsed, in (0, 1].

    Uses wall-clock time in the datetime's timezone (naive datetimes are
    read as local wall time).  Clamped below at MIN_DAY_PROGRESS.

    Raises:
        InvalidInputError: If ``now`` is not a datetime.
    """
    if not isinstance(now, datetime):
        raise InvalidInputError(f"now must be a datetime, got {type(now).__name__}")

    elapsed = now.replace(tzinfo=None) - start_of_day(now).replace(tzinfo=None)
    fraction = elapsed / timedelta(seconds=SECONDS_PER_DAY)
    return min(1.0, max(MIN_DAY_PROGRESS, fraction))


def scaled_target(metric: MetricType | str, target: TargetRange, factor: float) -> TargetRange:
    """Scale a cumulative metric's target by the day-progress factor.

    Band metrics are returned unchanged.

    Raises:
        InvalidInputError: If ``factor`` is outside (0, 1].
        UnknownMetricError: If ``metric`` is not a known metric type.
    """
    metric = MetricType.parse(metric)
    if isinstance(factor, bool) or not isinstance(factor, int | float) or not 0 < factor <= 1:
        raise InvalidInputError(f"Day-progress factor must be in (0, 1], got {factor!r}")

    if not metric.is_cumulative or factor == 1:
        return target

    low = target.low * factor
    return TargetRange(low, max(low, target.high * factor))
