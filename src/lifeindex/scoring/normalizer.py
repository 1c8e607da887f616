"""Per-metric normalization onto a dimensionless [0, 1] score."""

from lifeindex.core.exceptions import InvalidInputError

from .metrics import MetricType, TargetRange, validate_value


def score_band(value: float, target: TargetRange) -> float:
    """Score a value against a healthy band.

    1.0 anywhere inside ``[low, high]``.  Outside, the score falls linearly
    with distance from the violated bound and reaches 0.0 one band-width away.
    A zero-width band scores 1.0 on the point and 0.0 elsewhere.
    """
    if value in target:
        return 1.0

    width = target.width
    if width <= 0:
        return 0.0

    distance = target.low - value if value < target.low else value - target.high
    return max(0.0, 1.0 - distance / width)


def score_cumulative(value: float, target: TargetRange) -> float:
    """Score progress toward a daily goal (``target.low``), capped at 1.0.

    ``target.high`` is a display-only ceiling and plays no part here.

    Raises:
        InvalidInputError: If the goal is not positive.
    """
    if target.low <= 0:
        raise InvalidInputError(f"Cumulative goal must be positive, got {target.low}")
    return min(1.0, value / target.low)


def score_metric(value: float, target: TargetRange, metric: MetricType | str) -> float:
    """Normalize one reading to [0, 1] according to the metric's directionality.

    Args:
        value: Observed value in the metric's unit.
        target: Effective target range (already day-progress scaled if live).
        metric: The metric being scored.

    Raises:
        InvalidInputError: For negative or non-finite values.
        UnknownMetricError: If ``metric`` is not a known metric type.
    """
    metric = MetricType.parse(metric)
    value = validate_value(value, name=metric.value)
    if not isinstance(target, TargetRange):
        raise InvalidInputError(f"target must be a TargetRange, got {type(target).__name__}")

    if metric.is_cumulative:
        return score_cumulative(value, target)
    return score_band(value, target)
