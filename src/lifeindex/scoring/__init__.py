"""
Scoring engine: LifeIndex, Recovery and Sleep scores.

Pure functions of their inputs.  "Now" is always passed in by the caller;
nothing here reads the clock, touches disk or keeps state between calls.
"""

from .catalog import DEFAULT_CATALOG, MetricCatalog
from .history import DayScore, ScoreHistory, build_history
from .insights import Insight, InsightTone, build_insights
from .labels import ScoreTier, color_for, explanation_for, label_for, tier_for
from .life_index import CompositeScore, LifeIndexScorer, ScoreBreakdownEntry, ScoreMode
from .metrics import Directionality, MetricType, TargetRange, parse_readings
from .normalizer import score_metric
from .progress import MIN_DAY_PROGRESS, day_progress_factor, scaled_target
from .recovery import REST_THRESHOLD, RecoveryConfig, RecoveryScore, RecoveryScorer
from .sleep import SleepScore, SleepScorer, SleepStages

__all__ = [
    "DEFAULT_CATALOG",
    "MIN_DAY_PROGRESS",
    "REST_THRESHOLD",
    "CompositeScore",
    "DayScore",
    "Insight",
    "InsightTone",
    "Directionality",
    "LifeIndexScorer",
    "MetricCatalog",
    "MetricType",
    "RecoveryConfig",
    "RecoveryScore",
    "RecoveryScorer",
    "ScoreBreakdownEntry",
    "ScoreHistory",
    "ScoreMode",
    "ScoreTier",
    "SleepScore",
    "SleepScorer",
    "SleepStages",
    "TargetRange",
    "build_history",
    "build_insights",
    "color_for",
    "day_progress_factor",
    "explanation_for",
    "label_for",
    "parse_readings",
    "scaled_target",
    "score_metric",
    "tier_for",
]
