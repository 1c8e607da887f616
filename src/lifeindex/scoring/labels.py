"""
Qualitative labels for 0-100 scores.

One breakpoint table drives both the label text and the display colour, so
a score's label and the colour of its ring can never disagree.  LifeIndex
and Recovery share the same bands.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from lifeindex.core.exceptions import InvalidInputError


class ScoreTier(Enum):
    """Score bands, highest first."""

    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


@dataclass(frozen=True)
class TierBand:
    tier: ScoreTier
    minimum: int
    label: str
    color: str


# Ordered highest first; a score belongs to the first band whose minimum it meets.
TIER_BANDS: tuple[TierBand, ...] = (
    TierBand(ScoreTier.EXCELLENT, 80, "Excellent", "green"),
    TierBand(ScoreTier.GOOD, 60, "Good", "yellow"),
    TierBand(ScoreTier.FAIR, 40, "Fair", "orange"),
    TierBand(ScoreTier.POOR, 0, "Poor", "red"),
)


def validate_score(score: int) -> int:
    """Check ``score`` is an integer in [0, 100].

    Raises:
        InvalidInputError: Otherwise.
    """
    if isinstance(score, bool) or not isinstance(score, int):
        raise InvalidInputError(f"Score must be an integer, got {score!r}")
    if not 0 <= score <= 100:
        raise InvalidInputError(f"Score must be between 0 and 100, got {score}")
    return score


def band_for(score: int) -> TierBand:
    validate_score(score)
    for band in TIER_BANDS:
        if score >= band.minimum:
            return band
    raise AssertionError("unreachable: TIER_BANDS ends at 0")


def tier_for(score: int) -> ScoreTier:
    """Return the tier a score falls in."""
    return band_for(score).tier


def label_for(score: int) -> str:
    """Return "Excellent", "Good", "Fair" or "Poor" for a 0-100 score."""
    return band_for(score).label


def color_for(score: int) -> str:
    """Return the display colour name for a 0-100 score."""
    return band_for(score).color


# Dashboard explanation copy: (minimum score, afternoon text, morning text or None)
_EXPLANATIONS: tuple[tuple[int, str, str | None], ...] = (
    (90, "Outstanding day. All your metrics are in excellent shape.", None),
    (80, "Most metrics are on track. A small push could get you to Excellent.", None),
    (70, "Solid effort today. Focus on your weaker areas to level up.", None),
    (
        60,
        "A decent day, but a couple areas could use a boost.",
        "Your day is shaping up. Sleep and vitals look decent, keep building.",
    ),
    (
        40,
        "Some metrics are off today. Prioritize what you can still control.",
        "Still early. Your sleep and vitals set the foundation; activity will build through the day.",
    ),
    (
        20,
        "Your body may need extra care today. Rest and recover.",
        "Your day is just getting started. Focus on what's ahead, not what's missing yet.",
    ),
    (
        0,
        "Take it easy. Focus on the basics: sleep, hydration, movement.",
        "Good morning. Your score will build as the day progresses.",
    ),
)

MORNING_CUTOFF_HOUR = 12


def explanation_for(score: int, at: datetime) -> str:
    """One-sentence explanation of a LifeIndex score.

    Before noon, low scores get gentler wording since activity has not had
    time to accumulate.
    """
    validate_score(score)
    is_morning = at.hour < MORNING_CUTOFF_HOUR
    for minimum, text, morning_text in _EXPLANATIONS:
        if score >= minimum:
            return morning_text if (is_morning and morning_text) else text
    raise AssertionError("unreachable: _EXPLANATIONS ends at 0")
