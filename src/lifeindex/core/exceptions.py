"""
LifeIndex exception hierarchy.

All lifeindex exceptions inherit from LifeIndexError, making it easy for
consumers to catch library-level errors while still distinguishing specific
failure modes.  Missing health data is not an error: scorers return ``None``.
"""


class LifeIndexError(Exception):
    """Base exception class for all lifeindex errors."""


class ConfigurationError(LifeIndexError):
    """Raised for configuration errors (bad weights, malformed targets)."""


class InvalidInputError(LifeIndexError, ValueError):
    """Raised for negative, non-finite or out-of-range input values."""


class UnknownMetricError(InvalidInputError):
    """Raised when a metric key is not one of the known metric types."""
