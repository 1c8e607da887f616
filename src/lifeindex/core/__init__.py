"""Configuration, errors and logging shared across lifeindex."""

from .config import Config, get_config, reset_config
from .exceptions import ConfigurationError, InvalidInputError, LifeIndexError, UnknownMetricError

__all__ = [
    "Config",
    "ConfigurationError",
    "InvalidInputError",
    "LifeIndexError",
    "UnknownMetricError",
    "get_config",
    "reset_config",
]
