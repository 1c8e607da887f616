"""
Logging configuration using loguru.

Library modules log through ``from loguru import logger`` and never add sinks
themselves.  Applications (and the CLI) call setup_logging() once at startup.
"""

import sys
from typing import Any

from loguru import logger

_VALID_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    fmt: str = "<level>[{level.name}]</level> {message}",
    rotation: str = "10 MB",
    retention: str = "7 days",
) -> None:
    """
    Configure loguru with console and optional file output.

    Args:
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR).
        log_file: Path to log file. If None, only logs to stderr.
        fmt: Loguru format string for the console sink.
        rotation: Log file rotation size.
        retention: How long to keep rotated logs.
    """
    level = level.upper()
    if level not in _VALID_LEVELS:
        raise ValueError(f"Unknown log level {level!r}. Expected one of {_VALID_LEVELS}")

    logger.remove()
    logger.add(sys.stderr, level=level, format=fmt)

    if log_file:
        logger.add(
            log_file,
            level=level,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {name}:{line} | {message}",
            rotation=rotation,
            retention=retention,
        )


def setup_logging_from_config(config: Any, verbose: bool = False) -> None:
    """Configure logging from the ``logging`` section of a Config.

    ``verbose`` forces DEBUG regardless of the configured level.
    """
    level = "DEBUG" if verbose else str(config.get("logging.level", "WARNING"))
    setup_logging(level=level, log_file=config.get("logging.file"))
