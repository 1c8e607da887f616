"""Shared setup logic for CLI commands."""

from __future__ import annotations

import json
import os
from datetime import datetime
from typing import Any

import click
import yaml

from lifeindex.core.config import Config
from lifeindex.core.exceptions import LifeIndexError
from lifeindex.core.utils.logging import setup_logging_from_config


def load_config(config_file: str | None, verbose: bool = False) -> Config:
    """Load config (file + LIFEINDEX_* env vars) and set up logging."""
    try:
        config = Config(config_file=config_file)
        setup_logging_from_config(config, verbose=verbose)
    except (LifeIndexError, ValueError) as e:
        raise click.ClickException(str(e)) from e
    return config


def load_readings(path: str) -> dict[str, Any]:
    """Read a day's readings from a YAML or JSON mapping file."""
    ext = os.path.splitext(path)[1].lower()
    try:
        with open(path) as f:
            data = json.load(f) if ext == ".json" else yaml.safe_load(f)
    except (OSError, yaml.YAMLError, json.JSONDecodeError) as e:
        raise click.ClickException(f"Could not read readings from {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise click.ClickException(f"{path} must contain a mapping of metric -> value")
    return data


def parse_instant(value: str | None) -> datetime:
    """Parse an ISO-8601 instant; default to the current local time."""
    if value is None:
        return datetime.now().astimezone()
    try:
        return datetime.fromisoformat(value)
    except ValueError as e:
        raise click.BadParameter(f"Not an ISO-8601 datetime: {value}", param_hint="--at") from e
