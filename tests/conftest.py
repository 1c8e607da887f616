"""Shared test fixtures for lifeindex."""

import os
import tempfile
from datetime import datetime

import pytest

from lifeindex.scoring import LifeIndexScorer, MetricType, RecoveryScorer


@pytest.fixture
def tmp_dir():
    """Provide a temporary directory that is cleaned up after the test."""
    with tempfile.TemporaryDirectory() as d:
        yield d


@pytest.fixture
def tmp_config_file(tmp_dir):
    """Create a temporary YAML config file with a few overrides."""
    import yaml

    config_data = {
        "scoring": {
            "catalog": {
                "targets": {"steps": {"low": 10000, "high": 15000}},
            },
            "recovery": {"rest_threshold": 45},
        },
        "logging": {"level": "info"},
    }
    config_path = os.path.join(tmp_dir, "config.yaml")
    with open(config_path, "w") as f:
        yaml.dump(config_data, f)
    return config_path


@pytest.fixture
def scorer():
    return LifeIndexScorer()


@pytest.fixture
def recovery_scorer():
    return RecoveryScorer()


@pytest.fixture
def noon():
    return datetime(2025, 6, 15, 12, 0, 0)


@pytest.fixture
def full_day_readings():
    """A healthy day with every metric in range."""
    return {
        MetricType.STEPS: 10_000,
        MetricType.HEART_RATE: 72,
        MetricType.RESTING_HEART_RATE: 58,
        MetricType.HEART_RATE_VARIABILITY: 55,
        MetricType.BLOOD_OXYGEN: 0.98,
        MetricType.ACTIVE_CALORIES: 450,
        MetricType.SLEEP_DURATION: 470,
        MetricType.MINDFUL_MINUTES: 10,
        MetricType.WORKOUT_MINUTES: 30,
    }
