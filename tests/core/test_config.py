"""Tests for lifeindex.core.config."""

import json
import os

import pytest
import yaml

from lifeindex.core.config import Config, get_config, reset_config
from lifeindex.core.exceptions import ConfigurationError


@pytest.fixture(autouse=True)
def _reset_singleton():
    """Reset config singleton between tests."""
    reset_config()
    yield
    reset_config()


class TestConfig:
    def test_defaults(self):
        config = Config()
        assert config.get("logging.level") == "WARNING"
        assert config.get("scoring.catalog.weights") == {}

    def test_yaml_config_file(self, tmp_config_file):
        config = Config(config_file=tmp_config_file)
        assert config.get("scoring.catalog.targets.steps") == {"low": 10000, "high": 15000}
        assert config.get("scoring.recovery.rest_threshold") == 45
        # untouched defaults survive the merge
        assert config.get("scoring.catalog.weights") == {}

    def test_json_config_file(self, tmp_dir):
        config_path = os.path.join(tmp_dir, "config.json")
        with open(config_path, "w") as f:
            json.dump({"logging": {"level": "DEBUG"}}, f)
        assert Config(config_file=config_path).get("logging.level") == "DEBUG"

    def test_missing_file_raises(self, tmp_dir):
        with pytest.raises(ConfigurationError, match="not found"):
            Config(config_file=os.path.join(tmp_dir, "nope.yaml"))

    def test_unsupported_extension_raises(self, tmp_dir):
        path = os.path.join(tmp_dir, "config.toml")
        with open(path, "w") as f:
            f.write("x = 1\n")
        with pytest.raises(ConfigurationError, match="Unsupported"):
            Config(config_file=path)

    def test_malformed_yaml_raises(self, tmp_dir):
        path = os.path.join(tmp_dir, "config.yaml")
        with open(path, "w") as f:
            f.write("scoring: [unclosed\n")
        with pytest.raises(ConfigurationError, match="Could not parse"):
            Config(config_file=path)

    def test_non_mapping_file_raises(self, tmp_dir):
        path = os.path.join(tmp_dir, "config.yaml")
        with open(path, "w") as f:
            yaml.dump([1, 2, 3], f)
        with pytest.raises(ConfigurationError, match="mapping"):
            Config(config_file=path)

    def test_env_overrides_file(self, tmp_config_file, monkeypatch):
        monkeypatch.setenv("LIFEINDEX_SCORING__RECOVERY__REST_THRESHOLD", "30")
        config = Config(config_file=tmp_config_file)
        assert config.get("scoring.recovery.rest_threshold") == "30"

    def test_custom_env_prefix(self, monkeypatch):
        monkeypatch.setenv("MYAPP_LOGGING__LEVEL", "ERROR")
        config = Config(env_prefix="MYAPP_")
        assert config.get("logging.level") == "ERROR"

    def test_extra_defaults(self):
        config = Config(defaults={"scoring": {"recovery": {"hrv_baseline": 65}}})
        assert config.get("scoring.recovery.hrv_baseline") == 65

    def test_get_missing_key(self):
        config = Config()
        assert config.get("nonexistent.key") is None
        assert config.get("nonexistent.key", "fallback") == "fallback"

    def test_set(self):
        config = Config()
        config.set("scoring.recovery.rest_threshold", 35)
        assert config.get("scoring.recovery.rest_threshold") == 35

    def test_set_nested_new(self):
        config = Config()
        config.set("a.b.c", "deep")
        assert config.get("a.b.c") == "deep"


class TestSingleton:
    def test_get_config_returns_same_instance(self):
        c1 = get_config()
        c2 = get_config()
        assert c1 is c2

    def test_reset_config(self):
        c1 = get_config()
        reset_config()
        c2 = get_config()
        assert c1 is not c2
