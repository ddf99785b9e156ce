"""Test configuration management."""

import json

import pytest
from pydantic import ValidationError

from ghostcal.core.classify import IntensityThresholds
from ghostcal.core.config import (
    ConfigManager,
    GhostcalConfig,
    ThresholdConfig,
    config_path_from_env,
)


def test_default_config():
    config = GhostcalConfig()
    assert config.window_weeks == 26
    assert config.theme == "dark"
    assert config.loader_timeout == 30.0
    assert config.loader_commands[0][-1] == "--json"
    assert config.thresholds.to_thresholds() == IntensityThresholds()


def test_thresholds_must_increase():
    with pytest.raises(ValidationError):
        ThresholdConfig(floor=0, moderate=5, heavy=4)


def test_window_must_be_positive():
    with pytest.raises(ValidationError):
        GhostcalConfig(window_weeks=0)


def test_theme_is_normalized_and_empty_commands_dropped():
    config = GhostcalConfig(theme=" Light ", loader_commands=[[], ["loader", "--json"]])
    assert config.theme == "light"
    assert config.loader_commands == [["loader", "--json"]]


def test_env_var_overrides_path(isolated_config):
    assert config_path_from_env() == isolated_config


def test_config_manager_roundtrip(tmp_path):
    manager = ConfigManager(tmp_path / "nested" / "config.json")
    config = manager.get_config()
    assert isinstance(config, GhostcalConfig)

    config.window_weeks = 52
    config.thresholds = ThresholdConfig(floor=0, moderate=2, heavy=6)
    manager.save_config(config)

    reloaded = ConfigManager(tmp_path / "nested" / "config.json").get_config()
    assert reloaded.window_weeks == 52
    assert reloaded.thresholds.heavy == 6


def test_unreadable_config_falls_back_to_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{broken", encoding="utf-8")
    assert ConfigManager(path).get_config() == GhostcalConfig()


def test_invalid_values_fall_back_to_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"window_weeks": -3}), encoding="utf-8")
    assert ConfigManager(path).get_config().window_weeks == 26
