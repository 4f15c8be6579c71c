"""
Pytest tests for detection settings loaded from the environment.
"""

from __future__ import annotations

import os

import pytest

from whale_detector.config.env import get_env_float, get_env_int, load_whale_env
from whale_detector.config.settings import DetectionSettings, get_settings
from whale_detector.core.exceptions import ConfigurationError


def test_defaults(clean_env):
    settings = get_settings()
    assert settings == DetectionSettings.defaults()
    assert settings.early_entry_window_seconds == 60
    assert settings.min_buy_size_sol == 5.0
    assert settings.min_insider_repetitions == 3
    assert settings.whale_score_threshold == 70
    assert settings.cluster_similarity_threshold == 0.8
    assert settings.consistency_threshold == 0.8


def test_env_overrides(clean_env):
    clean_env.setenv("EARLY_ENTRY_WINDOW_SECONDS", "120")
    clean_env.setenv("MIN_BUY_SIZE_SOL", "2.5")
    clean_env.setenv("MIN_INSIDER_REPETITIONS", "5")
    clean_env.setenv("WHALE_SCORE_THRESHOLD", "85")
    clean_env.setenv("CLUSTER_SIMILARITY_THRESHOLD", "0.95")
    clean_env.setenv("PATTERN_CONSISTENCY_THRESHOLD", " 0.5 ")
    settings = get_settings()
    assert settings.early_entry_window_seconds == 120
    assert settings.min_buy_size_sol == 2.5
    assert settings.min_insider_repetitions == 5
    assert settings.whale_score_threshold == 85
    assert settings.cluster_similarity_threshold == 0.95
    assert settings.consistency_threshold == 0.5


def test_blank_env_uses_default(clean_env):
    clean_env.setenv("MIN_BUY_SIZE_SOL", "   ")
    assert get_settings().min_buy_size_sol == 5.0


def test_unparseable_env(clean_env):
    clean_env.setenv("EARLY_ENTRY_WINDOW_SECONDS", "sixty")
    with pytest.raises(ConfigurationError) as exc:
        get_settings()
    assert exc.value.code == "invalid_config"
    assert exc.value.details["variable"] == "EARLY_ENTRY_WINDOW_SECONDS"


@pytest.mark.parametrize(
    "name,value",
    [
        ("MIN_BUY_SIZE_SOL", "0"),
        ("MIN_BUY_SIZE_SOL", "-1"),
        ("EARLY_ENTRY_WINDOW_SECONDS", "-10"),
        ("WHALE_SCORE_THRESHOLD", "101"),
        ("PATTERN_CONSISTENCY_THRESHOLD", "1.5"),
        ("MIN_INSIDER_REPETITIONS", "-1"),
    ],
)
def test_out_of_range_env(clean_env, name, value):
    clean_env.setenv(name, value)
    with pytest.raises(ConfigurationError):
        get_settings()


def test_env_getters(monkeypatch):
    monkeypatch.setenv("WHALE_TEST_INT", "7")
    monkeypatch.setenv("WHALE_TEST_FLOAT", "0.25")
    monkeypatch.delenv("WHALE_TEST_MISSING", raising=False)
    assert get_env_int("WHALE_TEST_INT", 1) == 7
    assert get_env_float("WHALE_TEST_FLOAT", 1.0) == 0.25
    assert get_env_int("WHALE_TEST_MISSING", 3) == 3
    monkeypatch.setenv("WHALE_TEST_FLOAT", "abc")
    with pytest.raises(ConfigurationError):
        get_env_float("WHALE_TEST_FLOAT", 1.0)


def test_load_whale_env_from_file(tmp_path, monkeypatch):
    """Values from .env fill unset variables but never override set ones."""
    env_file = tmp_path / ".env"
    env_file.write_text("WHALE_TEST_FROM_FILE=42\nWHALE_TEST_ALREADY_SET=file\n", encoding="utf-8")
    monkeypatch.delenv("WHALE_TEST_FROM_FILE", raising=False)
    monkeypatch.setenv("WHALE_TEST_ALREADY_SET", "process")
    try:
        load_whale_env(env_file)
        assert os.environ["WHALE_TEST_FROM_FILE"] == "42"
        assert os.environ["WHALE_TEST_ALREADY_SET"] == "process"
    finally:
        os.environ.pop("WHALE_TEST_FROM_FILE", None)


def test_settings_to_dict():
    d = DetectionSettings.defaults().to_dict()
    assert d["min_buy_size_sol"] == 5.0
    assert set(d) == {
        "early_entry_window_seconds",
        "min_buy_size_sol",
        "min_insider_repetitions",
        "whale_score_threshold",
        "cluster_similarity_threshold",
        "consistency_threshold",
    }
