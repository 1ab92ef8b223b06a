"""Tests for CHANGE_TRACKER_* environment configuration."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from change_tracker.config import load_config
from change_tracker.metadata import MetadataRegistry
from change_tracker.tracker import EntityChangeTracker


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in ("LOCALE", "PLACEHOLDER", "DETECT_MOVE", "INCLUDE_VALUE_ON_MOVE", "LOG_LEVEL", "LOG_JSON"):
        monkeypatch.delenv(f"CHANGE_TRACKER_{key}", raising=False)


class TestLoadConfig:
    def test_defaults(self) -> None:
        config = load_config()
        assert config.format.locale == "zh"
        assert config.format.placeholder == "--"
        assert config.diff.detect_move is True
        assert config.diff.include_value_on_move is True
        assert config.log.level == "info"
        assert config.log.json is True

    def test_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CHANGE_TRACKER_LOCALE", "EN")
        monkeypatch.setenv("CHANGE_TRACKER_PLACEHOLDER", "N/A")
        monkeypatch.setenv("CHANGE_TRACKER_DETECT_MOVE", "false")
        monkeypatch.setenv("CHANGE_TRACKER_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("CHANGE_TRACKER_LOG_JSON", "false")
        config = load_config()
        assert config.format.locale == "en"
        assert config.format.placeholder == "N/A"
        assert config.diff.detect_move is False
        assert config.log.level == "debug"
        assert config.log.json is False

    def test_invalid_locale(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CHANGE_TRACKER_LOCALE", "fr")
        with pytest.raises(ValueError, match="Invalid locale"):
            load_config()

    def test_invalid_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CHANGE_TRACKER_LOG_LEVEL", "verbose")
        with pytest.raises(ValueError, match="Invalid log level"):
            load_config()

    def test_empty_placeholder(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CHANGE_TRACKER_PLACEHOLDER", "")
        with pytest.raises(ValueError, match="Placeholder"):
            load_config()


class TestTrackerFromEnv:
    def test_tracker_uses_environment_locale(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CHANGE_TRACKER_LOCALE", "en")
        tracker = EntityChangeTracker.from_env(MetadataRegistry())
        assert tracker.describe({"a": 1}, {"a": 2}) == ["Changed [a]: [1 => 2]"]

    def test_logging_configured_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CHANGE_TRACKER_LOG_LEVEL", "debug")
        monkeypatch.setenv("CHANGE_TRACKER_LOG_JSON", "false")
        with patch("change_tracker.tracker.setup_logging") as setup:
            EntityChangeTracker.from_env(MetadataRegistry(), configure_logging=True)
        setup.assert_called_once_with("debug", json_output=False)

    def test_logging_left_alone_by_default(self) -> None:
        with patch("change_tracker.tracker.setup_logging") as setup:
            EntityChangeTracker.from_env(MetadataRegistry())
        setup.assert_not_called()
