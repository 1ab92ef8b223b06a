"""Configuration loading from environment variables."""

from __future__ import annotations

import os

from change_tracker.models.config import DiffConfig, FormatConfig, LogConfig, TrackerConfig

_LOCALES = {"zh", "en"}


def _env(key: str, default: str = "") -> str:
    return os.environ.get(f"CHANGE_TRACKER_{key}", default)


def _env_bool(key: str, default: bool = False) -> bool:
    val = _env(key, str(default).lower())
    return val.lower() in ("true", "1", "yes")


def _validate_locale(value: str) -> str:
    if value.lower() not in _LOCALES:
        raise ValueError(f"Invalid locale: {value}. Must be one of {_LOCALES}")
    return value.lower()


def _validate_placeholder(value: str) -> str:
    if not value:
        raise ValueError("Placeholder must not be empty")
    return value


def _validate_log_level(value: str) -> str:
    valid = {"debug", "info", "warning", "error"}
    if value.lower() not in valid:
        raise ValueError(f"Invalid log level: {value}. Must be one of {valid}")
    return value.lower()


def load_config() -> TrackerConfig:
    """Load configuration from CHANGE_TRACKER_* environment variables."""
    return TrackerConfig(
        format=FormatConfig(
            locale=_validate_locale(_env("LOCALE", "zh")),
            placeholder=_validate_placeholder(_env("PLACEHOLDER", "--")),
        ),
        diff=DiffConfig(
            detect_move=_env_bool("DETECT_MOVE", True),
            include_value_on_move=_env_bool("INCLUDE_VALUE_ON_MOVE", True),
        ),
        log=LogConfig(
            level=_validate_log_level(_env("LOG_LEVEL", "info")),
            json=_env_bool("LOG_JSON", True),
        ),
    )
