"""Configuration data structures."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class FormatConfig:
    """Change formatter configuration."""

    locale: str = "zh"
    placeholder: str = "--"


@dataclass
class DiffConfig:
    """Delta engine configuration."""

    detect_move: bool = True
    include_value_on_move: bool = True


@dataclass
class LogConfig:
    """Logging configuration."""

    level: str = "info"
    json: bool = True


@dataclass
class TrackerConfig:
    """Top-level change tracker configuration."""

    format: FormatConfig = field(default_factory=FormatConfig)
    diff: DiffConfig = field(default_factory=DiffConfig)
    log: LogConfig = field(default_factory=LogConfig)
