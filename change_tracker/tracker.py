"""EntityChangeTracker: the public entry point.

Wires one MetadataResolver into a ChangeExtractor and a ChangeFormatter so
both share a single metadata cache.  Construct one tracker per registry and
keep it for the life of the process.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from change_tracker.config import load_config
from change_tracker.extractor import ChangeExtractor
from change_tracker.formatter import ChangeFormatter
from change_tracker.metadata import MetadataRegistry, MetadataResolver
from change_tracker.models.changes import ChangeRecord
from change_tracker.models.config import TrackerConfig
from change_tracker.observability.logging import setup_logging


class EntityChangeTracker:
    """Tracks changes between entity versions and describes them."""

    def __init__(self, registry: MetadataRegistry, config: TrackerConfig | None = None) -> None:
        self.config = config or TrackerConfig()
        self.resolver = MetadataResolver(registry)
        self.extractor = ChangeExtractor(self.resolver, self.config.diff)
        self.formatter = ChangeFormatter(self.resolver, self.config.format)

    @classmethod
    def from_env(cls, registry: MetadataRegistry, *, configure_logging: bool = False) -> EntityChangeTracker:
        """Build a tracker from CHANGE_TRACKER_* environment variables.

        Raises:
            ValueError: an environment variable holds an invalid value.
        """
        config = load_config()
        if configure_logging:
            setup_logging(config.log.level, json_output=config.log.json)
        return cls(registry, config)

    def track(self, old: Any, new: Any) -> list[ChangeRecord]:
        return self.extractor.track(old, new)

    def format_all(self, records: Iterable[ChangeRecord]) -> list[str]:
        return self.formatter.format_all(records)

    def describe(self, old: Any, new: Any) -> list[str]:
        """Track and format in one call."""
        return self.format_all(self.track(old, new))
