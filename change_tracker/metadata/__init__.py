"""Metadata registration and resolution.

Submodules:
    registry -- Explicit (class, field) -> metadata store with decorator sugar.
    resolver -- Instance-level lookup with a permanent per-class cache.
"""

from change_tracker.metadata.registry import FIELD_METADATA_KEY, MetadataRegistry
from change_tracker.metadata.resolver import MetadataResolver

__all__ = ["FIELD_METADATA_KEY", "MetadataRegistry", "MetadataResolver"]
