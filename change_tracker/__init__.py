"""Audit-log change tracking for nested domain entities.

Computes a move-aware structural diff between two versions of an object
graph, turns it into path-annotated ChangeRecords, and renders them as
localized lines using per-entity and per-field metadata.
"""

from change_tracker.errors import ChangeTrackerError, MalformedDeltaError, RegistrationError
from change_tracker.extractor import ChangeExtractor
from change_tracker.formatter import ChangeFormatter
from change_tracker.metadata import FIELD_METADATA_KEY, MetadataRegistry, MetadataResolver
from change_tracker.models import (
    ROOT_KEY,
    ChangeOperation,
    ChangeRecord,
    EntityMetadata,
    FieldMetadata,
    PathSegment,
    TrackerConfig,
)
from change_tracker.tracker import EntityChangeTracker

__version__ = "0.1.0"

__all__ = [
    "FIELD_METADATA_KEY",
    "ROOT_KEY",
    "ChangeExtractor",
    "ChangeFormatter",
    "ChangeOperation",
    "ChangeRecord",
    "ChangeTrackerError",
    "EntityChangeTracker",
    "EntityMetadata",
    "FieldMetadata",
    "MalformedDeltaError",
    "MetadataRegistry",
    "MetadataResolver",
    "PathSegment",
    "RegistrationError",
    "TrackerConfig",
    "__version__",
]
