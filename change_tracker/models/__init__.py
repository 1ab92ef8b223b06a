"""Core data structures for the change tracker."""

from change_tracker.models.changes import ROOT_KEY, ChangeOperation, ChangeRecord, PathSegment
from change_tracker.models.config import DiffConfig, FormatConfig, LogConfig, TrackerConfig
from change_tracker.models.metadata import EntityMetadata, FieldMetadata

__all__ = [
    "ROOT_KEY",
    "ChangeOperation",
    "ChangeRecord",
    "DiffConfig",
    "EntityMetadata",
    "FieldMetadata",
    "FormatConfig",
    "LogConfig",
    "PathSegment",
    "TrackerConfig",
]
