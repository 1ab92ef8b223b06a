"""Exception types raised by the change tracker."""

from __future__ import annotations

from typing import Any


class ChangeTrackerError(Exception):
    """Base class for every error the change tracker raises."""


class RegistrationError(ChangeTrackerError):
    """Raised when entity or field metadata cannot be registered."""


class MalformedDeltaError(ChangeTrackerError):
    """Raised when a delta document holds an edit of unknown shape.

    The delta engine never emits such edits, so this signals a broken
    upstream document rather than a recoverable condition.
    """

    def __init__(self, delta: Any, path: tuple[str, ...]) -> None:
        location = "/".join(path) or "<root>"
        super().__init__(f"Unrecognized atomic edit at '{location}': {delta!r}")
        self.delta = delta
        self.path = path
