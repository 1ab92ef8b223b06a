"""Change record data structures and enumerations."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

# Key of the single path segment used for changes at the diff root.
ROOT_KEY = "$"


class ChangeOperation(StrEnum):
    """Kind of atomic edit carried by a ChangeRecord."""

    ADD = "add"
    REMOVE = "remove"
    REPLACE = "replace"
    MOVE = "move"


@dataclass(frozen=True)
class PathSegment:
    """One step from the diff root towards a change.

    ``key`` is the raw structural key (field name or array index, always a
    string).  ``name`` and ``format`` come from field metadata and are None
    when the step has no registration.
    """

    key: str
    name: str | None = None
    format: Callable[[Any], str] | None = None

    @property
    def label(self) -> str:
        return self.name or self.key


@dataclass(frozen=True)
class ChangeRecord:
    """Normalized, path-annotated description of one atomic edit.

    Produced by the ChangeExtractor, consumed by the ChangeFormatter.
    Immutable: the formatter derives new records instead of mutating.
    """

    op: ChangeOperation
    paths: tuple[PathSegment, ...]
    value: Any = None
    old_value: Any = None
    from_index: int | None = None
    to_index: int | None = None

    @property
    def leaf(self) -> PathSegment | None:
        return self.paths[-1] if self.paths else None

    @property
    def keys(self) -> tuple[str, ...]:
        """Raw structural keys of the path, root first."""
        return tuple(segment.key for segment in self.paths)
