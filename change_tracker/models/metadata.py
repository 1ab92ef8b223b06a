"""Entity and field metadata records."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class EntityMetadata:
    """Registration attached to an entity class.

    Attributes:
        name:              Display name of the entity.
        format:            Renders a whole instance as one string.
        object_hash:       ``(instance, index) -> str | None``; identity used to
                           match array elements across old/new versions.
        exclude_undefined: Only fields carrying FieldMetadata take part in
                           diffing and formatting.
    """

    name: str | None = None
    format: Callable[[Any], str] | None = None
    object_hash: Callable[[Any, int | None], str | None] | None = None
    exclude_undefined: bool = False


@dataclass(frozen=True)
class FieldMetadata:
    """Registration attached to a single field of an entity class."""

    name: str | None = None
    format: Callable[[Any], str] | None = None
