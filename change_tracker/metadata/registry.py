"""Explicit registration store for entity and field metadata.

Entities are registered per class; fields per ``(class, field name)``.
Lookups walk the class MRO so subclasses inherit the registrations of their
bases, with the most derived registration winning.

Registration can be done with direct calls::

    registry.register_entity(User, EntityMetadata(name="User"))
    registry.register_field(User, "name", "Username")

or with the class decorator, which also picks up FieldMetadata (or a bare
display name) stored under ``FIELD_METADATA_KEY`` in dataclass field
metadata::

    @registry.track_entity(name="User", fields={"name": "Username"})
    @dataclass
    class User:
        name: str
        email: str = field(metadata={FIELD_METADATA_KEY: "E-mail"})
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Mapping
from typing import Any, TypeVar

from change_tracker.errors import RegistrationError
from change_tracker.models.metadata import EntityMetadata, FieldMetadata
from change_tracker.observability.logging import get_logger

_log = get_logger("metadata.registry")

FIELD_METADATA_KEY = "change_tracker"

T = TypeVar("T", bound=type)

FieldDeclaration = FieldMetadata | str | None


def _as_field_metadata(declared: FieldDeclaration) -> FieldMetadata:
    if declared is None:
        return FieldMetadata()
    if isinstance(declared, str):
        return FieldMetadata(name=declared)
    if isinstance(declared, FieldMetadata):
        return declared
    raise RegistrationError(f"Field metadata must be FieldMetadata or str, got {type(declared).__name__}")


class MetadataRegistry:
    """Maps classes and their fields to tracking metadata."""

    def __init__(self) -> None:
        self._entities: dict[type, EntityMetadata] = {}
        self._fields: dict[tuple[type, str], FieldMetadata] = {}

    def register_entity(self, cls: type, metadata: EntityMetadata | None = None) -> None:
        """Register *cls* as a tracked entity, replacing any earlier registration."""
        if not isinstance(cls, type):
            raise RegistrationError(f"Entities are registered per class, got {cls!r}")
        metadata = metadata or EntityMetadata()
        for attr in ("format", "object_hash"):
            fn = getattr(metadata, attr)
            if fn is not None and not callable(fn):
                raise RegistrationError(f"{cls.__name__}: entity {attr} must be callable")
        self._entities[cls] = metadata
        _log.debug("entity_registered", entity=cls.__qualname__, name=metadata.name)

    def register_field(self, cls: type, key: str, metadata: FieldDeclaration = None) -> None:
        """Register field *key* of *cls*.  A bare string is the display name."""
        if not isinstance(cls, type):
            raise RegistrationError(f"Fields are registered per class, got {cls!r}")
        if not key:
            raise RegistrationError(f"{cls.__name__}: field key must not be empty")
        field_metadata = _as_field_metadata(metadata)
        if field_metadata.format is not None and not callable(field_metadata.format):
            raise RegistrationError(f"{cls.__name__}.{key}: field format must be callable")
        self._fields[(cls, key)] = field_metadata
        _log.debug("field_registered", entity=cls.__qualname__, field=key, name=field_metadata.name)

    def lookup_entity(self, cls: type) -> EntityMetadata | None:
        for klass in cls.__mro__:
            metadata = self._entities.get(klass)
            if metadata is not None:
                return metadata
        return None

    def lookup_field(self, cls: type, key: str) -> FieldMetadata | None:
        for klass in cls.__mro__:
            metadata = self._fields.get((klass, key))
            if metadata is not None:
                return metadata
        return None

    def track_entity(
        self,
        *,
        name: str | None = None,
        format: Callable[[Any], str] | None = None,
        object_hash: Callable[[Any, int | None], str | None] | None = None,
        exclude_undefined: bool = False,
        fields: Mapping[str, FieldDeclaration] | None = None,
    ) -> Callable[[T], T]:
        """Class decorator registering the class and its fields."""

        def decorator(cls: T) -> T:
            self.register_entity(
                cls,
                EntityMetadata(
                    name=name,
                    format=format,
                    object_hash=object_hash,
                    exclude_undefined=exclude_undefined,
                ),
            )
            if dataclasses.is_dataclass(cls):
                for f in dataclasses.fields(cls):
                    if FIELD_METADATA_KEY in f.metadata:
                        self.register_field(cls, f.name, f.metadata[FIELD_METADATA_KEY])
            for key, declared in (fields or {}).items():
                self.register_field(cls, key, declared)
            return cls

        return decorator
