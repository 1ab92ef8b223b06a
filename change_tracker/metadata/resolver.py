"""Cached metadata lookup for object instances.

The resolver sits between the registry and the extractor/formatter.  Found
registrations are cached for the lifetime of the resolver; misses are not
cached, so classes registered later are still picked up.  Registrations are
assumed immutable once a resolver has seen them.
"""

from __future__ import annotations

import threading
from typing import Any, overload

from change_tracker.metadata.registry import MetadataRegistry
from change_tracker.models.metadata import EntityMetadata, FieldMetadata
from change_tracker.observability.metrics import metadata_lookups_total
from change_tracker.values import is_structured

_CacheKey = tuple[type, str | None]


class MetadataResolver:
    """Resolves entity and field metadata for instances, with a permanent cache."""

    def __init__(self, registry: MetadataRegistry) -> None:
        self._registry = registry
        self._cache: dict[_CacheKey, EntityMetadata | FieldMetadata] = {}
        self._lock = threading.Lock()

    @property
    def registry(self) -> MetadataRegistry:
        return self._registry

    @overload
    def resolve(self, target: Any) -> EntityMetadata | None: ...

    @overload
    def resolve(self, target: Any, field_key: str) -> FieldMetadata | None: ...

    def resolve(self, target: Any, field_key: str | None = None) -> EntityMetadata | FieldMetadata | None:
        """Return metadata for *target* (a class or an instance), or None.

        Sequences, scalars and None never carry metadata.
        """
        if isinstance(target, type):
            cls = target
        elif is_structured(target):
            cls = type(target)
        else:
            return None

        kind = "entity" if field_key is None else "field"
        key: _CacheKey = (cls, field_key)
        cached = self._cache.get(key)
        if cached is not None:
            metadata_lookups_total.labels(kind=kind, result="hit").inc()
            return cached

        metadata_lookups_total.labels(kind=kind, result="miss").inc()
        metadata: EntityMetadata | FieldMetadata | None
        if field_key is None:
            metadata = self._registry.lookup_entity(cls)
        else:
            metadata = self._registry.lookup_field(cls, field_key)
        if metadata is not None:
            with self._lock:
                metadata = self._cache.setdefault(key, metadata)
        return metadata

    def cache_size(self) -> int:
        return len(self._cache)
