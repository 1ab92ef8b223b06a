"""Change Extractor: turns delta documents into ChangeRecord lists.

The extractor owns a DeltaEngine configured from the metadata resolver:

* array elements that are registered entities are matched by the entity's
  ``object_hash``; anything else falls back to its position;
* entities flagged ``exclude_undefined`` only expose registered fields to
  the engine, so unregistered fields never show up as changes.

Interpretation walks the delta depth-first.  Object levels follow the
delta's key order; array levels emit vacated/moved slots (``_N``) in
ascending old index first, then new-index entries in ascending order.
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping
from typing import Any

from change_tracker.delta import ARRAY_MARKER, ARRAY_MARKER_KEY, MISSING, MOVED, DeltaEngine
from change_tracker.errors import MalformedDeltaError
from change_tracker.metadata.resolver import MetadataResolver
from change_tracker.models.changes import ROOT_KEY, ChangeOperation, ChangeRecord, PathSegment
from change_tracker.models.config import DiffConfig
from change_tracker.observability.logging import get_logger
from change_tracker.observability.metrics import records_total
from change_tracker.values import child, is_structured

_log = get_logger("extractor")

_VACATED_KEY = re.compile(r"_(\d+)")


class ChangeExtractor:
    """Computes ChangeRecords between two versions of an object graph."""

    def __init__(
        self,
        resolver: MetadataResolver,
        config: DiffConfig | None = None,
        engine: DeltaEngine | None = None,
    ) -> None:
        config = config or DiffConfig()
        self._resolver = resolver
        self._engine = engine or DeltaEngine(
            detect_move=config.detect_move,
            include_value_on_move=config.include_value_on_move,
            object_hash=self._object_hash,
            property_filter=self._property_filter,
        )

    # ------------------------------------------------------------------
    # Delta engine hooks
    # ------------------------------------------------------------------

    def _object_hash(self, item: Any, index: int | None) -> str | None:
        if is_structured(item):
            metadata = self._resolver.resolve(item)
            if metadata is not None and metadata.object_hash is not None:
                return metadata.object_hash(item, index)
        return None if index is None else str(index)

    def _property_filter(self, name: str, left: Any, right: Any) -> bool:
        entity = right if right is not None else left
        metadata = self._resolver.resolve(entity)
        if metadata is not None and metadata.exclude_undefined:
            return self._resolver.resolve(entity, name) is not None
        return True

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def track(self, old: Any, new: Any) -> list[ChangeRecord]:
        """Return the changes turning *old* into *new*.

        None on either side means the value does not exist, so tracking
        ``(None, entity)`` reports the entity as added.

        Raises:
            MalformedDeltaError: the delta engine produced an edit of unknown shape.
        """
        changes: list[ChangeRecord] = []
        if old is None and new is None:
            return changes

        delta = self._engine.diff(MISSING if old is None else old, MISSING if new is None else new)
        if delta is None:
            return changes

        origin = old if old is not None else new
        if isinstance(delta, list):
            metadata = self._resolver.resolve(origin)
            root = PathSegment(key=ROOT_KEY, name=metadata.name if metadata is not None else None)
            changes.append(self._classify(delta, (root,)))
        else:
            self._interpret(delta, (), origin, changes)

        for change in changes:
            records_total.labels(op=change.op.value).inc()
        _log.debug("delta_interpreted", records=len(changes))
        return changes

    # ------------------------------------------------------------------
    # Interpretation
    # ------------------------------------------------------------------

    def _interpret(
        self,
        delta: Mapping[str, Any],
        prefix: tuple[PathSegment, ...],
        origin: Any,
        changes: list[ChangeRecord],
    ) -> None:
        is_array = delta.get(ARRAY_MARKER_KEY) == ARRAY_MARKER
        for key, value in _ordered_items(delta, is_array):
            if value is None:
                continue
            vacated = _VACATED_KEY.fullmatch(key) if is_array else None
            current_key = vacated.group(1) if vacated else key
            paths = (*prefix, self._segment(current_key, prefix, origin, is_array))

            if isinstance(value, list):
                changes.append(self._classify(value, paths))
            elif isinstance(value, Mapping):
                self._interpret(value, paths, child(origin, current_key), changes)
            else:
                raise MalformedDeltaError(value, tuple(segment.key for segment in paths))

    def _segment(
        self,
        key: str,
        prefix: tuple[PathSegment, ...],
        origin: Any,
        is_array: bool,
    ) -> PathSegment:
        if is_array and key.isdigit():
            # Elements have no registration of their own; keep the
            # formatter of the field that holds the array.
            parent_format = prefix[-1].format if prefix else None
            return PathSegment(key=key, format=parent_format)
        metadata = self._resolver.resolve(origin, key)
        if metadata is None:
            return PathSegment(key=key)
        return PathSegment(key=key, name=metadata.name, format=metadata.format)

    def _classify(self, delta: list[Any], paths: tuple[PathSegment, ...]) -> ChangeRecord:
        """Map one atomic edit onto a ChangeRecord."""
        if len(delta) == 1:
            return ChangeRecord(op=ChangeOperation.ADD, paths=paths, value=delta[0])
        if len(delta) == 2:
            return ChangeRecord(
                op=ChangeOperation.REPLACE,
                paths=paths,
                value=delta[1],
                old_value=delta[0],
            )
        if len(delta) == 3:
            value, to_index, marker = delta
            if marker == MOVED:
                try:
                    from_index, to_index = int(paths[-1].key), int(to_index)
                except (TypeError, ValueError):
                    # moves only exist inside array levels
                    raise MalformedDeltaError(delta, tuple(segment.key for segment in paths)) from None
                return ChangeRecord(
                    op=ChangeOperation.MOVE,
                    paths=paths,
                    value=value,
                    from_index=from_index,
                    to_index=to_index,
                )
            return ChangeRecord(op=ChangeOperation.REMOVE, paths=paths, value=value)
        raise MalformedDeltaError(delta, tuple(segment.key for segment in paths))


def _ordered_items(delta: Mapping[str, Any], is_array: bool) -> Iterator[tuple[str, Any]]:
    if not is_array:
        yield from delta.items()
        return
    vacated: list[tuple[int, str]] = []
    indexed: list[tuple[int, str]] = []
    others: list[str] = []
    for key in delta:
        if key == ARRAY_MARKER_KEY:
            continue
        match = _VACATED_KEY.fullmatch(key)
        if match:
            vacated.append((int(match.group(1)), key))
        elif key.isdigit():
            indexed.append((int(key), key))
        else:
            others.append(key)
    for _, key in sorted(vacated):
        yield key, delta[key]
    for _, key in sorted(indexed):
        yield key, delta[key]
    for key in others:
        yield key, delta[key]
