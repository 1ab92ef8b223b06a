"""Change Formatter: renders ChangeRecords as readable lines.

Formatter resolution for a record, first match wins:

1. the leaf path segment's field formatter;
2. the ``format`` of the entity held by the record;
3. field expansion: a structured value (registered or not) without any
   formatter is split into one derived record per field, each formatted
   recursively;
4. the default stringifier (``format_value``).

A custom formatter that raises is replaced by the default stringifier for
that record only.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Iterable
from enum import Enum
from typing import Any

from change_tracker.formatter.messages import messages_for
from change_tracker.metadata.resolver import MetadataResolver
from change_tracker.models.changes import ChangeRecord, PathSegment
from change_tracker.models.config import FormatConfig
from change_tracker.models.metadata import EntityMetadata
from change_tracker.observability.logging import get_logger
from change_tracker.observability.metrics import formatter_fallbacks_total
from change_tracker.values import child, fields_of, is_sequence, is_structured

_log = get_logger("formatter")


class ChangeFormatter:
    """Turns ChangeRecords into localized strings."""

    def __init__(self, resolver: MetadataResolver, config: FormatConfig | None = None) -> None:
        config = config or FormatConfig()
        self._resolver = resolver
        self._messages = messages_for(config.locale)
        self._placeholder = config.placeholder

    @property
    def placeholder(self) -> str:
        return self._placeholder

    def format_all(self, records: Iterable[ChangeRecord]) -> list[str]:
        """Format every record; one record may yield zero or more lines."""
        lines: list[str] = []
        for record in records:
            lines.extend(self.format(record))
        return lines

    def format(self, record: ChangeRecord) -> list[str]:
        leaf = record.leaf
        formatter = leaf.format if leaf is not None else None
        candidate = record.value if record.value is not None else record.old_value

        if is_structured(candidate):
            entity_metadata = self._resolver.resolve(candidate)
            if formatter is None and entity_metadata is not None:
                formatter = entity_metadata.format
            if formatter is None:
                return self.format_all(self._expand(record, candidate, entity_metadata))

        value, old_value = self._render_values(record, formatter)
        path = "".join(f"[{segment.label}]" for segment in record.paths)
        template = self._messages.template(record.op)
        return [
            template.format(
                path=path,
                value=value,
                old_value=old_value,
                placeholder=self._placeholder,
                from_index=record.from_index,
                to_index=record.to_index,
            )
        ]

    def _expand(
        self,
        record: ChangeRecord,
        entity: Any,
        metadata: EntityMetadata | None,
    ) -> list[ChangeRecord]:
        """Derive one record per field of *entity*.

        Unregistered structures expose every field.
        """
        keys = list(fields_of(entity))
        if metadata is not None and metadata.exclude_undefined:
            keys = [key for key in keys if self._resolver.resolve(entity, key) is not None]

        derived: list[ChangeRecord] = []
        for key in keys:
            field_metadata = self._resolver.resolve(entity, key)
            if field_metadata is None:
                segment = PathSegment(key=key)
            else:
                segment = PathSegment(key=key, name=field_metadata.name, format=field_metadata.format)
            derived.append(
                dataclasses.replace(
                    record,
                    paths=(*record.paths, segment),
                    value=child(record.value, key),
                    old_value=child(record.old_value, key),
                )
            )
        return derived

    def _render_values(
        self,
        record: ChangeRecord,
        formatter: Callable[[Any], str] | None,
    ) -> tuple[str, str]:
        if formatter is not None:
            try:
                return str(formatter(record.value)), str(formatter(record.old_value))
            except Exception as exc:  # noqa: BLE001
                formatter_fallbacks_total.inc()
                _log.warning(
                    "custom_formatter_failed",
                    path=".".join(record.keys),
                    op=record.op.value,
                    error=str(exc),
                )
        return self.format_value(record.value), self.format_value(record.old_value)

    # ------------------------------------------------------------------
    # Default stringifier
    # ------------------------------------------------------------------

    def format_value(self, value: Any) -> str:
        """Stringify *value* without any field or record context."""
        if value is None:
            return self._placeholder
        if is_sequence(value):
            text = ", ".join(self.format_value(item) for item in value)
        elif is_structured(value):
            try:
                text = ", ".join(self._describe_fields(value))
            except Exception:  # noqa: BLE001
                text = f"<{type(value).__name__}>"
        elif isinstance(value, Enum):
            text = self.format_value(value.value)
        elif isinstance(value, bool):
            text = "true" if value else "false"
        else:
            text = str(value)
        return text or self._placeholder

    def _describe_fields(self, entity: Any, labels: tuple[str, ...] = ()) -> list[str]:
        """Render ``label: value`` pairs, qualifying nested labels with dots."""
        metadata = self._resolver.resolve(entity)
        if metadata is not None and metadata.format is not None:
            return [str(metadata.format(entity))]

        items = list(fields_of(entity).items())
        if metadata is not None and metadata.exclude_undefined:
            items = [(key, value) for key, value in items if self._resolver.resolve(entity, key) is not None]

        lines: list[str] = []
        for key, value in items:
            field_metadata = self._resolver.resolve(entity, key)
            label = field_metadata.name if field_metadata is not None and field_metadata.name else key
            qualified = (*labels, label)
            if is_structured(value):
                lines.extend(self._describe_fields(value, qualified))
            else:
                lines.append(f"{'.'.join(qualified)}: {self.format_value(value)}")
        return lines

