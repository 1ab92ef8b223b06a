"""Classification and field access for values inside tracked object graphs.

Three kinds of value exist as far as diffing and formatting are concerned:

* sequences  -- lists and tuples, addressed by stringified index;
* structured -- mappings, dataclass instances and plain objects, addressed by
                field name;
* scalars    -- everything else (str, numbers, bool, None, enum members,
                datetimes, ...).
"""

from __future__ import annotations

import dataclasses
import inspect
from collections.abc import Mapping
from enum import Enum
from typing import Any


def is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def is_structured(value: Any) -> bool:
    """Return True for values whose fields can be enumerated."""
    if value is None or is_sequence(value) or isinstance(value, (str, bytes, bytearray, Enum)):
        return False
    if isinstance(value, Mapping):
        return True
    if isinstance(value, type) or inspect.ismodule(value) or inspect.isroutine(value):
        return False
    if dataclasses.is_dataclass(value):
        return True
    return hasattr(value, "__dict__")


def fields_of(value: Any) -> dict[str, Any]:
    """Return the fields of a structured value in declaration order.

    Mapping keys are stringified.  Attributes whose name starts with an
    underscore are private to the object and are not part of its state.

    Raises:
        TypeError: *value* is not structured.
    """
    if isinstance(value, Mapping):
        return {str(key): item for key, item in value.items()}
    if hasattr(value, "__dict__") and not isinstance(value, type):
        return {key: item for key, item in vars(value).items() if not key.startswith("_")}
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            f.name: getattr(value, f.name)
            for f in dataclasses.fields(value)
            if not f.name.startswith("_")
        }
    raise TypeError(f"cannot enumerate fields of {type(value).__name__}")


def child(container: Any, key: str) -> Any:
    """Return ``container[key]`` for any value kind, or None when absent."""
    if container is None:
        return None
    if is_sequence(container):
        try:
            index = int(key)
        except ValueError:
            return None
        return container[index] if 0 <= index < len(container) else None
    if isinstance(container, Mapping):
        return container.get(key)
    if is_structured(container):
        return fields_of(container).get(key)
    return None
