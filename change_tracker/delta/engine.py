"""Move-aware structural diff producing delta documents.

Delta encoding (compatible with the jsondiffpatch format):

    added      [new]
    modified   [old, new]
    deleted    [old, 0, 0]
    moved      [value, new_index, 3]      value is "" unless include_value_on_move
    object     {field: delta, ...}
    array      {"_t": "a", "<new_index>": delta, "_<old_index>": deleted | moved}

Array elements are matched across versions by equality for scalars and by
identity or equal object hash for sequences and structured values.  Matched
elements that differ internally get a nested delta under their new index.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any, Final

from change_tracker.delta.lcs import longest_common_subsequence
from change_tracker.values import fields_of, is_sequence, is_structured

ARRAY_MARKER_KEY: Final = "_t"
ARRAY_MARKER: Final = "a"
DELETED: Final = 0
MOVED: Final = 3


class _Missing:
    """Sentinel for a side that does not exist (absent field, absent root)."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Final = _Missing()

ObjectHash = Callable[[Any, int | None], str | None]
PropertyFilter = Callable[[str, Any, Any], bool]


def _kind(value: Any) -> str:
    if is_sequence(value):
        return "array"
    if is_structured(value):
        return "object"
    return "scalar"


def _scalar_equal(left: Any, right: Any) -> bool:
    # True == 1 in Python, but a bool flipping to an int is a change.
    if isinstance(left, bool) or isinstance(right, bool):
        return type(left) is type(right) and left == right
    return bool(left == right)


class DeltaEngine:
    """Computes delta documents between two values.

    Args:
        detect_move:           Pair deleted and added array elements of the
                               same identity into move entries.
        include_value_on_move: Keep the moved value in move entries.
        object_hash:           ``(item, index) -> str | None`` identity for
                               non-scalar array elements.  Without it such
                               elements only match when they are the same
                               object.
        property_filter:       ``(field, left, right) -> bool``; fields for
                               which it returns False are not compared.
    """

    def __init__(
        self,
        *,
        detect_move: bool = True,
        include_value_on_move: bool = True,
        object_hash: ObjectHash | None = None,
        property_filter: PropertyFilter | None = None,
    ) -> None:
        self._detect_move = detect_move
        self._include_value_on_move = include_value_on_move
        self._object_hash = object_hash
        self._property_filter = property_filter

    def diff(self, left: Any, right: Any) -> Any:
        """Return the delta turning *left* into *right*, or None if equal.

        Pass MISSING for a side that does not exist at all.
        """
        if left is right:
            return None
        if left is MISSING:
            return [right]
        if right is MISSING:
            return [left, DELETED, DELETED]

        left_kind = _kind(left)
        if left_kind != _kind(right):
            return [left, right]
        if left_kind == "object":
            return self._diff_objects(left, right)
        if left_kind == "array":
            return self._diff_arrays(left, right)
        if _scalar_equal(left, right):
            return None
        return [left, right]

    # ------------------------------------------------------------------
    # Objects
    # ------------------------------------------------------------------

    def _admits(self, name: str, left: Any, right: Any) -> bool:
        if self._property_filter is None:
            return True
        return self._property_filter(name, left, right)

    def _diff_objects(self, left: Any, right: Any) -> dict[str, Any] | None:
        left_fields = fields_of(left)
        right_fields = fields_of(right)
        result: dict[str, Any] = {}

        for name, left_value in left_fields.items():
            if not self._admits(name, left, right):
                continue
            child = self.diff(left_value, right_fields.get(name, MISSING))
            if child is not None:
                result[name] = child

        for name, right_value in right_fields.items():
            if name in left_fields or not self._admits(name, left, right):
                continue
            result[name] = [right_value]

        return result or None

    # ------------------------------------------------------------------
    # Arrays
    # ------------------------------------------------------------------

    def _match(self, seq1: Sequence[Any], seq2: Sequence[Any], index1: int, index2: int) -> bool:
        value1 = seq1[index1]
        value2 = seq2[index2]
        if value1 is value2:
            return True
        if _kind(value1) == "scalar" or _kind(value2) == "scalar":
            return _kind(value1) == _kind(value2) and _scalar_equal(value1, value2)
        if self._object_hash is None:
            return False
        hash1 = self._object_hash(value1, index1)
        if hash1 is None:
            return False
        hash2 = self._object_hash(value2, index2)
        if hash2 is None:
            return False
        return hash1 == hash2

    def _diff_arrays(self, left: Sequence[Any], right: Sequence[Any]) -> dict[str, Any] | None:
        len1 = len(left)
        len2 = len(right)
        result: dict[str, Any] = {ARRAY_MARKER_KEY: ARRAY_MARKER}

        def attach(key: str, child: Any) -> None:
            if child is not None:
                result[key] = child

        head = 0
        while head < len1 and head < len2 and self._match(left, right, head, head):
            attach(str(head), self.diff(left[head], right[head]))
            head += 1

        tail = 0
        while (
            head + tail < len1
            and head + tail < len2
            and self._match(left, right, len1 - 1 - tail, len2 - 1 - tail)
        ):
            index1 = len1 - 1 - tail
            index2 = len2 - 1 - tail
            attach(str(index2), self.diff(left[index1], right[index2]))
            tail += 1

        if head + tail == len1:
            # everything left over on the right was inserted
            for index in range(head, len2 - tail):
                result[str(index)] = [right[index]]
            return result if len(result) > 1 else None

        if head + tail == len2:
            # everything left over on the left was removed
            for index in range(head, len1 - tail):
                result[f"_{index}"] = [left[index], DELETED, DELETED]
            return result

        trimmed1 = left[head : len1 - tail]
        trimmed2 = right[head : len2 - tail]
        pairs = longest_common_subsequence(trimmed1, trimmed2, self._match)
        matched1 = {index1 for index1, _ in pairs}
        matched2 = {index2: index1 for index1, index2 in pairs}

        removed: list[int] = []
        for index in range(head, len1 - tail):
            if index - head not in matched1:
                result[f"_{index}"] = [left[index], DELETED, DELETED]
                removed.append(index)

        for index in range(head, len2 - tail):
            relative = index - head
            if relative in matched2:
                index1 = matched2[relative] + head
                attach(str(index), self.diff(left[index1], right[index]))
                continue
            if self._detect_move and self._pair_move(result, removed, trimmed1, trimmed2, head, index):
                continue
            result[str(index)] = [right[index]]

        return result if len(result) > 1 else None

    def _pair_move(
        self,
        result: dict[str, Any],
        removed: list[int],
        trimmed1: Sequence[Any],
        trimmed2: Sequence[Any],
        head: int,
        index: int,
    ) -> bool:
        """Turn a removed element matching ``right[index]`` into a move entry."""
        for position, removed_index in enumerate(removed):
            if not self._match(trimmed1, trimmed2, removed_index - head, index - head):
                continue
            entry = result[f"_{removed_index}"]
            entry[1] = index
            entry[2] = MOVED
            if not self._include_value_on_move:
                entry[0] = ""
            child = self.diff(trimmed1[removed_index - head], trimmed2[index - head])
            if child is not None:
                result[str(index)] = child
            del removed[position]
            return True
        return False
