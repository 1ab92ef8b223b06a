"""Localized message templates for formatted changes.

Templates are ``str.format`` strings receiving ``path``, ``value``,
``old_value``, ``placeholder``, ``from_index`` and ``to_index``.
"""

from __future__ import annotations

from dataclasses import dataclass

from change_tracker.models.changes import ChangeOperation


@dataclass(frozen=True)
class Messages:
    """One template per change operation."""

    add: str
    remove: str
    replace: str
    move: str

    def template(self, op: ChangeOperation) -> str:
        return getattr(self, op.value)


MESSAGES: dict[str, Messages] = {
    "zh": Messages(
        add="编辑字段{path}: [{placeholder} => {value}]",
        remove="编辑字段{path}: [{value} => {placeholder}]",
        replace="编辑字段{path}: [{old_value} => {value}]",
        move="将{path}[{value}]从{from_index}移动到{to_index}",
    ),
    "en": Messages(
        add="Changed {path}: [{placeholder} => {value}]",
        remove="Changed {path}: [{value} => {placeholder}]",
        replace="Changed {path}: [{old_value} => {value}]",
        move="Moved {path}[{value}] from {from_index} to {to_index}",
    ),
}


def messages_for(locale: str) -> Messages:
    """Return the template set for *locale*.

    Raises:
        ValueError: no templates exist for *locale*.
    """
    try:
        return MESSAGES[locale.lower()]
    except KeyError:
        raise ValueError(f"Unsupported locale: {locale}. Must be one of {set(MESSAGES)}") from None
