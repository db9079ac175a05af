"""Shared validation helpers for frozen dataclass models.

Private module, not part of the public API. Used exclusively by
``__post_init__`` methods in sibling model modules to enforce runtime
type constraints and deep immutability of tag lists.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any


def validate_timestamp(value: Any, name: str) -> None:
    """Raise if *value* is not a non-negative ``int`` (``bool`` excluded)."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"{name} must be non-negative")


def validate_int_range(value: Any, name: str, lower: int, upper: int) -> None:
    """Raise if *value* is not an ``int`` within ``[lower, upper]``."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")
    if not lower <= value <= upper:
        raise ValueError(f"{name} must be between {lower} and {upper}, got {value}")


def validate_str(value: Any, name: str) -> None:
    """Raise ``TypeError`` if *value* is not a ``str``."""
    if not isinstance(value, str):
        raise TypeError(f"{name} must be a str, got {type(value).__name__}")


def validate_str_not_empty(value: Any, name: str) -> None:
    """Raise if *value* is not a non-empty ``str``."""
    validate_str(value, name)
    if not value:
        raise ValueError(f"{name} must not be empty")


def freeze_tags(tags: Any, name: str = "tags") -> tuple[tuple[str, ...], ...]:
    """Convert a list of tag lists into an immutable tuple of string tuples.

    Args:
        tags: Iterable of iterables of strings, as found in NIP-01 JSON.
        name: Field name for error messages.

    Returns:
        The tags as nested tuples, preserving document order.

    Raises:
        TypeError: If *tags* or any tag is not iterable, or if any tag
            element is not a ``str``.
    """
    if isinstance(tags, str) or not isinstance(tags, Iterable):
        raise TypeError(f"{name} must be a sequence of tags, got {type(tags).__name__}")

    frozen: list[tuple[str, ...]] = []
    for index, tag in enumerate(tags):
        if isinstance(tag, str) or not isinstance(tag, Iterable):
            raise TypeError(f"{name}[{index}] must be a sequence, got {type(tag).__name__}")
        values = tuple(tag)
        for value in values:
            validate_str(value, f"{name}[{index}] element")
        frozen.append(values)
    return tuple(frozen)
