"""Key/value projections over an event's flat tag list.

Each tag is a sequence of strings whose first element is the tag name.
All functions are pure and preserve document order.
"""

from __future__ import annotations

from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from badgebrotr.models.event import Event


def has_tag(event: Event, name: str) -> bool:
    """Return whether *event* carries at least one tag named *name*."""
    return any(tag and tag[0] == name for tag in event.tags)


def first_tag_value(event: Event, name: str) -> str | None:
    """Return the value of the first tag named *name*.

    Returns ``None`` when no such tag exists or the first one has no value.
    """
    for tag in event.tags:
        if tag and tag[0] == name:
            return tag[1] if len(tag) > 1 else None
    return None


def all_tag_values(event: Event, name: str) -> list[str]:
    """Return the values of every tag named *name*, in document order.

    Tags with a name but no value are skipped.
    """
    return tag_values_at(event, name, 1)


def tag_values_at(event: Event, name: str, position: int) -> list[str]:
    """Return the element at *position* of every tag named *name*.

    Tags too short to have that position are skipped.
    """
    return [tag[position] for tag in event.tags if tag and tag[0] == name and len(tag) > position]
