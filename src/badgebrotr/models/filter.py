"""
Relay query filter.

[EventFilter][badgebrotr.models.filter.EventFilter] is the transport-neutral
description of a NIP-01 ``REQ`` filter used by the query collaborator.
The relay client converts it to ``nostr_sdk.Filter``; in-memory
collaborators evaluate it with
[matches()][badgebrotr.models.filter.EventFilter.matches].
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from ._validation import validate_timestamp
from .event import Event


def _freeze_values(values: Iterable[Any] | None) -> tuple[Any, ...] | None:
    if values is None:
        return None
    if isinstance(values, str):
        raise TypeError("filter values must be a sequence, not a str")
    return tuple(values)


@dataclass(frozen=True, slots=True)
class EventFilter:
    """Selects events by kind, id, author and single-letter tag values.

    Every populated criterion must match (logical AND); within one
    criterion any listed value matches (logical OR). ``None`` means the
    criterion is not applied.

    Attributes:
        kinds: Accepted event kinds.
        ids: Accepted event ids.
        authors: Accepted author public keys.
        tags: Mapping of single-letter tag name to accepted values
            (``{"p": [...]}`` is the ``#p`` filter).
        limit: Maximum number of events requested from each relay.

    Examples:
        ```python
        f = EventFilter(kinds=[8], tags={"p": [pubkey]}, limit=100)
        f.to_dict()  # {"kinds": [8], "#p": [pubkey], "limit": 100}
        ```
    """

    kinds: tuple[int, ...] | None = None
    ids: tuple[str, ...] | None = None
    authors: tuple[str, ...] | None = None
    tags: Mapping[str, tuple[str, ...]] = field(default_factory=dict)
    limit: int | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "kinds", _freeze_values(self.kinds))
        object.__setattr__(self, "ids", _freeze_values(self.ids))
        object.__setattr__(self, "authors", _freeze_values(self.authors))
        frozen_tags: dict[str, tuple[str, ...]] = {}
        for name, values in self.tags.items():
            if len(name) != 1:
                raise ValueError(f"tag filter names must be a single letter, got {name!r}")
            frozen_tags[name] = _freeze_values(values) or ()
        object.__setattr__(self, "tags", MappingProxyType(frozen_tags))
        if self.limit is not None:
            validate_timestamp(self.limit, "limit")

    def matches(self, event: Event) -> bool:
        """Return whether *event* satisfies every criterion (``limit`` excluded)."""
        if self.kinds is not None and event.kind not in self.kinds:
            return False
        if self.ids is not None and event.id not in self.ids:
            return False
        if self.authors is not None and event.pubkey not in self.authors:
            return False
        for name, values in self.tags.items():
            accepted = set(values)
            if not any(
                len(tag) > 1 and tag[0] == name and tag[1] in accepted for tag in event.tags
            ):
                return False
        return True

    def to_dict(self) -> dict[str, Any]:
        """Return the NIP-01 JSON representation."""
        data: dict[str, Any] = {}
        if self.ids is not None:
            data["ids"] = list(self.ids)
        if self.authors is not None:
            data["authors"] = list(self.authors)
        if self.kinds is not None:
            data["kinds"] = list(self.kinds)
        for name, values in self.tags.items():
            data[f"#{name}"] = list(values)
        if self.limit is not None:
            data["limit"] = self.limit
        return data
