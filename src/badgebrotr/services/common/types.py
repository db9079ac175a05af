"""Collaborator protocols consumed by the badge services.

The services never talk to relays directly. They receive an
[EventQuerier][badgebrotr.services.common.types.EventQuerier] for reads and
an [EventPublisher][badgebrotr.services.common.types.EventPublisher] for
writes; [RelayClient][badgebrotr.utils.protocol.RelayClient] implements
both, and tests substitute in-memory fakes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable


if TYPE_CHECKING:
    from collections.abc import Sequence

    from badgebrotr.models.event import Event
    from badgebrotr.models.filter import EventFilter


@runtime_checkable
class EventQuerier(Protocol):
    """Fetches events matching any of a set of filters.

    Implementations return each event at most once and may return an
    empty list when relays are unreachable.
    """

    async def query(self, filters: Sequence[EventFilter]) -> list[Event]: ...


@runtime_checkable
class EventPublisher(Protocol):
    """Signs and broadcasts an event built from a kind and tag list.

    Implementations raise ``OSError``, ``TimeoutError`` or ``ValueError``
    on failure and return the signed event on success.
    """

    async def publish(
        self, kind: int, tags: Sequence[Sequence[str]], content: str = ""
    ) -> Event: ...
