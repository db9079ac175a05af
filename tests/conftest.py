"""
Pytest configuration and shared fixtures for badgebrotr tests.

Provides:
- ``make_event``: factory for [Event][badgebrotr.models.event.Event] records
  with unique ids
- ``fake_relay``: in-memory relay implementing both collaborator protocols
- Sample pubkeys and NIP-58 event builders for the three badge kinds
"""

from __future__ import annotations

import asyncio
import logging
import secrets
from collections.abc import Callable, Sequence
from typing import Any

import pytest

from badgebrotr.models import Event, EventFilter, EventKind


ISSUER = "a1" * 32
SUBJECT = "b2" * 32
OTHER = "c3" * 32

BASE_TIME = 1_700_000_000


def new_event(
    *,
    kind: int,
    pubkey: str = ISSUER,
    tags: Sequence[Sequence[str]] = (),
    created_at: int = BASE_TIME,
    content: str = "",
    id: str | None = None,  # noqa: A002
) -> Event:
    """Build an event with a random hex id unless one is given."""
    return Event(
        id=id or secrets.token_hex(32),
        pubkey=pubkey,
        kind=kind,
        created_at=created_at,
        tags=tags,
        content=content,
    )


class FakeRelay:
    """In-memory relay: answers queries with ``EventFilter.matches`` and records publishes."""

    def __init__(self, events: Sequence[Event] = (), pubkey: str = SUBJECT) -> None:
        self.events: list[Event] = list(events)
        self.pubkey = pubkey
        self.queries: list[list[EventFilter]] = []
        self.published: list[Event] = []
        self.publish_error: BaseException | None = None
        self.publish_delay = 0.0
        self.query_delay = 0.0
        self.clock = BASE_TIME + 1_000

    def add(self, *events: Event) -> None:
        self.events.extend(events)

    async def query(self, filters: Sequence[EventFilter]) -> list[Event]:
        self.queries.append(list(filters))
        if self.query_delay:
            await asyncio.sleep(self.query_delay)
        found: dict[str, Event] = {}
        for event_filter in filters:
            hits = sorted(
                (event for event in self.events if event_filter.matches(event)),
                key=lambda event: event.created_at,
                reverse=True,
            )
            if event_filter.limit is not None:
                hits = hits[: event_filter.limit]
            for event in hits:
                found.setdefault(event.id, event)
        return list(found.values())

    async def publish(self, kind: int, tags: Sequence[Sequence[str]], content: str = "") -> Event:
        if self.publish_delay:
            await asyncio.sleep(self.publish_delay)
        if self.publish_error is not None:
            raise self.publish_error
        self.clock += 1
        event = new_event(
            kind=kind, pubkey=self.pubkey, tags=tags, created_at=self.clock, content=content
        )
        self.events.append(event)
        self.published.append(event)
        return event


# ============================================================================
# Logging Configuration
# ============================================================================


@pytest.fixture(scope="session", autouse=True)
def setup_logging() -> None:
    """Configure logging for tests."""
    logging.basicConfig(level=logging.DEBUG)


# ============================================================================
# Event Fixtures
# ============================================================================


@pytest.fixture
def make_event() -> Callable[..., Event]:
    """Factory for events with unique ids."""
    return new_event


@pytest.fixture
def make_definition() -> Callable[..., Event]:
    """Factory for kind 30009 badge definitions."""

    def _make(
        slug: str = "og",
        *,
        pubkey: str = ISSUER,
        created_at: int = BASE_TIME,
        **fields: Any,
    ) -> Event:
        tags = [["d", slug]]
        tags.extend([name, value] for name, value in fields.items())
        return new_event(
            kind=EventKind.BADGE_DEFINITION, pubkey=pubkey, tags=tags, created_at=created_at
        )

    return _make


@pytest.fixture
def make_award() -> Callable[..., Event]:
    """Factory for kind 8 badge awards."""

    def _make(
        slug: str = "og",
        recipients: Sequence[str] = (SUBJECT,),
        *,
        pubkey: str = ISSUER,
        created_at: int = BASE_TIME,
        a_ref: str | None = None,
    ) -> Event:
        tags = [["a", a_ref or f"30009:{pubkey}:{slug}"]]
        tags.extend(["p", recipient] for recipient in recipients)
        return new_event(
            kind=EventKind.BADGE_AWARD, pubkey=pubkey, tags=tags, created_at=created_at
        )

    return _make


@pytest.fixture
def make_profile_badges() -> Callable[..., Event]:
    """Factory for kind 30008 profile badges lists from ``(a, e)`` pairs."""

    def _make(
        pairs: Sequence[tuple[str, str]] = (),
        *,
        pubkey: str = SUBJECT,
        created_at: int = BASE_TIME,
    ) -> Event:
        tags = [["d", "profile_badges"]]
        for a_ref, e_ref in pairs:
            tags.append(["a", a_ref])
            tags.append(["e", e_ref])
        return new_event(
            kind=EventKind.PROFILE_BADGES, pubkey=pubkey, tags=tags, created_at=created_at
        )

    return _make


@pytest.fixture
def fake_relay() -> FakeRelay:
    """Empty in-memory relay signing as ``SUBJECT``."""
    return FakeRelay()
