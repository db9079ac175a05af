"""Nostr relay client operations for badgebrotr.

[RelayClient][badgebrotr.utils.protocol.RelayClient] wraps one
``nostr_sdk.Client`` connected to a fixed set of relays and exposes the two
operations the badge services need: query by
[EventFilter][badgebrotr.models.filter.EventFilter] and sign-and-publish.

Errors are reported with standard exceptions (``OSError``,
``TimeoutError``, ``ValueError``); the services layer translates them into
the badgebrotr hierarchy.

Note:
    Query results are best-effort: a filter that times out contributes
    nothing and the remaining filters still run, and an empty result is
    never an error. Publishing succeeds when at least one relay accepts
    the event.

Examples:
    ```python
    from badgebrotr.models import EventFilter
    from badgebrotr.utils.protocol import RelayClient

    async with RelayClient(["wss://relay.damus.io"], keys=keys) as client:
        events = await client.query([EventFilter(kinds=[30009], limit=10)])
        event = await client.publish(8, [["a", ref], ["p", recipient]])
    ```
"""

from __future__ import annotations

import contextlib
import logging
from collections.abc import Callable, Sequence
from datetime import timedelta
from typing import TYPE_CHECKING, Any

from nostr_sdk import (
    Alphabet,
    Client,
    ClientBuilder,
    EventBuilder,
    EventId,
    Filter,
    Kind,
    NostrSigner,
    PublicKey,
    RelayUrl,
    SingleLetterTag,
    Tag,
)

from badgebrotr.models.event import Event


if TYPE_CHECKING:
    from types import TracebackType

    from nostr_sdk import Keys

    from badgebrotr.models.filter import EventFilter


logger = logging.getLogger(__name__)

DEFAULT_CONNECT_TIMEOUT = 10.0
DEFAULT_FETCH_TIMEOUT = 3.0


# =============================================================================
# Conversion helpers
# =============================================================================


def _parse_each(values: Sequence[str], parser: Callable[[str], Any], field: str) -> list[Any]:
    parsed = []
    for value in values:
        try:
            parsed.append(parser(value))
        except Exception:  # noqa: BLE001  # nostr-sdk FFI raises its own error type
            logger.debug("filter_value_skipped field=%s value=%s", field, value)
    return parsed


def to_nostr_filter(event_filter: EventFilter) -> Filter | None:
    """Convert an [EventFilter][badgebrotr.models.filter.EventFilter] to ``nostr_sdk.Filter``.

    Unparsable ids and authors are skipped. Returns ``None`` when a
    criterion is left with no usable value: such a filter matches nothing.
    """
    nostr_filter = Filter()

    if event_filter.kinds is not None:
        nostr_filter = nostr_filter.kinds([Kind(kind) for kind in event_filter.kinds])

    if event_filter.ids is not None:
        ids = _parse_each(event_filter.ids, EventId.parse, "ids")
        if not ids:
            return None
        nostr_filter = nostr_filter.ids(ids)

    if event_filter.authors is not None:
        authors = _parse_each(event_filter.authors, PublicKey.parse, "authors")
        if not authors:
            return None
        nostr_filter = nostr_filter.authors(authors)

    for name, values in event_filter.tags.items():
        if not values:
            return None
        letter = getattr(Alphabet, name.upper(), None)
        if letter is None:
            return None
        tag = (
            SingleLetterTag.lowercase(letter)
            if name.islower()
            else SingleLetterTag.uppercase(letter)
        )
        for value in values:
            nostr_filter = nostr_filter.custom_tag(tag, value)

    if event_filter.limit is not None:
        nostr_filter = nostr_filter.limit(event_filter.limit)

    return nostr_filter


def build_event(kind: int, tags: Sequence[Sequence[str]], content: str = "") -> EventBuilder:
    """Wrap a tag list into an unsigned ``nostr_sdk.EventBuilder``."""
    return EventBuilder(Kind(kind), content).tags([Tag.parse(list(tag)) for tag in tags])


# =============================================================================
# Relay client
# =============================================================================


class RelayClient:
    """Query and publish events through a fixed set of relays.

    Use as an async context manager: relays are connected on entry and
    the client is shut down on exit.

    Args:
        relays: WebSocket relay URLs.
        keys: Signing keys. ``None`` gives a read-only client whose
            [publish()][badgebrotr.utils.protocol.RelayClient.publish] raises.
        connect_timeout: Seconds to wait for relay connections.
        fetch_timeout: Seconds each query may wait for relays to answer.
    """

    def __init__(
        self,
        relays: Sequence[str],
        keys: Keys | None = None,
        *,
        connect_timeout: float = DEFAULT_CONNECT_TIMEOUT,
        fetch_timeout: float = DEFAULT_FETCH_TIMEOUT,
    ) -> None:
        self._relays = list(relays)
        self._keys = keys
        self._connect_timeout = connect_timeout
        self._fetch_timeout = fetch_timeout
        self._client: Client | None = None

    @property
    def relays(self) -> list[str]:
        return list(self._relays)

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    async def connect(self) -> None:
        """Add the relays and wait for connections.

        Raises:
            OSError: If none of the relays could be added.
        """
        if self._client is not None:
            return

        builder = ClientBuilder()
        if self._keys is not None:
            builder = builder.signer(NostrSigner.keys(self._keys))
        client = builder.build()

        added = 0
        for url in self._relays:
            try:
                await client.add_relay(RelayUrl.parse(url))
                added += 1
            except Exception as e:  # noqa: BLE001  # nostr-sdk FFI raises its own error type
                logger.warning("relay_add_failed relay=%s error=%s", url, e)
        if not added:
            raise OSError("no relay could be added")

        await client.connect()
        await client.wait_for_connection(timedelta(seconds=self._connect_timeout))
        self._client = client
        logger.debug("relays_connected count=%s", added)

    async def close(self) -> None:
        """Shut the client down. Idempotent."""
        client, self._client = self._client, None
        if client is None:
            return
        # nostr-sdk Rust FFI can raise arbitrary exception types during shutdown.
        with contextlib.suppress(Exception):
            await client.shutdown()

    def _require_client(self) -> Client:
        if self._client is None:
            raise OSError("relay client is not connected")
        return self._client

    async def query(self, filters: Sequence[EventFilter]) -> list[Event]:
        """Fetch signature-verified events matching any of *filters*.

        Results are deduplicated by event id.

        Raises:
            OSError: If the client is not connected or the relays failed.
        """
        client = self._require_client()
        timeout = timedelta(seconds=self._fetch_timeout)

        events: dict[str, Event] = {}
        for event_filter in filters:
            nostr_filter = to_nostr_filter(event_filter)
            if nostr_filter is None:
                continue
            try:
                fetched = await client.fetch_events(nostr_filter, timeout)
            except TimeoutError:
                logger.warning("query_timeout filter=%s", event_filter.to_dict())
                continue

            for nostr_event in fetched.to_vec():
                try:
                    if not nostr_event.verify():
                        continue
                    event = Event.from_nostr(nostr_event)
                except (ValueError, TypeError, OverflowError):
                    continue
                events.setdefault(event.id, event)

        return list(events.values())

    async def publish(self, kind: int, tags: Sequence[Sequence[str]], content: str = "") -> Event:
        """Sign an event with the client's keys and send it to every relay.

        Returns:
            The signed [Event][badgebrotr.models.event.Event].

        Raises:
            ValueError: If no keys are configured.
            OSError: If no relay accepted the event.
            TimeoutError: If sending timed out.
        """
        if self._keys is None:
            raise ValueError("cannot publish without signing keys")
        client = self._require_client()

        signed = build_event(kind, tags, content).sign_with_keys(self._keys)
        output = await client.send_event(signed)
        event = Event.from_nostr(signed)

        if not output.success:
            failures = {str(url): reason for url, reason in output.failed.items()}
            raise OSError(f"no relay accepted event {event.id}: {failures}")

        logger.debug(
            "event_published kind=%s id=%s accepted=%s rejected=%s",
            kind,
            event.id,
            len(output.success),
            len(output.failed),
        )
        return event

    async def __aenter__(self) -> RelayClient:
        """Connect on context entry."""
        await self.connect()
        return self

    async def __aexit__(
        self,
        _exc_type: type[BaseException] | None,
        _exc_val: BaseException | None,
        _exc_tb: TracebackType | None,
    ) -> None:
        """Shut down on context exit."""
        await self.close()
