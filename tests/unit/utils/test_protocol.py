"""
Unit tests for utils.protocol module.

Tests:
- to_nostr_filter() - EventFilter conversion and unusable criteria
- RelayClient.query() - verification, conversion, dedup and timeouts
- RelayClient.publish() - signing, relay acceptance and errors
- RelayClient lifecycle - connect failures and idempotent close
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from nostr_sdk import Filter, Keys

from badgebrotr.models import Event, EventFilter
from badgebrotr.utils.protocol import RelayClient, to_nostr_filter


PUBKEY = Keys.generate().public_key().to_hex()


def _nostr_event(event_id: str, *, valid: bool = True) -> MagicMock:
    event = MagicMock()
    event.verify.return_value = valid
    event.id.return_value.to_hex.return_value = event_id
    event.author.return_value.to_hex.return_value = PUBKEY
    event.kind.return_value.as_u16.return_value = 8
    event.created_at.return_value.as_secs.return_value = 1700000000
    event.tags.return_value.to_vec.return_value = []
    event.content.return_value = ""
    event.signature.return_value = "ef" * 64
    return event


def _connected(client: RelayClient) -> MagicMock:
    inner = MagicMock()
    inner.fetch_events = AsyncMock()
    inner.send_event = AsyncMock()
    inner.shutdown = AsyncMock()
    client._client = inner
    return inner


# =============================================================================
# to_nostr_filter() Tests
# =============================================================================


class TestToNostrFilter:
    """EventFilter to nostr_sdk.Filter conversion."""

    def test_full_filter(self) -> None:
        event_filter = EventFilter(
            kinds=[30009], authors=[PUBKEY], tags={"d": ["og", "vip"]}, limit=10
        )
        assert isinstance(to_nostr_filter(event_filter), Filter)

    def test_empty_filter(self) -> None:
        assert isinstance(to_nostr_filter(EventFilter()), Filter)

    def test_unparsable_ids_only(self) -> None:
        assert to_nostr_filter(EventFilter(ids=["not-an-id"])) is None

    def test_unparsable_authors_only(self) -> None:
        assert to_nostr_filter(EventFilter(authors=["not-a-key"])) is None

    def test_unparsable_author_skipped(self) -> None:
        assert to_nostr_filter(EventFilter(authors=["not-a-key", PUBKEY])) is not None

    def test_empty_tag_values(self) -> None:
        assert to_nostr_filter(EventFilter(tags={"p": []})) is None

    def test_non_letter_tag(self) -> None:
        assert to_nostr_filter(EventFilter(tags={"1": ["x"]})) is None


# =============================================================================
# RelayClient.query() Tests
# =============================================================================


class TestQuery:
    """Event fetching."""

    async def test_converts_and_deduplicates(self) -> None:
        client = RelayClient(["wss://relay.example.com"])
        inner = _connected(client)
        first = MagicMock()
        first.to_vec.return_value = [_nostr_event("a" * 64), _nostr_event("b" * 64)]
        second = MagicMock()
        second.to_vec.return_value = [_nostr_event("a" * 64)]
        inner.fetch_events.side_effect = [first, second]

        events = await client.query([EventFilter(kinds=[8]), EventFilter(kinds=[8], limit=1)])

        assert [e.id for e in events] == ["a" * 64, "b" * 64]
        assert all(isinstance(e, Event) for e in events)

    async def test_skips_unverified(self) -> None:
        client = RelayClient(["wss://relay.example.com"])
        inner = _connected(client)
        fetched = MagicMock()
        fetched.to_vec.return_value = [_nostr_event("a" * 64, valid=False)]
        inner.fetch_events.return_value = fetched

        assert await client.query([EventFilter(kinds=[8])]) == []

    async def test_timeout_yields_nothing(self) -> None:
        client = RelayClient(["wss://relay.example.com"])
        inner = _connected(client)
        inner.fetch_events.side_effect = TimeoutError

        assert await client.query([EventFilter(kinds=[8])]) == []

    async def test_unusable_filter_not_sent(self) -> None:
        client = RelayClient(["wss://relay.example.com"])
        inner = _connected(client)

        assert await client.query([EventFilter(ids=["bad"])]) == []
        inner.fetch_events.assert_not_called()

    async def test_not_connected(self) -> None:
        with pytest.raises(OSError, match="not connected"):
            await RelayClient(["wss://relay.example.com"]).query([EventFilter()])


# =============================================================================
# RelayClient.publish() Tests
# =============================================================================


class TestPublish:
    """Signing and broadcasting."""

    async def test_requires_keys(self) -> None:
        client = RelayClient(["wss://relay.example.com"])
        _connected(client)
        with pytest.raises(ValueError, match="signing keys"):
            await client.publish(8, [["p", PUBKEY]])

    async def test_success(self) -> None:
        client = RelayClient(["wss://relay.example.com"], keys=Keys.generate())
        inner = _connected(client)
        signed = _nostr_event("c" * 64)
        inner.send_event.return_value = MagicMock(success=["wss://relay.example.com"], failed={})

        with patch("badgebrotr.utils.protocol.build_event") as build:
            build.return_value.sign_with_keys.return_value = signed
            event = await client.publish(8, [["p", PUBKEY]])

        build.assert_called_once_with(8, [["p", PUBKEY]], "")
        inner.send_event.assert_awaited_once_with(signed)
        assert event.id == "c" * 64

    async def test_no_relay_accepted(self) -> None:
        client = RelayClient(["wss://relay.example.com"], keys=Keys.generate())
        inner = _connected(client)
        inner.send_event.return_value = MagicMock(
            success=[], failed={"wss://relay.example.com": "blocked"}
        )

        with patch("badgebrotr.utils.protocol.build_event") as build:
            build.return_value.sign_with_keys.return_value = _nostr_event("c" * 64)
            with pytest.raises(OSError, match="blocked"):
                await client.publish(8, [["p", PUBKEY]])


# =============================================================================
# Lifecycle Tests
# =============================================================================


class TestLifecycle:
    """connect() and close()."""

    async def test_no_relay_added(self) -> None:
        inner = MagicMock()
        inner.add_relay = AsyncMock(side_effect=RuntimeError("bad url"))
        with patch("badgebrotr.utils.protocol.ClientBuilder") as builder:
            builder.return_value.build.return_value = inner
            client = RelayClient(["wss://relay.example.com"])
            with pytest.raises(OSError, match="no relay"):
                await client.connect()
        assert client.is_connected is False

    async def test_context_manager(self) -> None:
        inner = MagicMock()
        inner.add_relay = AsyncMock()
        inner.connect = AsyncMock()
        inner.wait_for_connection = AsyncMock()
        inner.shutdown = AsyncMock()
        with patch("badgebrotr.utils.protocol.ClientBuilder") as builder:
            builder.return_value.build.return_value = inner
            async with RelayClient(["wss://relay.example.com"]) as client:
                assert client.is_connected is True

        inner.shutdown.assert_awaited_once()
        assert client.is_connected is False

    async def test_close_suppresses_shutdown_errors(self) -> None:
        client = RelayClient(["wss://relay.example.com"])
        inner = _connected(client)
        inner.shutdown.side_effect = RuntimeError("ffi")

        await client.close()
        await client.close()

        assert client.is_connected is False
