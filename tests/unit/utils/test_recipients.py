"""
Unit tests for utils.recipients module.

Tests:
- normalize_pubkey() for hex and npub keys
- parse_recipients() splitting, normalization and deduplication
"""

import pytest
from nostr_sdk import Keys

from badgebrotr.utils.recipients import normalize_pubkey, parse_recipients


@pytest.fixture
def pubkeys() -> list:
    """Three freshly generated public keys."""
    return [Keys.generate().public_key() for _ in range(3)]


class TestNormalizePubkey:
    """Hex and bech32 inputs."""

    def test_hex(self, pubkeys) -> None:
        assert normalize_pubkey(pubkeys[0].to_hex()) == pubkeys[0].to_hex()

    def test_npub(self, pubkeys) -> None:
        assert normalize_pubkey(pubkeys[0].to_bech32()) == pubkeys[0].to_hex()

    @pytest.mark.parametrize("value", ["", "npub1invalid", "zz" * 32, "abc"])
    def test_invalid(self, value) -> None:
        with pytest.raises(ValueError, match="invalid public key"):
            normalize_pubkey(value)


class TestParseRecipients:
    """Free-text recipient lists."""

    def test_mixed_separators(self, pubkeys) -> None:
        text = f"{pubkeys[0].to_hex()}, {pubkeys[1].to_bech32()}\n\t{pubkeys[2].to_hex()}"
        assert parse_recipients(text) == [pk.to_hex() for pk in pubkeys]

    def test_deduplicates_across_formats(self, pubkeys) -> None:
        text = f"{pubkeys[0].to_bech32()} {pubkeys[1].to_hex()} {pubkeys[0].to_hex()}"
        assert parse_recipients(text) == [pubkeys[0].to_hex(), pubkeys[1].to_hex()]

    @pytest.mark.parametrize("text", ["", "   ", ",,\n"])
    def test_empty(self, text) -> None:
        assert parse_recipients(text) == []

    def test_invalid_entry(self, pubkeys) -> None:
        with pytest.raises(ValueError):
            parse_recipients(f"{pubkeys[0].to_hex()} not-a-key")
