"""Recipient list parsing for badge awards.

Users enter recipients as free text: hex public keys or ``npub1...``
bech32 keys, separated by whitespace and/or commas. Every key is
normalized to lowercase hex, the form carried by ``p`` tags.
"""

from __future__ import annotations

import re

from nostr_sdk import PublicKey


_SEPARATORS = re.compile(r"[\s,]+")


def normalize_pubkey(value: str) -> str:
    """Return *value* (hex or ``npub1...``) as a hex public key.

    Raises:
        ValueError: If *value* is not a valid public key.
    """
    try:
        return PublicKey.parse(value).to_hex()
    except Exception as e:  # nostr-sdk FFI raises its own error type
        raise ValueError(f"invalid public key: {value!r}") from e


def parse_recipients(text: str) -> list[str]:
    """Split *text* into hex public keys, deduplicated in input order.

    Returns an empty list when *text* holds no entries.

    Raises:
        ValueError: If any entry is not a valid public key.
    """
    entries = [entry for entry in _SEPARATORS.split(text.strip()) if entry]
    return list(dict.fromkeys(normalize_pubkey(entry) for entry in entries))
