"""Helpers that depend on ``nostr_sdk``.

Attributes:
    keys: Load signing keys from environment variables.
    recipients: Parse free-text recipient lists into hex public keys.
    protocol: Relay client for querying and publishing events.
"""

from .keys import ENV_PRIVATE_KEY, load_keys_from_env
from .protocol import RelayClient, build_event, to_nostr_filter
from .recipients import normalize_pubkey, parse_recipients


__all__ = [
    "ENV_PRIVATE_KEY",
    "RelayClient",
    "build_event",
    "load_keys_from_env",
    "normalize_pubkey",
    "parse_recipients",
    "to_nostr_filter",
]
