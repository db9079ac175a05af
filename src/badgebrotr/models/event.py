"""
Immutable raw Nostr event.

Events are borrowed from the relay layer for the duration of one
reconciliation pass. [Event][badgebrotr.models.event.Event] freezes the
NIP-01 fields in a dataclass so the pure reconciliation functions in
[badgebrotr.nips.nip58][] can work on plain Python values, independently of
the ``nostr_sdk`` FFI types.

Signatures are **not** verified here; the relay layer is trusted to have
done so.

See Also:
    [badgebrotr.utils.protocol][]: Converts ``nostr_sdk.Event`` objects into
        this model via
        [from_nostr()][badgebrotr.models.event.Event.from_nostr].
    [badgebrotr.nips.nip58.tags][]: Tag projections over
        [Event.tags][badgebrotr.models.event.Event].
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ._validation import (
    freeze_tags,
    validate_int_range,
    validate_str,
    validate_str_not_empty,
    validate_timestamp,
)
from .constants import EVENT_KIND_MAX


if TYPE_CHECKING:
    from nostr_sdk import Event as NostrEvent


@dataclass(frozen=True, slots=True)
class Event:
    """Immutable Nostr event as received from a relay.

    Validation is performed eagerly at construction time so that
    malformed records never reach the reconciliation layer.

    Attributes:
        id: Event ID as a hex string.
        pubkey: Author public key as a hex string.
        kind: Integer event kind (``0..65535``).
        created_at: Unix timestamp of event creation.
        tags: Ordered tag list; each tag is a tuple of strings.
        content: Raw event content.
        sig: Schnorr signature as a hex string (not verified here).

    Raises:
        TypeError: If a field has the wrong type.
        ValueError: If ``id``/``pubkey`` is empty, ``kind`` is out of
            range, or ``created_at`` is negative.

    Examples:
        ```python
        event = Event.from_dict(
            {
                "id": "ab" * 32,
                "pubkey": "cd" * 32,
                "kind": 30009,
                "created_at": 1700000000,
                "tags": [["d", "og"], ["name", "OG"]],
                "content": "",
                "sig": "ef" * 64,
            }
        )
        event.tags[0]  # ("d", "og")
        ```
    """

    id: str
    pubkey: str
    kind: int
    created_at: int
    tags: tuple[tuple[str, ...], ...] = ()
    content: str = ""
    sig: str = ""

    def __post_init__(self) -> None:
        """Validate field types and freeze the tag list."""
        validate_str_not_empty(self.id, "id")
        validate_str_not_empty(self.pubkey, "pubkey")
        validate_int_range(self.kind, "kind", 0, EVENT_KIND_MAX)
        validate_timestamp(self.created_at, "created_at")
        validate_str(self.content, "content")
        validate_str(self.sig, "sig")
        object.__setattr__(self, "tags", freeze_tags(self.tags))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Event:
        """Build an event from its NIP-01 JSON object representation.

        Args:
            data: Mapping with ``id``, ``pubkey``, ``kind``, ``created_at``
                and optionally ``tags``, ``content`` and ``sig``.

        Raises:
            KeyError: If a required key is missing.
            TypeError: If a field has the wrong type.
            ValueError: If a field value is invalid.
        """
        return cls(
            id=data["id"],
            pubkey=data["pubkey"],
            kind=data["kind"],
            created_at=data["created_at"],
            tags=data.get("tags", ()),
            content=data.get("content", ""),
            sig=data.get("sig", ""),
        )

    @classmethod
    def from_nostr(cls, event: NostrEvent) -> Event:
        """Build an event from a ``nostr_sdk.Event``.

        Args:
            event: Signature-verified event returned by a ``nostr_sdk.Client``.
        """
        return cls(
            id=event.id().to_hex(),
            pubkey=event.author().to_hex(),
            kind=event.kind().as_u16(),
            created_at=event.created_at().as_secs(),
            tags=[list(tag.as_vec()) for tag in event.tags().to_vec()],
            content=event.content(),
            sig=event.signature(),
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the NIP-01 JSON object representation."""
        return {
            "id": self.id,
            "pubkey": self.pubkey,
            "kind": self.kind,
            "created_at": self.created_at,
            "tags": [list(tag) for tag in self.tags],
            "content": self.content,
            "sig": self.sig,
        }
