"""Pure frozen dataclasses with zero I/O for NIP-58 badges.

The models layer is the foundation of the package. It has **no dependencies**
on any other badgebrotr package -- only the Python standard library. Every
model is immutable; validation happens in ``__post_init__`` so invalid
instances never escape the constructor.

Attributes:
    Event: Raw Nostr event as received from a relay.
    EventFilter: Transport-neutral relay query filter.
    Badge: Badge definition joined with an optional award.
    UserBadge: Badge plus the recipient's acceptance flag and order.
    BadgeReference: Decoded ``kind:pubkey:slug`` identifier.
    ReferencePair: ``(a, e)`` entry of a profile badges list.
    EventKind: The three NIP-58 event kinds.

See Also:
    [badgebrotr.models.reference][]: Identifier codec.
    [badgebrotr.models.badge][]: Derived badge records.
    [badgebrotr.nips.nip58][]: Reconciliation functions over these models.
"""

from .badge import Badge, ImageDimensions, UserBadge, format_image_value, split_image_value
from .constants import EVENT_KIND_MAX, PROFILE_BADGES_IDENTIFIER, EventKind
from .event import Event
from .filter import EventFilter
from .reference import (
    BadgeReference,
    ReferencePair,
    decode_reference,
    definition_reference,
    encode_reference,
)


__all__ = [
    "EVENT_KIND_MAX",
    "PROFILE_BADGES_IDENTIFIER",
    "Badge",
    "BadgeReference",
    "Event",
    "EventFilter",
    "EventKind",
    "ImageDimensions",
    "ReferencePair",
    "UserBadge",
    "decode_reference",
    "definition_reference",
    "encode_reference",
    "format_image_value",
    "split_image_value",
]
