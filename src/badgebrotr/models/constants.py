"""Shared constants for the models layer.

Defines the NIP-58 event kinds and fixed tag values used across the
models, nips, and services layers. Placing them here avoids circular
dependencies between those layers.

See Also:
    [badgebrotr.models.reference][]: Uses
        [EventKind.BADGE_DEFINITION][badgebrotr.models.constants.EventKind]
        to recognise definition references.
    [badgebrotr.nips.nip58.classify][]: Admission predicates keyed on these
        kinds.
"""

from __future__ import annotations

from enum import IntEnum


class EventKind(IntEnum):
    """Nostr event kinds taking part in NIP-58 badges.

    Attributes:
        BADGE_AWARD: Kind 8 -- a signed statement awarding one badge
            definition to one or more recipients. Immutable.
        PROFILE_BADGES: Kind 30008 -- parameterized replaceable list of the
            badges a user has accepted, in display order.
        BADGE_DEFINITION: Kind 30009 -- parameterized replaceable badge
            definition, identified by its issuer and ``d`` tag.

    See Also:
        [Event][badgebrotr.models.event.Event]: The event model carrying
            these kinds.
        ``EVENT_KIND_MAX``: Maximum valid event kind value (65535).
    """

    BADGE_AWARD = 8
    PROFILE_BADGES = 30_008
    BADGE_DEFINITION = 30_009


EVENT_KIND_MAX = 65_535

# Fixed ``d`` tag value of the kind 30008 profile badges list
PROFILE_BADGES_IDENTIFIER = "profile_badges"
