"""Structural admission predicates for NIP-58 events.

These are the only gates between raw relay output and the reconciliation
layer. They check shape, not meaning: an award whose ``a`` tag does not
decode, or points at something other than a definition, still passes
[is_badge_award()][badgebrotr.nips.nip58.classify.is_badge_award] and is
discarded later by the view builder.

Events failing a predicate are dropped silently by consumers; malformed
events are noise, not faults.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from badgebrotr.models.constants import PROFILE_BADGES_IDENTIFIER, EventKind

from .tags import first_tag_value, has_tag


if TYPE_CHECKING:
    from badgebrotr.models.event import Event


def is_badge_definition(event: Event) -> bool:
    """Kind 30009 with a ``d`` tag."""
    return event.kind == EventKind.BADGE_DEFINITION and has_tag(event, "d")


def is_badge_award(event: Event) -> bool:
    """Kind 8 with at least one ``a`` tag and at least one ``p`` tag."""
    return event.kind == EventKind.BADGE_AWARD and has_tag(event, "a") and has_tag(event, "p")


def is_profile_badges(event: Event) -> bool:
    """Kind 30008 whose first ``d`` tag is ``profile_badges``."""
    return (
        event.kind == EventKind.PROFILE_BADGES
        and first_tag_value(event, "d") == PROFILE_BADGES_IDENTIFIER
    )
