"""
User badge view reconciliation.

Joins the award events naming a user, the badge definitions those awards
reference, and the user's profile badges list into one ordered,
deduplicated, acceptance-flagged sequence of
[UserBadge][badgebrotr.models.badge.UserBadge] records.

Everything here is synchronous and pure: the caller fetches the raw events
(see [BadgeQueries][badgebrotr.services.badges.queries.BadgeQueries]) and
hands them in. The view is best-effort: malformed events and unresolved
references are dropped, never raised. Callers wanting to know what was
dropped pass a [ViewStats][badgebrotr.nips.nip58.view.ViewStats].

Sort contract (relied on by external consumers, reproduced exactly):

1. Accepted badges before unaccepted ones.
2. Accepted badges by ascending ``order``.
3. Unaccepted badges by descending ``issued_at`` (missing counts as 0).
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, fields, replace
from typing import TYPE_CHECKING

from badgebrotr.models.badge import Badge, UserBadge
from badgebrotr.models.reference import BadgeReference, decode_reference

from .assemble import assemble_badge
from .classify import is_badge_award, is_badge_definition, is_profile_badges
from .pairing import pair_references
from .tags import all_tag_values, first_tag_value


if TYPE_CHECKING:
    from badgebrotr.models.event import Event


logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ViewStats:
    """Counters of the events a reconciliation pass dropped.

    Attributes:
        awards_invalid: Events failing the award predicate.
        awards_not_addressed: Awards not naming the subject in a ``p`` tag.
        awards_duplicate: Repeated award event ids.
        references_invalid: Awards whose ``a`` tag does not decode to a
            kind 30009 reference.
        definitions_invalid: Events failing the definition predicate.
        definitions_unresolved: Awards whose definition was not found.
    """

    awards_invalid: int = 0
    awards_not_addressed: int = 0
    awards_duplicate: int = 0
    references_invalid: int = 0
    definitions_invalid: int = 0
    definitions_unresolved: int = 0

    @property
    def dropped(self) -> int:
        """Total number of dropped events."""
        return (
            self.awards_invalid
            + self.awards_not_addressed
            + self.awards_duplicate
            + self.references_invalid
            + self.definitions_invalid
            + self.definitions_unresolved
        )


# =============================================================================
# Sorting
# =============================================================================


def user_badge_sort_key(badge: UserBadge) -> tuple[int, int, int]:
    """Sort key implementing the view's total order."""
    if badge.accepted:
        return (0, badge.order, 0)
    return (1, 0, -(badge.issued_at or 0))


def sort_user_badges(badges: Iterable[UserBadge]) -> list[UserBadge]:
    """Return *badges* in view order. Stable and idempotent."""
    return sorted(badges, key=user_badge_sort_key)


# =============================================================================
# Award resolution
# =============================================================================


def award_reference(award: Event) -> BadgeReference | None:
    """Decode an award's first ``a`` tag if it references a badge definition."""
    a_tag = first_tag_value(award, "a")
    if a_tag is None:
        return None
    ref = decode_reference(a_tag)
    if ref is None or not ref.is_badge_definition:
        return None
    return ref


def group_references_by_issuer(awards: Iterable[Event]) -> dict[str, list[str]]:
    """Group the definition slugs referenced by *awards* by issuer pubkey.

    Slugs are deduplicated per issuer, preserving first-seen order. Awards
    whose reference does not decode to a kind 30009 identifier are skipped.
    Used to batch definition queries: one query per issuer.
    """
    groups: dict[str, list[str]] = {}
    for award in awards:
        ref = award_reference(award)
        if ref is None:
            continue
        slugs = groups.setdefault(ref.pubkey, [])
        if ref.slug not in slugs:
            slugs.append(ref.slug)
    return groups


def _index_definitions(
    definitions: Iterable[Event], stats: ViewStats
) -> dict[tuple[str, str], Event]:
    """Index valid definitions by ``(pubkey, d)``, keeping the newest version."""
    index: dict[tuple[str, str], Event] = {}
    for definition in definitions:
        if not is_badge_definition(definition):
            stats.definitions_invalid += 1
            logger.debug("definition_dropped id=%s reason=invalid", definition.id)
            continue
        slug = first_tag_value(definition, "d") or ""
        key = (definition.pubkey, slug)
        current = index.get(key)
        if current is None or definition.created_at > current.created_at:
            index[key] = definition
    return index


def resolve_awarded_badges(
    subject_pubkey: str,
    awards: Iterable[Event],
    definitions: Iterable[Event],
    *,
    stats: ViewStats | None = None,
) -> list[Badge]:
    """Join awards naming *subject_pubkey* with the definitions they reference.

    Args:
        subject_pubkey: The recipient whose badges are being resolved.
        awards: Candidate award events (typically a ``#p`` query result).
        definitions: Candidate definition events.
        stats: Optional counters of dropped events.

    Returns:
        One [Badge][badgebrotr.models.badge.Badge] per resolvable award, in
        award order, with ``award_event_id`` set to the award's id.
    """
    stats = stats if stats is not None else ViewStats()
    index = _index_definitions(definitions, stats)

    badges: list[Badge] = []
    seen: set[str] = set()
    for award in awards:
        if not is_badge_award(award):
            stats.awards_invalid += 1
            logger.debug("award_dropped id=%s reason=invalid", award.id)
            continue
        if subject_pubkey not in all_tag_values(award, "p"):
            stats.awards_not_addressed += 1
            logger.debug("award_dropped id=%s reason=not_addressed", award.id)
            continue
        if award.id in seen:
            stats.awards_duplicate += 1
            continue
        seen.add(award.id)

        ref = award_reference(award)
        if ref is None:
            stats.references_invalid += 1
            logger.debug("award_dropped id=%s reason=invalid_reference", award.id)
            continue

        definition = index.get((ref.pubkey, ref.slug))
        if definition is None:
            stats.definitions_unresolved += 1
            logger.debug("award_dropped id=%s reason=unresolved_definition", award.id)
            continue

        badge = assemble_badge(definition, award)
        if badge is None:
            stats.definitions_unresolved += 1
            continue
        badges.append(replace(badge, award_event_id=award.id))

    return badges


# =============================================================================
# Profile list
# =============================================================================


def latest_profile_badges(
    events: Iterable[Event], subject_pubkey: str | None = None
) -> Event | None:
    """Return the current profile badges list among *events*.

    Only events passing
    [is_profile_badges()][badgebrotr.nips.nip58.classify.is_profile_badges]
    (and authored by *subject_pubkey*, when given) are considered. The
    highest ``created_at`` wins; on a tie the first one seen is kept.
    """
    latest: Event | None = None
    for event in events:
        if not is_profile_badges(event):
            continue
        if subject_pubkey is not None and event.pubkey != subject_pubkey:
            continue
        if latest is None or event.created_at > latest.created_at:
            latest = event
    return latest


def apply_profile_badges(badges: Iterable[Badge], profile_badges: Event | None) -> list[UserBadge]:
    """Flag *badges* as accepted and ordered according to *profile_badges*.

    A badge is accepted when some pair's ``e`` reference equals its
    ``award_event_id``; its ``order`` is that pair's index (the last one
    when the award is listed more than once). The result is sorted.
    """
    positions: dict[str, int] = {}
    if profile_badges is not None:
        for index, pair in enumerate(pair_references(profile_badges)):
            positions[pair.e_ref] = index

    user_badges = []
    for badge in badges:
        position = positions.get(badge.award_event_id) if badge.award_event_id else None
        user_badges.append(
            UserBadge(
                **{f.name: getattr(badge, f.name) for f in fields(Badge)},
                accepted=position is not None,
                order=position if position is not None else 0,
            )
        )
    return sort_user_badges(user_badges)


def build_user_badges(
    subject_pubkey: str,
    awards: Iterable[Event],
    definitions: Iterable[Event],
    profile_badges: Event | None = None,
    *,
    stats: ViewStats | None = None,
) -> list[UserBadge]:
    """Build the ordered badge view of *subject_pubkey*.

    Args:
        subject_pubkey: The user whose view is built.
        awards: Award events naming the user.
        definitions: Definition events referenced by those awards.
        profile_badges: The user's current profile badges list, if any.
        stats: Optional counters of dropped events.

    Returns:
        Deduplicated [UserBadge][badgebrotr.models.badge.UserBadge] records
        in view order.
    """
    badges = resolve_awarded_badges(subject_pubkey, awards, definitions, stats=stats)
    return apply_profile_badges(badges, profile_badges)
