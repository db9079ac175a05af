"""Badge assembly from a definition event and an optional award event."""

from __future__ import annotations

from typing import TYPE_CHECKING

from badgebrotr.models.badge import Badge

from .tags import first_tag_value


if TYPE_CHECKING:
    from badgebrotr.models.event import Event


def assemble_badge(definition: Event, award: Event | None = None) -> Badge | None:
    """Combine a badge definition and an optional award into a [Badge][badgebrotr.models.badge.Badge].

    Args:
        definition: Kind 30009 definition event.
        award: Kind 8 award event granting the definition, if any.

    Returns:
        The assembled badge, or ``None`` when the definition carries no
        ``d`` value (an unusable definition). ``award_event_id`` is left
        unset; the view builder fills it in.
    """
    badge_id = first_tag_value(definition, "d")
    if not badge_id:
        return None

    return Badge(
        id=definition.id,
        issuer_pubkey=definition.pubkey,
        definition_id=definition.id,
        badge_id=badge_id,
        name=first_tag_value(definition, "name"),
        description=first_tag_value(definition, "description"),
        image=first_tag_value(definition, "image"),
        thumb=first_tag_value(definition, "thumb"),
        award_id=award.id if award is not None else None,
        issued_at=award.created_at if award is not None else None,
    )
