"""Tag and event builders for the NIP-58 event kinds.

The ``*_tags`` functions produce the bit-exact tag lists that are
persisted on the wire:

```text
30009  [["d", slug], ["name", n]?, ["description", d]?, ["image", "url[ WxH]"]?, ["thumb", "url[ WxH]"]?]
8      [["a", "30009:<issuer>:<slug>"], ["p", recipient], ...]
30008  [["d", "profile_badges"], ["a", ref], ["e", award_id], ...]
```

See Also:
    [BadgeActions][badgebrotr.services.badges.actions.BadgeActions]:
        Publishes events built from these tag lists.
    [ProfileBadgesEditor][badgebrotr.services.badges.editor.ProfileBadgesEditor]:
        Persists curation edits via
        [profile_badges_tags()][badgebrotr.nips.nip58.event_builders.profile_badges_tags].
"""

from __future__ import annotations

from collections.abc import Iterable

from badgebrotr.models.badge import format_image_value
from badgebrotr.models.constants import PROFILE_BADGES_IDENTIFIER
from badgebrotr.models.reference import ReferencePair, definition_reference


# =============================================================================
# Kind 30009
# =============================================================================


def definition_tags(  # noqa: PLR0913
    slug: str,
    *,
    name: str | None = None,
    description: str | None = None,
    image: str | None = None,
    image_width: int | None = None,
    image_height: int | None = None,
    thumb: str | None = None,
    thumb_width: int | None = None,
    thumb_height: int | None = None,
) -> list[list[str]]:
    """Build the tags of a kind 30009 badge definition."""
    tags = [["d", slug]]
    if name:
        tags.append(["name", name])
    if description:
        tags.append(["description", description])
    if image:
        tags.append(["image", format_image_value(image, image_width, image_height)])
    if thumb:
        tags.append(["thumb", format_image_value(thumb, thumb_width, thumb_height)])
    return tags


# =============================================================================
# Kind 8
# =============================================================================


def award_tags(issuer_pubkey: str, slug: str, recipients: Iterable[str]) -> list[list[str]]:
    """Build the tags of a kind 8 badge award.

    Recipients are deduplicated, preserving order.
    """
    tags = [["a", definition_reference(issuer_pubkey, slug)]]
    tags.extend(["p", recipient] for recipient in dict.fromkeys(recipients))
    return tags


# =============================================================================
# Kind 30008
# =============================================================================


def profile_badges_tags(pairs: Iterable[ReferencePair]) -> list[list[str]]:
    """Build the tags of a kind 30008 profile badges list.

    Each pair contributes an ``a`` tag immediately followed by its ``e`` tag.
    """
    tags = [["d", PROFILE_BADGES_IDENTIFIER]]
    for pair in pairs:
        tags.append(["a", pair.a_ref])
        tags.append(["e", pair.e_ref])
    return tags


__all__ = [
    "award_tags",
    "definition_tags",
    "profile_badges_tags",
]
