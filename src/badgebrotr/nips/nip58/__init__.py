"""NIP-58 badges: classification, assembly, pairing, and view reconciliation.

Data flows strictly upward through this package:

```text
raw events -> classify -> pairing / assemble -> view -> event_builders
```

Attributes:
    tags: Tag list projections (first, all, positional).
    classify: Structural admission predicates per event kind.
    assemble: Definition (+ award) to [Badge][badgebrotr.models.badge.Badge].
    pairing: Profile list ``(a, e)`` pair extraction.
    view: Per-user join, acceptance flags, and the view sort order.
    event_builders: Wire-exact tag lists for the three event kinds.

Note:
    Everything here is pure and synchronous, with no ``nostr_sdk``
    dependency; signing and transport live in
    [badgebrotr.utils.protocol][].
"""

from .assemble import assemble_badge
from .classify import is_badge_award, is_badge_definition, is_profile_badges
from .event_builders import award_tags, definition_tags, profile_badges_tags
from .pairing import pair_references
from .tags import all_tag_values, first_tag_value, has_tag, tag_values_at
from .view import (
    ViewStats,
    apply_profile_badges,
    award_reference,
    build_user_badges,
    group_references_by_issuer,
    latest_profile_badges,
    resolve_awarded_badges,
    sort_user_badges,
    user_badge_sort_key,
)


__all__ = [
    "ViewStats",
    "all_tag_values",
    "apply_profile_badges",
    "assemble_badge",
    "award_reference",
    "award_tags",
    "build_user_badges",
    "definition_tags",
    "first_tag_value",
    "group_references_by_issuer",
    "has_tag",
    "is_badge_award",
    "is_badge_definition",
    "is_profile_badges",
    "latest_profile_badges",
    "pair_references",
    "profile_badges_tags",
    "resolve_awarded_badges",
    "sort_user_badges",
    "tag_values_at",
    "user_badge_sort_key",
]
