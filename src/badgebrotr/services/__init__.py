"""Badge services: read views, publishing actions, and curation.

Attributes:
    common: Collaborator protocols shared by the badge services.
    badges: [BadgeQueries][badgebrotr.services.badges.queries.BadgeQueries],
        [BadgeActions][badgebrotr.services.badges.actions.BadgeActions] and
        [ProfileBadgesEditor][badgebrotr.services.badges.editor.ProfileBadgesEditor].
"""

from .badges import (
    AppConfig,
    BadgeActions,
    BadgeDefinitionParams,
    BadgeQueries,
    BadgesConfig,
    ProfileBadgesEditor,
    RelayClientConfig,
)
from .common import EventPublisher, EventQuerier


__all__ = [
    "AppConfig",
    "BadgeActions",
    "BadgeDefinitionParams",
    "BadgeQueries",
    "BadgesConfig",
    "EventPublisher",
    "EventQuerier",
    "ProfileBadgesEditor",
    "RelayClientConfig",
]
