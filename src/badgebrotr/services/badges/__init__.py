"""NIP-58 badge services.

See Also:
    [BadgeQueries][badgebrotr.services.badges.queries.BadgeQueries]: Read views.
    [BadgeActions][badgebrotr.services.badges.actions.BadgeActions]: Publishing.
    [ProfileBadgesEditor][badgebrotr.services.badges.editor.ProfileBadgesEditor]:
        Curated list editing.
    [BadgesConfig][badgebrotr.services.badges.configs.BadgesConfig]: Service
        configuration.
"""

from .actions import BadgeActions
from .configs import AppConfig, BadgeDefinitionParams, BadgesConfig, RelayClientConfig
from .editor import ProfileBadgesEditor
from .queries import BadgeQueries


__all__ = [
    "AppConfig",
    "BadgeActions",
    "BadgeDefinitionParams",
    "BadgeQueries",
    "BadgesConfig",
    "ProfileBadgesEditor",
    "RelayClientConfig",
]
