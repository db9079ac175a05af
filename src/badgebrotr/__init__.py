r"""BadgeBrotr -- NIP-58 badge reconciliation for Nostr.

Reconciles three independent event streams (badge definitions, badge
awards and each user's curated profile badges list) into one ordered
per-user view, and publishes edits to the curated list.

Architecture follows a **diamond DAG** dependency structure where imports
flow strictly downward:

```text
              services         Read views, publishing, curation
             /   |   \
          core  nips  utils    Infrastructure, NIP-58 reconciliation, relays
             \   |   /
              models           Pure frozen dataclasses (zero I/O)
```

Attributes:
    models: Pure frozen dataclasses. Zero I/O, depends only on stdlib.
    core: Exceptions, logging, metrics, YAML loading.
    nips: NIP-58 tag codec, classifier, assembler, pairer and view builder.
        Pure and synchronous.
    utils: Nostr key loading, recipient parsing, relay client.
    services: Badge queries, publishing actions and the profile list editor.

Note:
    For lightweight usage, import directly from subpackages::

        from badgebrotr.models import Event
        from badgebrotr.nips.nip58 import build_user_badges

    Top-level imports (``from badgebrotr import BadgeQueries``) use lazy
    loading and resolve on first access.
"""

import importlib
from importlib.metadata import version as _get_version


__version__ = _get_version("badgebrotr")

__all__ = [
    "Badge",
    "BadgeActions",
    "BadgeQueries",
    "BadgeReference",
    "BadgesConfig",
    "Event",
    "EventFilter",
    "EventKind",
    "Logger",
    "ProfileBadgesEditor",
    "RelayClient",
    "UserBadge",
    "build_user_badges",
]

_LAZY_IMPORTS: dict[str, tuple[str, str]] = {
    "Logger": ("badgebrotr.core", "Logger"),
    "Badge": ("badgebrotr.models", "Badge"),
    "BadgeReference": ("badgebrotr.models", "BadgeReference"),
    "Event": ("badgebrotr.models", "Event"),
    "EventFilter": ("badgebrotr.models", "EventFilter"),
    "EventKind": ("badgebrotr.models", "EventKind"),
    "UserBadge": ("badgebrotr.models", "UserBadge"),
    "build_user_badges": ("badgebrotr.nips.nip58", "build_user_badges"),
    "RelayClient": ("badgebrotr.utils", "RelayClient"),
    "BadgeActions": ("badgebrotr.services", "BadgeActions"),
    "BadgeQueries": ("badgebrotr.services", "BadgeQueries"),
    "BadgesConfig": ("badgebrotr.services", "BadgesConfig"),
    "ProfileBadgesEditor": ("badgebrotr.services", "ProfileBadgesEditor"),
}


def __getattr__(name: str) -> object:
    if name in _LAZY_IMPORTS:
        module_path, attr_name = _LAZY_IMPORTS[name]
        module = importlib.import_module(module_path)
        value = getattr(module, attr_name)
        globals()[name] = value  # Cache for subsequent access
        return value
    raise AttributeError(f"module 'badgebrotr' has no attribute {name!r}")


def __dir__() -> list[str]:
    return __all__
