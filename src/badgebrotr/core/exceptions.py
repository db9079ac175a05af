"""badgebrotr exception hierarchy.

Only operation failures are raised. Malformed events and unresolved
references are not errors: the reconciliation layer drops them and the
view is simply smaller.

Exception hierarchy:

```text
BadgeBrotrError (base -- never raised directly)
├── ConfigurationError            -- config validation, missing keys, bad YAML
├── PreconditionError             -- operation rejected before any I/O or mutation
├── ConnectivityError             -- relay unreachable, network failures
└── PublishingError               -- event signing or broadcast failed
    └── ProfileBadgesConflictError -- profile list changed since it was read
```

See Also:
    [ProfileBadgesEditor][badgebrotr.services.badges.editor.ProfileBadgesEditor]:
        Raises [PreconditionError][badgebrotr.core.exceptions.PreconditionError]
        and [PublishingError][badgebrotr.core.exceptions.PublishingError].
    [BadgeActions][badgebrotr.services.badges.actions.BadgeActions]: Translates
        relay client failures into
        [PublishingError][badgebrotr.core.exceptions.PublishingError].
"""

from __future__ import annotations


class BadgeBrotrError(Exception):
    """Base exception for all badgebrotr errors.

    Never raised directly -- always use a specific subclass.
    """


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


class ConfigurationError(BadgeBrotrError):
    """Invalid or missing configuration (YAML, env vars, CLI flags)."""


# ---------------------------------------------------------------------------
# Preconditions
# ---------------------------------------------------------------------------


class PreconditionError(BadgeBrotrError, ValueError):
    """An operation was rejected before any network call or state change.

    Examples: awarding a badge to zero recipients, accepting a badge that
    has no award event id, moving a badge that is not accepted.
    """


# ---------------------------------------------------------------------------
# Connectivity
# ---------------------------------------------------------------------------


class ConnectivityError(BadgeBrotrError):
    """Relay or network failure other than a query timeout."""


# ---------------------------------------------------------------------------
# Publishing
# ---------------------------------------------------------------------------


class PublishingError(BadgeBrotrError):
    """Failed to sign or broadcast a Nostr event.

    Recoverable: nothing is retried automatically and optimistic local
    state is not rolled back. The caller decides whether to retry or to
    re-read the profile list from relays.
    """


class ProfileBadgesConflictError(PublishingError):
    """The profile badges list on relays is newer than the one last read.

    Only raised when conflict detection is enabled. Publishing would
    silently discard the other writer's edits, so nothing was published.

    Attributes:
        current: The newer profile badges event found on relays.
    """

    def __init__(self, message: str, current: object | None = None) -> None:
        super().__init__(message)
        self.current = current
