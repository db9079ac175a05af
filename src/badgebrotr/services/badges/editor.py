"""Curated profile badges list editor.

[ProfileBadgesEditor][badgebrotr.services.badges.editor.ProfileBadgesEditor]
holds one user's [UserBadge][badgebrotr.models.badge.UserBadge] view and
applies curation edits to it: accept, reject, move up, move down. Every edit
changes the in-memory view first and then republishes the whole kind 30008
list.

Publish semantics:

- A failed publish raises
  [PublishingError][badgebrotr.core.exceptions.PublishingError] and the
  in-memory view is **not** rolled back; call
  [save()][badgebrotr.services.badges.editor.ProfileBadgesEditor.save] to retry.
- Edits on one editor are serialized: an edit issued while a publish is in
  flight waits for it to settle.
- The list on relays is last-writer-wins. With ``detect_conflicts`` enabled
  the editor re-reads it before each publish and raises
  [ProfileBadgesConflictError][badgebrotr.core.exceptions.ProfileBadgesConflictError]
  instead of overwriting a newer list. A failed re-read raises
  [ConnectivityError][badgebrotr.core.exceptions.ConnectivityError] and
  nothing is published; the edit is kept, as for a failed publish.

Badges are identified by [UserBadge.key][badgebrotr.models.badge.UserBadge.key]
(the award event id), so two awards of the same definition are edited
independently.
"""

from __future__ import annotations

import asyncio
from dataclasses import replace
from typing import TYPE_CHECKING

from badgebrotr.core.exceptions import (
    ConnectivityError,
    PreconditionError,
    ProfileBadgesConflictError,
)
from badgebrotr.core.logger import Logger
from badgebrotr.models.constants import PROFILE_BADGES_IDENTIFIER, EventKind
from badgebrotr.models.filter import EventFilter
from badgebrotr.models.reference import ReferencePair, definition_reference
from badgebrotr.nips.nip58 import latest_profile_badges, sort_user_badges

from .actions import BadgeActions
from .configs import BadgesConfig


if TYPE_CHECKING:
    from collections.abc import Iterable

    from badgebrotr.models.badge import UserBadge
    from badgebrotr.models.event import Event
    from badgebrotr.services.common.types import EventPublisher, EventQuerier


class ProfileBadgesEditor:
    """Read-modify-write editor for one user's profile badges list.

    Args:
        subject_pubkey: Owner of the list; the publisher must sign as this key.
        badges: The user's current view, as built by
            [build_user_badges()][badgebrotr.nips.nip58.view.build_user_badges].
        publisher: Signs and broadcasts the updated list.
        profile_badges: The list event *badges* was built from, if any.
            Baseline for conflict detection.
        querier: Source for re-reading the list when conflict detection
            is enabled.
        config: Timeouts and the ``detect_conflicts`` switch.

    Examples:
        ```python
        editor = await queries.editor(pubkey, client)
        await editor.accept(editor.badges[3])
        await editor.move_up(editor.badges[1])
        ```
    """

    def __init__(  # noqa: PLR0913
        self,
        subject_pubkey: str,
        badges: Iterable[UserBadge],
        publisher: EventPublisher,
        *,
        profile_badges: Event | None = None,
        querier: EventQuerier | None = None,
        config: BadgesConfig | None = None,
    ) -> None:
        self._subject_pubkey = subject_pubkey
        self._badges = sort_user_badges(badges)
        self._config = config or BadgesConfig()
        self._actions = BadgeActions(publisher, self._config)
        self._querier = querier
        self._last_seen = profile_badges
        self._lock = asyncio.Lock()
        self._logger = Logger("badges.editor")

    @property
    def subject_pubkey(self) -> str:
        return self._subject_pubkey

    @property
    def badges(self) -> list[UserBadge]:
        """The current view, in view order."""
        return list(self._badges)

    @property
    def profile_badges(self) -> Event | None:
        """The last profile badges list read or published."""
        return self._last_seen

    def reference_pairs(self) -> list[ReferencePair]:
        """Return the ``(a, e)`` pairs the current view persists, in list order.

        Only accepted badges with a known award event id are listed.
        """
        accepted = sorted(
            (badge for badge in self._badges if badge.accepted and badge.award_event_id),
            key=lambda badge: badge.order,
        )
        return [
            ReferencePair(
                definition_reference(badge.issuer_pubkey, badge.badge_id),
                badge.award_event_id,
            )
            for badge in accepted
            if badge.award_event_id is not None
        ]

    # -------------------------------------------------------------------------
    # Edits
    # -------------------------------------------------------------------------

    async def accept(self, badge: UserBadge | str) -> Event:
        """Accept *badge* and append it to the end of the curated order.

        Raises:
            PreconditionError: If the badge is unknown or has no award event id.
            PublishingError: If publishing failed (the edit is kept).
        """
        async with self._lock:
            index = self._index_of(badge)
            current = self._badges[index]
            if current.award_event_id is None:
                raise PreconditionError(f"badge {current.id} has no award event id")
            order = 1 + max(
                (b.order for i, b in enumerate(self._badges) if b.accepted and i != index),
                default=0,
            )
            self._set(index, replace(current, accepted=True, order=order))
            return await self._persist("accept", current.key)

    async def reject(self, badge: UserBadge | str) -> Event:
        """Remove *badge* from the curated list.

        Raises:
            PreconditionError: If the badge is unknown.
            PublishingError: If publishing failed (the edit is kept).
        """
        async with self._lock:
            index = self._index_of(badge)
            current = self._badges[index]
            self._set(index, replace(current, accepted=False))
            return await self._persist("reject", current.key)

    async def move_up(self, badge: UserBadge | str) -> Event | None:
        """Swap *badge* with the accepted badge before it.

        Returns ``None`` without publishing when it is already first.

        Raises:
            PreconditionError: If the badge is unknown or not accepted.
            PublishingError: If publishing failed (the edit is kept).
        """
        return await self._move(badge, -1)

    async def move_down(self, badge: UserBadge | str) -> Event | None:
        """Swap *badge* with the accepted badge after it.

        Returns ``None`` without publishing when it is already last.

        Raises:
            PreconditionError: If the badge is unknown or not accepted.
            PublishingError: If publishing failed (the edit is kept).
        """
        return await self._move(badge, 1)

    async def save(self) -> Event:
        """Republish the current view, e.g. after a failed publish."""
        async with self._lock:
            return await self._persist("save", None)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _index_of(self, badge: UserBadge | str) -> int:
        key = badge if isinstance(badge, str) else badge.key
        for index, candidate in enumerate(self._badges):
            if candidate.key == key:
                return index
        raise PreconditionError(f"badge {key} is not in this view")

    def _set(self, index: int, badge: UserBadge) -> None:
        self._badges[index] = badge
        self._badges = sort_user_badges(self._badges)

    async def _move(self, badge: UserBadge | str, step: int) -> Event | None:
        async with self._lock:
            index = self._index_of(badge)
            current = self._badges[index]
            if not current.accepted:
                raise PreconditionError(f"badge {current.key} is not accepted")

            accepted = [b for b in self._badges if b.accepted]
            position = next(i for i, b in enumerate(accepted) if b.key == current.key)
            target = position + step
            if not 0 <= target < len(accepted):
                return None

            neighbor = accepted[target]
            neighbor_index = self._index_of(neighbor)
            self._badges[neighbor_index] = replace(neighbor, order=current.order)
            self._set(index, replace(current, order=neighbor.order))
            return await self._persist("move_up" if step < 0 else "move_down", current.key)

    async def _persist(self, action: str, key: str | None) -> Event:
        pairs = self.reference_pairs()
        if self._config.detect_conflicts and self._querier is not None:
            await self._check_conflict()

        event = await self._actions.update_profile_badges(pairs)
        self._last_seen = event
        self._logger.info(
            "profile_badges_published",
            action=action,
            subject=self._subject_pubkey,
            badge=key,
            pairs=len(pairs),
            id=event.id,
        )
        return event

    async def _check_conflict(self) -> None:
        if self._querier is None:
            return
        profile_filter = EventFilter(
            kinds=[EventKind.PROFILE_BADGES],
            authors=[self._subject_pubkey],
            tags={"d": [PROFILE_BADGES_IDENTIFIER]},
            limit=1,
        )
        try:
            async with asyncio.timeout(self._config.query_timeout):
                events = await self._querier.query([profile_filter])
        except TimeoutError:
            self._logger.warning("conflict_check_timeout", subject=self._subject_pubkey)
            return
        except OSError as e:
            self._logger.error(
                "conflict_check_failed", subject=self._subject_pubkey, error=str(e)
            )
            raise ConnectivityError(f"conflict check failed: {e}") from e

        current = latest_profile_badges(events, self._subject_pubkey)
        if current is None:
            return
        last = self._last_seen
        if (
            last is None
            or current.created_at > last.created_at
            or (current.created_at == last.created_at and current.id != last.id)
        ):
            self._logger.warning(
                "profile_badges_conflict",
                subject=self._subject_pubkey,
                current=current.id,
                last_seen=last.id if last else None,
            )
            raise ProfileBadgesConflictError(
                f"profile badges list of {self._subject_pubkey} changed since it was read",
                current=current,
            )
