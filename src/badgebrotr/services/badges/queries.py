"""Read views over badge events.

[BadgeQueries][badgebrotr.services.badges.queries.BadgeQueries] turns
relay queries into the views an application shows: the badge directory,
a single definition or award, the badges awarded to a user, and the
user's ordered, acceptance-flagged badge list.

Every relay query runs under ``asyncio.timeout(query_timeout)``. A query
that times out is logged and contributes an empty result, so the views are
best-effort: the reconciliation layer already tolerates missing events.
Cancellation of the calling task propagates unchanged.

Definition lookups for a user view are batched per issuer and run
concurrently with ``asyncio.gather``; completion order does not matter
because matching is by ``(issuer, slug)``.

See Also:
    [build_user_badges()][badgebrotr.nips.nip58.view.build_user_badges]:
        The pure reconciliation these views feed.
    [ProfileBadgesEditor][badgebrotr.services.badges.editor.ProfileBadgesEditor]:
        Built by [editor()][badgebrotr.services.badges.queries.BadgeQueries.editor].
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import asdict
from typing import TYPE_CHECKING

from badgebrotr.core.exceptions import ConnectivityError
from badgebrotr.core.logger import Logger
from badgebrotr.core.metrics import Metrics
from badgebrotr.models.constants import PROFILE_BADGES_IDENTIFIER, EventKind
from badgebrotr.models.filter import EventFilter
from badgebrotr.nips.nip58 import (
    ViewStats,
    apply_profile_badges,
    first_tag_value,
    group_references_by_issuer,
    is_badge_award,
    is_badge_definition,
    latest_profile_badges,
    resolve_awarded_badges,
)

from .configs import BadgesConfig
from .editor import ProfileBadgesEditor


if TYPE_CHECKING:
    from collections.abc import Sequence

    from badgebrotr.models.badge import Badge, UserBadge
    from badgebrotr.models.event import Event
    from badgebrotr.services.common.types import EventPublisher, EventQuerier


class BadgeQueries:
    """Badge read views backed by an [EventQuerier][badgebrotr.services.common.types.EventQuerier].

    Args:
        querier: Source of events.
        config: Timeouts and limits. Defaults to ``BadgesConfig()``.
    """

    def __init__(self, querier: EventQuerier, config: BadgesConfig | None = None) -> None:
        self._querier = querier
        self._config = config or BadgesConfig()
        self._logger = Logger("badges.queries")
        self._metrics = Metrics(self._config.metrics)

    @property
    def config(self) -> BadgesConfig:
        return self._config

    # -------------------------------------------------------------------------
    # Query plumbing
    # -------------------------------------------------------------------------

    async def _query(self, view: str, filters: Sequence[EventFilter]) -> list[Event]:
        """Run *filters* under the query timeout.

        Returns an empty list on timeout.

        Raises:
            ConnectivityError: If the querier failed for a reason other
                than a timeout.
        """
        start = time.monotonic()
        try:
            async with asyncio.timeout(self._config.query_timeout):
                events = await self._querier.query(filters)
        except TimeoutError:
            self._logger.warning("query_timeout", view=view, timeout=self._config.query_timeout)
            self._metrics.inc_counter("query_timeouts")
            return []
        except OSError as e:
            self._logger.error("query_failed", view=view, error=str(e))
            raise ConnectivityError(f"{view} query failed: {e}") from e
        finally:
            self._metrics.observe_query(view, time.monotonic() - start)

        self._logger.debug("query_completed", view=view, count=len(events))
        return events

    def _record_stats(self, subject_pubkey: str, stats: ViewStats) -> None:
        for name, value in asdict(stats).items():
            self._metrics.inc_counter(name, value)
        if stats.dropped:
            self._logger.debug("events_dropped", subject=subject_pubkey, **asdict(stats))

    # -------------------------------------------------------------------------
    # Definitions and awards
    # -------------------------------------------------------------------------

    async def definitions(self, limit: int | None = None) -> list[Event]:
        """Return recent valid badge definitions, newest first."""
        events = await self._query(
            "definitions",
            [
                EventFilter(
                    kinds=[EventKind.BADGE_DEFINITION],
                    limit=limit if limit is not None else self._config.definitions_limit,
                )
            ],
        )
        valid = [event for event in events if is_badge_definition(event)]
        return sorted(valid, key=lambda event: event.created_at, reverse=True)

    async def definition(self, event_id: str) -> Event | None:
        """Return the badge definition with id *event_id*, if it is valid."""
        events = await self._query(
            "definition",
            [EventFilter(ids=[event_id], kinds=[EventKind.BADGE_DEFINITION])],
        )
        return next(
            (event for event in events if event.id == event_id and is_badge_definition(event)),
            None,
        )

    async def award(self, event_id: str) -> Event | None:
        """Return the badge award with id *event_id*, if it is valid."""
        events = await self._query(
            "award",
            [EventFilter(ids=[event_id], kinds=[EventKind.BADGE_AWARD])],
        )
        return next(
            (event for event in events if event.id == event_id and is_badge_award(event)),
            None,
        )

    async def issuer_definitions(self, pubkey: str) -> list[Event]:
        """Return the current definitions issued by *pubkey*, newest first.

        Older versions of the same ``d`` identifier are dropped.
        """
        events = await self._query(
            "issuer_definitions",
            [
                EventFilter(
                    kinds=[EventKind.BADGE_DEFINITION],
                    authors=[pubkey],
                    limit=self._config.issuer_limit,
                )
            ],
        )
        latest: dict[str, Event] = {}
        for event in events:
            if event.pubkey != pubkey or not is_badge_definition(event):
                continue
            slug = first_tag_value(event, "d") or ""
            current = latest.get(slug)
            if current is None or event.created_at > current.created_at:
                latest[slug] = event
        return sorted(latest.values(), key=lambda event: event.created_at, reverse=True)

    async def _awards_to(self, pubkey: str) -> list[Event]:
        return await self._query(
            "awards",
            [
                EventFilter(
                    kinds=[EventKind.BADGE_AWARD],
                    tags={"p": [pubkey]},
                    limit=self._config.awards_limit,
                )
            ],
        )

    async def _referenced_definitions(self, awards: Sequence[Event]) -> list[Event]:
        groups = group_references_by_issuer(awards)
        if not groups:
            return []
        batches = await asyncio.gather(
            *(
                self._query(
                    "definitions_batch",
                    [
                        EventFilter(
                            kinds=[EventKind.BADGE_DEFINITION],
                            authors=[issuer],
                            tags={"d": slugs},
                        )
                    ],
                )
                for issuer, slugs in groups.items()
            )
        )
        return [event for batch in batches for event in batch]

    # -------------------------------------------------------------------------
    # User views
    # -------------------------------------------------------------------------

    async def awarded_badges(self, pubkey: str) -> list[Badge]:
        """Return the badges awarded to *pubkey*, in award order.

        Awards that are malformed, not addressed to *pubkey*, or whose
        definition cannot be found are dropped.
        """
        awards = await self._awards_to(pubkey)
        definitions = await self._referenced_definitions(awards)
        stats = ViewStats()
        badges = resolve_awarded_badges(pubkey, awards, definitions, stats=stats)
        self._record_stats(pubkey, stats)
        self._logger.info("awarded_badges_resolved", subject=pubkey, count=len(badges))
        return badges

    async def profile_badges(self, pubkey: str) -> Event | None:
        """Return the latest valid profile badges list of *pubkey*."""
        events = await self._query(
            "profile_badges",
            [
                EventFilter(
                    kinds=[EventKind.PROFILE_BADGES],
                    authors=[pubkey],
                    tags={"d": [PROFILE_BADGES_IDENTIFIER]},
                    limit=1,
                )
            ],
        )
        return latest_profile_badges(events, pubkey)

    async def _user_view(self, pubkey: str) -> tuple[list[UserBadge], Event | None]:
        badges, profile = await asyncio.gather(
            self.awarded_badges(pubkey), self.profile_badges(pubkey)
        )
        user_badges = apply_profile_badges(badges, profile)
        self._logger.info(
            "user_badges_built",
            subject=pubkey,
            count=len(user_badges),
            accepted=sum(1 for badge in user_badges if badge.accepted),
        )
        return user_badges, profile

    async def user_badges(self, pubkey: str) -> list[UserBadge]:
        """Return the ordered badge view of *pubkey*.

        Accepted badges come first in curated order, followed by the
        remaining awards newest first.
        """
        user_badges, _ = await self._user_view(pubkey)
        return user_badges

    async def editor(self, pubkey: str, publisher: EventPublisher) -> ProfileBadgesEditor:
        """Build the view of *pubkey* and return an editor over it.

        The editor remembers the profile badges list the view was built
        from, for conflict detection.
        """
        user_badges, profile = await self._user_view(pubkey)
        return ProfileBadgesEditor(
            pubkey,
            user_badges,
            publisher,
            profile_badges=profile,
            querier=self._querier,
            config=self._config,
        )
