"""Badge publishing actions: create definitions, award badges, curate lists.

Each action validates its input, builds the wire tag list with
[badgebrotr.nips.nip58.event_builders][], and publishes it through an
[EventPublisher][badgebrotr.services.common.types.EventPublisher] under
``asyncio.timeout(publish_timeout)``.

Input problems raise
[PreconditionError][badgebrotr.core.exceptions.PreconditionError] before
anything is published. Publisher failures (``OSError``, ``TimeoutError``,
``ValueError``) are raised as
[PublishingError][badgebrotr.core.exceptions.PublishingError]; nothing is
retried.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from badgebrotr.core.exceptions import PreconditionError, PublishingError
from badgebrotr.core.logger import Logger
from badgebrotr.core.metrics import Metrics
from badgebrotr.models.constants import EventKind
from badgebrotr.nips.nip58 import (
    award_tags,
    definition_tags,
    first_tag_value,
    is_badge_definition,
    profile_badges_tags,
)
from badgebrotr.utils.recipients import normalize_pubkey, parse_recipients

from .configs import BadgesConfig


if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from badgebrotr.models.event import Event
    from badgebrotr.models.reference import ReferencePair
    from badgebrotr.services.common.types import EventPublisher

    from .configs import BadgeDefinitionParams


class BadgeActions:
    """Publish NIP-58 events through an [EventPublisher][badgebrotr.services.common.types.EventPublisher].

    Args:
        publisher: Signs and broadcasts events.
        config: Publish timeout and metrics. Defaults to ``BadgesConfig()``.
    """

    def __init__(self, publisher: EventPublisher, config: BadgesConfig | None = None) -> None:
        self._publisher = publisher
        self._config = config or BadgesConfig()
        self._logger = Logger("badges.actions")
        self._metrics = Metrics(self._config.metrics)

    async def _publish(self, action: str, kind: int, tags: Sequence[Sequence[str]]) -> Event:
        try:
            async with asyncio.timeout(self._config.publish_timeout):
                event = await self._publisher.publish(kind, tags)
        except (OSError, TimeoutError, ValueError) as e:
            self._metrics.inc_counter("publish_failed")
            self._logger.error(
                "publish_failed", action=action, kind=kind, error=str(e) or type(e).__name__
            )
            raise PublishingError(f"{action} failed: {e}") from e

        self._metrics.inc_counter("events_published")
        self._logger.info("event_published", action=action, kind=kind, id=event.id)
        return event

    async def create_definition(self, params: BadgeDefinitionParams) -> Event:
        """Publish a kind 30009 badge definition built from *params*."""
        tags = definition_tags(
            params.slug,
            name=params.name,
            description=params.description,
            image=params.image,
            image_width=params.image_width,
            image_height=params.image_height,
            thumb=params.thumb,
            thumb_width=params.thumb_width,
            thumb_height=params.thumb_height,
        )
        return await self._publish("create_definition", EventKind.BADGE_DEFINITION, tags)

    async def award_badge(self, definition: Event, recipients: str | Iterable[str]) -> Event:
        """Publish a kind 8 award of *definition* to *recipients*.

        Args:
            definition: The badge definition being awarded.
            recipients: Public keys (hex or ``npub1...``), either as an
                iterable or as free text separated by whitespace or commas.
                Duplicates are removed, preserving order.

        Raises:
            PreconditionError: If *definition* is not a valid badge
                definition, or *recipients* is empty or holds an invalid key.
            PublishingError: If publishing failed.
        """
        if not is_badge_definition(definition):
            raise PreconditionError(f"event {definition.id} is not a badge definition")
        slug = first_tag_value(definition, "d")
        if not slug:
            raise PreconditionError(f"badge definition {definition.id} has no identifier")

        try:
            if isinstance(recipients, str):
                pubkeys = parse_recipients(recipients)
            else:
                pubkeys = list(dict.fromkeys(normalize_pubkey(r) for r in recipients))
        except ValueError as e:
            raise PreconditionError(str(e)) from e
        if not pubkeys:
            raise PreconditionError("a badge award needs at least one recipient")

        tags = award_tags(definition.pubkey, slug, pubkeys)
        return await self._publish("award_badge", EventKind.BADGE_AWARD, tags)

    async def update_profile_badges(self, pairs: Iterable[ReferencePair]) -> Event:
        """Publish a kind 30008 profile badges list holding *pairs* in order."""
        tags = profile_badges_tags(pairs)
        return await self._publish("update_profile_badges", EventKind.PROFILE_BADGES, tags)
