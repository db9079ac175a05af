"""
Derived badge records.

[Badge][badgebrotr.models.badge.Badge] denormalizes one badge definition
(plus, optionally, the award that granted it).
[UserBadge][badgebrotr.models.badge.UserBadge] adds the recipient's curation
state. Both are rebuilt from raw events on every reconciliation pass and are
never persisted directly; the editor stages changes by replacing records,
not by mutating them.

See Also:
    [assemble_badge()][badgebrotr.nips.nip58.assemble.assemble_badge]:
        Builds a [Badge][badgebrotr.models.badge.Badge] from events.
    [build_user_badges()][badgebrotr.nips.nip58.view.build_user_badges]:
        Builds the ordered [UserBadge][badgebrotr.models.badge.UserBadge] view.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple


_DIMENSIONS_SEPARATOR = "x"


class ImageDimensions(NamedTuple):
    """Pixel size advertised by an ``image``/``thumb`` tag value."""

    width: int
    height: int


def split_image_value(value: str) -> tuple[str, ImageDimensions | None]:
    """Split an ``image``/``thumb`` tag value into URL and optional dimensions.

    The value is ``"<url>"`` or ``"<url> <width>x<height>"``. Malformed
    dimension suffixes are ignored.

    Examples:
        ```python
        split_image_value("https://x/a.png 1024x1024")
        # ("https://x/a.png", ImageDimensions(1024, 1024))
        split_image_value("https://x/a.png")
        # ("https://x/a.png", None)
        ```
    """
    parts = value.split(" ")
    url = parts[0]
    if len(parts) < 2:  # noqa: PLR2004
        return url, None

    sizes = parts[1].split(_DIMENSIONS_SEPARATOR)
    if len(sizes) != 2:  # noqa: PLR2004
        return url, None
    try:
        return url, ImageDimensions(width=int(sizes[0]), height=int(sizes[1]))
    except ValueError:
        return url, None


def format_image_value(url: str, width: int | None = None, height: int | None = None) -> str:
    """Format an ``image``/``thumb`` tag value, appending ``WxH`` only when both are given."""
    if width and height:
        return f"{url} {width}{_DIMENSIONS_SEPARATOR}{height}"
    return url


@dataclass(frozen=True, slots=True)
class Badge:
    """A badge definition, optionally joined with the award that granted it.

    Attributes:
        id: Definition event id.
        issuer_pubkey: Definition author (the issuer).
        definition_id: Definition event id (same as ``id``).
        badge_id: The definition's ``d`` tag value (slug).
        name: Optional display name.
        description: Optional description.
        image: Optional ``image`` tag value (URL with optional ``WxH`` suffix).
        thumb: Optional ``thumb`` tag value (same format).
        award_id: Id of the award joined into this record, if any.
        award_event_id: Id of the award event used as the pairing key
            against the ``e`` tags of the recipient's profile list.
        issued_at: ``created_at`` of the award, if any.
    """

    id: str
    issuer_pubkey: str
    definition_id: str
    badge_id: str
    name: str | None = None
    description: str | None = None
    image: str | None = None
    thumb: str | None = None
    award_id: str | None = None
    award_event_id: str | None = None
    issued_at: int | None = None

    @property
    def image_url(self) -> str | None:
        """The ``image`` URL without its dimension suffix."""
        return split_image_value(self.image)[0] if self.image else None

    @property
    def image_dimensions(self) -> ImageDimensions | None:
        """The advertised ``image`` dimensions, if any."""
        return split_image_value(self.image)[1] if self.image else None

    @property
    def thumb_url(self) -> str | None:
        """The ``thumb`` URL without its dimension suffix."""
        return split_image_value(self.thumb)[0] if self.thumb else None

    @property
    def thumb_dimensions(self) -> ImageDimensions | None:
        """The advertised ``thumb`` dimensions, if any."""
        return split_image_value(self.thumb)[1] if self.thumb else None


@dataclass(frozen=True, slots=True)
class UserBadge(Badge):
    """A [Badge][badgebrotr.models.badge.Badge] with the recipient's curation state.

    Attributes:
        accepted: Whether the recipient's profile list references this award.
        order: Position in the recipient's profile list. Only meaningful when
            ``accepted`` is true; stale otherwise and ignored by sorting.
    """

    accepted: bool = False
    order: int = 0

    @property
    def key(self) -> str:
        """Identity of this record within one user's view.

        The award event id when known (unique per award), else the
        definition id.
        """
        return self.award_event_id or self.id
