"""
Addressable event references (``a`` tag identifiers) and profile pairs.

A badge award points at its definition without naming an event id, using
the three-part identifier ``<kind>:<issuer-pubkey>:<slug>``. Profile badge
lists pair such an identifier with the id of the award event that
authorized it.

Note:
    [decode_reference()][badgebrotr.models.reference.decode_reference] only
    checks that the string splits into exactly three parts. The kind is the
    leading ASCII integer of the first segment (``"30009abc"`` reads as
    30009, ``"30_009"`` as 30). A segment without one does not invalidate
    the reference: it decodes with ``kind=None``, which never compares equal
    to a real kind, so callers testing
    [is_badge_definition][badgebrotr.models.reference.BadgeReference.is_badge_definition]
    simply skip it. Pubkey and slug are not validated.

See Also:
    [badgebrotr.nips.nip58.pairing][]: Builds
        [ReferencePair][badgebrotr.models.reference.ReferencePair] sequences
        from kind 30008 events.
    [badgebrotr.nips.nip58.view][]: Decodes award references to resolve
        definitions.
"""

from __future__ import annotations

import re
from typing import NamedTuple

from .constants import EventKind


_SEPARATOR = ":"
_PARTS = 3
_LEADING_INT = re.compile(r"\s*([+-]?[0-9]+)", re.ASCII)


class BadgeReference(NamedTuple):
    """Decoded ``<kind>:<pubkey>:<slug>`` identifier.

    Attributes:
        kind: Event kind, or ``None`` when the first segment is not an integer.
        pubkey: Issuer public key (not validated).
        slug: The referenced event's ``d`` tag value (not validated).
    """

    kind: int | None
    pubkey: str
    slug: str

    @property
    def is_badge_definition(self) -> bool:
        """Whether the reference points at a kind 30009 badge definition."""
        return self.kind == EventKind.BADGE_DEFINITION

    def encode(self) -> str:
        """Return the ``kind:pubkey:slug`` string form.

        Raises:
            ValueError: If ``kind`` is ``None``.
        """
        if self.kind is None:
            raise ValueError("cannot encode a reference without a kind")
        return encode_reference(self.kind, self.pubkey, self.slug)


class ReferencePair(NamedTuple):
    """One entry of a profile badges list.

    Attributes:
        a_ref: Identifier of the badge definition.
        e_ref: Id of the award event that authorized it.
    """

    a_ref: str
    e_ref: str


def encode_reference(kind: int, pubkey: str, slug: str) -> str:
    """Encode an addressable event reference as ``kind:pubkey:slug``."""
    return f"{int(kind)}{_SEPARATOR}{pubkey}{_SEPARATOR}{slug}"


def definition_reference(pubkey: str, slug: str) -> str:
    """Encode a reference to the kind 30009 badge definition ``slug`` of ``pubkey``."""
    return encode_reference(EventKind.BADGE_DEFINITION, pubkey, slug)


def decode_reference(ref: str) -> BadgeReference | None:
    """Decode a ``kind:pubkey:slug`` identifier.

    Args:
        ref: The ``a`` tag value.

    Returns:
        The decoded reference, or ``None`` unless *ref* splits into exactly
        three ``:``-separated parts.

    Examples:
        ```python
        decode_reference("30009:abc:og")  # BadgeReference(30009, "abc", "og")
        decode_reference("30009:abc")     # None
        decode_reference("x:abc:og")      # BadgeReference(None, "abc", "og")
        decode_reference("8x:abc:og")     # BadgeReference(8, "abc", "og")
        ```
    """
    parts = ref.split(_SEPARATOR)
    if len(parts) != _PARTS:
        return None

    kind_part, pubkey, slug = parts
    match = _LEADING_INT.match(kind_part)
    kind = int(match.group(1)) if match else None
    return BadgeReference(kind=kind, pubkey=pubkey, slug=slug)
