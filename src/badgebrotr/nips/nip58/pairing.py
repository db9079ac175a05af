"""Reference pairing for kind 30008 profile badges lists."""

from __future__ import annotations

from typing import TYPE_CHECKING

from badgebrotr.models.reference import ReferencePair

from .tags import all_tag_values


if TYPE_CHECKING:
    from badgebrotr.models.event import Event


def pair_references(profile_badges: Event) -> list[ReferencePair]:
    """Extract the ordered ``(a, e)`` pairs of a profile badges list.

    The ``a`` values and the ``e`` values are collected independently, in
    document order, and zipped by position. Unpaired trailing entries of
    the longer stream are dropped.

    Note:
        Position is the only evidence of pairing. Authors are expected to
        interleave ``a``/``e`` tags per pair, but a list that emits every
        ``a`` tag before every ``e`` tag pairs identically, and a list with
        a missing tag mid-sequence silently shifts every later pair.
    """
    a_refs = all_tag_values(profile_badges, "a")
    e_refs = all_tag_values(profile_badges, "e")
    return [ReferencePair(a_ref=a, e_ref=e) for a, e in zip(a_refs, e_refs, strict=False)]
