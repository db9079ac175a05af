"""
Unit tests for nips.nip58.tags module.

Tests:
- has_tag(), first_tag_value(), all_tag_values(), tag_values_at()
- Valueless tags and document order
"""

from badgebrotr.models import Event
from badgebrotr.nips.nip58 import all_tag_values, first_tag_value, has_tag, tag_values_at


def _event(tags):
    return Event(id="e1", pubkey="aa", kind=1, created_at=1, tags=tags)


class TestFirstTagValue:
    """first_tag_value() projection."""

    def test_first_match_wins(self):
        assert first_tag_value(_event([["d", "one"], ["d", "two"]]), "d") == "one"

    def test_missing(self):
        assert first_tag_value(_event([["p", "x"]]), "d") is None

    def test_valueless_first_tag(self):
        assert first_tag_value(_event([["d"], ["d", "two"]]), "d") is None

    def test_empty_tag_ignored(self):
        assert first_tag_value(_event([[], ["d", "x"]]), "d") == "x"


class TestAllTagValues:
    """all_tag_values() projection."""

    def test_document_order(self):
        event = _event([["p", "x"], ["e", "1"], ["p", "y"], ["p", "z"]])
        assert all_tag_values(event, "p") == ["x", "y", "z"]

    def test_skips_valueless(self):
        assert all_tag_values(_event([["p"], ["p", "y"]]), "p") == ["y"]

    def test_none(self):
        assert all_tag_values(_event([]), "p") == []


class TestTagValuesAt:
    """tag_values_at() positional projection."""

    def test_relay_hint_position(self):
        event = _event([["e", "id1", "wss://r"], ["e", "id2"], ["e", "id3", "wss://s"]])
        assert tag_values_at(event, "e", 2) == ["wss://r", "wss://s"]

    def test_name_position(self):
        assert tag_values_at(_event([["e", "x"], ["a", "y"]]), "e", 0) == ["e"]


class TestHasTag:
    """has_tag() predicate."""

    def test_present_without_value(self):
        assert has_tag(_event([["d"]]), "d")

    def test_absent(self):
        assert not has_tag(_event([["p", "x"]]), "d")
