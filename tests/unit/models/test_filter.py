"""
Unit tests for models.filter module.

Tests:
- EventFilter construction and validation
- matches() AND/OR semantics
- to_dict() NIP-01 representation
"""

import pytest

from badgebrotr.models import Event, EventFilter


def _event(kind=8, pubkey="aa", tags=(), event_id="e1"):
    return Event(id=event_id, pubkey=pubkey, kind=kind, created_at=1, tags=tags)


class TestConstruction:
    """Validation and freezing."""

    def test_values_frozen(self):
        event_filter = EventFilter(kinds=[8], authors=["aa"], tags={"p": ["bb"]})
        assert event_filter.kinds == (8,)
        assert event_filter.authors == ("aa",)
        assert event_filter.tags["p"] == ("bb",)

    def test_tags_read_only(self):
        event_filter = EventFilter(tags={"p": ["bb"]})
        with pytest.raises(TypeError):
            event_filter.tags["e"] = ("x",)  # type: ignore[index]

    def test_multi_letter_tag_rejected(self):
        with pytest.raises(ValueError, match="single letter"):
            EventFilter(tags={"name": ["x"]})

    def test_string_values_rejected(self):
        with pytest.raises(TypeError):
            EventFilter(authors="aa")  # type: ignore[arg-type]


class TestMatches:
    """NIP-01 matching semantics."""

    def test_empty_filter_matches_everything(self):
        assert EventFilter().matches(_event())

    def test_kind(self):
        assert EventFilter(kinds=[8, 30009]).matches(_event(kind=8))
        assert not EventFilter(kinds=[30009]).matches(_event(kind=8))

    def test_ids_and_authors(self):
        event = _event(pubkey="aa", event_id="e1")
        assert EventFilter(ids=["e1"], authors=["aa"]).matches(event)
        assert not EventFilter(ids=["e1"], authors=["bb"]).matches(event)

    def test_tag_any_value(self):
        event = _event(tags=[["p", "x"], ["p", "y"]])
        assert EventFilter(tags={"p": ["y", "z"]}).matches(event)
        assert not EventFilter(tags={"p": ["z"]}).matches(event)

    def test_all_tag_criteria_required(self):
        event = _event(tags=[["d", "og"]])
        assert not EventFilter(tags={"d": ["og"], "p": ["x"]}).matches(event)

    def test_empty_criterion_matches_nothing(self):
        assert not EventFilter(ids=[]).matches(_event())


class TestToDict:
    """NIP-01 JSON shape."""

    def test_full(self):
        event_filter = EventFilter(
            kinds=[30009], authors=["aa"], tags={"d": ["og", "vip"]}, limit=5
        )
        assert event_filter.to_dict() == {
            "authors": ["aa"],
            "kinds": [30009],
            "#d": ["og", "vip"],
            "limit": 5,
        }

    def test_empty(self):
        assert EventFilter().to_dict() == {}
