"""
Unit tests for models.reference module.

Tests:
- encode_reference() / decode_reference() round trip
- Invalid identifiers (wrong part count, non-numeric kind)
- BadgeReference helpers
"""

import pytest

from badgebrotr.models import (
    BadgeReference,
    EventKind,
    decode_reference,
    definition_reference,
    encode_reference,
)


PUBKEY = "ab" * 32


class TestEncode:
    """encode_reference() and definition_reference()."""

    def test_format(self):
        assert encode_reference(30009, PUBKEY, "og") == f"30009:{PUBKEY}:og"

    def test_enum_kind_rendered_as_number(self):
        assert encode_reference(EventKind.BADGE_DEFINITION, PUBKEY, "og") == f"30009:{PUBKEY}:og"

    def test_definition_reference(self):
        assert definition_reference(PUBKEY, "og") == f"30009:{PUBKEY}:og"


class TestDecode:
    """decode_reference() parsing rules."""

    @pytest.mark.parametrize(
        ("kind", "slug"),
        [(30009, "og"), (8, "x"), (30008, "profile_badges"), (0, "with-dash_and_underscore")],
    )
    def test_roundtrip(self, kind, slug):
        assert decode_reference(encode_reference(kind, PUBKEY, slug)) == (kind, PUBKEY, slug)

    @pytest.mark.parametrize("ref", ["", "30009", f"30009:{PUBKEY}", f"30009:{PUBKEY}:og:extra"])
    def test_wrong_part_count(self, ref):
        assert decode_reference(ref) is None

    def test_non_numeric_kind_decodes_with_none(self):
        ref = decode_reference(f"abc:{PUBKEY}:og")
        assert ref == BadgeReference(kind=None, pubkey=PUBKEY, slug="og")
        assert ref.is_badge_definition is False

    @pytest.mark.parametrize(
        ("kind_part", "kind"),
        [
            ("30009abc", 30009),
            ("30_009", 30),
            (" 8", 8),
            ("+8", 8),
            ("-1", -1),
            ("30009.5", 30009),
        ],
    )
    def test_kind_is_leading_integer(self, kind_part, kind):
        assert decode_reference(f"{kind_part}:{PUBKEY}:og").kind == kind

    @pytest.mark.parametrize("kind_part", ["٣٠٠٠٩", "", "_30009", "x8"])
    def test_kind_without_leading_ascii_digits(self, kind_part):
        ref = decode_reference(f"{kind_part}:{PUBKEY}:og")
        assert ref.kind is None
        assert ref.is_badge_definition is False

    def test_underscored_kind_is_not_a_definition(self):
        assert decode_reference(f"30_009:{PUBKEY}:og").is_badge_definition is False

    def test_empty_parts_allowed(self):
        assert decode_reference("30009::") == BadgeReference(30009, "", "")


class TestBadgeReference:
    """BadgeReference helpers."""

    def test_is_badge_definition(self):
        assert BadgeReference(30009, PUBKEY, "og").is_badge_definition
        assert not BadgeReference(8, PUBKEY, "og").is_badge_definition

    def test_encode(self):
        assert BadgeReference(30009, PUBKEY, "og").encode() == f"30009:{PUBKEY}:og"

    def test_encode_without_kind(self):
        with pytest.raises(ValueError):
            BadgeReference(None, PUBKEY, "og").encode()
