"""Tests for lazy import system in badgebrotr.__init__."""

from __future__ import annotations

import pytest


class TestLazyImports:
    """Test PEP 562 lazy loading in badgebrotr.__init__."""

    def test_lazy_import_resolves_on_access(self) -> None:
        """Verify that lazy attributes resolve correctly."""
        from badgebrotr import BadgeQueries
        from badgebrotr.services.badges.queries import BadgeQueries as DirectBadgeQueries

        assert BadgeQueries is DirectBadgeQueries

    def test_lazy_import_caches_after_first_access(self) -> None:
        """Verify that resolved attributes are cached in globals."""
        import badgebrotr

        _ = badgebrotr.UserBadge

        assert "UserBadge" in vars(badgebrotr)

    def test_lazy_import_invalid_attribute(self) -> None:
        """Verify that invalid attributes raise AttributeError."""
        import badgebrotr

        with pytest.raises(AttributeError, match="no_such_thing"):
            _ = getattr(badgebrotr, "no_such_thing")  # noqa: B009

    def test_all_exports_are_in_lazy_imports(self) -> None:
        """Verify that __all__ and _LAZY_IMPORTS are in sync."""
        import badgebrotr

        assert set(badgebrotr.__all__) == set(badgebrotr._LAZY_IMPORTS)

    def test_every_lazy_import_resolves(self) -> None:
        """Verify that every lazy target exists."""
        import badgebrotr

        for name in badgebrotr.__all__:
            assert getattr(badgebrotr, name) is not None

    def test_dir_returns_all(self) -> None:
        """Verify that dir(badgebrotr) returns __all__."""
        import badgebrotr

        assert dir(badgebrotr) == badgebrotr.__all__

    def test_version_is_accessible(self) -> None:
        """Verify that __version__ is set from package metadata."""
        import badgebrotr

        assert isinstance(badgebrotr.__version__, str)
        assert badgebrotr.__version__
