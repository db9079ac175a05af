"""
Unit tests for core.yaml module.

Tests:
- load_yaml() on valid, empty, malformed and missing files
"""

import pytest

from badgebrotr.core.exceptions import ConfigurationError
from badgebrotr.core.yaml import load_yaml


class TestLoadYaml:
    """Safe YAML loading."""

    def test_mapping(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("badges:\n  query_timeout: 2.5\n", encoding="utf-8")
        assert load_yaml(path) == {"badges": {"query_timeout": 2.5}}

    def test_accepts_str_path(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("a: 1\n", encoding="utf-8")
        assert load_yaml(str(path)) == {"a": 1}

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert load_yaml(path) == {}

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_yaml(tmp_path / "missing.yaml")

    def test_malformed(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("a: [1, 2\n", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            load_yaml(path)

    def test_top_level_list(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="mapping"):
            load_yaml(path)

    def test_unsafe_tag_rejected(self, tmp_path):
        path = tmp_path / "unsafe.yaml"
        path.write_text("a: !!python/object/apply:os.system ['true']\n", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            load_yaml(path)
