"""Tests for view settings."""

from pathlib import Path

import pytest

from evlens.core.config import ViewSettings, load_settings
from evlens.core.errors import ConfigError, ValidationError


class TestLoadSettings:
    def test_defaults(self):
        settings = load_settings(None)
        assert settings.specialized_index == "SecurityEvents"
        assert settings.value_cap == 50
        assert settings.extras_cap == 6
        assert settings.used_field_tracking == "key"
        assert settings.page_size == 25
        assert settings.catalog is None

    def test_from_yaml(self, tmp_path):
        path = tmp_path / "evlens.yaml"
        path.write_text(
            "specialized_index: WinSec\n"
            "value_cap: 60\n"
            "extras_cap: 8\n"
            "used_field_tracking: value\n"
            "catalog: catalogs/events.yaml\n"
        )
        settings = load_settings(path)

        assert settings.specialized_index == "WinSec"
        assert settings.value_cap == 60
        assert settings.extras_cap == 8
        assert settings.used_field_tracking == "value"
        assert settings.catalog == tmp_path / "catalogs" / "events.yaml"

    def test_empty_file(self, tmp_path):
        path = tmp_path / "evlens.yaml"
        path.write_text("")
        assert load_settings(path) == ViewSettings()

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError):
            load_settings(tmp_path / "missing.yaml")

    def test_unknown_key(self, tmp_path):
        path = tmp_path / "evlens.yaml"
        path.write_text("colour: red\n")
        with pytest.raises(ConfigError) as exc_info:
            load_settings(path)
        assert exc_info.value.error.context["errors"]

    def test_bad_value(self, tmp_path):
        path = tmp_path / "evlens.yaml"
        path.write_text("page_size: 0\n")
        with pytest.raises(ConfigError):
            load_settings(path)

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "evlens.yaml"
        path.write_text("- a\n")
        with pytest.raises(ConfigError):
            load_settings(path)


class TestMerged:
    def test_none_overrides_ignored(self):
        settings = ViewSettings(page_size=10)
        assert settings.merged(page_size=None, catalog=None) is settings

    def test_overrides_applied(self):
        settings = ViewSettings().merged(page_size=5, catalog=Path("x.yaml"))
        assert settings.page_size == 5
        assert settings.catalog == Path("x.yaml")

    def test_invalid_override(self):
        with pytest.raises(ValidationError) as exc_info:
            ViewSettings().merged(page_size=0)
        assert exc_info.value.error.context == {"field": "page_size"}
