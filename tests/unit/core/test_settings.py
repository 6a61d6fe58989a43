"""
Tests for importer settings and their YAML persistence.
"""
import logging

import pytest
import yaml

from onediary.core.exceptions import ConfigurationError
from onediary.core.settings import (
    ImportSettings,
    load_settings,
    save_settings,
    settings_from_dict,
)


class TestImportSettings:
    """Defaults and overrides."""

    def test_defaults(self):
        """Defaults match the import dialog."""
        settings = ImportSettings()
        assert settings.output_folder == "日记"
        assert settings.date_format == "YYYY-MM-DD"
        assert settings.group_by_year is True
        assert settings.import_attachments is True
        assert settings.attachment_folder == "attachments/diary"
        assert settings.add_title is True
        assert settings.last_import_time is None

    def test_overrides_skip_none(self):
        """Unset command-line flags leave settings untouched."""
        settings = ImportSettings().with_overrides(group_by_year=False, add_title=None)
        assert settings.group_by_year is False
        assert settings.add_title is True

    def test_no_overrides_returns_same(self):
        """Nothing to change returns the same object."""
        settings = ImportSettings()
        assert settings.with_overrides(add_title=None) is settings


class TestSettingsFromDict:
    """Validation of loaded values."""

    def test_known_keys_applied(self):
        """Valid values replace the defaults."""
        settings = settings_from_dict({"output_folder": "Journal", "group_by_year": False})
        assert settings.output_folder == "Journal"
        assert settings.group_by_year is False

    def test_unknown_key_warns(self, caplog):
        """Unknown keys are ignored with a warning."""
        with caplog.at_level(logging.WARNING, logger="onediary.core.settings"):
            settings = settings_from_dict({"theme": "dark"})
        assert settings == ImportSettings()
        assert "theme" in caplog.text

    def test_wrong_type_raises(self):
        """A string where a flag is expected is rejected."""
        with pytest.raises(ConfigurationError):
            settings_from_dict({"group_by_year": "yes"})

    def test_bool_timestamp_rejected(self):
        """True is not a timestamp."""
        with pytest.raises(ConfigurationError):
            settings_from_dict({"last_import_time": True})

    def test_numeric_timestamp_accepted(self):
        """Integer and float timestamps both work."""
        assert settings_from_dict({"last_import_time": 1700000000}).last_import_time == 1700000000

    def test_empty_string_falls_back(self):
        """Blank folder names use the defaults."""
        assert settings_from_dict({"output_folder": "  "}).output_folder == "日记"


class TestLoadSaveSettings:
    """YAML file handling."""

    def test_missing_file_gives_defaults(self, tmp_path):
        """No file, no error."""
        assert load_settings(tmp_path / "missing.yaml") == ImportSettings()
        assert load_settings(None) == ImportSettings()

    def test_empty_file_gives_defaults(self, tmp_path):
        """An empty YAML document is an empty mapping."""
        path = tmp_path / "settings.yaml"
        path.write_text("", encoding="utf-8")
        assert load_settings(path) == ImportSettings()

    def test_invalid_yaml_raises(self, tmp_path):
        """Unparseable YAML is a configuration error."""
        path = tmp_path / "settings.yaml"
        path.write_text("output_folder: [unclosed", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            load_settings(path)

    def test_non_mapping_raises(self, tmp_path):
        """A YAML list is not a settings file."""
        path = tmp_path / "settings.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            load_settings(path)

    def test_save_writes_readable_unicode(self, tmp_path):
        """Saved files keep CJK text unescaped and load back."""
        path = tmp_path / "config" / "settings.yaml"
        settings = ImportSettings(output_folder="日记本", last_import_time=1700000000.5)

        save_settings(settings, path)

        text = path.read_text(encoding="utf-8")
        assert "日记本" in text
        assert yaml.safe_load(text)["output_folder"] == "日记本"
        assert load_settings(path) == settings
