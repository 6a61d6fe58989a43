#!/usr/bin/env python3
"""
settings.py
-------------------
Importer settings and their YAML persistence.

Settings mirror the options of the 1Diary import dialog: where notes go,
how files are named, whether notes are grouped by year, whether images
are imported and where, and whether a title heading is written.

Usage:
    from onediary.core.settings import load_settings

    settings = load_settings(CONFIG_PATH).with_overrides(group_by_year=False)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import logging
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

# --- Third party imports ---
import yaml

# --- Local imports ---
from onediary.core.exceptions import ConfigurationError


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImportSettings:
    """
    Options controlling where and how imported entries are written.

    Attributes:
        output_folder: Folder (inside the vault) that receives the notes
        date_format: File name template; YYYY, MM and DD are substituted
        group_by_year: Write notes under a per-year subfolder
        import_attachments: Extract and save PDF page images
        attachment_folder: Folder (inside the vault) for saved images
        add_title: Write a "# weekday · weather · ..." heading in each note
        last_import_time: Unix timestamp of the last completed import
    """

    output_folder: str = "日记"
    date_format: str = "YYYY-MM-DD"
    group_by_year: bool = True
    import_attachments: bool = True
    attachment_folder: str = "attachments/diary"
    add_title: bool = True
    last_import_time: Optional[float] = None

    def with_overrides(self, **overrides: Any) -> ImportSettings:
        """Return a copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes) if changes else self

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


_FIELD_TYPES = {
    "output_folder": (str,),
    "date_format": (str,),
    "group_by_year": (bool,),
    "import_attachments": (bool,),
    "attachment_folder": (str,),
    "add_title": (bool,),
    "last_import_time": (int, float, type(None)),
}


def settings_from_dict(data: Dict[str, Any]) -> ImportSettings:
    """
    Build ImportSettings from a mapping, validating value types.

    Unknown keys are ignored with a warning. Empty strings for folder and
    format options fall back to the defaults, as the import dialog does.

    Raises:
        ConfigurationError: If a known key holds a value of the wrong type
    """
    known = {f.name for f in fields(ImportSettings)}
    defaults = ImportSettings()
    values: Dict[str, Any] = {}

    for key, value in data.items():
        if key not in known:
            logger.warning(f"Ignoring unknown setting: {key}")
            continue
        expected = _FIELD_TYPES[key]
        # bool is a subclass of int; never accept it as a timestamp
        if not isinstance(value, expected) or (
            isinstance(value, bool) and bool not in expected
        ):
            raise ConfigurationError(
                f"Setting '{key}' has invalid value {value!r}"
            )
        if isinstance(value, str) and not value.strip():
            value = getattr(defaults, key)
        values[key] = value

    return replace(defaults, **values)


def load_settings(path: Optional[Path]) -> ImportSettings:
    """
    Load settings from a YAML file.

    A missing file (or None) yields the defaults.

    Raises:
        ConfigurationError: If the file is not valid YAML or not a mapping
    """
    if path is None or not path.exists():
        logger.debug(f"No settings file at {path}; using defaults")
        return ImportSettings()

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Cannot parse settings file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Settings file {path} must contain a mapping")

    return settings_from_dict(data)


def save_settings(settings: ImportSettings, path: Path) -> None:
    """Write settings to a YAML file, creating parent folders."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        yaml.safe_dump(settings.to_dict(), allow_unicode=True, sort_keys=False),
        encoding="utf-8",
    )
