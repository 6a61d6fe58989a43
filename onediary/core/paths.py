#!/usr/bin/env python3
"""
paths.py
-------------------
Path constants for the OneDiary importer.

Defaults used by the CLI when no explicit directory is given. Settings
and logs live in the per-user application directory chosen by click
(``~/.config/onediary`` on Linux, ``~/Library/Application Support/onediary``
on macOS, ``%APPDATA%\\onediary`` on Windows); ONEDIARY_HOME overrides it:

    APP_DIR/
    ├── settings.yaml
    └── logs/          # Application logs

Notes go to ``./vault`` under the directory the command runs in.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import os
from pathlib import Path

# --- Third party imports ---
import click


APP_NAME = "onediary"
HOME_ENV = "ONEDIARY_HOME"


def _get_app_dir() -> Path:
    """
    Determine the per-user directory for settings and logs.

    Returns:
        ONEDIARY_HOME when set, otherwise click's application directory
    """
    override = os.environ.get(HOME_ENV)
    if override:
        return Path(override).expanduser()
    return Path(click.get_app_dir(APP_NAME))


# ----- Application directory -----
APP_DIR: Path = _get_app_dir()

# ---- Import ----
# Relative, so it resolves against the working directory at run time
VAULT_DIR = Path("vault")

# ---- Config ----
CONFIG_PATH = APP_DIR / "settings.yaml"

# ---- Logs ----
LOG_DIR = APP_DIR / "logs"
