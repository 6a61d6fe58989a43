#!/usr/bin/env python3
"""
fs.py
-------------------
Filesystem helpers for the note vault.

Functions:
    note_folder: Folder that receives a given entry's note
    attachment_name: File name of a PDF page image attachment
    ensure_folder: Create a folder (and parents) if missing
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from datetime import date
from pathlib import Path


def ensure_folder(path: Path) -> Path:
    """Create the folder if it does not exist and return it."""
    path.mkdir(parents=True, exist_ok=True)
    return path


def note_folder(vault_dir: Path, output_folder: str, entry_date: date, group_by_year: bool) -> Path:
    """
    Folder for an entry's note.

    Examples:
        >>> note_folder(Path("vault"), "日记", date(2025, 2, 8), True)
        PosixPath('vault/日记/2025')
    """
    folder = vault_dir / output_folder
    if group_by_year:
        folder = folder / f"{entry_date.year:04d}"
    return folder


def attachment_name(entry_date: date, page_num: int, image_index: int, image_format: str) -> str:
    """
    File name of an image attachment.

    Examples:
        >>> attachment_name(date(2025, 2, 8), 3, 0, "png")
        'diary-2025-02-08-p3-0.png'
    """
    return f"diary-{entry_date.isoformat()}-p{page_num}-{image_index}.{image_format}"
