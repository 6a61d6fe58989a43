#!/usr/bin/env python3
"""
vault.py
-------------------
Writes parsed entries and their images into a Markdown vault.

    <vault>/
    ├── 日记/
    │   └── <YYYY>/                  (omitted when not grouping by year)
    │       └── <YYYY-MM-DD>.md
    └── attachments/
        └── diary/
            └── diary-<YYYY-MM-DD>-p<page>-<idx>.<ext>

A note that already exists for the same day is merged, never
overwritten: new content is appended after a horizontal rule, and a note
that would not change is left alone. Images are written once and never
replaced.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from enum import Enum
from pathlib import Path
from typing import Mapping, Optional, Sequence

# --- Local imports ---
from onediary.core.cli import ConversionStats
from onediary.core.exceptions import VaultWriteError
from onediary.core.logging_manager import DiaryLogger, safe_logger
from onediary.core.settings import ImportSettings
from onediary.dataclasses.diary_entry import DiaryEntry
from onediary.pipeline.pdf_reader import PdfImage
from onediary.utils.fs import attachment_name, ensure_folder, note_folder
from onediary.utils.md import merge_entry_content, merge_entry_content_with_attachments


class WriteOutcome(str, Enum):
    """What happened to one entry's note."""

    CREATED = "created"
    UPDATED = "updated"
    SKIPPED = "skipped"


def note_path(entry: DiaryEntry, vault_dir: Path, settings: ImportSettings) -> Path:
    """Path of the note that holds this entry."""
    folder = note_folder(vault_dir, settings.output_folder, entry.date, settings.group_by_year)
    return folder / entry.file_name(settings.date_format)


def write_entry(
    entry: DiaryEntry,
    vault_dir: Path,
    settings: ImportSettings,
    logger: Optional[DiaryLogger] = None,
) -> WriteOutcome:
    """
    Create or merge the note for one entry.

    Args:
        entry: Entry to write
        vault_dir: Vault root
        settings: Folder, naming and title options
        logger: Optional logger

    Returns:
        WriteOutcome.CREATED for a new note, UPDATED when new content was
        merged into an existing note, SKIPPED when nothing changed

    Raises:
        VaultWriteError: If the note cannot be read or written
    """
    path = note_path(entry, vault_dir, settings)

    try:
        ensure_folder(path.parent)

        if path.exists():
            existing = path.read_text(encoding="utf-8")
            if entry.attachments:
                merged = merge_entry_content_with_attachments(existing, entry)
            else:
                merged = merge_entry_content(existing, entry)

            if merged == existing:
                safe_logger(logger).log_debug(f"{path.name} unchanged, skipping")
                return WriteOutcome.SKIPPED

            path.write_text(merged, encoding="utf-8")
            safe_logger(logger).log_debug(f"Merged into {path.name}")
            return WriteOutcome.UPDATED

        path.write_text(entry.to_markdown(add_title=settings.add_title), encoding="utf-8")
        safe_logger(logger).log_debug(f"Created file: {path.name}")
        return WriteOutcome.CREATED

    except OSError as e:
        raise VaultWriteError(f"Cannot write note {path}: {e}") from e


def import_entries(
    entries: Sequence[DiaryEntry],
    vault_dir: Path,
    settings: ImportSettings,
    stats: ConversionStats,
    logger: Optional[DiaryLogger] = None,
) -> ConversionStats:
    """
    Write every entry, counting outcomes in stats.

    A failing entry is logged and counted as an error; the rest of the
    batch still runs.
    """
    for entry in entries:
        try:
            outcome = write_entry(entry, vault_dir, settings, logger)
        except VaultWriteError as e:
            stats.errors += 1
            safe_logger(logger).log_error(
                e, {"operation": "write_entry", "date": entry.iso_date}
            )
            continue

        if outcome is WriteOutcome.CREATED:
            stats.entries_created += 1
        elif outcome is WriteOutcome.UPDATED:
            stats.entries_updated += 1
        else:
            stats.entries_skipped += 1

    return stats


def save_page_images(
    entries: Sequence[DiaryEntry],
    page_to_entry: Mapping[int, int],
    page_images: Mapping[int, Sequence[PdfImage]],
    vault_dir: Path,
    attachment_folder: str,
    stats: ConversionStats,
    logger: Optional[DiaryLogger] = None,
) -> ConversionStats:
    """
    Save the images of every attributed page.

    Args:
        entries: Parsed entries (indexed by page_to_entry)
        page_to_entry: Page number -> entry index
        page_images: Images per page number
        vault_dir: Vault root
        attachment_folder: Vault-relative attachment folder
        stats: Counters; images_imported and errors are updated
        logger: Optional logger

    Returns:
        The same stats object
    """
    folder = vault_dir / attachment_folder.strip("/")

    for page_num, images in sorted(page_images.items()):
        index = page_to_entry.get(page_num)
        if index is None or not 0 <= index < len(entries):
            safe_logger(logger).log_debug(f"Page {page_num} has no entry; images skipped")
            continue
        entry = entries[index]

        for image in images:
            target = folder / attachment_name(
                entry.date, page_num, image.image_index, image.format
            )
            if target.exists():
                safe_logger(logger).log_debug(f"{target.name} exists, skipping")
                continue
            try:
                ensure_folder(folder)
                target.write_bytes(image.data)
            except OSError as e:
                stats.errors += 1
                safe_logger(logger).log_error(
                    e, {"operation": "save_image", "file": target.name}
                )
                continue
            stats.images_imported += 1

    return stats
