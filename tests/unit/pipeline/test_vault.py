"""
test_vault.py
-------------
Unit tests for writing notes and images into a vault.
"""
from dataclasses import replace

import pytest

from onediary.core.cli import ConversionStats
from onediary.core.exceptions import VaultWriteError
from onediary.core.settings import ImportSettings
from onediary.pipeline.pdf_reader import PdfImage
from onediary.pipeline.vault import (
    WriteOutcome,
    import_entries,
    note_path,
    save_page_images,
    write_entry,
)


class TestWriteEntry:
    """Test write_entry()."""

    def test_created_then_skipped_then_updated(self, sample_entry, vault_dir):
        """The three outcomes for one day."""
        settings = ImportSettings()

        assert write_entry(sample_entry, vault_dir, settings) is WriteOutcome.CREATED
        assert write_entry(sample_entry, vault_dir, settings) is WriteOutcome.SKIPPED
        later = replace(sample_entry, content="晚上。")
        assert write_entry(later, vault_dir, settings) is WriteOutcome.UPDATED

    def test_note_path(self, sample_entry, vault_dir):
        """Path follows folder, grouping and template settings."""
        settings = ImportSettings(output_folder="Diary", date_format="YYYYMMDD")
        assert note_path(sample_entry, vault_dir, settings) == vault_dir / "Diary" / "2025" / "20250208.md"

    def test_unwritable_target(self, sample_entry, vault_dir):
        """A folder where the note should be raises VaultWriteError."""
        settings = ImportSettings()
        note_path(sample_entry, vault_dir, settings).mkdir(parents=True)

        with pytest.raises(VaultWriteError):
            write_entry(sample_entry, vault_dir, settings)


class TestImportEntries:
    """Test import_entries()."""

    def test_failures_do_not_stop_batch(self, sample_entry, minimal_entry, vault_dir):
        """One failing entry is counted; the rest are written."""
        settings = ImportSettings()
        note_path(sample_entry, vault_dir, settings).mkdir(parents=True)

        stats = import_entries([sample_entry, minimal_entry], vault_dir, settings, ConversionStats())

        assert stats.errors == 1
        assert stats.entries_created == 1


class TestSavePageImages:
    """Test save_page_images()."""

    def test_only_attributed_pages(self, sample_entry, vault_dir):
        """Pages without an entry are skipped."""
        images = {
            1: (PdfImage(b"A", "png", 1, 1, 1, 0),),
            2: (PdfImage(b"B", "jpeg", 1, 1, 2, 0),),
        }
        stats = save_page_images(
            [sample_entry], {1: 0}, images, vault_dir, "img", ConversionStats()
        )

        assert stats.images_imported == 1
        assert (vault_dir / "img" / "diary-2025-02-08-p1-0.png").read_bytes() == b"A"
        assert not (vault_dir / "img" / "diary-2025-02-08-p2-0.jpeg").exists()
