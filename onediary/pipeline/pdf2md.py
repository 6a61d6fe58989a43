#!/usr/bin/env python3
"""
pdf2md.py
-------------------
Convert a 1Diary PDF export into daily Markdown notes with images.

Processing steps:
    1. Rebuild the PDF text layer and page map (pdf_reader)
    2. Parse entries from the rebuilt text (date header + metadata line)
    3. Map each entry's line range to a page range
    4. Attribute image pages to entries (see PageAttribution)
    5. Save page images and embed them in their entries
    6. Write or merge the notes

When the page mapping is refused (line ranges and page map disagree),
steps 4-5 are skipped and the notes are written without images.

Programmatic API:
    from onediary.pipeline.pdf2md import convert_pdf_file
    stats = convert_pdf_file(input_path, vault_dir, settings, logger)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from pathlib import Path
from typing import Optional, Tuple

# --- Local imports ---
from onediary.core.cli import ConversionStats
from onediary.core.exceptions import Pdf2MdError
from onediary.core.logging_manager import DiaryLogger, safe_logger
from onediary.core.settings import ImportSettings
from onediary.dataclasses.parse_result import ParseResult
from onediary.parsers.assembler import parse_pdf_diary
from onediary.parsers.positions import (
    PageAttribution,
    associate_attachments,
    attribute_pages,
    map_line_ranges_to_pages,
)
from onediary.pipeline.pdf_reader import PdfDocument, read_pdf
from onediary.pipeline.vault import import_entries, save_page_images
from onediary.utils.txt import clean_text


def parse_pdf_file(
    input_path: Path,
    extract_images: bool = True,
    logger: Optional[DiaryLogger] = None,
) -> Tuple[PdfDocument, ParseResult]:
    """
    Read a PDF export and parse its entries.

    Raises:
        Pdf2MdError: If the file is missing (PdfExtractionError if unreadable)
    """
    if not input_path.exists():
        raise Pdf2MdError(f"Input file not found: {input_path}")

    log = safe_logger(logger)
    with log.import_context(input_path.name, "pdf"):
        document = read_pdf(input_path, extract_images=extract_images, logger=logger)
        result = parse_pdf_diary(clean_text(document.full_text))

        log.log_operation(
            "entries_parsed",
            {
                "pages": document.page_count,
                "count": len(result.entries),
                "diagnostics": len(result.errors),
            },
        )
        for message in result.errors:
            log.log_warning(message)

    return document, result


def convert_pdf_file(
    input_path: Path,
    vault_dir: Path,
    settings: Optional[ImportSettings] = None,
    logger: Optional[DiaryLogger] = None,
    strategy: PageAttribution = PageAttribution.NEAREST,
) -> ConversionStats:
    """
    Convert one PDF export into daily notes.

    Args:
        input_path: Path to the .pdf export
        vault_dir: Vault root
        settings: Import options (defaults when None)
        logger: Optional logger for operation tracking
        strategy: How image pages outside every entry are attributed

    Returns:
        ConversionStats with entry and image counts

    Raises:
        Pdf2MdError: If the input is missing or cannot be read
    """
    settings = settings or ImportSettings()
    stats = ConversionStats()
    log = safe_logger(logger)

    with log.import_context(input_path.name, "pdf"):
        log.log_operation(
            "convert_pdf_start",
            {"input": str(input_path), "vault": str(vault_dir), "strategy": str(strategy)},
        )

        document, result = parse_pdf_file(input_path, settings.import_attachments, logger)
        stats.entries_parsed = len(result.entries)
        stats.parse_warnings = len(result.errors)

        entries = result.entries
        if not entries:
            log.log_info(f"No entries found in {input_path}")

        if entries and settings.import_attachments and document.images:
            page_ranges = map_line_ranges_to_pages(
                result.entry_line_ranges, document.line_to_page, len(entries)
            )
            if page_ranges is None:
                log.log_warning("Page mapping refused; importing notes without images")
            else:
                page_to_entry = attribute_pages(document.images.keys(), page_ranges, strategy)
                log.log_debug(
                    "Image pages attributed",
                    {"pages": {page: entries[i].iso_date for page, i in page_to_entry.items()}},
                )
                entries = associate_attachments(
                    entries, page_to_entry, document.images, settings.attachment_folder
                )
                save_page_images(
                    entries,
                    page_to_entry,
                    document.images,
                    vault_dir,
                    settings.attachment_folder,
                    stats,
                    logger,
                )

        if entries:
            import_entries(entries, vault_dir, settings, stats, logger)

        stats.files_processed = 1
        log.log_operation("convert_pdf_complete", {"stats": stats.summary()})

    return stats
