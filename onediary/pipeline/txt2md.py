#!/usr/bin/env python3
"""
txt2md.py
-------------------
Convert a 1Diary plain-text export into daily Markdown notes.

The export is one text file holding every day, each opened by a line such
as:

    2025年02月08日 周六 · 晴 · 4℃ · 苏州市

Each day becomes one note with YAML frontmatter (date, weekday, weather,
temperature, location):

    <vault>/
    └── 日记/
        └── <YYYY>/
            └── <YYYY-MM-DD>.md

Programmatic API:
    from onediary.pipeline.txt2md import convert_txt_file
    stats = convert_txt_file(input_path, vault_dir, settings, logger)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from pathlib import Path
from typing import Optional

# --- Local imports ---
from onediary.core.cli import ConversionStats
from onediary.core.exceptions import Txt2MdError
from onediary.core.logging_manager import DiaryLogger, safe_logger
from onediary.core.settings import ImportSettings
from onediary.dataclasses.parse_result import ParseResult
from onediary.parsers.assembler import parse_txt_diary
from onediary.pipeline.vault import import_entries
from onediary.utils.txt import clean_text


def parse_txt_file(input_path: Path, logger: Optional[DiaryLogger] = None) -> ParseResult:
    """
    Read and parse a plain-text export.

    Args:
        input_path: Path to the .txt export
        logger: Optional logger

    Returns:
        ParseResult of the whole file

    Raises:
        Txt2MdError: If the file is missing or cannot be decoded as UTF-8
    """
    if not input_path.exists():
        raise Txt2MdError(f"Input file not found: {input_path}")

    log = safe_logger(logger)
    with log.import_context(input_path.name, "txt"):
        try:
            text = input_path.read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as e:
            log.log_error(e, {"operation": "read_file", "file": str(input_path)})
            raise Txt2MdError(f"Failed to read {input_path}: {e}") from e

        result = parse_txt_diary(clean_text(text))

        log.log_operation(
            "entries_parsed",
            {"count": len(result.entries), "diagnostics": len(result.errors)},
        )
        for message in result.errors:
            log.log_warning(message)

    return result


def convert_txt_file(
    input_path: Path,
    vault_dir: Path,
    settings: Optional[ImportSettings] = None,
    logger: Optional[DiaryLogger] = None,
) -> ConversionStats:
    """
    Convert one plain-text export into daily notes.

    Args:
        input_path: Path to the .txt export
        vault_dir: Vault root
        settings: Import options (defaults when None)
        logger: Optional logger for operation tracking

    Returns:
        ConversionStats with parsed/created/updated/skipped counts

    Raises:
        Txt2MdError: If the input cannot be read
    """
    settings = settings or ImportSettings()
    stats = ConversionStats()
    log = safe_logger(logger)

    with log.import_context(input_path.name, "txt"):
        log.log_operation(
            "convert_txt_start", {"input": str(input_path), "vault": str(vault_dir)}
        )

        result = parse_txt_file(input_path, logger)
        stats.entries_parsed = len(result.entries)
        stats.parse_warnings = len(result.errors)

        if not result.entries:
            log.log_info(f"No entries found in {input_path}")
        else:
            import_entries(result.entries, vault_dir, settings, stats, logger)

        stats.files_processed = 1
        log.log_operation("convert_txt_complete", {"stats": stats.summary()})

    return stats
