"""
OneDiary Import Package
=======================

Converts 1Diary exports into daily Markdown notes.

The package turns the two export shapes produced by the 1Diary mobile
app (a plain-text dump and a PDF) into structured diary entries with
consistent metadata (date, weekday, time, weather, temperature, location)
and re-paragraphed body text, then writes them as notes with YAML
frontmatter.

Main Components:
    - parsers: Line classification, corruption repair, entry assembly,
      line/page position tracking
    - dataclasses: DiaryEntry and ParseResult records
    - utils: Paragraph reflow and Markdown merge helpers
    - pipeline: PDF text reconstruction, note writing, CLI
    - core: Logging, exceptions, paths, settings, statistics

Primary Interfaces:
    - onediary.parsers.parse_txt_diary / parse_pdf_diary
    - onediary.pipeline.cli: Import CLI

Example Usage:
    >>> from onediary.parsers import parse_txt_diary
    >>> result = parse_txt_diary("2025年02月08日 周六 · 晴 · 4℃ · 苏州市\\n今天天气不错\\n")
    >>> result.entries[0].iso_date
    '2025-02-08'

Version: 1.0.0
License: MIT
"""

__version__ = "1.0.0"
__author__ = "OneDiary Project"

# Expose primary interfaces for convenience
from onediary.dataclasses import DiaryEntry, ParseResult
from onediary.parsers import parse_pdf_diary, parse_txt_diary

__all__ = [
    "DiaryEntry",
    "ParseResult",
    "parse_pdf_diary",
    "parse_txt_diary",
]
