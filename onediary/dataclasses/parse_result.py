#!/usr/bin/env python3
"""
parse_result.py
-------------------

Return types of the entry assembler and the position tracker.

- LineRange: inclusive span of source lines that produced one entry
- PageRange: inclusive span of PDF pages that one entry covers
- ParseResult: entries, diagnostics and (PDF only) their line ranges
"""
# ---- Annotations ----
from __future__ import annotations

# ---- Standard library imports ----
from dataclasses import dataclass, field
from typing import Optional, Tuple

# ---- Local imports ----
from onediary.dataclasses.diary_entry import DiaryEntry


@dataclass(frozen=True)
class LineRange:
    """0-based, inclusive (start_line, end_line) into the input's lines."""

    start_line: int
    end_line: int

    def __post_init__(self) -> None:
        if self.start_line < 0 or self.end_line < self.start_line:
            raise ValueError(
                f"Invalid line range ({self.start_line}, {self.end_line})"
            )


@dataclass(frozen=True)
class PageRange:
    """1-based, inclusive (start_page, end_page) of a PDF."""

    start_page: int
    end_page: int

    def __post_init__(self) -> None:
        if self.start_page < 1 or self.end_page < self.start_page:
            raise ValueError(
                f"Invalid page range ({self.start_page}, {self.end_page})"
            )

    def __contains__(self, page: object) -> bool:
        return isinstance(page, int) and self.start_page <= page <= self.end_page


@dataclass(frozen=True)
class ParseResult:
    """
    Output of one parse call.

    Attributes:
        entries: Entries in source order
        errors: Human-readable, non-fatal diagnostics
        entry_line_ranges: One LineRange per entry (PDF dialect only)
    """

    entries: Tuple[DiaryEntry, ...] = field(default_factory=tuple)
    errors: Tuple[str, ...] = field(default_factory=tuple)
    entry_line_ranges: Optional[Tuple[LineRange, ...]] = None
