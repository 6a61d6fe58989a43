"""
dataclasses package
-------------------
Dataclass definitions for parsed diary data.

- DiaryEntry: One diary day with metadata and body
- ParseResult: Parser output (entries, diagnostics, line ranges)
- LineRange / PageRange: Source positions of an entry
"""
from onediary.dataclasses.diary_entry import DiaryEntry
from onediary.dataclasses.parse_result import LineRange, PageRange, ParseResult

__all__ = ["DiaryEntry", "LineRange", "PageRange", "ParseResult"]
