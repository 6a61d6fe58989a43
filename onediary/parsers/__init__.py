"""
Parsers for 1Diary exports.

- patterns: Glyph tables and line grammars
- classifier: Per-line classification
- repair: Garbled PDF date repair
- assembler: Entry state machine for both dialects
- positions: Line/page ranges and image page attribution
"""
from .assembler import parse_pdf_diary, parse_txt_diary
from .classifier import Dialect, LineKind, classify_line, is_info_line
from .positions import (
    PageAttribution,
    associate_attachments,
    attribute_pages,
    map_line_ranges_to_pages,
)
from .repair import repair_date_line

__all__ = [
    "parse_pdf_diary",
    "parse_txt_diary",
    "Dialect",
    "LineKind",
    "classify_line",
    "is_info_line",
    "PageAttribution",
    "associate_attachments",
    "attribute_pages",
    "map_line_ranges_to_pages",
    "repair_date_line",
]
