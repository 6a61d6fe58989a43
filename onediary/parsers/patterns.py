#!/usr/bin/env python3
"""
patterns.py
-------------------
Glyph tables and compiled line grammars for 1Diary exports.

PDF exports of 1Diary are typeset with subsetted CJK fonts. Text pulled
out of those PDFs sometimes carries Kangxi-radical or compatibility code
points instead of the ordinary ideographs (⽉ for 月, ⽇ for 日, ⼀ for 一
and so on). Each table below maps every glyph we have seen in the wild
to its canonical form, so a new variant only needs a new table row.

Grammars:
    PDF dialect:
        2025年02月08日                                 (date header)
        周六 · 09:41 · 晴 · 4℃ · 苏州市               (metadata line)
    Plain-text dialect:
        2025年02月08日 周六 · 晴 · 4℃ · 苏州市       (date line)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import re
from typing import Dict, Optional


# ----- Glyph tables -----
YEAR_MARKERS: Dict[str, str] = {
    "年": "年",
    "\uf98e": "年",  # CJK COMPATIBILITY IDEOGRAPH-F98E
}

MONTH_MARKERS: Dict[str, str] = {
    "月": "月",
    "\u2f49": "月",  # ⽉ KANGXI RADICAL MOON
}

DAY_MARKERS: Dict[str, str] = {
    "日": "日",
    "\u2f47": "日",  # ⽇ KANGXI RADICAL SUN
}

WEEKDAY_VARIANTS: Dict[str, str] = {
    "\u2f00": "一",  # ⼀ KANGXI RADICAL ONE
    "\u2f06": "二",  # ⼆ KANGXI RADICAL TWO
    "\u2f47": "日",  # ⽇ KANGXI RADICAL SUN
    "\uf9d1": "六",  # CJK COMPATIBILITY IDEOGRAPH-F9D1
}

TEMPERATURE_UNITS: Dict[str, str] = {
    "℃": "°C",
    "°C": "°C",
    "°c": "°C",
}

SEPARATORS = "·•・∙"

CANONICAL_TEMPERATURE_UNIT = "°C"

DATE_MARKERS = frozenset(YEAR_MARKERS) | frozenset(MONTH_MARKERS) | frozenset(DAY_MARKERS)

_WEEKDAY_TRANSLATION = str.maketrans(WEEKDAY_VARIANTS)
_MARKER_TRANSLATION = str.maketrans({**YEAR_MARKERS, **MONTH_MARKERS, **DAY_MARKERS})


# ----- Pattern fragments -----
def _char_class(chars) -> str:
    return "[" + "".join(re.escape(c) for c in chars) + "]"


YEAR = _char_class(YEAR_MARKERS)
MONTH = _char_class(MONTH_MARKERS)
DAY = _char_class(DAY_MARKERS)
SEP = _char_class(SEPARATORS)
NOT_SEP = "[^" + "".join(re.escape(c) for c in SEPARATORS) + "]"
WEEKDAY = _char_class("周星期一二三四五六日天" + "".join(WEEKDAY_VARIANTS)) + "+"
TEMPERATURE = r"-?\d+(?:\.\d+)?\s*(?:℃|°\s*[Cc])"
LEADING_MARKER = r"[#*>•·\-]"
TIME = r"\d{1,2}[:：]\d{2}"


# ----- PDF dialect -----
STRICT_DATE_HEADER = re.compile(
    rf"^\s*(?:{LEADING_MARKER}\s*)?"
    rf"(?P<year>\d{{4}}){YEAR}(?P<month>\d{{2}}){MONTH}(?P<day>\d{{2}}){DAY}\s*$"
)

LOOSE_DATE_HEADER = re.compile(
    rf"^\s*(?:{LEADING_MARKER}\s*)?"
    rf"(?P<year>\d{{4}})\s*{YEAR}\s*(?P<month>\d{{1,2}})\s*{MONTH}"
    rf"\s*(?P<day>\d{{1,2}})\s*{DAY}\s*$"
)

# Leading (or trailing) noise may be anything that is not a letter, digit
# or ideograph; a date quoted inside prose never matches.
FALLBACK_DATE_HEADER = re.compile(
    rf"^[\W_]*?(?P<year>\d{{4}})\s*{YEAR}\s*(?P<month>\d{{1,2}})\s*{MONTH}"
    rf"\s*(?P<day>\d{{1,2}})\s*{DAY}[\W_]*$"
)

DATE_HEADER_PATTERNS = (STRICT_DATE_HEADER, LOOSE_DATE_HEADER, FALLBACK_DATE_HEADER)

# Only weather is bounded by separators; a location may contain them
# ("苏州市 · 工业园区"). With no temperature slot, a location that reads as
# a temperature is taken as the temperature (see classifier.match_metadata).
METADATA_LINE = re.compile(
    rf"^\s*(?P<weekday>{WEEKDAY})\s*{SEP}\s*"
    rf"(?P<time>{TIME})\s*{SEP}\s*"
    rf"(?P<weather>{NOT_SEP}+?)\s*{SEP}\s*"
    rf"(?:(?P<temperature>{TEMPERATURE})\s*{SEP}\s*)?"
    rf"(?P<location>.+?)\s*$"
)


# ----- Plain-text dialect -----
DATE_LINE = re.compile(
    rf"^\s*(?P<year>\d{{4}}){YEAR}(?P<month>\d{{2}}){MONTH}(?P<day>\d{{2}}){DAY}"
    rf"\s+(?P<weekday>{WEEKDAY})"
    rf"(?:\s*{SEP}\s*(?P<weather>(?!\s*{TEMPERATURE}\s*(?:{SEP}|$)){NOT_SEP}+?))?"
    rf"(?:\s*{SEP}\s*(?P<temperature>{TEMPERATURE}))?"
    rf"(?:\s*{SEP}\s*(?P<location>.+?))?"
    r"\s*$"
)


# ----- Corruption repair -----
CORRUPT_DATE_TOKEN = re.compile(
    rf"(?P<year>\d+)\s*{YEAR}+\s*(?P<month>\d+)\s*{MONTH}+\s*(?P<day>\d+)\s*{DAY}+"
)

TEMPERATURE_ONLY = re.compile(rf"^\s*{TEMPERATURE}\s*$")


# ----- Normalizers -----
def normalize_weekday(text: str) -> str:
    """Map alternate weekday code points to canonical ideographs."""
    return text.translate(_WEEKDAY_TRANSLATION).strip()


def normalize_markers(text: str) -> str:
    """Map alternate year/month/day marker glyphs to 年/月/日."""
    return text.translate(_MARKER_TRANSLATION)


def normalize_temperature(text: Optional[str]) -> Optional[str]:
    """
    Normalize a temperature token to the canonical '°C' suffix.

    Examples:
        >>> normalize_temperature("4℃")
        '4°C'
        >>> normalize_temperature("-3 ° c")
        '-3°C'
    """
    if not text:
        return None
    compact = re.sub(r"\s+", "", text)
    for unit, canonical in TEMPERATURE_UNITS.items():
        if compact.endswith(unit):
            return compact[: -len(unit)] + canonical
    return compact


def normalize_time(text: str) -> str:
    """Normalize an H:MM / HH：MM token to zero-padded HH:MM."""
    hours, minutes = re.split(r"[:：]", text.strip())
    return f"{int(hours):02d}:{minutes}"
