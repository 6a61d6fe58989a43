#!/usr/bin/env python3
"""
classifier.py
-------------------
Classifies single lines of a 1Diary export.

Each dialect has an ordered list of (LineKind, extractor) rules. An
extractor is a pure function that returns a typed match or None; the
first rule that matches decides the line's kind. Lines no rule claims are
BLANK when empty or whitespace-only, and BODY otherwise.

    PDF dialect:   DATE_HEADER, METADATA
    Plain-text:    DATE_LINE

A date token whose numbers do not form a real calendar date never
matches, so such a line falls through to BODY.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import logging
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Callable, Match, Optional, Sequence, Tuple, Union

# --- Local imports ---
from onediary.parsers import patterns


logger = logging.getLogger(__name__)


# ----- Types -----
class Dialect(str, Enum):
    """Supported export shapes."""

    TXT = "txt"
    PDF = "pdf"


class LineKind(str, Enum):
    """Tag for a classified line."""

    DATE_HEADER = "date_header"
    METADATA = "metadata"
    DATE_LINE = "date_line"
    BLANK = "blank"
    BODY = "body"


@dataclass(frozen=True)
class DateHeader:
    """A PDF-dialect title line holding only the entry date."""

    date: date


@dataclass(frozen=True)
class Metadata:
    """A PDF-dialect metadata line: weekday · time · weather · [temp ·] location."""

    weekday: str
    time: str
    weather: Optional[str]
    temperature: Optional[str]
    location: Optional[str]


@dataclass(frozen=True)
class DateLine:
    """A plain-text dialect header: date, weekday and optional metadata on one line."""

    date: date
    weekday: str
    weather: Optional[str]
    temperature: Optional[str]
    location: Optional[str]


LineMatch = Union[DateHeader, Metadata, DateLine]


@dataclass(frozen=True)
class ClassifiedLine:
    """
    A source line tagged with its kind.

    Attributes:
        kind: Classification tag
        text: The line as given (before stripping)
        match: Extracted fields for DATE_HEADER, METADATA and DATE_LINE
    """

    kind: LineKind
    text: str
    match: Optional[LineMatch] = None


Extractor = Callable[[str], Optional[LineMatch]]


# ----- Helpers -----
def _to_date(m: Match[str]) -> Optional[date]:
    try:
        return date(int(m.group("year")), int(m.group("month")), int(m.group("day")))
    except ValueError:
        logger.debug(f"Rejected impossible date token: {m.group(0)!r}")
        return None


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


# ----- Extractors -----
def match_date_header(line: str) -> Optional[DateHeader]:
    """
    Match a PDF date header, trying strict, loose, then fallback patterns.

    Examples:
        >>> match_date_header("2025年02月08日")
        DateHeader(date=datetime.date(2025, 2, 8))
        >>> match_date_header("今天是2025年02月08日") is None
        True
    """
    line = line.rstrip("\r")
    for pattern in patterns.DATE_HEADER_PATTERNS:
        m = pattern.match(line)
        if m:
            parsed = _to_date(m)
            return DateHeader(parsed) if parsed else None
    return None


def match_metadata(line: str) -> Optional[Metadata]:
    """Match a PDF metadata line and normalize its fields."""
    m = patterns.METADATA_LINE.match(line.rstrip("\r"))
    if not m:
        return None

    temperature = m.group("temperature")
    location = _clean(m.group("location"))
    # "周六 · 09:41 · 晴 · 4℃" has no location; the last slot is the temperature
    if temperature is None and location and patterns.TEMPERATURE_ONLY.match(location):
        temperature, location = location, None

    return Metadata(
        weekday=patterns.normalize_weekday(m.group("weekday")),
        time=patterns.normalize_time(m.group("time")),
        weather=_clean(m.group("weather")),
        temperature=patterns.normalize_temperature(temperature),
        location=location,
    )


def match_date_line(line: str) -> Optional[DateLine]:
    """
    Match a plain-text dialect date line.

    Examples:
        >>> match_date_line("2025年02月08日 周六 · 晴 · 4℃ · 苏州市").temperature
        '4°C'
    """
    m = patterns.DATE_LINE.match(line.rstrip("\r"))
    if not m:
        return None
    parsed = _to_date(m)
    if parsed is None:
        return None
    return DateLine(
        date=parsed,
        weekday=patterns.normalize_weekday(m.group("weekday")),
        weather=_clean(m.group("weather")),
        temperature=patterns.normalize_temperature(m.group("temperature")),
        location=_clean(m.group("location")),
    )


# ----- Rule tables -----
# METADATA also accepts a line ending in a temperature with no location;
# match_metadata moves that slot into `temperature`
PDF_RULES: Tuple[Tuple[LineKind, Extractor], ...] = (
    (LineKind.DATE_HEADER, match_date_header),
    (LineKind.METADATA, match_metadata),
)

TXT_RULES: Tuple[Tuple[LineKind, Extractor], ...] = (
    (LineKind.DATE_LINE, match_date_line),
)

_RULES = {Dialect.PDF: PDF_RULES, Dialect.TXT: TXT_RULES}


# ----- Public API -----
def classify_line(
    line: str,
    dialect: Dialect,
    rules: Optional[Sequence[Tuple[LineKind, Extractor]]] = None,
) -> ClassifiedLine:
    """
    Classify one line of the given dialect.

    Args:
        line: Raw line (PDF lines should already be repaired)
        dialect: Export dialect whose rules apply
        rules: Optional rule list overriding the dialect's table

    Returns:
        ClassifiedLine tagged with the first matching rule's kind
    """
    for kind, extractor in rules if rules is not None else _RULES[Dialect(dialect)]:
        found = extractor(line)
        if found is not None:
            return ClassifiedLine(kind, line, found)

    if not line.strip():
        return ClassifiedLine(LineKind.BLANK, line)
    return ClassifiedLine(LineKind.BODY, line)


def is_info_line(line: str) -> bool:
    """
    True when the line independently reads as a header or metadata line.

    Checked against every grammar regardless of dialect: the PDF date
    header, the plain-text date line and the PDF metadata line.
    """
    if not line.strip():
        return False
    return (
        match_date_header(line) is not None
        or match_date_line(line) is not None
        or match_metadata(line) is not None
    )
