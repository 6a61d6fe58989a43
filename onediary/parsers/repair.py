#!/usr/bin/env python3
"""
repair.py
-------------------
Repairs date tokens garbled by PDF text extraction.

When a 1Diary PDF uses overlapping font substitutions, the text layer can
emit the same glyph several times at one position, so a title such as
2025年02月08日 comes out as

    2025202520252025年02020202⽉08080808⽇

This module collapses the duplicated digit runs, folds repeated or
variant marker glyphs into 年/月/日, and drops stray noise left around a
date that stands alone on its line. Lines without any date marker glyph
are returned untouched.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import logging
import re

# --- Local imports ---
from onediary.parsers import patterns


logger = logging.getLogger(__name__)


# ----- Constants -----
YEAR_WIDTH = 4
MONTH_WIDTH = 2
DAY_WIDTH = 2

# Left over around a lone date: whitespace, punctuation, symbols, marker glyphs
_NOISE = re.compile(
    r"^(?:[\W_]|" + "|".join(map(re.escape, patterns.DATE_MARKERS)) + r")*$"
)


def collapse_digit_run(run: str, width: int) -> str:
    """
    Shrink an over-long digit run to the expected width.

    An exact repetition of its first `width` digits collapses to one copy.
    Anything else keeps the leading `width` digits, which also recovers a
    repetition cut short by the extractor ("020" -> "02").

    Examples:
        >>> collapse_digit_run("20252025", 4)
        '2025'
        >>> collapse_digit_run("020", 2)
        '02'
        >>> collapse_digit_run("08", 2)
        '08'
    """
    if len(run) <= width:
        return run

    unit = run[:width]
    if len(run) % width == 0 and unit * (len(run) // width) == run:
        return unit

    logger.debug(f"Digit run {run!r} is not a clean repetition; truncating")
    return run[:width]


def repair_date_line(line: str) -> str:
    """
    Repair the first date token of a line.

    Args:
        line: Raw line, possibly holding a corrupted date

    Returns:
        The line with its date token normalized, only the token when the
        rest of the line is noise, or the original line when it holds no
        date token

    Examples:
        >>> repair_date_line("2025202520252025年02020202⽉08080808⽇")
        '2025年02月08日'
        >>> repair_date_line("今天很好")
        '今天很好'
    """
    if not any(ch in patterns.DATE_MARKERS for ch in line):
        return line

    m = patterns.CORRUPT_DATE_TOKEN.search(line)
    if not m:
        return line

    token = (
        f"{collapse_digit_run(m.group('year'), YEAR_WIDTH)}年"
        f"{collapse_digit_run(m.group('month'), MONTH_WIDTH)}月"
        f"{collapse_digit_run(m.group('day'), DAY_WIDTH)}日"
    )

    before, after = line[: m.start()], line[m.end() :]
    if _NOISE.match(before) and _NOISE.match(after):
        if line != token:
            logger.debug(f"Repaired date line {line!r} -> {token!r}")
        return token

    return before + token + after
