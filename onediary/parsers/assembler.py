#!/usr/bin/env python3
"""
assembler.py
-------------------
Builds diary entries from a whole export, one line at a time.

The assembler is a small state machine. Its state is an immutable
AssemblyState value; each line produces a new AssemblyState through a
step function. Body lines, entries and diagnostics are pushed onto
persistent chains, so every step is constant time and no earlier state
is ever changed. A chain becomes a tuple when it is read: the body at
flush, the entries and diagnostics when the parse ends.

States:
    IDLE               no entry open yet (leading lines are ignored)
    AWAITING_METADATA  PDF only: a date header was just read
    ACCUMULATING_BODY  body lines are collected for the open entry

Plain-text dialect:
    A date line opens an entry with all of its metadata at once. Body
    lines are kept verbatim and only trimmed.

PDF dialect:
    Every line is repaired before classification. A date header opens an
    entry; the next non-blank line should be the metadata line. When it is
    not, a diagnostic is recorded and the line becomes the first body line.
    Bodies are reflowed into paragraphs, and each kept entry records the
    inclusive range of source lines it came from.

An entry whose body is empty after trimming is dropped, together with
its line range.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import logging
from dataclasses import dataclass, replace
from datetime import date
from enum import Enum
from typing import Any, Callable, List, Optional, Sequence, Tuple

# --- Local imports ---
from onediary.dataclasses.diary_entry import DiaryEntry
from onediary.dataclasses.parse_result import LineRange, ParseResult
from onediary.parsers.classifier import (
    DateHeader,
    DateLine,
    Dialect,
    LineKind,
    Metadata,
    classify_line,
    is_info_line,
)
from onediary.parsers.repair import repair_date_line
from onediary.utils.txt import count_characters, format_body, reflow_paragraphs


logger = logging.getLogger(__name__)


BodyRenderer = Callable[[Sequence[str]], str]

# (newest item, older chain) pairs ending in None
Chain = Optional[Tuple[Any, Any]]


def push(chain: Chain, item: Any) -> Chain:
    return (item, chain)


def unwind(chain: Chain) -> Tuple[Any, ...]:
    """Items of a chain, oldest first."""
    items = []
    while chain is not None:
        item, chain = chain
        items.append(item)
    return tuple(reversed(items))


class AssemblerState(str, Enum):
    """Position of the assembler inside the current entry."""

    IDLE = "idle"
    AWAITING_METADATA = "awaiting_metadata"
    ACCUMULATING_BODY = "accumulating_body"


@dataclass(frozen=True)
class PendingEntry:
    """An entry that is still receiving lines."""

    date: date
    start_line: int
    weekday: str = ""
    time: Optional[str] = None
    weather: Optional[str] = None
    temperature: Optional[str] = None
    location: Optional[str] = None
    body: Chain = None

    def add_line(self, line: str) -> PendingEntry:
        return replace(self, body=push(self.body, line))

    def body_lines(self) -> Tuple[str, ...]:
        return unwind(self.body)

    def to_entry(self, content: str) -> DiaryEntry:
        return DiaryEntry(
            date=self.date,
            weekday=self.weekday,
            content=content,
            time=self.time,
            weather=self.weather,
            temperature=self.temperature,
            location=self.location,
        )


@dataclass(frozen=True)
class AssemblyState:
    """
    Accumulator threaded through the per-line step functions.

    Attributes:
        state: Current machine state
        current: Entry being built, None while IDLE
        entries: Chain of entries flushed so far
        errors: Chain of diagnostics recorded so far
        line_ranges: Chain with one range per flushed entry
    """

    state: AssemblerState = AssemblerState.IDLE
    current: Optional[PendingEntry] = None
    entries: Chain = None
    errors: Chain = None
    line_ranges: Chain = None

    def to_result(self, with_ranges: bool) -> ParseResult:
        return ParseResult(
            entries=unwind(self.entries),
            errors=unwind(self.errors),
            entry_line_ranges=unwind(self.line_ranges) if with_ranges else None,
        )


# ----- Helpers -----
def split_lines(text: str) -> List[str]:
    """
    Split on '\\n' only, dropping a trailing '\\r' from each line.

    Line indices must match the page map built for PDF text, so no other
    line boundary (form feed, U+2028, ...) is honored.
    """
    return [line.rstrip("\r") for line in text.split("\n")]


def reflow_body(lines: Sequence[str]) -> str:
    """Reflow PDF body lines, isolating stray header/metadata lines."""
    return reflow_paragraphs(list(lines), is_info_line)


def plain_body(lines: Sequence[str]) -> str:
    return format_body(list(lines))


def flush(acc: AssemblyState, end_line: int, render: BodyRenderer) -> AssemblyState:
    """
    Close the open entry.

    Args:
        acc: Current accumulator
        end_line: Last source line (inclusive) belonging to the entry
        render: Turns the collected body lines into content

    Returns:
        Accumulator with no open entry; the entry and its line range are
        appended only when its content is non-empty
    """
    pending = acc.current
    if pending is None:
        return acc

    content = render(pending.body_lines()).strip()
    closed = replace(acc, current=None, state=AssemblerState.IDLE)

    if not content:
        logger.debug(f"Dropping empty entry for {pending.date.isoformat()}")
        return closed

    entry = pending.to_entry(content)
    logger.debug(
        f"Assembled entry {entry.iso_date} "
        f"(lines {pending.start_line}-{end_line}, {count_characters(content)} chars)"
    )
    return replace(
        closed,
        entries=push(closed.entries, entry),
        line_ranges=push(closed.line_ranges, LineRange(pending.start_line, end_line)),
    )


def _ignore_leading(index: int, line: str) -> None:
    if line.strip():
        logger.debug(f"Ignoring line {index + 1} before the first entry: {line!r}")


# ----- Plain-text dialect -----
def step_txt(acc: AssemblyState, index: int, line: str) -> AssemblyState:
    """Consume one plain-text line."""
    classified = classify_line(line, Dialect.TXT)

    if classified.kind is LineKind.DATE_LINE:
        found: DateLine = classified.match  # type: ignore[assignment]
        acc = flush(acc, index - 1, plain_body)
        pending = PendingEntry(
            date=found.date,
            start_line=index,
            weekday=found.weekday,
            weather=found.weather,
            temperature=found.temperature,
            location=found.location,
        )
        return replace(acc, current=pending, state=AssemblerState.ACCUMULATING_BODY)

    if acc.current is None:
        _ignore_leading(index, line)
        return acc

    return replace(acc, current=acc.current.add_line(line))


def parse_txt_diary(text: str) -> ParseResult:
    """
    Parse a 1Diary plain-text export.

    Args:
        text: Full export text

    Returns:
        ParseResult with entries in source order; entry_line_ranges is None

    Examples:
        >>> result = parse_txt_diary("2025年02月08日 周六 · 晴 · 4℃ · 苏州市\\n今天天气不错\\n")
        >>> result.entries[0].content
        '今天天气不错'
    """
    lines = split_lines(text)

    acc = AssemblyState()
    for index, line in enumerate(lines):
        acc = step_txt(acc, index, line)
    acc = flush(acc, len(lines) - 1, plain_body)

    result = acc.to_result(with_ranges=False)
    logger.debug(f"Parsed {len(result.entries)} plain-text entries from {len(lines)} lines")
    return result


# ----- PDF dialect -----
def step_pdf(acc: AssemblyState, index: int, line: str) -> AssemblyState:
    """Consume one line of text reconstructed from a PDF."""
    classified = classify_line(repair_date_line(line), Dialect.PDF)

    if classified.kind is LineKind.DATE_HEADER:
        header: DateHeader = classified.match  # type: ignore[assignment]
        acc = flush(acc, index - 1, reflow_body)
        pending = PendingEntry(date=header.date, start_line=index)
        return replace(acc, current=pending, state=AssemblerState.AWAITING_METADATA)

    if acc.current is None:
        _ignore_leading(index, line)
        return acc

    if acc.state is AssemblerState.AWAITING_METADATA:
        if classified.kind is LineKind.METADATA:
            meta: Metadata = classified.match  # type: ignore[assignment]
            pending = replace(
                acc.current,
                weekday=meta.weekday,
                time=meta.time,
                weather=meta.weather,
                temperature=meta.temperature,
                location=meta.location,
            )
            return replace(acc, current=pending, state=AssemblerState.ACCUMULATING_BODY)

        if classified.kind is LineKind.BLANK:
            return acc

        message = (
            f"Line {index + 1}: expected a metadata line after the date header "
            f"for {acc.current.date.isoformat()}, found {line.strip()!r}"
        )
        logger.debug(message)
        acc = replace(
            acc,
            errors=push(acc.errors, message),
            state=AssemblerState.ACCUMULATING_BODY,
        )

    return replace(acc, current=acc.current.add_line(line))


def parse_pdf_diary(text: str) -> ParseResult:
    """
    Parse text reconstructed from a 1Diary PDF export.

    Args:
        text: Full text, one physical line per '\\n', a blank line between
            pages

    Returns:
        ParseResult with entries, diagnostics and one LineRange per entry

    Examples:
        >>> text = "2025年02月08日\\n周六 · 09:41 · 晴 · 4℃ · 苏州市\\n今天\\n很好。"
        >>> parse_pdf_diary(text).entries[0].content
        '今天很好。'
    """
    lines = split_lines(text)

    acc = AssemblyState()
    for index, line in enumerate(lines):
        acc = step_pdf(acc, index, line)
    acc = flush(acc, len(lines) - 1, reflow_body)

    result = acc.to_result(with_ranges=True)
    logger.debug(
        f"Parsed {len(result.entries)} PDF entries from {len(lines)} lines "
        f"({len(result.errors)} diagnostics)"
    )
    return result
