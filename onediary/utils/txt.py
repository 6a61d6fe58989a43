"""
txt.py
-------------------
Set of utilities for reshaping diary body text.

PDF exports break lines at the physical page width, not at sentence
boundaries, and insert blank lines where pages end. These helpers put the
sentences back together and decide which line breaks carry meaning.

Intended to be imported by the entry assembler.
"""

from __future__ import annotations

# --- Standard library imports ---
import re
from typing import Callable, List, Optional

# --- Third party imports ---
from ftfy import fix_text  # type: ignore


# Full- and half-width periods, exclamation and question marks, semicolons,
# colons and closing parentheses
SENTENCE_TERMINALS = "。．.！!？?；;：:）)"

PARAGRAPH_SEPARATOR = "\n\n"

_BLANK_RUN = re.compile(r"\n(?:[ \t]*\n)+")


# ----- Input cleanup -----
def clean_text(text: str) -> str:
    """
    input: text, raw export text
    output: text with mojibake and stray control characters fixed
    process:
      * Full-width forms and curly quotes are kept as written
      * Line breaks are left alone so line indices stay stable
    """
    return fix_text(
        text,
        fix_character_width=False,
        uncurl_quotes=False,
        fix_line_breaks=False,
    )


# ----- Sentence boundaries -----
def ends_sentence(line: str) -> bool:
    """
    input: line, a body line
    output: True if the trimmed line ends in sentence-terminal punctuation
    """
    text = line.rstrip()
    return bool(text) and text[-1] in SENTENCE_TERMINALS


# ----- Plain-text body -----
def format_body(lines: List[str]) -> str:
    """
    input: lines, raw body lines of a plain-text export entry
    output: the lines joined verbatim, trimmed, with runs of blank lines
      folded into one (the plain-text export is already paragraphed)
    """
    text = "\n".join(line.rstrip("\r") for line in lines).strip()
    return _BLANK_RUN.sub(PARAGRAPH_SEPARATOR, text)


# ----- Reflow PDF body -----
def reflow_paragraphs(
    lines: List[str],
    is_info_line: Optional[Callable[[str], bool]] = None,
) -> str:
    """
    input: lines, body lines of one entry in source order;
      is_info_line, predicate for lines that look like headers/metadata
    output: body text with paragraphs separated by one blank line
    process:
      * A blank line closes the paragraph only when the line before it
        ends a sentence; otherwise it is a page-break artifact and dropped
      * An info line is always a paragraph of its own
      * A line following one that does not end a sentence is glued onto
        it with no space (a hard wrap inside a sentence)
      * Otherwise the line starts a new line inside the paragraph
    """
    paragraphs: List[List[str]] = []
    current: List[str] = []

    def close() -> None:
        nonlocal current
        if current:
            paragraphs.append(current)
        current = []

    for raw in lines:
        text = raw.strip()

        if not text:
            if current and ends_sentence(current[-1]):
                close()
            continue

        if is_info_line is not None and is_info_line(text):
            close()
            paragraphs.append([text])
            continue

        if current and not ends_sentence(current[-1]):
            current[-1] += text
        else:
            current.append(text)

    close()

    return PARAGRAPH_SEPARATOR.join(
        "\n".join(paragraph) for paragraph in paragraphs if any(paragraph)
    )


# ----- Size -----
def count_characters(text: str) -> int:
    """
    input: text, entry body
    output: number of non-whitespace characters (CJK text has no word
      boundaries, so characters stand in for words)
    """
    return sum(1 for ch in text if not ch.isspace())
