#!/usr/bin/env python3
"""
md.py
-------------------
Markdown-specific utilities for diary notes.

Provides functions for:
- Frontmatter splitting
- YAML escaping
- Attachment embeds
- Merging a re-imported entry into an existing note of the same day

A day can be imported more than once (for example from two overlapping
exports). The existing note keeps its frontmatter and body; new content
is appended after a horizontal rule.
"""
from __future__ import annotations

# --- Standard library imports ---
import re
from typing import TYPE_CHECKING, Set, Tuple

if TYPE_CHECKING:
    from onediary.dataclasses.diary_entry import DiaryEntry


ENTRY_SEPARATOR = "\n\n***\n\n"
ATTACHMENTS_HEADING = "## 附件"

_SEPARATOR_LINE = re.compile(r"\n[ \t]*\*\*\*[ \t]*\n")


# ----- YAML Frontmatter Parsing -----
def split_frontmatter(content: str) -> Tuple[str, str]:
    """
    Split note content into its frontmatter block and body.

    Expected format:
        ---
        date: 2025-02-08
        ---

        Body content here...

    Args:
        content: Full note content

    Returns:
        Tuple of (frontmatter_block, body)
        - frontmatter_block: Frontmatter including both '---' lines and a
          trailing newline (empty if there is no frontmatter)
        - body: Remaining text, stripped

    Examples:
        >>> split_frontmatter("---\\ndate: 2025-02-08\\n---\\n\\nBody")
        ('---\\ndate: 2025-02-08\\n---\\n', 'Body')
    """
    lines = content.split("\n")

    if not lines or lines[0].strip() != "---":
        return "", content.strip()

    for i, line in enumerate(lines[1:], 1):
        if line.strip() == "---":
            frontmatter = "\n".join(lines[: i + 1]) + "\n"
            body = "\n".join(lines[i + 1 :]).strip()
            return frontmatter, body

    return "", content.strip()


# ----- YAML Formatting Helpers -----
def yaml_escape(value: str) -> str:
    """
    Escape string for a double-quoted YAML scalar.

    Examples:
        >>> yaml_escape('He said "hello"')
        'He said \\\\"hello\\\\"'
    """
    return value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")


def embed_link(path: str) -> str:
    """Wikilink embed for an attachment path."""
    return f"![[{path}]]"


# ----- Merging -----
def entry_blocks(body: str) -> Set[str]:
    """
    Entry texts already merged into a note body.

    The body is split on the entry separator and each block is cut at
    its attachments heading. A block that opens with a '# ' title line is also
    recorded without it, so a note written with a title still matches
    its bare content.

    Examples:
        >>> sorted(entry_blocks("# 周六\\n\\n今天。\\n\\n***\\n\\n晚上。"))
        ['# 周六\\n\\n今天。', '今天。', '晚上。']
    """
    blocks: Set[str] = set()
    for block in _SEPARATOR_LINE.split(f"\n{body}\n"):
        block = ("\n" + block).split(f"\n{ATTACHMENTS_HEADING}", 1)[0].strip()
        if not block:
            continue
        blocks.add(block)
        if block.startswith("# "):
            blocks.add(block.partition("\n")[2].strip())
    return blocks


def merge_entry_content(existing_content: str, entry: DiaryEntry) -> str:
    """
    Append a re-imported entry's body to an existing note.

    Args:
        existing_content: Current note text
        entry: Newly parsed entry for the same day

    Returns:
        Merged note text; the existing text unchanged when the entry has
        no content or that content is already one of the note's entries
    """
    new_content = entry.content.strip()
    frontmatter, body = split_frontmatter(existing_content)

    if not new_content or new_content in entry_blocks(body):
        return existing_content

    merged = frontmatter + "\n" if frontmatter else ""
    if body:
        merged += body + ENTRY_SEPARATOR
    return merged + new_content


def merge_entry_content_with_attachments(existing_content: str, entry: DiaryEntry) -> str:
    """
    Merge like merge_entry_content, then add any new attachment embeds.

    Content or embeds already in the note are not repeated, and a second
    attachments heading is never added.
    """
    frontmatter, body = split_frontmatter(existing_content)

    new_content = entry.content.strip()
    if new_content in entry_blocks(body):
        new_content = ""

    links = [embed_link(path) for path in entry.attachments]
    links = [link for link in links if link not in body]

    if not new_content and not links:
        return existing_content

    merged = frontmatter + "\n" if frontmatter else ""
    if body:
        merged += body
        if new_content:
            merged += ENTRY_SEPARATOR
    merged += new_content

    if links:
        if ATTACHMENTS_HEADING not in merged:
            merged += f"\n\n{ATTACHMENTS_HEADING}"
        merged += "".join(f"\n{link}" for link in links)

    return merged
