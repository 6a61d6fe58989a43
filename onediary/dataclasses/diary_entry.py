#!/usr/bin/env python3
"""
diary_entry.py
-------------------

Defines the DiaryEntry dataclass representing one day of a 1Diary export.

Each DiaryEntry instance contains:
- the entry date and weekday label
- optional metadata
    - time (PDF exports only)
    - weather
    - temperature (always with a '°C' suffix)
    - location
- reflowed body content
- attachment paths assigned after PDF page images are attributed

Entries are immutable; attaching images produces a new instance.
"""
# ---- Annotations ----
from __future__ import annotations

# ---- Standard library imports ----
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Tuple

# ---- Local imports ----
from onediary.utils.md import ATTACHMENTS_HEADING, embed_link, yaml_escape


# ----- Dataclass -----
@dataclass(frozen=True)
class DiaryEntry:
    """
    One diary day parsed from a 1Diary export.

    Attributes:
        date (date): Calendar date of the entry.
        weekday (str): Weekday label as written by the app ('周六'); empty
            when the export did not provide one.
        content (str): Body text, paragraphs separated by a blank line.
        time (Optional[str]): HH:MM clock time (PDF exports only).
        weather (Optional[str]): Free-text weather.
        temperature (Optional[str]): Temperature such as '4°C'.
        location (Optional[str]): Free-text location.
        attachments (Tuple[str, ...]): Vault paths of attached images.
    """

    date: date
    weekday: str
    content: str
    time: Optional[str] = None
    weather: Optional[str] = None
    temperature: Optional[str] = None
    location: Optional[str] = None
    attachments: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def iso_date(self) -> str:
        """Entry date as YYYY-MM-DD."""
        return self.date.isoformat()

    @property
    def year(self) -> str:
        return f"{self.date.year:04d}"

    # ---- Serialization ----
    def title(self) -> str:
        """Heading text: weekday · weather · temperature · location."""
        parts = [self.weekday]
        parts.extend(p for p in (self.weather, self.temperature, self.location) if p)
        return " · ".join(p for p in parts if p)

    def to_markdown(self, add_title: bool = True) -> str:
        """
        Render the entry as a note with YAML frontmatter.

        Args:
            add_title: Write a '# weekday · weather · ...' heading

        Returns:
            Markdown text (frontmatter, optional heading, body, attachments)
        """
        md_lines: List[str] = [
            "---",
            f"date: {self.iso_date}",
            f"weekday: {self.weekday}",
        ]
        if self.time:
            md_lines.append(f'time: "{self.time}"')
        if self.weather:
            md_lines.append(f"weather: {self.weather}")
        if self.temperature:
            md_lines.append(f"temperature: {self.temperature}")
        if self.location:
            md_lines.append(f'location: "{yaml_escape(self.location)}"')
        md_lines.extend(["---", ""])

        if add_title and self.title():
            md_lines.extend([f"# {self.title()}", ""])

        md_lines.append(self.content)

        if self.attachments:
            md_lines.extend(["", ATTACHMENTS_HEADING])
            md_lines.extend(embed_link(path) for path in self.attachments)

        return "\n".join(md_lines)

    def file_name(self, date_format: str = "YYYY-MM-DD") -> str:
        """
        Note file name built from a YYYY/MM/DD template.

        Examples:
            >>> DiaryEntry(date(2025, 2, 8), "周六", "").file_name("YYYY年MM月DD日")
            '2025年02月08日.md'
        """
        name = (
            date_format.replace("YYYY", self.year)
            .replace("MM", f"{self.date.month:02d}")
            .replace("DD", f"{self.date.day:02d}")
        )
        return f"{name}.md"
