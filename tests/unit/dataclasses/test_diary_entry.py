"""
test_diary_entry.py
-------------------
Unit tests for the DiaryEntry dataclass.

Covers:
- Derived properties and titles
- Markdown rendering with YAML frontmatter
- File naming templates
- Immutability
"""
from dataclasses import FrozenInstanceError, replace
from datetime import date

import pytest
import yaml

from onediary.dataclasses.diary_entry import DiaryEntry


def _frontmatter(markdown):
    """Parse the YAML block between the first two '---' lines."""
    _, block, _ = markdown.split("---\n", 2)
    return yaml.safe_load(block)


class TestDiaryEntryProperties:
    """Derived values."""

    def test_iso_date_and_year(self, sample_entry):
        """Date helpers are zero-padded."""
        assert sample_entry.iso_date == "2025-02-08"
        assert sample_entry.year == "2025"

    def test_title_all_fields(self, sample_entry):
        """Weekday and metadata joined by middle dots."""
        assert sample_entry.title() == "周六 · 晴 · 4°C · 苏州市"

    def test_title_skips_missing(self, minimal_entry):
        """Missing metadata is left out."""
        assert minimal_entry.title() == "周日"
        assert replace(minimal_entry, weekday="").title() == ""

    def test_frozen(self, sample_entry):
        """Entries cannot be modified in place."""
        with pytest.raises(FrozenInstanceError):
            sample_entry.content = "changed"


class TestToMarkdown:
    """Test to_markdown()."""

    def test_full_layout(self, sample_entry):
        """Frontmatter, title, then content."""
        assert sample_entry.to_markdown() == (
            "---\n"
            "date: 2025-02-08\n"
            "weekday: 周六\n"
            'time: "09:41"\n'
            "weather: 晴\n"
            "temperature: 4°C\n"
            'location: "苏州市"\n'
            "---\n"
            "\n"
            "# 周六 · 晴 · 4°C · 苏州市\n"
            "\n"
            "今天天气不错。\n\n下午去了平江路。"
        )

    def test_frontmatter_is_valid_yaml(self, sample_entry):
        """Values load back with the right types."""
        data = _frontmatter(sample_entry.to_markdown())
        assert data["date"] == date(2025, 2, 8)
        assert data["time"] == "09:41"
        assert data["temperature"] == "4°C"
        assert data["location"] == "苏州市"

    def test_optional_fields_omitted(self, minimal_entry):
        """Only present metadata is written."""
        data = _frontmatter(minimal_entry.to_markdown())
        assert set(data) == {"date", "weekday"}

    def test_without_title(self, sample_entry):
        """add_title=False skips the heading."""
        assert "# " not in sample_entry.to_markdown(add_title=False)

    def test_location_quoted_and_escaped(self, minimal_entry):
        """Locations with quotes and colons stay valid YAML."""
        entry = replace(minimal_entry, location='咖啡馆 "A": 二楼')
        assert _frontmatter(entry.to_markdown())["location"] == '咖啡馆 "A": 二楼'

    def test_attachments_section(self, minimal_entry):
        """Attachments are embedded under their own heading."""
        entry = replace(minimal_entry, attachments=("img/a.png", "img/b.png"))
        assert entry.to_markdown().endswith(
            "在家看书。\n\n## 附件\n![[img/a.png]]\n![[img/b.png]]"
        )


class TestFileName:
    """Test file_name()."""

    @pytest.mark.parametrize(
        "template, expected",
        [
            ("YYYY-MM-DD", "2025-02-08.md"),
            ("YYYY年MM月DD日", "2025年02月08日.md"),
            ("DD.MM.YYYY", "08.02.2025.md"),
        ],
    )
    def test_templates(self, sample_entry, template, expected):
        """YYYY, MM and DD are substituted."""
        assert sample_entry.file_name(template) == expected
