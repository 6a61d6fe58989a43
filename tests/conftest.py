"""
conftest.py
-----------
Shared pytest fixtures for OneDiary tests.

Provides fixtures for:
- Temporary directories and vaults
- Sample plain-text and PDF-derived exports
- Entry factories
"""
import pytest
from pathlib import Path
from datetime import date
from tempfile import TemporaryDirectory

from onediary.dataclasses.diary_entry import DiaryEntry


# ----- Path Fixtures -----

@pytest.fixture
def tmp_dir():
    """Create a temporary directory for test file operations."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def vault_dir(tmp_dir):
    """Empty vault root."""
    vault = tmp_dir / "vault"
    vault.mkdir()
    return vault


# ----- Sample Export Fixtures -----

@pytest.fixture
def txt_export_text():
    """Plain-text export with two days and a preamble."""
    return (
        "1Diary 导出\n"
        "\n"
        "2025年02月08日 周六 · 晴 · 4℃ · 苏州市\n"
        "今天天气不错\n"
        "\n"
        "去了平江路。\n"
        "\n"
        "2025年02月09日 周日 · 多云\n"
        "在家看书。\n"
    )


@pytest.fixture
def pdf_export_text():
    """Text rebuilt from a PDF export: two days spread over three pages."""
    return (
        "2025年02月08日\n"            # 0  page 1
        "周六 · 09:41 · 晴 · 4℃ · 苏州市\n"  # 1
        "今天天气\n"                  # 2
        "不错。\n"                    # 3
        "\n"                          # 4  page 2 (page break)
        "下午去了平江路。\n"          # 5
        "2025年02月09日\n"            # 6
        "周日 · 21:05 · 多云 · 苏州市\n"  # 7
        "在家看书。\n"                # 8
        "\n"                          # 9  page 3 (page break)
        "晚上早睡。"                  # 10
    )


@pytest.fixture
def pdf_line_to_page():
    """Page map matching pdf_export_text."""
    return [1, 1, 1, 1, 2, 2, 2, 2, 2, 3, 3]


# ----- Entry Fixtures -----

@pytest.fixture
def sample_entry():
    """Fully populated entry."""
    return DiaryEntry(
        date=date(2025, 2, 8),
        weekday="周六",
        content="今天天气不错。\n\n下午去了平江路。",
        time="09:41",
        weather="晴",
        temperature="4°C",
        location="苏州市",
    )


@pytest.fixture
def minimal_entry():
    """Entry with only the date, weekday and content."""
    return DiaryEntry(date=date(2025, 2, 9), weekday="周日", content="在家看书。")
