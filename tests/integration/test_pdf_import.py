"""
test_pdf_import.py
------------------
Integration tests for importing PDF exports, with the PDF reader
replaced by a prepared text layer.
"""
from pathlib import Path
from unittest.mock import patch

import pytest

from onediary.core.exceptions import Pdf2MdError
from onediary.core.settings import ImportSettings
from onediary.parsers.positions import PageAttribution
from onediary.pipeline.pdf2md import convert_pdf_file
from onediary.pipeline.pdf_reader import PdfDocument, PdfImage


def _image(page, index=0):
    return PdfImage(data=b"IMG%d" % page, format="png", width=4, height=4, page_num=page, image_index=index)


@pytest.fixture
def pdf_export(tmp_dir):
    path = tmp_dir / "1Diary.pdf"
    path.write_bytes(b"%PDF-1.4 placeholder")
    return path


@pytest.fixture
def document(pdf_export_text, pdf_line_to_page):
    """Two entries on pages 1-2 and 2-3, images on pages 1 and 3, plus page 4."""
    return PdfDocument(
        full_text=pdf_export_text,
        line_to_page=tuple(pdf_line_to_page),
        page_count=4,
        images={1: (_image(1),), 3: (_image(3),), 4: (_image(4),)},
    )


def _convert(pdf_export, vault_dir, document, **kwargs):
    with patch("onediary.pipeline.pdf2md.read_pdf", return_value=document):
        return convert_pdf_file(pdf_export, vault_dir, **kwargs)


class TestConvertPdfFile:
    """End-to-end conversion of a PDF export."""

    def test_notes_written(self, pdf_export, vault_dir, document):
        """Entries become notes with reflowed bodies and metadata."""
        stats = _convert(pdf_export, vault_dir, document)

        assert stats.entries_parsed == 2
        assert stats.entries_created == 2
        note = (vault_dir / "日记" / "2025" / "2025-02-08.md").read_text(encoding="utf-8")
        assert 'time: "09:41"' in note
        assert "今天天气不错。\n\n下午去了平江路。" in note

    def test_images_saved_and_embedded(self, pdf_export, vault_dir, document):
        """Page images are saved and embedded in the owning entry."""
        stats = _convert(pdf_export, vault_dir, document)

        assert stats.images_imported == 3
        folder = vault_dir / "attachments" / "diary"
        assert (folder / "diary-2025-02-08-p1-0.png").read_bytes() == b"IMG1"
        assert (folder / "diary-2025-02-09-p3-0.png").exists()
        assert (folder / "diary-2025-02-09-p4-0.png").exists()

        note = (vault_dir / "日记" / "2025" / "2025-02-09.md").read_text(encoding="utf-8")
        assert "## 附件" in note
        assert "![[attachments/diary/diary-2025-02-09-p3-0.png]]" in note

    def test_containment_strategy_skips_orphans(self, pdf_export, vault_dir, document):
        """Page 4 lies outside every entry and is not imported."""
        stats = _convert(pdf_export, vault_dir, document, strategy=PageAttribution.CONTAINMENT)

        assert stats.images_imported == 2
        assert not list((vault_dir / "attachments" / "diary").glob("*-p4-*"))

    def test_attachments_disabled(self, pdf_export, vault_dir, document):
        """No images when import_attachments is off."""
        settings = ImportSettings(import_attachments=False)
        stats = _convert(pdf_export, vault_dir, document, settings=settings)

        assert stats.images_imported == 0
        assert not (vault_dir / "attachments").exists()

    def test_inconsistent_page_map(self, pdf_export, vault_dir, document):
        """A short page map skips images but still writes notes."""
        broken = PdfDocument(
            full_text=document.full_text,
            line_to_page=(1, 1, 1),
            page_count=document.page_count,
            images=document.images,
        )
        stats = _convert(pdf_export, vault_dir, broken)

        assert stats.images_imported == 0
        assert stats.entries_created == 2

    def test_missing_metadata_counted(self, pdf_export, vault_dir):
        """Parser diagnostics are counted as warnings."""
        doc = PdfDocument(full_text="2025年02月08日\n今天很好。", line_to_page=(1, 1), page_count=1)
        stats = _convert(pdf_export, vault_dir, doc)

        assert stats.parse_warnings == 1
        assert stats.entries_created == 1

    def test_images_not_overwritten(self, pdf_export, vault_dir, document):
        """Existing image files are kept as they are."""
        folder = vault_dir / "attachments" / "diary"
        folder.mkdir(parents=True)
        (folder / "diary-2025-02-08-p1-0.png").write_bytes(b"OLD")

        stats = _convert(pdf_export, vault_dir, document)

        assert stats.images_imported == 2
        assert (folder / "diary-2025-02-08-p1-0.png").read_bytes() == b"OLD"

    def test_missing_input(self, tmp_dir, vault_dir):
        """A missing file raises Pdf2MdError."""
        with pytest.raises(Pdf2MdError):
            convert_pdf_file(tmp_dir / "missing.pdf", vault_dir)
