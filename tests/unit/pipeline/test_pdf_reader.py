"""
test_pdf_reader.py
------------------
Tests for PDF text layer reconstruction.

The pure line-building helpers are tested directly; read_pdf is tested
against small PDFs generated with PyMuPDF.
"""
import fitz
import pytest

from onediary.core.exceptions import PdfExtractionError
from onediary.pipeline.pdf_reader import (
    assemble_full_text,
    build_page_lines,
    read_pdf,
)


class TestBuildPageLines:
    """Test build_page_lines()."""

    def test_groups_by_baseline(self):
        """Runs within the tolerance share a line, ordered left to right."""
        items = [(50.0, 100.4, "很好。"), (10.0, 100.0, "今天"), (10.0, 80.0, "周六")]
        assert build_page_lines(items) == ["周六", "今天很好。"]

    def test_top_to_bottom(self):
        """Smaller y is higher on the page."""
        items = [(0.0, 300.0, "下"), (0.0, 20.0, "上")]
        assert build_page_lines(items) == ["上", "下"]

    def test_distinct_lines_not_merged(self):
        """Baselines further apart than the tolerance stay separate."""
        items = [(0.0, 100.0, "一"), (0.0, 112.0, "二")]
        assert build_page_lines(items) == ["一", "二"]

    def test_empty_runs_skipped(self):
        """Empty text contributes nothing."""
        assert build_page_lines([(0.0, 10.0, "")]) == []


class TestAssembleFullText:
    """Test assemble_full_text()."""

    def test_blank_line_between_pages(self):
        """Pages are separated by one blank line mapped to the next page."""
        text, line_to_page = assemble_full_text([["a", "b"], ["c"], ["d"]])
        assert text == "a\nb\n\nc\n\nd"
        assert line_to_page == [1, 1, 2, 2, 3, 3]

    def test_map_parallel_to_lines(self):
        """One page number per line of the text."""
        text, line_to_page = assemble_full_text([["一"], [], ["二", "三"]])
        assert len(text.split("\n")) == len(line_to_page)

    def test_single_empty_page(self):
        """An empty page still maps its single empty line."""
        text, line_to_page = assemble_full_text([[]])
        assert text == ""
        assert line_to_page == [1]

    def test_no_pages(self):
        """No pages, no lines."""
        assert assemble_full_text([]) == ("", [])


class TestReadPdf:
    """Test read_pdf() on generated PDFs."""

    @pytest.fixture
    def two_page_pdf(self, tmp_path):
        """A two-page PDF with ASCII text and one image on page 2."""
        path = tmp_path / "export.pdf"
        doc = fitz.open()

        page = doc.new_page()
        page.insert_text((72, 72), "first line")
        page.insert_text((72, 100), "second line")

        page = doc.new_page()
        page.insert_text((72, 72), "third line")
        pixmap = fitz.Pixmap(fitz.csRGB, fitz.IRect(0, 0, 4, 4), False)
        pixmap.clear_with(200)
        page.insert_image(fitz.Rect(72, 120, 144, 192), pixmap=pixmap)

        doc.save(str(path))
        doc.close()
        return path

    def test_text_and_page_map(self, two_page_pdf):
        """Lines come back in order with their pages."""
        document = read_pdf(two_page_pdf)

        assert document.page_count == 2
        assert document.full_text.split("\n") == ["first line", "second line", "", "third line"]
        assert document.line_to_page == (1, 1, 2, 2)

    def test_images_by_page(self, two_page_pdf):
        """Embedded images are keyed by their page."""
        document = read_pdf(two_page_pdf)

        assert list(document.images) == [2]
        image = document.images[2][0]
        assert image.page_num == 2
        assert image.image_index == 0
        assert image.data
        assert image.format

    def test_images_skipped_on_request(self, two_page_pdf):
        """extract_images=False leaves images out."""
        assert read_pdf(two_page_pdf, extract_images=False).images == {}

    def test_not_a_pdf(self, tmp_path):
        """Garbage input raises PdfExtractionError."""
        path = tmp_path / "broken.pdf"
        path.write_bytes(b"this is not a pdf")
        with pytest.raises(PdfExtractionError):
            read_pdf(path)
