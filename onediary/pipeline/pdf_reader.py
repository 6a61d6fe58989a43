#!/usr/bin/env python3
"""
pdf_reader.py
-------------------
Rebuilds the text layer of a 1Diary PDF export, line by line.

1Diary PDFs place every text run at an absolute position. The reader
groups runs into physical lines by their baseline, joins the pages with a
blank line, and records which page every line of the result came from.
That page map is what later ties entries to the photos on their pages.

    page 1 lines ─┐
    ""            │  full_text  (one '\\n' per line)
    page 2 lines ─┘  line_to_page = [1, 1, ..., 2, 2, 2, ...]

The blank line between two pages is attributed to the later page.

Images are extracted per page with PyMuPDF and kept in memory; an image
that cannot be decoded is logged and skipped.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

# --- Third party imports ---
import fitz  # PyMuPDF

# --- Local imports ---
from onediary.core.exceptions import PdfExtractionError
from onediary.core.logging_manager import DiaryLogger, safe_logger


# Baselines closer than this (in points) belong to the same line
LINE_TOLERANCE = 2.0

TextItem = Tuple[float, float, str]


@dataclass(frozen=True)
class PdfImage:
    """One embedded image of a page."""

    data: bytes
    format: str
    width: int
    height: int
    page_num: int
    image_index: int


@dataclass(frozen=True)
class PdfDocument:
    """
    Reconstructed text layer and images of a PDF.

    Attributes:
        full_text: All pages, one physical line per '\\n'
        line_to_page: 1-based page number of every line of full_text
        page_count: Number of pages
        images: Images keyed by 1-based page number (pages with images only)
    """

    full_text: str
    line_to_page: Tuple[int, ...]
    page_count: int
    images: Dict[int, Tuple[PdfImage, ...]] = field(default_factory=dict)


# ----- Pure helpers -----
def build_page_lines(
    items: Iterable[TextItem], tolerance: float = LINE_TOLERANCE
) -> List[str]:
    """
    Group positioned text runs into lines.

    Args:
        items: (x, y, text) runs; y grows downward, as in PyMuPDF
        tolerance: Baseline bucket size in points

    Returns:
        Lines top to bottom, each made of its runs left to right, joined
        without separators

    Examples:
        >>> build_page_lines([(50, 100.4, "很好。"), (10, 100.0, "今天"), (10, 80, "周六")])
        ['周六', '今天很好。']
    """
    rows: Dict[float, List[Tuple[float, str]]] = {}
    for x, y, text in items:
        if not text:
            continue
        key = round(y / tolerance) * tolerance
        rows.setdefault(key, []).append((x, text.replace("\n", "")))

    return [
        "".join(text for _, text in sorted(row, key=lambda run: run[0]))
        for _, row in sorted(rows.items())
    ]


def assemble_full_text(page_lines: Sequence[Sequence[str]]) -> Tuple[str, List[int]]:
    """
    Join per-page lines into one text with a page map.

    Args:
        page_lines: Lines of each page, in page order

    Returns:
        Tuple of (full_text, line_to_page) where
        len(full_text.split('\\n')) == len(line_to_page) whenever there is
        at least one page

    Examples:
        >>> assemble_full_text([["a", "b"], ["c"]])
        ('a\\nb\\n\\nc', [1, 1, 2, 2])
    """
    lines: List[str] = []
    line_to_page: List[int] = []

    for page_index, page in enumerate(page_lines):
        page_num = page_index + 1
        if page_index > 0:
            lines.append("")
            line_to_page.append(page_num)
        for line in page:
            lines.append(line)
            line_to_page.append(page_num)

    if page_lines and not lines:
        line_to_page.append(1)

    return "\n".join(lines), line_to_page


# ----- PyMuPDF access -----
def _page_items(page: "fitz.Page") -> List[TextItem]:
    items: List[TextItem] = []
    for block in page.get_text("dict").get("blocks", []):
        for line in block.get("lines", []) or []:
            for span in line.get("spans", []) or []:
                x, y = span.get("origin", span.get("bbox", (0, 0))[:2])
                items.append((float(x), float(y), str(span.get("text", ""))))
    return items


def _page_images(
    doc: "fitz.Document",
    page: "fitz.Page",
    page_num: int,
    seen: Set[int],
    logger: Optional[DiaryLogger],
) -> Tuple[PdfImage, ...]:
    images: List[PdfImage] = []
    for img in page.get_images(full=True):
        xref = img[0]
        if xref in seen:
            continue
        seen.add(xref)

        try:
            base_image = doc.extract_image(xref)
        except (RuntimeError, ValueError) as e:
            safe_logger(logger).log_warning(
                f"Could not extract image on page {page_num}",
                {"xref": xref, "error": str(e)},
            )
            continue
        if not base_image:
            continue

        images.append(
            PdfImage(
                data=base_image["image"],
                format=base_image.get("ext", "png"),
                width=int(base_image.get("width", 0)),
                height=int(base_image.get("height", 0)),
                page_num=page_num,
                image_index=len(images),
            )
        )
    return tuple(images)


def read_pdf(
    pdf_path: Path,
    extract_images: bool = True,
    logger: Optional[DiaryLogger] = None,
) -> PdfDocument:
    """
    Read a PDF export's text layer and, optionally, its images.

    Args:
        pdf_path: Path to the PDF file
        extract_images: Also collect embedded images per page
        logger: Optional logger

    Returns:
        PdfDocument with full text, page map and images

    Raises:
        PdfExtractionError: If the file cannot be opened or read as a PDF
    """
    try:
        doc = fitz.open(str(pdf_path))
    except (RuntimeError, ValueError) as e:
        raise PdfExtractionError(f"Cannot open PDF {pdf_path}: {e}") from e

    page_lines: List[List[str]] = []
    images: Dict[int, Tuple[PdfImage, ...]] = {}
    seen: Set[int] = set()

    try:
        for page_index, page in enumerate(doc):
            page_num = page_index + 1
            page_lines.append(build_page_lines(_page_items(page)))

            if extract_images:
                found = _page_images(doc, page, page_num, seen, logger)
                if found:
                    images[page_num] = found

        page_count = doc.page_count
    except (RuntimeError, ValueError) as e:
        raise PdfExtractionError(f"Cannot read PDF {pdf_path}: {e}") from e
    finally:
        doc.close()

    full_text, line_to_page = assemble_full_text(page_lines)

    safe_logger(logger).log_debug(
        "PDF text layer rebuilt",
        {
            "file": Path(pdf_path).name,
            "pages": page_count,
            "lines": len(line_to_page),
            "images": sum(len(v) for v in images.values()),
        },
    )

    return PdfDocument(
        full_text=full_text,
        line_to_page=tuple(line_to_page),
        page_count=page_count,
        images=images,
    )
