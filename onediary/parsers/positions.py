#!/usr/bin/env python3
"""
positions.py
-------------------
Correlates PDF entries with the pages they were printed on.

The PDF text reconstruction yields one page number per line of the full
text. Combined with the assembler's per-entry line ranges, that gives each
entry an inclusive page range, which in turn decides which entry owns the
images found on a page.

Pages with images that fall inside no entry's range (for example a photo
page between two days) are resolved by one of the named strategies:

    containment   only pages inside an entry's range are attributed
    nearest       orphan pages go to the closest entry that starts before
    round-robin   orphan pages are dealt out to entries in turn

A page shared by two entries (one ends, the next begins) belongs to the
first entry that contains it.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import logging
from dataclasses import replace
from enum import Enum
from typing import (
    TYPE_CHECKING,
    Callable,
    Dict,
    Iterable,
    List,
    Mapping,
    Optional,
    Sequence,
    Tuple,
)

# --- Local imports ---
from onediary.dataclasses.diary_entry import DiaryEntry
from onediary.dataclasses.parse_result import LineRange, PageRange
from onediary.utils.fs import attachment_name

if TYPE_CHECKING:
    from onediary.pipeline.pdf_reader import PdfImage


logger = logging.getLogger(__name__)


# ----- Line ranges -> page ranges -----
def map_line_ranges_to_pages(
    line_ranges: Optional[Sequence[LineRange]],
    line_to_page: Sequence[int],
    entry_count: Optional[int] = None,
) -> Optional[List[PageRange]]:
    """
    Translate entry line ranges into page ranges.

    Args:
        line_ranges: One LineRange per entry, from parse_pdf_diary
        line_to_page: Page number (1-based) of every line of the full text
        entry_count: Number of parsed entries, checked against line_ranges

    Returns:
        One PageRange per entry, or None when the inputs disagree with
        each other (no guessing is attempted)
    """
    if line_ranges is None:
        logger.warning("No line ranges to map; skipping page mapping")
        return None

    if entry_count is not None and len(line_ranges) != entry_count:
        logger.warning(
            f"Line range count ({len(line_ranges)}) does not match "
            f"entry count ({entry_count}); skipping page mapping"
        )
        return None

    if any(later < earlier for earlier, later in zip(line_to_page, line_to_page[1:])):
        logger.warning("Line-to-page map is not in document order; skipping page mapping")
        return None

    page_ranges: List[PageRange] = []
    for line_range in line_ranges:
        if line_range.end_line >= len(line_to_page):
            logger.warning(
                f"Line range ({line_range.start_line}, {line_range.end_line}) "
                f"exceeds the page map ({len(line_to_page)} lines); "
                "skipping page mapping"
            )
            return None
        page_ranges.append(
            PageRange(line_to_page[line_range.start_line], line_to_page[line_range.end_line])
        )

    return page_ranges


# ----- Page attribution -----
class PageAttribution(str, Enum):
    """Strategy for image pages that lie outside every entry's range."""

    CONTAINMENT = "containment"
    NEAREST = "nearest"
    ROUND_ROBIN = "round-robin"


def _containing_entry(page: int, page_ranges: Sequence[PageRange]) -> Optional[int]:
    for index, page_range in enumerate(page_ranges):
        if page in page_range:
            return index
    return None


def _split_pages(
    pages: Iterable[int], page_ranges: Sequence[PageRange]
) -> Tuple[Dict[int, int], List[int]]:
    attributed: Dict[int, int] = {}
    orphans: List[int] = []
    for page in sorted(set(pages)):
        index = _containing_entry(page, page_ranges)
        if index is None:
            orphans.append(page)
        else:
            attributed[page] = index
    return attributed, orphans


def attribute_by_containment(
    pages: Iterable[int], page_ranges: Sequence[PageRange]
) -> Dict[int, int]:
    """
    Map each page to the first entry whose page range contains it.

    Examples:
        >>> attribute_by_containment([1, 2, 5], [PageRange(1, 2), PageRange(2, 3)])
        {1: 0, 2: 0}
    """
    attributed, orphans = _split_pages(pages, page_ranges)
    if orphans:
        logger.debug(f"Pages outside every entry: {orphans}")
    return attributed


def attribute_to_nearest_preceding(
    pages: Iterable[int], page_ranges: Sequence[PageRange]
) -> Dict[int, int]:
    """
    Containment first; an orphan page goes to the entry with the greatest
    start page before it. Pages before the first entry stay unattributed.

    Examples:
        >>> attribute_to_nearest_preceding([4], [PageRange(1, 1), PageRange(2, 3)])
        {4: 1}
    """
    attributed, orphans = _split_pages(pages, page_ranges)

    for page in orphans:
        preceding = [
            index
            for index, page_range in enumerate(page_ranges)
            if page_range.start_page < page
        ]
        if not preceding:
            logger.debug(f"Page {page} precedes every entry; left unattributed")
            continue
        attributed[page] = max(preceding, key=lambda i: (page_ranges[i].start_page, i))

    return attributed


def attribute_round_robin(
    pages: Iterable[int], page_ranges: Sequence[PageRange]
) -> Dict[int, int]:
    """
    Containment first; orphan pages, in page order, are dealt to entries
    0, 1, 2, ... cycling back to the first.

    Examples:
        >>> attribute_round_robin([5, 6, 7], [PageRange(1, 1), PageRange(2, 2)])
        {5: 0, 6: 1, 7: 0}
    """
    attributed, orphans = _split_pages(pages, page_ranges)
    if not page_ranges:
        return attributed

    for position, page in enumerate(orphans):
        attributed[page] = position % len(page_ranges)

    return attributed


_STRATEGIES: Dict[PageAttribution, Callable[..., Dict[int, int]]] = {
    PageAttribution.CONTAINMENT: attribute_by_containment,
    PageAttribution.NEAREST: attribute_to_nearest_preceding,
    PageAttribution.ROUND_ROBIN: attribute_round_robin,
}


def attribute_pages(
    pages: Iterable[int],
    page_ranges: Sequence[PageRange],
    strategy: PageAttribution = PageAttribution.NEAREST,
) -> Dict[int, int]:
    """
    Map image-bearing pages to entry indices.

    Args:
        pages: Page numbers that carry images
        page_ranges: Output of map_line_ranges_to_pages
        strategy: How to resolve pages outside every entry

    Returns:
        Dict of page number -> index into the entry list
    """
    return _STRATEGIES[PageAttribution(strategy)](pages, page_ranges)


# ----- Attachments -----
def associate_attachments(
    entries: Sequence[DiaryEntry],
    page_to_entry: Mapping[int, int],
    page_images: Mapping[int, Sequence[PdfImage]],
    attachment_folder: str,
) -> Tuple[DiaryEntry, ...]:
    """
    Attach image paths to the entries that own their pages.

    Args:
        entries: Parsed entries
        page_to_entry: Output of attribute_pages
        page_images: Images per page number
        attachment_folder: Vault-relative folder for attachments

    Returns:
        New entries; those owning images carry their vault-relative paths
    """
    folder = attachment_folder.strip("/")
    collected: Dict[int, List[str]] = {}

    for page in sorted(page_to_entry):
        index = page_to_entry[page]
        if not 0 <= index < len(entries):
            logger.warning(f"Page {page} points at missing entry {index}; skipped")
            continue
        entry = entries[index]
        for image in page_images.get(page, ()):
            name = attachment_name(entry.date, page, image.image_index, image.format)
            collected.setdefault(index, []).append(f"{folder}/{name}" if folder else name)

    return tuple(
        replace(entry, attachments=entry.attachments + tuple(collected[index]))
        if index in collected
        else entry
        for index, entry in enumerate(entries)
    )
