#!/usr/bin/env python3
"""
exceptions.py
--------------------
Custom exception classes for the OneDiary importer.

Parsing itself never raises for malformed diary text: ambiguous lines
degrade to body content and structural problems become diagnostics on
the ParseResult. The exceptions below cover the I/O shell around the
parser (reading exports, reading PDFs, writing notes, loading settings).

Exception Hierarchy:
    Exception (built-in)
    ├── DiaryImportError - Base for all import pipeline errors
    │   ├── Txt2MdError - Plain-text export to Markdown conversion errors
    │   ├── Pdf2MdError - PDF export to Markdown conversion errors
    │   │   └── PdfExtractionError - PDF text/image layer cannot be read
    │   └── VaultWriteError - Note or attachment cannot be written
    └── ConfigurationError - Invalid settings file

Usage:
    from onediary.core.exceptions import Txt2MdError, VaultWriteError

    try:
        stats = convert_txt_file(path, vault_dir)
    except Txt2MdError as e:
        logger.error(f"Import failed: {e}")
"""


class DiaryImportError(Exception):
    """
    Base exception for import pipeline errors.

    Catch this to handle any failure raised while turning an export file
    into notes, or catch a specific subclass for more granular handling.

    Examples:
        >>> raise DiaryImportError("Export file is empty")

    See Also:
        Txt2MdError, Pdf2MdError, VaultWriteError
    """

    pass


class Txt2MdError(DiaryImportError):
    """
    Exception for plain-text export to Markdown conversion errors.

    Raised when a .txt export cannot be converted:
    - Input file missing or unreadable
    - Encoding problems that cannot be repaired

    Examples:
        >>> raise Txt2MdError("Input file not found: export.txt")
        >>> raise Txt2MdError("Cannot decode export.txt as UTF-8")
    """

    pass


class Pdf2MdError(DiaryImportError):
    """
    Exception for PDF export to Markdown conversion errors.

    Raised when the PDF import flow cannot continue as a whole. Problems
    with a single page image are logged and skipped instead.

    Examples:
        >>> raise Pdf2MdError("Input file not found: export.pdf")
    """

    pass


class PdfExtractionError(Pdf2MdError):
    """
    Exception for failures reading a PDF's text layer.

    Raised when the document cannot be opened or a page's text cannot be
    extracted:
    - Corrupt or truncated files
    - Encrypted documents
    - Files that are not PDFs

    Examples:
        >>> raise PdfExtractionError("Cannot open PDF: export.pdf")
    """

    pass


class VaultWriteError(DiaryImportError):
    """
    Exception for note and attachment write failures.

    Raised when a Markdown note or an image attachment cannot be created
    or merged in the output folder.

    Examples:
        >>> raise VaultWriteError("Cannot write 日记/2025/2025-02-08.md")
    """

    pass


class ConfigurationError(Exception):
    """
    Exception for invalid importer settings.

    Raised when the settings YAML cannot be parsed or holds a value of
    the wrong type.

    Examples:
        >>> raise ConfigurationError("group_by_year must be a boolean")
    """

    pass
