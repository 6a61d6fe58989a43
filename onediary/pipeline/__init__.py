"""
Import pipeline for 1Diary exports.

- pdf_reader: PDF text layer and image extraction (PyMuPDF)
- vault: Note and image writing
- txt2md / pdf2md: Programmatic import API
- cli: Click command-line interface
"""
