"""
Module: builder.output

Purpose:
    PDF rendering and archive output for the batch builder.
    Converts LayoutResults to PDF bytes using ReportLab and packs the
    documents of a batch into one ZIP archive.

Key Functions:
    - render_to_pdf(): Render layout to PDF bytes
    - write_archive(): Save a batch archive
    - write_documents(): Save individual PDFs

Dependencies:
    - reportlab: PDF generation
    - builder.layout.models: LayoutResult

Used By:
    - builder.controller: Pipeline orchestration
"""

from .renderer import DocumentRenderer, PdfRenderer, render_to_pdf
from .zip_writer import ArchivePacker, ZipArchivePacker, write_archive, write_documents

__all__ = [
    "DocumentRenderer",
    "PdfRenderer",
    "render_to_pdf",
    "ArchivePacker",
    "ZipArchivePacker",
    "write_archive",
    "write_documents",
]
