"""
Module: builder.output.renderer

Purpose:
    Render a LayoutResult to PDF bytes using ReportLab.
    Each PagePlan becomes one PDF page with every draw instruction
    placed at its baseline position.

Key Classes:
    - DocumentRenderer: Protocol for layout -> bytes
    - PdfRenderer: ReportLab implementation

Key Functions:
    - render_to_pdf(): Render a layout with default settings

Dependencies:
    - reportlab: PDF generation
    - builder.layout.models: LayoutResult, PagePlan

Used By:
    - builder.controller: Per-item serialisation
"""

from __future__ import annotations

import io
import logging
from typing import Protocol

from reportlab.pdfgen import canvas

from titlepdf.builder.layout.config import DEFAULT_FONT_NAME
from titlepdf.builder.layout.models import LayoutResult, PagePlan

logger = logging.getLogger(__name__)


class DocumentRenderer(Protocol):
    """Anything that can serialise a laid-out document."""

    def render(self, layout: LayoutResult) -> bytes:
        """Return the serialised document."""
        ...


class PdfRenderer:
    """
    Serialise layouts to PDF with a ReportLab canvas.

    Output is written to an in-memory buffer. The canvas runs in
    invariant mode, so the same layout always produces identical bytes.

    Args:
        font_name: Standard font for all text (must match the measurer)
        set_document_title: Store the layout title in the PDF metadata

    Example:
        >>> data = PdfRenderer().render(layout)
        >>> data[:5]
        b'%PDF-'
    """

    def __init__(
        self,
        font_name: str = DEFAULT_FONT_NAME,
        *,
        set_document_title: bool = True,
    ) -> None:
        self.font_name = font_name
        self.set_document_title = set_document_title

    def render(self, layout: LayoutResult) -> bytes:
        if layout.page_count == 0:
            logger.warning("Empty layout, creating empty PDF")

        buffer = io.BytesIO()
        try:
            first = layout.pages[0] if layout.pages else None
            pagesize = (first.width, first.height) if first else (612, 792)
            c = canvas.Canvas(buffer, pagesize=pagesize, invariant=1)
            if self.set_document_title:
                c.setTitle(layout.title)

            for page in layout.pages:
                c.setPageSize((page.width, page.height))
                self._render_page(c, page)
                c.showPage()

            c.save()
            data = buffer.getvalue()
        finally:
            buffer.close()

        logger.debug(f"Rendered {layout.page_count} pages for {layout.title!r} ({len(data)} bytes)")
        return data

    def _render_page(self, c: canvas.Canvas, page: PagePlan) -> None:
        """Draw every instruction of one page in black."""
        c.setFillColorRGB(0, 0, 0)
        for instruction in page.instructions:
            c.setFont(self.font_name, instruction.font_size)
            c.drawString(instruction.x, instruction.y, instruction.text)


def render_to_pdf(layout: LayoutResult, *, font_name: str = DEFAULT_FONT_NAME) -> bytes:
    """
    Render layout result to PDF bytes.

    Args:
        layout: Layout result from the paginator
        font_name: Standard font used for drawing

    Returns:
        Complete PDF document

    Example:
        >>> pdf = render_to_pdf(layout_document("A", "Hello", PageGeometry(), measurer))
    """
    return PdfRenderer(font_name).render(layout)
