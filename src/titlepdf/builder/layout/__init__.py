"""
Module: builder.layout

Purpose:
    Page layout for titled text documents.
    Wraps body text to the printable width and distributes the lines
    across fixed-size pages below a centred title.

Key Functions:
    - layout_document(): Main entry point for layout
    - wrap_text(): Greedy word wrap

Key Classes:
    - PageGeometry: Page dimensions and typography
    - PagePlan: Single page layout plan
    - StandardFontMeasurer: ReportLab font metrics

Dependencies:
    - reportlab: Font metrics

Used By:
    - builder.controller: Batch orchestration
"""

from .config import PageGeometry
from .measure import StandardFontMeasurer, TextMeasurer
from .models import DrawInstruction, PagePlan, LayoutState, LayoutResult
from .wrapper import wrap_text
from .paginator import layout_document, split_paragraphs

__all__ = [
    # Config
    "PageGeometry",
    # Measurement
    "StandardFontMeasurer",
    "TextMeasurer",
    # Models
    "DrawInstruction",
    "PagePlan",
    "LayoutState",
    "LayoutResult",
    # Functions
    "wrap_text",
    "layout_document",
    "split_paragraphs",
]
