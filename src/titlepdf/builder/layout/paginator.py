"""
Module: builder.layout.paginator

Purpose:
    Lay out a title and a body of text across fixed-size pages.
    The title is centred on the first page; body lines are left-aligned
    and flow onto continuation pages when the cursor reaches the bottom
    margin.

Key Functions:
    - layout_document(): Main layout function
    - split_paragraphs(): Body -> paragraphs

Algorithm:
    1. Draw the centred title on the first page
    2. Wrap each paragraph to the printable width
    3. Before drawing each line, start a new page if there is no room
       for it above the bottom margin
    4. Draw the line and move the cursor down one line height

Dependencies:
    - builder.layout.models: DrawInstruction, LayoutState, LayoutResult
    - builder.layout.config: PageGeometry
    - builder.layout.wrapper: wrap_text

Used By:
    - builder.controller: Per-item layout
"""

from __future__ import annotations

import logging
import re
from typing import List

from .config import PageGeometry
from .measure import TextMeasurer, measure
from .models import DrawInstruction, LayoutResult, LayoutState
from .wrapper import overflowing_lines, wrap_text

logger = logging.getLogger(__name__)

_LINE_BREAK = re.compile(r"\r?\n")


def split_paragraphs(body: str) -> List[str]:
    """
    Split body text on line terminators.

    An empty body yields a single empty paragraph.

    Example:
        >>> split_paragraphs("one\\r\\ntwo\\n\\nthree")
        ['one', 'two', '', 'three']
    """
    return _LINE_BREAK.split(body or "")


def layout_document(
    title: str,
    body: str,
    geometry: PageGeometry,
    measurer: TextMeasurer,
) -> LayoutResult:
    """
    Lay out one titled document.

    Every wrapped body line is placed on exactly one page, in order.
    The result always contains at least one page, and every baseline
    lies between the bottom margin and ``page_height - margin``.

    Args:
        title: Title drawn centred at the top of the first page
        body: Shared body text (may contain line breaks)
        geometry: Page geometry
        measurer: Text measurer matching the renderer's font

    Returns:
        LayoutResult with one PagePlan per page

    Raises:
        MeasurementError: If the measurer fails

    Example:
        >>> result = layout_document("Support", "Hello world", PageGeometry(), measurer)
        >>> result.pages[0].texts
        ('Support', 'Hello world')
    """
    state = LayoutState(width=geometry.page_width, height=geometry.page_height)
    warnings: List[str] = []

    _draw_title(state, title, geometry, measurer)

    line_count = 0
    for paragraph in split_paragraphs(body):
        lines = wrap_text(
            paragraph,
            geometry.max_line_width,
            geometry.body_font_size,
            measurer,
        )
        for word in overflowing_lines(
            lines, geometry.max_line_width, geometry.body_font_size, measurer
        ):
            warnings.append(f"Word wider than page: {word[:40]!r}")

        for line in lines:
            _draw_body_line(state, line, geometry)
            line_count += 1

    pages = state.freeze()

    for warning in warnings:
        logger.warning(f"{title!r}: {warning}")
    logger.debug(f"Laid out {title!r}: {line_count} lines on {len(pages)} pages")

    return LayoutResult(
        title=title,
        pages=pages,
        line_count=line_count,
        warnings=tuple(warnings),
    )


def _draw_title(
    state: LayoutState,
    title: str,
    geometry: PageGeometry,
    measurer: TextMeasurer,
) -> None:
    """Open the first page and draw the centred title."""
    state.new_page(geometry.top_y)

    title_width = measure(measurer, title, geometry.title_font_size)
    state.draw(DrawInstruction(
        text=title,
        x=(geometry.page_width - title_width) / 2,
        y=state.cursor_y,
        font_size=geometry.title_font_size,
    ))
    state.cursor_y -= geometry.title_gap


def _draw_body_line(
    state: LayoutState,
    line: str,
    geometry: PageGeometry,
) -> None:
    """Draw one body line, breaking the page first if it would not fit."""
    if state.cursor_y < geometry.bottom_limit:
        page_index = state.new_page(geometry.top_y)
        logger.debug(f"Page break: starting page {page_index + 1}")

    state.draw(DrawInstruction(
        text=line,
        x=geometry.margin,
        y=state.cursor_y,
        font_size=geometry.body_font_size,
    ))
    state.cursor_y -= geometry.line_height
