"""
Module: builder.layout.wrapper

Purpose:
    Greedy word wrap under measured text width.

Key Functions:
    - wrap_text(): Split one paragraph into display lines

Algorithm:
    1. Split the paragraph on single spaces
    2. Append each word to the current line and measure the result
    3. If it is too wide and the line already has words, commit the line
       and start a new one with the word
    4. Commit whatever is left at the end

    Words are never split, so a single word wider than the page becomes
    its own overflowing line.

Dependencies:
    - builder.layout.measure: TextMeasurer

Used By:
    - builder.layout.paginator: Per-paragraph wrapping
"""

from __future__ import annotations

import logging
from typing import List

from .measure import TextMeasurer, measure

logger = logging.getLogger(__name__)


def wrap_text(
    line: str,
    max_width: float,
    font_size: float,
    measurer: TextMeasurer,
) -> List[str]:
    """
    Wrap a paragraph into lines no wider than ``max_width``.

    Args:
        line: Paragraph text (no line terminators)
        max_width: Maximum line width in points
        font_size: Font size used for measuring
        measurer: Text measurer

    Returns:
        Display lines in order. An empty paragraph yields ``[""]`` so
        blank lines in the body keep their vertical space.

    Raises:
        MeasurementError: If the measurer fails

    Example:
        >>> wrap_text("the quick brown fox", 60, 12, measurer)
        ['the quick', 'brown fox']
    """
    if not line:
        return [""]

    lines: List[str] = []
    current = ""
    for word in line.split(" "):
        candidate = f"{current} {word}" if current else word
        width = measure(measurer, candidate, font_size)
        if width > max_width and current:
            lines.append(current)
            current = word
        else:
            current = candidate

    if current:
        lines.append(current)

    # whitespace-only paragraphs still occupy one line
    return lines or [""]


def overflowing_lines(
    lines: List[str],
    max_width: float,
    font_size: float,
    measurer: TextMeasurer,
) -> List[str]:
    """
    Return the wrapped lines that are still wider than ``max_width``.

    Only lines consisting of a single overlong word can appear here.
    """
    return [
        ln for ln in lines
        if ln and measure(measurer, ln, font_size) > max_width
    ]
