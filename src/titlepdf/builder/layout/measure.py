"""
Module: builder.layout.measure

Purpose:
    Text width measurement for line wrapping and title centring.
    The layout engine only depends on the TextMeasurer protocol; the
    default implementation reads ReportLab's standard font metrics.

Key Classes:
    - TextMeasurer: Protocol for width measurement
    - StandardFontMeasurer: ReportLab-backed measurer

Key Functions:
    - measure(): Call a measurer, converting failures to MeasurementError

Dependencies:
    - reportlab.pdfbase.pdfmetrics: Font metrics

Used By:
    - builder.layout.wrapper: Candidate line widths
    - builder.layout.paginator: Title width
"""

from __future__ import annotations

from typing import Protocol

from reportlab.pdfbase import pdfmetrics

from titlepdf.builder.errors import MeasurementError
from titlepdf.builder.layout.config import DEFAULT_FONT_NAME


class TextMeasurer(Protocol):
    """Anything that can report the rendered width of a string."""

    def width_of(self, text: str, font_size: float) -> float:
        """Return the width of ``text`` at ``font_size`` in points."""
        ...


class StandardFontMeasurer:
    """
    Measure text with one of the 14 standard PDF fonts.

    Widths come from the AFM metrics bundled with ReportLab, so results
    are deterministic and match what the renderer draws.

    Args:
        font_name: Standard font name (default Times-Roman)

    Raises:
        MeasurementError: If the font is not registered with ReportLab

    Example:
        >>> m = StandardFontMeasurer()
        >>> m.width_of("Hello", 12) > 0
        True
    """

    def __init__(self, font_name: str = DEFAULT_FONT_NAME) -> None:
        try:
            pdfmetrics.getFont(font_name)
        except KeyError as e:
            raise MeasurementError(f"Unknown font: {font_name}") from e
        self.font_name = font_name

    def width_of(self, text: str, font_size: float) -> float:
        return pdfmetrics.stringWidth(text, self.font_name, font_size)


def measure(measurer: TextMeasurer, text: str, font_size: float) -> float:
    """
    Measure ``text`` and normalise any measurer failure.

    Args:
        measurer: Measurer to call
        text: Text to measure
        font_size: Font size in points

    Returns:
        Width in points

    Raises:
        MeasurementError: If the measurer raises or returns a non-number
    """
    try:
        width = measurer.width_of(text, font_size)
    except MeasurementError:
        raise
    except Exception as e:
        raise MeasurementError(
            f"Failed to measure {text[:40]!r} at {font_size}pt: {e}",
            text=text,
            font_size=font_size,
        ) from e

    if not isinstance(width, (int, float)):
        raise MeasurementError(
            f"Measurer returned {type(width).__name__} for {text[:40]!r}",
            text=text,
            font_size=font_size,
        )
    return float(width)
