"""
Module: builder.layout.config

Purpose:
    Page geometry for the document layout engine.
    Defines page dimensions, margins, font sizes and line spacing.

Key Classes:
    - PageGeometry: Immutable page geometry

Dependencies:
    - dataclasses (std)
    - reportlab: Font lookup

Used By:
    - builder.layout.paginator: Page arrangement
    - builder.output.renderer: Page size
    - builder.config: BuilderConfig
"""

from __future__ import annotations

from dataclasses import dataclass

from reportlab.pdfbase import pdfmetrics


# US Letter in PDF points
DEFAULT_PAGE_WIDTH_PT = 612
DEFAULT_PAGE_HEIGHT_PT = 792
DEFAULT_FONT_NAME = "Times-Roman"


@dataclass(frozen=True)
class PageGeometry:
    """
    Page geometry for one batch run (immutable).

    All values are in PDF points with the origin at the bottom-left
    corner of the page, so ``y`` decreases as text moves down the page.

    Attributes:
        page_width: Page width in points
        page_height: Page height in points
        margin: Margin on every side in points
        title_font_size: Font size of the centred title
        body_font_size: Font size of body lines
        line_height: Vertical advance per body line
        title_top_offset: Distance from the top margin to the first baseline
        title_gap: Vertical advance between title and first body line
        font_name: Standard PDF font used for measuring and drawing

    Example:
        >>> geometry = PageGeometry()
        >>> geometry.max_line_width
        532
        >>> geometry.top_y
        742
    """

    # Page dimensions
    page_width: float = DEFAULT_PAGE_WIDTH_PT
    page_height: float = DEFAULT_PAGE_HEIGHT_PT
    margin: float = 40

    # Typography
    title_font_size: float = 24
    body_font_size: float = 12
    line_height: float = 18
    title_top_offset: float = 10
    title_gap: float = 30
    font_name: str = DEFAULT_FONT_NAME

    def __post_init__(self) -> None:
        """Validate geometry on construction."""
        if self.page_width <= 0:
            raise ValueError(f"page_width must be positive: {self.page_width}")
        if self.page_height <= 0:
            raise ValueError(f"page_height must be positive: {self.page_height}")
        if self.margin < 0:
            raise ValueError(f"margin must be non-negative: {self.margin}")
        if self.margin * 2 >= self.page_width:
            raise ValueError("Margins exceed page width")
        if self.margin * 2 >= self.page_height:
            raise ValueError("Margins exceed page height")
        for name in ("title_font_size", "body_font_size", "line_height"):
            value = getattr(self, name)
            if value <= 0:
                raise ValueError(f"{name} must be positive: {value}")
        if self.title_top_offset < 0 or self.title_gap < 0:
            raise ValueError("title_top_offset and title_gap must be non-negative")
        if self.top_y < self.bottom_limit:
            raise ValueError("Page too short to hold a single body line")
        if not self.font_name:
            raise ValueError("font_name must not be empty")
        try:
            pdfmetrics.getFont(self.font_name)
        except KeyError:
            raise ValueError(f"Unknown font: {self.font_name}") from None

    @property
    def max_line_width(self) -> float:
        """Width available for body text (excluding margins)."""
        return self.page_width - 2 * self.margin

    @property
    def top_y(self) -> float:
        """Baseline of the first line written on any page."""
        return self.page_height - self.margin - self.title_top_offset

    @property
    def bottom_limit(self) -> float:
        """Lowest cursor position that still has room for one more line."""
        return self.margin + self.line_height

    @property
    def lines_per_page(self) -> int:
        """Body lines that fit on a continuation page."""
        return int((self.top_y - self.bottom_limit) // self.line_height) + 1

    @property
    def lines_on_first_page(self) -> int:
        """Body lines that fit on the first page, below the title."""
        first_y = self.top_y - self.title_gap
        if first_y < self.bottom_limit:
            return 0
        return int((first_y - self.bottom_limit) // self.line_height) + 1
