"""
Module: builder.layout.models

Purpose:
    Data models for page layout.
    Immutable dataclasses for draw instructions, pages and layout results,
    plus the mutable cursor state used while a document is being laid out.

Key Classes:
    - DrawInstruction: One positioned run of text
    - PagePlan: Complete page layout
    - LayoutState: Page list and cursor for one document in progress
    - LayoutResult: Final layout output

Dependencies:
    - dataclasses (std)

Used By:
    - builder.layout.paginator: Creates PagePlans
    - builder.output.renderer: Draws PagePlans
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List


@dataclass(frozen=True)
class DrawInstruction:
    """
    A run of text placed on a page.

    Attributes:
        text: Text to draw
        x: Left edge of the text in points
        y: Baseline in points from the page bottom
        font_size: Font size in points
    """
    text: str
    x: float
    y: float
    font_size: float


@dataclass(frozen=True)
class PagePlan:
    """
    Complete layout plan for a single page.

    Attributes:
        index: Page number (0-indexed)
        width: Page width in points
        height: Page height in points
        instructions: Draw instructions in drawing order

    Example:
        >>> page = PagePlan(index=0, width=612, height=792, instructions=(title, line))
        >>> page.texts
        ('Title', 'Hello world')
    """

    index: int
    width: float
    height: float
    instructions: tuple[DrawInstruction, ...] = ()

    @property
    def texts(self) -> tuple[str, ...]:
        """Texts drawn on this page, in order."""
        return tuple(i.text for i in self.instructions)

    @property
    def is_empty(self) -> bool:
        """Check if page has no draw instructions."""
        return len(self.instructions) == 0


@dataclass
class LayoutState:
    """
    Mutable layout state for one document.

    Pages are kept in creation order; the last one is the page being
    written. Only the paginator mutates this object.

    Attributes:
        width: Page width for every page created
        height: Page height for every page created
        cursor_y: Baseline of the next line to be written
        pages: Draw instructions per page, in creation order
    """
    width: float
    height: float
    cursor_y: float = 0.0
    pages: List[List[DrawInstruction]] = field(default_factory=list)

    @property
    def current_page(self) -> int:
        """Index of the page being written."""
        return len(self.pages) - 1

    def new_page(self, cursor_y: float) -> int:
        """Start a new page and move the cursor to ``cursor_y``."""
        self.pages.append([])
        self.cursor_y = cursor_y
        return self.current_page

    def draw(self, instruction: DrawInstruction) -> None:
        """Append an instruction to the current page."""
        self.pages[-1].append(instruction)

    def freeze(self) -> tuple[PagePlan, ...]:
        """Convert the pages into immutable PagePlans."""
        return tuple(
            PagePlan(index=i, width=self.width, height=self.height, instructions=tuple(page))
            for i, page in enumerate(self.pages)
        )


@dataclass(frozen=True)
class LayoutResult:
    """
    Final layout of one titled document.

    Attributes:
        title: Document title drawn on the first page
        pages: Tuple of PagePlans (always at least one)
        line_count: Number of wrapped body lines placed
        warnings: Tolerated layout problems, e.g. overflowing words

    Example:
        >>> result = layout_document("A", "Hello world", PageGeometry(), measurer)
        >>> result.page_count
        1
    """

    title: str
    pages: tuple[PagePlan, ...]
    line_count: int = 0
    warnings: tuple[str, ...] = ()

    @property
    def page_count(self) -> int:
        """Number of pages in layout."""
        return len(self.pages)

    def iter_instructions(self) -> Iterator[DrawInstruction]:
        """Yield every draw instruction in page order."""
        for page in self.pages:
            yield from page.instructions

    def body_lines(self) -> List[str]:
        """Body lines in drawing order (the title instruction excluded)."""
        return [i.text for i in self.iter_instructions()][1:]
