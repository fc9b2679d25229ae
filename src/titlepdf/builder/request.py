"""
Module: builder.request

Purpose:
    Batch request model and file-name resolution.
    Also holds the thin adapter that turns raw form text (content,
    newline-separated titles and file names) into a GenerationRequest.

Key Classes:
    - BatchItem: One title with an optional explicit file name
    - GenerationRequest: Shared content plus ordered items

Key Functions:
    - slugify(): Title -> lowercase hyphenated slug
    - resolve_file_name(): Deterministic per-item file name
    - parse_request(): Raw text -> GenerationRequest

Used By:
    - builder.controller: Validation and naming
    - titlepdf.cli: Input parsing
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import List, Optional

from .errors import ValidationError

logger = logging.getLogger(__name__)

PLACEHOLDER_NAME = "file"

_NON_SLUG = re.compile(r"[^a-z0-9]+")
_LINE_BREAK = re.compile(r"\r?\n")
_PATH_SEPARATORS = re.compile(r"[\\/]+")


@dataclass(frozen=True)
class BatchItem:
    """
    One document to generate.

    Attributes:
        title: Title drawn on the first page
        file_name: Explicit file name without extension, or None to
            derive one from the title
    """
    title: str
    file_name: Optional[str] = None


@dataclass(frozen=True)
class GenerationRequest:
    """
    Shared content and the ordered list of documents to produce.

    Attributes:
        shared_content: Body text used for every document
        items: Items in output order

    Example:
        >>> request = GenerationRequest("Hello world", (BatchItem("A"), BatchItem("B")))
        >>> request.validate()
        >>> len(request)
        2
    """
    shared_content: str
    items: tuple[BatchItem, ...]

    def __len__(self) -> int:
        return len(self.items)

    def validate(self) -> None:
        """
        Check the request before any work is done.

        Raises:
            ValidationError: If content is empty or there are no items
        """
        if not self.shared_content:
            raise ValidationError("Please add content: the shared content is empty.")
        if not self.items:
            raise ValidationError("Please add at least one title.")


def slugify(text: Optional[str]) -> str:
    """
    Convert a title to a file-name slug.

    Lowercases, collapses every run of characters outside ``[a-z0-9]``
    to one hyphen and strips hyphens from both ends. Idempotent.

    Example:
        >>> slugify("Coinbase Customer Service!")
        'coinbase-customer-service'
        >>> slugify("***")
        'file'
    """
    slug = _NON_SLUG.sub("-", (text or "").lower()).strip("-")
    return slug or PLACEHOLDER_NAME


def resolve_file_name(title: str, file_name: Optional[str], index: int) -> str:
    """
    Resolve the file name (without extension) for one item.

    An explicit name wins; path separators are replaced so the entry
    cannot escape the archive folder, and a trailing ``.pdf`` is dropped
    because the extension is added on output. Otherwise the title slug
    is used.

    Args:
        title: Item title
        file_name: Explicit file name or None
        index: 0-based item position (used only in log messages)

    Returns:
        Non-empty file name
    """
    if file_name is not None:
        name = _PATH_SEPARATORS.sub("-", file_name.strip())
        if name.lower().endswith(".pdf"):
            name = name[:-4]
        name = name.strip(" .")
        if name:
            return name
        logger.debug(f"Item {index + 1}: file name {file_name!r} is empty after cleanup")
    return slugify(title)


def parse_request(
    content: str,
    titles_text: str,
    file_names_text: str = "",
) -> GenerationRequest:
    """
    Build a request from raw form text.

    Titles and file names are split on line breaks, trimmed, and blank
    entries dropped. File names pair with titles by position; titles
    without a file name get a slug. Mismatched counts are accepted but
    logged, since the pairing may not be what the caller meant.

    Args:
        content: Shared body text, used as-is
        titles_text: One title per line
        file_names_text: One file name per line (optional)

    Returns:
        GenerationRequest (not yet validated)

    Example:
        >>> parse_request("Hello world", "A\\nB").items
        (BatchItem(title='A', file_name=None), BatchItem(title='B', file_name=None))
    """
    titles = _split_lines(titles_text)
    file_names = _split_lines(file_names_text)

    if file_names and len(file_names) != len(titles):
        logger.warning(
            f"Got {len(file_names)} file names for {len(titles)} titles; "
            f"names are paired by position and missing ones derived from titles"
        )

    items = tuple(
        BatchItem(title=t, file_name=file_names[i] if i < len(file_names) else None)
        for i, t in enumerate(titles)
    )
    return GenerationRequest(shared_content=content or "", items=items)


def _split_lines(text: Optional[str]) -> List[str]:
    """Split on line breaks, trim, drop blanks."""
    return [ln.strip() for ln in _LINE_BREAK.split(text or "") if ln.strip()]
