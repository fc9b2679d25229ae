"""
Module: builder.errors

Purpose:
    Exception hierarchy for the batch pipeline. Every error carries
    enough context (item index and title) to report which item failed.

Key Classes:
    - BatchError: Base class for all batch failures
    - ValidationError: Request rejected before any work
    - MeasurementError: Text measurer failed
    - RenderError: Laying out or serialising one document failed
    - PackError: Building the archive failed
    - ConfigError: Configuration file unreadable

Used By:
    - builder.controller: Raises RenderError/PackError
    - builder.request: Raises ValidationError
    - builder.layout: Raises MeasurementError
"""

from __future__ import annotations

from typing import Optional


class BatchError(Exception):
    """
    Error during batch generation.

    Attributes:
        item_index: 0-based index of the failing item, if any
        title: Title of the failing item, if any
    """

    def __init__(
        self,
        message: str,
        *,
        item_index: Optional[int] = None,
        title: Optional[str] = None,
    ) -> None:
        if item_index is not None:
            label = f"item {item_index + 1}"
            if title is not None:
                label += f" ({title!r})"
            message = f"{label}: {message}"
        super().__init__(message)
        self.item_index = item_index
        self.title = title


class ValidationError(BatchError):
    """Request is missing content or titles."""
    pass


class MeasurementError(BatchError):
    """Text measurer could not measure a string."""

    def __init__(self, message: str, *, text: str = "", font_size: float = 0) -> None:
        super().__init__(message)
        self.text = text
        self.font_size = font_size


class RenderError(BatchError):
    """A document could not be laid out or serialised."""
    pass


class PackError(BatchError):
    """The archive could not be built."""
    pass


class ConfigError(Exception):
    """Configuration file could not be loaded."""
    pass
