"""
Module: builder

Purpose:
    Batch pipeline for generating titled PDF documents from shared
    content. Lays out one document per title, renders each to PDF and
    packs all of them into a single ZIP archive.

Key Functions:
    - generate_batch(): Main entry point for batch generation
    - parse_request(): Raw form text -> GenerationRequest
    - slugify(): Default file names

Key Classes:
    - BuilderConfig: Configuration for building
    - GenerationRequest: Shared content plus titles
    - BatchResult: Artifacts and archive
    - BatchRunner: Background batch execution

Dependencies:
    - reportlab: Font metrics and PDF generation
    - zipfile (std): Archive packing

Used By:
    - titlepdf.cli: Command-line interface
"""

from .config import BuilderConfig, load_config
from .errors import (
    BatchError,
    ConfigError,
    MeasurementError,
    PackError,
    RenderError,
    ValidationError,
)
from .request import BatchItem, GenerationRequest, parse_request, resolve_file_name, slugify
from .controller import BatchResult, BatchRunner, DocumentArtifact, generate_batch

__all__ = [
    # Config
    "BuilderConfig",
    "load_config",
    # Request
    "BatchItem",
    "GenerationRequest",
    "parse_request",
    "resolve_file_name",
    "slugify",
    # Controller
    "generate_batch",
    "BatchResult",
    "BatchRunner",
    "DocumentArtifact",
    # Errors
    "BatchError",
    "ConfigError",
    "MeasurementError",
    "PackError",
    "RenderError",
    "ValidationError",
]
