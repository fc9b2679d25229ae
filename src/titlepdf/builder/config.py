"""
Module: builder.config

Purpose:
    Configuration dataclass for the batch builder. Immutable
    configuration with validation on construction, plus loading from
    a JSON settings file.

Key Classes:
    - BuilderConfig: Main configuration for batch generation

Key Functions:
    - load_config(): Read BuilderConfig from JSON

Dependencies:
    - dataclasses (std)
    - json (std)

Used By:
    - builder.controller: Batch orchestration
    - titlepdf.cli: --config option
"""

from __future__ import annotations

import json
import logging
import zipfile
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict

from .errors import ConfigError
from .layout.config import PageGeometry

logger = logging.getLogger(__name__)

_COMPRESSION = {
    "stored": zipfile.ZIP_STORED,
    "deflated": zipfile.ZIP_DEFLATED,
}


@dataclass(frozen=True)
class BuilderConfig:
    """
    Configuration for one batch run (immutable).

    Attributes:
        geometry: Page geometry and typography
        archive_folder: Folder inside the ZIP holding the PDFs
        archive_name: File name offered for the combined download
        compression: zipfile compression constant
        set_document_title: Write each title into its PDF metadata

    Example:
        >>> config = BuilderConfig(archive_folder="out")
        >>> config.entry_path("a")
        'out/a.pdf'
    """

    geometry: PageGeometry = field(default_factory=PageGeometry)

    # Output
    archive_folder: str = "pdfs"
    archive_name: str = "all_pdfs.zip"
    compression: int = zipfile.ZIP_DEFLATED
    set_document_title: bool = True

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if "\\" in self.archive_folder or self.archive_folder.startswith("/"):
            raise ValueError(f"archive_folder must be a relative POSIX path: {self.archive_folder!r}")
        if ".." in self.archive_folder.split("/"):
            raise ValueError(f"archive_folder must not contain '..': {self.archive_folder!r}")
        if not self.archive_name:
            raise ValueError("archive_name must not be empty")
        if self.compression not in _COMPRESSION.values():
            raise ValueError(f"Unsupported compression: {self.compression}")

    def entry_path(self, file_name: str) -> str:
        """Archive path for a resolved file name."""
        folder = self.archive_folder.strip("/")
        return f"{folder}/{file_name}.pdf" if folder else f"{file_name}.pdf"


def load_config(path: Path) -> BuilderConfig:
    """
    Load a BuilderConfig from a JSON file.

    Format::

        {
          "archive_folder": "pdfs",
          "archive_name": "all_pdfs.zip",
          "compression": "deflated",
          "geometry": {"page_width": 595.28, "page_height": 841.89, "margin": 50}
        }

    Unknown keys are ignored with a warning. Missing keys take defaults.

    Args:
        path: JSON file path

    Returns:
        Validated BuilderConfig

    Raises:
        ConfigError: If the file cannot be read or parsed, or the values
            are invalid
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ConfigError(f"Config file is corrupted: {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config root must be an object: {path}")

    try:
        return config_from_dict(data)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid config {path}: {e}") from e


def config_from_dict(data: Dict[str, Any]) -> BuilderConfig:
    """Build a BuilderConfig from plain data (as loaded from JSON)."""
    data = dict(data)

    geometry_data = data.pop("geometry", None) or {}
    if not isinstance(geometry_data, dict):
        raise TypeError("geometry must be an object")
    geometry = PageGeometry(**_known_keys(PageGeometry, geometry_data, "geometry"))

    compression = data.pop("compression", None)
    if isinstance(compression, str):
        if compression not in _COMPRESSION:
            raise ValueError(f"compression must be one of {sorted(_COMPRESSION)}: {compression!r}")
        data["compression"] = _COMPRESSION[compression]
    elif compression is not None:
        data["compression"] = compression

    kwargs = _known_keys(BuilderConfig, data, "config")
    kwargs.pop("geometry", None)
    return BuilderConfig(geometry=geometry, **kwargs)


def _known_keys(cls: type, data: Dict[str, Any], section: str) -> Dict[str, Any]:
    """Drop (and log) keys that are not fields of ``cls``."""
    names = {f.name for f in fields(cls)}
    unknown = sorted(set(data) - names)
    if unknown:
        logger.warning(f"Ignoring unknown {section} keys: {', '.join(unknown)}")
    return {k: v for k, v in data.items() if k in names}
