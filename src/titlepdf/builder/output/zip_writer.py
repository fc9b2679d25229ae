"""
Module: builder.output.zip_writer

Purpose:
    Pack rendered documents into a single ZIP archive.
    Entries are added incrementally while the batch runs and the
    archive is finalised into one in-memory blob at the end.

Key Classes:
    - ArchivePacker: Protocol for incremental packing
    - ZipArchivePacker: zipfile implementation

Key Functions:
    - write_archive(): Save a batch archive to disk
    - write_documents(): Save each document of a batch to disk

Dependencies:
    - zipfile (std)

Used By:
    - builder.controller: Archive packing
    - titlepdf.cli: Output files
"""

from __future__ import annotations

import io
import logging
import zipfile
from pathlib import Path
from typing import TYPE_CHECKING, List, Protocol

from titlepdf.builder.errors import PackError

if TYPE_CHECKING:
    from titlepdf.builder.controller import BatchResult

logger = logging.getLogger(__name__)

# Fixed timestamp so identical batches produce identical archives
ZIP_EPOCH = (1980, 1, 1, 0, 0, 0)


class ArchivePacker(Protocol):
    """Accepts (path, bytes) entries and produces one combined blob."""

    def add(self, path: str, data: bytes) -> None:
        ...

    def finalize(self) -> bytes:
        ...


class ZipArchivePacker:
    """
    Build a ZIP archive in memory.

    Usage:
        packer = ZipArchivePacker()
        try:
            for path, data in entries:
                packer.add(path, data)
            blob = packer.finalize()
        finally:
            packer.close()

    Args:
        compression: zipfile compression constant (default ZIP_DEFLATED)

    Raises:
        PackError: If an entry cannot be written or the archive is
            already finalised
    """

    def __init__(self, compression: int = zipfile.ZIP_DEFLATED) -> None:
        self._buffer = io.BytesIO()
        self._zip = zipfile.ZipFile(self._buffer, "w", compression)
        self._compression = compression
        self._names: List[str] = []
        self._closed = False

    @property
    def names(self) -> List[str]:
        """Entry paths added so far, in order."""
        return list(self._names)

    def add(self, path: str, data: bytes) -> None:
        if self._closed:
            raise PackError(f"Cannot add {path!r}: archive already finalised")
        if path in self._names:
            raise PackError(f"Duplicate archive entry: {path!r}")

        info = zipfile.ZipInfo(path, date_time=ZIP_EPOCH)
        info.compress_type = self._compression
        try:
            self._zip.writestr(info, data)
        except Exception as e:
            raise PackError(f"Failed to add {path!r}: {e}") from e
        self._names.append(path)

    def finalize(self) -> bytes:
        if self._closed:
            raise PackError("Archive already finalised")
        try:
            self._zip.close()
            blob = self._buffer.getvalue()
        except Exception as e:
            raise PackError(f"Failed to finalise archive: {e}") from e
        finally:
            self.close()

        logger.debug(f"Finalised archive with {len(self._names)} entries ({len(blob)} bytes)")
        return blob

    def close(self) -> None:
        """Release the in-memory buffer."""
        if self._closed:
            return
        self._closed = True
        self._zip.close()
        self._buffer.close()

    def __enter__(self) -> "ZipArchivePacker":
        return self

    def __exit__(self, *args) -> None:
        self.close()


def write_archive(result: BatchResult, output_path: Path) -> Path:
    """
    Save the combined archive of a batch.

    Args:
        result: Completed batch result
        output_path: Path for .zip file (will append .zip if missing)

    Returns:
        Path to written ZIP file

    Raises:
        IOError: If output path is not writable
    """
    if not output_path.suffix == ".zip":
        output_path = output_path.with_suffix(".zip")

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(result.archive)

    logger.info(f"Wrote archive with {len(result.items)} documents to {output_path}")
    return output_path


def write_documents(result: BatchResult, output_dir: Path) -> List[Path]:
    """
    Save every document of a batch as its own PDF file.

    Args:
        result: Completed batch result
        output_dir: Directory to write into (created if missing)

    Returns:
        Written paths in batch order
    """
    output_dir.mkdir(parents=True, exist_ok=True)

    paths = []
    for artifact in result.items:
        path = output_dir / f"{artifact.file_name}.pdf"
        path.write_bytes(artifact.data)
        paths.append(path)

    logger.info(f"Wrote {len(paths)} documents to {output_dir}")
    return paths
