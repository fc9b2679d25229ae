"""
Module: builder.controller

Purpose:
    Orchestrate batch generation.
    Validate → (per item: Name → Layout → Render → Pack) → Finalise

Key Functions:
    - generate_batch(): Main entry point for one batch run

Key Classes:
    - DocumentArtifact: One rendered document
    - BatchResult: Complete batch result
    - BatchRunner: Runs batches on a background worker

Dependencies:
    - builder.layout: Layout engine
    - builder.output: PDF rendering and ZIP packing
    - concurrent.futures: Background worker

Used By:
    - titlepdf.cli: Command-line entry point
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional, Set

from .config import BuilderConfig
from .errors import BatchError, MeasurementError, PackError, RenderError
from .layout import StandardFontMeasurer, TextMeasurer, layout_document
from .output import ArchivePacker, DocumentRenderer, PdfRenderer, ZipArchivePacker
from .request import GenerationRequest, resolve_file_name

logger = logging.getLogger(__name__)

# on_progress(done, total, title)
ProgressCallback = Callable[[int, int, str], None]
PackerFactory = Callable[[], ArchivePacker]


@dataclass(frozen=True)
class DocumentArtifact:
    """
    One rendered document (immutable).

    Attributes:
        title: Title drawn on the first page
        file_name: Resolved file name without extension
        data: Serialised PDF
        page_count: Number of pages in the document
        archive_path: Entry path inside the batch archive
    """
    title: str
    file_name: str
    data: bytes
    page_count: int
    archive_path: str

    @property
    def download_name(self) -> str:
        """File name offered for a single-document download."""
        return f"{self.file_name}.pdf"


@dataclass(frozen=True)
class BatchResult:
    """
    Complete batch result (immutable).

    Attributes:
        items: Artifacts in request order
        archive: Combined ZIP of all artifacts
        archive_name: File name offered for the combined download
        warnings: Tolerated problems collected during the run

    Example:
        >>> result = generate_batch(parse_request("Hello world", "A\\nB"))
        >>> [a.file_name for a in result.items]
        ['a', 'b']
    """
    items: tuple[DocumentArtifact, ...]
    archive: bytes
    archive_name: str = "all_pdfs.zip"
    warnings: tuple[str, ...] = ()

    @property
    def total_pages(self) -> int:
        """Pages across all documents."""
        return sum(a.page_count for a in self.items)

    def artifact(self, file_name: str) -> DocumentArtifact:
        """Look up an artifact by resolved file name."""
        for item in self.items:
            if item.file_name == file_name:
                return item
        raise KeyError(file_name)


def generate_batch(
    request: GenerationRequest,
    config: Optional[BuilderConfig] = None,
    *,
    measurer: Optional[TextMeasurer] = None,
    renderer: Optional[DocumentRenderer] = None,
    packer_factory: Optional[PackerFactory] = None,
    on_progress: Optional[ProgressCallback] = None,
) -> BatchResult:
    """
    Generate one document per item and pack them into an archive.

    Items are processed strictly in request order. Progress is reported
    after each item is complete, so callers never observe a
    half-rendered document. Any failure aborts the whole batch; no
    partial result is returned.

    Args:
        request: Shared content and items
        config: Builder configuration (defaults to BuilderConfig())
        measurer: Text measurer (defaults to the configured standard font)
        renderer: Document renderer (defaults to PdfRenderer)
        packer_factory: Creates the archive packer (defaults to ZipArchivePacker)
        on_progress: Called as ``on_progress(done, total, title)``

    Returns:
        BatchResult with artifacts and the combined archive

    Raises:
        ValidationError: If the request has no content or no items
        RenderError: If laying out or rendering an item fails
        PackError: If the archive cannot be built

    Example:
        >>> request = parse_request(content, "Coinbase Customer Service\\nRobinhood Support")
        >>> result = generate_batch(request)
        >>> print(f"Generated {len(result.items)} documents, {result.total_pages} pages")
    """
    config = config or BuilderConfig()
    request.validate()

    start_time = time.perf_counter()
    total = len(request.items)
    logger.info(f"Starting batch of {total} documents")

    measurer = measurer or StandardFontMeasurer(config.geometry.font_name)
    renderer = renderer or PdfRenderer(
        config.geometry.font_name,
        set_document_title=config.set_document_title,
    )
    packer = _open_packer(config, packer_factory)

    artifacts: List[DocumentArtifact] = []
    warnings: List[str] = []
    try:
        for artifact, item_warnings in _iter_artifacts(request, config, measurer, renderer):
            _pack(packer, artifact, len(artifacts))
            artifacts.append(artifact)
            warnings.extend(item_warnings)
            if on_progress is not None:
                on_progress(len(artifacts), total, artifact.title)

        try:
            archive = packer.finalize()
        except PackError:
            raise
        except Exception as e:
            raise PackError(f"Failed to finalise archive: {e}") from e
    finally:
        _release(packer)

    elapsed = time.perf_counter() - start_time
    logger.info(f"Batch completed in {elapsed:.2f}s: {total} documents")

    return BatchResult(
        items=tuple(artifacts),
        archive=archive,
        archive_name=config.archive_name,
        warnings=tuple(warnings),
    )


def _iter_artifacts(
    request: GenerationRequest,
    config: BuilderConfig,
    measurer: TextMeasurer,
    renderer: DocumentRenderer,
) -> Iterator[tuple[DocumentArtifact, List[str]]]:
    """
    Yield one finished artifact per item, in order.

    Each yield is a point between items where the caller may report
    progress; an item is never yielded before it is fully rendered.
    """
    total = len(request.items)
    used_names: Set[str] = set()

    for index, item in enumerate(request.items):
        logger.info(f"Generating {index + 1} of {total}...")

        file_name = _unique_name(
            resolve_file_name(item.title, item.file_name, index),
            index,
            used_names,
        )

        try:
            layout = layout_document(
                item.title,
                request.shared_content,
                config.geometry,
                measurer,
            )
        except MeasurementError as e:
            raise RenderError(
                f"Failed to measure text: {e}", item_index=index, title=item.title
            ) from e

        try:
            data = renderer.render(layout)
        except BatchError as e:
            raise RenderError(str(e), item_index=index, title=item.title) from e
        except Exception as e:
            raise RenderError(
                f"Failed to render document: {e}", item_index=index, title=item.title
            ) from e

        if not isinstance(data, (bytes, bytearray)):
            raise RenderError(
                f"Renderer returned {type(data).__name__}, expected bytes",
                item_index=index,
                title=item.title,
            )

        logger.debug(f"Rendered {file_name}.pdf: {layout.page_count} pages")
        yield DocumentArtifact(
            title=item.title,
            file_name=file_name,
            data=bytes(data),
            page_count=layout.page_count,
            archive_path=config.entry_path(file_name),
        ), list(layout.warnings)


def _unique_name(name: str, index: int, used: Set[str]) -> str:
    """
    Make ``name`` unique within the batch.

    A repeated name gets the item's 1-based position appended, so the
    result depends only on the request contents.
    """
    if name in used:
        candidate = f"{name}-{index + 1}"
        suffix = 2
        while candidate in used:
            candidate = f"{name}-{index + 1}-{suffix}"
            suffix += 1
        logger.warning(f"Duplicate file name {name!r} for item {index + 1}; using {candidate!r}")
        name = candidate
    used.add(name)
    return name


def _open_packer(config: BuilderConfig, packer_factory: Optional[PackerFactory]) -> ArchivePacker:
    """Create the archive packer, normalising failures."""
    if packer_factory is None:
        return ZipArchivePacker(config.compression)
    try:
        return packer_factory()
    except BatchError:
        raise
    except Exception as e:
        raise PackError(f"Failed to create archive packer: {e}") from e


def _pack(packer: ArchivePacker, artifact: DocumentArtifact, index: int) -> None:
    """Add one artifact to the archive, normalising failures."""
    try:
        packer.add(artifact.archive_path, artifact.data)
    except PackError as e:
        if e.item_index is not None:
            raise
        raise PackError(str(e), item_index=index, title=artifact.title) from e
    except Exception as e:
        raise PackError(
            f"Failed to add {artifact.archive_path!r}: {e}",
            item_index=index,
            title=artifact.title,
        ) from e


def _release(packer: ArchivePacker) -> None:
    """Close the packer if it holds resources."""
    close = getattr(packer, "close", None)
    if callable(close):
        close()


class BatchRunner:
    """
    Run batches on a single background worker.

    Batches submitted to one runner execute one at a time, in submission
    order. The returned future resolves with the complete BatchResult or
    raises the batch's error; there is no partial result.

    Usage:
        with BatchRunner() as runner:
            future = runner.submit(request, on_progress=report)
            result = future.result(timeout=60)

    Args:
        config: Builder configuration shared by every batch
    """

    def __init__(self, config: Optional[BuilderConfig] = None) -> None:
        self.config = config or BuilderConfig()
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="titlepdf-batch")
        self._futures: List[Future] = []
        self._completed = 0

    def submit(
        self,
        request: GenerationRequest,
        *,
        on_progress: Optional[ProgressCallback] = None,
        **collaborators,
    ) -> Future:
        """
        Queue a batch.

        Finished batches are settled first, so a long-lived runner only
        holds futures that are still pending (or whose unexpected error
        wait_all() has yet to raise).

        Args:
            request: Request to generate
            on_progress: Progress callback, called on the worker thread
            **collaborators: ``measurer``, ``renderer`` or ``packer_factory``
                overrides passed to generate_batch()

        Returns:
            Future resolving to a BatchResult
        """
        self._futures = [f for f in self._futures if not self._settle(f)]
        future = self._executor.submit(
            generate_batch,
            request,
            self.config,
            on_progress=on_progress,
            **collaborators,
        )
        self._futures.append(future)
        return future

    @property
    def pending(self) -> int:
        """Number of futures the runner still tracks."""
        return len(self._futures)

    def _settle(self, future: Future) -> bool:
        """Record a finished batch; False if it must stay tracked."""
        if not future.done():
            return False
        error = future.exception()
        if error is None:
            self._completed += 1
        elif isinstance(error, BatchError):
            logger.error(f"Batch failed: {error}")
        else:
            return False
        return True

    def wait_all(self, timeout: Optional[float] = None) -> int:
        """
        Wait for all submitted batches.

        Args:
            timeout: Max seconds to wait per batch (None = indefinite)

        Returns:
            Number of batches that completed successfully since the last
            call
        """
        for future in self._futures:
            try:
                future.result(timeout=timeout)
                self._completed += 1
            except BatchError as e:
                logger.error(f"Batch failed: {e}")
        self._futures.clear()
        completed, self._completed = self._completed, 0
        return completed

    def shutdown(self) -> None:
        """Wait for pending batches and stop the worker."""
        self._executor.shutdown(wait=True)
        self._futures.clear()

    def __enter__(self) -> "BatchRunner":
        return self

    def __exit__(self, *args) -> None:
        self.shutdown()
