"""
Command-line entry point for batch PDF generation.

Reads the shared content, a titles file (one per line) and an optional
file-names file, generates one PDF per title and writes the combined
ZIP archive.

Example:
    titlepdf --content body.txt --titles titles.txt --output out/
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from titlepdf import __version__
from titlepdf.builder import (
    BatchError,
    BuilderConfig,
    ConfigError,
    generate_batch,
    load_config,
    parse_request,
)
from titlepdf.builder.output import write_archive, write_documents

logger = logging.getLogger("titlepdf")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="titlepdf",
        description="Generate one titled PDF per line of a titles file and pack them into a ZIP",
    )
    parser.add_argument("--content", type=Path, required=True, help="Text file with the shared content")
    parser.add_argument("--titles", type=Path, required=True, help="Text file with one title per line")
    parser.add_argument("--filenames", type=Path, help="Text file with one file name per line (optional)")
    parser.add_argument("--output", type=Path, default=Path("."), help="Output directory (default: .)")
    parser.add_argument("--config", type=Path, help="JSON config file")
    parser.add_argument("--separate", action="store_true", help="Also write each PDF individually")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _read_text(path: Optional[Path]) -> str:
    if path is None:
        return ""
    return path.read_text(encoding="utf-8")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )

    try:
        config = load_config(args.config) if args.config else BuilderConfig()
        request = parse_request(
            _read_text(args.content),
            _read_text(args.titles),
            _read_text(args.filenames),
        )
    except ConfigError as e:
        logger.error(f"Configuration Error: {e}")
        return 2
    except OSError as e:
        logger.error(f"Failed to read input: {e}")
        return 2

    def report(done: int, total: int, title: str) -> None:
        logger.info(f"[{done}/{total}] {title}")

    try:
        result = generate_batch(request, config, on_progress=report)
    except BatchError as e:
        logger.error(f"Generation failed: {e}")
        return 1

    try:
        archive_path = write_archive(result, args.output / result.archive_name)
        if args.separate:
            write_documents(result, args.output)
    except OSError as e:
        logger.error(f"Failed to write output: {e}")
        return 2

    logger.info(f"Completed: {len(result.items)} PDFs, {result.total_pages} pages -> {archive_path}")
    for warning in result.warnings:
        logger.warning(f"Warning: {warning}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
