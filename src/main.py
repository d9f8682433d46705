# src/main.py — v1
"""CLI entry point.

Usage:
    pathscan <directory> [batch_size]

Writes file_paths.csv in the current working directory with one row per
file found under <directory>.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import NoReturn

from pathscan.config.settings import DEFAULT_BATCH_SIZE, load_settings
from pathscan.core.errors import ScanError, TraversalError, UsageError
from pathscan.logging.logger import setup_logging
from pathscan.pipeline.coordinator import run_scan
from pathscan.version import __version__

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_INTERRUPTED = 130


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that exits with status 1 on usage errors."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(EXIT_ERROR, f"{self.prog}: error: {message}\n")


def _positive_int(value: str) -> int:
    try:
        size = int(value)
    except ValueError:
        size = 0
    if size <= 0:
        raise argparse.ArgumentTypeError("batch_size must be a positive integer")
    return size


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    setup_logging(
        level="DEBUG" if args.verbose else "WARNING",
        log_format=args.log_format,
    )

    try:
        settings = load_settings(
            scan_root=args.directory,
            batch_size=args.batch_size,
            progress="never" if args.no_progress else "auto",
            log_level="DEBUG" if args.verbose else "WARNING",
            log_format=args.log_format,
        )
        result = run_scan(settings)
    except KeyboardInterrupt:
        logger.error("Interrupted by user")
        return EXIT_INTERRUPTED
    except TraversalError as exc:
        logger.error("Error walking directory: %s", exc, exc_info=args.verbose)
        return EXIT_ERROR
    except UsageError as exc:
        logger.error("Error: %s", exc)
        return EXIT_ERROR
    except ScanError as exc:
        logger.error("%s", exc, exc_info=args.verbose)
        return EXIT_ERROR

    print(f"Done! Processed {result.processed} files.")
    print(f"CSV file created: {result.output_file}")
    return EXIT_OK


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = _ArgumentParser(
        prog="pathscan",
        description=(
            f"pathscan v{__version__} - list every file under a directory "
            "into file_paths.csv"
        ),
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging on stderr",
    )
    parser.add_argument(
        "--no-progress", action="store_true",
        help="Do not draw the progress line",
    )
    parser.add_argument(
        "--log-format", choices=("text", "json"), default="text",
        help="Log record format (default: text)",
    )
    parser.add_argument("directory", help="Directory to scan")
    parser.add_argument(
        "batch_size", nargs="?", type=_positive_int, default=DEFAULT_BATCH_SIZE,
        help=f"Rows written per flush (default: {DEFAULT_BATCH_SIZE})",
    )
    return parser


if __name__ == "__main__":
    sys.exit(main())
