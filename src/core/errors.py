# src/core/errors.py — v1
"""Exception hierarchy for the scan pipeline.

All errors derive from ScanError so the CLI can map them to exit codes in
one place. Pipeline components raise; only pathscan.main reports.
"""

from __future__ import annotations


class ScanError(Exception):
    """Base class for every pathscan failure."""


class UsageError(ScanError):
    """Invalid command-line arguments or settings."""


class PathValidationError(ScanError):
    """Scan target is missing, unreadable, or not a directory."""


class OutputIOError(ScanError):
    """The CSV output could not be created, written, or flushed."""


class TraversalError(ScanError):
    """The directory walk failed partway through.

    Records already flushed before the failure stay in the output file.
    """

    def __init__(self, path: str, cause: BaseException) -> None:
        self.path = path
        self.cause = cause
        # OSError messages already name the offending file.
        if getattr(cause, "filename", None):
            super().__init__(str(cause))
        else:
            super().__init__(f"{path}: {cause}")
