# src/pipeline/models.py — v1
"""Scan pipeline models: FileRecord, ScanResult, ScanState."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict

CSV_HEADER: tuple[str, str] = ("file_path", "path_length")


class ScanState(str, Enum):
    """Coordinator lifecycle."""

    VALIDATING = "validating"
    RUNNING = "running"
    DRAINING = "draining"
    REPORTING = "reporting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class FileRecord(BaseModel):
    """One output row: a discovered path and its length in characters."""

    model_config = ConfigDict(frozen=True)

    path: str
    path_length: int

    @classmethod
    def from_path(cls, path: str) -> FileRecord:
        """Build a record, deriving path_length from the path itself."""
        return cls(path=path, path_length=len(path))

    def as_row(self) -> list[str]:
        return [self.path, str(self.path_length)]


class ScanResult(BaseModel):
    """Summary of a completed scan."""

    scan_root: str
    output_file: str
    processed: int
    batches_written: int
    duration_seconds: float
