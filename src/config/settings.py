# src/config/settings.py — v1
"""Typed run configuration for a scan.

Built from command-line arguments (no environment variables or config
files are read). Validation failures surface as ConfigurationError so the
CLI can report them as usage errors.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from pathscan.core.errors import UsageError

DEFAULT_BATCH_SIZE = 100
DEFAULT_QUEUE_CAPACITY = 1000
DEFAULT_PROGRESS_INTERVAL_S = 0.1
DEFAULT_OUTPUT_FILE = Path("file_paths.csv")


class ConfigurationError(UsageError):
    """Raised when scan settings fail validation."""


class ScanSettings(BaseModel):
    """Settings for one scan run."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    # === Input ===
    scan_root: str

    # === Pipeline ===
    batch_size: int = DEFAULT_BATCH_SIZE
    queue_capacity: int = DEFAULT_QUEUE_CAPACITY

    # === Output ===
    output_file: Path = DEFAULT_OUTPUT_FILE

    # === Progress display ===
    progress: Literal["auto", "always", "never"] = "auto"
    progress_interval: float = DEFAULT_PROGRESS_INTERVAL_S

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    log_format: Literal["json", "text"] = "text"

    # --- Validators ---

    @field_validator("scan_root", mode="before")
    @classmethod
    def keep_root_as_given(cls, v: object) -> object:
        """Accept path objects but keep strings verbatim, empty ones included."""
        if isinstance(v, os.PathLike):
            return os.fspath(v)
        return v

    @field_validator("batch_size")
    @classmethod
    def validate_batch_size(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("batch_size must be a positive integer")
        return v

    @field_validator("queue_capacity")
    @classmethod
    def validate_queue_capacity(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("queue_capacity must be a positive integer")
        return v

    @field_validator("progress_interval")
    @classmethod
    def validate_progress_interval(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("progress_interval must be > 0")
        return v

    # --- Helpers ---

    @property
    def progress_enabled(self) -> bool | None:
        """Tri-state flag for ProgressReporter (None = decide from the tty)."""
        if self.progress == "auto":
            return None
        return self.progress == "always"


def load_settings(**overrides: object) -> ScanSettings:
    """Build validated settings.

    Args:
        **overrides: Field values, typically parsed CLI arguments.

    Returns:
        Validated ScanSettings instance.

    Raises:
        ConfigurationError: If any field is invalid.
    """
    try:
        return ScanSettings(**overrides)  # type: ignore[arg-type]
    except ValidationError as exc:
        messages = [err["msg"].removeprefix("Value error, ") for err in exc.errors()]
        raise ConfigurationError("; ".join(messages)) from exc
