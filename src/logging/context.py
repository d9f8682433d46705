# src/logging/context.py — v1
"""Contextual logging support: attach scan_root, run_id, stage to log records.

Context variables are per thread: each pipeline thread sets its own stage
when it starts, after copying the scan-level fields from the coordinator.
"""

from __future__ import annotations

import contextvars
from dataclasses import dataclass
from typing import Any

_scan_root: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "scan_root", default=None
)
_run_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "run_id", default=None
)
_stage: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "stage", default=None
)


@dataclass(frozen=True)
class LogContext:
    """Immutable snapshot of current logging context."""

    scan_root: str | None = None
    run_id: str | None = None
    stage: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(
        scan_root=_scan_root.get(),
        run_id=_run_id.get(),
        stage=_stage.get(),
    )


def set_scan_context(scan_root: str, run_id: str) -> None:
    """Set scan-level context (called once per run, and again per thread)."""
    _scan_root.set(scan_root)
    _run_id.set(run_id)


def set_stage_context(stage: str) -> None:
    """Set the pipeline stage name for the current thread."""
    _stage.set(stage)


def bind_context(ctx: LogContext) -> None:
    """Install a snapshot taken on another thread into the current one."""
    _scan_root.set(ctx.scan_root)
    _run_id.set(ctx.run_id)
    _stage.set(ctx.stage)


def clear_context() -> None:
    """Reset all context variables."""
    _scan_root.set(None)
    _run_id.set(None)
    _stage.set(None)
