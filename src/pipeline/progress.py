# src/pipeline/progress.py — v1
"""Progress reporter: spinner line showing the processed count.

Purely observational: it reads the counter without locking and can be
disabled without changing what the pipeline writes.
"""

from __future__ import annotations

import logging
import sys
import threading
from typing import IO

from pathscan.logging.context import LogContext, bind_context, set_stage_context
from pathscan.pipeline.counter import ProcessedCounter

logger = logging.getLogger(__name__)

SPINNER_GLYPHS = "⠋⠙⠹⠸⠼⠴⠦⠧⠇⠏"
DEFAULT_INTERVAL_S = 0.1
CLEAR_LINE = "\r\x1b[K"


def _isatty(stream: IO[str]) -> bool:
    isatty = getattr(stream, "isatty", None)
    try:
        return bool(isatty and isatty())
    except ValueError:
        # Closed stream
        return False


class ProgressReporter:
    """Render ``<glyph> Scanning... N files found`` until stopped.

    Args:
        counter: Shared processed counter to poll.
        stream: Display stream (default: sys.stdout at construction time).
        interval: Seconds between renders.
        enabled: Force on/off; None enables only for an interactive stream.
    """

    def __init__(
        self,
        counter: ProcessedCounter,
        stream: IO[str] | None = None,
        interval: float = DEFAULT_INTERVAL_S,
        enabled: bool | None = None,
        log_context: LogContext | None = None,
    ) -> None:
        self._counter = counter
        self._stream = stream if stream is not None else sys.stdout
        self._interval = interval
        self.enabled = _isatty(self._stream) if enabled is None else enabled
        self._log_context = log_context
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None
        self.frames_rendered = 0

    def render(self, tick: int) -> None:
        glyph = SPINNER_GLYPHS[tick % len(SPINNER_GLYPHS)]
        self._stream.write(f"\r{glyph} Scanning... {self._counter.value} files found")
        self._stream.flush()
        self.frames_rendered += 1

    def _run(self) -> None:
        if self._log_context is not None:
            bind_context(self._log_context)
        set_stage_context("progress")
        logger.debug("Progress reporter started (interval=%.3fs)", self._interval)
        tick = 0
        while not self._stop.is_set():
            self.render(tick)
            tick += 1
            self._stop.wait(self._interval)

    def start(self) -> None:
        """Start rendering on a daemon thread (no-op when disabled)."""
        if not self.enabled or self._thread is not None:
            return
        self._thread = threading.Thread(
            target=self._run, name="pathscan-progress", daemon=True,
        )
        self._thread.start()

    def stop(self) -> None:
        """Stop rendering, wait for the thread, and clear the line."""
        if self._stop.is_set():
            return
        self._stop.set()
        if self._thread is None:
            return
        self._thread.join()
        self._stream.write(CLEAR_LINE)
        self._stream.flush()
        logger.debug("Progress reporter stopped after %d frames", self.frames_rendered)

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def __enter__(self) -> ProgressReporter:
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()
