# src/pipeline/coordinator.py — v1
"""Scan coordinator: validate, run the pipeline, report.

Lifecycle:
    VALIDATING -> RUNNING -> DRAINING -> REPORTING -> SUCCEEDED | FAILED

The calling thread acts as the batch writer while the traverser and the
progress reporter run on their own threads. The target is validated
strictly before the output file is touched. A traversal error is raised
only after the writer has drained what was already queued and the
reporter has stopped, so rows written before the failure remain on disk.
"""

from __future__ import annotations

import logging
import os
import stat
import time
import uuid
from typing import IO, TYPE_CHECKING

from pathscan.core.errors import PathValidationError
from pathscan.logging.context import get_context, set_scan_context, set_stage_context
from pathscan.pipeline.counter import ProcessedCounter
from pathscan.pipeline.models import ScanResult, ScanState
from pathscan.pipeline.progress import ProgressReporter
from pathscan.pipeline.sink import PathSink
from pathscan.pipeline.traverser import Traverser
from pathscan.pipeline.writer import BatchWriter, open_output

if TYPE_CHECKING:
    from pathscan.config.settings import ScanSettings

logger = logging.getLogger(__name__)


def validate_target(root: str) -> None:
    """Check that root exists and is a directory.

    Raises:
        PathValidationError: Otherwise.
    """
    try:
        info = os.stat(root)
    except OSError as exc:
        raise PathValidationError(f"Error accessing path: {exc}") from exc
    if not stat.S_ISDIR(info.st_mode):
        raise PathValidationError(f"Error: {root} is not a directory")


class ScanCoordinator:
    """Own startup and shutdown ordering of the scan pipeline."""

    def __init__(
        self,
        settings: ScanSettings,
        progress_stream: IO[str] | None = None,
    ) -> None:
        self._settings = settings
        self._progress_stream = progress_stream
        self.counter = ProcessedCounter()
        self.state = ScanState.VALIDATING
        self.run_id = uuid.uuid4().hex[:12]

    def _transition(self, state: ScanState) -> None:
        logger.debug("Scan %s: %s -> %s", self.run_id, self.state.value, state.value)
        self.state = state

    def run(self) -> ScanResult:
        """Execute the whole scan.

        Returns:
            ScanResult describing a fully successful run.

        Raises:
            PathValidationError: Target missing or not a directory.
            OutputIOError: CSV could not be created or written.
            TraversalError: The walk failed; partial output stays on disk.
        """
        settings = self._settings
        root = settings.scan_root
        set_scan_context(root, self.run_id)
        set_stage_context("writer")
        t0 = time.perf_counter()

        try:
            validate_target(root)

            self._transition(ScanState.RUNNING)
            stream = open_output(settings.output_file)
            try:
                writer, traverser = self._run_pipeline(root, stream)
            finally:
                stream.close()
        except Exception:
            self._transition(ScanState.FAILED)
            raise

        if traverser.error is not None:
            self._transition(ScanState.FAILED)
            logger.debug(
                "Scan %s failed after writing %d records", self.run_id, self.counter.value,
            )
            raise traverser.error

        self._transition(ScanState.SUCCEEDED)
        result = ScanResult(
            scan_root=root,
            output_file=os.fspath(settings.output_file),
            processed=self.counter.value,
            batches_written=writer.batches_written,
            duration_seconds=round(time.perf_counter() - t0, 3),
        )
        logger.info(
            "Scanned %s: %d files in %d batches (%.2fs)",
            root, result.processed, result.batches_written, result.duration_seconds,
        )
        return result

    def _run_pipeline(
        self, root: str, stream: IO[str],
    ) -> tuple[BatchWriter, Traverser]:
        settings = self._settings
        log_context = get_context()
        sink = PathSink(settings.queue_capacity)
        traverser = Traverser(root, sink, log_context=log_context)
        writer = BatchWriter(stream, settings.batch_size, self.counter)
        reporter = ProgressReporter(
            self.counter,
            stream=self._progress_stream,
            interval=settings.progress_interval,
            enabled=settings.progress_enabled,
            log_context=log_context,
        )

        # The reporter must never outlive the coordinator, even when a
        # write error aborts the run.
        try:
            reporter.start()
            traverser.start()
            writer.consume(sink)
            self._transition(ScanState.DRAINING)
            traverser.join()
        finally:
            self._transition(ScanState.REPORTING)
            reporter.stop()
        return writer, traverser


def run_scan(
    settings: ScanSettings, progress_stream: IO[str] | None = None,
) -> ScanResult:
    """Convenience wrapper: build a coordinator and run it."""
    return ScanCoordinator(settings, progress_stream=progress_stream).run()
