# src/pipeline/writer.py — v1
"""Batch writer: drain the path sink into CSV rows, one batch at a time.

Each full batch is written, flushed, and only then counted. Any write
failure is fatal: partially flushed output cannot be trusted, so nothing
is retried.
"""

from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import IO

from pathscan.config.settings import DEFAULT_BATCH_SIZE
from pathscan.core.errors import OutputIOError
from pathscan.pipeline.counter import ProcessedCounter
from pathscan.pipeline.models import CSV_HEADER, FileRecord
from pathscan.pipeline.sink import PathSink

logger = logging.getLogger(__name__)


def open_output(path: Path) -> IO[str]:
    """Create or truncate the CSV file and write its header.

    surrogateescape lets file names that are not valid UTF-8 pass
    through to the output byte for byte.

    Raises:
        OutputIOError: If the file cannot be created or the header written.
    """
    try:
        stream = open(  # noqa: SIM115
            path, "w", newline="", encoding="utf-8", errors="surrogateescape",
        )
    except OSError as exc:
        raise OutputIOError(f"Error creating CSV file: {exc}") from exc
    try:
        csv.writer(stream).writerow(CSV_HEADER)
        stream.flush()
    except (OSError, csv.Error) as exc:
        stream.close()
        raise OutputIOError(f"Error writing CSV header: {exc}") from exc
    logger.debug("Opened output %s", path)
    return stream


class BatchWriter:
    """Consumer stage: batch paths from a sink and append them as CSV rows."""

    def __init__(
        self,
        stream: IO[str],
        batch_size: int = DEFAULT_BATCH_SIZE,
        counter: ProcessedCounter | None = None,
    ) -> None:
        if batch_size <= 0:
            raise ValueError("batch_size must be a positive integer")
        self._stream = stream
        self._writer = csv.writer(stream)
        self.batch_size = batch_size
        self.counter = counter if counter is not None else ProcessedCounter()
        self.batches_written = 0
        self.records_written = 0

    def consume(self, sink: PathSink) -> int:
        """Drain sink until end-of-stream, flushing every full batch.

        Returns:
            Number of records written by this call.

        Raises:
            OutputIOError: On the first failed write or flush.
        """
        written = 0
        batch: list[FileRecord] = []
        for path in sink:
            batch.append(FileRecord.from_path(path))
            if len(batch) >= self.batch_size:
                written += self.flush_batch(batch, final=False)

        if batch:
            written += self.flush_batch(batch, final=True)
        return written

    def flush_batch(self, batch: list[FileRecord], final: bool = False) -> int:
        """Write, flush, and count one batch, then clear it in place."""
        size = len(batch)
        try:
            self._writer.writerows(record.as_row() for record in batch)
            self._stream.flush()
        except (OSError, csv.Error, UnicodeError) as exc:
            what = "final batch" if final else "batch"
            raise OutputIOError(f"Error writing {what}: {exc}") from exc

        total = self.counter.add(size)
        self.batches_written += 1
        self.records_written += size
        batch.clear()
        logger.debug(
            "Flushed %s of %d records (total %d)",
            "final batch" if final else "batch", size, total,
        )
        return size
