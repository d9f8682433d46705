# src/pipeline/sink.py — v1
"""Path sink: bounded FIFO between the traverser and the batch writer.

Exactly one producer and one consumer. A full sink blocks the producer,
which bounds memory when the writer falls behind.
"""

from __future__ import annotations

import queue
import threading
from collections.abc import Iterator

DEFAULT_CAPACITY = 1000

# End-of-stream marker; never a valid path.
_EOS = object()


class SinkClosedError(RuntimeError):
    """Raised when a producer pushes after close()."""


class PathSink:
    """Blocking bounded queue of discovered paths with close semantics."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._queue: queue.Queue[object] = queue.Queue(maxsize=capacity)
        self._closed = threading.Event()
        self._drained = False
        self.capacity = capacity

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def put(self, path: str) -> None:
        """Push a path, blocking while the sink is full."""
        if self._closed.is_set():
            raise SinkClosedError("put() on a closed sink")
        self._queue.put(path)

    def close(self) -> None:
        """Signal end-of-stream. Safe to call more than once."""
        if self._closed.is_set():
            return
        self._closed.set()
        # Blocks while full so that no queued path is ever displaced.
        self._queue.put(_EOS)

    def get(self) -> str | None:
        """Pop the next path, or None once closed and drained."""
        if self._drained:
            return None
        item = self._queue.get()
        if item is _EOS:
            self._drained = True
            return None
        return item  # type: ignore[return-value]

    def __iter__(self) -> Iterator[str]:
        while True:
            path = self.get()
            if path is None:
                return
            yield path
