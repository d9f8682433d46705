# src/pipeline/counter.py — v1
"""Shared processed-record counter.

Single writer (the batch writer), any number of readers. Writes take a
lock; reads never do, since rebinding an int attribute is atomic in
CPython and readers only need an eventually consistent value.
"""

from __future__ import annotations

import threading


class ProcessedCounter:
    """Monotonic count of records durably written to the output."""

    def __init__(self) -> None:
        self._value = 0
        self._lock = threading.Lock()

    def add(self, n: int) -> int:
        """Add a flushed batch's size and return the new total."""
        if n < 0:
            raise ValueError("counter can only increase")
        with self._lock:
            self._value += n
            return self._value

    @property
    def value(self) -> int:
        """Current total. Never blocks."""
        return self._value
