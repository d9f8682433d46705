# src/pipeline/traverser.py — v1
"""Traverser: depth-first directory walk feeding the path sink.

Every entry that is not itself a directory is emitted, including symlinks,
which are never followed. Entries within a directory are visited in
lexical order of their names, so a given unchanged tree always yields the
same sequence. The first listing error aborts the walk.
"""

from __future__ import annotations

import logging
import os
import threading
from collections.abc import Iterator

from pathscan.core.errors import TraversalError
from pathscan.logging.context import LogContext, bind_context, set_stage_context
from pathscan.pipeline.sink import PathSink

logger = logging.getLogger(__name__)


def _list_dir(directory: str) -> list[tuple[str, bool]]:
    """Return (path, is_dir) for each entry of directory, sorted by name."""
    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda e: e.name)
        return [
            (
                os.path.normpath(os.path.join(directory, entry.name)),
                entry.is_dir(follow_symlinks=False),
            )
            for entry in entries
        ]
    except OSError as exc:
        raise TraversalError(directory, exc) from exc


def walk_files(root: str) -> Iterator[str]:
    """Yield every non-directory path under root, depth-first.

    Child paths are the joined and normalised form of parent + name, so a
    relative root gives relative paths and an absolute root absolute ones.
    Uses an explicit stack, so tree depth is not bounded by the recursion
    limit.

    Raises:
        TraversalError: If a directory cannot be listed.
    """
    stack: list[Iterator[tuple[str, bool]]] = [iter(_list_dir(root))]
    while stack:
        item = next(stack[-1], None)
        if item is None:
            stack.pop()
            continue
        path, is_dir = item
        if is_dir:
            stack.append(iter(_list_dir(path)))
        else:
            yield path


class Traverser:
    """Producer stage: walk a tree and push each file path into a sink.

    The sink is closed on every exit path so the consumer never blocks
    forever. The first failure is kept in ``error``.
    """

    def __init__(
        self,
        root: str,
        sink: PathSink,
        log_context: LogContext | None = None,
    ) -> None:
        self.root = root
        self._sink = sink
        self._log_context = log_context
        self._thread: threading.Thread | None = None
        self.error: TraversalError | None = None
        self.discovered = 0

    def run(self) -> None:
        """Walk the tree synchronously. Never raises."""
        if self._log_context is not None:
            bind_context(self._log_context)
        set_stage_context("traverser")
        try:
            for path in walk_files(self.root):
                self._sink.put(path)
                self.discovered += 1
        except TraversalError as exc:
            self._record(exc)
        except Exception as exc:
            self._record(TraversalError(self.root, exc))
        finally:
            self._sink.close()
        logger.debug(
            "Traversal of %s finished: %d paths discovered (error=%s)",
            self.root, self.discovered, self.error,
        )

    def _record(self, exc: TraversalError) -> None:
        if self.error is None:
            self.error = exc
        logger.debug("Traversal aborted at %s", exc.path, exc_info=exc)

    def start(self) -> None:
        """Run the walk on a background daemon thread."""
        if self._thread is not None:
            raise RuntimeError("traverser already started")
        self._thread = threading.Thread(
            target=self.run, name="pathscan-traverser", daemon=True,
        )
        self._thread.start()

    def join(self, timeout: float | None = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout)

    @property
    def finished(self) -> bool:
        return self._thread is not None and not self._thread.is_alive()
