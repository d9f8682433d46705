"""pathscan: stream every file under a directory into a CSV inventory."""

from pathscan.version import __version__

__all__ = ["__version__"]
