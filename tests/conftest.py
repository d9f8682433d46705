# tests/conftest.py — v1
"""Shared test fixtures for all unit and integration tests.

Provides small on-disk directory trees and a helper to read the CSV
output back. Everything lives under pytest's tmp_path.
"""

from __future__ import annotations

import csv
import logging
from pathlib import Path

import pytest

from pathscan.logging.context import clear_context


# === HELPERS ===


def make_tree(root: Path, files: list[str]) -> Path:
    """Create every relative file path in files under root."""
    root.mkdir(parents=True, exist_ok=True)
    for rel in files:
        p = root / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(rel, encoding="utf-8")
    return root


def read_csv_rows(path: Path) -> list[list[str]]:
    """Read the CSV output, header included."""
    with path.open(newline="", encoding="utf-8") as f:
        return list(csv.reader(f))


# === FIXTURES ===


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """A small nested tree with five files and one empty directory."""
    root = make_tree(
        tmp_path / "data",
        [
            "alpha.txt",
            "beta/one.csv",
            "beta/two.csv",
            "beta/gamma/deep.bin",
            "zeta.md",
        ],
    )
    (root / "empty").mkdir()
    return root


@pytest.fixture
def output_file(tmp_path: Path) -> Path:
    return tmp_path / "file_paths.csv"


@pytest.fixture(autouse=True)
def _reset_logging_state():
    """Keep log context and handlers from leaking between tests."""
    clear_context()
    yield
    clear_context()
    logging.getLogger("pathscan").handlers.clear()
