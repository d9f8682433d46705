# tests/integration/pipeline/test_int_pipeline_subsystem.py — v1
"""Integration tests for the scan pipeline.

Covers: pipeline/coordinator.py, traverser.py, sink.py, writer.py,
progress.py and main.py, end to end against real directory trees.
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from pathscan.config.settings import load_settings
from pathscan.main import main
from pathscan.pipeline.coordinator import run_scan

from conftest import make_tree, read_csv_rows


def _scan(root: Path, output: Path, **overrides) -> bytes:
    settings = load_settings(scan_root=root, output_file=output, **overrides)
    run_scan(settings)
    return output.read_bytes()


def _count_non_directories(root: Path) -> int:
    total = 0
    for _dirpath, dirnames, filenames in os.walk(root):
        total += len(filenames)
        # os.walk lists symlinks to directories under dirnames
        total += sum(1 for d in dirnames if os.path.islink(os.path.join(_dirpath, d)))
    return total


@pytest.fixture
def wide_tree(tmp_path: Path) -> Path:
    files = []
    for d in range(6):
        for s in range(4):
            for f in range(9):
                files.append(f"dir{d}/sub{s}/file{f}.dat")
        files.append(f"dir{d}/top.txt")
    files.append("name, with \"quotes\".txt")
    return make_tree(tmp_path / "wide", files)


# =====================================================================
#  PROPERTIES
# =====================================================================

class TestPipelineProperties:

    def test_row_count_matches_files(self, wide_tree: Path, tmp_path: Path):
        out = tmp_path / "out.csv"
        _scan(wide_tree, out)
        rows = read_csv_rows(out)
        assert len(rows) - 1 == _count_non_directories(wide_tree) == 6 * 37 + 1

    @pytest.mark.parametrize("batch_size", [1, 2, 7, 100, 10_000])
    def test_output_independent_of_batch_size(
        self, wide_tree: Path, tmp_path: Path, batch_size: int,
    ):
        reference = _scan(wide_tree, tmp_path / "ref.csv", batch_size=100)
        other = _scan(wide_tree, tmp_path / f"b{batch_size}.csv", batch_size=batch_size)
        assert other == reference

    def test_idempotent(self, wide_tree: Path, tmp_path: Path):
        out = tmp_path / "out.csv"
        first = _scan(wide_tree, out)
        second = _scan(wide_tree, out)
        assert first == second

    def test_path_length_matches_path(self, wide_tree: Path, tmp_path: Path):
        out = tmp_path / "out.csv"
        _scan(wide_tree, out)
        for path, length in read_csv_rows(out)[1:]:
            assert int(length) == len(path)

    def test_tiny_queue_preserves_order(self, wide_tree: Path, tmp_path: Path):
        reference = _scan(wide_tree, tmp_path / "ref.csv")
        squeezed = _scan(wide_tree, tmp_path / "q1.csv", queue_capacity=1, batch_size=3)
        assert squeezed == reference

    def test_empty_directory(self, tmp_path: Path):
        root = tmp_path / "empty"
        root.mkdir()
        out = tmp_path / "out.csv"
        assert _scan(root, out) == b"file_path,path_length\r\n"


# =====================================================================
#  SCENARIOS
# =====================================================================

class TestScenarios:

    def test_nested_example(self, tmp_path: Path, monkeypatch, capsys):
        root = make_tree(tmp_path / "a", ["x.txt", "b/y.txt"])
        monkeypatch.chdir(tmp_path)

        assert main([str(root), "100"]) == 0

        rows = read_csv_rows(tmp_path / "file_paths.csv")
        x = str(root / "x.txt")
        y = str(root / "b" / "y.txt")
        assert rows[0] == ["file_path", "path_length"]
        assert sorted(rows[1:]) == sorted([[x, str(len(x))], [y, str(len(y))]])
        # Depth-first in lexical order: "b" sorts before "x.txt".
        assert [r[0] for r in rows[1:]] == [y, x]
        assert capsys.readouterr().out.endswith(
            "Done! Processed 2 files.\nCSV file created: file_paths.csv\n"
        )

    def test_relative_root_from_parent(self, tmp_path: Path, monkeypatch):
        make_tree(tmp_path / "a", ["x.txt", "b/y.txt"])
        monkeypatch.chdir(tmp_path)
        assert main(["a"]) == 0
        rows = read_csv_rows(tmp_path / "file_paths.csv")
        assert rows[1:] == [["a/b/y.txt", "9"], ["a/x.txt", "7"]]

    def test_missing_target(self, tmp_path: Path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)
        assert main([str(tmp_path / "does-not-exist")]) == 1
        assert "Error accessing path" in capsys.readouterr().err
        assert not (tmp_path / "file_paths.csv").exists()

    @pytest.mark.skipif(
        not hasattr(os, "geteuid") or os.geteuid() == 0,
        reason="permission bits are not enforced for root",
    )
    def test_unreadable_subdirectory(self, tmp_path: Path, monkeypatch, capsys):
        root = make_tree(tmp_path / "tree", ["a.txt", "locked/secret.txt", "z.txt"])
        locked = root / "locked"
        locked.chmod(0)
        monkeypatch.chdir(tmp_path)
        try:
            assert main([str(root), "1"]) == 1
        finally:
            locked.chmod(0o755)

        err = capsys.readouterr().err
        assert "Error walking directory" in err
        rows = read_csv_rows(tmp_path / "file_paths.csv")
        assert rows[1:] == [[str(root / "a.txt"), str(len(str(root / "a.txt")))]]

    def test_simulated_unreadable_subdirectory(self, tmp_path: Path, monkeypatch, capsys):
        root = make_tree(tmp_path / "tree", ["a.txt", "locked/secret.txt", "z.txt"])
        real_scandir = os.scandir

        def fake_scandir(path):
            if os.fspath(path).endswith("locked"):
                raise PermissionError(13, "Permission denied", os.fspath(path))
            return real_scandir(path)

        monkeypatch.setattr(os, "scandir", fake_scandir)
        monkeypatch.chdir(tmp_path)

        assert main([str(root), "1"]) == 1
        err = capsys.readouterr().err
        assert "Error walking directory" in err
        assert "locked" in err
        rows = read_csv_rows(tmp_path / "file_paths.csv")
        assert [r[0] for r in rows[1:]] == [str(root / "a.txt")]
