"""Tests for the snapshot scan of the organize root."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from conftest import make_files, running_as_root
from extsort.app.controller import resolve_root, scan
from extsort.exceptions import (
    NotFoundError,
    RootNotADirectoryError,
    ScannerError,
    ScanPermissionError,
)


def test_scan_missing_root_raises_not_found(tmp_path: Path) -> None:
    with pytest.raises(NotFoundError) as excinfo:
        scan(tmp_path / "missing")
    assert excinfo.value.error_code == "ROOT_NOT_FOUND"


def test_scan_file_root_raises_not_a_directory(tmp_path: Path) -> None:
    target = tmp_path / "file.txt"
    target.write_text("x")
    with pytest.raises(RootNotADirectoryError):
        scan(target)


def test_empty_root_argument_is_rejected() -> None:
    with pytest.raises(NotFoundError):
        resolve_root("")


def test_scan_errors_share_a_base_class(tmp_path: Path) -> None:
    with pytest.raises(ScannerError):
        scan(tmp_path / "missing")


def test_scan_lists_immediate_children_sorted(root: Path) -> None:
    make_files(root, "b.txt", "a.md", "C.TXT")
    nested = root / "Nested"
    nested.mkdir()
    (nested / "deep.txt").write_text("deep")

    entries = scan(root)

    assert isinstance(entries, tuple)
    assert [e.name for e in entries] == sorted(["b.txt", "a.md", "C.TXT", "Nested"])
    assert "deep.txt" not in {e.name for e in entries}
    kinds = {e.name: e.kind for e in entries}
    assert kinds["Nested"] == "directory"
    assert kinds["a.md"] == "file"
    by_name = {e.name: e for e in entries}
    assert by_name["C.TXT"].extension == "TXT"
    assert by_name["b.txt"].path == str(root / "b.txt")


def test_scan_excludes_bucket_directories(root: Path) -> None:
    (root / "txt").mkdir()
    (root / "noext").mkdir()
    (root / "Projects").mkdir()
    make_files(root, "a.txt")

    names = [e.name for e in scan(root)]

    assert names == ["Projects", "a.txt"]


def test_scan_keeps_a_file_named_like_a_bucket(root: Path) -> None:
    make_files(root, "txt")
    assert [e.kind for e in scan(root)] == ["file"]


def test_scan_reports_symlinks_without_following(root: Path) -> None:
    make_files(root, "target.txt")
    try:
        os.symlink(str(root / "target.txt"), str(root / "link.txt"))
    except (OSError, NotImplementedError):
        pytest.skip("Symlinks not supported in this environment")

    kinds = {e.name: e.kind for e in scan(root)}
    assert kinds["link.txt"] == "symlink"
    assert kinds["target.txt"] == "file"


@pytest.mark.skipif(running_as_root() or os.name == "nt", reason="permission bits are not enforced")
def test_scan_unreadable_root_raises_permission_error(root: Path) -> None:
    make_files(root, "a.txt")
    os.chmod(str(root), 0o000)
    try:
        with pytest.raises(ScanPermissionError):
            scan(root)
    finally:
        os.chmod(str(root), 0o755)


def _deny_exists(monkeypatch, blocked: Path) -> None:
    real_exists = Path.exists

    def exists(self, *args, **kwargs):
        if str(self) == str(blocked):
            raise PermissionError(13, "Permission denied", str(self))
        return real_exists(self, *args, **kwargs)

    monkeypatch.setattr(Path, "exists", exists)


def test_unsearchable_root_raises_scan_permission_error(root: Path, monkeypatch) -> None:
    _deny_exists(monkeypatch, root)

    with pytest.raises(ScanPermissionError) as excinfo:
        scan(root)
    assert excinfo.value.error_code == "SCAN_PERMISSION_DENIED"
    assert isinstance(excinfo.value.__cause__, PermissionError)
