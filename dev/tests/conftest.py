from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import List, Tuple

import pytest

# Ensure repo root on path
ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture(autouse=True)
def _reset_logging():
    """Detach handlers installed by the CLI so they never outlive capsys."""
    yield
    from extsort.logging_config import cleanup_logging

    cleanup_logging()


@pytest.fixture
def root(tmp_path: Path) -> Path:
    """An empty directory to organize (symlink-free, so paths compare equal)."""
    target = tmp_path.resolve() / "clutter"
    target.mkdir()
    return target


@pytest.fixture
def example_root(root: Path) -> Path:
    for name in ("a.txt", "b.TXT", "c", ".gitignore"):
        (root / name).write_text(f"content of {name}")
    return root


def make_files(root: Path, *names: str) -> None:
    for name in names:
        (root / name).write_text(f"content of {name}")


def tree_snapshot(root: Path) -> List[Tuple[str, bool]]:
    """Every path below root (relative) with an is-directory flag."""
    items = []
    for dirpath, dirnames, filenames in os.walk(str(root)):
        for name in dirnames + filenames:
            full = os.path.join(dirpath, name)
            items.append((os.path.relpath(full, str(root)), os.path.isdir(full)))
    return sorted(items)


def running_as_root() -> bool:
    return hasattr(os, "geteuid") and os.geteuid() == 0
