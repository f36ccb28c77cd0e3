"""Execution helpers for organize operations."""

from __future__ import annotations

import errno
import os
import logging
from pathlib import Path
from typing import AbstractSet

from ..exceptions import DirectoryCreateFailure, MoveFailure
from .sorting_helpers import resolve_target_path

logger = logging.getLogger(__name__)


def describe_os_error(exc: OSError) -> str:
    """Short, user-facing reason for a failed filesystem call."""
    if isinstance(exc, FileNotFoundError):
        return "source vanished before it could be moved"
    if isinstance(exc, PermissionError):
        return f"permission denied: {exc.strerror or exc}"
    if exc.errno == errno.EXDEV:
        return "cross-device move not supported"
    if exc.errno == errno.ENOSPC:
        return "no space left on device"
    return exc.strerror or str(exc)


def ensure_directory(path: Path, key: str) -> None:
    """Create the bucket directory ``path`` unless it already exists.

    Raises:
        DirectoryCreateFailure: the path is occupied by something other than
            a real directory, or mkdir failed.
    """
    if os.path.islink(str(path)):
        raise DirectoryCreateFailure(
            f"bucket path is a symlink: {path.name}", file_path=str(path), key=key
        )
    try:
        path.mkdir(exist_ok=True)
    except FileExistsError as exc:
        raise DirectoryCreateFailure(
            f"cannot create directory {path.name!r}: a non-directory entry with that name exists",
            file_path=str(path),
            key=key,
        ) from exc
    except OSError as exc:
        raise DirectoryCreateFailure(
            f"cannot create directory {path.name!r}: {describe_os_error(exc)}",
            file_path=str(path),
            key=key,
        ) from exc


def move_entry(src: Path, dst: Path, claimed: AbstractSet[str] = frozenset(),
               max_attempts: int = 9999) -> Path:
    """Rename ``src`` to ``dst`` without ever replacing an existing entry.

    If ``dst`` appeared after planning, the next free collision name is used.
    Returns the final destination.

    Raises:
        MoveFailure: on any filesystem error or exhausted disambiguation.
    """
    if not os.path.lexists(str(src)):
        raise MoveFailure("source vanished before it could be moved", file_path=str(src))

    final = resolve_target_path(dst, claimed=claimed, max_attempts=max_attempts)
    if final != dst:
        logger.info("Destination %s appeared after planning; using %s", dst.name, final.name)

    try:
        os.rename(str(src), str(final))
    except OSError as exc:
        raise MoveFailure(describe_os_error(exc), file_path=str(src)) from exc

    return final
