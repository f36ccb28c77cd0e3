"""Classification and naming helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import AbstractSet, Tuple, Union

from ..exceptions import MoveFailure
from .models import NOEXT_KEY, DirectoryEntry


def extract_extension(name: str) -> str:
    """Return the raw extension of ``name`` (no dot, original case).

    A leading dot alone does not start an extension: ``.gitignore`` has none,
    while ``.config.json`` has ``json``.
    """
    name = str(name or "")
    idx = name.rfind(".")
    if idx <= 0:
        return ""
    return name[idx + 1:]


def split_name(name: str) -> Tuple[str, str]:
    """Split ``name`` into (stem, ".ext") following extract_extension()."""
    ext = extract_extension(name)
    if not ext:
        return name, ""
    return name[: -(len(ext) + 1)], "." + ext


def normalize_key(extension: str, noext_key: str = NOEXT_KEY) -> str:
    key = str(extension or "").strip().lower()
    return key or noext_key


def classify(entry: Union[DirectoryEntry, str], noext_key: str = NOEXT_KEY) -> str:
    """Map an entry (or bare name) to its classification key. Never fails."""
    name = entry.name if isinstance(entry, DirectoryEntry) else str(entry or "")
    return normalize_key(extract_extension(name), noext_key)


def is_bucket_name(name: str) -> bool:
    """True if ``name`` could have been created as a bucket by a prior run."""
    if not name or name in (".", ".."):
        return False
    if "." in name:
        return False
    return name == name.strip().lower()


def _is_taken(path: Path, claimed: AbstractSet[str]) -> bool:
    return str(path) in claimed or os.path.lexists(str(path))


def resolve_target_path(target_file: Path, claimed: AbstractSet[str] = frozenset(),
                        max_attempts: int = 9999) -> Path:
    """Return ``target_file`` or the first free ``stem (N).ext`` variant.

    A path counts as taken when it exists on disk (dangling symlinks
    included) or is already in ``claimed``.
    """
    if not _is_taken(target_file, claimed):
        return target_file

    stem, suffix = split_name(target_file.name)
    for i in range(1, max_attempts + 1):
        candidate = target_file.with_name(f"{stem} ({i}){suffix}")
        if not _is_taken(candidate, claimed):
            return candidate

    raise MoveFailure(
        f"Could not find free filename for {target_file.name} after {max_attempts} attempts",
        file_path=str(target_file),
    )
