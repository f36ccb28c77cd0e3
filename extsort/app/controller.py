"""Extension Sorter - organizer controller.

Public API:
- scan(root_path) -> Tuple[DirectoryEntry, ...]
- plan(entries, root_path, config) -> RelocationPlan
- execute(relocation_plan, config, dry_run, progress_cb, log_cb) -> ExecutionReport
- organize(root_path, config, dry_run, progress_cb, log_cb) -> ExecutionReport

Each invocation is one pass: Scanning -> Planning -> Executing -> Done.
Only an invalid root aborts early; per-entry failures are collected into the
report.
"""

from __future__ import annotations

import os
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Set, Tuple, Union

from ..config import Config, OrganizerSettings, load_config
from ..exceptions import (
    DirectoryCreateFailure,
    MoveFailure,
    NotFoundError,
    RootNotADirectoryError,
    ScanPermissionError,
    ScannerError,
)
from ..security.security_utils import (
    InvalidPathError,
    is_safe_entry_name,
    sanitize_path,
    validate_file_operation,
)
from .execute_helpers import ensure_directory, move_entry
from .models import (
    DirectoryEntry,
    EntryKind,
    ExecutionReport,
    LogCallback,
    MoveFailureRecord,
    MoveRecord,
    ProgressCallback,
    RelocationAction,
    RelocationPlan,
)
from .sorting_helpers import classify, extract_extension, is_bucket_name, resolve_target_path

logger = logging.getLogger(__name__)

ConfigLike = Union[Config, Dict[str, Any], OrganizerSettings, None]


def _log(log_cb: Optional[LogCallback], message: str) -> None:
    if log_cb is not None:
        log_cb(message)


def _load_settings(config: ConfigLike) -> OrganizerSettings:
    if isinstance(config, OrganizerSettings):
        return config
    if isinstance(config, dict):
        config = Config(config)
    if config is None:
        config = load_config()
    return config.organizer_settings()


def resolve_root(root_path: Union[str, Path]) -> Path:
    raw = sanitize_path(str(root_path or ""))
    if not raw:
        raise NotFoundError("Root directory is empty", root_path=str(root_path))

    try:
        root = Path(raw).resolve()
        exists = root.exists()
        is_dir = exists and root.is_dir()
    except PermissionError as exc:
        raise ScanPermissionError(f"Permission denied accessing {raw}", root_path=raw) from exc

    if not exists:
        raise NotFoundError(f"Root directory does not exist: {root}", root_path=str(root))
    if not is_dir:
        raise RootNotADirectoryError(f"Root is not a directory: {root}", root_path=str(root))
    return root


def _entry_kind(dir_entry: "os.DirEntry[str]") -> EntryKind:
    try:
        if dir_entry.is_symlink():
            return "symlink"
        if dir_entry.is_dir(follow_symlinks=False):
            return "directory"
        if dir_entry.is_file(follow_symlinks=False):
            return "file"
    except OSError as exc:
        logger.debug("Cannot stat %s: %s", dir_entry.path, exc)
    return "other"


# =====================================================================================================
# Scanning
# =====================================================================================================

def scan(root_path: Union[str, Path]) -> Tuple[DirectoryEntry, ...]:
    """Snapshot the immediate children of ``root_path``, sorted by name.

    Directories that already look like classification buckets are left out,
    which keeps repeated runs from re-sorting their own output.

    Raises:
        NotFoundError, RootNotADirectoryError, ScanPermissionError: the root
            cannot be listed. Nothing has been modified at that point.
    """
    root = resolve_root(root_path)

    entries: List[DirectoryEntry] = []
    excluded = 0
    try:
        with os.scandir(str(root)) as it:
            for dir_entry in it:
                kind = _entry_kind(dir_entry)
                if kind == "directory" and is_bucket_name(dir_entry.name):
                    excluded += 1
                    continue
                entries.append(
                    DirectoryEntry(
                        name=dir_entry.name,
                        path=str(root / dir_entry.name),
                        kind=kind,
                        extension=extract_extension(dir_entry.name),
                    )
                )
    except PermissionError as exc:
        raise ScanPermissionError(f"Permission denied reading {root}", root_path=str(root)) from exc
    except FileNotFoundError as exc:
        raise NotFoundError(f"Root directory vanished during scan: {root}", root_path=str(root)) from exc
    except NotADirectoryError as exc:
        raise RootNotADirectoryError(f"Root is not a directory: {root}", root_path=str(root)) from exc
    except OSError as exc:
        raise ScannerError(f"Cannot list {root}: {exc}", root_path=str(root)) from exc

    entries.sort(key=lambda e: e.name)
    logger.debug("Scanned %s: %d entries, %d bucket directories excluded", root, len(entries), excluded)
    return tuple(entries)


# =====================================================================================================
# Planning
# =====================================================================================================

def _skip_reason(entry: DirectoryEntry, settings: OrganizerSettings) -> Optional[str]:
    if entry.kind == "other":
        return "unsupported entry kind"
    if entry.kind == "directory":
        if is_bucket_name(entry.name):
            return "classification directory"
        if not settings.move_directories:
            return "directory"
    if entry.kind == "symlink" and settings.skip_symlinks:
        return "symlink"
    return None


def plan(
    entries: Iterable[DirectoryEntry],
    root_path: Union[str, Path],
    config: ConfigLike = None,
) -> RelocationPlan:
    """Compute a conflict-free RelocationPlan without touching the disk.

    Entries whose name is a bucket some other entry needs are ordered first,
    so executing the plan front to back vacates a bucket path before the
    bucket is created.
    """
    settings = _load_settings(config)
    root = Path(os.path.abspath(str(root_path)))

    ordered = sorted(entries, key=lambda e: (e.name, e.path))

    targets: Dict[str, Tuple[str, Path]] = {}
    skipped: Dict[str, str] = {}
    for entry in ordered:
        reason = _skip_reason(entry, settings)
        if reason is not None:
            skipped[entry.path] = reason
            continue
        key = classify(entry, settings.noext_key)
        targets[entry.path] = (key, root / key / entry.name)

    needed_buckets = {key for key, _target in targets.values()}
    ordered.sort(key=lambda e: (0 if e.path in targets and e.name in needed_buckets else 1, e.name, e.path))

    claimed: Set[str] = set()
    actions: List[RelocationAction] = []
    for entry in ordered:
        if entry.path in skipped:
            actions.append(
                RelocationAction(
                    entry=entry,
                    key=classify(entry, settings.noext_key),
                    planned_target_path=None,
                    status="skipped",
                    reason=skipped[entry.path],
                )
            )
            continue

        key, target_file = targets[entry.path]

        if os.path.normpath(str(target_file)) == os.path.normpath(entry.path):
            actions.append(
                RelocationAction(entry, key, None, "skipped", "already organized")
            )
            continue

        try:
            if not is_safe_entry_name(entry.name):
                raise InvalidPathError(f"Unsafe entry name: {entry.name!r}")
            final_target = resolve_target_path(
                target_file, claimed=claimed, max_attempts=settings.max_collision_attempts
            )
            validate_file_operation(final_target, base_dir=root)
        except (MoveFailure, InvalidPathError) as exc:
            actions.append(RelocationAction(entry, key, None, "error", str(exc)))
            continue

        claimed.add(str(final_target))
        if final_target != target_file:
            actions.append(
                RelocationAction(entry, key, str(final_target), "planned (rename)",
                                 f"renamed to {final_target.name} to avoid a collision")
            )
        else:
            actions.append(RelocationAction(entry, key, str(final_target), "planned"))

    return RelocationPlan(root_path=str(root), actions=tuple(actions))


# =====================================================================================================
# Execution
# =====================================================================================================

def _predict_bucket_failure(bucket: Path, key: str, vacated: Set[str]) -> Optional[DirectoryCreateFailure]:
    """Dry-run stand-in for ensure_directory()."""
    path = str(bucket)
    if path in vacated or not os.path.lexists(path):
        return None
    if os.path.islink(path):
        return DirectoryCreateFailure(f"bucket path is a symlink: {bucket.name}", file_path=path, key=key)
    if not os.path.isdir(path):
        return DirectoryCreateFailure(
            f"cannot create directory {bucket.name!r}: a non-directory entry with that name exists",
            file_path=path,
            key=key,
        )
    return None


def execute(
    relocation_plan: RelocationPlan,
    config: ConfigLike = None,
    dry_run: bool = False,
    progress_cb: Optional[ProgressCallback] = None,
    log_cb: Optional[LogCallback] = None,
) -> ExecutionReport:
    """Carry out ``relocation_plan`` (or simulate it with ``dry_run=True``).

    Bucket directories are ensured once per key, right before the first move
    into them. A failed bucket fails every entry of that key; a failed move
    fails only its entry. Neither stops the loop.
    """
    settings = _load_settings(config)
    root = Path(relocation_plan.root_path)

    all_targets = {a.planned_target_path for a in relocation_plan.moves if a.planned_target_path}
    buckets: Dict[str, Optional[DirectoryCreateFailure]] = {}
    vacated: Set[str] = set()

    planned = len(relocation_plan.moves)
    moved = 0
    skipped = 0
    failures: List[MoveFailureRecord] = []
    moves: List[MoveRecord] = []

    total = len(relocation_plan.actions)
    _log(log_cb, f"Organizing {root} (dry_run={dry_run}, planned={planned})")

    for step, action in enumerate(relocation_plan.actions, start=1):
        entry = action.entry

        if action.status == "skipped":
            skipped += 1
            logger.debug("Skipping %s: %s", entry.name, action.reason)
        elif action.status == "error" or action.planned_target_path is None:
            reason = action.reason or "could not be planned"
            failures.append(MoveFailureRecord(entry.name, reason, entry.path))
            logger.warning("Cannot move %s: %s", entry.name, reason)
        else:
            if action.key not in buckets:
                bucket = root / action.key
                if dry_run:
                    buckets[action.key] = _predict_bucket_failure(bucket, action.key, vacated)
                else:
                    try:
                        ensure_directory(bucket, action.key)
                        buckets[action.key] = None
                    except DirectoryCreateFailure as exc:
                        buckets[action.key] = exc
                        logger.warning("Bucket %s unavailable: %s", action.key, exc.reason,
                                       extra={"error": exc.to_dict()})

            bucket_error = buckets[action.key]
            target = Path(action.planned_target_path)

            try:
                if bucket_error is not None:
                    raise MoveFailure(bucket_error.reason, file_path=entry.path)
                if dry_run:
                    final = target
                else:
                    # The entry's own planned target must not count as taken.
                    all_targets.discard(action.planned_target_path)
                    try:
                        final = move_entry(
                            Path(entry.path),
                            target,
                            claimed=all_targets,
                            max_attempts=settings.max_collision_attempts,
                        )
                    finally:
                        all_targets.add(action.planned_target_path)
            except MoveFailure as exc:
                failures.append(MoveFailureRecord(entry.name, exc.reason, entry.path))
                logger.warning("Failed to move %s: %s", entry.name, exc.reason,
                               extra={"error": exc.to_dict()})
                _log(log_cb, f"Error moving {entry.name}: {exc.reason}")
            else:
                moved += 1
                vacated.add(entry.path)
                moves.append(MoveRecord(entry.path, str(final)))
                verb = "Would move" if dry_run else "Move"
                logger.info("%s: %s -> %s", verb, entry.name, final)
                _log(log_cb, f"{verb}: {entry.name} -> {final}")

        if progress_cb is not None:
            progress_cb(step, total)

    _log(
        log_cb,
        f"Organize finished. Planned: {planned}, Moved: {moved}, Skipped: {skipped}, Failed: {len(failures)}",
    )

    return ExecutionReport(
        root_path=str(root),
        planned=planned,
        moved=moved,
        skipped=skipped,
        failed=len(failures),
        failures=tuple(failures),
        moves=tuple(moves),
        dry_run=dry_run,
    )


def organize(
    root_path: Union[str, Path],
    config: ConfigLike = None,
    dry_run: bool = False,
    progress_cb: Optional[ProgressCallback] = None,
    log_cb: Optional[LogCallback] = None,
) -> ExecutionReport:
    """Scan, plan and execute in one call."""
    settings = _load_settings(config)

    root = resolve_root(root_path)

    logger.debug("Scanning %s", root)
    entries = scan(root)

    logger.debug("Planning %d entries", len(entries))
    relocation_plan = plan(entries, root, settings)

    logger.debug("Executing %d moves", len(relocation_plan.moves))
    report = execute(relocation_plan, settings, dry_run=dry_run, progress_cb=progress_cb, log_cb=log_cb)

    logger.debug("Done: moved=%d failed=%d", report.moved, report.failed)
    return report
