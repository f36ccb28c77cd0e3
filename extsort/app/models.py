"""Shared type aliases and dataclasses for the organizer controller."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, FrozenSet, Literal, Optional, Tuple

EntryKind = Literal["file", "directory", "symlink", "other"]
ActionStatus = Literal["planned", "planned (rename)", "skipped", "error"]

ProgressCallback = Callable[[int, int], None]
LogCallback = Callable[[str], None]

NOEXT_KEY = "noext"


@dataclass(frozen=True)
class DirectoryEntry:
    name: str
    path: str
    kind: EntryKind
    extension: str = ""


@dataclass(frozen=True)
class RelocationAction:
    entry: DirectoryEntry
    key: str
    planned_target_path: Optional[str]
    status: ActionStatus
    reason: Optional[str] = None

    @property
    def is_move(self) -> bool:
        return self.planned_target_path is not None and self.status.startswith("planned")


@dataclass(frozen=True)
class RelocationPlan:
    root_path: str
    actions: Tuple[RelocationAction, ...]

    @property
    def moves(self) -> Tuple[RelocationAction, ...]:
        return tuple(action for action in self.actions if action.is_move)

    @property
    def keys(self) -> FrozenSet[str]:
        """Distinct classification keys that need a bucket directory."""
        return frozenset(action.key for action in self.moves)


@dataclass(frozen=True)
class MoveRecord:
    source_path: str
    target_path: str


@dataclass(frozen=True)
class MoveFailureRecord:
    name: str
    reason: str
    source_path: Optional[str] = None


@dataclass(frozen=True)
class ExecutionReport:
    root_path: str
    planned: int
    moved: int
    skipped: int
    failed: int
    failures: Tuple[MoveFailureRecord, ...] = ()
    moves: Tuple[MoveRecord, ...] = ()
    dry_run: bool = False

    @property
    def ok(self) -> bool:
        return self.failed == 0
