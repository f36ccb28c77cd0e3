"""Public controller API surface for the CLI and integrations.

Centralizes stable imports to keep callers decoupled from controller internals.
"""

from __future__ import annotations

from .controller import execute, organize, plan, resolve_root, scan
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
from .plan_stats import compute_plan_stats, count_by_key
from .sorting_helpers import classify, extract_extension, is_bucket_name

__all__ = [
    "DirectoryEntry",
    "EntryKind",
    "ExecutionReport",
    "LogCallback",
    "MoveFailureRecord",
    "MoveRecord",
    "ProgressCallback",
    "RelocationAction",
    "RelocationPlan",
    "classify",
    "compute_plan_stats",
    "count_by_key",
    "execute",
    "extract_extension",
    "is_bucket_name",
    "organize",
    "plan",
    "resolve_root",
    "scan",
]
