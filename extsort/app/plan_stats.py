"""Helpers for computing plan statistics."""

from __future__ import annotations

from collections import Counter
from typing import Dict

from .models import RelocationPlan


def compute_plan_stats(relocation_plan: RelocationPlan) -> Dict[str, int]:
    counts: Counter = Counter()
    for action in relocation_plan.actions:
        if action.is_move:
            counts["planned"] += 1
            if action.status == "planned (rename)":
                counts["renamed"] += 1
        elif action.status == "skipped":
            counts["skipped"] += 1
        else:
            counts["error"] += 1
    return {
        "planned": counts["planned"],
        "renamed": counts["renamed"],
        "skipped": counts["skipped"],
        "error": counts["error"],
        "buckets": len(relocation_plan.keys),
    }


def count_by_key(relocation_plan: RelocationPlan) -> Dict[str, int]:
    """Number of planned moves per classification key, sorted by key."""
    counts = Counter(action.key for action in relocation_plan.moves)
    return dict(sorted(counts.items()))
