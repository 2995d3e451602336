"""Client-side ordering and grouping of subprocesses.

All sorts are stable, so subprocesses sharing an ``order`` keep the sequence
the server returned them in.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Literal, Optional

from procflow.domain.entities import SubProcess

Direction = Literal["up", "down"]


def sort_by_order(items: Iterable[SubProcess]) -> List[SubProcess]:
    """Return subprocesses ascending by ``order`` (missing order counts as 0)."""
    return sorted(items, key=lambda sub: sub.effective_order)


def sort_by_process_then_order(items: Iterable[SubProcess]) -> List[SubProcess]:
    return sorted(items, key=lambda sub: (sub.process_id, sub.effective_order))


def group_by_process(items: Iterable[SubProcess]) -> Dict[int, List[SubProcess]]:
    """Group subprocesses by ``process_id`` after the global process/order sort.

    Sections keep the insertion order of the grouping map; every input item
    lands in exactly one group.
    """
    groups: Dict[int, List[SubProcess]] = {}
    for sub in sort_by_process_then_order(items):
        groups.setdefault(sub.process_id, []).append(sub)
    return groups


def shifted_order(current: Optional[int], direction: Direction) -> Optional[int]:
    """Order value after moving one step, or ``None`` when it would go below 0."""
    base = current or 0
    if direction == "up":
        candidate = base - 1
    elif direction == "down":
        candidate = base + 1
    else:
        raise ValueError(f"Unknown direction: {direction!r}")
    if candidate < 0:
        return None
    return candidate


__all__ = [
    "Direction",
    "group_by_process",
    "shifted_order",
    "sort_by_order",
    "sort_by_process_then_order",
]
