# src/tasklist_store/tasks/ordering.py

from __future__ import annotations

from collections.abc import Sequence


def relocate(
    sequence: Sequence[str], moved_id: str, target_id: str | None
) -> tuple[str, ...]:
    """
    Move moved_id to just before target_id.

    - moved_id not in sequence -> unchanged (the same move is applied to
      several lists and not all of them hold the id)
    - target_id None or not in sequence -> moved to the front
    - moved_id == target_id -> unchanged
    """
    seq = tuple(sequence)
    if moved_id not in seq or moved_id == target_id:
        return seq

    rest = [i for i in seq if i != moved_id]
    if target_id is None or target_id not in rest:
        pos = 0
    else:
        pos = rest.index(target_id)
    rest.insert(pos, moved_id)
    return tuple(rest)
