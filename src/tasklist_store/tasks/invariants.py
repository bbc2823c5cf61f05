# src/tasklist_store/tasks/invariants.py

from __future__ import annotations

from collections import Counter

from .task_models import TaskState
from .time_tracking import sum_sub_task_days, total_time


def _duplicates(seq: tuple[str, ...]) -> list[str]:
    return sorted(k for k, n in Counter(seq).items() if n > 1)


def find_invariant_violations(state: TaskState) -> list[str]:
    """
    Check a snapshot for structural consistency.

    Returns human-readable problems (empty list = consistent):
    - entities keys and ids describe the same set, without duplicates
    - parent/child references agree in both directions
    - time_spent equals the per-day sum
    - a parent's per-day time equals its sub-tasks' per-day sum
    - current_task_id and list members refer to existing tasks
    - today/backlog lists hold root tasks only, no duplicates
    """
    problems: list[str] = []
    entities = state.entities

    for name, seq in (
        ("ids", state.ids),
        ("todays_task_ids", state.todays_task_ids),
        ("backlog_task_ids", state.backlog_task_ids),
    ):
        dups = _duplicates(seq)
        if dups:
            problems.append(f"{name} has duplicates: {', '.join(dups)}")

    id_set = set(state.ids)
    key_set = set(entities)
    if id_set != key_set:
        problems.append(
            "ids and entities differ: "
            f"only in ids={sorted(id_set - key_set)} only in entities={sorted(key_set - id_set)}"
        )

    for tid, task in entities.items():
        if task.id != tid:
            problems.append(f"entity key {tid} holds task {task.id}")

        if task.time_spent != total_time(task.time_spent_on_day):
            problems.append(f"{tid}: time_spent {task.time_spent} != per-day sum")

        if task.parent_id is not None:
            parent = entities.get(task.parent_id)
            if parent is None:
                problems.append(f"{tid}: parent {task.parent_id} does not exist")
            elif parent.sub_task_ids.count(tid) != 1:
                problems.append(f"{tid}: not listed exactly once by parent {task.parent_id}")

        for sub_id in task.sub_task_ids:
            sub = entities.get(sub_id)
            if sub is None:
                problems.append(f"{tid}: sub task {sub_id} does not exist")
            elif sub.parent_id != tid:
                problems.append(f"{tid}: sub task {sub_id} points at parent {sub.parent_id}")

        if task.sub_task_ids:
            subs = [entities[i] for i in task.sub_task_ids if i in entities]
            expected = sum_sub_task_days(subs)
            for day, ms in expected.items():
                if (task.time_spent_on_day or {}).get(day, 0) != ms:
                    problems.append(f"{tid}: {day} is not the sum of its sub tasks ({ms})")

    if state.current_task_id is not None and state.current_task_id not in entities:
        problems.append(f"current_task_id {state.current_task_id} does not exist")

    for name, seq in (
        ("todays_task_ids", state.todays_task_ids),
        ("backlog_task_ids", state.backlog_task_ids),
    ):
        for tid in seq:
            task = entities.get(tid)
            if task is None:
                problems.append(f"{name}: {tid} does not exist")
            elif task.parent_id is not None:
                problems.append(f"{name}: {tid} is a sub task")

    return problems
