# src/tasklist_store/tasks/time_tracking.py

from __future__ import annotations

"""
Per-day time tracking.

A task keeps its tracked time per day (date key -> ms). A parent that has
sub-tasks does not track time of its own: its per-day map is rebuilt from the
children every time one of them changes.
"""

import dataclasses
from collections.abc import Mapping
from datetime import date

from ..errors import InconsistentHierarchyError, NotFoundError
from .entity_index import update_one
from .task_models import Task, TaskState, TimeSpentOnDay

DATE_KEY_FORMAT = "%Y-%m-%d"


def date_key(day: date | None = None) -> str:
    """Date key used in time_spent_on_day (today if day is None)."""
    return (day or date.today()).strftime(DATE_KEY_FORMAT)


def total_time(time_spent_on_day: Mapping[str, int | None] | None) -> int:
    if not time_spent_on_day:
        return 0
    return sum(v or 0 for v in time_spent_on_day.values())


def add_time_to_day(task: Task, duration: int, day: str) -> TimeSpentOnDay:
    current = task.time_spent_on_day or {}
    out = dict(current)
    out[day] = (current.get(day) or 0) + duration
    return out


def with_time_totals(task: Task) -> Task:
    """Return task with time_spent matching its per-day map."""
    total = total_time(task.time_spent_on_day)
    if total == task.time_spent:
        return task
    return dataclasses.replace(task, time_spent=total)


def sum_sub_task_days(sub_tasks: list[Task]) -> TimeSpentOnDay:
    out: TimeSpentOnDay = {}
    for sub in sub_tasks:
        for day, ms in (sub.time_spent_on_day or {}).items():
            # Zero entries are not carried over to the parent.
            if ms:
                out[day] = out.get(day, 0) + ms
    return out


def recompute_parent_totals(parent_id: str | None, state: TaskState) -> TaskState:
    """
    Rebuild the parent's per-day map as the sum over all of its sub-tasks.

    No-op for root tasks (parent_id is None).
    Raises InconsistentHierarchyError when the parent lists sub-tasks but none
    of them exist in the snapshot.
    """
    if parent_id is None:
        return state

    parent = state.entities.get(parent_id)
    if parent is None:
        raise NotFoundError(parent_id, what="parent task")

    sub_tasks = [state.entities[i] for i in parent.sub_task_ids if i in state.entities]
    if parent.sub_task_ids and not sub_tasks:
        raise InconsistentHierarchyError(
            f"no sub tasks found for parent {parent_id!r} "
            f"(listed: {', '.join(parent.sub_task_ids)})"
        )

    days = sum_sub_task_days(sub_tasks)
    return update_one(
        state,
        parent_id,
        {"time_spent_on_day": days, "time_spent": total_time(days)},
    )
