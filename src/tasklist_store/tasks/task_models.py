# src/tasklist_store/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Final

TimeSpentOnDay = dict[str, int]
# Date key ("YYYY-MM-DD") -> milliseconds tracked that day.


@dataclass(frozen=True, slots=True)
class Task:
    """
    A unit of work in the normalized store.

    Structure (owned by the transitions):
    - parent_id / sub_task_ids: two mutually consistent references,
      child -> parent id and parent -> ordered child ids
    - time_spent_on_day: per-day tracked time
    - time_spent: always sum(time_spent_on_day.values()), never set on its own

    Everything else is display payload the transitions carry along untouched.
    """

    id: str
    parent_id: str | None = None
    sub_task_ids: tuple[str, ...] = ()
    time_spent_on_day: TimeSpentOnDay = field(default_factory=dict)
    time_spent: int = 0

    title: str = ""
    is_done: bool = False
    notes: str = ""
    time_estimate: int = 0
    issue_id: str | None = None
    issue_type: str | None = None
    created: float | None = None


TASK_FIELDS: Final[frozenset[str]] = frozenset(f.name for f in fields(Task))


@dataclass(frozen=True, slots=True)
class TaskState:
    """
    One immutable snapshot of the store.

    entities and ids always describe the same set of tasks; ids carries the
    canonical order. todays_task_ids / backlog_task_ids hold root tasks only.
    """

    entities: dict[str, Task] = field(default_factory=dict)
    ids: tuple[str, ...] = ()
    current_task_id: str | None = None
    todays_task_ids: tuple[str, ...] = ()
    backlog_task_ids: tuple[str, ...] = ()

    def get(self, task_id: str | None) -> Task | None:
        if task_id is None:
            return None
        return self.entities.get(task_id)

    def __len__(self) -> int:
        return len(self.ids)


def initial_task_state() -> TaskState:
    return TaskState()


def task_changes(changes: dict[str, Any]) -> dict[str, Any]:
    """Validate a partial update against the Task fields."""
    unknown = set(changes) - TASK_FIELDS
    if unknown:
        raise ValueError(f"unknown task field(s): {', '.join(sorted(unknown))}")
    if "id" in changes:
        raise ValueError("task id is immutable")
    out = dict(changes)
    if "sub_task_ids" in out:
        out["sub_task_ids"] = tuple(out["sub_task_ids"])
    if "time_spent_on_day" in out:
        out["time_spent_on_day"] = dict(out["time_spent_on_day"] or {})
    return out
