# src/tasklist_store/tasks/task_api.py

from __future__ import annotations

import time
import uuid
from datetime import date

from .actions import AddSubTask, AddTask, AddTimeSpent
from .task_models import Task
from .task_store import TaskStore
from .time_tracking import date_key


def create_task(title: str, **fields) -> Task:
    """New root task with a fresh id (fields override the defaults)."""
    fields.setdefault("id", uuid.uuid4().hex[:12])
    fields.setdefault("created", time.time())
    return Task(title=title.strip(), **fields)


def add_task(store: TaskStore, title: str, *, is_add_to_backlog: bool = False, **fields) -> str:
    """
    Convenience helper: create a task and put it on top of today's list
    (or the backlog). Returns the new id.
    """
    if not title or not title.strip():
        raise ValueError("title is required")
    task = create_task(title, **fields)
    store.dispatch(AddTask(task=task, is_add_to_backlog=is_add_to_backlog))
    return task.id


def add_sub_task(store: TaskStore, parent_id: str, title: str, **fields) -> str:
    if not title or not title.strip():
        raise ValueError("title is required")
    task = create_task(title, **fields)
    store.dispatch(AddSubTask(parent_id=parent_id, task=task))
    return task.id


def track_time(store: TaskStore, task_id: str, duration_ms: int, day: date | None = None) -> None:
    """Book duration_ms on task_id for day (today by default)."""
    if duration_ms < 0:
        raise ValueError("duration_ms must be >= 0")
    store.dispatch(AddTimeSpent(task_id=task_id, duration=int(duration_ms), date=date_key(day)))
