# src/tasklist_store/tasks/selectors.py

"""
Read-side projections over a snapshot.

Nothing here is stored: views are derived on demand. The snapshot-only
projections are cached for the last snapshot (compared by identity), so
asking twice for the same snapshot returns the same objects.

Issue data is overlaid on the view, the stored Task is never changed. The
overlay is rebuilt on every call: a lookup is a live collaborator whose
payloads may change while the snapshot stays the same.
"""

from __future__ import annotations

import functools
import inspect
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from ..core.ports import IssueData, IssueLookup
from .task_models import Task, TaskState

R = TypeVar("R")


def memoize_last(fn: Callable[..., R]) -> Callable[..., R]:
    """
    Cache the result for the most recent arguments (identity comparison).

    Positional and keyword calls are normalized through the signature, so
    f(s), f(s, None) and f(state=s) share one cache entry.
    """
    sig = inspect.signature(fn)
    last_key: tuple[Any, ...] | None = None
    last_result: Any = None

    @functools.wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> R:
        nonlocal last_key, last_result
        bound = sig.bind(*args, **kwargs)
        bound.apply_defaults()
        key = tuple(bound.arguments.values())
        if (
            last_key is not None
            and len(last_key) == len(key)
            and all(a is b for a, b in zip(last_key, key))
        ):
            return last_result
        last_result = fn(*bound.args, **bound.kwargs)
        last_key = key
        return last_result

    return wrapper


@dataclass(frozen=True, slots=True)
class TaskView:
    task: Task
    issue_data: IssueData | None = None
    sub_tasks: tuple[TaskView, ...] = ()

    @property
    def id(self) -> str:
        return self.task.id


def select_all_tasks(state: TaskState) -> list[Task]:
    return [state.entities[i] for i in state.ids]


def select_current_task(state: TaskState) -> Task | None:
    return state.get(state.current_task_id)


def _issue_data_for(task: Task, lookup: IssueLookup | None) -> IssueData | None:
    if lookup is None or not task.issue_id or not task.issue_type:
        return None
    return lookup.get_issue_data(task.issue_type, task.issue_id)


def select_all_tasks_with_issue_data(
    state: TaskState, lookup: IssueLookup | None = None
) -> list[TaskView]:
    return [TaskView(task=t, issue_data=_issue_data_for(t, lookup)) for t in select_all_tasks(state)]


def _attach_sub_tasks(views: list[TaskView]) -> list[TaskView]:
    by_id = {v.id: v for v in views}
    out: list[TaskView] = []
    for view in views:
        if view.task.parent_id is not None:
            continue
        if view.task.sub_task_ids:
            subs = tuple(by_id[i] for i in view.task.sub_task_ids if i in by_id)
            view = TaskView(task=view.task, issue_data=view.issue_data, sub_tasks=subs)
        out.append(view)
    return out


@memoize_last
def _tasks_with_sub_tasks(state: TaskState) -> list[TaskView]:
    return _attach_sub_tasks(select_all_tasks_with_issue_data(state))


def select_all_tasks_with_sub_tasks(
    state: TaskState, lookup: IssueLookup | None = None
) -> list[TaskView]:
    """Root tasks in global order, each with its resolvable sub-tasks attached."""
    if lookup is None:
        return _tasks_with_sub_tasks(state)
    return _attach_sub_tasks(select_all_tasks_with_issue_data(state, lookup))


def _views_for_ids(
    state: TaskState, ids: tuple[str, ...], lookup: IssueLookup | None
) -> list[TaskView]:
    by_id = {v.id: v for v in select_all_tasks_with_sub_tasks(state, lookup)}
    return [by_id[i] for i in ids if i in by_id]


def select_todays_tasks_with_sub_tasks(
    state: TaskState, lookup: IssueLookup | None = None
) -> list[TaskView]:
    return _views_for_ids(state, state.todays_task_ids, lookup)


def select_backlog_tasks_with_sub_tasks(
    state: TaskState, lookup: IssueLookup | None = None
) -> list[TaskView]:
    return _views_for_ids(state, state.backlog_task_ids, lookup)
