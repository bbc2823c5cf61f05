# src/tasklist_store/tasks/reducer.py

from __future__ import annotations

"""
Transition engine.

task_reducer(state, action) is a pure function: it never mutates the input
snapshot and either returns a complete new snapshot or raises. Because every
helper works copy-on-write, a transition that raises half way has published
nothing and the caller keeps the snapshot it passed in.
"""

import dataclasses
import logging
from collections.abc import Callable
from typing import Any

from ..errors import InconsistentHierarchyError, NotFoundError
from .actions import (
    AddSubTask,
    AddTask,
    AddTimeSpent,
    DeleteTask,
    MoveAfter,
    ReplaceState,
    SetCurrentTask,
    UnsetCurrentTask,
    UpdateTask,
    UpdateTasks,
)
from .entity_index import add_one, update_many, update_one
from .hierarchy import add_sub_task, delete_cascade
from .ordering import relocate
from .task_models import TaskState
from .time_tracking import add_time_to_day, recompute_parent_totals, total_time, with_time_totals

logger = logging.getLogger(__name__)

Handler = Callable[[TaskState, Any], TaskState]


# ---- meta actions ----


def _replace_state(state: TaskState, action: ReplaceState) -> TaskState:
    return action.state


def _set_current_task(state: TaskState, action: SetCurrentTask) -> TaskState:
    if action.task_id is None:
        return _unset_current_task(state, UnsetCurrentTask())
    if action.task_id not in state.entities:
        # Stale references (e.g. a task deleted meanwhile) are ignored.
        logger.debug("SetCurrentTask ignored: unknown id=%s", action.task_id)
        return state
    if state.current_task_id == action.task_id:
        return state
    return dataclasses.replace(state, current_task_id=action.task_id)


def _unset_current_task(state: TaskState, action: UnsetCurrentTask) -> TaskState:
    if state.current_task_id is None:
        return state
    return dataclasses.replace(state, current_task_id=None)


# ---- task actions ----


def _add_task(state: TaskState, action: AddTask) -> TaskState:
    task = action.task
    if task.parent_id is not None:
        raise InconsistentHierarchyError(
            f"task {task.id!r} declares parent {task.parent_id!r}; add it as a sub task"
        )
    out = add_one(state, with_time_totals(task))
    if action.is_add_to_backlog:
        return dataclasses.replace(out, backlog_task_ids=(task.id, *state.backlog_task_ids))
    return dataclasses.replace(out, todays_task_ids=(task.id, *state.todays_task_ids))


def _update_task(state: TaskState, action: UpdateTask) -> TaskState:
    before = state.entities.get(action.task_id)
    if before is None:
        raise NotFoundError(action.task_id)

    changes = dict(action.changes)
    has_time = "time_spent_on_day" in changes
    if has_time or "time_spent" in changes:
        # time_spent is derived, a bare value in changes is overridden.
        changes["time_spent"] = total_time(
            changes["time_spent_on_day"] if has_time else before.time_spent_on_day
        )

    out = update_one(state, action.task_id, changes)
    if has_time:
        # Parent taken from the record as it was before this update.
        out = recompute_parent_totals(before.parent_id, out)
    return out


def _update_tasks(state: TaskState, action: UpdateTasks) -> TaskState:
    if any("time_spent_on_day" in u.changes for u in action.updates):
        # Bulk updates do not re-aggregate time (neither time_spent nor the
        # parents' totals); callers that change time maps should use UpdateTask.
        logger.warning(
            "UpdateTasks with time_spent_on_day changes: totals are not recomputed (ids=%s)",
            ",".join(u.task_id for u in action.updates if "time_spent_on_day" in u.changes),
        )
    return update_many(state, ((u.task_id, u.changes) for u in action.updates))


def _delete_task(state: TaskState, action: DeleteTask) -> TaskState:
    return delete_cascade(state, action.task_id)


def _move_after(state: TaskState, action: MoveAfter) -> TaskState:
    # Sub tasks move in the global ids only; the parent's sub_task_ids keep their order.
    return dataclasses.replace(
        state,
        ids=relocate(state.ids, action.task_id, action.target_id),
        todays_task_ids=relocate(state.todays_task_ids, action.task_id, action.target_id),
        backlog_task_ids=relocate(state.backlog_task_ids, action.task_id, action.target_id),
    )


def _add_time_spent(state: TaskState, action: AddTimeSpent) -> TaskState:
    task = state.entities.get(action.task_id)
    if task is None:
        raise NotFoundError(action.task_id)

    days = add_time_to_day(task, action.duration, action.date)
    out = update_one(
        state,
        action.task_id,
        {"time_spent_on_day": days, "time_spent": total_time(days)},
    )
    return recompute_parent_totals(task.parent_id, out)


def _add_sub_task(state: TaskState, action: AddSubTask) -> TaskState:
    return add_sub_task(state, action.parent_id, action.task)


_HANDLERS: dict[type, Handler] = {
    ReplaceState: _replace_state,
    SetCurrentTask: _set_current_task,
    UnsetCurrentTask: _unset_current_task,
    AddTask: _add_task,
    UpdateTask: _update_task,
    UpdateTasks: _update_tasks,
    DeleteTask: _delete_task,
    MoveAfter: _move_after,
    AddTimeSpent: _add_time_spent,
    AddSubTask: _add_sub_task,
}


def task_reducer(state: TaskState, action: object) -> TaskState:
    """
    Apply one action to a snapshot and return the next snapshot.

    Unknown actions return the input snapshot unchanged (same object).
    Errors leave the input snapshot untouched:

    - NotFoundError: the task (or parent) an action names is not stored.
    - DuplicateIdError: AddTask / AddSubTask with an id already in use.
    - InconsistentHierarchyError: AddTask with a parent_id set (sub tasks
      go through AddSubTask), or a parent whose sub_task_ids resolve to
      nothing when its totals are recomputed.
    """
    handler = _HANDLERS.get(type(action))
    if handler is None:
        logger.debug("Ignoring unknown action %r", type(action).__name__)
        return state
    return handler(state, action)
