# src/tasklist_store/tasks/hierarchy.py

from __future__ import annotations

import dataclasses
import logging

from ..errors import NotFoundError
from .entity_index import add_one, remove_many, update_one
from .task_models import Task, TaskState
from .time_tracking import recompute_parent_totals, with_time_totals

logger = logging.getLogger(__name__)


def add_sub_task(state: TaskState, parent_id: str, task: Task) -> TaskState:
    """
    Insert task as the last sub-task of parent_id.

    Sub-tasks never join the today/backlog lists; they are reached through
    their parent.
    """
    parent = state.entities.get(parent_id)
    if parent is None:
        raise NotFoundError(parent_id, what="parent task")

    sub = with_time_totals(dataclasses.replace(task, parent_id=parent_id))
    out = add_one(state, sub)
    out = update_one(out, parent_id, {"sub_task_ids": (*parent.sub_task_ids, sub.id)})

    # A fresh sub-task normally has no time yet; only then is the parent's
    # own tracked time left alone.
    if sub.time_spent_on_day:
        out = recompute_parent_totals(parent_id, out)
    return out


def delete_cascade(state: TaskState, task_id: str) -> TaskState:
    """
    Delete a task together with everything that depends on it.

    - detach from the parent and rebuild the parent's time totals
    - delete the direct sub-tasks (sub-tasks have no sub-tasks of their own)
    - clear current_task_id if it pointed at any deleted task
    - drop the id from the today/backlog lists
    """
    task = state.entities.get(task_id)
    if task is None:
        raise NotFoundError(task_id)

    out = remove_many(state, (task_id,))
    deleted = {task_id}

    if task.parent_id is not None:
        parent = out.entities.get(task.parent_id)
        if parent is None:
            raise NotFoundError(task.parent_id, what="parent task")
        out = update_one(
            out,
            task.parent_id,
            {"sub_task_ids": tuple(i for i in parent.sub_task_ids if i != task_id)},
        )
        out = recompute_parent_totals(task.parent_id, out)

    if task.sub_task_ids:
        out = remove_many(out, task.sub_task_ids)
        deleted.update(task.sub_task_ids)

    current = None if state.current_task_id in deleted else state.current_task_id
    logger.debug("delete_cascade id=%s removed=%d", task_id, len(deleted))

    return dataclasses.replace(
        out,
        current_task_id=current,
        todays_task_ids=tuple(i for i in state.todays_task_ids if i != task_id),
        backlog_task_ids=tuple(i for i in state.backlog_task_ids if i != task_id),
    )
