# src/tasklist_store/tasks/entity_index.py

"""
Entity index: id -> Task mapping plus the canonical id order.

Every helper takes a snapshot and returns a new one. The input snapshot and
its containers are never modified, so a helper that raises leaves the
caller's snapshot exactly as it was.

The index stores what it is given: derived fields (time_spent) are the
caller's business.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable
from typing import Any

from ..errors import DuplicateIdError, NotFoundError
from .task_models import Task, TaskState, task_changes


def add_one(state: TaskState, task: Task) -> TaskState:
    if task.id in state.entities:
        raise DuplicateIdError(task.id)
    entities = dict(state.entities)
    entities[task.id] = task
    return dataclasses.replace(state, entities=entities, ids=(*state.ids, task.id))


def _merge(task: Task, changes: dict[str, Any]) -> Task:
    return dataclasses.replace(task, **task_changes(changes))


def update_one(state: TaskState, task_id: str, changes: dict[str, Any]) -> TaskState:
    task = state.entities.get(task_id)
    if task is None:
        raise NotFoundError(task_id)
    entities = dict(state.entities)
    entities[task_id] = _merge(task, changes)
    return dataclasses.replace(state, entities=entities)


def update_many(
    state: TaskState, updates: Iterable[tuple[str, dict[str, Any]]]
) -> TaskState:
    """Apply merges in order (last write wins). Fails on the first unknown id."""
    entities = dict(state.entities)
    for task_id, changes in updates:
        task = entities.get(task_id)
        if task is None:
            raise NotFoundError(task_id)
        entities[task_id] = _merge(task, changes)
    return dataclasses.replace(state, entities=entities)


def remove_one(state: TaskState, task_id: str) -> TaskState:
    return remove_many(state, (task_id,))


def remove_many(state: TaskState, task_ids: Iterable[str]) -> TaskState:
    # Unknown ids are skipped silently, like a keyed-collection adapter does.
    doomed = {tid for tid in task_ids if tid in state.entities}
    if not doomed:
        return state
    entities = {k: v for k, v in state.entities.items() if k not in doomed}
    ids = tuple(tid for tid in state.ids if tid not in doomed)
    return dataclasses.replace(state, entities=entities, ids=ids)
