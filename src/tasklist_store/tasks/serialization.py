# src/tasklist_store/tasks/serialization.py

"""
Plain-dict form of a snapshot (what a persistence layer writes as JSON).

Shape:
    {
      "entities": {"<id>": {"id": ..., "parentId": ..., "subTaskIds": [...],
                            "timeSpentOnDay": {...}, "timeSpent": ..., ...}},
      "ids": [...],
      "currentTaskId": "<id>" | null,
      "todaysTaskIds": [...],
      "backlogTaskIds": [...]
    }

Loading is lenient about missing optional keys and rebuilds `ids` from the
entity map when the stored order is missing or disagrees with it.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from .task_models import Task, TaskState
from .time_tracking import total_time

logger = logging.getLogger(__name__)

# snake_case attribute -> camelCase key
_TASK_KEYS: dict[str, str] = {
    "id": "id",
    "parent_id": "parentId",
    "sub_task_ids": "subTaskIds",
    "time_spent_on_day": "timeSpentOnDay",
    "time_spent": "timeSpent",
    "title": "title",
    "is_done": "isDone",
    "notes": "notes",
    "time_estimate": "timeEstimate",
    "issue_id": "issueId",
    "issue_type": "issueType",
    "created": "created",
}
_TASK_ATTRS: dict[str, str] = {v: k for k, v in _TASK_KEYS.items()}


def task_to_dict(task: Task) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for attr, key in _TASK_KEYS.items():
        value = getattr(task, attr)
        if attr == "sub_task_ids":
            value = list(value)
        elif attr == "time_spent_on_day":
            value = dict(value)
        out[key] = value
    return out


def _require_mapping(value: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ValueError(f"{what} must be an object, got {type(value).__name__}")
    return value


def _time_map(raw: Any) -> dict[str, int]:
    if not isinstance(raw, Mapping):
        return {}
    return {str(k): int(v or 0) for k, v in raw.items()}


def changes_from_dict(data: Mapping[str, Any]) -> dict[str, Any]:
    """camelCase partial task -> snake_case changes for the entity index."""
    out: dict[str, Any] = {}
    for key, value in _require_mapping(data, "changes").items():
        attr = _TASK_ATTRS.get(key)
        if attr is None:
            raise ValueError(f"unknown task field: {key!r}")
        try:
            if attr == "sub_task_ids":
                value = tuple(str(i) for i in value or ())
            elif attr == "time_spent_on_day":
                value = _time_map(value)
        except TypeError as e:
            raise ValueError(f"bad value for {key!r}: {e}") from e
        out[attr] = value
    return out


def task_from_dict(data: Mapping[str, Any]) -> Task:
    """Raises ValueError when data is not a task object or a field has the wrong shape."""
    data = _require_mapping(data, "task")
    if "id" not in data:
        raise ValueError("task: missing field 'id'")
    try:
        days = _time_map(data.get("timeSpentOnDay"))
        parent_id = data.get("parentId")
        return Task(
            id=str(data["id"]),
            parent_id=str(parent_id) if parent_id else None,
            sub_task_ids=tuple(str(i) for i in data.get("subTaskIds") or ()),
            time_spent_on_day=days,
            time_spent=total_time(days),
            title=str(data.get("title") or ""),
            is_done=bool(data.get("isDone", False)),
            notes=str(data.get("notes") or ""),
            time_estimate=int(data.get("timeEstimate") or 0),
            issue_id=data.get("issueId"),
            issue_type=data.get("issueType"),
            created=data.get("created"),
        )
    except TypeError as e:
        raise ValueError(f"task {data['id']!r}: {e}") from e


def state_to_dict(state: TaskState) -> dict[str, Any]:
    return {
        "entities": {tid: task_to_dict(state.entities[tid]) for tid in state.ids},
        "ids": list(state.ids),
        "currentTaskId": state.current_task_id,
        "todaysTaskIds": list(state.todays_task_ids),
        "backlogTaskIds": list(state.backlog_task_ids),
    }


def state_from_dict(data: Mapping[str, Any]) -> TaskState:
    data = _require_mapping(data, "snapshot")
    raw_entities = data.get("entities") or {}
    if not isinstance(raw_entities, Mapping):
        raise ValueError("entities must be an object keyed by task id")

    entities: dict[str, Task] = {}
    for key, raw in raw_entities.items():
        task = task_from_dict({"id": key, **_require_mapping(raw, f"entity {key!r}")})
        entities[task.id] = task

    try:
        stored_ids = [str(i) for i in data.get("ids") or ()]
        todays = tuple(dict.fromkeys(str(i) for i in data.get("todaysTaskIds") or ()))
        backlog = tuple(dict.fromkeys(str(i) for i in data.get("backlogTaskIds") or ()))
    except TypeError as e:
        raise ValueError(f"id lists must be arrays: {e}") from e

    ids = list(dict.fromkeys(i for i in stored_ids if i in entities))
    missing = [i for i in entities if i not in set(ids)]
    if missing or len(ids) != len(stored_ids):
        logger.warning(
            "Snapshot ids disagree with entities (missing=%d dropped=%d); rebuilt order",
            len(missing),
            len(stored_ids) - len(ids),
        )
        ids.extend(missing)

    current = data.get("currentTaskId")
    return TaskState(
        entities=entities,
        ids=tuple(ids),
        current_task_id=str(current) if current else None,
        todays_task_ids=todays,
        backlog_task_ids=backlog,
    )
