# src/tasklist_store/tasks/actions.py

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, ClassVar

from .task_models import Task, TaskState


class ActionType(StrEnum):
    """Tags of the supported transitions (also used in JSON action logs)."""

    REPLACE_STATE = "ReplaceState"
    SET_CURRENT_TASK = "SetCurrentTask"
    UNSET_CURRENT_TASK = "UnsetCurrentTask"
    ADD_TASK = "AddTask"
    UPDATE_TASK = "UpdateTask"
    UPDATE_TASKS = "UpdateTasks"
    DELETE_TASK = "DeleteTask"
    MOVE_AFTER = "MoveAfter"
    ADD_TIME_SPENT = "AddTimeSpent"
    ADD_SUB_TASK = "AddSubTask"


@dataclass(frozen=True, slots=True)
class ReplaceState:
    """Swap in a complete snapshot (load / restore)."""

    type: ClassVar[ActionType] = ActionType.REPLACE_STATE
    state: TaskState


@dataclass(frozen=True, slots=True)
class SetCurrentTask:
    type: ClassVar[ActionType] = ActionType.SET_CURRENT_TASK
    task_id: str | None


@dataclass(frozen=True, slots=True)
class UnsetCurrentTask:
    type: ClassVar[ActionType] = ActionType.UNSET_CURRENT_TASK


@dataclass(frozen=True, slots=True)
class AddTask:
    type: ClassVar[ActionType] = ActionType.ADD_TASK
    task: Task
    is_add_to_backlog: bool = False


@dataclass(frozen=True, slots=True)
class UpdateTask:
    type: ClassVar[ActionType] = ActionType.UPDATE_TASK
    task_id: str
    changes: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class TaskUpdate:
    task_id: str
    changes: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class UpdateTasks:
    type: ClassVar[ActionType] = ActionType.UPDATE_TASKS
    updates: tuple[TaskUpdate, ...] = ()


@dataclass(frozen=True, slots=True)
class DeleteTask:
    type: ClassVar[ActionType] = ActionType.DELETE_TASK
    task_id: str


@dataclass(frozen=True, slots=True)
class MoveAfter:
    """
    Move task_id in front of target_id in every ordered list that holds it
    (global order, today, backlog). target_id None moves it to the front.
    """

    type: ClassVar[ActionType] = ActionType.MOVE_AFTER
    task_id: str
    target_id: str | None = None


@dataclass(frozen=True, slots=True)
class AddTimeSpent:
    type: ClassVar[ActionType] = ActionType.ADD_TIME_SPENT
    task_id: str
    duration: int
    date: str


@dataclass(frozen=True, slots=True)
class AddSubTask:
    type: ClassVar[ActionType] = ActionType.ADD_SUB_TASK
    parent_id: str
    task: Task


TaskAction = (
    ReplaceState
    | SetCurrentTask
    | UnsetCurrentTask
    | AddTask
    | UpdateTask
    | UpdateTasks
    | DeleteTask
    | MoveAfter
    | AddTimeSpent
    | AddSubTask
)


def action_from_dict(data: Mapping[str, Any]) -> TaskAction:
    """
    Build an action from its JSON form: {"type": "<ActionType>", ...payload}.

    Payload keys use the camelCase names of the plain-dict snapshot format
    (taskId, targetId, isAddToBacklog, ...). Raises ValueError on an unknown
    type or a malformed payload.
    """
    # Local import: serialization imports the models, not the actions.
    from .serialization import changes_from_dict, state_from_dict, task_from_dict

    if not isinstance(data, Mapping):
        raise ValueError(f"action must be an object, got {type(data).__name__}")
    raw_type = data.get("type")
    try:
        kind = ActionType(raw_type)
    except ValueError:
        raise ValueError(f"unknown action type: {raw_type!r}") from None

    try:
        if kind is ActionType.REPLACE_STATE:
            return ReplaceState(state=state_from_dict(data["state"]))
        if kind is ActionType.SET_CURRENT_TASK:
            return SetCurrentTask(task_id=data.get("taskId"))
        if kind is ActionType.UNSET_CURRENT_TASK:
            return UnsetCurrentTask()
        if kind is ActionType.ADD_TASK:
            return AddTask(
                task=task_from_dict(data["task"]),
                is_add_to_backlog=bool(data.get("isAddToBacklog", False)),
            )
        if kind is ActionType.UPDATE_TASK:
            return UpdateTask(
                task_id=str(data["taskId"]),
                changes=changes_from_dict(data.get("changes") or {}),
            )
        if kind is ActionType.UPDATE_TASKS:
            return UpdateTasks(
                updates=tuple(
                    TaskUpdate(
                        task_id=str(u["taskId"]),
                        changes=changes_from_dict(u.get("changes") or {}),
                    )
                    for u in data.get("updates") or []
                )
            )
        if kind is ActionType.DELETE_TASK:
            return DeleteTask(task_id=str(data["taskId"]))
        if kind is ActionType.MOVE_AFTER:
            return MoveAfter(task_id=str(data["taskId"]), target_id=data.get("targetId"))
        if kind is ActionType.ADD_TIME_SPENT:
            return AddTimeSpent(
                task_id=str(data["taskId"]),
                duration=int(data["duration"]),
                date=str(data["date"]),
            )
        # ActionType.ADD_SUB_TASK
        return AddSubTask(parent_id=str(data["parentId"]), task=task_from_dict(data["task"]))
    except KeyError as e:
        raise ValueError(f"{kind.value}: missing field {e.args[0]!r}") from None
    except (TypeError, AttributeError) as e:
        raise ValueError(f"{kind.value}: malformed payload: {e}") from e
