# src/tasklist_store/errors.py

from __future__ import annotations


class TaskStoreError(Exception):
    """Base class for every failure raised by a task transition."""


class NotFoundError(TaskStoreError, KeyError):
    """Referenced task id is not in the snapshot."""

    def __init__(self, task_id: str | None, what: str = "task") -> None:
        self.task_id = task_id
        super().__init__(f"{what} not found: {task_id!r}")

    def __str__(self) -> str:
        # KeyError quotes its message; keep it readable.
        return str(self.args[0])


class DuplicateIdError(TaskStoreError, ValueError):
    def __init__(self, task_id: str) -> None:
        self.task_id = task_id
        super().__init__(f"task id already exists: {task_id!r}")


class InconsistentHierarchyError(TaskStoreError):
    """Parent/child linkage cannot be resolved (e.g. no sub-task resolves)."""
