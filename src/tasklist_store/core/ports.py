# src/tasklist_store/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) for the collaborators around the store.

The store depends on Protocols instead of concrete implementations:
- issue data comes from whatever issue-tracker integration the app runs,
- snapshots are saved/loaded by whatever persistence layer the app uses.
"""

from collections.abc import Mapping
from typing import Any, Protocol

from ..tasks.task_models import TaskState

IssueData = Mapping[str, Any]


class IssueLookup(Protocol):
    """Read-only access to issue-tracker payloads, keyed by (issue_type, issue_id)."""

    def get_issue_data(self, issue_type: str, issue_id: str) -> IssueData | None: ...


class SnapshotRepo(Protocol):
    """Persistence side: full-snapshot load/save (format is the repo's business)."""

    def load(self) -> TaskState | None: ...
    def save(self, state: TaskState) -> None: ...


class MappingIssueLookup:
    """IssueLookup over a nested {issue_type: {issue_id: payload}} mapping."""

    def __init__(self, issue_entity_map: Mapping[str, Mapping[str, IssueData]] | None = None) -> None:
        self._map = issue_entity_map or {}

    def get_issue_data(self, issue_type: str, issue_id: str) -> IssueData | None:
        return (self._map.get(issue_type) or {}).get(issue_id)
