# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from tasklist_store.tasks.task_models import Task, TaskState


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with the CLI bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="tasklist-test",
        log_level="DEBUG",
        log_actions=True,
        data_dir=tmp_path / "data",
        log_dir=tmp_path / "data",
        state_path=tmp_path / "data" / "tasks.json",
        validate_transitions=True,
    )


@pytest.fixture()
def family_state() -> TaskState:
    """
    A consistent snapshot:

    today:   P (sub tasks A, B)
    backlog: R

    A: 2024-01-01=100
    B: 2024-01-01=50, 2024-01-02=10
    P: sum of A and B
    """
    a = Task(
        id="A",
        parent_id="P",
        time_spent_on_day={"2024-01-01": 100},
        time_spent=100,
        title="write draft",
    )
    b = Task(
        id="B",
        parent_id="P",
        time_spent_on_day={"2024-01-01": 50, "2024-01-02": 10},
        time_spent=60,
        title="review",
    )
    p = Task(
        id="P",
        sub_task_ids=("A", "B"),
        time_spent_on_day={"2024-01-01": 150, "2024-01-02": 10},
        time_spent=160,
        title="blog post",
        issue_id="42",
        issue_type="GITLAB",
    )
    r = Task(id="R", title="taxes")
    return TaskState(
        entities={"P": p, "A": a, "B": b, "R": r},
        ids=("P", "A", "B", "R"),
        current_task_id=None,
        todays_task_ids=("P",),
        backlog_task_ids=("R",),
    )
