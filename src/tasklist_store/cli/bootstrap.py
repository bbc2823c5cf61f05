# src/tasklist_store/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root" for the command line:
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the JSON snapshot file into a TaskStore,
- reads JSON-lines action logs.
"""

from __future__ import annotations

import contextlib
import json
import logging
import os
from collections.abc import Iterator
from pathlib import Path

from ..config import get_settings
from ..tasks.actions import TaskAction, action_from_dict
from ..tasks.serialization import state_from_dict, state_to_dict
from ..tasks.task_models import TaskState
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


class JsonSnapshotFile:
    """SnapshotRepo backed by one JSON file (written atomically)."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def load(self) -> TaskState | None:
        if not self.path.exists():
            return None
        data = json.loads(self.path.read_text("utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"{self.path}: snapshot must be a JSON object")
        state = state_from_dict(data)
        logger.info("Loaded snapshot: %d tasks from %s", len(state), self.path)
        return state

    def save(self, state: TaskState) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(".tmp")
        tmp.write_text(json.dumps(state_to_dict(state), ensure_ascii=False, indent=2), "utf-8")
        os.replace(tmp, self.path)
        with contextlib.suppress(OSError):
            # Task notes may be private; keep the file readable by the owner only.
            os.chmod(self.path, 0o600)
        logger.info("Saved snapshot: %d tasks to %s", len(state), self.path)


def read_action_log(path: str | Path) -> Iterator[TaskAction]:
    """Yield actions from a JSON-lines file (blank lines and '#' comments skipped)."""
    path = Path(path)
    with path.open("r", encoding="utf-8") as fh:
        for lineno, line in enumerate(fh, start=1):
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            try:
                yield action_from_dict(json.loads(line))
            except ValueError as e:
                # json.JSONDecodeError is a ValueError too.
                raise ValueError(f"{path}:{lineno}: {e}") from e


def create_store(*, settings=None, state: TaskState | None = None) -> TaskStore:
    """
    Create a TaskStore from the provided settings.

    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    settings.data_dir.mkdir(parents=True, exist_ok=True)

    return TaskStore(
        state,
        validate=settings.validate_transitions,
        log_actions=settings.log_actions,
    )
