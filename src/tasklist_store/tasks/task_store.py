# src/tasklist_store/tasks/task_store.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..core.ports import SnapshotRepo
from ..errors import TaskStoreError
from .actions import ReplaceState, TaskAction
from .invariants import find_invariant_violations
from .reducer import task_reducer
from .task_models import TaskState, initial_task_state

logger = logging.getLogger(__name__)

Listener = Callable[[TaskState, object], None]


class TaskStore:
    """
    Holder of "the current snapshot".

    - dispatch() runs the pure reducer and publishes the result only when it
      succeeds; a failing action leaves the current snapshot in place
    - subscribers are called after every published transition
    - validate=True checks the invariants after each transition and logs
      what is broken (it does not reject the transition)

    Thread-safety:
    - none; callers dispatch from one thread (single writer)
    """

    def __init__(
        self,
        initial: TaskState | None = None,
        *,
        validate: bool = False,
        log_actions: bool = False,
    ) -> None:
        self._state = initial if initial is not None else initial_task_state()
        self._validate = validate
        self._log_actions = log_actions
        self._listeners: list[Listener] = []
        logger.info("TaskStore ready tasks=%d validate=%s", len(self._state), validate)

    @property
    def state(self) -> TaskState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register listener(state, action); returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def dispatch(self, action: TaskAction | object) -> TaskState:
        if self._log_actions:
            logger.debug("dispatch %s", action)

        try:
            new_state = task_reducer(self._state, action)
        except TaskStoreError as e:
            logger.warning("Action %s rejected: %s", type(action).__name__, e)
            raise

        if new_state is self._state:
            return new_state

        if self._validate:
            for problem in find_invariant_violations(new_state):
                logger.warning("Invariant broken after %s: %s", type(action).__name__, problem)

        self._state = new_state
        for listener in list(self._listeners):
            try:
                listener(new_state, action)
            except Exception:
                logger.exception("TaskStore listener failed after %s", type(action).__name__)
        return new_state

    # ---- persistence port ----

    def load(self, repo: SnapshotRepo) -> bool:
        """Replace the current snapshot with the saved one. Returns False if nothing saved."""
        saved = repo.load()
        if saved is None:
            logger.info("No saved task state; keeping current (%d tasks)", len(self._state))
            return False
        self.dispatch(ReplaceState(state=saved))
        logger.info("Loaded task state: %d tasks", len(saved))
        return True

    def save(self, repo: SnapshotRepo) -> None:
        repo.save(self._state)
