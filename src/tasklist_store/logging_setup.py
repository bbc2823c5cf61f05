# src/tasklist_store/logging_setup.py

"""
Logging for the `tasklist` CLI.

The CLI prints its results (replay summary, today/backlog trees, `check`
problems) on stdout, so log records go to stderr and never mix with them.
The console shows the store's own records at the configured level. The
file keeps everything at DEBUG, including the per-action "dispatch ..."
trail TaskStore writes when TASKLIST_LOG_ACTIONS is on, which is how a
replayed log is traced back action by action.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FILE_NAME = "tasklist.log"
PACKAGE_LOGGER = "tasklist_store"


class _ConsoleNoiseFilter(logging.Filter):
    """Pass the store's records; anything else (py.warnings included) only from ERROR up."""

    def __init__(self, package: str = PACKAGE_LOGGER) -> None:
        super().__init__()
        self._package = package

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name
        if name == self._package or name.startswith(self._package + "."):
            return True
        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path = ".local/tasklist",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Install the stderr console handler and the DEBUG file handler on the root logger.

    The reducer only logs at DEBUG (ignored actions, permissive no-ops) and
    WARNING (bulk UpdateTasks touching time maps), so at the default INFO the
    console shows warnings and load/save lines while the file has the full
    trail. Calling it again replaces the handlers instead of stacking them.

    Returns the path of the log file.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(fmt)
    console.addFilter(_ConsoleNoiseFilter())
    root.addHandler(console)

    file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
    file_handler.setLevel(file_level)
    file_handler.setFormatter(fmt)
    root.addHandler(file_handler)

    logging.captureWarnings(True)
    return log_file
