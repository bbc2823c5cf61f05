# src/tasklist_store/cli/main.py

"""
CLI entrypoint (`tasklist`).

Developer tool around the store:
- replay: apply a JSON-lines action log to a saved snapshot
- show:   print today/backlog with sub-tasks and tracked time
- check:  report broken invariants in a saved snapshot
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from ..config import get_settings
from ..errors import TaskStoreError
from ..logging_setup import setup_logging
from ..tasks.invariants import find_invariant_violations
from ..tasks.selectors import (
    TaskView,
    select_backlog_tasks_with_sub_tasks,
    select_todays_tasks_with_sub_tasks,
)
from ..tasks.task_models import TaskState
from .bootstrap import JsonSnapshotFile, create_store, read_action_log

logger = logging.getLogger(__name__)


def format_duration(ms: int) -> str:
    minutes = int(ms) // 60_000
    return f"{minutes // 60}h {minutes % 60:02d}m"


def _view_lines(view: TaskView, current_id: str | None, indent: str = "  ") -> list[str]:
    task = view.task
    mark = "*" if task.id == current_id else " "
    done = "x" if task.is_done else " "
    lines = [f"{indent}{mark}[{done}] {task.title or task.id}  ({format_duration(task.time_spent)})"]
    for sub in view.sub_tasks:
        lines.extend(_view_lines(sub, current_id, indent + "    "))
    return lines


def render_state(state: TaskState) -> str:
    lines: list[str] = []
    for label, views in (
        ("Today", select_todays_tasks_with_sub_tasks(state)),
        ("Backlog", select_backlog_tasks_with_sub_tasks(state)),
    ):
        lines.append(f"{label} ({len(views)}):")
        for view in views:
            lines.extend(_view_lines(view, state.current_task_id))
    return "\n".join(lines)


def _load(path: Path) -> TaskState | None:
    return JsonSnapshotFile(path).load()


def cmd_replay(args: argparse.Namespace) -> int:
    repo = JsonSnapshotFile(args.state)
    store = create_store()
    store.load(repo)

    applied = 0
    for action in read_action_log(args.actions):
        store.dispatch(action)
        applied += 1

    out_repo = JsonSnapshotFile(args.out) if args.out else repo
    store.save(out_repo)
    print(f"Applied {applied} action(s); {len(store.state)} task(s) -> {out_repo.path}")
    return 0


def cmd_show(args: argparse.Namespace) -> int:
    state = _load(args.state)
    if state is None:
        print(f"No snapshot at {args.state}")
        return 1
    print(render_state(state))
    return 0


def cmd_check(args: argparse.Namespace) -> int:
    state = _load(args.state)
    if state is None:
        print(f"No snapshot at {args.state}")
        return 1
    problems = find_invariant_violations(state)
    if not problems:
        print(f"OK: {len(state)} task(s), no problems found.")
        return 0
    print(f"{len(problems)} problem(s):")
    for p in problems:
        print(f"  - {p}")
    return 1


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        prog="tasklist",
        description="Inspect and replay task list snapshots.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_replay = sub.add_parser("replay", help="Apply a JSON-lines action log to a snapshot.")
    p_replay.add_argument("actions", type=Path, help="JSON-lines action log")
    p_replay.add_argument("--state", type=Path, default=settings.state_path)
    p_replay.add_argument("--out", type=Path, default=None, help="Write result here instead.")
    p_replay.set_defaults(func=cmd_replay)

    p_show = sub.add_parser("show", help="Print today/backlog with tracked time.")
    p_show.add_argument("--state", type=Path, default=settings.state_path)
    p_show.set_defaults(func=cmd_show)

    p_check = sub.add_parser("check", help="Report inconsistencies in a snapshot.")
    p_check.add_argument("--state", type=Path, default=settings.state_path)
    p_check.set_defaults(func=cmd_check)

    return parser


def main(argv: list[str] | None = None) -> int:
    settings = get_settings()

    level_name = str(settings.log_level).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    setup_logging(log_dir=settings.log_dir, console_level=console_level)

    args = build_parser().parse_args(argv)
    try:
        return args.func(args)
    except (TaskStoreError, ValueError) as e:
        logger.error("%s failed: %s", args.command, e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
