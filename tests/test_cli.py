# tests/test_cli.py

from __future__ import annotations

import argparse
import json
from pathlib import Path

import pytest

from tasklist_store.cli import bootstrap, main as cli_main
from tasklist_store.cli.bootstrap import JsonSnapshotFile, create_store, read_action_log
from tasklist_store.tasks.actions import AddTask, DeleteTask
from tasklist_store.tasks.serialization import state_to_dict


def _write_log(path: Path, *actions: dict) -> Path:
    lines = ["# test log", ""] + [json.dumps(a) for a in actions]
    path.write_text("\n".join(lines) + "\n", "utf-8")
    return path


def test_json_snapshot_file_roundtrip(tmp_path: Path, family_state) -> None:
    repo = JsonSnapshotFile(tmp_path / "nested" / "tasks.json")
    assert repo.load() is None

    repo.save(family_state)
    assert json.loads(repo.path.read_text("utf-8"))["todaysTaskIds"] == ["P"]
    assert repo.load() == family_state


def test_read_action_log_reports_line_numbers(tmp_path: Path) -> None:
    log = _write_log(
        tmp_path / "actions.jsonl",
        {"type": "AddTask", "task": {"id": "t1"}},
        {"type": "DeleteTask", "taskId": "t1"},
    )
    actions = list(read_action_log(log))
    assert isinstance(actions[0], AddTask)
    assert isinstance(actions[1], DeleteTask)

    bad = tmp_path / "bad.jsonl"
    bad.write_text('{"type": "AddTask", "task": {"id": "t1"}}\n{"type": "Nope"}\n', "utf-8")
    with pytest.raises(ValueError, match="bad.jsonl:2"):
        list(read_action_log(bad))


def test_create_store_uses_settings(settings) -> None:
    store = create_store(settings=settings)
    assert settings.data_dir.is_dir()
    assert len(store.state) == 0


def test_replay_show_and_check(tmp_path: Path, settings, monkeypatch, family_state, capsys) -> None:
    monkeypatch.setattr(bootstrap, "get_settings", lambda: settings)

    state_file = tmp_path / "tasks.json"
    JsonSnapshotFile(state_file).save(family_state)
    log = _write_log(
        tmp_path / "actions.jsonl",
        {"type": "AddTimeSpent", "taskId": "A", "duration": 3_600_000, "date": "2024-01-03"},
        {"type": "SetCurrentTask", "taskId": "A"},
    )

    rc = cli_main.cmd_replay(argparse.Namespace(state=state_file, actions=log, out=None))
    assert rc == 0
    assert "Applied 2 action(s)" in capsys.readouterr().out

    saved = JsonSnapshotFile(state_file).load()
    assert saved is not None
    assert saved.current_task_id == "A"
    assert saved.entities["P"].time_spent_on_day["2024-01-03"] == 3_600_000

    assert cli_main.cmd_show(argparse.Namespace(state=state_file)) == 0
    shown = capsys.readouterr().out
    assert "Today (1):" in shown
    assert "*[ ] write draft" in shown
    assert "Backlog (1):" in shown

    assert cli_main.cmd_check(argparse.Namespace(state=state_file)) == 0
    assert "no problems" in capsys.readouterr().out


def test_check_reports_problems(tmp_path: Path, family_state, capsys) -> None:
    data = state_to_dict(family_state)
    data["entities"]["P"]["timeSpentOnDay"] = {"2024-01-01": 1}
    data["todaysTaskIds"].append("A")
    state_file = tmp_path / "broken.json"
    state_file.write_text(json.dumps(data), "utf-8")

    assert cli_main.cmd_check(argparse.Namespace(state=state_file)) == 1
    out = capsys.readouterr().out
    assert "is not the sum of its sub tasks" in out
    assert "todays_task_ids: A is a sub task" in out


def test_main_maps_store_errors_to_exit_code(tmp_path: Path, settings, monkeypatch) -> None:
    monkeypatch.setattr(bootstrap, "get_settings", lambda: settings)
    monkeypatch.setattr(cli_main, "setup_logging", lambda **kwargs: None)

    state_file = tmp_path / "tasks.json"
    log = _write_log(tmp_path / "actions.jsonl", {"type": "DeleteTask", "taskId": "ghost"})

    assert cli_main.main(["replay", str(log), "--state", str(state_file)]) == 1
    assert cli_main.main(["show", "--state", str(tmp_path / "missing.json")]) == 1


def test_format_duration() -> None:
    assert cli_main.format_duration(0) == "0h 00m"
    assert cli_main.format_duration(5_400_000) == "1h 30m"


@pytest.mark.parametrize("line", ["[1, 2]", '{"type": "AddTask", "task": "oops"}', '"AddTask"'])
def test_main_rejects_malformed_action_lines(tmp_path: Path, settings, monkeypatch, line) -> None:
    monkeypatch.setattr(bootstrap, "get_settings", lambda: settings)
    monkeypatch.setattr(cli_main, "setup_logging", lambda **kwargs: None)

    state_file = tmp_path / "tasks.json"
    log = tmp_path / "actions.jsonl"
    log.write_text(line + "\n", "utf-8")

    assert cli_main.main(["replay", str(log), "--state", str(state_file)]) == 1
    assert not state_file.exists()


def test_main_rejects_snapshot_that_is_not_an_object(tmp_path: Path, settings, monkeypatch) -> None:
    monkeypatch.setattr(bootstrap, "get_settings", lambda: settings)
    monkeypatch.setattr(cli_main, "setup_logging", lambda **kwargs: None)

    state_file = tmp_path / "tasks.json"
    state_file.write_text("[1, 2]", "utf-8")

    assert cli_main.main(["check", "--state", str(state_file)]) == 1
