# tests/test_config.py

from __future__ import annotations

from pathlib import Path

from tasklist_store.config import Settings


def test_settings_defaults(monkeypatch) -> None:
    for name in (
        "TASKLIST_APP_NAME",
        "TASKLIST_LOG_LEVEL",
        "TASKLIST_DATA_DIR",
        "TASKLIST_LOG_DIR",
        "TASKLIST_STATE_PATH",
        "TASKLIST_VALIDATE_TRANSITIONS",
        "TASKLIST_LOG_ACTIONS",
    ):
        monkeypatch.delenv(name, raising=False)

    s = Settings.from_env()
    assert s.app_name == "tasklist"
    assert s.log_level == "INFO"
    assert s.data_dir == Path(".local/tasklist")
    assert s.log_dir == s.data_dir
    assert s.state_path == s.data_dir / "tasks.json"
    assert s.validate_transitions is False
    assert s.log_actions is False


def test_settings_from_env(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TASKLIST_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("TASKLIST_STATE_PATH", "")
    monkeypatch.setenv("TASKLIST_VALIDATE_TRANSITIONS", "yes")
    monkeypatch.setenv("TASKLIST_LOG_ACTIONS", "off")
    monkeypatch.setenv("TASKLIST_APP_NAME", "  ")

    s = Settings.from_env()
    assert s.data_dir == tmp_path
    assert s.state_path == tmp_path / "tasks.json"
    assert s.validate_transitions is True
    assert s.log_actions is False
    assert s.app_name == "tasklist"
