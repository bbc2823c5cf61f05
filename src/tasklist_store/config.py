# src/tasklist_store/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Nothing required at import time; every key has a default.
- The store core (tasks/*) never reads settings; only the CLI and the
  composition root do.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TASKLIST"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    log_actions: bool

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    log_dir: Path
    state_path: Path

    # ---- Store ----
    validate_transitions: bool

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "tasklist").strip() or "tasklist"
        log_level = _env(_k("LOG_LEVEL"), "INFO")
        log_actions = _env_bool(_k("LOG_ACTIONS"), False)

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/tasklist"))
        log_dir = _env_path(_k("LOG_DIR"), data_dir)
        state_path = _env_path(_k("STATE_PATH"), data_dir / "tasks.json")

        validate_transitions = _env_bool(_k("VALIDATE_TRANSITIONS"), False)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            log_actions=log_actions,
            data_dir=data_dir,
            log_dir=log_dir,
            state_path=state_path,
            validate_transitions=validate_transitions,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
