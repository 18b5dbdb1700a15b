# src/taskkeeper/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Data files default to the working directory (tasks.json / users.json).
- Components receive settings by injection; nothing reads env vars later.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from .tasks.passwords import DEFAULT_ROUNDS, clamp_rounds

ENV_PREFIX = "TASKKEEPER"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


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
    log_dir: Path

    # ---- Data files ----
    data_dir: Path
    tasks_path: Path
    users_path: Path

    # ---- Auth ----
    bcrypt_rounds: int

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "taskkeeper").strip() or "taskkeeper"
        log_level = _env(_k("LOG_LEVEL"), "WARNING").strip().upper() or "WARNING"
        log_dir = _env_path(_k("LOG_DIR"), Path(".local/taskkeeper"))

        data_dir = _env_path(_k("DATA_DIR"), Path("."))
        tasks_path = _env_path(_k("TASKS_PATH"), data_dir / "tasks.json")
        users_path = _env_path(_k("USERS_PATH"), data_dir / "users.json")

        bcrypt_rounds = clamp_rounds(_env_int(_k("BCRYPT_ROUNDS"), DEFAULT_ROUNDS))

        return Settings(
            app_name=app_name,
            log_level=log_level,
            log_dir=log_dir,
            data_dir=data_dir,
            tasks_path=tasks_path,
            users_path=users_path,
            bcrypt_rounds=bcrypt_rounds,
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    """Process-wide settings; .env is read on first use."""
    global _SETTINGS
    if _SETTINGS is None:
        load_dotenv(override=False)
        _SETTINGS = Settings.from_env()
    return _SETTINGS
