# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from taskkeeper.core.state import AppState
from taskkeeper.tasks.task_store import TaskStore

# bcrypt's minimum cost keeps the suite fast.
TEST_ROUNDS = 4


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with bootstrap and AppState.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment and any local .env.
    """
    return SimpleNamespace(
        app_name="taskkeeper-test",
        log_level="WARNING",
        log_dir=tmp_path / "logs",
        data_dir=tmp_path,
        tasks_path=tmp_path / "tasks.json",
        users_path=tmp_path / "users.json",
        bcrypt_rounds=TEST_ROUNDS,
    )


@pytest.fixture()
def store(settings: SimpleNamespace) -> TaskStore:
    return TaskStore(settings.tasks_path, settings.users_path, bcrypt_rounds=TEST_ROUNDS)


@pytest.fixture()
def state(settings: SimpleNamespace, store: TaskStore) -> AppState:
    return AppState(settings=settings, store=store)
