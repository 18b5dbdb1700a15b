# src/taskkeeper/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- takes settings (injected or process-wide),
- loads the TaskStore from its two JSON files,
- wraps it into AppState for the console session.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.state import AppState
from ..tasks.task_store import StoreIOError, TaskStore

logger = logging.getLogger(__name__)


def load_store(settings) -> TaskStore:
    return TaskStore.load(
        settings.tasks_path,
        settings.users_path,
        bcrypt_rounds=settings.bcrypt_rounds,
    )


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    If the stored data cannot be read, the session starts from an empty store
    and state.load_error carries the reason for the console to show.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    try:
        store = load_store(settings)
        load_error = None
    except StoreIOError as e:
        logger.exception("Failed to load stored data; starting empty.")
        store = TaskStore(
            settings.tasks_path,
            settings.users_path,
            bcrypt_rounds=settings.bcrypt_rounds,
        )
        load_error = str(e)

    return AppState(settings=settings, store=store, load_error=load_error)
