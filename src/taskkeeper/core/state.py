# src/taskkeeper/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..tasks.task_store import TaskStore


@dataclass
class AppState:
    """
    Everything one interactive session works on.

    username is set once login succeeds; menu commands act on that user only.
    """

    settings: Any
    store: TaskStore
    username: str | None = None
    # Set when startup load failed and the session began from an empty store.
    load_error: str | None = None

    def require_user(self) -> str:
        if self.username is None:
            raise RuntimeError("No user is logged in")
        return self.username
