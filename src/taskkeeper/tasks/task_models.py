# src/taskkeeper/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


def _require_str(raw: dict[str, Any], key: str) -> str:
    val = raw[key]
    if not isinstance(val, str):
        raise TypeError(f"{key!r} must be a string, got {type(val).__name__}")
    return val


@dataclass(slots=True)
class Task:
    id: int
    description: str
    completed: bool = False

    @property
    def status_label(self) -> str:
        return "Completed" if self.completed else "Pending"

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "description": self.description, "completed": self.completed}

    @classmethod
    def from_dict(cls, raw: Any) -> Task:
        if not isinstance(raw, dict):
            raise TypeError(f"task must be an object, got {type(raw).__name__}")

        task_id = raw["id"]
        # bool is an int subclass; reject it explicitly.
        if isinstance(task_id, bool) or not isinstance(task_id, int):
            raise TypeError(f"task id must be an integer, got {task_id!r}")
        if task_id < 1:
            raise ValueError(f"task id must be >= 1, got {task_id}")

        completed = raw["completed"]
        if not isinstance(completed, bool):
            raise TypeError(f"task 'completed' must be a boolean, got {completed!r}")

        return cls(id=task_id, description=_require_str(raw, "description"), completed=completed)


@dataclass(slots=True)
class TaskList:
    """All tasks of one user, in insertion order."""

    username: str
    tasks: list[Task] = field(default_factory=list)

    def next_id(self) -> int:
        # Derived from the current length, so ids freed by removal can come back.
        return len(self.tasks) + 1

    def find(self, task_id: int) -> Task | None:
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None

    def to_dict(self) -> dict[str, Any]:
        return {"username": self.username, "tasks": [t.to_dict() for t in self.tasks]}

    @classmethod
    def from_dict(cls, raw: Any) -> TaskList:
        if not isinstance(raw, dict):
            raise TypeError(f"task list must be an object, got {type(raw).__name__}")
        tasks_raw = raw["tasks"]
        if not isinstance(tasks_raw, list):
            raise TypeError("task list 'tasks' must be an array")
        return cls(
            username=_require_str(raw, "username"),
            tasks=[Task.from_dict(t) for t in tasks_raw],
        )


@dataclass(slots=True)
class User:
    """
    Account record.

    password_hash is a bcrypt hash; it is serialized under the "password" key
    for compatibility with existing users files.
    """

    username: str
    password_hash: str

    def to_dict(self) -> dict[str, Any]:
        return {"username": self.username, "password": self.password_hash}

    @classmethod
    def from_dict(cls, raw: Any) -> User:
        if not isinstance(raw, dict):
            raise TypeError(f"user must be an object, got {type(raw).__name__}")
        return cls(username=_require_str(raw, "username"), password_hash=_require_str(raw, "password"))
