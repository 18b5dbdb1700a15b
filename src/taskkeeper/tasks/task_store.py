# src/taskkeeper/tasks/task_store.py

from __future__ import annotations

import contextlib
import json
import logging
import os
from pathlib import Path
from typing import Any

from .passwords import DEFAULT_ROUNDS, hash_password, verify_password
from .task_models import Task, TaskList, User

logger = logging.getLogger(__name__)


class UserAlreadyExistsError(ValueError):
    """Registration attempted with a username that is already taken."""

    def __init__(self, username: str) -> None:
        super().__init__("User already exists")
        self.username = username


class StoreIOError(OSError):
    """Reading, parsing or writing one of the store files failed."""

    def __init__(self, message: str, path: Path) -> None:
        super().__init__(message)
        self.path = path


class TaskStore:
    """
    In-memory store of users and their task lists.

    Persistence is whole-file: load() reads both JSON documents once at
    startup, save() rewrites both. Nothing touches disk in between.

    Lookups are case-sensitive on username. Operations on an unknown user or
    task id are silent no-ops.
    """

    def __init__(
        self,
        tasks_path: str | Path = "tasks.json",
        users_path: str | Path = "users.json",
        *,
        bcrypt_rounds: int = DEFAULT_ROUNDS,
    ) -> None:
        self._tasks_path = Path(tasks_path)
        self._users_path = Path(users_path)
        self._bcrypt_rounds = bcrypt_rounds
        self._users: dict[str, User] = {}
        self._task_lists: dict[str, TaskList] = {}

    @property
    def tasks_path(self) -> Path:
        return self._tasks_path

    @property
    def users_path(self) -> Path:
        return self._users_path

    # ---- users ----

    def has_user(self, username: str) -> bool:
        return username in self._users

    def count_users(self) -> int:
        return len(self._users)

    def register(self, username: str, password: str) -> None:
        if username in self._users:
            raise UserAlreadyExistsError(username)

        hashed = hash_password(password, rounds=self._bcrypt_rounds)
        self._users[username] = User(username=username, password_hash=hashed)
        logger.info("Registered user=%s", username)

    def authenticate(self, username: str, password: str) -> bool:
        user = self._users.get(username)
        if user is None:
            logger.info("Authentication failed: unknown user=%s", username)
            return False

        ok = verify_password(password, user.password_hash)
        if ok:
            logger.info("Authenticated user=%s", username)
        else:
            logger.info("Authentication failed: bad password user=%s", username)
        return ok

    # ---- tasks ----

    def get_tasks(self, username: str) -> list[Task]:
        task_list = self._task_lists.get(username)
        if task_list is None:
            return []
        return [Task(t.id, t.description, t.completed) for t in task_list.tasks]

    def get_task(self, username: str, task_id: int) -> Task | None:
        task_list = self._task_lists.get(username)
        if task_list is None:
            return None
        task = task_list.find(task_id)
        if task is None:
            return None
        return Task(task.id, task.description, task.completed)

    def add_task(self, username: str, description: str) -> Task:
        task_list = self._task_lists.get(username)
        if task_list is None:
            task_list = TaskList(username=username)
            self._task_lists[username] = task_list

        task = Task(id=task_list.next_id(), description=description, completed=False)
        task_list.tasks.append(task)
        logger.debug("Task added user=%s id=%s", username, task.id)
        return Task(task.id, task.description, task.completed)

    def remove_task(self, username: str, task_id: int) -> None:
        task_list = self._task_lists.get(username)
        if task_list is None:
            return

        before = len(task_list.tasks)
        # Ids can repeat after reuse; every match goes.
        task_list.tasks = [t for t in task_list.tasks if t.id != task_id]
        removed = before - len(task_list.tasks)
        if removed:
            logger.debug("Task removed user=%s id=%s count=%d", username, task_id, removed)

    def edit_task(self, username: str, task_id: int, new_description: str) -> None:
        task = self._find(username, task_id)
        if task is None:
            return
        task.description = new_description
        logger.debug("Task edited user=%s id=%s", username, task_id)

    def mark_completed(self, username: str, task_id: int) -> None:
        task = self._find(username, task_id)
        if task is None:
            return
        task.completed = True
        logger.debug("Task completed user=%s id=%s", username, task_id)

    def display(self, username: str) -> str:
        task_list = self._task_lists.get(username)
        if task_list is None:
            return f"No tasks found for {username}"

        lines = [f"Tasks for {username}:"]
        for task in task_list.tasks:
            lines.append(
                f"ID: {task.id}, Description: {task.description}, Status: {task.status_label}"
            )
        return "\n".join(lines)

    def _find(self, username: str, task_id: int) -> Task | None:
        task_list = self._task_lists.get(username)
        if task_list is None:
            return None
        return task_list.find(task_id)

    # ---- persistence ----

    def dump_task_lists(self) -> list[dict[str, Any]]:
        return [tl.to_dict() for tl in self._task_lists.values()]

    def dump_users(self) -> list[dict[str, Any]]:
        return [u.to_dict() for u in self._users.values()]

    @staticmethod
    def _write_json(path: Path, payload: Any, *, private: bool = False) -> None:
        tmp = path.with_name(path.name + ".tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(payload, ensure_ascii=False, indent=2), "utf-8")
            os.replace(tmp, path)
        except (OSError, UnicodeEncodeError) as e:
            with contextlib.suppress(OSError):
                tmp.unlink()
            raise StoreIOError(f"Failed to write {path}: {e}", path) from e

        if private:
            with contextlib.suppress(OSError):
                os.chmod(path, 0o600)

    def save(self) -> None:
        """
        Overwrite both files with the current snapshot.

        Both writes are attempted; the first failure is re-raised afterwards.
        """
        errors: list[StoreIOError] = []

        for path, payload, private in (
            (self._tasks_path, self.dump_task_lists(), False),
            (self._users_path, self.dump_users(), True),
        ):
            try:
                self._write_json(path, payload, private=private)
            except StoreIOError as e:
                logger.exception("Save failed for %s", path)
                errors.append(e)

        if errors:
            raise errors[0]

        logger.info(
            "Saved store: %d task lists to %s, %d users to %s",
            len(self._task_lists),
            self._tasks_path,
            len(self._users),
            self._users_path,
        )

    @staticmethod
    def _read_json_array(path: Path) -> list[Any] | None:
        """Return the parsed array, or None if the file does not exist."""
        if not path.exists():
            return None
        try:
            data = json.loads(path.read_text("utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise StoreIOError(f"Failed to read {path}: {e}", path) from e
        if not isinstance(data, list):
            raise StoreIOError(f"Failed to read {path}: top-level value must be an array", path)
        return data

    @classmethod
    def load(
        cls,
        tasks_path: str | Path = "tasks.json",
        users_path: str | Path = "users.json",
        *,
        bcrypt_rounds: int = DEFAULT_ROUNDS,
    ) -> TaskStore:
        """
        Build a store from the two files.

        A missing file leaves that half empty. A malformed one raises StoreIOError.
        """
        store = cls(tasks_path, users_path, bcrypt_rounds=bcrypt_rounds)

        raw_lists = cls._read_json_array(store._tasks_path)
        if raw_lists is not None:
            for i, raw in enumerate(raw_lists):
                try:
                    task_list = TaskList.from_dict(raw)
                except (KeyError, TypeError, ValueError) as e:
                    raise StoreIOError(
                        f"Malformed task list #{i} in {store._tasks_path}: {e!r}", store._tasks_path
                    ) from e
                if task_list.username in store._task_lists:
                    logger.warning(
                        "Duplicate task list for user=%s in %s; keeping the first one",
                        task_list.username,
                        store._tasks_path,
                    )
                    continue
                store._task_lists[task_list.username] = task_list

        raw_users = cls._read_json_array(store._users_path)
        if raw_users is not None:
            for i, raw in enumerate(raw_users):
                try:
                    user = User.from_dict(raw)
                except (KeyError, TypeError, ValueError) as e:
                    raise StoreIOError(
                        f"Malformed user #{i} in {store._users_path}: {e!r}", store._users_path
                    ) from e
                store._users[user.username] = user

        logger.info(
            "TaskStore loaded tasks=%s users=%s lists=%d accounts=%d",
            store._tasks_path,
            store._users_path,
            len(store._task_lists),
            len(store._users),
        )
        return store
