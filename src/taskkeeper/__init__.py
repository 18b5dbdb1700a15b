"""
taskkeeper: password-protected per-user task lists on the command line.

Usage:
    from taskkeeper import TaskStore

    store = TaskStore.load("tasks.json", "users.json")
    store.register("alice", "secret")
    store.add_task("alice", "buy milk")
    store.save()
"""

from .tasks.task_models import Task, TaskList, User
from .tasks.task_store import StoreIOError, TaskStore, UserAlreadyExistsError

__version__ = "0.1.0"
__all__ = [
    "Task",
    "TaskList",
    "User",
    "TaskStore",
    "StoreIOError",
    "UserAlreadyExistsError",
]
