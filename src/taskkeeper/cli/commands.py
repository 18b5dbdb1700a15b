# src/taskkeeper/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from ..core.state import AppState
from ..tasks.task_store import StoreIOError

Prompt = Callable[[str], str]

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CommandResult:
    text: str | None = None
    exit: bool = False


CommandHandler = Callable[[AppState, Prompt], CommandResult]


class CommandRegistry:
    """Numbered menu registry used by the console connector (1 = view, 2 = add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        key: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, choice: str, prompt: Prompt) -> CommandResult:
        """Run the handler for a menu choice like "2"; unknown choices are reported, not raised."""
        handler = self._handlers.get(choice.strip().lower())
        if handler is None:
            logger.debug("Unknown menu choice %r", choice)
            return CommandResult("Invalid choice, please try again.")
        return handler(state, prompt)

    def build_menu(self) -> str:
        lines = ["Menu:"]
        for key, help_text in self._help.items():
            lines.append(f"{key}. {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def parse_task_id(raw: str) -> int | None:
    """Parse a task id typed by the user; None if it is not a positive integer."""
    try:
        task_id = int(raw.strip())
    except ValueError:
        return None
    return task_id if task_id >= 1 else None


def _ask_task_id(prompt: Prompt, question: str) -> tuple[int | None, str]:
    raw = prompt(question)
    return parse_task_id(raw), raw.strip()


def _not_found(task_id: int) -> CommandResult:
    return CommandResult(f"Task {task_id} not found.")


def cmd_view(state: AppState, prompt: Prompt) -> CommandResult:
    return CommandResult(state.store.display(state.require_user()))


def cmd_add(state: AppState, prompt: Prompt) -> CommandResult:
    description = prompt("Enter task description:").strip()
    task = state.store.add_task(state.require_user(), description)
    return CommandResult(f"Task {task.id} added.")


def cmd_remove(state: AppState, prompt: Prompt) -> CommandResult:
    username = state.require_user()
    task_id, raw = _ask_task_id(prompt, "Enter task ID to remove:")
    if task_id is None:
        return CommandResult(f"Invalid task id: {raw}")
    if state.store.get_task(username, task_id) is None:
        return _not_found(task_id)
    state.store.remove_task(username, task_id)
    return CommandResult(f"Task {task_id} removed.")


def cmd_edit(state: AppState, prompt: Prompt) -> CommandResult:
    username = state.require_user()
    task_id, raw = _ask_task_id(prompt, "Enter task ID to edit:")
    if task_id is None:
        return CommandResult(f"Invalid task id: {raw}")
    if state.store.get_task(username, task_id) is None:
        return _not_found(task_id)
    new_description = prompt("Enter new task description:").strip()
    state.store.edit_task(username, task_id, new_description)
    return CommandResult(f"Task {task_id} updated.")


def cmd_complete(state: AppState, prompt: Prompt) -> CommandResult:
    username = state.require_user()
    task_id, raw = _ask_task_id(prompt, "Enter task ID to mark as completed:")
    if task_id is None:
        return CommandResult(f"Invalid task id: {raw}")
    if state.store.get_task(username, task_id) is None:
        return _not_found(task_id)
    state.store.mark_completed(username, task_id)
    return CommandResult(f"Task {task_id} marked as completed.")


def cmd_save_exit(state: AppState, prompt: Prompt) -> CommandResult:
    try:
        state.store.save()
    except StoreIOError as e:
        # Keep the session open so the user can retry.
        return CommandResult(f"Error: could not save data: {e}")
    return CommandResult("Data saved. Exiting...", exit=True)


registry.register("1", cmd_view, help_text="View tasks", aliases=["view", "list"])
registry.register("2", cmd_add, help_text="Add task", aliases=["add"])
registry.register("3", cmd_remove, help_text="Remove task", aliases=["remove", "rm"])
registry.register("4", cmd_edit, help_text="Edit task", aliases=["edit"])
registry.register("5", cmd_complete, help_text="Mark task as completed", aliases=["done"])
registry.register("6", cmd_save_exit, help_text="Save and exit", aliases=["save", "exit"])
