# src/taskkeeper/connectors/console_connector.py

from __future__ import annotations

import getpass
import logging
from collections.abc import Callable

from ..cli.commands import registry as command_registry
from ..core.state import AppState
from ..tasks.task_store import UserAlreadyExistsError

logger = logging.getLogger(__name__)

Ask = Callable[[str], str]
Emit = Callable[[str], None]


class _SessionEnded(Exception):
    """Input stream closed (EOF / Ctrl+C)."""


def _guard(ask: Ask) -> Ask:
    def _ask(question: str) -> str:
        try:
            return ask(question)
        except (EOFError, KeyboardInterrupt) as e:
            raise _SessionEnded() from e

    return _ask


def _register_flow(state: AppState, ask: Ask, ask_secret: Ask, emit: Emit) -> None:
    username = ask("Enter username for new user: ").strip()
    password = ask_secret("Enter password: ").strip()
    try:
        state.store.register(username, password)
    except UserAlreadyExistsError as e:
        emit(f"Error: {e}")
        return
    emit("User successfully registered!")


def _login_flow(state: AppState, ask: Ask, ask_secret: Ask, emit: Emit) -> bool:
    username = ask("Enter username: ").strip()
    password = ask_secret("Enter password: ").strip()
    if not state.store.authenticate(username, password):
        emit("Authentication failed.")
        return False
    state.username = username
    emit("Authentication successful!")
    return True


def run_console_loop(
    state: AppState,
    *,
    ask: Ask | None = None,
    ask_secret: Ask | None = None,
    emit: Emit | None = None,
) -> int:
    """
    Interactive session: optional registration, login, then the task menu.

    Returns a process exit code: 0 after a normal session, 1 when login fails.
    Ending input (EOF / Ctrl+C) leaves without saving.
    """
    ask = _guard(ask or input)
    ask_secret = _guard(ask_secret or getpass.getpass)
    emit = emit or print

    logger.info("Console session started.")

    if state.load_error:
        emit(f"Warning: could not load saved data ({state.load_error}). Starting with an empty store.")

    try:
        choice = ask("Enter 1 to register a new user or anything else to log in: ").strip()
        if choice == "1":
            _register_flow(state, ask, ask_secret, emit)

        if not _login_flow(state, ask, ask_secret, emit):
            return 1

        while True:
            emit("\n" + command_registry.build_menu())
            choice = ask("> ")
            try:
                result = command_registry.handle(state, choice, ask)
            except _SessionEnded:
                raise
            except Exception:
                logger.exception("Menu command crashed (choice=%r).", choice)
                emit("Internal error while handling the command.")
                continue

            if result.text:
                emit(result.text)
            if result.exit:
                break

    except _SessionEnded:
        logger.info("Console input closed, exiting without saving.")
        emit("")
        return 0

    logger.info("Console session finished.")
    return 0
