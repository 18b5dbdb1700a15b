# src/taskkeeper/cli/main.py

"""
CLI entrypoint.

Initializes logging, loads the store into AppState, then runs the
interactive console session in the main thread.
"""

from __future__ import annotations

import logging

from .bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main() -> int:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "WARNING")).upper()
    console_level = getattr(logging, level_name, logging.WARNING)
    setup_logging(log_dir=settings.log_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)

    state = create_initial_state(settings=settings)
    code = run_console_loop(state)

    logger.info("Bye.")
    return code


if __name__ == "__main__":
    raise SystemExit(main())
