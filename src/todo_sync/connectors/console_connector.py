# src/todo_sync/connectors/console_connector.py

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..core.state import AppState

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


def handle_line(state: AppState, line: str) -> str:
    """One console line -> reply text. Commands run under state.lock."""
    with state.lock:
        try:
            reply = command_registry.handle(state, line)
        except Exception:
            logger.exception("Command handler crashed.")
            reply = "Internal error while handling a command."

    if reply is None:
        return "Commands start with '/'. Use /help to list them."
    return reply


def run_console_loop(state: AppState, *, read_line: Callable[[str], str] = input) -> None:
    logger.info("Console connector started (db=%s).", getattr(state.settings, "tasks_db_path", "?"))
    _print_ts("[CONSOLE] Manage your tasks. Use /help for commands. Use /exit to quit.\n")

    while True:
        try:
            user_input = read_line(">>> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        _print_ts(handle_line(state, user_input))

    logger.info("Console connector finished.")
