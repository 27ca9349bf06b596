# src/todo_sync/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, runs one sync pass (optional),
then starts the console REPL in the main thread.
"""

from __future__ import annotations

import logging

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..core.state import AppState
from ..logging_setup import setup_logging
from ..tasks.task_api import run_sync

logger = logging.getLogger(__name__)


def _shutdown(state: AppState) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    try:
        close = getattr(state.remote, "close", None)
        if callable(close):
            close()
    except Exception:
        logger.debug("Remote client close failed.", exc_info=True)

    # TaskStore uses short-lived sqlite connections per call; no explicit close required.


def main() -> None:
    settings = get_settings()

    log_file = setup_logging(settings)

    logger.info("Starting %s... (log: %s)", settings.app_name, log_file)

    state = create_initial_state(settings=settings)

    try:
        if settings.sync_on_start:
            with state.lock:
                run_sync(state)
        run_console_loop(state)
    finally:
        _shutdown(state)
        logger.info("Bye.")


if __name__ == "__main__":
    main()
