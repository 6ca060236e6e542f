# src/taskwiz/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, runs the interactive session in the
main thread and turns its result into the process exit status.
"""

from __future__ import annotations

import contextlib
import logging
import sys

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..console.session import run_console_session
from ..core.state import AppState
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def _shutdown(state: AppState) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    # TaskStore uses short-lived sqlite connections per call; close() is a no-op hook.
    try:
        close = getattr(state.task_store, "close", None)
        if close is not None:
            close()
    except Exception:
        logger.debug("Task store close failed.", exc_info=True)


def run() -> int:
    settings = get_settings()

    # Undecodable bytes on stdin become U+FFFD instead of aborting the read.
    with contextlib.suppress(AttributeError):
        sys.stdin.reconfigure(errors="replace")

    level_name = str(getattr(settings, "log_level", "WARNING")).upper()
    console_level = getattr(logging, level_name, logging.WARNING)
    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)

    state = create_initial_state(settings=settings)
    try:
        return run_console_session(state)
    finally:
        _shutdown(state)
        logger.info("Bye.")


def main() -> None:
    raise SystemExit(run())


if __name__ == "__main__":
    main()
