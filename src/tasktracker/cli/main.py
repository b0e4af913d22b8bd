# src/tasktracker/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then starts front-ends:
- HTTP API in a background thread (optional),
- console REPL in the main thread (optional).
"""

from __future__ import annotations

import logging
import signal
import threading

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..connectors.http_server import HttpBackgroundRunner, start_http_in_background
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    # keep noisy libs readable
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("openai").setLevel(logging.WARNING)

    logger.info("Starting %s...", settings.app_name)

    state = create_initial_state(settings=settings)

    http_runner: HttpBackgroundRunner | None = start_http_in_background(state)

    # Use an Event so main can wait without a busy while-loop.
    stop_main = threading.Event()

    def _handle_signal(signum, _frame) -> None:
        logger.info("Signal %s received, shutting down...", signum)
        stop_main.set()

    try:
        if settings.console_enabled:
            # The REPL handles Ctrl+C itself (KeyboardInterrupt).
            run_console_loop(state)
            stop_main.set()
        elif http_runner is not None:
            try:
                signal.signal(signal.SIGINT, _handle_signal)
                signal.signal(signal.SIGTERM, _handle_signal)
            except (ValueError, OSError):
                # Some platforms may not support SIGTERM, etc.
                pass
            logger.info("Console disabled. Serving the HTTP API only. Press Ctrl+C to stop.")
            stop_main.wait()
        else:
            logger.warning("Both console and HTTP API are disabled; nothing to do.")
    finally:
        if http_runner is not None:
            http_runner.stop()
            http_runner.join(timeout=10.0)
        logger.info("Bye.")


if __name__ == "__main__":
    main()
