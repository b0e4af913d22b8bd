# src/tasktracker/connectors/http_server.py

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass

import uvicorn

from ..api.app import create_app
from ..core.state import AppState

logger = logging.getLogger(__name__)


@dataclass
class HttpBackgroundRunner:
    thread: threading.Thread
    server: uvicorn.Server

    def stop(self) -> None:
        self.server.should_exit = True

    def join(self, timeout: float | None = None) -> None:
        self.thread.join(timeout=timeout)


def start_http_in_background(state: AppState) -> HttpBackgroundRunner | None:
    """
    Start the HTTP API in a background thread (so the console REPL can run in parallel).

    uvicorn only captures signals on the main thread, so main() owns SIGINT/SIGTERM
    and calls stop() on shutdown.
    """
    settings = state.settings
    if not getattr(settings, "api_enabled", False):
        logger.info("HTTP API disabled, not starting.")
        return None

    config = uvicorn.Config(
        create_app(state),
        host=str(getattr(settings, "api_host", "127.0.0.1")),
        port=int(getattr(settings, "api_port", 5001)),
        log_config=None,
    )
    server = uvicorn.Server(config)

    t = threading.Thread(target=server.run, name="http-api", daemon=True)
    t.start()

    logger.info("HTTP API starting on http://%s:%s", config.host, config.port)
    return HttpBackgroundRunner(thread=t, server=server)
