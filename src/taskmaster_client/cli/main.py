# src/taskmaster_client/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, restores the saved session, then runs
the console REPL in the main thread.
"""

from __future__ import annotations

import logging

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..core.routing import HOME
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    logger.info("Starting %s (api=%s)...", settings.app_name, settings.api_url)

    state = create_initial_state(settings=settings)
    try:
        state.session.initialize()
        state.router.navigate(HOME)
        run_console_loop(state)
    finally:
        try:
            state.api.close()
        except Exception:
            logger.debug("HTTP client close failed.", exc_info=True)
        logger.info("Bye.")


if __name__ == "__main__":
    main()
