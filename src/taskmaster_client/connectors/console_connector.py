# src/taskmaster_client/connectors/console_connector.py

from __future__ import annotations

import getpass
import logging
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..cli.views import render_view
from ..core.ports import ConsoleIO
from ..core.state import AppState

logger = logging.getLogger(__name__)

YES = {"y", "yes"}


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


class TerminalIO:
    """ConsoleIO backed by stdin/stdout (password prompts are not echoed)."""

    def emit(self, text: str) -> None:
        print(text, flush=True)

    def ask(self, prompt: str) -> str:
        return input(prompt)

    def ask_secret(self, prompt: str) -> str:
        return getpass.getpass(prompt)

    def confirm(self, prompt: str) -> bool:
        return input(f"{prompt} [y/N] ").strip().lower() in YES


def _prompt(state: AppState) -> str:
    current = state.router.current
    where = current.path if current is not None else "/"
    return f"{where} >>> "


def run_console_loop(state: AppState, io: ConsoleIO | None = None) -> None:
    io = io or TerminalIO()
    logger.info("Console started (route=%s).", state.router.current)

    app_name = str(getattr(getattr(state, "settings", None), "app_name", "TaskMaster"))
    io.emit(f"[{_ts_local()}] {app_name}. Use /help for commands, /exit to quit.\n")
    io.emit(render_view(state))

    while True:
        try:
            user_input = io.ask(_prompt(state)).strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            io.emit("")
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            response = command_registry.handle(state, user_input, io=io)
        except (EOFError, KeyboardInterrupt):
            # Ctrl+C / Ctrl+D inside a form prompt aborts the command, not the app.
            io.emit("\nCancelled.")
            continue
        except Exception:
            logger.exception("Command handler crashed: %s", user_input.split()[0])
            response = "Internal error while handling a command."

        if response is None:
            response = "Commands start with '/'. Use /help to list them."
        io.emit(response)

    logger.info("Console finished.")
