# tests/test_console.py

from __future__ import annotations

import pytest

from taskmaster_client.cli.bootstrap import create_initial_state
from taskmaster_client.cli.views import render_view
from taskmaster_client.connectors import console_connector
from taskmaster_client.connectors.console_connector import run_console_loop
from taskmaster_client.core.routing import HOME, Route

from .fakes import EMAIL, PASSWORD, ScriptedIO


def test_loop_runs_commands_until_exit(state) -> None:
    state.router.navigate(HOME)
    io = ScriptedIO(answers=["/help", "", "hello", "/exit", "/tasks"])

    run_console_loop(state, io=io)

    assert any("Available commands:" in text for text in io.emitted)
    assert "Commands start with '/'. Use /help to list them." in io.emitted
    # /tasks after /exit is never read
    assert list(io.answers) == ["/tasks"]
    assert io.prompts[0] == "/login >>> "


def test_loop_ends_on_eof(state) -> None:
    run_console_loop(state, io=ScriptedIO())


def test_interrupted_form_cancels_the_command_only(logged_in) -> None:
    logged_in.router.navigate(Route.TASKS)
    # /add reads four answers; the script runs dry after the title.
    io = ScriptedIO(answers=["/add", "Buy milk"])

    run_console_loop(logged_in, io=io)

    assert "\nCancelled." in io.emitted


def test_crashing_handler_is_reported(state, monkeypatch: pytest.MonkeyPatch) -> None:
    def boom(state, line, io=None):
        raise RuntimeError("boom")

    monkeypatch.setattr(console_connector.command_registry, "handle", boom)
    io = ScriptedIO(answers=["/help", "/exit"])

    run_console_loop(state, io=io)

    assert "Internal error while handling a command." in io.emitted


def test_login_through_the_loop(state, server) -> None:
    state.router.navigate(HOME)
    io = ScriptedIO(answers=[f"/login {EMAIL}", "/whoami", "/quit"], secrets=[PASSWORD])

    run_console_loop(state, io=io)

    assert f"Logged in as {EMAIL}" in io.emitted
    assert state.router.current == Route.DASHBOARD


def test_render_view_while_checking(settings, server, storage) -> None:
    st = create_initial_state(settings=settings, storage=storage, api=server)
    assert render_view(st) == "Checking session..."
