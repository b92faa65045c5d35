# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from taskmaster_client.cli.bootstrap import create_initial_state
from taskmaster_client.core.state import AppState

from .fakes import EMAIL, PASSWORD, FakeTaskServer, MemoryTokenStorage


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the developer's environment / .env.
    """
    return SimpleNamespace(
        app_name="TaskMaster",
        log_level="INFO",
        api_url="http://test/api",
        http_timeout_seconds=None,
        data_dir=tmp_path / "data",
        token_path=tmp_path / "data" / "session.json",
    )


@pytest.fixture()
def server() -> FakeTaskServer:
    return FakeTaskServer()


@pytest.fixture()
def storage() -> MemoryTokenStorage:
    return MemoryTokenStorage()


@pytest.fixture()
def state(settings: SimpleNamespace, server: FakeTaskServer, storage: MemoryTokenStorage) -> AppState:
    """AppState wired to the in-memory server; session initialized (no saved token)."""
    st = create_initial_state(settings=settings, storage=storage, api=server)
    server.token_provider = lambda: st.session.token
    st.session.initialize()
    return st


@pytest.fixture()
def logged_in(state: AppState) -> AppState:
    result = state.session.login(EMAIL, PASSWORD)
    assert result.success
    return state
