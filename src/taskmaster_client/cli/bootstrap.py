# src/taskmaster_client/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the token store, session, HTTP client and router into AppState.
"""

from __future__ import annotations

import logging

import httpx

from ..api.client import TaskMasterClient
from ..config import get_settings
from ..core.ports import TaskMasterApi, TokenStorage
from ..core.routing import Router
from ..core.session import SessionStore
from ..core.state import AppState
from ..core.token_store import FileTokenStorage

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.token_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(
    *,
    settings=None,
    storage: TokenStorage | None = None,
    api: TaskMasterApi | None = None,
    transport: httpx.BaseTransport | None = None,
) -> AppState:
    """
    Create AppState from the provided settings.

    `storage`, `api` and `transport` are injectable for tests; by default the
    token lives in settings.token_path and requests go to settings.api_url.
    The session is NOT initialized here (see SessionStore.initialize()).
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    session = SessionStore(storage or FileTokenStorage(settings.token_path))

    if api is None:
        api = TaskMasterClient(
            settings.api_url,
            # Read at call time: a cleared session never sends a stale token.
            token_provider=lambda: session.token,
            timeout=getattr(settings, "http_timeout_seconds", None),
            transport=transport,
        )
    session.attach_api(api)

    logger.info("State ready api=%s token_path=%s", settings.api_url, settings.token_path)
    return AppState(
        settings=settings,
        api=api,
        session=session,
        router=Router(session, api),
    )
