# src/taskmaster_client/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from .ports import TaskMasterApi
from .routing import Router
from .session import SessionStore


@dataclass
class AppState:
    # Settings are kept on the state for easy access in commands/views.
    settings: object

    api: TaskMasterApi
    session: SessionStore
    router: Router
