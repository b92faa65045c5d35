# src/taskmaster_client/core/ports.py

"""
Ports (interfaces) used by the core.

Session, controllers and commands depend on Protocols instead of the concrete
httpx client / token file / terminal. Tests plug in-memory fakes into the same seams.
"""

from __future__ import annotations

from typing import Any, Protocol

from ..tasks.task_models import Task, TaskPayload, UserProfile


class AuthApi(Protocol):
    def login(self, email: str, password: str) -> str: ...
    def register(self, email: str, password: str) -> dict[str, Any]: ...
    def get_profile(self) -> UserProfile: ...


class TaskApi(Protocol):
    def list_tasks(self) -> list[Task]: ...
    def create_task(self, payload: TaskPayload) -> Task: ...
    def update_task(self, task_id: str, payload: TaskPayload) -> Task: ...
    def delete_task(self, task_id: str) -> None: ...


class TaskMasterApi(AuthApi, TaskApi, Protocol):
    def close(self) -> None: ...


class TokenStorage(Protocol):
    """Durable storage holding exactly one key: the bearer token."""

    def load(self) -> str | None: ...
    def save(self, token: str) -> None: ...
    def clear(self) -> None: ...


class ConsoleIO(Protocol):
    """
    Terminal-side port used by interactive commands (forms, confirmations).

    Implementations: the real stdin/stdout console and a scripted fake in tests.
    """

    def emit(self, text: str) -> None: ...
    def ask(self, prompt: str) -> str: ...
    def ask_secret(self, prompt: str) -> str: ...
    def confirm(self, prompt: str) -> bool: ...
