# tests/fakes.py

from __future__ import annotations

import itertools
from collections import deque
from collections.abc import Callable, Iterable
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any

from taskmaster_client.api.errors import ApiError, AuthenticationError, MissingTokenError
from taskmaster_client.tasks.task_models import Task, TaskPayload, UserProfile

EMAIL = "user@example.com"
PASSWORD = "secret123"

CREATED_AT = datetime(2026, 10, 18, 9, 30, tzinfo=timezone.utc)


class FakeTaskServer:
    """
    In-memory stand-in for the REST API (implements the TaskMasterApi port).

    - Captures calls for assertions
    - Enforces bearer tokens like the real server (401 on unknown token)
    - `fail(op, exc)` makes the next call to `op` raise `exc`
    """

    def __init__(self, users: dict[str, str] | None = None) -> None:
        self.users: dict[str, str] = dict(users or {EMAIL: PASSWORD})
        self.tokens: dict[str, str] = {}
        self.tasks: dict[str, list[Task]] = {}
        self.calls: list[str] = []
        self.updates: list[tuple[str, TaskPayload]] = []
        self.token_provider: Callable[[], str | None] = lambda: None
        self._failures: dict[str, Exception] = {}
        self._ids = itertools.count(1)
        self.closed = False

    # ---- test helpers ----

    def fail(self, op: str, exc: Exception) -> None:
        self._failures[op] = exc

    def revoke_all(self) -> None:
        self.tokens.clear()

    def seed(self, email: str, tasks: Iterable[Task]) -> None:
        self.tasks.setdefault(email, []).extend(tasks)

    def _enter(self, op: str) -> None:
        self.calls.append(op)
        exc = self._failures.pop(op, None)
        if exc is not None:
            raise exc

    def _current_email(self, op: str) -> str:
        token = self.token_provider()
        if not token:
            raise MissingTokenError(op)
        email = self.tokens.get(token)
        if email is None:
            raise AuthenticationError(401, "Invalid token")
        return email

    def _find(self, email: str, task_id: str) -> int:
        for i, t in enumerate(self.tasks.get(email, [])):
            if t.id == task_id:
                return i
        raise ApiError(404, "Task not found")

    # ---- auth ----

    def login(self, email: str, password: str) -> str:
        self._enter("login")
        if self.users.get(email) != password:
            raise AuthenticationError(401, "Invalid credentials")
        token = f"tok-{next(self._ids)}"
        self.tokens[token] = email
        return token

    def register(self, email: str, password: str) -> dict[str, Any]:
        self._enter("register")
        if email in self.users:
            raise ApiError(400, "User already exists")
        self.users[email] = password
        return {"message": "User created"}

    def get_profile(self) -> UserProfile:
        self._enter("get_profile")
        return UserProfile(email=self._current_email("get_profile"))

    # ---- tasks ----

    def list_tasks(self) -> list[Task]:
        self._enter("list_tasks")
        return list(self.tasks.get(self._current_email("list_tasks"), []))

    def create_task(self, payload: TaskPayload) -> Task:
        self._enter("create_task")
        email = self._current_email("create_task")
        task = Task(
            id=f"t{next(self._ids)}",
            title=payload.title,
            description=payload.description,
            priority=payload.priority,
            completed=bool(payload.completed),
            due_date=payload.due_date,
            created_at=CREATED_AT,
        )
        self.tasks.setdefault(email, []).append(task)
        return task

    def update_task(self, task_id: str, payload: TaskPayload) -> Task:
        self._enter("update_task")
        email = self._current_email("update_task")
        idx = self._find(email, task_id)
        self.updates.append((task_id, payload))
        current = self.tasks[email][idx]
        updated = replace(
            current,
            title=payload.title,
            description=payload.description,
            priority=payload.priority,
            due_date=payload.due_date,
            completed=current.completed if payload.completed is None else payload.completed,
        )
        self.tasks[email][idx] = updated
        return updated

    def delete_task(self, task_id: str) -> None:
        self._enter("delete_task")
        email = self._current_email("delete_task")
        idx = self._find(email, task_id)
        del self.tasks[email][idx]

    def close(self) -> None:
        self.closed = True


class MemoryTokenStorage:
    """TokenStorage kept in memory; survives "reloads" as long as the object does."""

    def __init__(self, token: str | None = None) -> None:
        self.token = token

    def load(self) -> str | None:
        return self.token

    def save(self, token: str) -> None:
        self.token = token

    def clear(self) -> None:
        self.token = None


class ScriptedIO:
    """
    ConsoleIO fed from scripted answers.

    Raises EOFError when the script runs out (like stdin at end of file).
    """

    def __init__(
        self,
        answers: Iterable[str] = (),
        secrets: Iterable[str] = (),
        confirms: Iterable[bool] = (),
    ) -> None:
        self.answers = deque(answers)
        self.secrets = deque(secrets)
        self.confirms = deque(confirms)
        self.emitted: list[str] = []
        self.prompts: list[str] = []

    def emit(self, text: str) -> None:
        self.emitted.append(text)

    def ask(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.answers:
            raise EOFError
        return self.answers.popleft()

    def ask_secret(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.secrets:
            raise EOFError
        return self.secrets.popleft()

    def confirm(self, prompt: str) -> bool:
        self.prompts.append(prompt)
        if not self.confirms:
            return False
        return self.confirms.popleft()
