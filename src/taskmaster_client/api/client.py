# src/taskmaster_client/api/client.py

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

import httpx

from ..tasks.task_models import Task, TaskPayload, UserProfile
from .errors import ApiError, AuthenticationError, MissingTokenError, NetworkError

logger = logging.getLogger(__name__)

TokenProvider = Callable[[], str | None]


def _error_message(response: httpx.Response) -> str | None:
    """Server error bodies look like {"error": "..."} (sometimes {"message": "..."})."""
    try:
        data = response.json()
    except ValueError:
        return None
    if isinstance(data, dict):
        for key in ("error", "message"):
            value = data.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
    return None


class TaskMasterClient:
    """
    Thin wrapper around the TaskMaster REST API.

    - auth: login, register, profile
    - tasks: list, create, update-by-id, delete-by-id

    Protected calls read the bearer token from `token_provider` at call time,
    so a cleared session never issues a new authenticated request.
    No retries, no caching.
    """

    def __init__(
        self,
        base_url: str,
        *,
        token_provider: TokenProvider,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._token_provider = token_provider
        self._http = httpx.Client(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )
        logger.debug("TaskMasterClient ready base_url=%s timeout=%s", base_url, timeout)

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> TaskMasterClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ---- low-level helpers ----

    def _auth_headers(self, operation: str) -> dict[str, str]:
        token = self._token_provider()
        if not token:
            raise MissingTokenError(operation)
        return {"Authorization": f"Bearer {token}"}

    def _request(
        self,
        method: str,
        path: str,
        *,
        operation: str,
        protected: bool,
        json: dict[str, Any] | None = None,
    ) -> Any:
        headers = self._auth_headers(operation) if protected else {}
        try:
            response = self._http.request(method, path, json=json, headers=headers)
        except httpx.TransportError as e:
            logger.info("API %s failed: transport error %s", operation, e.__class__.__name__)
            raise NetworkError(f"Could not reach the server ({e.__class__.__name__}).") from e

        logger.debug("API %s -> %s %s: %s", operation, method, path, response.status_code)

        if response.status_code in (401, 403):
            raise AuthenticationError(response.status_code, _error_message(response))
        if response.is_error:
            raise ApiError(response.status_code, _error_message(response))

        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise ApiError(response.status_code, "Server returned a non-JSON body.") from e

    @staticmethod
    def _expect_dict(data: Any, operation: str) -> dict[str, Any]:
        if not isinstance(data, dict):
            raise ApiError(None, f"Malformed {operation} response.")
        return data

    # ---- auth ----

    def login(self, email: str, password: str) -> str:
        data = self._request(
            "POST",
            "/auth/login",
            operation="login",
            protected=False,
            json={"email": email, "password": password},
        )
        token = self._expect_dict(data, "login").get("token")
        if not isinstance(token, str) or not token:
            raise ApiError(None, "Login response did not contain a token.")
        return token

    def register(self, email: str, password: str) -> dict[str, Any]:
        data = self._request(
            "POST",
            "/auth/register",
            operation="register",
            protected=False,
            json={"email": email, "password": password},
        )
        return data if isinstance(data, dict) else {}

    def get_profile(self) -> UserProfile:
        data = self._request("GET", "/auth/profile", operation="get_profile", protected=True)
        try:
            return UserProfile.from_api(self._expect_dict(data, "profile"))
        except ValueError as e:
            raise ApiError(None, f"Malformed profile response: {e}") from e

    # ---- tasks ----

    def list_tasks(self) -> list[Task]:
        data = self._request("GET", "/tasks", operation="list_tasks", protected=True)
        if not isinstance(data, list):
            raise ApiError(None, "Malformed task list response.")
        try:
            return [Task.from_api(item) for item in data]
        except (TypeError, ValueError, AttributeError) as e:
            raise ApiError(None, f"Malformed task in list: {e}") from e

    def create_task(self, payload: TaskPayload) -> Task:
        data = self._request(
            "POST", "/tasks", operation="create_task", protected=True, json=payload.to_api()
        )
        return self._task_from(data, "create_task")

    def update_task(self, task_id: str, payload: TaskPayload) -> Task:
        data = self._request(
            "PUT",
            f"/tasks/{task_id}",
            operation="update_task",
            protected=True,
            json=payload.to_api(),
        )
        return self._task_from(data, "update_task")

    def delete_task(self, task_id: str) -> None:
        self._request("DELETE", f"/tasks/{task_id}", operation="delete_task", protected=True)

    def _task_from(self, data: Any, operation: str) -> Task:
        try:
            return Task.from_api(self._expect_dict(data, operation))
        except ValueError as e:
            raise ApiError(None, f"Malformed {operation} response: {e}") from e
