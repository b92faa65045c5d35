# src/taskmaster_client/api/errors.py

"""
Error taxonomy shared by the API client, the session store and the views.

- ValidationError: caught at the form level, no request is sent
- AuthenticationError: bad credentials or an expired/invalid token
- ApiError / NetworkError: everything else the server or transport can do
"""

from __future__ import annotations


class TaskMasterError(Exception):
    """Base class for every error this client raises on purpose."""


class ValidationError(TaskMasterError):
    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        super().__init__("; ".join(self.errors) or "Invalid input.")


class MissingTokenError(TaskMasterError):
    """A protected call was attempted without a bearer token (caller error)."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"Not authenticated: {operation} requires a bearer token.")


class NetworkError(TaskMasterError):
    """The request never produced an HTTP response."""


class ApiError(TaskMasterError):
    """Non-success HTTP answer (or an unreadable success body)."""

    def __init__(self, status_code: int | None, message: str | None = None) -> None:
        self.status_code = status_code
        # Server-provided, human-readable message (may be None).
        self.message = message
        text = message or "Unexpected server response."
        if status_code is not None:
            text = f"HTTP {status_code}: {text}"
        super().__init__(text)


class AuthenticationError(ApiError):
    """HTTP 401/403."""


def friendly_error_message(err: Exception, fallback: str) -> str:
    """
    Turn an error into a short status line for the console.

    Server-provided messages win (e.g. "Invalid credentials"); anything else
    collapses to the per-operation fallback.
    """
    if isinstance(err, ValidationError):
        return str(err)
    if isinstance(err, ApiError) and err.message:
        return err.message
    return fallback
