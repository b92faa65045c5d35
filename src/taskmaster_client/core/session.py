# src/taskmaster_client/core/session.py

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..api.errors import TaskMasterError, friendly_error_message
from ..tasks.task_models import UserProfile
from .ports import AuthApi, TokenStorage

logger = logging.getLogger(__name__)

LOGIN_FAILED = "Login failed."
REGISTER_FAILED = "Registration failed."


@dataclass(frozen=True, slots=True)
class AuthResult:
    success: bool
    error: str | None = None


class SessionStore:
    """
    Process-wide session: bearer token + user profile.

    One instance is created in the composition root and shared by reference.
    logout() resets it to the empty state; the object itself lives for the
    whole process.

    `api` is attached after construction because the HTTP client needs the
    session as its token provider (see cli/bootstrap.py).
    """

    def __init__(self, storage: TokenStorage, api: AuthApi | None = None) -> None:
        self._storage = storage
        self._api = api
        self._token: str | None = None
        self._user: UserProfile | None = None
        # True until initialize() has decided whether a persisted token is valid.
        self.loading = True

    def attach_api(self, api: AuthApi) -> None:
        self._api = api

    @property
    def api(self) -> AuthApi:
        if self._api is None:
            raise RuntimeError("SessionStore has no API client attached.")
        return self._api

    @property
    def token(self) -> str | None:
        return self._token

    @property
    def user(self) -> UserProfile | None:
        return self._user

    @property
    def is_authenticated(self) -> bool:
        return bool(self._token)

    # ---- lifecycle ----

    def initialize(self) -> None:
        """Restore a persisted token and validate it by fetching the profile."""
        self.loading = True
        try:
            try:
                token = self._storage.load()
            except OSError:
                logger.exception("Failed to read persisted token.")
                token = None

            if not token:
                logger.info("No persisted session.")
                return

            self._token = token
            try:
                self._user = self.api.get_profile()
            except TaskMasterError as e:
                logger.info("Persisted token rejected (%s); clearing session.", e)
                self.logout()
                return
            logger.info("Session restored for %s", self._user.email)
        finally:
            self.loading = False

    def login(self, email: str, password: str) -> AuthResult:
        prior_token, prior_user = self._token, self._user

        try:
            token = self.api.login(email, password)
        except TaskMasterError as e:
            logger.info("Login failed for %s: %s", email, e)
            return AuthResult(success=False, error=friendly_error_message(e, LOGIN_FAILED))

        # The profile call reads the token from this store, so it must be set first.
        self._token = token
        try:
            user = self.api.get_profile()
        except TaskMasterError as e:
            logger.info("Profile fetch after login failed for %s: %s", email, e)
            self._token, self._user = prior_token, prior_user
            return AuthResult(success=False, error=friendly_error_message(e, LOGIN_FAILED))

        self._user = user
        try:
            self._storage.save(token)
        except OSError:
            # The in-memory session is still valid; only the restart survival is lost.
            logger.exception("Failed to persist token.")

        logger.info("Logged in as %s", user.email)
        return AuthResult(success=True)

    def register(self, email: str, password: str) -> AuthResult:
        try:
            self.api.register(email, password)
        except TaskMasterError as e:
            logger.info("Registration failed for %s: %s", email, e)
            return AuthResult(success=False, error=friendly_error_message(e, REGISTER_FAILED))
        logger.info("Registered account %s", email)
        return AuthResult(success=True)

    def logout(self) -> None:
        self._token = None
        self._user = None
        try:
            self._storage.clear()
        except OSError:
            logger.exception("Failed to clear persisted token.")
        logger.info("Session cleared.")

    def handle_unauthorized(self) -> None:
        """Server rejected the token on a protected call."""
        logger.warning("Server rejected the session token; logging out.")
        self.logout()
