# src/taskmaster_client/core/token_store.py

from __future__ import annotations

import contextlib
import json
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

TOKEN_KEY = "token"


class FileTokenStorage:
    """
    Bearer token persisted as {"token": "..."} in a private JSON file.

    - writes are atomic (0600 tmp file + os.replace)
    - an unreadable/corrupt file counts as "no token"
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> str | None:
        if not self._path.exists():
            return None
        try:
            data = json.loads(self._path.read_text("utf-8"))
        except (OSError, ValueError):
            logger.warning("Token file %s is unreadable; ignoring it.", self._path)
            return None
        if not isinstance(data, dict):
            return None
        token = data.get(TOKEN_KEY)
        if not isinstance(token, str) or not token.strip():
            return None
        return token

    def save(self, token: str) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(".tmp")
        # The token is a credential: the temp file is created private, never reused.
        with contextlib.suppress(FileNotFoundError):
            tmp.unlink()
        fd = os.open(tmp, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o600)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump({TOKEN_KEY: token}, f)
            os.replace(tmp, self._path)
        except BaseException:
            with contextlib.suppress(OSError):
                tmp.unlink()
            raise
        logger.debug("Token saved to %s", self._path)

    def clear(self) -> None:
        with contextlib.suppress(FileNotFoundError):
            self._path.unlink()
            logger.debug("Token removed from %s", self._path)
