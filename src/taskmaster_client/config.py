# src/taskmaster_client/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- No secrets required at import time.
- Local state (token file, logs) lives under a gitignored data dir.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TASKMASTER"

DEFAULT_API_URL = "http://localhost:5000/api"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


# A local .env never overrides variables already set in the environment.
load_dotenv(override=False)


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_float(name: str, default: float | None) -> float | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Remote API ----
    api_url: str
    # None => no client-side timeout (a slow request just delays the view update).
    http_timeout_seconds: float | None

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    token_path: Path

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "TaskMaster").strip() or "TaskMaster"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        api_url = _env(_k("API_URL"), DEFAULT_API_URL).strip() or DEFAULT_API_URL
        api_url = api_url.rstrip("/")

        timeout = _env_float(_k("HTTP_TIMEOUT_SECONDS"), None)
        if timeout is not None and timeout <= 0:
            timeout = None

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/taskmaster"))
        token_path = _env_path(_k("TOKEN_PATH"), data_dir / "session.json")

        return Settings(
            app_name=app_name,
            log_level=log_level,
            api_url=api_url,
            http_timeout_seconds=timeout,
            data_dir=data_dir,
            token_path=token_path,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
