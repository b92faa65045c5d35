# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Do NOT commit tokens. The saved session lives under TASKMASTER_DATA_DIR, which is gitignored.

This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "TASKMASTER_APP_NAME": "App display name (default: TaskMaster).",
    "TASKMASTER_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    # Remote API
    "TASKMASTER_API_URL": "Base URL of the REST API (default: http://localhost:5000/api).",
    "TASKMASTER_HTTP_TIMEOUT_SECONDS": "Per-request timeout; unset or <= 0 means no timeout.",
    # Paths (gitignored)
    "TASKMASTER_DATA_DIR": "Local data directory for logs and the session (default: .local/taskmaster).",
    "TASKMASTER_TOKEN_PATH": "Saved bearer token JSON file (default: <data_dir>/session.json).",
}
