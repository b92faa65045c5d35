# src/taskmaster_client/logging_setup.py

"""
Logging for the terminal client.

stderr shares the terminal with the rendered views, so it only carries the
client's own records (and third-party failures). The log file under the data
dir gets everything, timestamped.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FILE_NAME = "taskmaster.log"
PACKAGE_LOGGER = "taskmaster_client"

FILE_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
CONSOLE_FORMAT = "%(levelname)s %(name)s: %(message)s"


class _ClientOnlyFilter(logging.Filter):
    """Pass the client's records; httpx/httpcore and py.warnings only at ERROR+."""

    def __init__(self, prefix: str = PACKAGE_LOGGER) -> None:
        super().__init__()
        self._prefix = prefix + "."

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name.startswith(self._prefix):
            return True
        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path = ".local/taskmaster",
    console_level: int = logging.WARNING,
    file_level: int = logging.DEBUG,
) -> Path:
    """Install the stderr + file handlers on the root logger; returns the log file path."""
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    # Re-running main() in one process must not double every line.
    for handler in list(root.handlers):
        root.removeHandler(handler)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    console.addFilter(_ClientOnlyFilter())
    root.addHandler(console)

    file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
    file_handler.setLevel(file_level)
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    root.addHandler(file_handler)

    logging.captureWarnings(True)
    return log_file
