# src/taskmaster_client/tasks/dashboard.py

from __future__ import annotations

import logging

from ..api.errors import AuthenticationError, TaskMasterError
from ..core.ports import TaskApi
from ..core.session import SessionStore
from .task_filters import TaskCounts, count_tasks

logger = logging.getLogger(__name__)

STATS_FAILED = "Failed to load statistics."


class DashboardController:
    """Aggregate counts over the user's tasks (fetched once per mount)."""

    def __init__(self, api: TaskApi, session: SessionStore) -> None:
        self._api = api
        self._session = session
        self.stats = TaskCounts()
        self.loading = False
        self.error = ""

    def load(self) -> bool:
        self.loading = True
        try:
            tasks = self._api.list_tasks()
        except TaskMasterError as e:
            logger.info("%s (%s)", STATS_FAILED, e)
            if isinstance(e, AuthenticationError):
                self._session.handle_unauthorized()
            self.error = STATS_FAILED
            return False
        finally:
            self.loading = False

        self.stats = count_tasks(tasks)
        self.error = ""
        return True
