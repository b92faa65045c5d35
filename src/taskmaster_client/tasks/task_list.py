# src/taskmaster_client/tasks/task_list.py

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from ..api.errors import AuthenticationError, TaskMasterError
from ..core.ports import TaskApi
from ..core.session import SessionStore
from .task_filters import TaskCounts, count_tasks, filter_tasks
from .task_models import StatusFilter, Task, TaskPayload

logger = logging.getLogger(__name__)

LOAD_FAILED = "Failed to load tasks."
ADD_FAILED = "Failed to add task."
UPDATE_FAILED = "Failed to update task."
DELETE_FAILED = "Failed to delete task."
SESSION_EXPIRED = "Your session has expired. Please log in again."

DELETE_PROMPT = "Are you sure you want to delete this task?"

Confirm = Callable[[str], bool]


@dataclass(frozen=True, slots=True)
class Viewing:
    task: Task


@dataclass(frozen=True, slots=True)
class Editing:
    task: Task


Row = Viewing | Editing


class TaskListController:
    """
    Owns the in-memory task list of the current user plus the filtered view.

    Every successful mutation re-fetches the whole list instead of patching it
    locally. Failures never raise: they set `error` and return False.
    """

    def __init__(self, api: TaskApi, session: SessionStore) -> None:
        self._api = api
        self._session = session

        self.tasks: list[Task] = []
        self.status_filter = StatusFilter.ALL
        self.search_query = ""
        self.editing_id: str | None = None
        self.show_form = False
        self.loading = False
        self.error = ""

    # ---- derived state ----

    @property
    def visible_tasks(self) -> list[Task]:
        return filter_tasks(self.tasks, self.status_filter, self.search_query)

    def rows(self) -> list[Row]:
        return [
            Editing(t) if t.id == self.editing_id else Viewing(t) for t in self.visible_tasks
        ]

    def stats(self) -> TaskCounts:
        return count_tasks(self.tasks)

    def empty_message(self) -> str:
        if self.search_query.strip() or self.status_filter != StatusFilter.ALL:
            return "No tasks found."
        return "No tasks yet. Start by adding one!"

    def get_task(self, task_id: str) -> Task | None:
        for t in self.tasks:
            if t.id == task_id:
                return t
        return None

    # ---- search / filter bar ----

    def set_filter(self, status: StatusFilter) -> None:
        self.status_filter = status

    def set_search(self, text: str) -> None:
        self.search_query = text

    # ---- edit state ----

    def begin_edit(self, task_id: str) -> Task | None:
        """Start editing `task_id`; any other edit in progress is dropped."""
        task = self.get_task(task_id)
        if task is None:
            return None
        if self.editing_id and self.editing_id != task_id:
            logger.debug("Edit of %s replaced by %s", self.editing_id, task_id)
        self.editing_id = task_id
        return task

    def cancel_edit(self) -> None:
        self.editing_id = None

    # ---- server round-trips ----

    def _fail(self, exc: TaskMasterError, message: str) -> bool:
        if isinstance(exc, AuthenticationError):
            self._session.handle_unauthorized()
            self.error = SESSION_EXPIRED
        else:
            self.error = message
        logger.info("%s (%s)", message, exc)
        return False

    def _fetch(self) -> None:
        self.tasks = self._api.list_tasks()

    def load(self) -> bool:
        self.loading = True
        try:
            self._fetch()
        except TaskMasterError as e:
            return self._fail(e, LOAD_FAILED)
        finally:
            self.loading = False
        self.error = ""
        logger.debug("Loaded %d tasks", len(self.tasks))
        return True

    def create(self, payload: TaskPayload) -> bool:
        try:
            created = self._api.create_task(payload)
            self._fetch()
        except TaskMasterError as e:
            return self._fail(e, ADD_FAILED)
        logger.info("Created task %s", created.id)
        self.show_form = False
        self.error = ""
        return True

    def update(self, task_id: str, payload: TaskPayload) -> bool:
        try:
            self._api.update_task(task_id, payload)
            self._fetch()
        except TaskMasterError as e:
            return self._fail(e, UPDATE_FAILED)
        logger.info("Updated task %s", task_id)
        self.editing_id = None
        self.error = ""
        return True

    def toggle_complete(self, task: Task) -> bool:
        try:
            self._api.update_task(task.id, task.to_payload(completed=not task.completed))
            self._fetch()
        except TaskMasterError as e:
            return self._fail(e, UPDATE_FAILED)
        logger.info("Task %s completed=%s", task.id, not task.completed)
        self.error = ""
        return True

    def delete(self, task_id: str, confirm: Confirm) -> bool:
        if not confirm(DELETE_PROMPT):
            logger.debug("Delete of %s cancelled by user", task_id)
            return False
        try:
            self._api.delete_task(task_id)
            self._fetch()
        except TaskMasterError as e:
            return self._fail(e, DELETE_FAILED)
        logger.info("Deleted task %s", task_id)
        if self.editing_id == task_id:
            self.editing_id = None
        self.error = ""
        return True
