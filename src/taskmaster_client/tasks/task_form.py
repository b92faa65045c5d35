# src/taskmaster_client/tasks/task_form.py

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date

from ..api.errors import ValidationError
from .task_models import Priority, Task, TaskPayload

logger = logging.getLogger(__name__)

FIELDS = ("title", "description", "priority", "due_date")

SubmitHandler = Callable[[TaskPayload], bool]


def _defaults() -> dict[str, str]:
    return {"title": "", "description": "", "priority": str(Priority.MEDIUM), "due_date": ""}


class TaskForm:
    """
    Controlled task form.

    Field values are plain strings (what the user typed); they become a typed
    TaskPayload only in build_payload(). The caller owns the network call:
    submit() hands the payload to `on_submit`, which reports success.
    """

    def __init__(self, task: Task | None = None) -> None:
        self.task = task
        self.submitting = False
        self._values = _defaults()
        if task is not None:
            self._values.update(
                title=task.title,
                description=task.description,
                priority=str(task.priority),
                due_date=task.due_date.isoformat() if task.due_date else "",
            )

    @property
    def is_edit(self) -> bool:
        return self.task is not None

    @property
    def values(self) -> dict[str, str]:
        return dict(self._values)

    def get(self, name: str) -> str:
        return self._values[name]

    def set_field(self, name: str, value: str) -> None:
        if name not in self._values:
            raise KeyError(name)
        self._values[name] = value

    def reset(self) -> None:
        self._values = _defaults()

    def validate(self) -> list[str]:
        errors: list[str] = []
        if not self._values["title"].strip():
            errors.append("Title is required.")

        priority = self._values["priority"].strip().lower()
        if priority not in {p.value for p in Priority}:
            errors.append("Priority must be one of: low, medium, high.")

        due = self._values["due_date"].strip()
        if due:
            try:
                date.fromisoformat(due)
            except ValueError:
                errors.append("Due date must look like YYYY-MM-DD.")
        return errors

    def build_payload(self) -> TaskPayload:
        errors = self.validate()
        if errors:
            raise ValidationError(errors)
        due = self._values["due_date"].strip()
        return TaskPayload(
            title=self._values["title"].strip(),
            description=self._values["description"].strip(),
            priority=Priority(self._values["priority"].strip().lower()),
            due_date=date.fromisoformat(due) if due else None,
        )

    def submit(self, on_submit: SubmitHandler) -> bool:
        """
        Validate, then run `on_submit`. A second submit while one is in flight
        is rejected. Raises ValidationError before anything is sent.
        """
        if self.submitting:
            logger.debug("Form submit ignored: a submission is already in flight.")
            return False

        payload = self.build_payload()

        self.submitting = True
        try:
            ok = on_submit(payload)
        finally:
            self.submitting = False

        if ok and not self.is_edit:
            self.reset()
        return ok
