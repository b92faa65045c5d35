# src/taskmaster_client/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import StrEnum
from typing import Any


class Priority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def from_api(cls, raw: Any) -> Priority:
        if not raw:
            return cls.MEDIUM
        try:
            return cls(str(raw).strip().lower())
        except ValueError:
            return cls.MEDIUM


class StatusFilter(StrEnum):
    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"


def parse_due_date(raw: Any) -> date | None:
    """
    Accept "YYYY-MM-DD" or a full ISO datetime ("2026-10-20T00:00:00.000Z").
    Only the calendar date is kept, as the form displays it. Unparseable
    values become None so one odd record does not sink the whole list.
    """
    if raw is None:
        return None
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    s = str(raw).strip()
    if not s:
        return None
    try:
        return date.fromisoformat(s.split("T", 1)[0])
    except ValueError:
        return None


def parse_timestamp(raw: Any) -> datetime | None:
    if not raw:
        return None
    s = str(raw).strip()
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(s)
    except ValueError:
        return None


@dataclass(frozen=True, slots=True)
class TaskPayload:
    """Body sent for create/update. `completed` is only sent when set."""

    title: str
    description: str = ""
    priority: Priority = Priority.MEDIUM
    due_date: date | None = None
    completed: bool | None = None

    def to_api(self) -> dict[str, Any]:
        body: dict[str, Any] = {
            "title": self.title,
            "description": self.description,
            "priority": str(self.priority),
            "dueDate": self.due_date.isoformat() if self.due_date else None,
        }
        if self.completed is not None:
            body["completed"] = self.completed
        return body


@dataclass(frozen=True, slots=True)
class Task:
    id: str
    title: str
    description: str = ""
    priority: Priority = Priority.MEDIUM
    completed: bool = False
    due_date: date | None = None
    created_at: datetime | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Task:
        task_id = data.get("_id", data.get("id"))
        if task_id is None or str(task_id) == "":
            raise ValueError("task without identifier")
        title = str(data.get("title") or "")
        if not title.strip():
            raise ValueError(f"task {task_id} without title")
        return cls(
            id=str(task_id),
            title=title,
            description=str(data.get("description") or ""),
            priority=Priority.from_api(data.get("priority")),
            completed=bool(data.get("completed", False)),
            due_date=parse_due_date(data.get("dueDate")),
            created_at=parse_timestamp(data.get("createdAt")),
        )

    def to_payload(self, *, completed: bool | None = None) -> TaskPayload:
        """Full record as an update body; `completed` overrides the current flag."""
        return TaskPayload(
            title=self.title,
            description=self.description,
            priority=self.priority,
            due_date=self.due_date,
            completed=self.completed if completed is None else completed,
        )


@dataclass(frozen=True, slots=True)
class UserProfile:
    email: str
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> UserProfile:
        email = data.get("email")
        if not email:
            raise ValueError("profile without email")
        extra = {k: v for k, v in data.items() if k != "email"}
        return cls(email=str(email), extra=extra)
