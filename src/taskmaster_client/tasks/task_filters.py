# src/taskmaster_client/tasks/task_filters.py

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from .task_models import Priority, StatusFilter, Task


def matches_status(task: Task, status: StatusFilter) -> bool:
    if status == StatusFilter.ACTIVE:
        return not task.completed
    if status == StatusFilter.COMPLETED:
        return task.completed
    return True


def matches_query(task: Task, query: str) -> bool:
    """Case-insensitive substring match on title or description."""
    if not query.strip():
        return True
    # Padding is part of the needle; only a blank query disables the search.
    needle = query.lower()
    return needle in task.title.lower() or needle in task.description.lower()


def filter_tasks(
    tasks: Iterable[Task],
    status: StatusFilter = StatusFilter.ALL,
    query: str = "",
) -> list[Task]:
    """Status filter + search, preserving the input order."""
    return [t for t in tasks if matches_status(t, status) and matches_query(t, query)]


@dataclass(frozen=True, slots=True)
class TaskCounts:
    total: int = 0
    active: int = 0
    completed: int = 0
    high_priority: int = 0


def count_tasks(tasks: Iterable[Task]) -> TaskCounts:
    """`high_priority` counts open high-priority tasks only."""
    total = active = completed = high = 0
    for t in tasks:
        total += 1
        if t.completed:
            completed += 1
        else:
            active += 1
            if t.priority == Priority.HIGH:
                high += 1
    return TaskCounts(total=total, active=active, completed=completed, high_priority=high)
