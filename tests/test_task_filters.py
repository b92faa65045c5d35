# tests/test_task_filters.py

from __future__ import annotations

import pytest

from taskmaster_client.tasks.task_filters import count_tasks, filter_tasks
from taskmaster_client.tasks.task_models import Priority, StatusFilter, Task

TASKS = [
    Task(id="1", title="Buy milk", description="Two litres", priority=Priority.HIGH),
    Task(id="2", title="Write report", description="Quarterly MILK numbers", completed=True),
    Task(id="3", title="Call mom", priority=Priority.HIGH, completed=True),
    Task(id="4", title="Gym", description="", priority=Priority.LOW),
]


def ids(tasks: list[Task]) -> list[str]:
    return [t.id for t in tasks]


def test_all_returns_list_unchanged() -> None:
    assert filter_tasks(TASKS, StatusFilter.ALL) == TASKS


@pytest.mark.parametrize(
    ("status", "expected"),
    [
        (StatusFilter.ACTIVE, ["1", "4"]),
        (StatusFilter.COMPLETED, ["2", "3"]),
    ],
)
def test_status_filter_subsets(status: StatusFilter, expected: list[str]) -> None:
    result = filter_tasks(TASKS, status)
    assert ids(result) == expected
    for t in result:
        assert t.completed is (status == StatusFilter.COMPLETED)


def test_search_is_case_insensitive_on_title_and_description() -> None:
    assert ids(filter_tasks(TASKS, query="milk")) == ["1", "2"]
    assert ids(filter_tasks(TASKS, query="MOM")) == ["3"]


def test_search_keeps_padding_in_the_needle() -> None:
    tasks = [Task(id="1", title="milkshake"), Task(id="2", title="buy milk now")]
    assert ids(filter_tasks(tasks, query=" milk")) == ["2"]


@pytest.mark.parametrize("query", ["", "   "])
def test_blank_search_changes_nothing(query: str) -> None:
    assert filter_tasks(TASKS, query=query) == TASKS


def test_search_and_status_combine() -> None:
    assert ids(filter_tasks(TASKS, StatusFilter.ACTIVE, "milk")) == ["1"]
    assert filter_tasks(TASKS, StatusFilter.COMPLETED, "gym") == []


def test_count_tasks() -> None:
    counts = count_tasks(TASKS)
    assert counts.total == 4
    assert counts.active == 2
    assert counts.completed == 2
    # the completed high-priority task is not counted
    assert counts.high_priority == 1


def test_count_tasks_empty() -> None:
    counts = count_tasks([])
    assert (counts.total, counts.active, counts.completed, counts.high_priority) == (0, 0, 0, 0)
