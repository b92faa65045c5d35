# tests/test_task_form.py

from __future__ import annotations

from datetime import date

import pytest

from taskmaster_client.api.errors import ValidationError
from taskmaster_client.tasks.task_form import TaskForm
from taskmaster_client.tasks.task_models import Priority, Task, TaskPayload


def test_defaults() -> None:
    form = TaskForm()
    assert form.values == {"title": "", "description": "", "priority": "medium", "due_date": ""}
    assert not form.is_edit


def test_prefill_from_existing_task() -> None:
    task = Task(
        id="t1",
        title="Buy milk",
        description="2L",
        priority=Priority.HIGH,
        due_date=date(2026, 10, 20),
    )
    form = TaskForm(task)
    assert form.is_edit
    assert form.values == {
        "title": "Buy milk",
        "description": "2L",
        "priority": "high",
        "due_date": "2026-10-20",
    }


def test_title_is_required() -> None:
    form = TaskForm()
    form.set_field("title", "   ")
    assert form.validate() == ["Title is required."]
    with pytest.raises(ValidationError) as exc_info:
        form.build_payload()
    assert "Title is required." in exc_info.value.errors


def test_bad_priority_and_due_date_are_reported() -> None:
    form = TaskForm()
    form.set_field("title", "x")
    form.set_field("priority", "urgent")
    form.set_field("due_date", "20/10/2026")
    assert len(form.validate()) == 2


def test_unknown_field_raises() -> None:
    with pytest.raises(KeyError):
        TaskForm().set_field("owner", "me")


def test_build_payload() -> None:
    form = TaskForm()
    form.set_field("title", " Buy milk ")
    form.set_field("priority", "HIGH")
    form.set_field("due_date", "2026-10-20")

    payload = form.build_payload()

    assert payload == TaskPayload(
        title="Buy milk", description="", priority=Priority.HIGH, due_date=date(2026, 10, 20)
    )
    assert payload.completed is None


def test_successful_create_resets_the_form() -> None:
    form = TaskForm()
    form.set_field("title", "Buy milk")
    seen: list[TaskPayload] = []

    assert form.submit(lambda p: seen.append(p) or True)

    assert seen[0].title == "Buy milk"
    assert form.values["title"] == ""
    assert not form.submitting


def test_failed_create_keeps_the_fields() -> None:
    form = TaskForm()
    form.set_field("title", "Buy milk")
    assert not form.submit(lambda p: False)
    assert form.get("title") == "Buy milk"


def test_successful_edit_does_not_reset() -> None:
    form = TaskForm(Task(id="t1", title="Old"))
    form.set_field("title", "New")
    assert form.submit(lambda p: True)
    assert form.get("title") == "New"


def test_submit_is_rejected_while_in_flight() -> None:
    form = TaskForm()
    form.set_field("title", "Buy milk")
    nested: list[bool] = []

    def on_submit(payload: TaskPayload) -> bool:
        assert form.submitting
        nested.append(form.submit(lambda p: True))
        return True

    assert form.submit(on_submit)
    assert nested == [False]


def test_submitting_flag_cleared_when_handler_raises() -> None:
    form = TaskForm()
    form.set_field("title", "x")

    def boom(payload: TaskPayload) -> bool:
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        form.submit(boom)
    assert not form.submitting


def test_invalid_form_never_calls_handler() -> None:
    called: list[TaskPayload] = []
    with pytest.raises(ValidationError):
        TaskForm().submit(lambda p: called.append(p) or True)
    assert called == []
