# src/taskmaster_client/cli/views.py

"""Plain-text rendering of the console views (login, register, dashboard, task list)."""

from __future__ import annotations

from datetime import date, datetime

from ..core.routing import Route
from ..core.state import AppState
from ..tasks.dashboard import DashboardController
from ..tasks.task_list import Editing, Row, TaskListController
from ..tasks.task_models import Priority, StatusFilter, UserProfile

RULE = "-" * 60

PRIORITY_LABELS = {
    Priority.LOW: "low",
    Priority.MEDIUM: "medium",
    Priority.HIGH: "HIGH",
}


def _fmt_date(value: date | datetime | None) -> str:
    if value is None:
        return ""
    if isinstance(value, datetime):
        value = value.date()
    return value.strftime("%d/%m/%Y")


def _header(title: str, user: UserProfile | None) -> list[str]:
    who = f"  [{user.email}]" if user else ""
    return [RULE, f" {title}{who}", RULE]


def render_row(index: int, row: Row) -> str:
    task = row.task
    mark = "x" if task.completed else " "
    parts = [f"{index:>3}. [{mark}] {task.title}", f"({PRIORITY_LABELS[task.priority]})"]
    if task.due_date:
        parts.append(f"due {_fmt_date(task.due_date)}")
    if task.created_at:
        parts.append(f"created {_fmt_date(task.created_at)}")
    parts.append(f"id={task.id}")
    line = "  ".join(parts)
    if isinstance(row, Editing):
        line += "  <editing>"
    if task.description:
        line += f"\n       {task.description}"
    return line


def render_filter_bar(controller: TaskListController) -> str:
    tabs = []
    for f in StatusFilter:
        tabs.append(f"[{f.value}]" if f == controller.status_filter else f" {f.value} ")
    search = controller.search_query.strip()
    return f" Filter: {' '.join(tabs)}   Search: {search or '-'}"


def render_task_list(controller: TaskListController, user: UserProfile | None) -> str:
    lines = _header("Tasks", user)
    if controller.error:
        lines.append(f" ! {controller.error}")
    if controller.loading:
        lines.append(" Loading...")
        return "\n".join(lines)

    lines.append(render_filter_bar(controller))
    counts = controller.stats()
    lines.append(
        f" Total: {counts.total}   Active: {counts.active}   Completed: {counts.completed}"
    )
    lines.append(RULE)

    rows = controller.rows()
    if not rows:
        lines.append(f" {controller.empty_message()}")
    else:
        lines.extend(render_row(i, row) for i, row in enumerate(rows, start=1))
    lines.append(RULE)
    lines.append(" /add  /edit N  /done N  /delete N  /filter F  /search TEXT  /dashboard")
    return "\n".join(lines)


def render_dashboard(controller: DashboardController, user: UserProfile | None) -> str:
    lines = _header("Dashboard", user)
    if controller.error:
        lines.append(f" ! {controller.error}")
    if controller.loading:
        lines.append(" Loading...")
        return "\n".join(lines)
    s = controller.stats
    lines.extend(
        [
            f" Total tasks:           {s.total}",
            f" Active:                {s.active}",
            f" Completed:             {s.completed}",
            f" High priority (open):  {s.high_priority}",
            RULE,
            " /tasks to see your tasks, /logout to sign out",
        ]
    )
    return "\n".join(lines)


def render_login() -> str:
    return "\n".join(
        _header("Login", None)
        + [" /login EMAIL      sign in", " /register EMAIL   create an account"]
    )


def render_register() -> str:
    return "\n".join(
        _header("Register", None)
        + [" /register EMAIL   create an account", " /login EMAIL      back to sign in"]
    )


def render_view(state: AppState) -> str:
    router = state.router
    user = state.session.user

    if state.session.loading or router.current is None:
        return "Checking session..."
    if router.current == Route.TASKS and router.task_list is not None:
        return render_task_list(router.task_list, user)
    if router.current == Route.DASHBOARD and router.dashboard is not None:
        return render_dashboard(router.dashboard, user)
    if router.current == Route.REGISTER:
        return render_register()
    return render_login()
