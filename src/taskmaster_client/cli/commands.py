# src/taskmaster_client/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import cast

from ..api.errors import ValidationError
from ..core.ports import ConsoleIO
from ..core.routing import Route, parse_route
from ..core.state import AppState
from ..tasks.task_form import TaskForm
from ..tasks.task_list import TaskListController
from ..tasks.task_models import Priority, StatusFilter, Task
from .views import render_view

CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], ConsoleIO | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)

CANCEL = "/cancel"


@dataclass(frozen=True, slots=True)
class Command:
    name: str
    handler: CommandHandler
    help_text: str
    aliases: tuple[str, ...] = ()
    # Handlers that prompt (forms, passwords, confirmations) declare a third `io` parameter.
    takes_io: bool = False


def _takes_io(handler: CommandHandler) -> bool:
    try:
        return len(inspect.signature(handler).parameters) >= 3
    except (TypeError, ValueError):
        return True


class CommandRegistry:
    """Console slash commands, looked up by name or alias."""

    def __init__(self) -> None:
        self._commands: dict[str, Command] = {}
        self._lookup: dict[str, Command] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        command = Command(
            name=name.lower(),
            handler=handler,
            help_text=help_text,
            aliases=tuple(a.lower() for a in aliases or ()),
            takes_io=_takes_io(handler),
        )
        self._commands[command.name] = command
        for key in (command.name, *command.aliases):
            self._lookup[key] = command

    def handle(self, state: AppState, line: str, io: ConsoleIO | None = None) -> str | None:
        """Run "/name args..."; None means the line is not a slash command."""
        if not line.startswith("/"):
            return None

        head, *rest = line[1:].split(maxsplit=1) or [""]
        if not head:
            return "Empty command. Use /help to list available commands."

        command = self._lookup.get(head.lower())
        if command is None:
            return f"Unknown command: /{head.lower()}. Use /help to list available commands."

        args = rest[0].split() if rest else []
        if command.takes_io:
            return cast(CommandHandler3, command.handler)(state, args, io)
        return cast(CommandHandler2, command.handler)(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for command in self._commands.values():
            also = ""
            if command.aliases:
                also = " (also " + ", ".join(f"/{a}" for a in command.aliases) + ")"
            lines.append(f"  /{command.name} - {command.help_text}{also}")
        lines.append("  /exit - Quit. (also /quit)")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- helpers ----


def _need_io(io: ConsoleIO | None) -> ConsoleIO:
    if io is None:
        raise RuntimeError("This command needs an interactive console.")
    return io


def _task_list(state: AppState) -> TaskListController | None:
    router = state.router
    if router.current != Route.TASKS:
        return None
    return router.task_list


NO_TASK_LIST = "Open the task list first (/tasks)."


def resolve_task(controller: TaskListController, ref: str) -> Task | None:
    """
    A task reference is either the 1-based row number in the visible list,
    or an identifier (exact, or a unique prefix).
    """
    ref = ref.strip()
    if not ref:
        return None
    if ref.isdigit():
        idx = int(ref)
        visible = controller.visible_tasks
        if 1 <= idx <= len(visible):
            return visible[idx - 1]
    exact = controller.get_task(ref)
    if exact is not None:
        return exact
    matches = [t for t in controller.tasks if t.id.startswith(ref)]
    return matches[0] if len(matches) == 1 else None


def _after_change(state: AppState, controller: TaskListController, ok: bool) -> str:
    """Status line + view after a mutation; a lost session lands on the login view."""
    if not state.session.is_authenticated:
        state.router.refresh()
        return f"{controller.error}\n{render_view(state)}"
    if not ok:
        return f"{controller.error}\n{render_view(state)}"
    return render_view(state)


def _ask_field(io: ConsoleIO, label: str, current: str) -> str | None:
    """Returns None when the user cancels the form."""
    hint = f" [{current}]" if current else ""
    raw = io.ask(f"{label}{hint}: ").strip()
    if raw == CANCEL:
        return None
    return raw


def fill_form(form: TaskForm, io: ConsoleIO) -> bool:
    """
    Prompt for every field. Enter keeps the shown value; "-" clears an
    optional field. Returns False if the user typed /cancel.
    """
    prompts = (
        ("title", "Title *"),
        ("description", "Description"),
        ("priority", "Priority (" + "/".join(p.value for p in Priority) + ")"),
        ("due_date", "Due date (YYYY-MM-DD)"),
    )
    for name, label in prompts:
        answer = _ask_field(io, label, form.get(name))
        if answer is None:
            return False
        if answer == "-" and name in ("description", "due_date"):
            form.set_field(name, "")
        elif answer:
            form.set_field(name, answer)
    return True


def _ask_credentials(args: list[str], io: ConsoleIO) -> tuple[str, str] | None:
    email = args[0] if args else io.ask("Email: ").strip()
    password = io.ask_secret("Password: ")
    if not email or not password:
        return None
    return email, password


# ---- commands ----


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_login(state: AppState, args: list[str], io: ConsoleIO | None = None) -> str:
    session = state.session
    if session.is_authenticated:
        email = session.user.email if session.user else "?"
        return f"Already logged in as {email}. Use /logout first."

    creds = _ask_credentials(args, _need_io(io))
    if creds is None:
        return "Email and password are required."

    result = session.login(*creds)
    if not result.success:
        return f"Login failed: {result.error}"

    state.router.navigate(Route.DASHBOARD)
    return render_view(state)


def cmd_register(state: AppState, args: list[str], io: ConsoleIO | None = None) -> str:
    if state.session.is_authenticated:
        return "You are logged in. Use /logout before creating another account."

    creds = _ask_credentials(args, _need_io(io))
    if creds is None:
        return "Email and password are required."

    result = state.session.register(*creds)
    if not result.success:
        return f"Registration failed: {result.error}"

    state.router.navigate(Route.LOGIN)
    return f"Account created for {creds[0]}. Log in with /login {creds[0]}"


def cmd_logout(state: AppState, args: list[str]) -> str:
    state.session.logout()
    state.router.navigate(Route.LOGIN)
    return "Logged out.\n" + render_view(state)


def cmd_whoami(state: AppState, args: list[str]) -> str:
    user = state.session.user
    if not state.session.is_authenticated or user is None:
        return "Not logged in."
    return f"Logged in as {user.email}"


def cmd_go(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /go dashboard | tasks | login | register"
    route = parse_route(args[0])
    if route is None:
        return f"Unknown view: {args[0]}. Use /go dashboard | tasks | login | register"
    logger.debug("Navigation requested: %s", route.path)
    state.router.navigate(route)
    return render_view(state)


def cmd_dashboard(state: AppState, args: list[str]) -> str:
    state.router.navigate(Route.DASHBOARD)
    return render_view(state)


def cmd_tasks(state: AppState, args: list[str]) -> str:
    state.router.navigate(Route.TASKS)
    return render_view(state)


def cmd_refresh(state: AppState, args: list[str]) -> str:
    state.router.refresh()
    return render_view(state)


def cmd_filter(state: AppState, args: list[str]) -> str:
    controller = _task_list(state)
    if controller is None:
        return NO_TASK_LIST
    if not args:
        return "Usage: /filter all | active | completed"
    try:
        status = StatusFilter(args[0].lower())
    except ValueError:
        return "Usage: /filter all | active | completed"
    controller.set_filter(status)
    return render_view(state)


def cmd_search(state: AppState, args: list[str]) -> str:
    controller = _task_list(state)
    if controller is None:
        return NO_TASK_LIST
    controller.set_search(" ".join(args))
    return render_view(state)


def cmd_add(state: AppState, args: list[str], io: ConsoleIO | None = None) -> str:
    controller = _task_list(state)
    if controller is None:
        return NO_TASK_LIST
    io = _need_io(io)

    form = TaskForm()
    controller.show_form = True
    if args:
        form.set_field("title", " ".join(args))
    if not fill_form(form, io):
        controller.show_form = False
        return "Cancelled."

    try:
        ok = form.submit(controller.create)
    except ValidationError as e:
        controller.show_form = False
        return f"Cannot save: {e}"

    if not ok:
        controller.show_form = False
    return _after_change(state, controller, ok)


def cmd_edit(state: AppState, args: list[str], io: ConsoleIO | None = None) -> str:
    controller = _task_list(state)
    if controller is None:
        return NO_TASK_LIST
    if not args:
        return "Usage: /edit N (row number or task id)"
    task = resolve_task(controller, args[0])
    if task is None:
        return f"No task matches {args[0]!r}."
    io = _need_io(io)

    controller.begin_edit(task.id)
    form = TaskForm(task)
    if not fill_form(form, io):
        controller.cancel_edit()
        return "Cancelled."

    try:
        ok = form.submit(lambda payload: controller.update(task.id, payload))
    except ValidationError as e:
        controller.cancel_edit()
        return f"Cannot save: {e}"

    if not ok:
        controller.cancel_edit()
    return _after_change(state, controller, ok)


def cmd_done(state: AppState, args: list[str]) -> str:
    controller = _task_list(state)
    if controller is None:
        return NO_TASK_LIST
    if not args:
        return "Usage: /done N (row number or task id)"
    task = resolve_task(controller, args[0])
    if task is None:
        return f"No task matches {args[0]!r}."
    ok = controller.toggle_complete(task)
    return _after_change(state, controller, ok)


def cmd_delete(state: AppState, args: list[str], io: ConsoleIO | None = None) -> str:
    controller = _task_list(state)
    if controller is None:
        return NO_TASK_LIST
    if not args:
        return "Usage: /delete N (row number or task id)"
    task = resolve_task(controller, args[0])
    if task is None:
        return f"No task matches {args[0]!r}."
    io = _need_io(io)

    io.emit(f"Task: {task.title}")
    ok = controller.delete(task.id, io.confirm)
    if not ok and not controller.error:
        return "Not deleted."
    return _after_change(state, controller, ok)


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("login", cmd_login, help_text="Sign in: /login EMAIL (password is prompted).")
registry.register("register", cmd_register, help_text="Create an account: /register EMAIL.")
registry.register("logout", cmd_logout, help_text="Sign out and forget the saved session.")
registry.register("whoami", cmd_whoami, help_text="Show the signed-in user.")
registry.register("go", cmd_go, help_text="Open a view: /go dashboard | tasks | login | register.")
registry.register("dashboard", cmd_dashboard, help_text="Open the dashboard.", aliases=["home"])
registry.register("tasks", cmd_tasks, help_text="Open the task list.", aliases=["list", "ls"])
registry.register("refresh", cmd_refresh, help_text="Reload the current view.", aliases=["r"])
registry.register("filter", cmd_filter, help_text="Task list filter: /filter all | active | completed.")
registry.register("search", cmd_search, help_text="Search titles/descriptions: /search TEXT (empty clears).")
registry.register("add", cmd_add, help_text="Add a task (interactive form, /cancel aborts).")
registry.register("edit", cmd_edit, help_text="Edit a task: /edit N.")
registry.register("done", cmd_done, help_text="Toggle completion: /done N.", aliases=["toggle"])
registry.register("delete", cmd_delete, help_text="Delete a task (asks for confirmation): /delete N.", aliases=["rm"])
