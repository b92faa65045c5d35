# src/taskmaster_client/core/routing.py

"""
Navigation + route guard.

The guard is a two-state machine:
- CHECKING: the session has not decided yet whether a persisted token is valid.
  Nothing is rendered and nobody is redirected.
- DECIDED: protected routes need a session; login/register need the absence of one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum

from ..tasks.dashboard import DashboardController
from ..tasks.task_list import TaskListController
from .ports import TaskApi
from .session import SessionStore

logger = logging.getLogger(__name__)

MAX_REDIRECTS = 4


class Route(StrEnum):
    LOGIN = "login"
    REGISTER = "register"
    DASHBOARD = "dashboard"
    TASKS = "tasks"

    @property
    def path(self) -> str:
        return f"/{self.value}"


PROTECTED = frozenset({Route.DASHBOARD, Route.TASKS})
GUEST_ONLY = frozenset({Route.LOGIN, Route.REGISTER})
HOME = Route.DASHBOARD


def parse_route(text: str) -> Route | None:
    """'tasks', '/tasks', 'TASKS' -> Route.TASKS; '/' or '' -> home."""
    key = text.strip().lower().strip("/")
    if not key:
        return HOME
    try:
        return Route(key)
    except ValueError:
        return None


class GuardState(StrEnum):
    CHECKING = "checking"
    DECIDED = "decided"


class DecisionKind(StrEnum):
    WAIT = "wait"
    RENDER = "render"
    REDIRECT = "redirect"


@dataclass(frozen=True, slots=True)
class Decision:
    kind: DecisionKind
    route: Route | None = None


def guard_state(session: SessionStore) -> GuardState:
    return GuardState.CHECKING if session.loading else GuardState.DECIDED


def guard(route: Route, session: SessionStore) -> Decision:
    if guard_state(session) == GuardState.CHECKING:
        return Decision(DecisionKind.WAIT)
    if route in PROTECTED and not session.is_authenticated:
        return Decision(DecisionKind.REDIRECT, Route.LOGIN)
    if route in GUEST_ONLY and session.is_authenticated:
        return Decision(DecisionKind.REDIRECT, HOME)
    return Decision(DecisionKind.RENDER, route)


class Router:
    """
    Tracks the active view and mounts its controller.

    Views are mounted fresh on every navigation (the task list and dashboard
    fetch on mount) and dropped when left.
    """

    def __init__(self, session: SessionStore, api: TaskApi) -> None:
        self._session = session
        self._api = api
        self.current: Route | None = None
        self.task_list: TaskListController | None = None
        self.dashboard: DashboardController | None = None

    def navigate(self, route: Route) -> Decision:
        """
        Resolve `route` through the guard (following redirects) and mount the
        resulting view. Returns the final decision (WAIT or RENDER).
        """
        target = route
        for _ in range(MAX_REDIRECTS):
            decision = guard(target, self._session)
            if decision.kind == DecisionKind.REDIRECT and decision.route is not None:
                logger.debug("Route %s redirected to %s", target.path, decision.route.path)
                target = decision.route
                continue
            if decision.kind == DecisionKind.RENDER:
                self._mount(target)
                # Mount-time fetch may have invalidated the session (401 -> logout).
                if target in PROTECTED and not self._session.is_authenticated:
                    target = Route.LOGIN
                    continue
            return decision
        raise RuntimeError(f"Redirect loop while navigating to {route.path}")

    def refresh(self) -> Decision | None:
        """Re-run the guard for the active view (e.g. after login/logout)."""
        if self.current is None:
            return None
        return self.navigate(self.current)

    def _unmount(self) -> None:
        self.task_list = None
        self.dashboard = None

    def _mount(self, route: Route) -> None:
        self._unmount()
        self.current = route
        logger.debug("Mounted view %s", route.path)

        if route == Route.TASKS:
            self.task_list = TaskListController(self._api, self._session)
            self.task_list.load()
        elif route == Route.DASHBOARD:
            self.dashboard = DashboardController(self._api, self._session)
            self.dashboard.load()
