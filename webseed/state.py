"""Shared application state and its lifecycle.

One ``AppState`` is created by the builder and shared by reference with every
request handler through ``app.state``. Handlers only read it; the
``Application`` and the ASGI lifespan drive the transitions.
"""
from __future__ import annotations

import enum
import threading


class AppStatus(str, enum.Enum):
    NOT_STARTED = "NOT_STARTED"
    STARTED = "STARTED"
    RUNNING = "RUNNING"
    ERROR = "ERROR"


# ERROR is terminal.
_ALLOWED_TRANSITIONS: dict[AppStatus, frozenset[AppStatus]] = {
    AppStatus.NOT_STARTED: frozenset({AppStatus.STARTED, AppStatus.ERROR}),
    AppStatus.STARTED: frozenset({AppStatus.RUNNING, AppStatus.ERROR}),
    AppStatus.RUNNING: frozenset({AppStatus.ERROR}),
    AppStatus.ERROR: frozenset(),
}

_RANK: dict[AppStatus, int] = {
    AppStatus.NOT_STARTED: 0,
    AppStatus.STARTED: 1,
    AppStatus.RUNNING: 2,
    AppStatus.ERROR: 3,
}


class InvalidStateTransition(RuntimeError):
    def __init__(self, current: AppStatus, target: AppStatus):
        super().__init__(f"Illegal application status transition {current.value} -> {target.value}")
        self.current = current
        self.target = target


class AppState:
    """Lock-guarded holder of the application status."""

    def __init__(self, status: AppStatus = AppStatus.NOT_STARTED):
        self._status = AppStatus(status)
        self._lock = threading.Lock()

    @property
    def status(self) -> AppStatus:
        with self._lock:
            return self._status

    def transition(self, target: AppStatus) -> AppStatus:
        """Move to ``target`` and return the previous status.

        Raises:
            InvalidStateTransition: if ``target`` is not reachable from the current status
        """
        with self._lock:
            current = self._status
            if target not in _ALLOWED_TRANSITIONS[current]:
                raise InvalidStateTransition(current, target)
            self._status = target
            return current

    def advance(self, target: AppStatus) -> bool:
        """Move forward to ``target`` unless the status is already there or past it.

        ERROR is terminal, so nothing advances out of it. Returns True when the
        status changed.

        Raises:
            InvalidStateTransition: if ``target`` would skip a lifecycle step
        """
        with self._lock:
            current = self._status
            if _RANK[current] >= _RANK[target]:
                return False
            if target not in _ALLOWED_TRANSITIONS[current]:
                raise InvalidStateTransition(current, target)
            self._status = target
            return True

    def __repr__(self) -> str:
        return f"AppState(status={self.status.value})"
