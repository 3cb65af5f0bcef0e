"""Per-application daemon state."""

import threading
from datetime import datetime

from fastapi import Request

from taskboard.tasks.manager import TaskManager


class DaemonState:
    """
    State container attached to ``app.state.daemon``.

    The manager is not thread-safe and FastAPI runs sync routes in a
    thread pool, so every route holds ``lock`` around its manager calls.
    """

    def __init__(self, manager: TaskManager) -> None:
        self.manager = manager
        self.lock = threading.Lock()
        self.start_time: datetime | None = None

    @property
    def uptime_seconds(self) -> float:
        if self.start_time is None:
            return 0.0
        return (datetime.now() - self.start_time).total_seconds()


def get_state(request: Request) -> DaemonState:
    """FastAPI dependency returning the app's daemon state."""
    return request.app.state.daemon
