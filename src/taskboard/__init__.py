"""Taskboard - in-memory task tracking with epics, history and scheduling.

Tracks standalone tasks, epics and epic-owned subtasks, remembers the
recently viewed items and keeps a start-time ordered view of scheduled
work with overlap prevention.
"""

__version__ = "0.1.0"

from taskboard.core.config import TaskboardConfig
from taskboard.core.exceptions import OverlapError, TaskboardError
from taskboard.tasks import (
    Epic,
    Subtask,
    Task,
    TaskManager,
    TaskStatus,
    TaskType,
)

__all__ = [
    "__version__",
    # Config
    "TaskboardConfig",
    # Errors
    "TaskboardError",
    "OverlapError",
    # Model
    "Task",
    "Epic",
    "Subtask",
    "TaskStatus",
    "TaskType",
    # Engine
    "TaskManager",
]
