"""
Taskboard Task System Module.

This module provides the in-memory task engine: the work item model,
the recently-viewed history and the start-time schedule index, tied
together by the task manager.

Public API:
-----------

Constants and Enums:
    TaskStatus - NEW, IN_PROGRESS or DONE
    TaskType - Variant tag (TASK, EPIC, SUBTASK)

Models:
    WorkItem - Fields shared by every variant
    Task - Standalone work item
    Epic - Composite item derived from its subtasks
    Subtask - Item owned by one epic

History:
    HistoryTracker - Recency-ordered, deduplicated view log

Scheduling:
    ScheduleIndex - Start-time ordered index with overlap lookup
    intervals_overlap - Closed-interval overlap test

Engine:
    TaskManager - CRUD, epic aggregation, overlap checks, history
    aggregate_status - Epic status from subtask statuses

Example Usage:
--------------

    from datetime import datetime, timedelta
    from taskboard.tasks import Epic, Subtask, TaskManager

    manager = TaskManager()
    epic = manager.create_epic(Epic("Release"))
    manager.create_subtask(
        Subtask(
            "Tag build",
            start_time=datetime(2025, 1, 6, 10, 0),
            duration=timedelta(minutes=30),
            epic_id=epic.id,
        )
    )
    manager.get_epic_by_id(epic.id)
    print(manager.get_history())
"""

from taskboard.tasks.constants import TaskStatus, TaskType
from taskboard.tasks.history import HistoryTracker
from taskboard.tasks.manager import TaskManager, aggregate_status
from taskboard.tasks.models import (
    ITEM_CLASSES,
    Epic,
    Subtask,
    Task,
    WorkItem,
    duration_to_minutes,
    end_of,
)
from taskboard.tasks.schedule import ScheduleIndex, intervals_overlap

__all__ = [
    # Constants
    "TaskStatus",
    "TaskType",
    # Models
    "WorkItem",
    "Task",
    "Epic",
    "Subtask",
    "ITEM_CLASSES",
    "end_of",
    "duration_to_minutes",
    # History
    "HistoryTracker",
    # Scheduling
    "ScheduleIndex",
    "intervals_overlap",
    # Engine
    "TaskManager",
    "aggregate_status",
]
