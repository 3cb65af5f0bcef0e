"""
Task data models.

This module defines the work item variants tracked by the task manager:
standalone Task, Epic and epic-owned Subtask. The variants share their
common fields through WorkItem and are told apart by their TaskType tag.
An Epic's status and schedule are derived by the manager from its
subtasks; nothing in this module computes them.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta, timezone
from typing import Any, ClassVar, Optional, Self

from taskboard.tasks.constants import TaskStatus, TaskType


# =============================================================================
# Helpers
# =============================================================================

def end_of(start_time: Optional[datetime], duration: Optional[timedelta]) -> Optional[datetime]:
    """End of an interval, or None when either bound is missing."""
    if start_time is None or duration is None:
        return None
    return start_time + duration


def duration_to_minutes(duration: Optional[timedelta]) -> Optional[int]:
    """Whole minutes of a duration, as used by the external formats."""
    if duration is None:
        return None
    return int(duration.total_seconds() // 60)


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Aware times become naive UTC; naive times are taken as they are."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def check_whole_minutes(duration: Optional[timedelta]) -> None:
    """
    Reject durations the external formats cannot carry exactly.

    Raises:
        ValueError: If the duration is negative or not a whole number of minutes
    """
    if duration is None:
        return
    if duration < timedelta(0):
        raise ValueError(f"duration must not be negative: {duration}")
    if duration % timedelta(minutes=1):
        raise ValueError(f"duration must be whole minutes: {duration}")


def _parse_datetime(value: Any) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))


def _parse_minutes(value: Any) -> Optional[timedelta]:
    if value is None or value == "":
        return None
    if isinstance(value, timedelta):
        return value
    return timedelta(minutes=int(value))


# =============================================================================
# Shared Fields
# =============================================================================

@dataclass(eq=False)
class WorkItem:
    """
    Fields common to every work item.

    Identity is the ``id`` alone: two items with the same id are equal
    whatever their other fields say. An id of 0 means "not yet created";
    the manager assigns real ids.
    """

    task_type: ClassVar[TaskType]

    name: str = ""
    description: str = ""
    id: int = 0
    status: TaskStatus = TaskStatus.NEW
    start_time: Optional[datetime] = None
    duration: Optional[timedelta] = None

    def __post_init__(self) -> None:
        if isinstance(self.status, str):
            self.status = TaskStatus.parse(self.status)
        self.normalize_schedule()

    def normalize_schedule(self) -> None:
        """
        Bring start time and duration into the form the schedule compares.

        Raises:
            ValueError: If the duration is not a whole number of minutes
        """
        self.start_time = to_naive_utc(self.start_time)
        check_whole_minutes(self.duration)

    @property
    def end_time(self) -> Optional[datetime]:
        return end_of(self.start_time, self.duration)

    def copy(self) -> Self:
        """Independent snapshot of this item."""
        return replace(self)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        end_time = self.end_time
        return {
            "id": self.id,
            "type": self.task_type.value,
            "name": self.name,
            "description": self.description,
            "status": self.status.value,
            "start_time": self.start_time.isoformat() if self.start_time else None,
            "duration": duration_to_minutes(self.duration),
            "end_time": end_time.isoformat() if end_time else None,
        }

    @classmethod
    def _common_fields(cls, data: dict[str, Any]) -> dict[str, Any]:
        return {
            "name": data.get("name") or "",
            "description": data.get("description") or "",
            "id": int(data.get("id") or 0),
            "status": TaskStatus.parse(data.get("status")),
            "start_time": _parse_datetime(data.get("start_time")),
            "duration": _parse_minutes(data.get("duration")),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Create an item from a dictionary produced by ``to_dict``."""
        return cls(**cls._common_fields(data))

    def __hash__(self) -> int:
        """Hash based on item ID."""
        return hash(self.id)

    def __eq__(self, other: object) -> bool:
        """Equality based on item ID."""
        if not isinstance(other, WorkItem):
            return False
        return self.id == other.id


# =============================================================================
# Variants
# =============================================================================

@dataclass(eq=False)
class Task(WorkItem):
    """A standalone work item."""

    task_type: ClassVar[TaskType] = TaskType.TASK


@dataclass(eq=False, kw_only=True)
class Subtask(WorkItem):
    """A work item owned by exactly one epic. ``epic_id`` never changes."""

    task_type: ClassVar[TaskType] = TaskType.SUBTASK

    epic_id: int

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["epic_id"] = self.epic_id
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        if data.get("epic_id") is None:
            raise ValueError("epic_id is required for a subtask")
        return cls(**cls._common_fields(data), epic_id=int(data["epic_id"]))


@dataclass(eq=False)
class Epic(WorkItem):
    """
    A composite work item.

    ``status``, ``start_time``, ``duration`` and ``end_time`` are written by
    the manager from the epic's subtasks; ``subtask_ids`` keeps insertion
    order and is only changed by creating or deleting subtasks.
    """

    task_type: ClassVar[TaskType] = TaskType.EPIC

    duration: Optional[timedelta] = timedelta(0)
    subtask_ids: list[int] = field(default_factory=list)
    end_time: Optional[datetime] = None  # type: ignore[assignment]

    def copy(self) -> Self:
        return replace(self, subtask_ids=list(self.subtask_ids))

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["subtask_ids"] = list(self.subtask_ids)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        fields_ = cls._common_fields(data)
        if fields_["duration"] is None:
            fields_["duration"] = timedelta(0)
        return cls(
            **fields_,
            subtask_ids=[int(i) for i in data.get("subtask_ids") or []],
        )


ITEM_CLASSES: dict[TaskType, type[WorkItem]] = {
    TaskType.TASK: Task,
    TaskType.EPIC: Epic,
    TaskType.SUBTASK: Subtask,
}
