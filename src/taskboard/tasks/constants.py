"""
Task system constants and enumerations.

This module defines the status and type enumerations shared by the
entity model, the task manager and the external collaborators.
"""

from enum import Enum


# =============================================================================
# Task Status Enumeration
# =============================================================================

class TaskStatus(str, Enum):
    """Status of a work item."""

    NEW = "NEW"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"

    @classmethod
    def parse(cls, raw: str | None) -> "TaskStatus":
        """Parse a status name, case-insensitively. Empty means NEW."""
        if not raw:
            return cls.NEW
        return cls(raw.strip().upper())


# =============================================================================
# Task Type Enumeration
# =============================================================================

class TaskType(str, Enum):
    """Variant tag of a work item."""

    TASK = "TASK"
    EPIC = "EPIC"
    SUBTASK = "SUBTASK"
