"""Taskboard custom exception hierarchy."""

from pathlib import Path
from typing import Any


class TaskboardError(Exception):
    """Base exception for all taskboard errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


class ConfigurationError(TaskboardError):
    """Raised when configuration is invalid or missing."""

    pass


class OverlapError(TaskboardError):
    """Raised when a timed item would intersect an already scheduled one.

    The manager's state is unchanged when this is raised.
    """

    def __init__(
        self,
        message: str,
        candidate_id: int | None = None,
        conflicting_id: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if candidate_id is not None:
            details["candidate_id"] = candidate_id
        if conflicting_id is not None:
            details["conflicting_id"] = conflicting_id
        super().__init__(message, details)
        self.candidate_id = candidate_id
        self.conflicting_id = conflicting_id


class PersistenceError(TaskboardError):
    """Base exception for snapshot file operations."""

    def __init__(
        self, message: str, path: Path | None = None, details: dict[str, Any] | None = None
    ) -> None:
        details = details or {}
        if path:
            details["path"] = str(path)
        super().__init__(message, details)
        self.path = path


class ManagerSaveError(PersistenceError):
    """Raised when the snapshot file cannot be written."""

    pass


class ManagerLoadError(PersistenceError):
    """Raised when the snapshot file is missing or cannot be parsed."""

    def __init__(
        self,
        message: str,
        path: Path | None = None,
        line: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if line is not None:
            details["line"] = line
        super().__init__(message, path, details)
        self.line = line
