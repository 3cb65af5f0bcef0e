"""Pytest configuration and fixtures for taskboard tests."""

import shutil
import tempfile
from datetime import datetime, timedelta
from pathlib import Path
from typing import Callable, Generator

import pytest

from taskboard.core.config import TaskboardConfig
from taskboard.tasks import Epic, HistoryTracker, ScheduleIndex, Subtask, Task, TaskManager

BASE_DAY = datetime(2025, 1, 6)


def at(hour: int, minute: int = 0) -> datetime:
    """A time on the fixed test day."""
    return BASE_DAY.replace(hour=hour, minute=minute)


def minutes(n: int) -> timedelta:
    return timedelta(minutes=n)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    tmp = Path(tempfile.mkdtemp())
    yield tmp
    shutil.rmtree(tmp, ignore_errors=True)


@pytest.fixture
def config() -> TaskboardConfig:
    """Create default configuration."""
    return TaskboardConfig()


@pytest.fixture
def history() -> HistoryTracker:
    return HistoryTracker()


@pytest.fixture
def schedule() -> ScheduleIndex:
    return ScheduleIndex()


@pytest.fixture
def manager() -> TaskManager:
    """Create an empty in-memory task manager."""
    return TaskManager()


@pytest.fixture
def timed_task() -> Callable[..., Task]:
    """Factory for tasks on the fixed test day."""

    def make(name: str, hour: int, minute: int = 0, length: int = 60) -> Task:
        return Task(name, f"{name} description", start_time=at(hour, minute), duration=minutes(length))

    return make


@pytest.fixture
def populated_manager(manager: TaskManager) -> TaskManager:
    """
    Manager holding one timed task, one epic with two timed subtasks and
    one untimed task.

    Ids: task 1 (09:00-10:00), epic 2, subtask 3 (12:00-12:30),
    subtask 4 (14:00-15:00), task 5 (untimed).
    """
    manager.create_task(Task("Standup", "Daily", start_time=at(9), duration=minutes(60)))
    epic = manager.create_epic(Epic("Release", "Ship 1.0"))
    manager.create_subtask(
        Subtask("Tag build", start_time=at(12), duration=minutes(30), epic_id=epic.id)
    )
    manager.create_subtask(
        Subtask("Publish", start_time=at(14), duration=minutes(60), epic_id=epic.id)
    )
    manager.create_task(Task("Inbox zero", "Someday"))
    return manager
