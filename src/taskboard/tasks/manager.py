"""
In-memory task manager.

This module provides the engine that owns the three item collections
(tasks, epics, subtasks) and keeps the history tracker and the schedule
index in step with every change:
- id assignment from a counter that never goes back
- overlap-checked create and update of timed items
- epic status and schedule derived from the epic's subtasks
- cascade delete of an epic's subtasks
- history recording on get-by-id

The manager is synchronous and not thread-safe; callers that share it
across threads must serialize access.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional, TypeVar

from taskboard.core.constants import FIRST_ID
from taskboard.core.exceptions import OverlapError
from taskboard.tasks.constants import TaskStatus
from taskboard.tasks.history import HistoryTracker
from taskboard.tasks.models import Epic, Subtask, Task, WorkItem
from taskboard.tasks.schedule import ScheduleIndex

logger = logging.getLogger(__name__)

ItemT = TypeVar("ItemT", bound=WorkItem)


# =============================================================================
# Epic Aggregation
# =============================================================================

def aggregate_status(statuses: list[TaskStatus]) -> TaskStatus:
    """
    Epic status as a function of its subtasks' statuses.

    No subtasks or all NEW gives NEW, all DONE gives DONE, anything else
    is IN_PROGRESS.
    """
    if all(status == TaskStatus.NEW for status in statuses):
        return TaskStatus.NEW
    if all(status == TaskStatus.DONE for status in statuses):
        return TaskStatus.DONE
    return TaskStatus.IN_PROGRESS


# =============================================================================
# Task Manager Implementation
# =============================================================================

class TaskManager:
    """
    Owns tasks, epics and subtasks and keeps derived state consistent.

    The manager:
    1. Assigns ids on create, never reusing one
    2. Rejects timed items that overlap scheduled ones with OverlapError
    3. Recomputes an epic after any change to its subtasks
    4. Records get-by-id views in the history tracker
    5. Keeps the schedule index free of deleted items
    """

    def __init__(
        self,
        history: Optional[HistoryTracker] = None,
        schedule: Optional[ScheduleIndex] = None,
    ) -> None:
        """
        Initialize task manager.

        Args:
            history: History tracker to record views in
            schedule: Schedule index for overlap checks and prioritized view
        """
        self._next_id = FIRST_ID
        self._tasks: dict[int, Task] = {}
        self._epics: dict[int, Epic] = {}
        self._subtasks: dict[int, Subtask] = {}
        self._history = history if history is not None else HistoryTracker()
        self._schedule = schedule if schedule is not None else ScheduleIndex()

    @property
    def history(self) -> HistoryTracker:
        return self._history

    def generate_id(self) -> int:
        """Hand out the next id."""
        item_id = self._next_id
        self._next_id += 1
        return item_id

    def _after_mutation(self) -> None:
        """Called once a change has been committed. Subclasses persist here."""

    # -------------------------------------------------------------------------
    # Scheduling
    # -------------------------------------------------------------------------

    def _check_overlap(self, item: WorkItem) -> None:
        conflict = self._schedule.find_overlap(item)
        if conflict is not None:
            logger.warning(
                "Rejected %s id=%s: overlaps id=%s",
                item.task_type.value.lower(),
                item.id or "new",
                conflict.id,
            )
            raise OverlapError(
                f"{item.task_type.value.capitalize()} overlaps an existing item",
                candidate_id=item.id or None,
                conflicting_id=conflict.id,
            )

    def _replace_scheduled(self, stored: ItemT, incoming: ItemT) -> None:
        """
        Swap an item's schedule entry for its new version.

        If the swap fails for any reason the old entry is put back and the
        error propagates.
        """
        self._schedule.remove(stored)
        try:
            self._check_overlap(incoming)
            self._schedule.insert(incoming)
        except Exception:
            self._schedule.remove(incoming)
            self._schedule.insert(stored)
            raise

    # -------------------------------------------------------------------------
    # Create
    # -------------------------------------------------------------------------

    def create_task(self, task: Task) -> Task:
        """
        Store a new task under a fresh id.

        Raises:
            OverlapError: If the task's interval intersects a scheduled item
            ValueError: If the duration is not a whole number of minutes
        """
        task.normalize_schedule()
        task.id = 0
        self._check_overlap(task)

        task.id = self.generate_id()
        self._schedule.insert(task)
        self._tasks[task.id] = task
        logger.debug("Task created id=%s name=%s", task.id, task.name)
        self._after_mutation()
        return task

    def create_epic(self, epic: Epic) -> Epic:
        """Store a new epic under a fresh id. It starts with no subtasks."""
        epic.id = self.generate_id()
        epic.subtask_ids = []
        self._epics[epic.id] = epic
        self._update_epic_state(epic)
        logger.debug("Epic created id=%s name=%s", epic.id, epic.name)
        self._after_mutation()
        return epic

    def create_subtask(self, subtask: Subtask) -> Optional[Subtask]:
        """
        Store a new subtask and attach it to its epic.

        Returns None without storing anything when the epic does not exist.

        Raises:
            OverlapError: If the subtask's interval intersects a scheduled item
            ValueError: If the duration is not a whole number of minutes
        """
        epic = self._epics.get(subtask.epic_id)
        if epic is None:
            logger.warning("Subtask not created: epic id=%s does not exist", subtask.epic_id)
            return None

        subtask.normalize_schedule()
        subtask.id = 0
        self._check_overlap(subtask)

        subtask.id = self.generate_id()
        self._schedule.insert(subtask)
        self._subtasks[subtask.id] = subtask
        epic.subtask_ids.append(subtask.id)
        self._update_epic_state(epic)
        logger.debug("Subtask created id=%s epic=%s", subtask.id, epic.id)
        self._after_mutation()
        return subtask

    # -------------------------------------------------------------------------
    # Update
    # -------------------------------------------------------------------------

    def update_task(self, task: Task) -> None:
        """
        Replace a stored task. Unknown ids are ignored.

        Raises:
            OverlapError: If the new interval intersects a scheduled item;
                the stored task is left as it was
            ValueError: If the duration is not a whole number of minutes
        """
        stored = self._tasks.get(task.id)
        if stored is None:
            return

        task.normalize_schedule()
        self._replace_scheduled(stored, task)
        self._tasks[task.id] = task
        logger.debug("Task updated id=%s", task.id)
        self._after_mutation()

    def update_epic(self, epic: Epic) -> None:
        """
        Replace a stored epic's name and description. Unknown ids are ignored.

        The stored subtask list is kept and status and schedule are derived
        again, whatever the incoming epic carries.
        """
        stored = self._epics.get(epic.id)
        if stored is None:
            return

        epic.subtask_ids = list(stored.subtask_ids)
        self._epics[epic.id] = epic
        self._update_epic_state(epic)
        logger.debug("Epic updated id=%s", epic.id)
        self._after_mutation()

    def update_subtask(self, subtask: Subtask) -> None:
        """
        Replace a stored subtask. Unknown ids are ignored.

        The owning epic cannot change: the stored ``epic_id`` is kept.

        Raises:
            OverlapError: If the new interval intersects a scheduled item;
                the stored subtask is left as it was
            ValueError: If the duration is not a whole number of minutes
        """
        stored = self._subtasks.get(subtask.id)
        if stored is None:
            return

        subtask.normalize_schedule()
        if subtask.epic_id != stored.epic_id:
            logger.warning(
                "Subtask id=%s cannot move from epic %s to %s; keeping owner",
                subtask.id,
                stored.epic_id,
                subtask.epic_id,
            )
            subtask.epic_id = stored.epic_id

        self._replace_scheduled(stored, subtask)
        self._subtasks[subtask.id] = subtask
        epic = self._epics.get(subtask.epic_id)
        if epic is not None:
            self._update_epic_state(epic)
        logger.debug("Subtask updated id=%s", subtask.id)
        self._after_mutation()

    # -------------------------------------------------------------------------
    # Delete
    # -------------------------------------------------------------------------

    def delete_task_by_id(self, task_id: int) -> None:
        task = self._tasks.pop(task_id, None)
        if task is not None:
            self._schedule.remove(task)
        self._history.forget(task_id)
        self._after_mutation()

    def delete_epic_by_id(self, epic_id: int) -> None:
        """Delete an epic together with all of its subtasks."""
        epic = self._epics.pop(epic_id, None)
        if epic is not None:
            for subtask_id in epic.subtask_ids:
                self._subtasks.pop(subtask_id, None)
                self._schedule.remove_id(subtask_id)
                self._history.forget(subtask_id)
            logger.debug("Epic deleted id=%s with %d subtasks", epic_id, len(epic.subtask_ids))
        self._history.forget(epic_id)
        self._after_mutation()

    def delete_subtask_by_id(self, subtask_id: int) -> None:
        subtask = self._subtasks.pop(subtask_id, None)
        if subtask is not None:
            self._schedule.remove(subtask)
            epic = self._epics.get(subtask.epic_id)
            if epic is not None and subtask_id in epic.subtask_ids:
                epic.subtask_ids.remove(subtask_id)
                self._update_epic_state(epic)
        self._history.forget(subtask_id)
        self._after_mutation()

    def delete_all_tasks(self) -> None:
        for task_id in self._tasks:
            self._schedule.remove_id(task_id)
            self._history.forget(task_id)
        self._tasks.clear()
        self._after_mutation()

    def delete_all_epics(self) -> None:
        """Delete every epic and, with them, every subtask."""
        for epic_id in self._epics:
            self._history.forget(epic_id)
        for subtask_id in self._subtasks:
            self._schedule.remove_id(subtask_id)
            self._history.forget(subtask_id)
        self._subtasks.clear()
        self._epics.clear()
        self._after_mutation()

    def delete_all_subtasks(self) -> None:
        """Delete every subtask; every epic is left empty and NEW."""
        for subtask_id in self._subtasks:
            self._schedule.remove_id(subtask_id)
            self._history.forget(subtask_id)
        self._subtasks.clear()
        for epic in self._epics.values():
            epic.subtask_ids.clear()
            self._update_epic_state(epic)
        self._after_mutation()

    # -------------------------------------------------------------------------
    # Read
    # -------------------------------------------------------------------------

    def _get_and_record(self, collection: dict[int, ItemT], item_id: int) -> Optional[ItemT]:
        item = collection.get(item_id)
        if item is not None:
            self._history.record_view(item)
            self._after_mutation()
        return item

    def get_task_by_id(self, task_id: int) -> Optional[Task]:
        """Stored task, or None. A hit is recorded in history."""
        return self._get_and_record(self._tasks, task_id)

    def get_epic_by_id(self, epic_id: int) -> Optional[Epic]:
        """Stored epic, or None. A hit is recorded in history."""
        return self._get_and_record(self._epics, epic_id)

    def get_subtask_by_id(self, subtask_id: int) -> Optional[Subtask]:
        """Stored subtask, or None. A hit is recorded in history."""
        return self._get_and_record(self._subtasks, subtask_id)

    def get_epic_subtasks(self, epic_id: int) -> list[Subtask]:
        """Subtasks of an epic in the epic's order; empty for unknown epics."""
        epic = self._epics.get(epic_id)
        if epic is None:
            return []
        return [
            self._subtasks[subtask_id]
            for subtask_id in epic.subtask_ids
            if subtask_id in self._subtasks
        ]

    def get_all_tasks(self) -> list[Task]:
        return list(self._tasks.values())

    def get_all_epics(self) -> list[Epic]:
        return list(self._epics.values())

    def get_all_subtasks(self) -> list[Subtask]:
        return list(self._subtasks.values())

    def get_history(self) -> list[WorkItem]:
        """Viewed items, most recent last."""
        return self._history.snapshot()

    def get_prioritized_tasks(self) -> list[WorkItem]:
        """Scheduled tasks and subtasks, earliest start first."""
        return self._schedule.ordered_view()

    # -------------------------------------------------------------------------
    # Epic State
    # -------------------------------------------------------------------------

    def _update_epic_state(self, epic: Epic) -> None:
        """Derive an epic's status and schedule from its current subtasks."""
        subtasks = self.get_epic_subtasks(epic.id)
        if not subtasks:
            epic.status = TaskStatus.NEW
            epic.start_time = None
            epic.duration = timedelta(0)
            epic.end_time = None
            return

        earliest_start: Optional[datetime] = None
        latest_end: Optional[datetime] = None
        total = timedelta(0)

        for subtask in subtasks:
            if subtask.start_time is not None:
                if earliest_start is None or subtask.start_time < earliest_start:
                    earliest_start = subtask.start_time
            end_time = subtask.end_time
            if end_time is not None:
                if latest_end is None or end_time > latest_end:
                    latest_end = end_time
            if subtask.duration is not None:
                total += subtask.duration

        epic.status = aggregate_status([subtask.status for subtask in subtasks])
        epic.start_time = earliest_start
        epic.duration = total
        epic.end_time = latest_end

    # -------------------------------------------------------------------------
    # Restore
    # -------------------------------------------------------------------------

    def restore_item(self, item: WorkItem) -> None:
        """
        Put an item back under its own id, bypassing the create path.

        Used when replaying a snapshot. Subtasks are attached to their epic
        if it has already been restored. Call ``finish_restore`` once all
        items are in.
        """
        if isinstance(item, Epic):
            item.subtask_ids = []
            self._epics[item.id] = item
        elif isinstance(item, Subtask):
            self._subtasks[item.id] = item
            epic = self._epics.get(item.epic_id)
            if epic is not None and item.id not in epic.subtask_ids:
                epic.subtask_ids.append(item.id)
        elif isinstance(item, Task):
            self._tasks[item.id] = item
        else:
            raise TypeError(f"Cannot restore {type(item).__name__}")

        if not isinstance(item, Epic):
            self._schedule.insert(item)
        self._next_id = max(self._next_id, item.id + 1)

    def finish_restore(self) -> None:
        """
        Attach subtasks restored before their epic, drop subtasks whose
        epic is missing and derive every epic's state.
        """
        for subtask in list(self._subtasks.values()):
            epic = self._epics.get(subtask.epic_id)
            if epic is None:
                logger.warning(
                    "Dropping restored subtask id=%s: epic id=%s is missing",
                    subtask.id,
                    subtask.epic_id,
                )
                del self._subtasks[subtask.id]
                self._schedule.remove(subtask)
                continue
            if subtask.id not in epic.subtask_ids:
                epic.subtask_ids.append(subtask.id)
        for epic in self._epics.values():
            self._update_epic_state(epic)

    # -------------------------------------------------------------------------
    # Introspection
    # -------------------------------------------------------------------------

    def get_stats(self) -> dict[str, int]:
        return {
            "tasks": len(self._tasks),
            "epics": len(self._epics),
            "subtasks": len(self._subtasks),
            "history": len(self._history),
            "scheduled": len(self._schedule),
            "next_id": self._next_id,
        }
