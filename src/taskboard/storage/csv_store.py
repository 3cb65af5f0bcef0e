"""
CSV snapshot store.

A snapshot is a flat file with one row per item followed by a blank line
and a single row holding the history ids, oldest first:

    id,type,name,status,description,start_time,duration,epic
    1,TASK,Write report,NEW,Quarterly,2025-01-06T10:00:00,60,
    2,EPIC,Release,IN_PROGRESS,,2025-01-06T12:00:00,30,
    3,SUBTASK,Tag build,DONE,,2025-01-06T12:00:00,30,2

    3,1

Times are ISO-8601, durations whole minutes. Epic schedule columns are
informational; epics are derived again from their subtasks on load.
"""

import csv
import logging
import os
from pathlib import Path
from typing import Any, Iterator

from taskboard.core.constants import CSV_HEADER
from taskboard.core.exceptions import ManagerLoadError, ManagerSaveError
from taskboard.tasks.constants import TaskType
from taskboard.tasks.manager import TaskManager
from taskboard.tasks.models import (
    ITEM_CLASSES,
    Subtask,
    WorkItem,
    duration_to_minutes,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Row Conversion
# =============================================================================

def item_to_row(item: WorkItem) -> list[str]:
    """Flatten an item into a CSV row."""
    minutes = duration_to_minutes(item.duration)
    return [
        str(item.id),
        item.task_type.value,
        item.name,
        item.status.value,
        item.description,
        item.start_time.isoformat() if item.start_time else "",
        "" if minutes is None else str(minutes),
        str(item.epic_id) if isinstance(item, Subtask) else "",
    ]


def row_to_item(row: list[str]) -> WorkItem:
    """Build an item from a CSV row."""
    if len(row) != len(CSV_HEADER):
        raise ValueError(f"expected {len(CSV_HEADER)} columns, got {len(row)}")

    data: dict[str, Any] = dict(zip(CSV_HEADER, row))
    item_type = TaskType(data["type"].strip().upper())
    if item_type == TaskType.SUBTASK:
        data["epic_id"] = data.pop("epic")
    return ITEM_CLASSES[item_type].from_dict(data)


# =============================================================================
# Store Implementation
# =============================================================================

class CsvTaskStore:
    """
    Reads and writes task manager snapshots.

    Writes go to a sibling temporary file that then replaces the target, so
    a failed save leaves the previous snapshot intact.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.exists()

    # -------------------------------------------------------------------------
    # Save
    # -------------------------------------------------------------------------

    def _rows(self, manager: TaskManager) -> Iterator[list[str]]:
        yield list(CSV_HEADER)
        for items in (
            manager.get_all_tasks(),
            manager.get_all_epics(),
            manager.get_all_subtasks(),
        ):
            for item in sorted(items, key=lambda i: i.id):
                yield item_to_row(item)
        yield []
        history_ids = [str(item.id) for item in manager.get_history()]
        if history_ids:
            yield history_ids

    def save(self, manager: TaskManager) -> None:
        """
        Write a snapshot of the manager.

        Raises:
            ManagerSaveError: If the file cannot be written
        """
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8", newline="") as f:
                writer = csv.writer(f, lineterminator="\n")
                writer.writerows(self._rows(manager))
            os.replace(tmp_path, self._path)
        except OSError as e:
            raise ManagerSaveError(f"Failed to save snapshot: {e}", path=self._path) from e

        logger.debug("Snapshot saved path=%s stats=%s", self._path, manager.get_stats())

    # -------------------------------------------------------------------------
    # Load
    # -------------------------------------------------------------------------

    def load(self, manager: TaskManager) -> TaskManager:
        """
        Replay a snapshot into an empty manager.

        Items keep their original ids. History is rebuilt by viewing the
        recorded ids in order.

        Raises:
            ManagerLoadError: If the file is missing or malformed
        """
        if not self._path.exists():
            raise ManagerLoadError("Snapshot file not found", path=self._path)

        try:
            with open(self._path, "r", encoding="utf-8", newline="") as f:
                rows = list(csv.reader(f))
        except OSError as e:
            raise ManagerLoadError(f"Failed to read snapshot: {e}", path=self._path) from e

        if not rows:
            return manager
        if tuple(cell.strip() for cell in rows[0]) != CSV_HEADER:
            raise ManagerLoadError("Unexpected snapshot header", path=self._path, line=1)

        line = 1
        history_row: list[str] = []
        for line, row in enumerate(rows[1:], start=2):
            if not row:
                if line < len(rows):
                    history_row = rows[line]
                break
            try:
                item = row_to_item(row)
            except (KeyError, ValueError) as e:
                raise ManagerLoadError(
                    f"Malformed snapshot row: {e}", path=self._path, line=line
                ) from e
            manager.restore_item(item)

        manager.finish_restore()
        self._replay_history(manager, history_row, line + 1)

        logger.info("Snapshot loaded path=%s stats=%s", self._path, manager.get_stats())
        return manager

    def _replay_history(self, manager: TaskManager, ids: list[str], line: int) -> None:
        lookups = (
            manager.get_task_by_id,
            manager.get_epic_by_id,
            manager.get_subtask_by_id,
        )
        for raw in ids:
            try:
                item_id = int(raw)
            except ValueError as e:
                raise ManagerLoadError(
                    f"Malformed history id: {raw!r}", path=self._path, line=line
                ) from e
            for lookup in lookups:
                if lookup(item_id) is not None:
                    break
            else:
                logger.warning("History id=%s has no matching item; skipped", item_id)


__all__ = ["CsvTaskStore", "item_to_row", "row_to_item"]
