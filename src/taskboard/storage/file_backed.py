"""File-backed task manager: an in-memory manager that snapshots to CSV."""

import logging
from pathlib import Path
from typing import Optional, Self

from taskboard.storage.csv_store import CsvTaskStore
from taskboard.tasks.history import HistoryTracker
from taskboard.tasks.manager import TaskManager

logger = logging.getLogger(__name__)


class FileBackedTaskManager(TaskManager):
    """
    Task manager that writes a snapshot after every committed change.

    Successful get-by-id calls count as changes because they move history.
    A failed save raises ManagerSaveError to the caller; the in-memory
    change it followed stays committed.
    """

    def __init__(
        self,
        path: str | Path,
        history: Optional[HistoryTracker] = None,
    ) -> None:
        super().__init__(history=history)
        self._store = CsvTaskStore(path)
        self._restoring = False

    @property
    def store(self) -> CsvTaskStore:
        return self._store

    def save(self) -> None:
        self._store.save(self)

    def _after_mutation(self) -> None:
        if self._restoring:
            return
        self.save()

    @classmethod
    def load_from_file(
        cls,
        path: str | Path,
        history: Optional[HistoryTracker] = None,
    ) -> Self:
        """
        Restore a manager from a snapshot file.

        Raises:
            ManagerLoadError: If the file is missing or malformed
        """
        manager = cls(path, history=history)
        manager._restoring = True
        try:
            manager._store.load(manager)
        finally:
            manager._restoring = False
        return manager

    @classmethod
    def open_or_create(
        cls,
        path: str | Path,
        history: Optional[HistoryTracker] = None,
    ) -> Self:
        """Restore from ``path`` if it exists, otherwise start empty."""
        if Path(path).exists():
            return cls.load_from_file(path, history=history)
        logger.info("No snapshot at %s; starting empty", path)
        return cls(path, history=history)
