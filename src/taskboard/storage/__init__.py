"""Snapshot persistence for the task manager."""

from taskboard.storage.csv_store import CsvTaskStore, item_to_row, row_to_item
from taskboard.storage.file_backed import FileBackedTaskManager

__all__ = [
    "CsvTaskStore",
    "FileBackedTaskManager",
    "item_to_row",
    "row_to_item",
]
