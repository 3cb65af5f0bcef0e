"""
Start-time ordered index of scheduled items.

Only items with a start time are indexed. The index answers two
questions for the task manager: does a candidate interval intersect
anything already scheduled, and what is the scheduled work in start-time
order.
"""

from bisect import bisect_left, insort
from datetime import datetime
from typing import Optional

from taskboard.tasks.models import WorkItem

_SortKey = tuple[datetime, int]


def intervals_overlap(first: WorkItem, second: WorkItem) -> bool:
    """
    Closed-interval overlap test.

    Items without both a start and an end never overlap anything. Touching
    endpoints count as overlapping.
    """
    start1, end1 = first.start_time, first.end_time
    start2, end2 = second.start_time, second.end_time
    if start1 is None or end1 is None or start2 is None or end2 is None:
        return False
    return not end1 < start2 and not end2 < start1


class ScheduleIndex:
    """
    Items with a start time, ascending by (start time, id).

    The sort key of each entry is remembered at insert time, so an entry can
    be removed even after the live object's start time was changed in place.
    """

    def __init__(self) -> None:
        self._entries: list[tuple[_SortKey, WorkItem]] = []
        self._keys: dict[int, _SortKey] = {}

    def insert(self, item: WorkItem) -> None:
        """Index an item if it has a start time. Re-inserting replaces."""
        if item.start_time is None:
            return
        self.remove(item)
        key = (item.start_time, item.id)
        insort(self._entries, (key, item), key=lambda entry: entry[0])
        self._keys[item.id] = key

    def remove(self, item: WorkItem) -> None:
        """Remove an item by id if it is indexed."""
        self.remove_id(item.id)

    def remove_id(self, item_id: int) -> None:
        key = self._keys.pop(item_id, None)
        if key is None:
            return
        pos = bisect_left(self._entries, key, key=lambda entry: entry[0])
        del self._entries[pos]

    def clear(self) -> None:
        self._entries.clear()
        self._keys.clear()

    def find_overlap(self, candidate: WorkItem) -> Optional[WorkItem]:
        """
        First indexed item, other than the candidate, whose interval
        intersects the candidate's.

        Returns:
            The conflicting item, or None
        """
        candidate_end = candidate.end_time
        if candidate.start_time is None or candidate_end is None:
            return None

        for (start, item_id), item in self._entries:
            if start > candidate_end:
                break
            if item_id == candidate.id:
                continue
            if intervals_overlap(candidate, item):
                return item
        return None

    def overlaps(self, candidate: WorkItem) -> bool:
        return self.find_overlap(candidate) is not None

    def ordered_view(self) -> list[WorkItem]:
        """Indexed items by ascending start time, as a new list."""
        return [item for _, item in self._entries]

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._keys
