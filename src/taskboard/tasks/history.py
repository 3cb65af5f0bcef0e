"""
Recently-viewed history.

The tracker keeps one entry per item id in recency order (oldest first).
Entries live in a doubly linked list and are reachable by id through a
lookup table, so recording, moving to the end and forgetting are O(1);
a snapshot is O(n).

Each entry holds a copy of the item taken when it was viewed, so later
changes to the live item never rewrite history.
"""

import logging
from typing import Iterator, Optional

from taskboard.tasks.models import WorkItem

logger = logging.getLogger(__name__)


class _Node:
    __slots__ = ("item", "prev", "next")

    def __init__(self, item: WorkItem) -> None:
        self.item = item
        self.prev: Optional["_Node"] = None
        self.next: Optional["_Node"] = None


class HistoryTracker:
    """
    Recency-ordered, deduplicated log of viewed items.

    The tracker is unbounded by default. Passing ``limit`` evicts the oldest
    entry whenever a new one pushes the size past it.
    """

    def __init__(self, limit: Optional[int] = None) -> None:
        """
        Initialize history tracker.

        Args:
            limit: Maximum number of entries, or None for no limit
        """
        if limit is not None and limit < 1:
            raise ValueError("limit must be at least 1")
        self._limit = limit
        self._nodes: dict[int, _Node] = {}
        self._head: Optional[_Node] = None
        self._tail: Optional[_Node] = None

    @property
    def limit(self) -> Optional[int]:
        return self._limit

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def record_view(self, item: Optional[WorkItem]) -> None:
        """
        Record that an item was viewed.

        An existing entry for the same id is dropped and a fresh copy of the
        item becomes the most recent entry. ``None`` is ignored.
        """
        if item is None:
            return
        self.forget(item.id)
        self._link_last(_Node(item.copy()))

        oldest = self._head
        if self._limit is not None and len(self._nodes) > self._limit and oldest is not None:
            logger.debug("History full, evicting id=%s", oldest.item.id)
            self._unlink(oldest)

    def forget(self, item_id: int) -> None:
        """Remove the entry for an id if there is one."""
        node = self._nodes.get(item_id)
        if node is not None:
            self._unlink(node)

    def clear(self) -> None:
        """Drop every entry."""
        self._nodes.clear()
        self._head = None
        self._tail = None

    def _link_last(self, node: _Node) -> None:
        if self._tail is None:
            self._head = self._tail = node
        else:
            self._tail.next = node
            node.prev = self._tail
            self._tail = node
        self._nodes[node.item.id] = node

    def _unlink(self, node: _Node) -> None:
        if node.prev is not None:
            node.prev.next = node.next
        else:
            self._head = node.next

        if node.next is not None:
            node.next.prev = node.prev
        else:
            self._tail = node.prev

        node.prev = node.next = None
        del self._nodes[node.item.id]

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def snapshot(self) -> list[WorkItem]:
        """Copies of the entries in recency order, oldest first."""
        return [item.copy() for item in self]

    def ids(self) -> list[int]:
        return [item.id for item in self]

    def __iter__(self) -> Iterator[WorkItem]:
        node = self._head
        while node is not None:
            yield node.item
            node = node.next

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._nodes
