"""
Unit tests for the history tracker.

Tests cover:
- Recency order and deduplication
- Removal by id
- Snapshot independence
- Optional size limit
"""

import pytest

from taskboard.tasks import Epic, HistoryTracker, Task, TaskStatus


def task(item_id: int, name: str = "") -> Task:
    return Task(name or f"task {item_id}", id=item_id)


class TestRecordView:
    """Tests for recording views."""

    def test_records_in_view_order(self, history):
        history.record_view(task(1))
        history.record_view(task(2))
        history.record_view(task(3))
        assert history.ids() == [1, 2, 3]

    def test_none_is_ignored(self, history):
        history.record_view(None)
        assert len(history) == 0

    def test_re_view_moves_to_end(self, history):
        """Test viewing 1, 2 then 1 again gives [2, 1]."""
        history.record_view(task(1))
        history.record_view(task(2))
        history.record_view(task(1))
        assert history.ids() == [2, 1]
        assert len(history) == 2

    def test_re_view_of_only_entry(self, history):
        history.record_view(task(1))
        history.record_view(task(1))
        assert history.ids() == [1]

    def test_re_view_of_middle_entry(self, history):
        for i in (1, 2, 3):
            history.record_view(task(i))
        history.record_view(task(2))
        assert history.ids() == [1, 3, 2]

    def test_re_view_stores_latest_state(self, history):
        item = task(1)
        history.record_view(item)
        item.status = TaskStatus.DONE
        history.record_view(item)
        assert history.snapshot()[0].status == TaskStatus.DONE

    def test_mixed_variants_share_id_space(self, history):
        history.record_view(task(1))
        history.record_view(Epic("e", id=2))
        assert [type(i) for i in history.snapshot()] == [Task, Epic]


class TestIndependence:
    """Tests that history is immune to later changes."""

    def test_live_mutation_does_not_change_history(self, history):
        item = task(1)
        history.record_view(item)
        item.status = TaskStatus.DONE
        item.name = "changed"

        recorded = history.snapshot()[0]
        assert recorded.status == TaskStatus.NEW
        assert recorded.name == "task 1"

    def test_snapshot_mutation_does_not_change_history(self, history):
        history.record_view(task(1))
        snapshot = history.snapshot()
        snapshot.clear()
        assert history.ids() == [1]

    def test_snapshot_items_are_copies(self, history):
        history.record_view(task(1))
        history.snapshot()[0].status = TaskStatus.DONE
        assert history.snapshot()[0].status == TaskStatus.NEW


class TestForget:
    """Tests for removal by id."""

    def test_forget_head(self, history):
        for i in (1, 2, 3):
            history.record_view(task(i))
        history.forget(1)
        assert history.ids() == [2, 3]

    def test_forget_tail(self, history):
        for i in (1, 2, 3):
            history.record_view(task(i))
        history.forget(3)
        assert history.ids() == [1, 2]
        history.record_view(task(4))
        assert history.ids() == [1, 2, 4]

    def test_forget_middle(self, history):
        for i in (1, 2, 3):
            history.record_view(task(i))
        history.forget(2)
        assert history.ids() == [1, 3]

    def test_forget_last_remaining(self, history):
        history.record_view(task(1))
        history.forget(1)
        assert history.ids() == []
        history.record_view(task(2))
        assert history.ids() == [2]

    def test_forget_unknown_is_noop(self, history):
        history.record_view(task(1))
        history.forget(99)
        assert history.ids() == [1]

    def test_contains(self, history):
        history.record_view(task(1))
        assert 1 in history
        assert 2 not in history

    def test_clear(self, history):
        for i in (1, 2):
            history.record_view(task(i))
        history.clear()
        assert len(history) == 0
        assert history.snapshot() == []


class TestLimit:
    """Tests for the optional size limit."""

    def test_unbounded_by_default(self, history):
        for i in range(1, 51):
            history.record_view(task(i))
        assert len(history) == 50
        assert history.limit is None

    def test_limit_evicts_oldest(self):
        history = HistoryTracker(limit=10)
        for i in range(1, 13):
            history.record_view(task(i))
        assert history.ids() == list(range(3, 13))

    def test_re_view_under_limit_does_not_evict(self):
        history = HistoryTracker(limit=2)
        history.record_view(task(1))
        history.record_view(task(2))
        history.record_view(task(1))
        assert history.ids() == [2, 1]

    def test_invalid_limit(self):
        with pytest.raises(ValueError):
            HistoryTracker(limit=0)
