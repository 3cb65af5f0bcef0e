"""
Unit tests for the schedule index.

Tests cover:
- Closed-interval overlap test
- Ordering by start time
- Removal after in-place changes
- Overlap lookup against indexed items
"""

from datetime import datetime, timedelta

from taskboard.tasks import ScheduleIndex, Subtask, Task, intervals_overlap


def at(hour: int, minute: int = 0) -> datetime:
    return datetime(2025, 1, 6, hour, minute)


def timed(item_id: int, hour: int, minute: int = 0, length: int = 60) -> Task:
    return Task(f"t{item_id}", id=item_id, start_time=at(hour, minute), duration=timedelta(minutes=length))


class TestIntervalsOverlap:
    """Tests for the pairwise overlap test."""

    def test_contained_interval(self):
        assert intervals_overlap(timed(1, 10), timed(2, 10, 30, 30))

    def test_partial_overlap(self):
        assert intervals_overlap(timed(1, 10), timed(2, 10, 45, 60))

    def test_disjoint(self):
        assert not intervals_overlap(timed(1, 10), timed(2, 12))

    def test_touching_endpoints_overlap(self):
        """Test 10:00-11:00 and 11:00-12:00 count as overlapping."""
        assert intervals_overlap(timed(1, 10), timed(2, 11))

    def test_symmetric(self):
        pairs = [
            (timed(1, 10), timed(2, 10, 30, 30)),
            (timed(1, 10), timed(2, 12)),
            (timed(1, 10), timed(2, 11)),
            (timed(1, 9, 0, 300), timed(2, 10)),
        ]
        for first, second in pairs:
            assert intervals_overlap(first, second) == intervals_overlap(second, first)

    def test_same_start_always_overlaps(self):
        assert intervals_overlap(timed(1, 10, 0, 0), timed(2, 10, 0, 120))

    def test_untimed_never_overlaps(self):
        assert not intervals_overlap(Task("x", id=1), timed(2, 10))
        assert not intervals_overlap(Task("x", id=1, start_time=at(10)), timed(2, 10))


class TestOrdering:
    """Tests for the ordered view."""

    def test_ordered_by_start(self, schedule):
        schedule.insert(timed(1, 14))
        schedule.insert(timed(2, 9))
        schedule.insert(timed(3, 11))
        assert [i.id for i in schedule.ordered_view()] == [2, 3, 1]

    def test_untimed_items_are_excluded(self, schedule):
        schedule.insert(Task("x", id=1))
        schedule.insert(timed(2, 9))
        assert [i.id for i in schedule.ordered_view()] == [2]
        assert 1 not in schedule

    def test_start_without_duration_is_indexed(self, schedule):
        schedule.insert(Task("x", id=1, start_time=at(8)))
        schedule.insert(timed(2, 9))
        assert [i.id for i in schedule.ordered_view()] == [1, 2]

    def test_same_start_keeps_both(self, schedule):
        schedule.insert(Task("a", id=1, start_time=at(8)))
        schedule.insert(Task("b", id=2, start_time=at(8)))
        assert len(schedule) == 2

    def test_view_is_a_copy(self, schedule):
        schedule.insert(timed(1, 9))
        schedule.ordered_view().clear()
        assert len(schedule) == 1

    def test_reinsert_replaces(self, schedule):
        item = timed(1, 9)
        schedule.insert(item)
        schedule.insert(item)
        assert len(schedule) == 1


class TestRemove:
    """Tests for removal."""

    def test_remove(self, schedule):
        schedule.insert(timed(1, 9))
        schedule.insert(timed(2, 10))
        schedule.remove(timed(1, 9))
        assert [i.id for i in schedule.ordered_view()] == [2]

    def test_remove_after_in_place_change(self, schedule):
        """Test an entry is found by id even after its start moved."""
        item = timed(1, 9)
        schedule.insert(item)
        schedule.insert(timed(2, 10))
        item.start_time = at(16)
        schedule.remove(item)
        assert [i.id for i in schedule.ordered_view()] == [2]

    def test_remove_unknown_is_noop(self, schedule):
        schedule.insert(timed(1, 9))
        schedule.remove_id(42)
        assert len(schedule) == 1

    def test_clear(self, schedule):
        schedule.insert(timed(1, 9))
        schedule.clear()
        assert schedule.ordered_view() == []


class TestFindOverlap:
    """Tests for overlap lookup."""

    def test_finds_conflict(self, schedule):
        schedule.insert(timed(1, 10))
        conflict = schedule.find_overlap(Task("new", start_time=at(10, 30), duration=timedelta(minutes=30)))
        assert conflict is not None and conflict.id == 1

    def test_no_conflict(self, schedule):
        schedule.insert(timed(1, 10))
        assert not schedule.overlaps(timed(0, 12))

    def test_ignores_itself(self, schedule):
        item = timed(1, 10)
        schedule.insert(item)
        assert not schedule.overlaps(item)

    def test_untimed_candidate_never_overlaps(self, schedule):
        schedule.insert(timed(1, 10))
        assert not schedule.overlaps(Task("x", start_time=at(10)))

    def test_finds_long_item_that_started_earlier(self, schedule):
        schedule.insert(timed(1, 6, 0, 600))
        schedule.insert(timed(2, 17))
        assert schedule.find_overlap(timed(0, 12, 0, 10)).id == 1

    def test_subtasks_and_tasks_share_the_index(self, schedule):
        schedule.insert(Subtask("s", id=3, start_time=at(10), duration=timedelta(minutes=60), epic_id=2))
        assert schedule.overlaps(timed(0, 10, 30))
