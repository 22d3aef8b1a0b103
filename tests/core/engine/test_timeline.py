"""
Unit tests for the Timeline turn order.

Tests speed-driven scheduling, tie-breaks and cancelling a unit's turns.
"""

from autobattler.core.engine.timeline import TimelineEntry


class TestTimelineEntry:

    def test_ordered_by_time_then_sequence(self):
        early = TimelineEntry(execution_time=5, sequence_id=9, unit_id="a")
        tied_first = TimelineEntry(execution_time=10, sequence_id=1, unit_id="b")
        tied_second = TimelineEntry(execution_time=10, sequence_id=2, unit_id="c")

        assert sorted([tied_second, tied_first, early]) == [early, tied_first, tied_second]


class TestTimeline:
    """Test Timeline functionality."""

    def test_timeline_creation(self, timeline):
        assert timeline.current_time == 0
        assert timeline.pop_next() is None
        assert timeline.get_preview(5) == []

    def test_schedule_unit_uses_turn_delay(self, timeline, make_unit):
        unit = make_unit(speed=50)
        entry = timeline.schedule_unit(unit)

        assert entry.unit_id == unit.unit_id
        assert entry.execution_time == 2000

    def test_faster_unit_acts_first(self, timeline, make_unit):
        slow = make_unit(speed=40)
        fast = make_unit(speed=80)
        timeline.schedule_unit(slow)
        timeline.schedule_unit(fast)

        assert [entry.unit_id for entry in timeline.get_preview(2)] == [fast.unit_id, slow.unit_id]

    def test_equal_speed_keeps_schedule_order(self, timeline, make_unit):
        first = make_unit()
        second = make_unit()
        timeline.schedule_unit(first)
        timeline.schedule_unit(second)

        assert timeline.pop_next().unit_id == first.unit_id
        assert timeline.pop_next().unit_id == second.unit_id

    def test_pop_advances_time_and_reschedule_is_relative(self, timeline, make_unit):
        unit = make_unit(speed=100)
        timeline.schedule_unit(unit)
        timeline.pop_next()
        assert timeline.current_time == 1000

        assert timeline.schedule_unit(unit).execution_time == 2000

    def test_fast_unit_acts_more_often(self, timeline, make_unit):
        slow = make_unit(speed=25)
        fast = make_unit(speed=100)
        units = {slow.unit_id: slow, fast.unit_id: fast}
        for unit in units.values():
            timeline.schedule_unit(unit)

        turns = {slow.unit_id: 0, fast.unit_id: 0}
        while timeline.get_preview(1)[0].execution_time <= 8000:
            entry = timeline.pop_next()
            turns[entry.unit_id] += 1
            timeline.schedule_unit(units[entry.unit_id])

        assert turns[fast.unit_id] == 8
        assert turns[slow.unit_id] == 2

    def test_remove_entry_cancels_pending_turns(self, timeline, make_unit):
        doomed = make_unit(speed=100)
        survivor = make_unit(speed=50)
        timeline.schedule_unit(doomed)
        timeline.schedule_unit(survivor)

        assert timeline.remove_entry(doomed.unit_id) == 1
        assert timeline.remove_entry(doomed.unit_id) == 0
        assert [entry.unit_id for entry in timeline.get_preview(5)] == [survivor.unit_id]

        entry = timeline.pop_next()
        assert entry.unit_id == survivor.unit_id
        assert timeline.current_time == 2000
        assert timeline.pop_next() is None

    def test_remove_unknown_unit(self, timeline):
        assert timeline.remove_entry("nonexistent") == 0

    def test_get_preview_does_not_consume(self, timeline, make_unit):
        for speed in (100, 50, 25):
            timeline.schedule_unit(make_unit(speed=speed))

        preview = timeline.get_preview(2)
        assert [entry.execution_time for entry in preview] == [1000, 2000]
        assert len(timeline.get_preview(10)) == 3
        assert timeline.current_time == 0
