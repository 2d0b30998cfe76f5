from datetime import date, datetime, timedelta

from planner.models import EventKind
from planner.schemas import DailyObligation, SpecificObligation, WeeklyObligation
from planner.scheduling.core.obligations import ObligationIndex
from planner.scheduling.core.time_slot import TimeInterval

from .conftest import MONDAY


def test_obligations_are_grouped_by_recurrence():
    index = ObligationIndex([
        WeeklyObligation(weekday=1, start_time="10:00", end_time="12:00", label="Lecture"),
        SpecificObligation(date="2026-10-19", start_time="14:00", end_time="15:00", label="Dentist"),
        DailyObligation(start_time="13:00", end_time="13:30", label="Lunch"),
    ])

    assert [o.label for o in index.for_day(MONDAY)] == ["Lecture", "Dentist", "Lunch"]
    assert [o.label for o in index.for_day(MONDAY + timedelta(days=1))] == ["Lunch"]
    assert [o.label for o in index.for_day(MONDAY + timedelta(days=7))] == ["Lecture", "Lunch"]
    assert len(index) == 3


def test_blocked_intervals_are_sorted():
    index = ObligationIndex([
        WeeklyObligation(weekday=1, start_time="15:00", end_time="16:00"),
        DailyObligation(start_time="09:00", end_time="10:00"),
    ])
    assert index.blocked_intervals(MONDAY) == [TimeInterval(540, 600), TimeInterval(900, 960)]


def test_malformed_obligations_neither_block_nor_render():
    index = ObligationIndex([
        DailyObligation(start_time="12:00", end_time="11:00", label="Backwards"),
        DailyObligation(start_time="noon", end_time="13:00", label="Unreadable"),
        SpecificObligation(date="someday", start_time="09:00", end_time="10:00", label="No date"),
    ])
    assert len(index) == 0
    assert len(index.skipped) == 3
    assert index.blocked_intervals(MONDAY) == []
    assert index.events_for_day(MONDAY) == []


def test_events_render_on_the_requested_day():
    saturday = date(2026, 10, 24)
    index = ObligationIndex([WeeklyObligation(weekday=6, start_time="08:00", end_time="09:30", label="")])

    events = index.events_for_day(saturday)
    assert len(events) == 1
    event = events[0]
    assert event.kind == EventKind.OBLIGATION
    assert event.title == "Obligation"
    assert event.start == datetime(2026, 10, 24, 8, 0)
    assert event.end == datetime(2026, 10, 24, 9, 30)


def test_weekdays_count_from_sunday():
    sunday = date(2026, 10, 25)
    index = ObligationIndex([WeeklyObligation(weekday=0, start_time="10:00", end_time="11:00", label="Choir")])

    assert [o.label for o in index.for_day(sunday)] == ["Choir"]
    assert index.for_day(MONDAY) == []
    assert index.for_day(sunday - timedelta(days=1)) == []


def test_rows_with_missing_fields_are_skipped():
    index = ObligationIndex([
        WeeklyObligation(start_time="10:00", end_time="11:00", label="No weekday"),
        WeeklyObligation(weekday=9, start_time="10:00", end_time="11:00", label="Bad weekday"),
        DailyObligation(start_time="10:00", label="No end"),
        SpecificObligation(start_time="10:00", end_time="11:00", label="No date"),
        DailyObligation(start_time="07:00", end_time="08:00", label="Run"),
    ])
    assert len(index.skipped) == 4
    assert [o.label for o in index.for_day(MONDAY)] == ["Run"]
