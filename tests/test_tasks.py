from datetime import date, datetime

from planner.schemas import TaskRow
from planner.scheduling.core.tasks import is_schedulable_row, normalize_tasks, parse_deadline_date, summarize_unscheduled


def test_rows_without_title_hours_or_deadline_are_skipped():
    rows = [
        TaskRow(title="  ", estimated_hours=2, deadline="2026-10-22"),
        TaskRow(title="No hours", estimated_hours=0, deadline="2026-10-22"),
        TaskRow(title="No deadline", estimated_hours=2),
        TaskRow(title="Bad deadline", estimated_hours=2, deadline="next week"),
        TaskRow(title="Good", estimated_hours=2, deadline="2026-10-22"),
    ]
    tasks = normalize_tasks(rows)
    assert [t.title for t in tasks] == ["Good"]
    assert not is_schedulable_row(rows[3])


def test_deadline_is_end_of_day():
    task = normalize_tasks([TaskRow(title="Essay", estimated_hours=1.5, deadline="2026-10-22")])[0]
    assert task.deadline == datetime(2026, 10, 22, 23, 59)
    assert task.total_minutes == task.remaining_minutes == 90


def test_tasks_are_ordered_by_deadline_priority_and_size():
    rows = [
        TaskRow(id="late", title="Late", estimated_hours=1, deadline="2026-10-25", priority=5),
        TaskRow(id="small", title="Small", estimated_hours=1, deadline="2026-10-22", priority=3),
        TaskRow(id="big", title="Big", estimated_hours=3, deadline="2026-10-22", priority=3),
        TaskRow(id="urgent", title="Urgent", estimated_hours=1, deadline="2026-10-22", priority=4),
    ]
    assert [t.id for t in normalize_tasks(rows)] == ["urgent", "big", "small", "late"]


def test_duplicate_ids_are_made_unique():
    rows = [
        TaskRow(id="x", title="One", estimated_hours=1, deadline="2026-10-22"),
        TaskRow(id="x", title="Two", estimated_hours=1, deadline="2026-10-22"),
    ]
    assert len({t.id for t in normalize_tasks(rows)}) == 2


def test_allocate_never_goes_below_zero():
    task = normalize_tasks([TaskRow(title="Essay", estimated_hours=1, deadline="2026-10-22")])[0]
    task.allocate(50)
    task.allocate(50)
    assert task.remaining_minutes == 0
    assert task.allocated_minutes == 60


def test_unscheduled_summary_rounds_to_one_decimal():
    task = normalize_tasks([TaskRow(title="Essay", estimated_hours=2, deadline="2026-10-22")])[0]
    task.allocate(50)
    assert summarize_unscheduled([task])[0].remaining_hours == 1.2


def test_parse_deadline_date():
    assert parse_deadline_date("2026-10-22") == date(2026, 10, 22)
    assert parse_deadline_date("2026-10-22T10:00") == date(2026, 10, 22)
    assert parse_deadline_date("22/10/2026") is None
    assert parse_deadline_date("") is None
