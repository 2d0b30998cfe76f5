from datetime import date, datetime

import pytest

from planner.models import PhasePlan, PlannedTask
from planner.schemas import SchedulerSettings, TaskRow
from planner.scheduling.core.constants import DEADLINE_TIME

# 2026-10-19 is a Monday
MONDAY = date(2026, 10, 19)


@pytest.fixture
def make_settings():
    def _make(**overrides):
        values = {
            "timezone": "Asia/Jerusalem",
            "start_date": MONDAY,
            "workday_start": "09:00",
            "workday_end": "17:00",
            "daily_max_hours": 4,
            "max_task_hours_per_day": 4,
            "block_minutes": 60,
            "break_minutes": 0,
            "buffer_hours": 0,
            "working_weekdays": [1, 2, 3, 4, 5],  # Monday-Friday (0=Sunday)
            "load_mode": "medium",
        }
        values.update(overrides)
        return SchedulerSettings(**values)
    return _make


@pytest.fixture
def make_task():
    def _make(title="Essay", hours=2.0, deadline="2026-10-22", **overrides):
        return TaskRow(title=title, estimated_hours=hours, deadline=deadline, **overrides)
    return _make


@pytest.fixture
def make_planned_task():
    def _make(id="t1", deadline_date=MONDAY, priority=3, minutes=120, labels=("Work",)):
        return PlannedTask(
            id=id,
            course="",
            title=id,
            deadline_date=deadline_date,
            deadline=datetime.combine(deadline_date, DEADLINE_TIME),
            priority=priority,
            total_minutes=minutes,
            notes="",
            phases=PhasePlan(list(labels), [minutes] * len(labels)),
        )
    return _make
