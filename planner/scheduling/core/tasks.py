"""
Task normalization: raw task rows into run-scoped planned tasks.
"""

import logging
from datetime import date, datetime
from typing import Iterable, List, Optional

from planner.models import PlannedTask
from planner.schemas import TaskRow, UnscheduledTask
from .constants import DEADLINE_TIME
from ..algorithms.chunking import build_phase_plan

logger = logging.getLogger(__name__)


def parse_deadline_date(value) -> Optional[date]:
    if not value or not isinstance(value, str):
        return None
    try:
        return date.fromisoformat(value.strip()[:10])
    except ValueError:
        return None


def is_schedulable_row(row: TaskRow) -> bool:
    """A row can be planned when it has a title, positive hours and a readable deadline."""
    return bool(
        (row.title or "").strip()
        and row.estimated_hours
        and row.estimated_hours > 0
        and parse_deadline_date(row.deadline)
    )


def normalize_tasks(rows: Iterable[TaskRow]) -> List[PlannedTask]:
    """
    Build planned tasks from the rows that can be scheduled, ordered by
    deadline, then priority (high first), then remaining work (large first).
    Rows that don't qualify are skipped.
    """
    tasks = []
    seen_ids = set()
    for index, row in enumerate(rows):
        if not is_schedulable_row(row):
            logger.debug(f"Skipping task row {index}: missing title, hours or deadline")
            continue

        total_minutes = round(row.estimated_hours * 60)
        if total_minutes <= 0:
            continue

        task_id = row.id or f"task-{index + 1}"
        if task_id in seen_ids:
            task_id = f"{task_id}-{index + 1}"
        seen_ids.add(task_id)

        title = row.title.strip()
        deadline_date = parse_deadline_date(row.deadline)
        tasks.append(PlannedTask(
            id=task_id,
            course=(row.course or "").strip(),
            title=title,
            deadline_date=deadline_date,
            deadline=datetime.combine(deadline_date, DEADLINE_TIME),
            priority=row.priority,
            total_minutes=total_minutes,
            notes=row.notes or "",
            phases=build_phase_plan(row.notes, row.estimated_hours, title, total_minutes),
        ))

    tasks.sort(key=lambda t: (t.deadline, -t.priority, -t.remaining_minutes))
    return tasks


def summarize_unscheduled(tasks: Iterable[PlannedTask]) -> List[UnscheduledTask]:
    return [
        UnscheduledTask(title=task.title, remaining_hours=round(task.remaining_minutes / 60, 1))
        for task in tasks
        if task.remaining_minutes > 0
    ]
