"""
Hard constraints deciding whether a task may take the next block.
"""

from datetime import date, datetime, timedelta
from typing import Optional
from planner.models import PlannedTask
from ..core.constants import MIN_SLOT_MINUTES
from ..core.ledger import AllocationLedger


def candidate_allocation(task: PlannedTask, block_minutes: int) -> int:
    return min(block_minutes, task.remaining_minutes)


def fits_day_budget(ledger: AllocationLedger, day: date, minutes: int, day_budget: int) -> bool:
    return ledger.study_minutes(day) + minutes <= day_budget


def fits_task_cap(ledger: AllocationLedger, task: PlannedTask, day: date, minutes: int, task_cap: int) -> bool:
    return ledger.task_minutes(task.id, day) + minutes <= task_cap


def meets_deadline(task: PlannedTask, slot_start: datetime, minutes: int, buffer_minutes: int) -> bool:
    """The block must end no later than the deadline minus the safety buffer."""
    return slot_start + timedelta(minutes=minutes) <= task.latest_end(buffer_minutes)


def eligible_allocation(task: PlannedTask, slot_start: datetime, block_minutes: int, ledger: AllocationLedger,
                        day_budget: int, task_cap: int, buffer_minutes: int) -> Optional[int]:
    """
    Minutes this task would get in the block starting at slot_start, or None
    if it may not take the block at all.
    """
    if task.remaining_minutes <= 0:
        return None

    day = slot_start.date()
    minutes = candidate_allocation(task, block_minutes)
    if minutes < MIN_SLOT_MINUTES:
        return None
    if not fits_day_budget(ledger, day, minutes, day_budget):
        return None
    if not fits_task_cap(ledger, task, day, minutes, task_cap):
        return None
    if not meets_deadline(task, slot_start, minutes, buffer_minutes):
        return None
    return minutes
