"""
Priority and urgency scoring for picking the next task.
"""

from datetime import date, datetime
from typing import Optional
from planner.models import PlannedTask

MAX_URGENCY = 10.0
URGENCY_WEIGHT = 2.0
REMAINING_BLOCKS_WEIGHT = 0.1
REPEAT_PENALTY = 0.5


def calculate_urgency_score(task: PlannedTask, day: date) -> float:
    """
    Urgency from the days left until the deadline, counted from the start of
    the day being planned (0.0 - 10.0). Due today or overdue is maximal.
    """
    day_start = datetime(day.year, day.month, day.day)
    days_left = (task.deadline - day_start).total_seconds() / 86400
    if days_left <= 0:
        return MAX_URGENCY
    return min(MAX_URGENCY, MAX_URGENCY / days_left)


def calculate_diversity_penalty(task: PlannedTask, last_task_id: Optional[str]) -> float:
    """Halve the score of the task that took the previous block of the day."""
    if last_task_id is not None and task.id == last_task_id:
        return REPEAT_PENALTY
    return 1.0


def calculate_task_score(task: PlannedTask, day: date, block_minutes: int, last_task_id: Optional[str]) -> float:
    """
    Score a task for the next block:
    (urgency * 2 + priority + remaining_blocks * 0.1) * diversity_penalty
    """
    urgency = calculate_urgency_score(task, day)
    remaining_blocks = task.remaining_minutes / block_minutes
    base = (URGENCY_WEIGHT * urgency) + task.priority + (REMAINING_BLOCKS_WEIGHT * remaining_blocks)
    return base * calculate_diversity_penalty(task, last_task_id)
