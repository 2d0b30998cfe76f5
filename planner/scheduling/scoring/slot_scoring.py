"""
Ranking of eligible tasks for a slot.
"""

from datetime import date
from typing import List, Optional, Sequence, Tuple
from planner.models import PlannedTask
from .priority_scoring import calculate_task_score


def rank_candidates(candidates: Sequence[PlannedTask], day: date, block_minutes: int,
                    last_task_id: Optional[str]) -> List[Tuple[float, PlannedTask]]:
    """Score every candidate and sort highest first. Ties keep the candidates' order."""
    scored = [(calculate_task_score(task, day, block_minutes, last_task_id), task) for task in candidates]
    scored.sort(key=lambda x: x[0], reverse=True)
    return scored


def choose_task(candidates: Sequence[PlannedTask], day: date, block_minutes: int,
                last_task_id: Optional[str]) -> Optional[PlannedTask]:
    """
    Pick the best-scoring candidate. If that would repeat the previous block
    and another candidate exists, the best non-repeat is taken instead.
    """
    scored = rank_candidates(candidates, day, block_minutes, last_task_id)
    if not scored:
        return None

    chosen = scored[0][1]
    if last_task_id is not None and chosen.id == last_task_id and len(scored) > 1:
        for _, task in scored:
            if task.id != last_task_id:
                return task
    return chosen
