"""
Run-scoped bookkeeping of allocated minutes per day and per task per day.
"""

from collections import defaultdict
from datetime import date
from typing import Dict, Optional, Tuple


class AllocationLedger:
    """
    Minutes allocated so far in one scheduling run. A new ledger is created
    for every run, so nothing carries over between runs.
    """

    def __init__(self):
        self.day_minutes: Dict[date, int] = defaultdict(int)
        self.task_day_minutes: Dict[Tuple[str, date], int] = defaultdict(int)
        self.last_task_by_day: Dict[date, Optional[str]] = {}

    def study_minutes(self, day: date) -> int:
        return self.day_minutes.get(day, 0)

    def task_minutes(self, task_id: str, day: date) -> int:
        return self.task_day_minutes.get((task_id, day), 0)

    def last_task(self, day: date) -> Optional[str]:
        return self.last_task_by_day.get(day)

    def record(self, day: date, task_id: str, minutes: int) -> None:
        self.day_minutes[day] += minutes
        self.task_day_minutes[(task_id, day)] += minutes
        self.last_task_by_day[day] = task_id

    def __repr__(self):
        return f"AllocationLedger({sum(self.day_minutes.values())}min over {len(self.day_minutes)} days)"
