"""
Deadline Planner Scheduling Engine

Interval arithmetic, daily pacing and greedy slot allocation for
deadline-driven tasks, plus iCalendar export of the result.
Works independently of the API layer.
"""

from .core.scheduler import DeadlineScheduler, DayState, generate_schedule
from .core.time_slot import TimeInterval
from .core.obligations import ObligationIndex
from .export.ics import build_ics

__version__ = "1.0.0"
