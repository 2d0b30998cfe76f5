"""
Main scheduler class that orchestrates a scheduling run.
"""

import enum
import logging
from datetime import date, datetime, timedelta
from typing import Dict, Iterable, List, Optional

from dateutil import rrule

from planner.models import EventKind, PlannedTask
from planner.schemas import SchedulerSettings, ScheduledEvent, ScheduleResult, TaskRow
from .constants import FALLBACK_WORKDAY_START, FALLBACK_WORKDAY_END, MIN_SLOT_MINUTES
from .ledger import AllocationLedger
from .obligations import ObligationIndex
from .tasks import normalize_tasks, summarize_unscheduled
from .time_slot import TimeInterval, at_minute, parse_time_to_minutes, weekday_index
from ..constraints.time_constraints import eligible_allocation
from ..scoring.slot_scoring import choose_task
from ..scoring.workload_scoring import DayBudget, calculate_daily_budget, calculate_effective_task_minutes
from ..utils.slot_utils import free_windows

logger = logging.getLogger(__name__)


class DayState(str, enum.Enum):
    PENDING = "pending"
    ALLOCATING = "allocating"
    EXHAUSTED = "exhausted"

# ================================
# INITIALIZATION & SETUP
# ================================

class DeadlineScheduler:
    """
    Greedy scheduler that walks the calendar day by day, renders every
    obligation, and fills the free windows of working days with blocks of the
    best-scoring task.

    A scheduler instance holds the settings only. Every call to run() builds
    its own tasks and ledger, so runs never share state.
    """
    def __init__(self, settings: SchedulerSettings, today: Optional[date] = None):
        self.settings = settings
        self.start_date = settings.start_date or today or date.today()
        self.block_minutes = settings.block_minutes
        self.break_minutes = settings.break_minutes
        self.buffer_minutes = settings.buffer_minutes
        self.working_weekdays = frozenset(settings.working_weekdays)
        self.task_cap = calculate_effective_task_minutes(settings.max_task_hours_per_day, settings.load_mode)
        self.workday = self._create_workday()

        self.day_states: Dict[date, DayState] = {}
        self.day_budgets: Dict[date, DayBudget] = {}

    def _create_workday(self) -> TimeInterval:
        start = parse_time_to_minutes(self.settings.workday_start)
        end = parse_time_to_minutes(self.settings.workday_end)
        return TimeInterval(
            FALLBACK_WORKDAY_START if start is None else start,
            FALLBACK_WORKDAY_END if end is None else end,
        )

    def _get_days_in_window(self, end_date: date) -> List[date]:
        """Every calendar day from the start date through end_date."""
        if end_date < self.start_date:
            return []
        return [d.date() for d in rrule.rrule(rrule.DAILY, dtstart=_midnight(self.start_date), until=_midnight(end_date))]

    def _count_working_days(self, from_day: date, end_date: date) -> int:
        """Eligible working days from from_day through end_date, both included."""
        # dateutil counts weekdays from Monday
        if not self.working_weekdays or end_date < from_day:
            return 0
        return rrule.rrule(
            rrule.DAILY,
            byweekday=sorted((day - 1) % 7 for day in self.working_weekdays),
            dtstart=_midnight(from_day),
            until=_midnight(end_date),
        ).count()

    def is_working_day(self, day: date) -> bool:
        return weekday_index(day) in self.working_weekdays

# ================================
# CORE SCHEDULING LOGIC
# ================================

    def run(self, task_rows: Iterable[TaskRow], obligations: Iterable = ()) -> ScheduleResult:
        """Normalize, pace, allocate. Bad rows are skipped, never raised."""
        self.day_states = {}
        self.day_budgets = {}

        tasks = normalize_tasks(task_rows)
        if not tasks:
            logger.info("No schedulable tasks; nothing to plan")
            return ScheduleResult()

        index = ObligationIndex(obligations)
        end_date = max(task.deadline_date for task in tasks)
        ledger = AllocationLedger()
        events: List[ScheduledEvent] = []
        allocating = True

        for day in self._get_days_in_window(end_date):
            # Obligations are shown on every day, working day or not
            events.extend(index.events_for_day(day))

            if not allocating or not self.is_working_day(day):
                continue

            self.day_states[day] = DayState.PENDING
            budget = calculate_daily_budget(
                remaining_minutes=sum(task.remaining_minutes for task in tasks),
                remaining_days=self._count_working_days(day, end_date),
                daily_max_hours=self.settings.daily_max_hours,
                load_mode=self.settings.load_mode,
                block_minutes=self.block_minutes,
            )
            if budget is None:
                self.day_states[day] = DayState.EXHAUSTED
                allocating = False
                continue

            self.day_budgets[day] = budget
            windows = free_windows(self.workday, index.blocked_intervals(day))
            logger.debug(f"{day.isoformat()}: {budget!r}, {sum(w.duration() for w in windows)}min free")
            events.extend(self._schedule_day(day, windows, tasks, ledger, budget.minutes))

        unscheduled = summarize_unscheduled(tasks)
        task_events = sum(1 for e in events if e.kind == EventKind.TASK)
        logger.info(f"Scheduled {task_events} blocks for {len(tasks)} tasks, {len(unscheduled)} left unscheduled")
        return ScheduleResult(events=events, unscheduled=unscheduled)

    def _schedule_day(self, day: date, windows: List[TimeInterval], tasks: List[PlannedTask],
                      ledger: AllocationLedger, day_budget: int) -> List[ScheduledEvent]:
        self.day_states[day] = DayState.ALLOCATING
        events = []
        for window in windows:
            events.extend(self._schedule_window(day, window, tasks, ledger, day_budget))
        self.day_states[day] = DayState.EXHAUSTED
        return events

    def _schedule_window(self, day: date, window: TimeInterval, tasks: List[PlannedTask],
                         ledger: AllocationLedger, day_budget: int) -> List[ScheduledEvent]:
        """Fill one free window block by block until it, the budget, or the work runs out."""
        events = []
        cursor = window.start

        while cursor < window.end:
            if not any(task.remaining_minutes > 0 for task in tasks):
                break
            remaining_window = window.end - cursor
            if remaining_window < MIN_SLOT_MINUTES:
                break
            if ledger.study_minutes(day) >= day_budget:
                break

            block = min(self.block_minutes, remaining_window)
            slot_start = at_minute(day, cursor)

            allocations = {}
            candidates = []
            for task in tasks:
                minutes = eligible_allocation(
                    task, slot_start, block, ledger, day_budget, self.task_cap, self.buffer_minutes
                )
                if minutes is not None:
                    allocations[task.id] = minutes
                    candidates.append(task)

            if not candidates:
                break

            task = choose_task(candidates, day, self.block_minutes, ledger.last_task(day))
            minutes = allocations[task.id]
            phase = task.allocate(minutes)
            ledger.record(day, task.id, minutes)
            events.append(self._create_task_event(task, phase, slot_start, minutes))
            logger.debug(f"   {slot_start:%Y-%m-%d %H:%M} +{minutes}min -> {task.title} ({phase})")

            cursor += minutes + self.break_minutes

        return events

# ================================
# EVENT CREATION
# ================================

    def _create_task_event(self, task: PlannedTask, phase: str, start: datetime, minutes: int) -> ScheduledEvent:
        title = f"{task.display_title} – {phase}" if phase else task.display_title

        notes = [
            f"Deadline: {task.deadline_date:%Y/%m/%d}",
            f"Priority: {task.priority}",
            f"Block: {minutes} minutes",
        ]
        if phase:
            notes.append(f"Phase: {phase}")
        if task.notes.strip():
            notes.append(task.notes.strip())

        return ScheduledEvent(
            kind=EventKind.TASK,
            title=title,
            start=start,
            end=start + timedelta(minutes=minutes),
            course=task.course or None,
            notes="\n".join(notes),
        )

    def __repr__(self):
        return f"DeadlineScheduler(start={self.start_date}, workday={self.workday!r}, block={self.block_minutes}min)"


def _midnight(day: date) -> datetime:
    return datetime(day.year, day.month, day.day)


def generate_schedule(task_rows: Iterable[TaskRow], obligations: Iterable, settings: SchedulerSettings,
                      today: Optional[date] = None) -> ScheduleResult:
    """One-shot convenience wrapper around DeadlineScheduler.run()."""
    return DeadlineScheduler(settings, today=today).run(task_rows, obligations)
