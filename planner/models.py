from datetime import date, datetime, timedelta
from typing import Sequence
import enum

# Enums

class LoadMode(str, enum.Enum):
    RELAXED = "relaxed"
    MEDIUM = "medium"
    MARATHON = "marathon"

class EventKind(str, enum.Enum):
    TASK = "task"
    OBLIGATION = "obligation"

class RecurrenceKind(str, enum.Enum):
    WEEKLY = "weekly"        # Bound to a weekday (0=Sunday .. 6=Saturday)
    SPECIFIC = "specific"    # Bound to one calendar date
    DAILY = "daily"          # Applies every day


# Run-scoped records. These are built fresh by the normalizer for every
# scheduling run and mutated only by the allocator.

class PhasePlan:
    """
    Ordered sub-phase labels for a task, each with a planned number of minutes.

    The cursor points at the phase the next block will be labelled with. It
    moves on once the minutes spent on the current phase reach its plan and
    wraps back to the first phase after the last one. Minutes past the plan
    carry into the next phase, but one block moves the cursor by one phase at
    most, so every phase labels at least one block.
    """

    def __init__(self, labels: Sequence[str], minutes: Sequence[int]):
        if not labels:
            raise ValueError("a phase plan needs at least one label")
        if len(labels) != len(minutes):
            raise ValueError("labels and minutes must have the same length")
        self.labels = tuple(labels)
        self.minutes = tuple(minutes)
        self.cursor = 0
        self.spent = 0

    @property
    def current(self) -> str:
        return self.labels[self.cursor]

    def advance(self, allocated: int) -> None:
        self.spent += allocated
        if self.spent < self.minutes[self.cursor]:
            return
        overflow = self.spent - self.minutes[self.cursor]
        self.cursor = (self.cursor + 1) % len(self.labels)
        self.spent = max(0, min(overflow, self.minutes[self.cursor] - 1))

    def __len__(self):
        return len(self.labels)

    def __repr__(self):
        return f"PhasePlan({list(zip(self.labels, self.minutes))}, cursor={self.cursor})"


class PlannedTask:
    """A task row after normalization, with its remaining-work counter."""

    def __init__(self, id: str, course: str, title: str, deadline_date: date, deadline: datetime,
                 priority: int, total_minutes: int, notes: str, phases: PhasePlan):
        self.id = id
        self.course = course
        self.title = title
        self.deadline_date = deadline_date
        self.deadline = deadline
        self.priority = priority
        self.total_minutes = total_minutes
        self.remaining_minutes = total_minutes
        self.notes = notes
        self.phases = phases

    @property
    def allocated_minutes(self) -> int:
        return self.total_minutes - self.remaining_minutes

    def latest_end(self, buffer_minutes: int) -> datetime:
        """Last instant a block of this task may end at."""
        return self.deadline - timedelta(minutes=buffer_minutes)

    def allocate(self, minutes: int) -> str:
        """Consume minutes from the remaining work and return the phase label for the block."""
        minutes = max(0, min(minutes, self.remaining_minutes))
        label = self.phases.current
        self.phases.advance(minutes)
        self.remaining_minutes -= minutes
        return label

    @property
    def display_title(self) -> str:
        return f"{self.course} • {self.title}" if self.course else self.title

    def __repr__(self):
        return f"PlannedTask({self.title!r}, remaining={self.remaining_minutes}/{self.total_minutes}, deadline={self.deadline_date})"
