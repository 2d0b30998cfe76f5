from pydantic import BaseModel, Field, field_validator
from datetime import date, datetime
from typing import Optional, List, Literal, Union, Annotated

from .config import config
from .models import LoadMode, EventKind

MIN_BLOCK_MINUTES = 15
MAX_BLOCK_MINUTES = 240
MIN_BREAK_MINUTES = 0
MAX_BREAK_MINUTES = 60

# ----------------- Input rows ---------------------

class TaskRow(BaseModel):
    id: Optional[str] = None
    course: str = ""
    title: str = ""
    # Kept as text: rows with a malformed deadline are skipped by the normalizer, not rejected
    deadline: Optional[str] = None
    estimated_hours: float = 0.0
    priority: int = 3
    notes: str = ""


# Obligation fields are optional; rows with missing or malformed values are
# skipped by the obligation index.

class WeeklyObligation(BaseModel):
    kind: Literal["weekly"] = "weekly"
    weekday: Optional[int] = None  # 0=Sunday .. 6=Saturday
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    label: str = ""

    class Config:
        frozen = True


class SpecificObligation(BaseModel):
    kind: Literal["specific"] = "specific"
    date: Optional[str] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    label: str = ""

    class Config:
        frozen = True


class DailyObligation(BaseModel):
    kind: Literal["daily"] = "daily"
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    label: str = ""

    class Config:
        frozen = True


ObligationBlock = Annotated[
    Union[WeeklyObligation, SpecificObligation, DailyObligation],
    Field(discriminator="kind"),
]

# ----------------- Settings ---------------------

class SchedulerSettings(BaseModel):
    timezone: str = Field(default_factory=lambda: config.timezone)
    start_date: Optional[date] = None  # None means today
    workday_start: str = Field(default_factory=lambda: config.workday_start)
    workday_end: str = Field(default_factory=lambda: config.workday_end)
    daily_max_hours: float = Field(default_factory=lambda: config.daily_max_hours, ge=0)
    max_task_hours_per_day: float = Field(default_factory=lambda: config.max_task_hours_per_day, ge=0)
    block_minutes: int = Field(default_factory=lambda: config.block_minutes)
    break_minutes: int = Field(default_factory=lambda: config.break_minutes)
    buffer_hours: float = Field(default_factory=lambda: config.buffer_hours)
    working_weekdays: List[int] = Field(default_factory=lambda: list(config.working_weekdays))
    load_mode: LoadMode = Field(default_factory=lambda: LoadMode(config.load_mode))

    @field_validator("block_minutes", mode="before")
    @classmethod
    def clamp_block_minutes(cls, value):
        return _clamp(_to_minutes(value), MIN_BLOCK_MINUTES, MAX_BLOCK_MINUTES)

    @field_validator("break_minutes", mode="before")
    @classmethod
    def clamp_break_minutes(cls, value):
        return _clamp(_to_minutes(value), MIN_BREAK_MINUTES, MAX_BREAK_MINUTES)

    @field_validator("buffer_hours")
    @classmethod
    def non_negative_buffer(cls, value):
        return max(0.0, value)

    @field_validator("working_weekdays")
    @classmethod
    def known_weekdays(cls, value):
        return sorted({day for day in value if 0 <= day <= 6})

    @property
    def buffer_minutes(self) -> int:
        return round(self.buffer_hours * 60)


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def _to_minutes(value) -> int:
    try:
        return round(float(value))
    except (TypeError, ValueError):
        raise ValueError(f"expected a number of minutes, got {value!r}")

# ----------------- Requests ---------------------

class ScheduleRequest(BaseModel):
    tasks: List[TaskRow] = Field(default_factory=list)
    obligations: List[ObligationBlock] = Field(default_factory=list)
    settings: SchedulerSettings = Field(default_factory=SchedulerSettings)

# ----------------- Results ---------------------

class ScheduledEvent(BaseModel):
    kind: EventKind
    title: str
    start: datetime
    end: datetime
    course: Optional[str] = None
    notes: Optional[str] = None

    class Config:
        frozen = True


class UnscheduledTask(BaseModel):
    title: str
    remaining_hours: float


class ScheduleResult(BaseModel):
    events: List[ScheduledEvent] = Field(default_factory=list)
    unscheduled: List[UnscheduledTask] = Field(default_factory=list)


class ScheduleResponse(ScheduleResult):
    message: Optional[str] = None


class SessionScheduleResponse(ScheduleResponse):
    session_id: str
    version: int
    approved: bool
    has_calendar: bool


class ApprovalResponse(BaseModel):
    session_id: str
    version: int
    approved: bool
