"""
Time interval representation for the scheduling system.
"""

import re
from datetime import date, datetime, timedelta
from typing import Optional

_HHMM = re.compile(r"^\s*(\d{1,2}):(\d{1,2})\s*$")


class TimeInterval:
    """
    A half-open [start, end) span of minutes within a single calendar day.
    Minute 0 is midnight; 1440 is the following midnight.
    """
    __slots__ = ("start", "end")

    def __init__(self, start: int, end: int):
        self.start = start
        self.end = end

    def duration(self) -> int:
        return self.end - self.start

    def is_valid(self) -> bool:
        return self.end > self.start

    def overlaps(self, other: "TimeInterval") -> bool:
        return self.start < other.end and other.start < self.end

    def on(self, day: date) -> tuple[datetime, datetime]:
        """Anchor the interval on a calendar day."""
        return at_minute(day, self.start), at_minute(day, self.end)

    def __lt__(self, other):
        return (self.start, self.end) < (other.start, other.end)

    def __eq__(self, other):
        if not isinstance(other, TimeInterval):
            return NotImplemented
        return self.start == other.start and self.end == other.end

    def __repr__(self):
        return f"TimeInterval({format_minutes(self.start)} - {format_minutes(self.end)})"


def parse_time_to_minutes(value) -> Optional[int]:
    """Parse an 'HH:MM' string into minutes since midnight, or None if malformed."""
    if not isinstance(value, str):
        return None
    match = _HHMM.match(value)
    if not match:
        return None
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        return None
    return hours * 60 + minutes


def parse_interval(start_time, end_time) -> Optional[TimeInterval]:
    """Build an interval from two 'HH:MM' strings; None when either is malformed or end <= start."""
    start = parse_time_to_minutes(start_time)
    end = parse_time_to_minutes(end_time)
    if start is None or end is None:
        return None
    interval = TimeInterval(start, end)
    return interval if interval.is_valid() else None


def at_minute(day: date, minutes: int) -> datetime:
    return datetime(day.year, day.month, day.day) + timedelta(minutes=minutes)


def format_minutes(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def weekday_index(day: date) -> int:
    """Weekday number with 0=Sunday through 6=Saturday."""
    return (day.weekday() + 1) % 7
