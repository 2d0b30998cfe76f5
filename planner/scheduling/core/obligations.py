"""
Obligation index: fast per-day lookup of blocked time.
"""

import logging
from collections import defaultdict
from datetime import date, datetime
from typing import Dict, Iterable, List, Optional

from planner.models import EventKind, RecurrenceKind
from planner.schemas import ScheduledEvent
from .constants import DEFAULT_OBLIGATION_LABEL, OBLIGATION_NOTES
from .time_slot import TimeInterval, parse_interval, weekday_index

logger = logging.getLogger(__name__)


class IndexedObligation:
    """An obligation whose times parsed cleanly."""
    __slots__ = ("label", "interval")

    def __init__(self, label: str, interval: TimeInterval):
        self.label = label
        self.interval = interval

    def to_event(self, day: date) -> ScheduledEvent:
        start, end = self.interval.on(day)
        return ScheduledEvent(
            kind=EventKind.OBLIGATION,
            title=self.label,
            start=start,
            end=end,
            notes=OBLIGATION_NOTES,
        )

    def __repr__(self):
        return f"IndexedObligation({self.label!r}, {self.interval!r})"


class ObligationIndex:
    """
    Groups weekly obligations by weekday (0=Sunday) and one-off obligations by date.
    Daily obligations apply to every day and are kept in a single list.

    Obligations with malformed fields (unparsable times, end <= start, a
    missing or out-of-range weekday, an unreadable date) are left out of the
    index entirely: they neither block time nor render.
    """

    def __init__(self, obligations: Iterable = ()):
        self.weekly: Dict[int, List[IndexedObligation]] = defaultdict(list)
        self.specific: Dict[date, List[IndexedObligation]] = defaultdict(list)
        self.daily: List[IndexedObligation] = []
        self.skipped = []

        for obligation in obligations:
            self.add(obligation)

    def add(self, obligation) -> Optional[IndexedObligation]:
        interval = parse_interval(obligation.start_time, obligation.end_time)
        if interval is None:
            logger.warning(f"⚠️ Skipping obligation '{obligation.label}': bad time range {obligation.start_time}-{obligation.end_time}")
            self.skipped.append(obligation)
            return None

        entry = IndexedObligation((obligation.label or "").strip() or DEFAULT_OBLIGATION_LABEL, interval)
        kind = RecurrenceKind(obligation.kind)

        if kind == RecurrenceKind.WEEKLY:
            if obligation.weekday is None or not 0 <= obligation.weekday <= 6:
                logger.warning(f"⚠️ Skipping obligation '{obligation.label}': bad weekday {obligation.weekday!r}")
                self.skipped.append(obligation)
                return None
            self.weekly[obligation.weekday].append(entry)
        elif kind == RecurrenceKind.SPECIFIC:
            on_date = _parse_date(obligation.date)
            if on_date is None:
                logger.warning(f"⚠️ Skipping obligation '{obligation.label}': bad date {obligation.date!r}")
                self.skipped.append(obligation)
                return None
            self.specific[on_date].append(entry)
        else:
            self.daily.append(entry)

        return entry

    def for_day(self, day: date) -> List[IndexedObligation]:
        """Every obligation that applies on a day: weekly, then specific, then daily."""
        return [
            *self.weekly.get(weekday_index(day), ()),
            *self.specific.get(day, ()),
            *self.daily,
        ]

    def blocked_intervals(self, day: date) -> List[TimeInterval]:
        return sorted(entry.interval for entry in self.for_day(day))

    def events_for_day(self, day: date) -> List[ScheduledEvent]:
        return [entry.to_event(day) for entry in self.for_day(day)]

    def __len__(self):
        return sum(len(v) for v in self.weekly.values()) + sum(len(v) for v in self.specific.values()) + len(self.daily)

    def __repr__(self):
        return f"ObligationIndex({len(self)} obligations, {len(self.skipped)} skipped)"


def _parse_date(value) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError:
        return None
