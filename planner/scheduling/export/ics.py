"""
iCalendar (RFC 5545) export of a schedule.
"""

from datetime import datetime
from typing import Iterable, Optional

import pytz
from icalendar import Calendar, Event

from planner.config import config
from ..core.constants import EPOCH_FALLBACK


def coerce_datetime(value) -> datetime:
    """Accept datetimes or ISO strings; anything unreadable becomes the epoch."""
    if isinstance(value, datetime):
        return value.replace(tzinfo=None)
    try:
        return datetime.fromisoformat(str(value).strip()).replace(tzinfo=None)
    except ValueError:
        return datetime.fromisoformat(EPOCH_FALLBACK)


def utc_stamp(value: Optional[datetime] = None) -> datetime:
    if value is None:
        return datetime.now(pytz.UTC)
    if value.tzinfo is None:
        return pytz.UTC.localize(value)
    return value.astimezone(pytz.UTC)


def _start_key(event) -> datetime:
    return coerce_datetime(event.start)


def create_calendar() -> Calendar:
    calendar = Calendar()
    calendar.add("prodid", config.prodid)
    calendar.add("version", "2.0")
    calendar.add("calscale", "GREGORIAN")
    calendar.add("method", "PUBLISH")
    return calendar


def create_event(event, uid: str, tzid: str, stamp: datetime) -> Event:
    """One VEVENT; start and end are local wall-clock times tagged with TZID."""
    vevent = Event()
    vevent.add("uid", uid)
    vevent.add("dtstamp", stamp)
    vevent.add("dtstart", coerce_datetime(event.start), parameters={"TZID": tzid})
    vevent.add("dtend", coerce_datetime(event.end), parameters={"TZID": tzid})
    vevent.add("summary", event.title or "")
    if event.notes:
        vevent.add("description", event.notes)
    return vevent


def build_ics(events: Iterable, timezone: Optional[str] = None, now: Optional[datetime] = None) -> str:
    """
    Render events as a VCALENDAR document.

    Events are stable-sorted by start. UIDs are derived from the sorted
    position, so the same events always produce the same document apart from
    DTSTAMP, which is taken from `now` (UTC now by default).
    """
    tzid = timezone or config.timezone
    stamp = utc_stamp(now)

    calendar = create_calendar()
    for index, event in enumerate(sorted(events, key=_start_key), start=1):
        calendar.add_component(create_event(event, f"event-{index}@{config.uid_domain}", tzid, stamp))

    return calendar.to_ical().decode("utf-8")
