"""
Schedule session service: keeps the latest schedule per session in memory and
gates calendar export behind an explicit approval.
"""

import logging
import threading
from datetime import date
from typing import Dict, Optional

import pytz

from ..schemas import ScheduleRequest, ScheduleResponse, ScheduleResult
from ..scheduling.core.scheduler import DeadlineScheduler
from ..scheduling.core.tasks import is_schedulable_row
from ..scheduling.export.ics import build_ics

logger = logging.getLogger(__name__)

NO_ELIGIBLE_TASKS_MESSAGE = "Add at least one task with a title, a deadline and estimated hours."
NO_EVENTS_MESSAGE = "No events were created. Try widening the workday, removing obligations or extending deadlines."


class SessionNotFoundError(LookupError):
    pass


class StaleScheduleError(Exception):
    pass


class ScheduleNotApprovedError(Exception):
    pass


class EmptyScheduleError(Exception):
    pass


class ScheduleSession:
    """The current schedule of one session plus its approval state."""

    def __init__(self, session_id: str):
        self.session_id = session_id
        self.version = 0
        self.result: Optional[ScheduleResult] = None
        self.message: Optional[str] = None
        self.ics: Optional[str] = None
        self.approved = False

    def __repr__(self):
        return f"ScheduleSession({self.session_id!r}, v{self.version}, approved={self.approved})"


def run_schedule(request: ScheduleRequest, today: Optional[date] = None) -> ScheduleResponse:
    """
    Run the engine for one request and attach the caller-facing message for
    the two empty outcomes: no usable task rows, or no events produced.
    """
    if request.settings.timezone not in pytz.all_timezones_set:
        logger.warning(f"⚠️ Unknown time zone '{request.settings.timezone}'; using it as a calendar tag only")

    if not any(is_schedulable_row(row) for row in request.tasks):
        return ScheduleResponse(message=NO_ELIGIBLE_TASKS_MESSAGE)

    scheduler = DeadlineScheduler(request.settings, today=today)
    result = scheduler.run(request.tasks, request.obligations)
    if not result.events:
        return ScheduleResponse(events=[], unscheduled=result.unscheduled, message=NO_EVENTS_MESSAGE)

    return ScheduleResponse(events=result.events, unscheduled=result.unscheduled)


class ScheduleSessionService:
    """Service to manage schedule sessions in memory."""

    def __init__(self):
        self.sessions: Dict[str, ScheduleSession] = {}
        self._lock = threading.Lock()

    def get_session(self, session_id: str) -> ScheduleSession:
        session = self.sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def generate(self, session_id: str, request: ScheduleRequest, today: Optional[date] = None) -> ScheduleSession:
        """
        Compute a fresh schedule for the session. The previous result and its
        approval are discarded before the new one is stored.
        """
        with self._lock:
            session = self.sessions.setdefault(session_id, ScheduleSession(session_id))
            session.result = None
            session.ics = None
            session.message = None
            session.approved = False

        response = run_schedule(request, today=today)
        ics = build_ics(response.events, request.settings.timezone) if response.events else None

        with self._lock:
            session.version += 1
            session.result = ScheduleResult(events=response.events, unscheduled=response.unscheduled)
            session.message = response.message
            session.ics = ics

        logger.info(f"🗓️ Session {session_id}: generated v{session.version} with {len(response.events)} events")
        return session

    def approve(self, session_id: str, version: int) -> ScheduleSession:
        """Approve the schedule the caller actually reviewed."""
        session = self.get_session(session_id)
        with self._lock:
            if session.result is None or version != session.version:
                raise StaleScheduleError(f"session {session_id} is at version {session.version}, not {version}")
            if session.ics is None:
                raise EmptyScheduleError(f"session {session_id} has no events to approve")
            session.approved = True
        logger.info(f"✅ Session {session_id}: approved v{version}")
        return session

    def export(self, session_id: str) -> str:
        session = self.get_session(session_id)
        if not session.approved or not session.ics:
            raise ScheduleNotApprovedError(f"session {session_id} has no approved schedule")
        return session.ics

    def discard(self, session_id: str) -> None:
        with self._lock:
            if self.sessions.pop(session_id, None) is not None:
                logger.info(f"🗑️ Session {session_id}: discarded")


# Global session service instance
session_service = ScheduleSessionService()
