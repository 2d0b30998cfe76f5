"""
Session endpoints: generate, review, approve, then download.
"""

from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import Response

from ..schemas import ApprovalResponse, ScheduleRequest, SessionScheduleResponse
from ..services.scheduler_service import (
    session_service, ScheduleSession, SessionNotFoundError, StaleScheduleError, ScheduleNotApprovedError,
    EmptyScheduleError
)
from .schedule import ICS_MEDIA_TYPE, ICS_FILENAME

router = APIRouter()


def _to_response(session: ScheduleSession) -> SessionScheduleResponse:
    result = session.result
    return SessionScheduleResponse(
        session_id=session.session_id,
        version=session.version,
        approved=session.approved,
        has_calendar=session.ics is not None,
        events=result.events if result else [],
        unscheduled=result.unscheduled if result else [],
        message=session.message,
    )


@router.post("/{session_id}/generate", response_model=SessionScheduleResponse)
def generate_schedule(session_id: str, request: ScheduleRequest):
    """Run the planner for the session. Any earlier approval is withdrawn."""
    session = session_service.generate(session_id, request)
    return _to_response(session)


@router.get("/{session_id}", response_model=SessionScheduleResponse)
def get_session(session_id: str):
    try:
        session = session_service.get_session(session_id)
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail="Session not found")
    return _to_response(session)


@router.post("/{session_id}/approve", response_model=ApprovalResponse)
def approve_schedule(session_id: str, version: int = Query(..., description="Version of the schedule that was reviewed")):
    try:
        session = session_service.approve(session_id, version)
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail="Session not found")
    except StaleScheduleError:
        raise HTTPException(status_code=409, detail="Schedule changed since it was reviewed; review it again")
    except EmptyScheduleError:
        raise HTTPException(status_code=409, detail="The schedule has no events to approve")
    return ApprovalResponse(session_id=session.session_id, version=session.version, approved=session.approved)


@router.get("/{session_id}/schedule.ics")
def download_schedule(session_id: str):
    try:
        content = session_service.export(session_id)
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail="Session not found")
    except ScheduleNotApprovedError:
        raise HTTPException(status_code=409, detail="Approve the schedule before downloading it")

    return Response(
        content=content,
        media_type=ICS_MEDIA_TYPE,
        headers={"Content-Disposition": f"attachment; filename={ICS_FILENAME}"},
    )


@router.delete("/{session_id}")
def discard_session(session_id: str):
    session_service.discard(session_id)
    return {"message": f"Session {session_id} discarded"}
