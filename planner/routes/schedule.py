"""
Schedule API endpoints: one-shot runs without session state.
"""

from fastapi import APIRouter, HTTPException
from fastapi.responses import Response

from ..schemas import ScheduleRequest, ScheduleResponse
from ..services.scheduler_service import run_schedule
from ..scheduling.export.ics import build_ics

router = APIRouter()

ICS_MEDIA_TYPE = "text/calendar; charset=utf-8"
ICS_FILENAME = "schedule.ics"


@router.post("/", response_model=ScheduleResponse)
def create_schedule(request: ScheduleRequest):
    """
    Plan the given tasks around the obligations and return the events.
    Nothing is stored; every call is an independent run.
    """
    return run_schedule(request)


@router.post("/ics")
def create_schedule_ics(request: ScheduleRequest):
    """Plan and return the result directly as an iCalendar file."""
    response = run_schedule(request)
    if not response.events:
        raise HTTPException(status_code=422, detail=response.message)

    return Response(
        content=build_ics(response.events, request.settings.timezone),
        media_type=ICS_MEDIA_TYPE,
        headers={"Content-Disposition": f"attachment; filename={ICS_FILENAME}"},
    )
