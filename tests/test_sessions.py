import pytest

from planner.schemas import ScheduleRequest, TaskRow
from planner.services.scheduler_service import (
    NO_ELIGIBLE_TASKS_MESSAGE, NO_EVENTS_MESSAGE, EmptyScheduleError, ScheduleNotApprovedError, ScheduleSessionService,
    SessionNotFoundError, StaleScheduleError, run_schedule
)

from .conftest import MONDAY


@pytest.fixture
def service():
    return ScheduleSessionService()


@pytest.fixture
def request_for(make_settings, make_task):
    def _make(**task_overrides):
        return ScheduleRequest(tasks=[make_task(**task_overrides)], settings=make_settings(load_mode="marathon"))
    return _make


def test_no_eligible_tasks_message(make_settings):
    request = ScheduleRequest(tasks=[TaskRow(title="", estimated_hours=1, deadline="2026-10-22")], settings=make_settings())
    response = run_schedule(request)
    assert response.events == []
    assert response.message == NO_ELIGIBLE_TASKS_MESSAGE


def test_no_events_message(request_for):
    response = run_schedule(request_for(deadline="2026-10-01"))
    assert response.events == []
    assert response.message == NO_EVENTS_MESSAGE
    assert response.unscheduled[0].remaining_hours == 2.0


def test_successful_run_has_no_message(request_for):
    response = run_schedule(request_for())
    assert len(response.events) == 2
    assert response.message is None


def test_export_requires_approval(service, request_for):
    session = service.generate("s1", request_for(), today=MONDAY)
    assert session.version == 1
    assert not session.approved

    with pytest.raises(ScheduleNotApprovedError):
        service.export("s1")

    service.approve("s1", 1)
    assert service.export("s1").startswith("BEGIN:VCALENDAR")


def test_regenerating_withdraws_approval(service, request_for):
    service.generate("s1", request_for(), today=MONDAY)
    service.approve("s1", 1)

    session = service.generate("s1", request_for(hours=3), today=MONDAY)
    assert session.version == 2
    assert not session.approved
    with pytest.raises(ScheduleNotApprovedError):
        service.export("s1")
    with pytest.raises(StaleScheduleError):
        service.approve("s1", 1)


def test_schedule_without_events_cannot_be_approved(service, request_for):
    service.generate("s1", request_for(deadline="2026-10-01"), today=MONDAY)
    with pytest.raises(EmptyScheduleError):
        service.approve("s1", 1)
    assert not service.get_session("s1").approved
    with pytest.raises(ScheduleNotApprovedError):
        service.export("s1")


def test_unknown_and_discarded_sessions(service, request_for):
    with pytest.raises(SessionNotFoundError):
        service.get_session("missing")

    service.generate("s1", request_for(), today=MONDAY)
    service.discard("s1")
    with pytest.raises(SessionNotFoundError):
        service.export("s1")
    service.discard("s1")
