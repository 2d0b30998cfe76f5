import pytest
from fastapi.testclient import TestClient

from planner.main import app
from planner.services.scheduler_service import session_service

client = TestClient(app)

SETTINGS = {
    "start_date": "2026-10-19",
    "workday_start": "09:00",
    "workday_end": "17:00",
    "daily_max_hours": 4,
    "max_task_hours_per_day": 4,
    "block_minutes": 60,
    "break_minutes": 0,
    "buffer_hours": 0,
    "load_mode": "marathon",
    "timezone": "Asia/Jerusalem",
}

PAYLOAD = {
    "tasks": [{"title": "Essay", "course": "History", "estimated_hours": 2, "deadline": "2026-10-22"}],
    "obligations": [
        {"kind": "weekly", "weekday": 1, "start_time": "12:00", "end_time": "13:00", "label": "Seminar"},
        {"kind": "specific", "date": "2026-10-20", "start_time": "09:00", "end_time": "10:00", "label": "Meeting"},
    ],
    "settings": SETTINGS,
}


@pytest.fixture(autouse=True)
def clear_sessions():
    yield
    session_service.sessions.clear()


def test_health():
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_schedule_returns_events():
    response = client.post("/schedule/", json=PAYLOAD)
    assert response.status_code == 200
    body = response.json()

    tasks = [e for e in body["events"] if e["kind"] == "task"]
    assert [e["start"] for e in tasks] == ["2026-10-19T09:00:00", "2026-10-19T10:00:00"]
    assert tasks[0]["title"] == "History • Essay – Reading and planning"
    assert body["message"] is None


def test_schedule_without_usable_tasks():
    response = client.post("/schedule/", json={"tasks": [{"title": "Essay"}], "settings": SETTINGS})
    assert response.status_code == 200
    assert response.json()["events"] == []
    assert "at least one task" in response.json()["message"]


def test_block_and_break_are_clamped():
    settings = dict(SETTINGS, block_minutes=500, break_minutes=-5)
    response = client.post("/schedule/", json=dict(PAYLOAD, settings=settings))
    assert response.status_code == 200
    tasks = [e for e in response.json()["events"] if e["kind"] == "task"]
    assert tasks[0]["start"] == "2026-10-19T09:00:00"
    assert tasks[0]["end"] == "2026-10-19T11:00:00"


def test_unknown_obligation_kind_is_rejected():
    payload = dict(PAYLOAD, obligations=[{"kind": "monthly", "start_time": "09:00", "end_time": "10:00"}])
    assert client.post("/schedule/", json=payload).status_code == 422


def test_ics_download():
    response = client.post("/schedule/ics", json=PAYLOAD)
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/calendar")
    assert "schedule.ics" in response.headers["content-disposition"]
    assert response.text.count("BEGIN:VEVENT") == 4


def test_ics_without_events_is_unprocessable():
    payload = dict(PAYLOAD, tasks=[{"title": "Old", "estimated_hours": 1, "deadline": "2026-10-01"}], obligations=[])
    assert client.post("/schedule/ics", json=payload).status_code == 422


def test_session_flow():
    generated = client.post("/sessions/abc/generate", json=PAYLOAD).json()
    assert generated["version"] == 1
    assert generated["approved"] is False
    assert generated["has_calendar"] is True

    assert client.get("/sessions/abc/schedule.ics").status_code == 409
    assert client.post("/sessions/abc/approve", params={"version": 2}).status_code == 409

    approved = client.post("/sessions/abc/approve", params={"version": 1})
    assert approved.status_code == 200
    assert approved.json()["approved"] is True

    download = client.get("/sessions/abc/schedule.ics")
    assert download.status_code == 200
    assert download.text.startswith("BEGIN:VCALENDAR")

    assert client.delete("/sessions/abc").status_code == 200
    assert client.get("/sessions/abc").status_code == 404


def test_unknown_session():
    assert client.get("/sessions/nope").status_code == 404
    assert client.post("/sessions/nope/approve", params={"version": 1}).status_code == 404
    assert client.get("/sessions/nope/schedule.ics").status_code == 404


def test_malformed_obligation_rows_are_skipped():
    obligations = [
        {"kind": "weekly", "weekday": 9, "start_time": "09:00", "end_time": "17:00"},
        {"kind": "daily", "start_time": "09:00"},
        {"kind": "specific", "start_time": "09:00", "end_time": "17:00"},
    ]
    response = client.post("/schedule/", json=dict(PAYLOAD, obligations=obligations))
    assert response.status_code == 200
    events = response.json()["events"]
    assert all(e["kind"] == "task" for e in events)
    assert events[0]["start"] == "2026-10-19T09:00:00"


def test_empty_schedule_cannot_be_approved():
    payload = dict(PAYLOAD, tasks=[{"title": "Old", "estimated_hours": 1, "deadline": "2026-10-01"}])
    generated = client.post("/sessions/empty/generate", json=payload).json()
    assert generated["has_calendar"] is False

    response = client.post("/sessions/empty/approve", params={"version": 1})
    assert response.status_code == 409
    assert "no events" in response.json()["detail"]
