"""Tests for the schedule HTTP API."""

import pytest
from fastapi.testclient import TestClient

from studyplan.main import create_app


@pytest.fixture
def client(store):
    # Entering the client runs the app lifespan, which attaches the event journal
    with TestClient(create_app(store)) as test_client:
        yield test_client


@pytest.fixture
def owner_headers(owner) -> dict[str, str]:
    return {"X-Caller-Id": owner}


@pytest.fixture
def stranger_headers(stranger) -> dict[str, str]:
    return {"X-Caller-Id": stranger}


def test_schedule_info(client, owner):
    response = client.get("/schedule")
    assert response.status_code == 200
    assert response.json() == {"owner": owner, "candidate_name": "Test Candidate"}


def test_exam_lifecycle(client, owner_headers, stranger_headers, clock):
    response = client.put(
        "/schedule/days/1/7/exam",
        json={"title": "Week 1 Exam", "questions": ["Q1", "Q2"]},
        headers=owner_headers,
    )
    assert response.status_code == 201
    assert response.json() == {"event": "ExamSet", "week_number": 1, "day_number": 7}

    response = client.post("/schedule/days/1/7/start", headers=stranger_headers)
    assert response.status_code == 200
    assert response.json()["start_time"] == clock.now

    pending = client.get("/schedule/days/1/7").json()
    assert pending["questions"] == ["Q1", "Q2"]
    assert pending["grade"] == ""

    response = client.post(
        "/schedule/days/1/7/complete",
        json={"grade": "A", "ipfs_link": "ipfs://paper"},
        headers=owner_headers,
    )
    assert response.status_code == 200
    assert response.json()["event"] == "ExamCompleted"

    graded = client.get("/schedule/days/1/7").json()
    assert graded["questions"] == []
    assert graded["grade"] == "A"
    assert graded["ipfs_link"] == "ipfs://paper"

    stats = client.get("/schedule/stats").json()
    assert stats == {"completed_count": 1, "total_count": 42, "percentage": 238, "percentage_display": "2.38%"}

    events = [event["event"] for event in client.get("/schedule/events").json()]
    assert events == ["ExamSet", "ExamStarted", "ExamCompleted"]


def test_reading_day_round_trip(client, owner_headers):
    response = client.put(
        "/schedule/days/2/1/reading",
        json={"subject": "Chemistry", "topics": ["Bonds"], "time": "09:00"},
        headers=owner_headers,
    )
    assert response.status_code == 201

    week = client.get("/schedule/weeks/2").json()
    assert len(week) == 7
    assert week[0]["subject"] == "Chemistry"
    assert [day["kind"] for day in week[1:]] == ["unset"] * 6

    assert client.post("/schedule/days/2/1/unmark", headers=owner_headers).status_code == 200
    assert client.delete("/schedule/days/2/1", headers=owner_headers).json()["event"] == "DayRemoved"


@pytest.mark.parametrize(
    ("method", "path", "body", "status_code", "code"),
    [
        ("put", "/schedule/days/1/1/reading", {"subject": "S"}, 403, "NotOwner"),
        ("delete", "/schedule/days/1/1", None, 403, "NotOwner"),
        ("post", "/schedule/days/1/7/start", None, 409, "NotExamDay"),
    ],
)
def test_stranger_errors(client, stranger_headers, method, path, body, status_code, code):
    kwargs = {"headers": stranger_headers}
    if body is not None:
        kwargs["json"] = body
    response = client.request(method.upper(), path, **kwargs)
    assert response.status_code == status_code
    assert response.json()["detail"]["code"] == code


def test_error_status_mapping(client, owner_headers):
    response = client.get("/schedule/days/7/1")
    assert response.status_code == 400
    assert response.json()["detail"]["code"] == "InvalidWeek"

    response = client.put("/schedule/days/1/3/exam", json={"title": "E"}, headers=owner_headers)
    assert response.status_code == 400
    assert response.json()["detail"]["code"] == "InvalidDay"

    response = client.get("/schedule/days/1/1")
    assert response.status_code == 404
    assert response.json()["detail"] == {
        "code": "DayNotSet",
        "message": "Day is not set",
        "week_number": 1,
        "day_number": 1,
    }

    client.put("/schedule/days/1/1/reading", json={"subject": "S"}, headers=owner_headers)
    response = client.put("/schedule/days/1/1/reading", json={"subject": "T"}, headers=owner_headers)
    assert response.status_code == 409
    assert response.json()["detail"]["code"] == "DayAlreadySet"


def test_missing_caller_header_is_unauthorized(client):
    response = client.delete("/schedule/days/1/1")
    assert response.status_code == 401
    assert response.json()["detail"]["code"] == "MissingCaller"


def test_any_identified_caller_may_start_exam(client, owner_headers):
    client.put("/schedule/days/2/7/exam", json={"title": "Mock", "questions": ["Q1"]}, headers=owner_headers)

    response = client.post("/schedule/days/2/7/start", headers={"X-Caller-Id": "walk-in-candidate"})
    assert response.status_code == 200
    assert response.json()["event"] == "ExamStarted"


def test_start_without_caller_header_is_unauthorized(client, owner_headers):
    client.put("/schedule/days/2/7/exam", json={"title": "Mock"}, headers=owner_headers)

    response = client.post("/schedule/days/2/7/start")
    assert response.status_code == 401
    assert response.json()["detail"]["code"] == "MissingCaller"
    assert client.get("/schedule/days/2/7").json()["start_time"] == 0


class TestEventJournalLifetime:
    """Tests for attaching the event journal per running app."""

    def test_stopped_app_stops_recording(self, store, owner):
        first = create_app(store)
        with TestClient(first):
            store.set_reading_day(owner, 1, 1, "Biology", [], "")
        assert len(first.state.event_journal) == 1

        store.remove_day(owner, 1, 1)
        assert len(first.state.event_journal) == 1

    def test_rebuilding_apps_does_not_accumulate_handlers(self, store, owner):
        apps = [create_app(store) for _ in range(3)]
        for application in apps:
            with TestClient(application):
                pass

        current = create_app(store)
        with TestClient(current):
            store.set_reading_day(owner, 1, 1, "Biology", [], "")

        assert len(current.state.event_journal) == 1
        assert all(len(application.state.event_journal) == 0 for application in apps)

    def test_unstarted_app_records_nothing(self, store, owner):
        application = create_app(store)
        store.set_reading_day(owner, 1, 1, "Biology", [], "")
        assert len(application.state.event_journal) == 0
