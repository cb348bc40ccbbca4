from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional

import pytest

from src.worktime.worktime.container import Container
from src.worktime.worktime.core.enums import EntryStatus
from src.worktime.worktime.history import controller as history_controller
from src.worktime.worktime.history import service as history_service_module
from src.worktime.worktime.history.model import TimeEntry
from src.worktime.worktime.history.service import TimeHistoryService
from src.worktime.worktime.main import create_app
from src.worktime.worktime.time_tracking import service as compliance_service_module
from src.worktime.worktime.time_tracking.model import WorkSession
from src.worktime.worktime.time_tracking.service import ComplianceService

NOW = datetime(2026, 2, 2, 14, 5, 0)


class InMemorySessions:
    def __init__(self, sessions: dict[int, WorkSession]):
        self._sessions = sessions

    def get_active_session(self, user_id: int) -> Optional[WorkSession]:
        return self._sessions.get(user_id)


class InMemoryEntries:
    def __init__(self, entries):
        self._entries = entries

    def get_entries_for_range(self, *, user_id: int, start_date: date, end_date: date):
        return [e for e in self._entries if e.user_id == user_id and start_date <= e.start_time.date() <= end_date]


class BrokenSessions:
    def get_active_session(self, user_id: int):
        raise RuntimeError("database unavailable")


class BrokenEntries:
    def get_entries_for_range(self, *, user_id: int, start_date: date, end_date: date):
        raise RuntimeError("database unavailable")


ENTRIES = [
    TimeEntry(
        entry_id=1,
        user_id=1,
        start_time=datetime(2026, 2, 2, 8, 0),
        end_time=datetime(2026, 2, 2, 12, 0),
        status=EntryStatus.COMPLETED,
        break_minutes=15,
        location="office",
        project="Payroll",
    )
]


@pytest.fixture
def fixed_clock(monkeypatch):
    monkeypatch.setattr(compliance_service_module, "now_local", lambda: NOW)
    monkeypatch.setattr(history_service_module, "now_local", lambda: NOW)
    monkeypatch.setattr(history_controller, "now_local", lambda: NOW)


def _client(monkeypatch, sessions, *, user_id: Optional[int] = 1, entries=None):
    monkeypatch.setenv("APP_ENV", "testing")
    container = Container(
        compliance_service=ComplianceService(sessions, refresh_interval_seconds=15),
        history_service=TimeHistoryService(entries or InMemoryEntries(ENTRIES)),
        history_days=7,
    )
    client = create_app(container).test_client()
    if user_id is not None:
        with client.session_transaction() as sess:
            sess["user_id"] = user_id
    return client


def test_compliance_requires_login(monkeypatch, fixed_clock):
    client = _client(monkeypatch, InMemorySessions({}), user_id=None)

    resp = client.get("/api/time-tracking/compliance")

    assert resp.status_code == 401
    assert resp.get_json()["success"] is False


def test_compliance_returns_snapshot(monkeypatch, fixed_clock):
    start = NOW - timedelta(hours=6, minutes=5)
    client = _client(monkeypatch, InMemorySessions({1: WorkSession(start_time=start)}))

    resp = client.get("/api/time-tracking/compliance")

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["success"] is True
    assert body["active"] is True
    assert body["snapshot"]["worked_minutes"] == 365
    assert body["refresh_interval_seconds"] == 15
    assert [e["severity"] for e in body["events"] if e["kind"] == "required-break-30"] == ["warning"]


def test_compliance_without_session_is_empty_state(monkeypatch, fixed_clock):
    client = _client(monkeypatch, InMemorySessions({}))

    body = client.get("/api/time-tracking/compliance").get_json()

    assert body["success"] is True
    assert body["active"] is False
    assert body["message"] == "Keine aktive Zeiterfassung"


def test_compliance_backend_failure_is_500(monkeypatch, fixed_clock):
    client = _client(monkeypatch, BrokenSessions())

    resp = client.get("/api/time-tracking/compliance")

    assert resp.status_code == 500
    assert resp.get_json()["success"] is False


def test_history_defaults_to_recent_days(monkeypatch, fixed_clock):
    client = _client(monkeypatch, InMemorySessions({}))

    body = client.get("/api/time-tracking/history").get_json()

    assert body["start"] == "2026-01-26"
    assert body["end"] == "2026-02-02"
    assert body["days"][0]["net_work"] == "3:45h"
    assert body["week"]["total_minutes"] == 225


def test_history_rejects_bad_dates(monkeypatch, fixed_clock):
    client = _client(monkeypatch, InMemorySessions({}))

    assert client.get("/api/time-tracking/history?start=02.02.2026").status_code == 400
    assert client.get("/api/time-tracking/history?start=2026-02-05&end=2026-02-01").status_code == 400


def test_history_search_filters_days(monkeypatch, fixed_clock):
    client = _client(monkeypatch, InMemorySessions({}))

    body = client.get("/api/time-tracking/history?start=2026-02-01&end=2026-02-02&q=nothing").get_json()

    assert body["days"] == []


def test_history_csv_export(monkeypatch, fixed_clock):
    client = _client(monkeypatch, InMemorySessions({}))

    resp = client.get("/me/time-history.csv?start=2026-02-01&end=2026-02-02")

    assert resp.status_code == 200
    assert resp.mimetype == "text/csv"
    assert "time_history_20260201_20260202.csv" in resp.headers["Content-Disposition"]
    text = resp.data.decode("utf-8-sig")
    lines = text.strip().splitlines()
    assert lines[0].startswith("work_date,start,end")
    assert lines[1].startswith("2026-02-02,08:00,12:00,1,3:45h,225,15")


def test_history_csv_backend_failure_is_500(monkeypatch, fixed_clock):
    client = _client(monkeypatch, InMemorySessions({}), entries=BrokenEntries())

    resp = client.get("/me/time-history.csv?start=2026-02-01&end=2026-02-02")

    assert resp.status_code == 500
    assert resp.is_json
    assert resp.get_json()["success"] is False


def test_history_csv_rejects_bad_dates(monkeypatch, fixed_clock):
    client = _client(monkeypatch, InMemorySessions({}))

    resp = client.get("/me/time-history.csv?start=2026/02/01")

    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Ungültiges Datum, erwartet YYYY-MM-DD"


def test_midnight_session_reported_by_endpoint(monkeypatch):
    monkeypatch.setattr(compliance_service_module, "now_local", lambda: datetime(2026, 2, 3, 0, 30))
    client = _client(monkeypatch, InMemorySessions({1: WorkSession(start_time=datetime(2026, 2, 2, 22, 0))}))

    body = client.get("/api/time-tracking/compliance").get_json()

    assert body["active"] is True
    assert body["snapshot"]["worked_minutes"] == 150
