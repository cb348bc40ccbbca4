from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from src.worktime.worktime.core.enums import Severity, TimelineEventKind
from src.worktime.worktime.core.exceptions import InvalidInput
from src.worktime.worktime.time_tracking.calculator import WorkingTimeComplianceCalculator
from src.worktime.worktime.time_tracking.model import WorkSession

T = datetime(2026, 2, 2, 8, 0, 0)


def _events(session: WorkSession, now: datetime):
    calc = WorkingTimeComplianceCalculator()
    snapshot = calc.compute_snapshot(session, now)
    return calc.build_timeline_events(session, snapshot, now)


def test_short_session_has_start_break30_and_legal_max():
    events = list(_events(WorkSession(start_time=T), T + timedelta(hours=2)))

    assert [e.kind for e in events] == [
        TimelineEventKind.SESSION_START,
        TimelineEventKind.REQUIRED_BREAK_30,
        TimelineEventKind.LEGAL_MAXIMUM,
    ]
    assert events[0].event_time == T
    assert events[1].severity == Severity.INFO
    assert events[2].severity == Severity.WARNING
    assert events[2].is_satisfied is True


def test_events_are_ordered_by_time():
    session = WorkSession(start_time=T, accumulated_break_minutes=30)
    events = list(_events(session, T + timedelta(hours=9, minutes=30)))

    times = [e.event_time for e in events]
    assert times == sorted(times)
    assert [e.kind for e in events] == [
        TimelineEventKind.SESSION_START,
        TimelineEventKind.BREAK_TAKEN,
        TimelineEventKind.REQUIRED_BREAK_30,
        TimelineEventKind.REQUIRED_BREAK_45,
        TimelineEventKind.LEGAL_MAXIMUM,
    ]


def test_timeline_can_be_iterated_again():
    events = _events(WorkSession(start_time=T, accumulated_break_minutes=5), T + timedelta(hours=7))

    assert list(events) == list(events)


def test_break_taken_is_placed_four_hours_after_start():
    events = list(_events(WorkSession(start_time=T, current_pause_elapsed_seconds=120), T + timedelta(hours=3)))

    taken = [e for e in events if e.kind == TimelineEventKind.BREAK_TAKEN]
    assert len(taken) == 1
    assert taken[0].event_time == T + timedelta(hours=4)
    assert taken[0].severity == Severity.INFO


def test_no_break_taken_event_without_breaks():
    events = list(_events(WorkSession(start_time=T), T + timedelta(hours=5)))

    assert TimelineEventKind.BREAK_TAKEN not in [e.kind for e in events]


def test_break45_only_from_nine_hours():
    before = list(_events(WorkSession(start_time=T), T + timedelta(minutes=539)))
    after = list(_events(WorkSession(start_time=T), T + timedelta(minutes=540)))

    assert TimelineEventKind.REQUIRED_BREAK_45 not in [e.kind for e in before]
    break45 = [e for e in after if e.kind == TimelineEventKind.REQUIRED_BREAK_45]
    assert len(break45) == 1
    assert break45[0].severity == Severity.ERROR
    assert break45[0].event_time == T + timedelta(hours=9)


def test_break45_info_when_enough_break():
    events = list(_events(WorkSession(start_time=T, accumulated_break_minutes=45), T + timedelta(hours=9, minutes=10)))

    by_kind = {e.kind: e for e in events}
    assert by_kind[TimelineEventKind.REQUIRED_BREAK_45].severity == Severity.INFO
    assert by_kind[TimelineEventKind.REQUIRED_BREAK_45].is_satisfied is True
    assert by_kind[TimelineEventKind.REQUIRED_BREAK_30].severity == Severity.INFO


def test_legal_maximum_turns_error_at_ten_hours():
    events = list(_events(WorkSession(start_time=T, accumulated_break_minutes=45), T + timedelta(hours=10)))

    legal = [e for e in events if e.kind == TimelineEventKind.LEGAL_MAXIMUM][0]
    assert legal.severity == Severity.ERROR
    assert legal.is_satisfied is False


def test_snapshot_is_computed_when_not_given():
    calc = WorkingTimeComplianceCalculator()
    session = WorkSession(start_time=T)
    now = T + timedelta(hours=6, minutes=5)

    events = {e.kind: e for e in calc.build_timeline_events(session, None, now)}
    assert events[TimelineEventKind.REQUIRED_BREAK_30].severity == Severity.WARNING


def test_invalid_session_is_rejected():
    calc = WorkingTimeComplianceCalculator()
    with pytest.raises(InvalidInput):
        calc.build_timeline_events(WorkSession(start_time=None), None, T)
