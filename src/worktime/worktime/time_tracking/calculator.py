from __future__ import annotations

from datetime import datetime, timedelta
from typing import Iterator, Optional

from ..common.datetime_utils import whole_minutes
from ..common.validators import require_datetime, require_non_negative, require_present, require_same_awareness
from ..core.constants import (
    ESTIMATED_BREAK_OFFSET_MINUTES,
    FIRST_BREAK_THRESHOLD_MINUTES,
    FIRST_REQUIRED_BREAK_MINUTES,
    LEGAL_MAX_WORK_MINUTES,
    SECOND_BREAK_THRESHOLD_MINUTES,
    SECOND_REQUIRED_BREAK_MINUTES,
)
from ..core.enums import Severity, TimelineEventKind
from .model import ComplianceSnapshot, TimelineEvent, WorkSession


def required_break_minutes(worked_minutes: int) -> int:
    """Statutory minimum break for the given elapsed work time: 0, 30 or 45."""
    if worked_minutes >= SECOND_BREAK_THRESHOLD_MINUTES:
        return SECOND_REQUIRED_BREAK_MINUTES
    if worked_minutes >= FIRST_BREAK_THRESHOLD_MINUTES:
        return FIRST_REQUIRED_BREAK_MINUTES
    return 0


def _validate(session: WorkSession, now: Optional[datetime]) -> None:
    require_present(session, "session")
    require_datetime(require_present(session.start_time, "start_time"), "start_time")
    require_datetime(session.end_time, "end_time")
    require_datetime(require_present(now, "now"), "now")
    require_same_awareness(("start_time", session.start_time), ("end_time", session.end_time), ("now", now))
    require_non_negative(session.accumulated_break_minutes, "accumulated_break_minutes")
    require_non_negative(session.current_pause_elapsed_seconds, "current_pause_elapsed_seconds")


class TimelineEvents:
    """Lazy, restartable sequence of timeline events.

    Events are derived on each iteration, so iterating twice yields the same
    events. Ordered by event time; equal times keep insertion order
    (session start, then breaks, then thresholds).
    """

    def __init__(self, session: WorkSession, snapshot: ComplianceSnapshot):
        self._session = session
        self._snapshot = snapshot

    def __iter__(self) -> Iterator[TimelineEvent]:
        return iter(sorted(self._candidates(), key=lambda e: e.event_time))

    def _candidates(self) -> Iterator[TimelineEvent]:
        start = self._session.start_time
        worked = self._snapshot.worked_minutes
        breaks = self._snapshot.effective_break_minutes

        yield TimelineEvent(
            event_time=start,
            kind=TimelineEventKind.SESSION_START,
            is_satisfied=True,
            severity=Severity.INFO,
        )

        if breaks > 0:
            yield TimelineEvent(
                event_time=start + timedelta(minutes=ESTIMATED_BREAK_OFFSET_MINUTES),
                kind=TimelineEventKind.BREAK_TAKEN,
                is_satisfied=True,
                severity=Severity.INFO,
            )

        first_ok = breaks >= FIRST_REQUIRED_BREAK_MINUTES
        yield TimelineEvent(
            event_time=start + timedelta(minutes=FIRST_BREAK_THRESHOLD_MINUTES),
            kind=TimelineEventKind.REQUIRED_BREAK_30,
            is_satisfied=first_ok,
            severity=Severity.WARNING if worked >= FIRST_BREAK_THRESHOLD_MINUTES and not first_ok else Severity.INFO,
        )

        if worked >= SECOND_BREAK_THRESHOLD_MINUTES:
            second_ok = breaks >= SECOND_REQUIRED_BREAK_MINUTES
            yield TimelineEvent(
                event_time=start + timedelta(minutes=SECOND_BREAK_THRESHOLD_MINUTES),
                kind=TimelineEventKind.REQUIRED_BREAK_45,
                is_satisfied=second_ok,
                severity=Severity.INFO if second_ok else Severity.ERROR,
            )

        over_max = worked >= LEGAL_MAX_WORK_MINUTES
        yield TimelineEvent(
            event_time=start + timedelta(minutes=LEGAL_MAX_WORK_MINUTES),
            kind=TimelineEventKind.LEGAL_MAXIMUM,
            is_satisfied=not over_max,
            severity=Severity.ERROR if over_max else Severity.WARNING,
        )

    def __repr__(self) -> str:
        return f"TimelineEvents({list(self)!r})"


class WorkingTimeComplianceCalculator:
    """Pure read-side projection of a work session onto the statutory rules.

    Rules: 30 min break after 6h, 45 min after 9h, 10h daily maximum.
    Break time runs in parallel and is not subtracted from worked minutes.
    The clock is never read here; callers pass ``now``.
    """

    def compute_snapshot(self, session: WorkSession, now: datetime) -> ComplianceSnapshot:
        _validate(session, now)

        until = session.end_time or now
        worked = whole_minutes(until - session.start_time)
        effective_break = session.accumulated_break_minutes + session.current_pause_elapsed_seconds // 60
        required = required_break_minutes(worked)

        return ComplianceSnapshot(
            worked_minutes=worked,
            effective_break_minutes=effective_break,
            required_break_minutes=required,
            break_satisfied=effective_break >= required,
            minutes_until_legal_max=max(0, LEGAL_MAX_WORK_MINUTES - worked),
        )

    def build_timeline_events(
        self,
        session: WorkSession,
        snapshot: Optional[ComplianceSnapshot],
        now: datetime,
    ) -> TimelineEvents:
        _validate(session, now)
        if snapshot is None:
            snapshot = self.compute_snapshot(session, now)
        return TimelineEvents(session, snapshot)


_default = WorkingTimeComplianceCalculator()


def compute_snapshot(session: WorkSession, now: datetime) -> ComplianceSnapshot:
    return _default.compute_snapshot(session, now)


def build_timeline_events(
    session: WorkSession,
    snapshot: Optional[ComplianceSnapshot],
    now: datetime,
) -> TimelineEvents:
    return _default.build_timeline_events(session, snapshot, now)
