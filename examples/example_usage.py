"""Example: use the calculator and service layer directly (no Flask, no DB).

Controllers are a thin layer; the compliance rules live in the calculator.
"""

from datetime import datetime, timedelta

from src.worktime.worktime.core.enums import TrackingState
from src.worktime.worktime.time_tracking.calculator import build_timeline_events, compute_snapshot
from src.worktime.worktime.time_tracking.model import WorkSession
from src.worktime.worktime.time_tracking.service import ComplianceService


class DemoSessions:
    def __init__(self, session: WorkSession):
        self._session = session

    def get_active_session(self, user_id: int):
        return self._session


def main():
    now = datetime(2026, 2, 2, 17, 30)
    session = WorkSession(
        start_time=now - timedelta(hours=9, minutes=15),
        accumulated_break_minutes=30,
        state=TrackingState.PAUSED,
        paused_at=now - timedelta(minutes=4),
    )

    snapshot = compute_snapshot(session, now)
    print(snapshot)
    for event in build_timeline_events(session, snapshot, now):
        print(f"{event.event_time:%H:%M} {event.kind.value:<18} {event.severity.value}")

    print(ComplianceService(DemoSessions(session)).get_compliance(1, now=now))


if __name__ == "__main__":
    main()
