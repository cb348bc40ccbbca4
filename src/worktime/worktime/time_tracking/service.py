from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import format_minutes, now_local
from ..common.validators import require_datetime, require_same_awareness
from ..core.constants import DEFAULT_REFRESH_INTERVAL_SECONDS
from ..core.enums import Severity, TimelineEventKind, TrackingState
from ..core.exceptions import InvalidInput
from .calculator import WorkingTimeComplianceCalculator
from .model import ComplianceSnapshot, TimelineEvent, WorkSession
from .repository import WorkSessionRepository

logger = logging.getLogger(__name__)

EMPTY_STATE_MESSAGE = "Keine aktive Zeiterfassung"

_EVENT_LABELS = {
    TimelineEventKind.SESSION_START: "Arbeitsbeginn",
    TimelineEventKind.BREAK_TAKEN: "Pause genommen",
    TimelineEventKind.REQUIRED_BREAK_30: "Pflichtpause 30 Min. (nach 6 h)",
    TimelineEventKind.REQUIRED_BREAK_45: "Pflichtpause 45 Min. (nach 9 h)",
    TimelineEventKind.LEGAL_MAXIMUM: "Gesetzliche Höchstarbeitszeit (10 h)",
}

_SEVERITY_CSS = {
    Severity.INFO: "bg-info",
    Severity.WARNING: "bg-warning text-dark",
    Severity.ERROR: "bg-danger",
}


def with_live_pause(session: WorkSession, now: datetime) -> WorkSession:
    """Fill in the running pause duration of a paused session against ``now``."""
    if not session.is_paused or session.paused_at is None or session.current_pause_elapsed_seconds:
        return session
    require_datetime(session.paused_at, "paused_at")
    require_same_awareness(("paused_at", session.paused_at), ("now", now))
    seconds = max(int((now - session.paused_at).total_seconds()), 0)
    return replace(session, current_pause_elapsed_seconds=seconds)


class ComplianceService:
    """Use case: show the compliance state of the user's running session."""

    def __init__(
        self,
        sessions: WorkSessionRepository,
        *,
        calculator: Optional[WorkingTimeComplianceCalculator] = None,
        refresh_interval_seconds: int = DEFAULT_REFRESH_INTERVAL_SECONDS,
    ):
        self._sessions = sessions
        self._calculator = calculator or WorkingTimeComplianceCalculator()
        self._refresh_interval_seconds = int(refresh_interval_seconds)

    def get_compliance(self, user_id: int, *, now: Optional[datetime] = None) -> dict:
        # One instant for the whole payload so snapshot and timeline agree.
        now = now or now_local()

        # Not keyed on now.date(): a session started before midnight is still running.
        session = self._sessions.get_active_session(user_id)
        if session is None or session.state in (TrackingState.IDLE, TrackingState.STOPPED):
            return self._empty_state()

        try:
            session = with_live_pause(session, now)
            snapshot = self._calculator.compute_snapshot(session, now)
            events = list(self._calculator.build_timeline_events(session, snapshot, now))
        except InvalidInput as e:
            logger.warning("Cannot evaluate session %s of user %s: %s", session.session_id, user_id, e)
            return self._empty_state()

        return self._to_ui(session, snapshot, events)

    def _empty_state(self) -> dict:
        return {
            "active": False,
            "status": "offline",
            "status_label": "Offline",
            "message": EMPTY_STATE_MESSAGE,
            "refresh_interval_seconds": self._refresh_interval_seconds,
        }

    def _to_ui(self, session: WorkSession, snapshot: ComplianceSnapshot, events: list[TimelineEvent]) -> dict:
        paused = session.is_paused
        return {
            "active": True,
            "status": "paused" if paused else "online",
            "status_label": "Pausiert" if paused else "Online",
            "status_css": "text-yellow-600" if paused else "text-green-600",
            "start_time": session.start_time.isoformat(),
            "location": session.location,
            "project": session.project,
            "snapshot": {
                "worked_minutes": snapshot.worked_minutes,
                "effective_break_minutes": snapshot.effective_break_minutes,
                "required_break_minutes": snapshot.required_break_minutes,
                "break_satisfied": snapshot.break_satisfied,
                "minutes_until_legal_max": snapshot.minutes_until_legal_max,
                "worked": format_minutes(snapshot.worked_minutes),
                "break": format_minutes(snapshot.effective_break_minutes),
                "remaining": format_minutes(snapshot.minutes_until_legal_max),
            },
            "events": [
                {
                    "event_time": e.event_time.isoformat(),
                    "kind": e.kind.value,
                    "label": _EVENT_LABELS.get(e.kind, e.kind.value),
                    "is_satisfied": e.is_satisfied,
                    "severity": e.severity.value,
                    "css_class": _SEVERITY_CSS.get(e.severity, "bg-secondary"),
                }
                for e in events
            ],
            "refresh_interval_seconds": self._refresh_interval_seconds,
        }
