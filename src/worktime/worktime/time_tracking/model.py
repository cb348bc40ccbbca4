from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Severity, TimelineEventKind, TrackingState


@dataclass(frozen=True)
class WorkSession:
    """Domain entity: the running (or finished) work session of one user for one day.

    Assembled from stored rows by the repository. Only the timing fields feed
    the compliance math; location/project are carried for display.
    """

    start_time: Optional[datetime]
    end_time: Optional[datetime] = None
    accumulated_break_minutes: int = 0
    current_pause_elapsed_seconds: int = 0
    state: TrackingState = TrackingState.TRACKING
    paused_at: Optional[datetime] = None
    location: Optional[str] = None
    project: Optional[str] = None
    session_id: Optional[int] = None
    user_id: Optional[int] = None

    @property
    def is_paused(self) -> bool:
        return self.state == TrackingState.PAUSED


@dataclass(frozen=True)
class ComplianceSnapshot:
    """Read-model recomputed on every tick, never persisted."""

    worked_minutes: int
    effective_break_minutes: int
    required_break_minutes: int
    break_satisfied: bool
    minutes_until_legal_max: int


@dataclass(frozen=True)
class TimelineEvent:
    event_time: datetime
    kind: TimelineEventKind
    is_satisfied: bool
    severity: Severity
