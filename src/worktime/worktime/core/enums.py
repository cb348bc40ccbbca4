from __future__ import annotations

from enum import Enum


class TrackingState(str, Enum):
    """Lifecycle of a work session, owned by the data layer."""

    IDLE = "idle"
    TRACKING = "tracking"
    PAUSED = "paused"
    STOPPED = "stopped"


class EntryStatus(str, Enum):
    """Status column of a stored time entry."""

    ACTIVE = "active"
    PAUSED = "paused"
    COMPLETED = "completed"


class TimelineEventKind(str, Enum):
    SESSION_START = "session-start"
    BREAK_TAKEN = "break-taken"
    REQUIRED_BREAK_30 = "required-break-30"
    REQUIRED_BREAK_45 = "required-break-45"
    LEGAL_MAXIMUM = "legal-maximum"


class Severity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
