from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..core.enums import EntryStatus


@dataclass(frozen=True)
class TimeEntry:
    """Domain entity: one stored time-tracking row."""

    entry_id: int
    user_id: int
    start_time: datetime
    end_time: Optional[datetime]
    status: EntryStatus
    break_minutes: int = 0
    location: Optional[str] = None
    project: Optional[str] = None
    note: Optional[str] = None

    @property
    def is_running(self) -> bool:
        return self.end_time is None and self.status in (EntryStatus.ACTIVE, EntryStatus.PAUSED)


@dataclass(frozen=True)
class DailyEntry:
    """Read-model: all entries of one calendar day."""

    work_date: date
    entries: list[TimeEntry]
    net_work_minutes: int
    total_break_minutes: int
    start_time: Optional[datetime]
    end_time: Optional[datetime]
    locations: list[str] = field(default_factory=list)
    projects: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class WeekStats:
    week_start: date
    week_end: date
    total_minutes: int
    work_days: int
    projects: int
    target_minutes: int

    @property
    def overtime_minutes(self) -> int:
        return self.total_minutes - self.target_minutes
