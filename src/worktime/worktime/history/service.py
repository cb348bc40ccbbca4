from __future__ import annotations

from datetime import date, datetime
from itertools import groupby
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import format_minutes, now_local, week_bounds
from ..core.constants import DEFAULT_TARGET_WEEK_HOURS
from ..core.exceptions import ValidationError
from .calculator.base import WorkTimeCalculator
from .calculator.net_time_calculator import NetWorkTimeCalculator
from .model import DailyEntry, TimeEntry, WeekStats
from .repository import TimeEntryRepository

DEFAULT_PROJECT = "Allgemein"

_LOCATION_LABELS = {
    "office": "Büro",
    "home": "Home Office",
    "mobile": "Unterwegs",
}


def location_label(location: Optional[str]) -> str:
    return _LOCATION_LABELS.get(location or "", location or "Unbekannt")


def _unique(values: Iterable[str]) -> list[str]:
    # Keeps first-seen order.
    return list(dict.fromkeys(values))


class TimeHistoryService:
    def __init__(
        self,
        entries: TimeEntryRepository,
        *,
        calculator: Optional[WorkTimeCalculator] = None,
        target_week_hours: int = DEFAULT_TARGET_WEEK_HOURS,
    ):
        self._entries = entries
        self._calculator = calculator or NetWorkTimeCalculator()
        self._target_week_minutes = int(target_week_hours) * 60

    def build_history(
        self,
        *,
        user_id: int,
        start: date,
        end: date,
        now: Optional[datetime] = None,
    ) -> list[DailyEntry]:
        """Group the user's entries per calendar day, newest day first."""
        if end < start:
            raise ValidationError("end must not be before start")
        now = now or now_local()

        rows = sorted(
            self._entries.get_entries_for_range(user_id=user_id, start_date=start, end_date=end),
            key=lambda e: e.start_time,
        )
        days = [self._summarize_day(d, list(items), now) for d, items in groupby(rows, key=lambda e: e.start_time.date())]
        days.sort(key=lambda d: d.work_date, reverse=True)
        return days

    def week_stats(self, *, user_id: int, week_of: date) -> WeekStats:
        """Totals of the ISO week containing ``week_of``.

        Only completed entries add to the total; work days and projects count
        every entry of the week, running ones included.
        """
        monday, sunday = week_bounds(week_of)
        rows = list(self._entries.get_entries_for_range(user_id=user_id, start_date=monday, end_date=sunday))
        total = sum(self._calculator.net_minutes(e, e.end_time) for e in rows if e.end_time is not None)
        return WeekStats(
            week_start=monday,
            week_end=sunday,
            total_minutes=total,
            work_days=len({e.start_time.date() for e in rows}),
            projects=len({e.project for e in rows}),
            target_minutes=self._target_week_minutes,
        )

    @staticmethod
    def filter_days(days: Sequence[DailyEntry], query: Optional[str]) -> list[DailyEntry]:
        """Case-insensitive search over projects, locations and entry notes."""
        if not query:
            return list(days)
        q = query.strip().lower()
        return [
            d
            for d in days
            if any(q in p.lower() for p in d.projects)
            or any(q in loc.lower() for loc in d.locations)
            or any(q in (e.note or "").lower() for e in d.entries)
        ]

    def _summarize_day(self, work_date: date, items: list[TimeEntry], now: datetime) -> DailyEntry:
        return DailyEntry(
            work_date=work_date,
            entries=items,
            net_work_minutes=sum(self._calculator.net_minutes(e, now) for e in items),
            total_break_minutes=sum(int(e.break_minutes or 0) for e in items),
            start_time=items[0].start_time,
            end_time=items[-1].end_time,
            locations=_unique(location_label(e.location) for e in items),
            projects=_unique(e.project or DEFAULT_PROJECT for e in items),
        )

    @staticmethod
    def to_rows(days: Sequence[DailyEntry]) -> list[dict]:
        """Flat dicts for JSON/CSV output."""
        return [
            {
                "work_date": d.work_date.strftime("%Y-%m-%d"),
                "start": d.start_time.strftime("%H:%M") if d.start_time else "-",
                "end": d.end_time.strftime("%H:%M") if d.end_time else "-",
                "entries": len(d.entries),
                "net_work": format_minutes(d.net_work_minutes),
                "net_work_minutes": d.net_work_minutes,
                "break_minutes": d.total_break_minutes,
                "locations": ", ".join(d.locations),
                "projects": ", ".join(d.projects),
            }
            for d in days
        ]

    @staticmethod
    def week_to_ui(stats: WeekStats) -> dict:
        overtime = stats.overtime_minutes
        return {
            "week_start": stats.week_start.strftime("%Y-%m-%d"),
            "week_end": stats.week_end.strftime("%Y-%m-%d"),
            "total": format_minutes(stats.total_minutes),
            "total_minutes": stats.total_minutes,
            "work_days": stats.work_days,
            "projects": stats.projects,
            "target": format_minutes(stats.target_minutes),
            "overtime": ("+" if overtime >= 0 else "") + format_minutes(overtime),
            "overtime_minutes": overtime,
            "css_class": "text-green-600" if overtime >= 0 else "text-red-600",
        }
