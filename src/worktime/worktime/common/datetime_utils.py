from __future__ import annotations

from datetime import date, datetime, timedelta


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier. Calculators never call it,
    they take `now` as a parameter.
    """
    return datetime.now()


def whole_minutes(delta: timedelta) -> int:
    """Floor a timedelta to whole minutes, clamped at 0."""
    return max(int(delta.total_seconds() // 60), 0)


def format_minutes(minutes: int) -> str:
    """Render minutes as ``H:MMh`` (e.g. 365 -> ``6:05h``)."""
    sign = "-" if minutes < 0 else ""
    minutes = abs(int(minutes))
    return f"{sign}{minutes // 60}:{minutes % 60:02d}h"


def week_bounds(day: date) -> tuple[date, date]:
    """Monday and Sunday of the ISO week containing ``day``."""
    monday = day - timedelta(days=day.weekday())
    return monday, monday + timedelta(days=6)
