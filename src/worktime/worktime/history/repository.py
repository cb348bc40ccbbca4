from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from .model import TimeEntry


class TimeEntryRepository(Protocol):
    def get_entries_for_range(self, *, user_id: int, start_date: date, end_date: date) -> Sequence[TimeEntry]:
        """Entries whose start falls within [start_date, end_date], both inclusive."""

        raise NotImplementedError
