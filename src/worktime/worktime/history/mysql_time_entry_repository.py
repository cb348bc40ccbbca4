from __future__ import annotations

from datetime import date
from typing import Sequence

from ..core.enums import EntryStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_int, db_cursor, fetchall
from .model import TimeEntry
from .repository import TimeEntryRepository


class MySQLTimeEntryRepository(TimeEntryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_entries_for_range(self, *, user_id: int, start_date: date, end_date: date) -> Sequence[TimeEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, user_id, start_time, end_time, status, break_minutes, location, project, note
                FROM time_entries
                WHERE user_id=%s AND DATE(start_time) BETWEEN %s AND %s
                ORDER BY start_time ASC
                """,
                (user_id, start_date, end_date),
            )
            rows = fetchall(cur)
            return [
                TimeEntry(
                    entry_id=int(r["id"]),
                    user_id=int(r["user_id"]),
                    start_time=r["start_time"],
                    end_time=r.get("end_time"),
                    status=EntryStatus(r["status"]),
                    break_minutes=as_int(r.get("break_minutes")),
                    location=r.get("location"),
                    project=r.get("project"),
                    note=r.get("note"),
                )
                for r in rows
            ]
