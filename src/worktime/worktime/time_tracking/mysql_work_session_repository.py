from __future__ import annotations

from typing import Optional

from ..core.enums import EntryStatus, TrackingState
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_int, db_cursor, fetchone
from .model import WorkSession
from .repository import WorkSessionRepository

_STATE_BY_STATUS = {
    EntryStatus.ACTIVE.value: TrackingState.TRACKING,
    EntryStatus.PAUSED.value: TrackingState.PAUSED,
    EntryStatus.COMPLETED.value: TrackingState.STOPPED,
}


class MySQLWorkSessionRepository(WorkSessionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_active_session(self, user_id: int) -> Optional[WorkSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            # No date filter: a session started before midnight stays open past it.
            cur.execute(
                """
                SELECT id, user_id, start_time, end_time, status, paused_at, location, project
                FROM time_entries
                WHERE user_id=%s AND end_time IS NULL AND status IN (%s, %s)
                ORDER BY start_time DESC
                LIMIT 1
                """,
                (user_id, EntryStatus.ACTIVE.value, EntryStatus.PAUSED.value),
            )
            r = fetchone(cur)
            if not r:
                return None

            # Breaks of every entry started on the session's day count towards the daily rule.
            cur.execute(
                """
                SELECT COALESCE(SUM(break_minutes), 0) AS break_minutes
                FROM time_entries
                WHERE user_id=%s AND DATE(start_time)=%s
                """,
                (user_id, r["start_time"].date()),
            )
            totals = fetchone(cur) or {}

            return WorkSession(
                session_id=int(r["id"]),
                user_id=int(r["user_id"]),
                start_time=r["start_time"],
                end_time=r.get("end_time"),
                accumulated_break_minutes=as_int(totals.get("break_minutes")),
                state=_STATE_BY_STATUS.get(r["status"], TrackingState.TRACKING),
                paused_at=r.get("paused_at"),
                location=r.get("location"),
                project=r.get("project"),
            )
