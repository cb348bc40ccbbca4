from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .core.constants import DEFAULT_HISTORY_DAYS, DEFAULT_REFRESH_INTERVAL_SECONDS, DEFAULT_TARGET_WEEK_HOURS
from .database.connection import DBConfig, DatabaseConnection
from .history.mysql_time_entry_repository import MySQLTimeEntryRepository
from .history.service import TimeHistoryService
from .time_tracking.calculator import WorkingTimeComplianceCalculator
from .time_tracking.mysql_work_session_repository import MySQLWorkSessionRepository
from .time_tracking.service import ComplianceService


@dataclass(frozen=True)
class Container:
    compliance_service: ComplianceService
    history_service: TimeHistoryService
    history_days: int = DEFAULT_HISTORY_DAYS
    conn: Optional[DatabaseConnection] = None


def build_container(
    *,
    db_config: dict,
    refresh_interval_seconds: int = DEFAULT_REFRESH_INTERVAL_SECONDS,
    target_week_hours: int = DEFAULT_TARGET_WEEK_HOURS,
    history_days: int = DEFAULT_HISTORY_DAYS,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    sessions_repo = MySQLWorkSessionRepository(conn)
    entries_repo = MySQLTimeEntryRepository(conn)

    compliance_service = ComplianceService(
        sessions_repo,
        calculator=WorkingTimeComplianceCalculator(),
        refresh_interval_seconds=refresh_interval_seconds,
    )
    history_service = TimeHistoryService(entries_repo, target_week_hours=target_week_hours)

    return Container(
        compliance_service=compliance_service,
        history_service=history_service,
        history_days=int(history_days),
        conn=conn,
    )
