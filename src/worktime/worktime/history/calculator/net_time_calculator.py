from __future__ import annotations

from datetime import datetime

from ...common.datetime_utils import whole_minutes
from ..model import TimeEntry
from .base import WorkTimeCalculator


class NetWorkTimeCalculator(WorkTimeCalculator):
    """Standard rule: (end - start) - break_minutes, not below 0.

    Running entries count up to ``now``; a completed entry without an end
    time contributes nothing.
    """

    def net_minutes(self, entry: TimeEntry, now: datetime) -> int:
        if entry.end_time is not None:
            end = entry.end_time
        elif entry.is_running:
            end = now
        else:
            return 0
        minutes = whole_minutes(end - entry.start_time)
        minutes -= int(entry.break_minutes or 0)
        return max(minutes, 0)
