from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from ..model import TimeEntry


class WorkTimeCalculator(ABC):
    """Calculator interface (Strategy Pattern for history totals)."""

    @abstractmethod
    def net_minutes(self, entry: TimeEntry, now: datetime) -> int:
        raise NotImplementedError
