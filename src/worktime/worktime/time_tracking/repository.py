from __future__ import annotations

from typing import Optional, Protocol

from .model import WorkSession


class WorkSessionRepository(Protocol):
    def get_active_session(self, user_id: int) -> Optional[WorkSession]:
        """The user's open (tracking or paused) session, whichever day it started on."""

        raise NotImplementedError
