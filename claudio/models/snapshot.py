"""Snapshot model published to the presentation layer."""

from dataclasses import dataclass, field
from typing import Tuple

from .session import Session
from .stats import LogStatus, SessionStats
from .transcription import Transcription
from .turn import Turn


@dataclass(frozen=True)
class Snapshot:
    """One consistent view of all derived state, published wholesale."""
    transcriptions: Tuple[Transcription, ...] = ()
    turns: Tuple[Turn, ...] = ()
    sessions: Tuple[Session, ...] = ()
    is_processing: bool = False
    stats: SessionStats = field(default_factory=SessionStats)
    log_status: LogStatus = field(default_factory=LogStatus)

    @property
    def current_session(self):
        """The active session, if any."""
        for session in self.sessions:
            if session.is_active:
                return session
        return None
