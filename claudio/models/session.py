"""Session-related data models."""

import hashlib
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Tuple

from .turn import Turn, TurnStatus

TITLE_MAX_LENGTH = 50


@dataclass(frozen=True)
class Session:
    """Turns grouped by temporal proximity. Derived, never persisted."""
    start_time: datetime
    turns: Tuple[Turn, ...] = ()
    id: str = field(default_factory=lambda: uuid.uuid4().hex)

    @property
    def end_time(self) -> datetime:
        if not self.turns:
            return self.start_time
        return self.turns[-1].end_time

    @property
    def duration(self) -> float:
        """Session length in seconds."""
        return (self.end_time - self.start_time).total_seconds()

    @property
    def turn_count(self) -> int:
        return len(self.turns)

    @property
    def is_active(self) -> bool:
        return bool(self.turns) and self.turns[-1].status.is_open

    @property
    def status(self) -> TurnStatus:
        if not self.turns:
            return TurnStatus.COMPLETED
        return self.turns[-1].status

    @property
    def title(self) -> str:
        """First user request, truncated for display."""
        if not self.turns:
            return "Empty session"
        first_request = self.turns[0].user_request
        if len(first_request) > TITLE_MAX_LENGTH:
            return first_request[:TITLE_MAX_LENGTH - 3] + "..."
        return first_request

    @property
    def stable_id(self) -> str:
        """Identifier that survives regrouping: hash of start time and first request."""
        first_request = self.turns[0].user_request if self.turns else ""
        base = f"{self.start_time.timestamp()}|{first_request}"
        return hashlib.sha256(base.encode("utf-8")).hexdigest()
