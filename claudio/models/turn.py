"""Conversation turn models built from the hook log."""

import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Optional


class HookEntryType(Enum):
    """Label of a hook log line."""
    RECEIVED = "Received"
    RESPONSE = "Response"


@dataclass(frozen=True)
class HookEntry:
    """Raw parsed entry from the hook log. Only folded into turns, never stored."""
    timestamp: datetime
    type: HookEntryType
    content: str


class TurnStatus(Enum):
    """Status of a turn's processing."""
    PENDING = "pending"        # Request seen, waiting for response
    PROCESSING = "processing"
    COMPLETED = "completed"    # Response received
    FAILED = "failed"          # Superseded by a newer request

    @property
    def is_open(self) -> bool:
        return self in (TurnStatus.PENDING, TurnStatus.PROCESSING)


@dataclass(frozen=True)
class Turn:
    """A single user request and (optionally) the assistant's response."""
    timestamp: datetime  # Request time
    user_request: str
    claude_response: Optional[str] = None
    status: TurnStatus = TurnStatus.PENDING
    response_timestamp: Optional[datetime] = None
    id: str = field(default_factory=lambda: uuid.uuid4().hex)

    @property
    def end_time(self) -> datetime:
        """Response time if answered, otherwise the request time."""
        return self.response_timestamp or self.timestamp

    @property
    def processing_duration(self) -> Optional[float]:
        """Seconds between request and response."""
        if self.response_timestamp is None:
            return None
        return (self.response_timestamp - self.timestamp).total_seconds()

    def completed(self, response: str, response_timestamp: datetime) -> "Turn":
        return replace(self,
                       status=TurnStatus.COMPLETED,
                       claude_response=response,
                       response_timestamp=response_timestamp)

    def failed(self) -> "Turn":
        return replace(self, status=TurnStatus.FAILED)
