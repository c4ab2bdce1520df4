"""Transcription-related data models."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class Transcription:
    """A single line of captured speech from the transcript log."""
    timestamp: datetime
    text: str
    is_wake_word_triggered: bool = False
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
