"""Parser for the transcript log.

Format: ``<ISO8601 timestamp> <text>``, e.g.::

    2026-01-22T10:25:59.390-07:00 Claude what is the weather?
"""

from typing import Optional

from ..models.transcription import Transcription
from .base import LogParser, parse_iso_timestamp

DEFAULT_WAKE_WORD = "claude"


class TranscriptLogParser(LogParser[Transcription]):
    """Parses transcript lines into Transcription records."""

    def __init__(self, wake_word: str = DEFAULT_WAKE_WORD):
        self.wake_word = wake_word.lower()

    def parse_line(self, line: str) -> Optional[Transcription]:
        if not line:
            return None

        parts = line.split(" ", 1)
        if len(parts) != 2:
            return None

        timestamp = parse_iso_timestamp(parts[0])
        if timestamp is None:
            return None

        text = parts[1].strip()
        return Transcription(
            timestamp=timestamp,
            text=text,
            is_wake_word_triggered=text.lower().startswith(self.wake_word),
        )
