"""Line parsers for the three brabble log formats."""

from .base import LogParser, parse_iso_timestamp
from .transcript import TranscriptLogParser
from .hook import ClaudeHookLogParser
from .daemon import BrabbleLogParser

__all__ = [
    "LogParser",
    "parse_iso_timestamp",
    "TranscriptLogParser",
    "ClaudeHookLogParser",
    "BrabbleLogParser",
]
