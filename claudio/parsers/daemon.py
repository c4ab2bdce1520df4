"""Parser for the brabble daemon log.

Format: ``time=<ISO8601> level=<LEVEL> msg="<content>"``. The three fields
are located independently so their order does not matter, and ``msg`` may
contain escaped double quotes.
"""

import re
from datetime import datetime
from typing import Optional

from ..models.events import (
    BrabbleEvent,
    DaemonError,
    DaemonInfo,
    Heard,
    HookExecuted,
    HookOutput,
    WakeWordMatched,
)
from .base import LogParser, parse_iso_timestamp

DEFAULT_WAKE_WORD = "claude"

_TIME_RE = re.compile(r"time=(\S+)")
_LEVEL_RE = re.compile(r"level=(\w+)")
_MSG_RE = re.compile(r'msg="((?:[^"\\]|\\.)*)"')
_QUOTED_RE = re.compile(r'"([^"]+)"')

_HEARD_PREFIX = "heard:"
_EXECUTING_HOOK_PREFIX = "executing hook:"
_HOOK_OUTPUT_PREFIX = "hook output:"
_ERROR_LEVELS = ("ERROR", "FATAL")


def _extract_quoted(text: str) -> Optional[str]:
    match = _QUOTED_RE.search(text)
    return match.group(1) if match else None


class BrabbleLogParser(LogParser[BrabbleEvent]):
    """Parses daemon log lines into BrabbleEvent variants."""

    def parse_line(self, line: str) -> Optional[BrabbleEvent]:
        if not line:
            return None

        time_match = _TIME_RE.search(line)
        level_match = _LEVEL_RE.search(line)
        msg_match = _MSG_RE.search(line)
        if not (time_match and level_match and msg_match):
            return None

        timestamp = parse_iso_timestamp(time_match.group(1))
        if timestamp is None:
            return None

        message = msg_match.group(1).replace('\\"', '"')
        return self.classify(message, level_match.group(1), timestamp)

    def classify(self, message: str, level: str, timestamp: datetime) -> BrabbleEvent:
        """Map an unescaped message to its event variant, in priority order."""
        if message.startswith(_HEARD_PREFIX):
            text = message[len(_HEARD_PREFIX):].strip()
            if len(text) >= 2 and text.startswith('"') and text.endswith('"'):
                text = text[1:-1]
            return Heard(timestamp=timestamp, text=text)

        if "wake word matched" in message or "wake word detected" in message:
            word = _extract_quoted(message) or DEFAULT_WAKE_WORD
            return WakeWordMatched(timestamp=timestamp, word=word)

        if message.startswith(_EXECUTING_HOOK_PREFIX) or "hook exec" in message:
            command = _extract_quoted(message) or message
            return HookExecuted(timestamp=timestamp, command=command)

        if message.startswith(_HOOK_OUTPUT_PREFIX):
            output = message[len(_HOOK_OUTPUT_PREFIX):].strip()
            return HookOutput(timestamp=timestamp, output=output)

        if level.upper() in _ERROR_LEVELS:
            return DaemonError(timestamp=timestamp, message=message)
        return DaemonInfo(timestamp=timestamp, message=message)
