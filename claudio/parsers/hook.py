"""Parser for the hook request/response log.

Format::

    [2026-01-22 10:16:13] Received: what time is it?
    [2026-01-22 10:16:19] Response: It's 10:16.
"""

import re
from datetime import datetime
from typing import Optional

from ..models.turn import HookEntry, HookEntryType
from .base import LogParser

_HOOK_LINE_RE = re.compile(
    r"\[(?P<ts>\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2})\] (?P<type>Received|Response): (?P<content>.+)"
)
_HOOK_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class ClaudeHookLogParser(LogParser[HookEntry]):
    """Parses hook log lines into HookEntry records."""

    def parse_line(self, line: str) -> Optional[HookEntry]:
        if not line:
            return None

        match = _HOOK_LINE_RE.search(line)
        if not match:
            return None

        try:
            # No zone in the log: the daemon writes local wall-clock time
            timestamp = datetime.strptime(match.group("ts"), _HOOK_TIMESTAMP_FORMAT).astimezone()
        except ValueError:
            return None

        return HookEntry(
            timestamp=timestamp,
            type=HookEntryType(match.group("type")),
            content=match.group("content"),
        )
