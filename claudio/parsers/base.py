"""Abstract base class and shared helpers for log line parsers."""

import logging
import re
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Generic, Iterable, List, Optional, TypeVar, Union

logger = logging.getLogger(__name__)

T = TypeVar("T")

_ISO_FRACTIONAL = "%Y-%m-%dT%H:%M:%S.%f%z"
_ISO_WHOLE_SECONDS = "%Y-%m-%dT%H:%M:%S%z"
# strptime's %f takes at most 6 digits; Go and Swift loggers may write up to 9
_LONG_FRACTION_RE = re.compile(r"(\.\d{6})\d+")


def parse_iso_timestamp(value: str) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp with a timezone, with or without fractional seconds.

    Args:
        value: Timestamp such as ``2026-01-22T10:25:59.390-07:00`` or ``...59Z``

    Returns:
        Timezone-aware datetime, or None if the value is not a valid timestamp
    """
    value = _LONG_FRACTION_RE.sub(r"\1", value.strip())
    for fmt in (_ISO_FRACTIONAL, _ISO_WHOLE_SECONDS):
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue
    return None


class LogParser(ABC, Generic[T]):
    """Stateless parser for one log line format."""

    @abstractmethod
    def parse_line(self, line: str) -> Optional[T]:
        """Parse a single log line.

        Args:
            line: Raw line without its terminator

        Returns:
            Parsed event, or None if the line is malformed
        """
        pass

    def parse_lines(self, lines: Iterable[str]) -> List[T]:
        """Parse already split lines, dropping malformed ones."""
        results = []
        for line in lines:
            parsed = self.parse_line(line)
            if parsed is not None:
                results.append(parsed)
        return results

    def parse_log(self, content: str) -> List[T]:
        """Parse every line of ``content``, dropping malformed lines.

        Only ``\\n`` separates lines (a trailing ``\\r`` is stripped), the same
        rule the tail reader applies to live appends.
        """
        return self.parse_lines(line.rstrip("\r") for line in content.split("\n"))

    def parse_log_file(self, path: Union[str, Path]) -> List[T]:
        """Parse a whole log file. A missing or unreadable file yields no events."""
        path = Path(path)
        try:
            content = path.read_bytes().decode("utf-8")
        except FileNotFoundError:
            logger.debug(f"Log file not found: {path}")
            return []
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not read log file {path}: {e}")
            return []
        return self.parse_log(content)

    def parse_recent(self, path: Union[str, Path], count: int = 20) -> List[T]:
        """Parse only the last ``count`` non-empty lines of a log file."""
        if count <= 0:
            return []
        path = Path(path)
        try:
            lines = path.read_bytes().decode("utf-8").split("\n")
        except (OSError, UnicodeDecodeError):
            return []
        recent = [line.rstrip("\r") for line in lines if line.rstrip("\r")][-count:]
        return self.parse_lines(recent)
