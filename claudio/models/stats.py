"""Daily statistics and log-file health models."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import List, Optional, Tuple


@dataclass
class IssueCounts:
    """Daemon issues seen on the current day. Reset at day rollover."""
    overflow_count: int = 0
    no_speech_count: int = 0
    error_count: int = 0


class HealthStatus(Enum):
    """Health bucket derived from the day's success rate."""
    GOOD = "good"        # >= 90% success
    WARNING = "warning"  # 70-90% success
    POOR = "poor"        # < 70% success
    UNKNOWN = "unknown"  # no requests yet


@dataclass(frozen=True)
class SessionStats:
    """Aggregated statistics for today."""
    transcription_count: int = 0
    request_count: int = 0
    response_count: int = 0
    overflow_count: int = 0
    no_speech_count: int = 0
    error_count: int = 0
    response_times: Tuple[float, ...] = ()

    @property
    def success_rate(self) -> float:
        """Percentage (0-100) of requests that got a response."""
        if self.request_count == 0:
            return 0.0
        return self.response_count * 100 / self.request_count

    @property
    def average_response_time(self) -> Optional[float]:
        if not self.response_times:
            return None
        return sum(self.response_times) / len(self.response_times)

    @property
    def min_response_time(self) -> Optional[float]:
        return min(self.response_times) if self.response_times else None

    @property
    def max_response_time(self) -> Optional[float]:
        return max(self.response_times) if self.response_times else None

    @property
    def health_status(self) -> HealthStatus:
        if self.request_count == 0:
            return HealthStatus.UNKNOWN
        if self.success_rate >= 90:
            return HealthStatus.GOOD
        if self.success_rate >= 70:
            return HealthStatus.WARNING
        return HealthStatus.POOR

    @property
    def warning_count(self) -> int:
        return self.overflow_count + self.no_speech_count


class LogAvailability(Enum):
    """Availability of a single watched log file."""
    MISSING = "missing"
    EMPTY = "empty"
    HEALTHY = "healthy"


@dataclass(frozen=True)
class LogStatus:
    """Which watched log files are missing or empty, and when any last changed."""
    missing_paths: Tuple[Path, ...] = ()
    empty_paths: Tuple[Path, ...] = ()
    last_activity: Optional[datetime] = None

    @property
    def has_issues(self) -> bool:
        return bool(self.missing_paths or self.empty_paths)

    @property
    def missing_file_names(self) -> List[str]:
        return [path.name for path in self.missing_paths]

    @property
    def empty_file_names(self) -> List[str]:
        return [path.name for path in self.empty_paths]

    def availability(self, path: Path) -> LogAvailability:
        path = Path(path)
        if path in self.missing_paths:
            return LogAvailability.MISSING
        if path in self.empty_paths:
            return LogAvailability.EMPTY
        return LogAvailability.HEALTHY
