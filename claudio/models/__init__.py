"""Data models for the Claudio log core."""

from .transcription import Transcription
from .turn import HookEntry, HookEntryType, Turn, TurnStatus
from .session import Session
from .events import (
    BrabbleEvent,
    Heard,
    WakeWordMatched,
    HookExecuted,
    HookOutput,
    DaemonError,
    DaemonInfo,
)
from .stats import (
    IssueCounts,
    HealthStatus,
    SessionStats,
    LogAvailability,
    LogStatus,
)
from .snapshot import Snapshot

__all__ = [
    "Transcription",
    "HookEntry",
    "HookEntryType",
    "Turn",
    "TurnStatus",
    "Session",
    # Daemon log events
    "BrabbleEvent",
    "Heard",
    "WakeWordMatched",
    "HookExecuted",
    "HookOutput",
    "DaemonError",
    "DaemonInfo",
    # Stats
    "IssueCounts",
    "HealthStatus",
    "SessionStats",
    "LogAvailability",
    "LogStatus",
    "Snapshot",
]
