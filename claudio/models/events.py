"""Event models parsed from the brabble daemon log.

Each variant of the daemon event union is its own dataclass sharing the
``BrabbleEvent`` base, so consumers can dispatch with ``isinstance``.
"""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class BrabbleEvent:
    """Base class for all daemon log events."""
    timestamp: datetime


@dataclass(frozen=True)
class Heard(BrabbleEvent):
    """Speech the daemon heard."""
    text: str


@dataclass(frozen=True)
class WakeWordMatched(BrabbleEvent):
    """The wake word was detected in the audio stream."""
    word: str


@dataclass(frozen=True)
class HookExecuted(BrabbleEvent):
    """The daemon ran its hook command."""
    command: str


@dataclass(frozen=True)
class HookOutput(BrabbleEvent):
    """Output captured from the hook command."""
    output: str


@dataclass(frozen=True)
class DaemonError(BrabbleEvent):
    """Any ERROR or FATAL level message."""
    message: str


@dataclass(frozen=True)
class DaemonInfo(BrabbleEvent):
    """Any other message."""
    message: str
