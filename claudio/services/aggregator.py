"""Bounded and day-scoped views over transcriptions, turns and daemon issues.

The aggregator keeps two windows per entity type: a "recent" window capped
at a fixed size, and a "today" window holding everything from the day it
currently tracks. The tracked day follows the most recently observed
timestamp, not the wall clock, and moving to another day clears all of
today's state.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Iterable, List, Optional

from ..models.events import BrabbleEvent, DaemonError, DaemonInfo
from ..models.stats import IssueCounts
from ..models.transcription import Transcription
from ..models.turn import Turn, TurnStatus

logger = logging.getLogger(__name__)

DEFAULT_MAX_RECENT_TRANSCRIPTIONS = 10
DEFAULT_MAX_RECENT_TURNS = 50

OVERFLOW_MARKER = "input overflow"
NO_SPEECH_MARKER = "no speech detected"


def local_day(timestamp: datetime) -> date:
    """Calendar day of ``timestamp`` in the local timezone."""
    if timestamp.tzinfo is None:
        return timestamp.date()
    return timestamp.astimezone().date()


@dataclass
class AggregatorState:
    """All mutable state owned by the aggregator."""
    current_day: date
    recent_transcriptions: List[Transcription] = field(default_factory=list)
    today_transcriptions: List[Transcription] = field(default_factory=list)
    recent_turns: List[Turn] = field(default_factory=list)
    today_turns: List[Turn] = field(default_factory=list)
    issue_counts: IssueCounts = field(default_factory=IssueCounts)
    pending_turn_id: Optional[str] = None


def _trim(items: list, limit: int) -> None:
    if len(items) > limit:
        del items[:len(items) - limit]


def _splice(turns: List[Turn], turn: Turn) -> bool:
    """Replace the turn with the same id in place. Returns True if found."""
    for index in range(len(turns) - 1, -1, -1):
        if turns[index].id == turn.id:
            turns[index] = turn
            return True
    return False


class DayScopedAggregator:
    """Owns the recent and today views and the day's issue counters."""

    def __init__(self,
                 max_recent_transcriptions: int = DEFAULT_MAX_RECENT_TRANSCRIPTIONS,
                 max_recent_turns: int = DEFAULT_MAX_RECENT_TURNS,
                 today: Optional[date] = None):
        """Initialize aggregator.

        Args:
            max_recent_transcriptions: Cap on the recent transcription window
            max_recent_turns: Cap on the recent turn window
            today: Day to start tracking; defaults to the local date
        """
        self.max_recent_transcriptions = max_recent_transcriptions
        self.max_recent_turns = max_recent_turns
        self.state = AggregatorState(current_day=today or date.today())

    # Day tracking

    def is_in_current_day(self, timestamp: datetime) -> bool:
        return local_day(timestamp) == self.state.current_day

    def roll_day_if_needed(self, timestamp: datetime) -> bool:
        """Move to ``timestamp``'s day, clearing today's state, if it differs.

        Returns:
            True if the tracked day changed
        """
        day = local_day(timestamp)
        if day == self.state.current_day:
            return False

        logger.info(f"Day rollover: {self.state.current_day} -> {day}")
        self.state.current_day = day
        self.state.today_transcriptions.clear()
        self.state.today_turns.clear()
        self.state.issue_counts = IssueCounts()
        return True

    # Transcriptions

    def add_transcription(self, transcription: Transcription) -> None:
        self.roll_day_if_needed(transcription.timestamp)

        self.state.recent_transcriptions.append(transcription)
        _trim(self.state.recent_transcriptions, self.max_recent_transcriptions)

        if self.is_in_current_day(transcription.timestamp):
            self.state.today_transcriptions.append(transcription)

    def load_transcriptions(self, transcriptions: List[Transcription]) -> None:
        """Replace transcription state from a full-file backfill."""
        self.state.today_transcriptions = [t for t in transcriptions if self.is_in_current_day(t.timestamp)]
        self.state.recent_transcriptions = list(transcriptions)
        _trim(self.state.recent_transcriptions, self.max_recent_transcriptions)

    def reset_transcriptions(self) -> None:
        self.state.recent_transcriptions.clear()
        self.state.today_transcriptions.clear()

    # Turns

    @property
    def pending_turn(self) -> Optional[Turn]:
        pending_id = self.state.pending_turn_id
        if pending_id is None:
            return None
        for turns in (self.state.recent_turns, self.state.today_turns):
            for turn in reversed(turns):
                if turn.id == pending_id:
                    return turn
        return None

    def apply_turn(self, turn: Turn) -> None:
        """Add a new turn, or splice an updated one into every view holding it."""
        in_recent = _splice(self.state.recent_turns, turn)
        in_today = _splice(self.state.today_turns, turn)

        if not (in_recent or in_today) and turn.id != self.state.pending_turn_id:
            self.roll_day_if_needed(turn.timestamp)
            self.state.recent_turns.append(turn)
            _trim(self.state.recent_turns, self.max_recent_turns)
            if self.is_in_current_day(turn.timestamp):
                self.state.today_turns.append(turn)

        if turn.status.is_open:
            self.state.pending_turn_id = turn.id
        elif self.state.pending_turn_id == turn.id:
            self.state.pending_turn_id = None

    def apply_turns(self, turns: Iterable[Turn]) -> None:
        for turn in turns:
            self.apply_turn(turn)

    def load_turns(self, turns: List[Turn]) -> Optional[Turn]:
        """Replace turn state from a full-file backfill.

        Returns:
            The trailing pending turn, if it is still in the recent window
        """
        self.state.today_turns = [t for t in turns if self.is_in_current_day(t.timestamp)]
        self.state.recent_turns = list(turns)
        _trim(self.state.recent_turns, self.max_recent_turns)
        self.state.pending_turn_id = None

        if turns and turns[-1].status is TurnStatus.PENDING and self.state.recent_turns:
            pending = turns[-1]
            if self.state.recent_turns[-1].id == pending.id:
                self.state.pending_turn_id = pending.id
                return pending
        return None

    def reset_turns(self) -> None:
        self.state.recent_turns.clear()
        self.state.today_turns.clear()
        self.state.pending_turn_id = None

    @property
    def is_processing(self) -> bool:
        if self.state.pending_turn_id is not None:
            return True
        turns = self.state.recent_turns
        return bool(turns) and turns[-1].status.is_open

    # Daemon issues

    def _count_issue(self, event: BrabbleEvent) -> None:
        counts = self.state.issue_counts
        if isinstance(event, DaemonError):
            counts.error_count += 1
        if OVERFLOW_MARKER in event.message:
            counts.overflow_count += 1
        if NO_SPEECH_MARKER in event.message:
            counts.no_speech_count += 1

    def record_events(self, events: Iterable[BrabbleEvent]) -> None:
        """Count today's issues from Error and Info daemon events."""
        for event in events:
            if not isinstance(event, (DaemonError, DaemonInfo)):
                continue
            self.roll_day_if_needed(event.timestamp)
            if self.is_in_current_day(event.timestamp):
                self._count_issue(event)

    def load_issue_counts(self, events: Iterable[BrabbleEvent]) -> None:
        """Recount issues for the tracked day from a full-file backfill."""
        self.state.issue_counts = IssueCounts()
        for event in events:
            if isinstance(event, (DaemonError, DaemonInfo)) and self.is_in_current_day(event.timestamp):
                self._count_issue(event)

    def reset_issue_counts(self) -> None:
        self.state.issue_counts = IssueCounts()
