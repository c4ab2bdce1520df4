"""Correlates hook log requests and responses into conversation turns."""

import logging
from typing import Iterable, List, Optional

from ..models.turn import HookEntry, HookEntryType, Turn, TurnStatus

logger = logging.getLogger(__name__)


class TurnCorrelator:
    """State machine folding hook entries into turns.

    At most one request is pending at a time. A new request supersedes an
    unanswered one (which fails); a response completes the pending request.
    The pending slot is kept across calls so incremental batches correlate
    the same way as a full replay.
    """

    def __init__(self):
        self.pending: Optional[Turn] = None

    @property
    def has_pending(self) -> bool:
        return self.pending is not None

    def process(self, entry: HookEntry) -> List[Turn]:
        """Fold one entry into the correlator.

        Args:
            entry: Parsed hook log entry

        Returns:
            Turns created or updated by this entry, in order. Updated turns
            keep the id of the turn they replace.
        """
        if entry.type is HookEntryType.RECEIVED:
            changes = []
            if self.pending is not None:
                logger.debug(f"Request superseded before response: {self.pending.user_request[:50]}")
                changes.append(self.pending.failed())
            self.pending = Turn(timestamp=entry.timestamp, user_request=entry.content)
            changes.append(self.pending)
            return changes

        if self.pending is None:
            logger.debug(f"Discarding orphaned response at {entry.timestamp.isoformat()}")
            return []

        completed = self.pending.completed(entry.content, entry.timestamp)
        self.pending = None
        return [completed]

    def process_all(self, entries: Iterable[HookEntry]) -> List[Turn]:
        changes = []
        for entry in entries:
            changes.extend(self.process(entry))
        return changes

    def restore_pending(self, turn: Optional[Turn]) -> None:
        """Seed the pending slot, e.g. after replaying the whole log at startup."""
        if turn is not None and turn.status is not TurnStatus.PENDING:
            raise ValueError(f"Cannot restore a {turn.status.value} turn as pending")
        self.pending = turn

    def reset(self) -> None:
        self.pending = None


def correlate_entries(entries: Iterable[HookEntry]) -> List[Turn]:
    """Replay a complete entry stream into its final list of turns.

    A request still unanswered at the end stays pending.
    """
    turns: List[Turn] = []
    index_by_id = {}
    correlator = TurnCorrelator()
    for turn in correlator.process_all(entries):
        if turn.id in index_by_id:
            turns[index_by_id[turn.id]] = turn
        else:
            index_by_id[turn.id] = len(turns)
            turns.append(turn)
    return turns
