"""Groups conversation turns into sessions by time gap."""

from typing import Iterable, List

from ..models.session import Session
from ..models.turn import Turn

SESSION_GAP_THRESHOLD_SECONDS = 5 * 60


def group_turns_into_sessions(turns: Iterable[Turn],
                              gap_threshold_seconds: float = SESSION_GAP_THRESHOLD_SECONDS) -> List[Session]:
    """Partition turns into sessions.

    A new session starts when a turn's request time is more than
    ``gap_threshold_seconds`` after the end of the previous turn (its
    response time, or its request time if unanswered).

    Args:
        turns: Turns in any order; they are sorted by request time first
        gap_threshold_seconds: Maximum idle gap inside one session

    Returns:
        Sessions, most recent first
    """
    sorted_turns = sorted(turns, key=lambda turn: turn.timestamp)
    if not sorted_turns:
        return []

    groups: List[List[Turn]] = [[sorted_turns[0]]]
    for turn in sorted_turns[1:]:
        gap = (turn.timestamp - groups[-1][-1].end_time).total_seconds()
        if gap > gap_threshold_seconds:
            groups.append([turn])
        else:
            groups[-1].append(turn)

    sessions = [Session(start_time=group[0].timestamp, turns=tuple(group)) for group in groups]
    sessions.reverse()
    return sessions
