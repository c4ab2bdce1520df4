"""Computes the day's statistics from the aggregator's today views."""

from typing import Sequence

from ..models.stats import IssueCounts, SessionStats
from ..models.transcription import Transcription
from ..models.turn import Turn, TurnStatus


def calculate_stats(transcriptions: Sequence[Transcription],
                    turns: Sequence[Turn],
                    issue_counts: IssueCounts) -> SessionStats:
    """Build SessionStats for one day.

    Args:
        transcriptions: Today's transcriptions
        turns: Today's turns
        issue_counts: Today's daemon issue counters

    Returns:
        Frozen SessionStats
    """
    response_times = tuple(
        turn.processing_duration for turn in turns
        if turn.processing_duration is not None
    )
    return SessionStats(
        transcription_count=len(transcriptions),
        request_count=len(turns),
        response_count=sum(1 for turn in turns if turn.status is TurnStatus.COMPLETED),
        overflow_count=issue_counts.overflow_count,
        no_speech_count=issue_counts.no_speech_count,
        error_count=issue_counts.error_count,
        response_times=response_times,
    )
