"""Services layer: correlation, aggregation and snapshot publication."""

from .correlator import TurnCorrelator, correlate_entries
from .session_grouper import group_turns_into_sessions
from .aggregator import AggregatorState, DayScopedAggregator
from .stats_service import calculate_stats
from .publisher import SnapshotPublisher, BrabbleEventPublisher
from .log_store import LogStore, compute_log_status
from .log_watcher import LogChangeHandler, LogWatcher

__all__ = [
    "TurnCorrelator",
    "correlate_entries",
    "group_turns_into_sessions",
    "AggregatorState",
    "DayScopedAggregator",
    "calculate_stats",
    "SnapshotPublisher",
    "BrabbleEventPublisher",
    "LogStore",
    "compute_log_status",
    "LogChangeHandler",
    "LogWatcher",
]
