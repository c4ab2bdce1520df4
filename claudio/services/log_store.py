"""Log store that tails the brabble logs and publishes consistent snapshots."""

import logging
import threading
from datetime import date, datetime
from pathlib import Path
from typing import List, Optional

from ..config import ClaudioConfig
from ..models.snapshot import Snapshot
from ..models.stats import LogStatus
from ..parsers import BrabbleLogParser, ClaudeHookLogParser, TranscriptLogParser
from ..tail import TailState, read_from_start, read_new_lines
from .aggregator import DayScopedAggregator
from .correlator import TurnCorrelator, correlate_entries
from .publisher import BrabbleEventPublisher, SnapshotPublisher
from .session_grouper import group_turns_into_sessions
from .stats_service import calculate_stats

logger = logging.getLogger(__name__)

SNAPSHOT_TOPIC = "claudio.snapshot"
DAEMON_EVENTS_TOPIC = "claudio.daemon_events"


def compute_log_status(paths: List[Path]) -> LogStatus:
    """Report which log files are missing or empty and the latest modification time."""
    missing = []
    empty = []
    latest_activity: Optional[datetime] = None

    for path in paths:
        try:
            stat = path.stat()
        except FileNotFoundError:
            missing.append(path)
            continue
        except OSError as e:
            logger.warning(f"Could not stat {path}: {e}")
            missing.append(path)
            continue

        if stat.st_size == 0:
            empty.append(path)

        modified = datetime.fromtimestamp(stat.st_mtime).astimezone()
        if latest_activity is None or modified > latest_activity:
            latest_activity = modified

    return LogStatus(missing_paths=tuple(missing), empty_paths=tuple(empty), last_activity=latest_activity)


class LogStore:
    """Single-writer core: tail, parse, fold and publish.

    Every update cycle runs under one lock, so change notifications for
    different files arriving from different threads never interleave and
    listeners only ever see complete snapshots.
    """

    def __init__(self,
                 config: ClaudioConfig,
                 snapshot_topic: str = SNAPSHOT_TOPIC,
                 events_topic: str = DAEMON_EVENTS_TOPIC,
                 today: Optional[date] = None):
        """Initialize log store.

        Args:
            config: Application configuration
            snapshot_topic: Pub/sub topic for snapshots
            events_topic: Pub/sub topic for daemon event batches
            today: Day to start tracking; defaults to the local date
        """
        self.config = config
        self.transcripts_path = config.get_transcripts_log_path()
        self.hook_path = config.get_hook_log_path()
        self.daemon_path = config.get_daemon_log_path()
        self.gap_threshold_seconds = float(config.get('sessions.gap_threshold_seconds', 300))

        self.transcript_parser = TranscriptLogParser(wake_word=config.get_wake_word())
        self.hook_parser = ClaudeHookLogParser()
        self.daemon_parser = BrabbleLogParser()

        self.aggregator = DayScopedAggregator(
            max_recent_transcriptions=int(config.get('limits.max_recent_transcriptions', 10)),
            max_recent_turns=int(config.get('limits.max_recent_turns', 50)),
            today=today,
        )
        self.correlator = TurnCorrelator()

        self.transcript_tail = TailState()
        self.hook_tail = TailState()
        self.daemon_tail = TailState()

        self.snapshot_publisher = SnapshotPublisher(snapshot_topic)
        self.events_publisher = BrabbleEventPublisher(events_topic)
        self.log_status = LogStatus()
        self.latest_snapshot: Optional[Snapshot] = None
        self.started = False

        # Thread safety
        self.lock = threading.RLock()

        logger.info(f"LogStore initialized: transcripts={self.transcripts_path}, "
                    f"hook={self.hook_path}, daemon={self.daemon_path}")

    @property
    def paths(self) -> List[Path]:
        return [self.transcripts_path, self.hook_path, self.daemon_path]

    # Subscriptions

    def subscribe_snapshots(self, listener) -> None:
        """Register a listener called with ``snapshot=`` after every cycle."""
        self.snapshot_publisher.subscribe(listener)

    def subscribe_daemon_events(self, listener) -> None:
        """Register a listener called with ``events=`` for each batch of daemon events."""
        self.events_publisher.subscribe(listener)

    # Lifecycle

    def start(self) -> Snapshot:
        """Backfill from the full files, leave each tail where its read ended, and publish."""
        with self.lock:
            self._load_initial_data()
            self.started = True
            return self._publish_snapshot()

    def stop(self) -> None:
        logger.info("Stopping LogStore...")
        self.snapshot_publisher.unsubscribe_all()
        self.events_publisher.unsubscribe_all()

    def _load_initial_data(self) -> None:
        # Each tail ends at the exact byte the backfill read up to, so lines
        # appended while loading are left for the first change cycle
        lines = read_from_start(self.transcripts_path, self.transcript_tail)
        transcriptions = self.transcript_parser.parse_lines(lines)
        self.aggregator.load_transcriptions(transcriptions)

        lines = read_from_start(self.hook_path, self.hook_tail)
        turns = correlate_entries(self.hook_parser.parse_lines(lines))
        pending = self.aggregator.load_turns(turns)
        self.correlator.restore_pending(pending)

        lines = read_from_start(self.daemon_path, self.daemon_tail)
        events = self.daemon_parser.parse_lines(lines)
        self.aggregator.load_issue_counts(events)

        self.log_status = compute_log_status(self.paths)
        logger.info(f"Backfilled {len(transcriptions)} transcriptions, {len(turns)} turns, "
                    f"{len(events)} daemon events")

    # Change handlers

    def handle_file_changed(self, path) -> Optional[Snapshot]:
        """Dispatch a change notification by path.

        Unknown paths are ignored, and so is anything before ``start``: the
        backfill reads those bytes itself.
        """
        path = Path(path)
        with self.lock:
            if not self.started:
                logger.debug(f"Ignoring change notification before start: {path}")
                return None
            if path == self.transcripts_path:
                return self.handle_transcripts_changed()
            if path == self.hook_path:
                return self.handle_hook_log_changed()
            if path == self.daemon_path:
                return self.handle_daemon_log_changed()
        logger.debug(f"Ignoring change notification for unwatched path: {path}")
        return None

    def handle_transcripts_changed(self) -> Snapshot:
        with self.lock:
            result = read_new_lines(self.transcripts_path, self.transcript_tail)
            if result.did_reset:
                logger.info("Transcript log reset, clearing transcriptions")
                self.aggregator.reset_transcriptions()

            for line in result.lines:
                transcription = self.transcript_parser.parse_line(line)
                if transcription is not None:
                    self.aggregator.add_transcription(transcription)

            self.log_status = compute_log_status(self.paths)
            return self._publish_snapshot()

    def handle_hook_log_changed(self) -> Snapshot:
        with self.lock:
            result = read_new_lines(self.hook_path, self.hook_tail)
            if result.did_reset:
                logger.info("Hook log reset, clearing turns")
                self.aggregator.reset_turns()
                self.correlator.reset()

            for line in result.lines:
                entry = self.hook_parser.parse_line(line)
                if entry is not None:
                    self.aggregator.apply_turns(self.correlator.process(entry))

            self.log_status = compute_log_status(self.paths)
            return self._publish_snapshot()

    def handle_daemon_log_changed(self) -> Snapshot:
        with self.lock:
            result = read_new_lines(self.daemon_path, self.daemon_tail)
            if result.did_reset:
                logger.info("Daemon log reset, clearing issue counts")
                self.aggregator.reset_issue_counts()

            events = []
            for line in result.lines:
                event = self.daemon_parser.parse_line(line)
                if event is not None:
                    events.append(event)

            if events:
                self.aggregator.record_events(events)
                self.events_publisher.publish_events(events)

            self.log_status = compute_log_status(self.paths)
            return self._publish_snapshot()

    # Snapshot

    def build_snapshot(self) -> Snapshot:
        with self.lock:
            state = self.aggregator.state
            recent_turns = tuple(state.recent_turns)
            stats = calculate_stats(state.today_transcriptions, state.today_turns, state.issue_counts)
            return Snapshot(
                transcriptions=tuple(state.recent_transcriptions),
                turns=recent_turns,
                sessions=tuple(group_turns_into_sessions(recent_turns, self.gap_threshold_seconds)),
                is_processing=self.correlator.has_pending or self.aggregator.is_processing,
                stats=stats,
                log_status=self.log_status,
            )

    def _publish_snapshot(self) -> Snapshot:
        snapshot = self.build_snapshot()
        self.latest_snapshot = snapshot
        self.snapshot_publisher.publish_snapshot(snapshot)
        return snapshot
