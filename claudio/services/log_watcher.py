"""Filesystem watcher that turns watchdog events into LogStore change cycles."""

import logging
import os
from pathlib import Path
from typing import Dict, Optional, Set

from watchdog.events import (
    EVENT_TYPE_CREATED,
    EVENT_TYPE_DELETED,
    EVENT_TYPE_MODIFIED,
    EVENT_TYPE_MOVED,
    FileSystemEvent,
    FileSystemEventHandler,
)
from watchdog.observers import Observer

from .log_store import LogStore

logger = logging.getLogger(__name__)

CHANGE_EVENT_TYPES = (EVENT_TYPE_CREATED, EVENT_TYPE_MODIFIED, EVENT_TYPE_DELETED, EVENT_TYPE_MOVED)


class LogChangeHandler(FileSystemEventHandler):
    """Forwards events that touch one of the store's log files."""

    def __init__(self, log_store: LogStore):
        super().__init__()
        self.log_store = log_store
        # Observers report real paths, so match on resolved paths (e.g. /tmp vs /private/tmp)
        self.paths_by_resolved: Dict[Path, Path] = {path.resolve(): path for path in log_store.paths}

    def on_any_event(self, event: FileSystemEvent) -> None:
        if event.is_directory or event.event_type not in CHANGE_EVENT_TYPES:
            return

        for raw_path in (event.src_path, getattr(event, "dest_path", "")):
            if not raw_path:
                continue
            path = self.paths_by_resolved.get(Path(os.fsdecode(raw_path)).resolve())
            if path is None:
                continue
            try:
                self.log_store.handle_file_changed(path)
            except Exception as e:
                logger.error(f"Error handling {event.event_type} event for {path}: {e}", exc_info=True)


class LogWatcher:
    """Watches the directories holding the log files.

    A directory that does not exist yet cannot be watched; those are kept
    aside and picked up by ``check_pending_directories`` once they appear.
    """

    def __init__(self, log_store: LogStore):
        self.log_store = log_store
        self.handler = LogChangeHandler(log_store)
        self.observer: Optional[Observer] = None
        self.watched_dirs: Set[Path] = set()
        self.pending_dirs: Set[Path] = set()

    def start(self) -> None:
        self.observer = Observer()
        for directory in sorted({path.parent for path in self.log_store.paths}):
            if directory.is_dir():
                self._schedule(directory)
            else:
                logger.warning(f"Log directory {directory} does not exist yet, will watch it once created")
                self.pending_dirs.add(directory)
        self.observer.start()

    def _schedule(self, directory: Path) -> None:
        self.observer.schedule(self.handler, str(directory), recursive=False)
        self.watched_dirs.add(directory)
        logger.info(f"Watching {directory}")

    def check_pending_directories(self) -> int:
        """Start watching directories that appeared since the last check.

        Log files already present in a newly watched directory are read
        right away, since their creation happened before the watch began.

        Returns:
            Number of change notifications delivered
        """
        notified = 0
        for directory in sorted(self.pending_dirs):
            if not directory.is_dir():
                continue
            self.pending_dirs.discard(directory)
            self._schedule(directory)
            for path in self.log_store.paths:
                if path.parent == directory and path.exists():
                    self.log_store.handle_file_changed(path)
                    notified += 1
        return notified

    def stop(self) -> None:
        if self.observer is None:
            return
        self.observer.stop()
        self.observer.join()
        self.observer = None
        logger.info("Log watcher stopped")
