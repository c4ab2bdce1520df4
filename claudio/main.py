"""Main application entry point for Claudio."""

import sys
import time
import argparse
import logging
from pathlib import Path
from typing import Optional

from claudio import __version__
from claudio.services.log_store import LogStore
from claudio.services.log_watcher import LogWatcher
from claudio.ui.console import SnapshotConsole

from .config import ClaudioConfig

logger = logging.getLogger(__name__)

LOG_FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s'
LOG_CONSOLE_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'


class Server:

    def __init__(self, config_path: Optional[str], log_level: Optional[str] = None):
        self.config = ClaudioConfig(config_path)
        # Command line level wins over the config file
        level = log_level or self.config.get('logging.level', 'INFO')
        setup_logging(self.config, level)
        self.poll_interval = float(self.config.get('host.poll_interval_seconds', 0.5))
        self.should_exit = False

    def init(self):
        self.log_store = LogStore(self.config)
        self.console = SnapshotConsole()
        self.log_store.subscribe_snapshots(self.console.on_snapshot)
        self.log_store.subscribe_daemon_events(self.console.on_daemon_events)
        # Watch before the backfill so nothing written in between goes unnoticed
        self.watcher = LogWatcher(self.log_store)
        self.watcher.start()
        self.log_store.start()

    def run(self, duration: Optional[int] = None):
        """Serve watcher events until interrupted or ``duration`` seconds pass.

        The loop itself only retries log directories that did not exist at
        startup; file changes arrive on the watcher's thread.
        """
        started = time.time()
        try:
            while not self.should_exit:
                self.watcher.check_pending_directories()
                if duration is not None and time.time() - started >= duration:
                    break
                time.sleep(self.poll_interval)
        except Exception as e:
            logger.error(f"Error in run: {e}", exc_info=True)
        finally:
            self.cleanup()

    def cleanup(self):
        self.watcher.stop()
        self.log_store.stop()


def _configure_handler(handler: logging.Handler, level: int, fmt: str) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def setup_logging(config, level: str = "INFO") -> None:
    """Send log records to the configured file and, optionally, to stderr.

    stderr shares the terminal with the snapshot view, so it only gets warnings.
    """
    handlers = []
    log_file_path = config.get('logging.file_path')
    if log_file_path:
        Path(log_file_path).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(_configure_handler(logging.FileHandler(log_file_path), logging.DEBUG, LOG_FILE_FORMAT))
    if config.get('logging.console_output', True):
        handlers.append(_configure_handler(logging.StreamHandler(sys.stderr), logging.WARNING, LOG_CONSOLE_FORMAT))

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(getattr(logging, level.upper()))
    for handler in handlers:
        root_logger.addHandler(handler)

    logger.info(f"Claudio {__version__} logging at {level.upper()} to {log_file_path or 'stderr'}")


def main() -> None:
    """Main entry point for Claudio."""
    parser = argparse.ArgumentParser(
        description="Claudio - follow the brabble voice daemon logs"
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to configuration YAML file (default: built-in settings)"
    )

    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Set logging level (overrides config)"
    )

    parser.add_argument(
        "--once",
        action="store_true",
        help="Print the startup snapshot and exit"
    )

    parser.add_argument(
        "--duration",
        type=int,
        help="Stop following after this many seconds (default: run until interrupted)"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"Claudio v{__version__}"
    )

    args = parser.parse_args()

    try:
        server = Server(args.config, args.log_level)
        server.init()
        if args.once:
            server.cleanup()
        else:
            server.run(args.duration)
    except KeyboardInterrupt:
        # run() already stopped the log store on its way out
        print("\nGoodbye!")
    except Exception as e:
        print(f"Error: {e}")
        logging.error(f"Application error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
