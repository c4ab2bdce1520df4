"""Pytest configuration and fixtures for Claudio tests."""

import pytest
import tempfile
import uuid
import logging
from datetime import datetime
from pathlib import Path

import yaml

from claudio.config import ClaudioConfig


# Configure logging for tests
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast isolated tests")
    config.addinivalue_line("markers", "integration: tests touching real files")


def local_time(year, month, day, hour=0, minute=0, second=0) -> datetime:
    """Timezone-aware datetime in the machine's local zone."""
    return datetime(year, month, day, hour, minute, second).astimezone()


def transcript_line(timestamp: datetime, text: str) -> str:
    return f"{timestamp.isoformat(timespec='milliseconds')} {text}\n"


def hook_line(timestamp: datetime, label: str, content: str) -> str:
    return f"[{timestamp.strftime('%Y-%m-%d %H:%M:%S')}] {label}: {content}\n"


def daemon_line(timestamp: datetime, level: str, msg: str) -> str:
    escaped = msg.replace('"', '\\"')
    return f'time={timestamp.isoformat()} level={level} msg="{escaped}"\n'


class Collector:
    """Keeps pubsub payloads; pubsub holds listeners weakly so tests keep this alive."""

    def __init__(self):
        self.snapshots = []
        self.event_batches = []

    def on_snapshot(self, snapshot):
        self.snapshots.append(snapshot)

    def on_daemon_events(self, events):
        self.event_batches.append(events)


@pytest.fixture
def temp_data_dir():
    """Create temporary directory for test data."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield temp_dir


@pytest.fixture
def log_dir(temp_data_dir):
    path = Path(temp_data_dir) / "brabble"
    path.mkdir()
    return path


@pytest.fixture
def config_file(temp_data_dir):
    """Write a config pointing at the temporary brabble directory."""
    config_path = Path(temp_data_dir) / "claudio.yaml"
    with open(config_path, "w", encoding="utf-8") as f:
        yaml.safe_dump({
            "logs": {"directory": "brabble"},
            "limits": {"max_recent_transcriptions": 5, "max_recent_turns": 50},
            "logging": {"file_path": "logs/claudio.log"},
        }, f)
    return config_path


@pytest.fixture
def test_config(config_file):
    return ClaudioConfig(str(config_file))


@pytest.fixture
def topics():
    """Unique pubsub topics so tests never share listeners."""
    suffix = uuid.uuid4().hex
    return f"test_{suffix}.snapshot", f"test_{suffix}.daemon_events"


@pytest.fixture
def collector():
    return Collector()
