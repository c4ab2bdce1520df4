"""Unit tests for the rich console rendering."""

import pytest
from datetime import timedelta
from pathlib import Path

from rich.console import Console

from claudio.models import (
    Heard,
    IssueCounts,
    LogStatus,
    Snapshot,
    Transcription,
    Turn,
    TurnStatus,
    WakeWordMatched,
)
from claudio.services.session_grouper import group_turns_into_sessions
from claudio.services.stats_service import calculate_stats
from claudio.ui.console import SnapshotConsole

from conftest import local_time

T0 = local_time(2026, 1, 22, 9, 0, 0)


def recording_console():
    return Console(record=True, width=120, color_system=None)


@pytest.mark.unit
class TestSnapshotConsole:

    def test_renders_snapshot(self):
        turns = (
            Turn(timestamp=T0, user_request="what [bold]time is it", status=TurnStatus.COMPLETED,
                 claude_response="ten", response_timestamp=T0 + timedelta(seconds=2)),
            Turn(timestamp=T0 + timedelta(minutes=1), user_request="and tomorrow?"),
        )
        transcriptions = (Transcription(timestamp=T0, text="claude what time", is_wake_word_triggered=True),)
        snapshot = Snapshot(
            transcriptions=transcriptions,
            turns=turns,
            sessions=tuple(group_turns_into_sessions(turns)),
            is_processing=True,
            stats=calculate_stats(transcriptions, turns, IssueCounts(error_count=1)),
            log_status=LogStatus(missing_paths=(Path("/tmp/brabble.log"),)),
        )
        console = recording_console()

        SnapshotConsole(console).on_snapshot(snapshot)

        output = console.export_text()
        assert "processing" in output
        assert "Missing: brabble.log" in output
        assert "what [bold]time is it" in output
        assert "claude what time" in output
        assert "pending" in output

    def test_empty_snapshot(self):
        console = recording_console()
        SnapshotConsole(console).on_snapshot(Snapshot())

        output = console.export_text()
        assert "All logs healthy" in output
        assert "No transcriptions yet" in output

    def test_daemon_events_update_live_text(self):
        console = recording_console()
        view = SnapshotConsole(console)

        view.on_daemon_events([
            WakeWordMatched(timestamp=T0, word="claude"),
            Heard(timestamp=T0, text="turn [on] the lights"),
        ])

        assert view.current_transcription == "turn [on] the lights"
        output = console.export_text()
        assert "wake word: claude" in output
        assert "heard: turn [on] the lights" in output
