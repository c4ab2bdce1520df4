"""Console rendering of snapshots for the command-line host."""

import logging
from datetime import datetime
from typing import Optional

from rich.console import Console, Group
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..models.events import BrabbleEvent, Heard, WakeWordMatched
from ..models.snapshot import Snapshot
from ..models.stats import HealthStatus
from ..models.turn import TurnStatus

logger = logging.getLogger(__name__)

STATUS_STYLES = {
    TurnStatus.PENDING: "yellow",
    TurnStatus.PROCESSING: "blue",
    TurnStatus.COMPLETED: "green",
    TurnStatus.FAILED: "red",
}

HEALTH_STYLES = {
    HealthStatus.GOOD: "green",
    HealthStatus.WARNING: "yellow",
    HealthStatus.POOR: "red",
    HealthStatus.UNKNOWN: "dim",
}


def _format_time(timestamp: datetime) -> str:
    return timestamp.astimezone().strftime("%H:%M:%S")


def _format_seconds(seconds: Optional[float]) -> str:
    if seconds is None:
        return "-"
    if seconds < 60:
        return f"{seconds:.1f}s"
    return f"{seconds / 60:.1f}m"


def render_stats(snapshot: Snapshot) -> Table:
    stats = snapshot.stats
    table = Table(title="Today", show_header=True, header_style="bold magenta")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="white")

    table.add_row("Transcriptions", str(stats.transcription_count))
    table.add_row("Requests", str(stats.request_count))
    table.add_row("Responses", str(stats.response_count))
    table.add_row("Success rate", f"{stats.success_rate:.0f}%")
    table.add_row("Avg response", _format_seconds(stats.average_response_time))
    table.add_row("Warnings", f"{stats.warning_count} ({stats.overflow_count} overflow, "
                              f"{stats.no_speech_count} no speech)")
    table.add_row("Errors", str(stats.error_count))
    health = stats.health_status
    table.add_row("Health", Text(health.value, style=HEALTH_STYLES[health]))
    return table


def render_sessions(snapshot: Snapshot, limit: int = 5) -> Table:
    table = Table(title="Sessions", show_header=True, header_style="bold magenta")
    table.add_column("Start", style="cyan")
    table.add_column("Turns", justify="right")
    table.add_column("Duration", justify="right")
    table.add_column("Status")
    table.add_column("Title", style="white")

    for session in snapshot.sessions[:limit]:
        status = session.status
        table.add_row(
            _format_time(session.start_time),
            str(session.turn_count),
            _format_seconds(session.duration),
            Text(status.value, style=STATUS_STYLES[status]),
            Text(session.title),
        )
    return table


def render_transcriptions(snapshot: Snapshot) -> Panel:
    lines = Text()
    for transcription in snapshot.transcriptions:
        style = "bold green" if transcription.is_wake_word_triggered else "white"
        lines.append(f"{_format_time(transcription.timestamp)} ", style="dim")
        lines.append(transcription.text + "\n", style=style)
    if not snapshot.transcriptions:
        lines.append("No transcriptions yet", style="dim")
    return Panel(lines, title="Recent transcriptions", border_style="blue")


def render_log_status(snapshot: Snapshot) -> Text:
    status = snapshot.log_status
    if not status.has_issues:
        return Text("All logs healthy", style="green")
    text = Text()
    if status.missing_paths:
        text.append(f"Missing: {', '.join(status.missing_file_names)}  ", style="red")
    if status.empty_paths:
        text.append(f"Empty: {', '.join(status.empty_file_names)}", style="yellow")
    return text


def render_snapshot(snapshot: Snapshot) -> Group:
    header = Text("Claudio", style="bold blue")
    if snapshot.is_processing:
        header.append("  processing...", style="yellow")
    return Group(
        header,
        render_log_status(snapshot),
        render_stats(snapshot),
        render_sessions(snapshot),
        render_transcriptions(snapshot),
    )


class SnapshotConsole:
    """Prints every published snapshot and the live "heard" text."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()
        self.current_transcription: Optional[str] = None

    def on_snapshot(self, snapshot: Snapshot) -> None:
        self.console.print(render_snapshot(snapshot))

    def on_daemon_events(self, events) -> None:
        for event in events:
            self._handle_event(event)

    def _handle_event(self, event: BrabbleEvent) -> None:
        if isinstance(event, Heard):
            self.current_transcription = event.text
            self.console.print(f"[dim]heard:[/dim] {escape(event.text)}")
        elif isinstance(event, WakeWordMatched):
            self.console.print(f"[bold green]wake word:[/bold green] {escape(event.word)}")
