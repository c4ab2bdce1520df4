"""Console presentation for the Claudio host."""

from .console import SnapshotConsole, render_snapshot

__all__ = [
    "SnapshotConsole",
    "render_snapshot",
]
