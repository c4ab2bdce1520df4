"""Tail tracking for watched log files."""

from .reader import TailState, TailReadResult, read_from_start, read_new_lines, sync_to_eof

__all__ = [
    "TailState",
    "TailReadResult",
    "read_from_start",
    "read_new_lines",
    "sync_to_eof",
]
