"""Incremental tail reader for append-only, rotating log files.

A ``TailState`` remembers how many bytes of a file have been consumed and
any trailing line that was not yet terminated. ``read_new_lines`` turns
"read from offset to EOF" into the list of complete lines appended since
the previous call, and reports when the file disappeared or shrank.
"""

import codecs
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Union

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


@dataclass
class TailState:
    """Cursor into a single watched file."""
    offset: int = 0
    remainder: str = ""

    def clear(self) -> None:
        self.offset = 0
        self.remainder = ""


@dataclass
class TailReadResult:
    """Lines appended since the last read, and whether the cursor was reset."""
    lines: List[str] = field(default_factory=list)
    did_reset: bool = False


def _file_size(path: Path) -> int:
    try:
        return path.stat().st_size
    except OSError:
        return 0


def _decode_chunk(data: bytes):
    """Decode the longest valid UTF-8 prefix of ``data``.

    An incomplete multi-byte sequence at the end is held back for the next
    read. Decoding also stops in front of the first invalid byte, which is
    retried on the next call.

    Returns:
        Tuple of (text, number of bytes consumed)
    """
    decoder = codecs.getincrementaldecoder("utf-8")()
    try:
        text = decoder.decode(data, final=False)
    except UnicodeDecodeError as e:
        return data[:e.start].decode("utf-8"), e.start
    held, _ = decoder.getstate()
    return text, len(data) - len(held)


def sync_to_eof(path: PathLike, state: TailState) -> None:
    """Park the cursor at the current end of file so only future appends are read."""
    path = Path(path)
    state.offset = _file_size(path)
    state.remainder = ""
    logger.debug(f"Synced {path.name} to EOF at offset {state.offset}")


def read_new_lines(path: PathLike, state: TailState) -> TailReadResult:
    """Read complete lines appended to ``path`` since ``state.offset``.

    Args:
        path: Log file to read
        state: Cursor for this file, updated in place

    Returns:
        TailReadResult with the new non-empty lines and a reset flag
    """
    path = Path(path)
    if not path.exists():
        state.clear()
        return TailReadResult(lines=[], did_reset=True)

    size = _file_size(path)
    did_reset = False
    if size < state.offset:
        logger.info(f"{path.name} shrank from {state.offset} to {size} bytes, re-reading from start")
        state.clear()
        did_reset = True

    try:
        with open(path, "rb") as f:
            f.seek(state.offset)
            data = f.read()
    except OSError as e:
        logger.warning(f"Could not read {path}: {e}")
        return TailReadResult(lines=[], did_reset=did_reset)

    if not data:
        return TailReadResult(lines=[], did_reset=did_reset)

    text, consumed = _decode_chunk(data)
    state.offset += consumed
    if consumed < len(data):
        logger.debug(f"Holding back {len(data) - consumed} undecoded bytes of {path.name}")

    if not text:
        return TailReadResult(lines=[], did_reset=did_reset)

    chunk = state.remainder + text
    state.remainder = ""

    lines = chunk.split("\n")
    # The last segment is "" when the chunk ended with a newline, else a partial line
    state.remainder = lines.pop()

    complete = [line.rstrip("\r") for line in lines]
    return TailReadResult(lines=[line for line in complete if line], did_reset=did_reset)


def read_from_start(path: PathLike, state: TailState) -> List[str]:
    """Consume the whole file for a startup backfill.

    The cursor is left right after the bytes that were read, with any
    unterminated last line held as the remainder, so the next
    ``read_new_lines`` continues exactly where the backfill stopped.
    """
    state.clear()
    return read_new_lines(path, state).lines
