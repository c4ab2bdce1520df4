"""Unit tests for the incremental tail reader."""

import os
import pytest
from pathlib import Path
from unittest.mock import patch

from claudio.tail import TailState, read_from_start, read_new_lines, sync_to_eof


def append(path: Path, data) -> None:
    mode = "ab" if isinstance(data, bytes) else "a"
    kwargs = {} if isinstance(data, bytes) else {"encoding": "utf-8"}
    with open(path, mode, **kwargs) as f:
        f.write(data)


@pytest.fixture
def log_file(temp_data_dir):
    path = Path(temp_data_dir) / "transcripts.log"
    path.write_text("", encoding="utf-8")
    return path


@pytest.mark.unit
class TestTailReader:
    """Test cases for read_new_lines and sync_to_eof."""

    def test_complete_line_is_emitted_once(self, log_file):
        state = TailState()
        append(log_file, "hello world\n")

        result = read_new_lines(log_file, state)
        assert result.lines == ["hello world"]
        assert result.did_reset is False
        assert state.offset == os.path.getsize(log_file)

        again = read_new_lines(log_file, state)
        assert again.lines == []
        assert again.did_reset is False

    def test_partial_line_is_held_until_terminated(self, log_file):
        state = TailState()
        append(log_file, "hello")

        result = read_new_lines(log_file, state)
        assert result.lines == []
        assert state.remainder == "hello"

        append(log_file, " world\n")
        result = read_new_lines(log_file, state)
        assert result.lines == ["hello world"]
        assert state.remainder == ""

    def test_multiple_lines_and_blank_lines(self, log_file):
        state = TailState()
        append(log_file, "one\n\ntwo\r\nthree")

        result = read_new_lines(log_file, state)
        assert result.lines == ["one", "two"]
        assert state.remainder == "three"

    def test_missing_file_resets_state(self, temp_data_dir):
        state = TailState(offset=42, remainder="partial")

        result = read_new_lines(Path(temp_data_dir) / "missing.log", state)
        assert result.lines == []
        assert result.did_reset is True
        assert state == TailState()

    def test_truncation_rereads_from_start(self, log_file):
        append(log_file, "x" * 999 + "\n")
        state = TailState()
        read_new_lines(log_file, state)
        assert state.offset == 1000

        log_file.write_text("y" * 199 + "\n", encoding="utf-8")
        result = read_new_lines(log_file, state)
        assert result.did_reset is True
        assert result.lines == ["y" * 199]
        assert state.offset == 200

    def test_sync_to_eof_skips_existing_history(self, log_file):
        append(log_file, "old line\n")
        state = TailState(remainder="stale")

        sync_to_eof(log_file, state)
        assert state.offset == os.path.getsize(log_file)
        assert state.remainder == ""

        append(log_file, "new line\n")
        assert read_new_lines(log_file, state).lines == ["new line"]

    def test_sync_to_eof_of_missing_file(self, temp_data_dir):
        state = TailState(offset=10)
        sync_to_eof(Path(temp_data_dir) / "missing.log", state)
        assert state.offset == 0

    def test_incomplete_multibyte_sequence_is_not_consumed(self, log_file):
        state = TailState()
        encoded = "café\n".encode("utf-8")
        # Write everything except the last byte of "é"
        append(log_file, encoded[:4])

        result = read_new_lines(log_file, state)
        assert result.lines == []
        assert state.offset == 3
        assert state.remainder == "caf"

        append(log_file, encoded[4:])
        result = read_new_lines(log_file, state)
        assert result.lines == ["café"]
        assert state.offset == len(encoded)

    def test_offset_stops_before_invalid_byte(self, log_file):
        state = TailState()
        append(log_file, b"good\nbad \xff byte\nnext\n")

        result = read_new_lines(log_file, state)
        assert result.lines == ["good"]
        assert state.offset == len(b"good\nbad ")
        assert state.remainder == "bad "

        # Still parked in front of the undecodable byte on the next cycle
        result = read_new_lines(log_file, state)
        assert result.lines == []
        assert state.offset == len(b"good\nbad ")

    def test_invalid_byte_at_start_consumes_nothing(self, log_file):
        state = TailState()
        append(log_file, b"\xffbroken\n")

        result = read_new_lines(log_file, state)
        assert result.lines == []
        assert state.offset == 0
        assert state.remainder == ""

    def test_rewritten_file_recovers_from_invalid_bytes(self, log_file):
        state = TailState()
        append(log_file, b"a valid first line\n\xff\xfe garbage\n")
        assert read_new_lines(log_file, state).lines == ["a valid first line"]

        log_file.write_bytes(b"fresh\n")
        result = read_new_lines(log_file, state)
        assert result.did_reset
        assert result.lines == ["fresh"]
        assert state.offset == len(b"fresh\n")

    def test_read_from_start_parks_after_bytes_read(self, log_file):
        state = TailState(offset=99, remainder="stale")
        append(log_file, "one\ntwo\npart")

        assert read_from_start(log_file, state) == ["one", "two"]
        assert state.offset == os.path.getsize(log_file)
        assert state.remainder == "part"

        append(log_file, "ial\nthree\n")
        assert read_new_lines(log_file, state).lines == ["partial", "three"]

    def test_read_from_start_of_missing_file(self, temp_data_dir):
        state = TailState(offset=5)
        assert read_from_start(Path(temp_data_dir) / "missing.log", state) == []
        assert state.offset == 0

    def test_read_error_keeps_cursor(self, log_file):
        state = TailState()
        append(log_file, "hello\n")

        with patch("builtins.open", side_effect=PermissionError("denied")):
            result = read_new_lines(log_file, state)

        assert result.lines == []
        assert not result.did_reset
        assert state.offset == 0

        assert read_new_lines(log_file, state).lines == ["hello"]
