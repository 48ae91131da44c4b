"""
Tests for the line channel over engine streams.
"""

import io
import os

import pytest

from stockfish_client.engine.channel import LineChannel
from stockfish_client.exceptions import EngineIOError, EngineProtocolError


@pytest.fixture
def channel():
    return LineChannel(io.StringIO("first\nsecond\r\n\nlast"), io.StringIO())


class TestWrite:
    """Tests for writing lines."""

    def test_write_appends_newline(self, channel):
        """Test each write becomes exactly one line."""
        channel.write_line("hello world")
        channel.write_line("hello world1")

        assert channel.writer.getvalue() == "hello world\nhello world1\n"

    def test_write_to_closed_stream(self, channel):
        """Test writing to a closed stream raises EngineIOError."""
        channel.writer.close()

        with pytest.raises(EngineIOError):
            channel.write_line("isready")

    def test_unbuffered_without_descriptor(self, channel):
        """Test unbuffered writes fall back to a normal write for in-memory streams."""
        channel.write_unbuffered("quit")

        assert channel.writer.getvalue() == "quit\n"

    def test_unbuffered_reaches_pipe(self):
        """Test unbuffered writes go straight to the file descriptor."""
        read_fd, write_fd = os.pipe()
        with os.fdopen(read_fd, "r") as reader, os.fdopen(write_fd, "w") as writer:
            channel = LineChannel(reader, writer)
            writer.write("buffered")  # stays in the Python buffer

            channel.write_unbuffered("quit")

            assert os.read(read_fd, 64) == b"quit\n"

    def test_io_error_is_protocol_error(self, channel):
        """Test stream failures propagate as protocol failures."""
        channel.writer.close()

        with pytest.raises(EngineProtocolError):
            channel.write_line("d")


class TestRead:
    """Tests for reading lines."""

    def test_lines_are_stripped(self, channel):
        """Test line terminators are removed, other whitespace kept."""
        assert channel.read_line() == "first"
        assert channel.read_line() == "second"
        assert channel.read_line() == ""
        assert channel.read_line() == "last"

    def test_end_of_stream(self, channel):
        """Test end-of-stream is reported as None."""
        for _ in range(4):
            channel.read_line()

        assert channel.read_line() is None
        assert channel.read_line() is None

    def test_read_from_closed_stream(self, channel):
        """Test reading a closed stream raises EngineIOError."""
        channel.reader.close()

        with pytest.raises(EngineIOError):
            channel.read_line()

    def test_close_is_idempotent(self, channel):
        """Test closing twice is harmless."""
        channel.close()
        channel.close()

        assert channel.reader.closed
        assert channel.writer.closed
