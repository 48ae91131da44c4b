"""
Line Channel

Line-oriented view of an engine's standard input and output. Writes append a
newline and flush; reads block until a full line or end-of-stream arrives.
No timeout is applied here: a wedged engine blocks the reader until the
process is destroyed.
"""

import io
import logging
import os
from typing import Optional, TextIO

from stockfish_client.exceptions import EngineIOError

logger = logging.getLogger(__name__)


class LineChannel:
    """
    Text channel over a pair of streams.

    Attributes:
        reader: Stream the engine writes to (its stdout)
        writer: Stream the engine reads from (its stdin)
    """

    def __init__(self, reader: TextIO, writer: TextIO, encoding: str = "utf-8"):
        self.reader = reader
        self.writer = writer
        self.encoding = encoding

    def write_line(self, text: str):
        """
        Write one line and flush it.

        Raises:
            EngineIOError: If the stream is closed or the process has exited
        """
        try:
            self.writer.write(text + "\n")
            self.writer.flush()
        except (OSError, ValueError) as e:
            raise EngineIOError(f"Can not write to engine: {e}") from e

    def write_unbuffered(self, text: str):
        """
        Write one line straight to the underlying file descriptor.

        Used for quit, which must not sit in a buffer that another thread may
        be tearing down. Streams without a descriptor fall back to write_line().

        Raises:
            EngineIOError: If the descriptor is closed or the pipe is broken
        """
        try:
            fd = self.writer.fileno()
        except io.UnsupportedOperation:
            self.write_line(text)
            return
        except ValueError as e:
            raise EngineIOError(f"Can not write to engine: {e}") from e

        try:
            os.write(fd, (text + "\n").encode(self.encoding))
        except OSError as e:
            raise EngineIOError(f"Can not write to engine: {e}") from e

    def read_line(self) -> Optional[str]:
        """
        Block until the next line arrives.

        Returns:
            The line without its line terminator, or None at end-of-stream

        Raises:
            EngineIOError: If the stream is closed or errored
        """
        try:
            line = self.reader.readline()
        except (OSError, ValueError) as e:
            raise EngineIOError(f"Can not read from engine: {e}") from e

        if line == "":
            return None

        return line.rstrip("\r\n")

    def close(self):
        """Close both streams, ignoring errors from an already broken pipe."""
        for stream in (self.writer, self.reader):
            try:
                stream.close()
            except OSError as e:
                logger.debug(f"Ignoring error while closing engine stream: {e}")
