"""
UCI Protocol Driver

Frames the UCI conversation with an engine process. UCI has no request
identifiers and no acknowledgements, so a response is read line by line until
a sentinel line appears:

    Client → "isready"
    Engine → "readyok"

    Client → "go depth 10"
    Engine → "info depth 1 score cp 20 nodes 20 ..."
    Engine → "info depth 10 score cp 35 nodes 12345 ..."
    Engine → "bestmove e2e4 ponder e7e5"

The engine processes commands asynchronously, so every command that depends
on earlier state is preceded by wait_ready().

Reference:
    UCI Protocol: https://www.chessprogramming.org/UCI
"""

import logging
from typing import Any, Iterable, List, Mapping, Optional, Tuple, Union

from stockfish_client.engine.channel import LineChannel
from stockfish_client.engine.process import EngineHandle
from stockfish_client.exceptions import (
    EngineIOError,
    EngineInitError,
    EngineProtocolError,
)
from stockfish_client.options import EngineOption, format_option_value

logger = logging.getLogger(__name__)


# Sentinel prefixes that end a response block
READY_OK = "readyok"
BEST_MOVE = "bestmove"
FEN = "Fen:"
CHECKERS = "Checkers:"
NODES = "Nodes"

QUIT = "quit"


class ProtocolDriver:
    """
    Command/sentinel framing over a LineChannel.

    The driver is the only component allowed to touch the engine streams.

    Attributes:
        channel: Line channel used for every read and write
        handle: Owning process handle (None for a bare channel)
    """

    def __init__(self, channel: LineChannel, handle: Optional[EngineHandle] = None):
        self.channel = channel
        self.handle = handle

    @classmethod
    def spawn(
        cls,
        command: List[str],
        options: Optional[Mapping[Union[EngineOption, str], Any]] = None,
    ) -> "ProtocolDriver":
        """
        Start an engine process and bring it to a ready state.

        Performs one isready/readyok handshake, then applies each option,
        each preceded by wait_ready().

        Args:
            command: argv list, executable first
            options: UCI options to apply at startup

        Returns:
            A driver bound to the new process

        Raises:
            EngineInitError: If the process can not be spawned or the
                handshake fails
        """
        try:
            handle = EngineHandle(command)
        except OSError as e:
            raise EngineInitError(
                f"Unable to start and bind engine process: {' '.join(command)}"
            ) from e

        driver = cls(handle.channel, handle)
        try:
            driver.wait_ready()
            driver.apply_options((options or {}).items())
        except EngineProtocolError as e:
            try:
                handle.terminate()
            except OSError as stop_error:
                logger.error(f"Can not stop engine process {handle.pid}: {stop_error}")
            raise EngineInitError(
                f"Engine did not complete the startup handshake: {' '.join(command)}"
            ) from e

        return driver

    def send_command(self, command: str):
        """
        Write one command line.

        quit is written straight to the pipe, bypassing the buffered stream,
        so it is not lost if the stream is being closed concurrently.

        Raises:
            EngineIOError: If the engine input is closed
        """
        logger.debug(f">>> {command}")

        if command == QUIT:
            self.channel.write_unbuffered(command)
        else:
            self.channel.write_line(command)

    def await_sentinel(self, prefix: str) -> List[str]:
        """
        Read lines until one starts with `prefix`.

        Args:
            prefix: Sentinel line prefix

        Returns:
            Every line read, in order, the sentinel line last

        Raises:
            EngineProtocolError: If the stream ends first; `lines` holds
                everything that was read
        """
        lines: List[str] = []

        while True:
            try:
                line = self.channel.read_line()
            except EngineIOError as e:
                raise EngineIOError(str(e), lines) from e

            if line is None:
                output = "\n  ".join(lines)
                raise EngineProtocolError(
                    f"Can not find expected line: '{prefix}' in output:\n  {output}",
                    lines,
                )

            logger.debug(f"<<< {line}")
            lines.append(line)

            if line.startswith(prefix):
                return lines

    def await_last_line(self, prefix: str) -> str:
        """Read until the sentinel and return only the sentinel line."""
        return self.await_sentinel(prefix)[-1]

    def wait_ready(self):
        """
        Block until the engine has processed every command sent so far.

        Raises:
            EngineProtocolError: If readyok never arrives
        """
        self.send_command("isready")
        self.await_sentinel(READY_OK)

    def apply_option(self, option: Union[EngineOption, str], value: Any):
        """
        Send `setoption name <name> value <value>`.

        Callers should wait_ready() before, and usually after, changing options.
        """
        name = option.option_string if isinstance(option, EngineOption) else str(option)
        self.send_command(f"setoption name {name} value {format_option_value(value)}")

    def apply_options(self, options: Iterable[Tuple[Union[EngineOption, str], Any]]):
        """Apply several options, each preceded by wait_ready()."""
        for option, value in options:
            self.wait_ready()
            self.apply_option(option, value)
