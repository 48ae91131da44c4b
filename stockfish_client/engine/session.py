"""
Engine Session

Domain operations on top of the ProtocolDriver. Each operation is a fixed
sequence of command/sentinel cycles:

    best_move    [skill or strength options] → position → go → "bestmove"
    make_moves   position ... moves ...      → d → "Fen:"
    legal_moves  position                    → go perft 1 → "Nodes"
    checkers     position                    → d → "Checkers:"

A protocol failure leaves the engine in an unknown state. Nothing is retried;
close the session and start a new one.
"""

import logging
from typing import Any, FrozenSet, List, Mapping, Optional, Union

from stockfish_client.config import ClientConfig
from stockfish_client.engine import driver as uci
from stockfish_client.engine.driver import ProtocolDriver
from stockfish_client.exceptions import (
    EngineIOError,
    EngineProtocolError,
    EngineShutdownError,
)
from stockfish_client.options import EngineOption
from stockfish_client.query import Query, QueryType, is_valid_move

logger = logging.getLogger(__name__)


class EngineSession:
    """
    Stateful facade over one engine process.

    Not thread-safe: use StockfishClient to share a session between threads.

    Methods:
        best_move: Best move for a position
        make_moves: FEN after applying moves
        legal_moves: Set of legal moves
        checkers: Squares of pieces giving check
        new_game: Reset engine state between games
        close: Quit and terminate the engine
    """

    def __init__(self, driver: ProtocolDriver, quit_grace: float = 0.5):
        """
        Wrap an initialized driver.

        Args:
            driver: Driver that already completed its startup handshake
            quit_grace: Seconds to wait for exit after quit before killing
        """
        self.driver = driver
        self.quit_grace = quit_grace
        self._closed = False

    @classmethod
    def start(
        cls,
        command: List[str],
        options: Optional[Mapping[Union[EngineOption, str], Any]] = None,
        quit_grace: float = 0.5,
    ) -> "EngineSession":
        """
        Start an engine and perform the startup handshake.

        Args:
            command: argv list, executable first
            options: UCI options applied at startup
            quit_grace: Seconds to wait for exit after quit before killing

        Raises:
            EngineInitError: If the engine can not be started
        """
        return cls(ProtocolDriver.spawn(command, options), quit_grace=quit_grace)

    @classmethod
    def from_config(cls, config: ClientConfig) -> "EngineSession":
        """Start the engine described by a ClientConfig."""
        return cls.start(
            config.resolve_command(),
            options=config.options,
            quit_grace=config.quit_grace,
        )

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    @property
    def is_alive(self) -> bool:
        """Whether the engine process is running."""
        handle = self.driver.handle
        return not self._closed and handle is not None and handle.is_alive()

    @property
    def returncode(self) -> Optional[int]:
        """Engine exit status, or None while it runs."""
        handle = self.driver.handle
        return handle.returncode if handle is not None else None

    def execute(self, query: Query):
        """
        Run the operation matching the query type.

        Returns:
            str for BEST_MOVE, MAKE_MOVES and CHECKERS;
            frozenset of moves for LEGAL_MOVES
        """
        if query.type is QueryType.BEST_MOVE:
            return self.best_move(query)
        elif query.type is QueryType.MAKE_MOVES:
            return self.make_moves(query)
        elif query.type is QueryType.LEGAL_MOVES:
            return self.legal_moves(query)
        elif query.type is QueryType.CHECKERS:
            return self.checkers(query)

        raise ValueError(f"Unsupported query type: {query.type!r}")

    def best_move(self, query: Query) -> str:
        """
        Search the position and return the engine's best move.

        Skill level takes precedence over a target rating when both are set.

        Returns:
            Move in coordinate notation, e.g. "e2e4" ("(none)" when the
            side to move has no legal move)
        """
        self._ensure_open()

        if query.has_difficulty:
            self.driver.wait_ready()
            self.driver.apply_option(EngineOption.SKILL_LEVEL, query.difficulty)
        elif query.has_uci_elo:
            self.driver.wait_ready()
            self.driver.apply_option(EngineOption.UCI_LIMIT_STRENGTH, True)
            self.driver.apply_option(EngineOption.UCI_ELO, query.uci_elo)

        self.driver.wait_ready()
        self.driver.send_command(self._position_command(query))

        go = ["go"]
        if query.has_depth:
            go.append(f"depth {query.depth}")
        if query.has_movetime:
            go.append(f"movetime {query.movetime}")

        self.driver.wait_ready()
        self.driver.send_command(" ".join(go))

        line = self.driver.await_last_line(uci.BEST_MOVE)
        tokens = line[len(uci.BEST_MOVE):].split()
        if not tokens:
            raise EngineProtocolError(f"Malformed bestmove line: '{line}'", [line])

        return tokens[0]

    def make_moves(self, query: Query) -> str:
        """
        Apply the query's moves to its position.

        Illegal moves are ignored by the engine, so the FEN stops changing at
        the first illegal move.

        Returns:
            FEN of the resulting position
        """
        self._ensure_open()

        moves = query.moves or ""
        self.driver.wait_ready()
        self.driver.send_command(f"position fen {query.fen} moves {moves}")

        return self._report(uci.FEN)

    def legal_moves(self, query: Query) -> FrozenSet[str]:
        """
        Enumerate legal moves with `go perft 1`.

        Returns:
            Deduplicated set of moves in coordinate notation
        """
        self._ensure_open()

        self.driver.wait_ready()
        self.driver.send_command(self._position_command(query))

        self.driver.wait_ready()
        self.driver.send_command("go perft 1")

        response = self.driver.await_sentinel(uci.NODES)

        legal = set()
        for line in response[:-1]:
            if ":" not in line:
                continue
            move = line.split(":", 1)[0].strip()
            if is_valid_move(move):
                legal.add(move)

        return frozenset(legal)

    def checkers(self, query: Query) -> str:
        """
        Squares of the pieces giving check to the side to move.

        Returns:
            Space-separated squares, empty when not in check
        """
        self._ensure_open()

        self.driver.wait_ready()
        self.driver.send_command(self._position_command(query))

        return self._report(uci.CHECKERS)

    def new_game(self):
        """Tell the engine the next position belongs to a different game."""
        self._ensure_open()

        self.driver.send_command("ucinewgame")
        self.driver.wait_ready()

    def close(self):
        """
        Quit the engine and terminate the process.

        The process is terminated even when sending quit fails. Calling close()
        again, or after the engine died, is harmless.

        Raises:
            EngineShutdownError: If quit could not be sent to a live engine,
                or the process could not be terminated
        """
        if self._closed:
            return
        self._closed = True

        handle = self.driver.handle
        error: Optional[Exception] = None

        try:
            if handle is None or handle.is_alive():
                self.driver.send_command(uci.QUIT)
            else:
                logger.info(f"Engine already exited with status {handle.returncode}")
        except EngineIOError as e:
            error = e
            logger.error(f"Can not send quit to engine: {e}")
        finally:
            if handle is not None:
                try:
                    handle.terminate(grace=self.quit_grace)
                except OSError as e:
                    error = e
                    logger.error(f"Can not stop engine process {handle.pid}: {e}")
            else:
                self.driver.channel.close()

        if error is not None:
            raise EngineShutdownError("Error while closing engine") from error

    def _ensure_open(self):
        if self._closed:
            raise EngineIOError("Engine session is closed")

    def _position_command(self, query: Query) -> str:
        command = f"position fen {query.fen}"
        if query.has_moves:
            command += f" moves {query.moves}"
        return command

    def _report(self, prefix: str) -> str:
        """Send `d` and return the value of the board-report line starting with prefix."""
        self.driver.wait_ready()
        self.driver.send_command("d")

        line = self.driver.await_last_line(prefix)
        return line[len(prefix):].strip()
