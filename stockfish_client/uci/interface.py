"""
Reference UCI Engine

A small UCI engine built on python-chess that answers the subset of commands
the client emits, with Stockfish-shaped output. It lets the client be tested
end to end without a Stockfish binary:

    python -m stockfish_client.uci

Commands Supported:
    - uci: Identify engine
    - isready: Synchronization check
    - ucinewgame: Start new game
    - setoption: Store an option value
    - position: Set board position (fen or startpos, optional moves)
    - go: depth/movetime search, or "go perft 1"
    - d: Print the board, "Fen: ..." and "Checkers: ..."
    - quit: Shutdown engine

Like Stockfish, the engine crashes (exit status 139) when given a position
without both kings.

Its stderr is merged into stdout by the client, so logging only goes to a
file when one is configured.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

import chess


# Exit status Stockfish reports after segfaulting on a king-less position
CRASH_EXIT_STATUS = 139


def setup_logger(log_file: Optional[Path] = None, debug: bool = False) -> logging.Logger:
    """
    Setup file-based logger for engine debugging.

    Args:
        log_file: Log destination (None disables logging)
        debug: If True, log at DEBUG level; otherwise INFO level

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger("stockfish_client.uci")
    logger.setLevel(logging.DEBUG if debug else logging.INFO)
    logger.propagate = False

    logger.handlers.clear()

    if log_file is None:
        logger.addHandler(logging.NullHandler())
        return logger

    handler = logging.FileHandler(log_file, mode='w')
    formatter = logging.Formatter(
        '%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%H:%M:%S'
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    return logger


class ReferenceEngine:
    """
    UCI engine answering with python-chess.

    Attributes:
        board: Current position (None until a valid position is set)
        options: Values received through setoption
        out: Stream responses are written to
    """

    name = "ReferenceEngine"
    author = "stockfish-client"

    def __init__(self, out=None, log_file: Optional[Path] = None, debug: bool = False):
        self.board: Optional[chess.Board] = chess.Board()
        self.options: Dict[str, str] = {}
        self.out = out if out is not None else sys.stdout
        self.logger = setup_logger(log_file, debug=debug)

    def run(self, stream=None) -> int:
        """
        Main UCI command loop.

        Reads commands until quit or end of input.

        Returns:
            Process exit status
        """
        stream = stream if stream is not None else sys.stdin

        for raw in iter(stream.readline, ""):
            command = raw.strip()
            if not command:
                continue

            self.logger.debug(f">>> {command}")

            tokens = command.split()
            cmd = tokens[0]

            if cmd == "uci":
                self.handle_uci()
            elif cmd == "isready":
                self.handle_isready()
            elif cmd == "ucinewgame":
                self.handle_ucinewgame()
            elif cmd == "setoption":
                self.handle_setoption(tokens)
            elif cmd == "position":
                self.handle_position(tokens)
            elif cmd == "go":
                self.handle_go(tokens)
            elif cmd == "d":
                self.handle_d()
            elif cmd == "quit":
                self.logger.info("Handling: quit")
                return 0
            else:
                self.send(f"Unknown command: '{command}'. Type help for more information.")

        self.logger.info("EOF received, shutting down")
        return 0

    def send(self, line: str):
        print(line, file=self.out)
        self.out.flush()
        self.logger.debug(f"<<< {line}")

    def handle_uci(self):
        """Identify the engine and list its options."""
        self.send(f"id name {self.name}")
        self.send(f"id author {self.author}")
        self.send("option name Skill Level type spin default 20 min 0 max 20")
        self.send("option name UCI_LimitStrength type check default false")
        self.send("option name UCI_Elo type spin default 1320 min 1320 max 3190")
        self.send("uciok")

    def handle_isready(self):
        self.send("readyok")

    def handle_ucinewgame(self):
        self.logger.info("Handling: ucinewgame")
        self.board = chess.Board()

    def handle_setoption(self, tokens: List[str]):
        """
        Store `setoption name <name> value <value>`.

        Option names may contain spaces ("Skill Level").
        """
        if "name" not in tokens:
            return

        name_start = tokens.index("name") + 1
        if "value" in tokens:
            value_index = tokens.index("value")
            name = " ".join(tokens[name_start:value_index])
            value = " ".join(tokens[value_index + 1:])
        else:
            name = " ".join(tokens[name_start:])
            value = ""

        self.options[name] = value
        self.logger.info(f"Option {name} = {value}")

    def handle_position(self, tokens: List[str]):
        """
        Handle 'position' command.

        Formats:
            position startpos [moves e2e4 ...]
            position fen <FEN> [moves e2e4 ...]

        Applying moves stops at the first illegal one.
        """
        if len(tokens) < 2:
            return

        if "moves" in tokens:
            move_index = tokens.index("moves")
        else:
            move_index = len(tokens)

        if tokens[1] == "startpos":
            board = chess.Board()
        elif tokens[1] == "fen":
            try:
                board = chess.Board(" ".join(tokens[2:move_index]))
            except ValueError as e:
                self.logger.error(f"Invalid FEN: {e}")
                self.crash()
                return
        else:
            return

        if board.king(chess.WHITE) is None or board.king(chess.BLACK) is None:
            self.logger.error("Position without both kings")
            self.crash()
            return

        for move_str in tokens[move_index + 1:]:
            try:
                move = chess.Move.from_uci(move_str)
            except ValueError:
                break
            if move not in board.legal_moves:
                self.logger.info(f"Illegal move ignored: {move_str}")
                break
            board.push(move)

        self.board = board

    def handle_go(self, tokens: List[str]):
        """
        Handle 'go' command.

        Formats:
            go perft 1
            go [depth N] [movetime N]
        """
        if len(tokens) >= 3 and tokens[1] == "perft":
            self.handle_perft()
            return

        depth = 1
        if "depth" in tokens:
            depth = int(tokens[tokens.index("depth") + 1])

        moves = sorted(self.board.legal_moves, key=lambda m: m.uci())
        if not moves:
            self.send("info depth 0 score mate 0")
            self.send("bestmove (none)")
            return

        best = self._choose_move(moves)
        self.send(f"info depth {depth} seldepth {depth} score cp 0 nodes {len(moves)} pv {best.uci()}")
        self.send(f"bestmove {best.uci()}")

    def handle_perft(self):
        moves = sorted(move.uci() for move in self.board.legal_moves)
        for move in moves:
            self.send(f"{move}: 1")
        self.send("")
        self.send(f"Nodes searched: {len(moves)}")
        self.send("")

    def handle_d(self):
        """Print the board followed by its FEN and the checking squares."""
        self.send("")
        for row in str(self.board).splitlines():
            self.send(f" {row}")
        self.send("")
        self.send(f"Fen: {self.board.fen()}")
        checkers = " ".join(chess.square_name(sq) for sq in self.board.checkers())
        self.send(f"Checkers: {checkers}")

    def _choose_move(self, moves: List[chess.Move]) -> chess.Move:
        """Prefer checkmate, then captures, then the first move in UCI order."""
        for move in moves:
            self.board.push(move)
            mate = self.board.is_checkmate()
            self.board.pop()
            if mate:
                return move

        for move in moves:
            if self.board.is_capture(move):
                return move

        return moves[0]

    def crash(self):
        self.out.flush()
        sys.exit(CRASH_EXIT_STATUS)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Reference UCI engine")
    parser.add_argument("--log-file", type=Path, default=None, help="Write a debug log here")
    parser.add_argument("--debug", action="store_true", help="Log at DEBUG level")
    args = parser.parse_args(argv)

    engine = ReferenceEngine(log_file=args.log_file, debug=args.debug)
    return engine.run()
