"""
Query Values

A Query describes one request to the engine: what to compute (QueryType),
on which position (FEN), after which moves, and under which search
constraints. Queries are validated once at construction and never change
afterwards, so a malformed FEN or move list is rejected before any engine
interaction happens.

Search constraints use UNSET (-1) to mean "leave it to the engine". Any
negative value is treated the same way.

Example:
    >>> query = Query(QueryType.BEST_MOVE, STARTING_FEN, depth=10)
    >>> query.has_depth
    True
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from stockfish_client.exceptions import QueryValidationError


UNSET = -1

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

FEN_REGEX = (
    r"(([rnbqkp1-8PRNBQK]{1,8}/){7}[rnbqkp1-8PRNBQK]{1,8})"
    r"(\s)([wb])(\s[-kqKQ]{1,4}\s)((-)|[a-h][1-8])(\s)([0-9]+)(\s)([0-9]+)"
)
MOVE_REGEX = r"([a-h][1-8]){2}[qnrb]?"

FEN_PATTERN = re.compile(f"^{FEN_REGEX}$")
MOVE_PATTERN = re.compile(f"^{MOVE_REGEX}$")
MOVES_PATTERN = re.compile(f"^{MOVE_REGEX}(\\s+{MOVE_REGEX})*$")


class QueryType(Enum):
    """Operation kinds understood by EngineSession.execute()."""

    BEST_MOVE = "best_move"
    MAKE_MOVES = "make_moves"
    LEGAL_MOVES = "legal_moves"
    CHECKERS = "checkers"


def is_valid_fen(fen: str) -> bool:
    """Check a FEN string against the strict six-field grammar."""
    return isinstance(fen, str) and FEN_PATTERN.fullmatch(fen) is not None


def is_valid_move(move: str) -> bool:
    """Check a single coordinate move such as e2e4 or a7a8q."""
    return isinstance(move, str) and MOVE_PATTERN.fullmatch(move) is not None


def is_valid_moves(moves: str) -> bool:
    """Check a whitespace-separated sequence of coordinate moves."""
    return isinstance(moves, str) and MOVES_PATTERN.fullmatch(moves.strip()) is not None


@dataclass(frozen=True)
class Query:
    """
    Immutable engine request.

    Attributes:
        type: Operation to run
        fen: Position in Forsyth-Edwards Notation
        moves: Space-separated coordinate moves played from fen (None = none)
        difficulty: Stockfish "Skill Level" (UNSET = engine default)
        depth: Search depth in plies (UNSET = no depth limit)
        movetime: Search time in milliseconds (UNSET = no time limit)
        uci_elo: Target rating with strength limiting (UNSET = full strength)

    Raises:
        QueryValidationError: If type or fen is missing, fen/moves do not
            match their grammar, or a search constraint is not an integer.
            moves=None is accepted and means no moves; an empty or blank
            moves string is rejected.
    """

    type: QueryType
    fen: str
    moves: Optional[str] = None
    difficulty: int = UNSET
    depth: int = UNSET
    movetime: int = UNSET
    uci_elo: int = UNSET

    def __post_init__(self):
        if self.type is None:
            raise QueryValidationError("Query type can not be None.")
        if not isinstance(self.type, QueryType):
            raise QueryValidationError(f"Unknown query type: {self.type!r}")

        if self.fen is None:
            raise QueryValidationError("Query is missing FEN.")
        if not is_valid_fen(self.fen):
            raise QueryValidationError(f"Incorrect FEN in Query: {self.fen}")

        if self.moves is not None and not is_valid_moves(self.moves):
            raise QueryValidationError(f"Incorrect moves in Query: {self.moves!r}")

        for name in ("difficulty", "depth", "movetime", "uci_elo"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise QueryValidationError(f"Query {name} must be an integer, got {value!r}")

    @property
    def has_moves(self) -> bool:
        return self.moves is not None and bool(self.moves.strip())

    @property
    def has_difficulty(self) -> bool:
        return self.difficulty >= 0

    @property
    def has_depth(self) -> bool:
        return self.depth >= 0

    @property
    def has_movetime(self) -> bool:
        return self.movetime >= 0

    @property
    def has_uci_elo(self) -> bool:
        return self.uci_elo >= 0
