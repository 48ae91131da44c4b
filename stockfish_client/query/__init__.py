"""
Query Module

Validated, immutable request values for the engine session.
"""

from stockfish_client.query.query import (
    UNSET,
    STARTING_FEN,
    FEN_PATTERN,
    MOVE_PATTERN,
    Query,
    QueryType,
    is_valid_fen,
    is_valid_move,
    is_valid_moves,
)

__all__ = [
    "UNSET",
    "STARTING_FEN",
    "FEN_PATTERN",
    "MOVE_PATTERN",
    "Query",
    "QueryType",
    "is_valid_fen",
    "is_valid_move",
    "is_valid_moves",
]
