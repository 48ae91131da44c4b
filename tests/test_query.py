"""
Tests for Query validation.

Queries are validated at construction, before any engine interaction.
"""

import dataclasses

import pytest

from stockfish_client.exceptions import QueryValidationError
from stockfish_client.query import (
    STARTING_FEN,
    UNSET,
    Query,
    QueryType,
    is_valid_fen,
    is_valid_move,
    is_valid_moves,
)


class TestQueryType:
    """Tests for query type handling."""

    @pytest.mark.parametrize("query_type", list(QueryType))
    def test_type_is_kept(self, query_type):
        """Test each query type round-trips through construction."""
        query = Query(query_type, STARTING_FEN)

        assert query.type is query_type

    def test_missing_type_rejected(self):
        """Test that a missing type is rejected."""
        with pytest.raises(QueryValidationError):
            Query(None, STARTING_FEN)

    def test_unknown_type_rejected(self):
        """Test that a non-QueryType value is rejected."""
        with pytest.raises(QueryValidationError):
            Query("best_move", STARTING_FEN)


class TestFenValidation:
    """Tests for the strict FEN grammar."""

    @pytest.mark.parametrize(
        "fen",
        [
            STARTING_FEN,
            "8/8/8/8/8/8/8/8 b KQkq - 0 1",
            "8/8/8/8/8/8/8/8 w kkkk - 10 10",
            "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1",
            "6k1/5ppp/8/8/8/8/5PPP/4Q1K1 w - - 0 1",
        ],
    )
    def test_valid_fen(self, fen):
        """Test well-formed FEN strings are accepted."""
        query = Query(QueryType.MAKE_MOVES, fen)

        assert query.fen == fen
        assert is_valid_fen(fen)

    @pytest.mark.parametrize(
        "fen",
        [
            "8/8/8/8//8/8/8 w kkkk - 10 10",  # empty rank
            "8/8/8/8/8/8/8 w KQkq - 0 1",  # seven ranks
            "8/8/8/8/8/8/8/8 t kkkk - 10 10",  # side to move
            "8/8/8/8/8/8/8/8 b tkkk - 10 10",  # castling letter
            "8/8/8/8/8/8/8/8 b kkkkk - 10 10",  # castling too long
            "8/8/8/8/8/8/8/8 b kkkk aa 10 10",  # en passant
            "8/8/8/8/8/8/8/8 b kkkk a4a5 aa 10",  # halfmove clock
            "8/8/8/8/8/8/8/8 b kkkk a4a5 10 aa",  # fullmove number
            "8/8/8/8/8/8/8/8 w KQkq - 0",  # missing field
            "8/8/8/8/8/8/8/8 w KQkq - 0 1\n",  # trailing newline
            "hello world",
            "",
        ],
    )
    def test_invalid_fen(self, fen):
        """Test malformed FEN strings are rejected."""
        with pytest.raises(QueryValidationError):
            Query(QueryType.MAKE_MOVES, fen)

        assert not is_valid_fen(fen)

    def test_missing_fen_rejected(self):
        """Test that a missing FEN is rejected."""
        with pytest.raises(QueryValidationError):
            Query(QueryType.MAKE_MOVES, None)

    def test_validation_error_is_value_error(self):
        """Test validation errors can be caught as ValueError."""
        with pytest.raises(ValueError):
            Query(QueryType.CHECKERS, "hello world")


class TestMoveValidation:
    """Tests for the coordinate-move grammar."""

    @pytest.mark.parametrize("moves", ["a2a4", "h1a8", "a7a8q", "e2e4 e7e5", "e2e4  e7e5 g1f3"])
    def test_valid_moves(self, moves):
        """Test well-formed move sequences are accepted."""
        query = Query(QueryType.MAKE_MOVES, STARTING_FEN, moves=moves)

        assert query.moves == moves
        assert query.has_moves

    @pytest.mark.parametrize(
        "moves",
        ["", " ", "a", "a4", "A4B4", "aaaa", "a4a9", "a4v5", "a4a6a", "a4a4a4", "e2e4,e7e5"],
    )
    def test_invalid_moves(self, moves):
        """Test malformed move sequences are rejected."""
        with pytest.raises(QueryValidationError):
            Query(QueryType.MAKE_MOVES, STARTING_FEN, moves=moves)

    def test_no_moves_by_default(self):
        """Test that moves default to None."""
        query = Query(QueryType.MAKE_MOVES, STARTING_FEN)

        assert query.moves is None
        assert not query.has_moves

    def test_single_move_helper(self):
        """Test the single-move predicate."""
        assert is_valid_move("e7e8n")
        assert not is_valid_move("e2e4 e7e5")
        assert is_valid_moves("e2e4 e7e5")


class TestSearchConstraints:
    """Tests for difficulty, depth, movetime and rating defaults."""

    def test_defaults_are_unset(self):
        """Test all constraints default to UNSET."""
        query = Query(QueryType.BEST_MOVE, STARTING_FEN)

        assert query.difficulty == UNSET
        assert query.depth == UNSET
        assert query.movetime == UNSET
        assert query.uci_elo == UNSET
        assert not query.has_difficulty
        assert not query.has_depth
        assert not query.has_movetime
        assert not query.has_uci_elo

    def test_values_are_kept(self):
        """Test explicit constraints are stored."""
        query = Query(
            QueryType.BEST_MOVE,
            STARTING_FEN,
            difficulty=10,
            depth=12,
            movetime=500,
            uci_elo=1500,
        )

        assert (query.difficulty, query.depth, query.movetime, query.uci_elo) == (10, 12, 500, 1500)
        assert query.has_difficulty and query.has_depth
        assert query.has_movetime and query.has_uci_elo

    def test_negative_values_mean_unset(self):
        """Test negative constraints are accepted and treated as unset."""
        query = Query(QueryType.BEST_MOVE, STARTING_FEN, difficulty=-10, depth=-10)

        assert query.difficulty == -10
        assert not query.has_difficulty
        assert not query.has_depth

    @pytest.mark.parametrize("name, value", [
        ("difficulty", "5"),
        ("depth", "10"),
        ("movetime", 1.5),
        ("uci_elo", None),
        ("depth", True),
    ])
    def test_non_integer_constraint_rejected(self, name, value):
        """Test search constraints must be plain integers."""
        with pytest.raises(QueryValidationError, match=name):
            Query(QueryType.BEST_MOVE, STARTING_FEN, **{name: value})

    def test_query_is_immutable(self):
        """Test queries can not be modified after construction."""
        query = Query(QueryType.BEST_MOVE, STARTING_FEN)

        with pytest.raises(dataclasses.FrozenInstanceError):
            query.depth = 5
