"""Shared fixtures."""

import io
import sys

import pytest

from stockfish_client.config import find_stockfish
from stockfish_client.engine import EngineSession, LineChannel, ProtocolDriver


REFERENCE_ENGINE = [sys.executable, "-m", "stockfish_client.uci"]

EMPTY_BOARD_FEN = "8/8/8/8/8/8/8/8 b KQkq - 0 1"


def scripted_driver(output: str):
    """Driver over an in-memory engine that has already printed `output`."""
    reader = io.StringIO(output)
    writer = io.StringIO()
    return ProtocolDriver(LineChannel(reader, writer)), writer


@pytest.fixture
def reference_command():
    """argv that starts the reference engine."""
    return list(REFERENCE_ENGINE)


@pytest.fixture
def session(reference_command):
    """Engine session bound to a reference engine process."""
    engine = EngineSession.start(reference_command, quit_grace=1.0)
    yield engine
    engine.close()


@pytest.fixture
def stockfish_path():
    """Path to an installed Stockfish binary."""
    try:
        return find_stockfish()
    except FileNotFoundError:
        pytest.skip("Stockfish not installed")
