"""
Engine Module

Process lifecycle and UCI framing for an external chess engine.

Layers, lowest first:
    - LineChannel: line reads/writes over the process pipes
    - EngineHandle: the spawned process and its channel
    - ProtocolDriver: command/sentinel framing, isready synchronization
    - EngineSession: best move, legal moves, make moves, checkers
"""

from stockfish_client.engine.channel import LineChannel
from stockfish_client.engine.process import EngineHandle
from stockfish_client.engine.driver import ProtocolDriver
from stockfish_client.engine.session import EngineSession

__all__ = [
    "LineChannel",
    "EngineHandle",
    "ProtocolDriver",
    "EngineSession",
]
