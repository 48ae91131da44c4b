"""
UCI Reference Engine

A python-chess backed UCI engine used as a stand-in for Stockfish in tests
and demos. It mirrors the output format the client parses:

Protocol Flow:
    Client → "isready"
    Engine → "readyok"
    Client → "position fen <FEN> moves e2e4"
    Client → "d"
    Engine → "Fen: <FEN>"
    Engine → "Checkers: "
    Client → "go perft 1"
    Engine → "a2a3: 1" ... "Nodes searched: 20"

Reference:
    UCI Protocol: https://www.chessprogramming.org/UCI
"""

from stockfish_client.uci.interface import ReferenceEngine

__all__ = ['ReferenceEngine']
