"""
Client Module

Thread-safe dispatcher that runs queries against one engine session.
"""

from stockfish_client.client.dispatcher import StockfishClient

__all__ = ["StockfishClient"]
