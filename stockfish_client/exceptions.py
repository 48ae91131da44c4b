"""
Error hierarchy for the Stockfish client.

Every failure raised by this package derives from StockfishClientError so
callers can catch the whole family at once. EngineIOError is a subclass of
EngineProtocolError: a broken pipe in the middle of an exchange is reported to
the caller as a protocol failure.
"""

from typing import List, Optional, Sequence


class StockfishClientError(Exception):
    """Base class for all client errors."""


class EngineInitError(StockfishClientError):
    """The engine process could not be spawned or never answered the handshake."""


class QueryValidationError(StockfishClientError, ValueError):
    """A query failed validation before reaching the engine."""


class EngineProtocolError(StockfishClientError):
    """
    An expected sentinel line never arrived, or the stream broke mid-exchange.

    Attributes:
        lines: Every line read during the failed exchange, in order
    """

    def __init__(self, message: str, lines: Optional[Sequence[str]] = None):
        super().__init__(message)
        self.lines: List[str] = list(lines) if lines else []


class EngineIOError(EngineProtocolError):
    """Reading from or writing to the engine streams failed."""


class EngineShutdownError(StockfishClientError):
    """Sending quit or terminating the engine process failed."""
