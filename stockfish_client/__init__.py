"""
Stockfish Client

A client library that drives an external chess engine process through the
Universal Chess Interface (UCI) and exposes typed queries instead of raw line
I/O.

## Architecture

The library is organized into several key modules:

1. **query**: Validated, immutable requests
   - QueryType: best move, make moves, legal moves, checkers
   - Strict FEN and coordinate-move grammars

2. **engine**: Process lifecycle and protocol framing
   - LineChannel / EngineHandle: pipes of the spawned engine
   - ProtocolDriver: send a command, read until a sentinel line
   - EngineSession: domain operations as command/sentinel sequences

3. **client**: Concurrency
   - StockfishClient: single-worker, FIFO dispatcher returning futures

4. **uci**: Reference UCI engine built on python-chess, used in tests

## Quick Start

```python
from stockfish_client import ClientConfig, Query, QueryType, StockfishClient, STARTING_FEN

with StockfishClient(ClientConfig()) as client:
    move = client.submit(Query(QueryType.BEST_MOVE, STARTING_FEN, depth=10)).result()
    print(f"Best move: {move}")
```

## Version

0.1.0
"""

__version__ = "0.1.0"
__license__ = "MIT"

from stockfish_client.exceptions import (
    StockfishClientError,
    EngineInitError,
    QueryValidationError,
    EngineProtocolError,
    EngineIOError,
    EngineShutdownError,
)
from stockfish_client.options import EngineOption, Variant
from stockfish_client.config import ClientConfig
from stockfish_client.query import Query, QueryType, STARTING_FEN, UNSET
from stockfish_client.engine import EngineSession, ProtocolDriver
from stockfish_client.client import StockfishClient

__all__ = [
    'StockfishClientError',
    'EngineInitError',
    'QueryValidationError',
    'EngineProtocolError',
    'EngineIOError',
    'EngineShutdownError',
    'EngineOption',
    'Variant',
    'ClientConfig',
    'Query',
    'QueryType',
    'STARTING_FEN',
    'UNSET',
    'EngineSession',
    'ProtocolDriver',
    'StockfishClient',
]
