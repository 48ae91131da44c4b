"""
Query Dispatcher

StockfishClient serializes requests from any number of threads onto a single
worker thread bound to one EngineSession. UCI carries no request identifiers,
so two interleaved exchanges on the same pipes would corrupt each other: the
single worker guarantees at most one exchange in flight, in submission order.

Usage:
    with StockfishClient(ClientConfig(engine_path=Path("/usr/bin/stockfish"))) as client:
        future = client.submit(Query(QueryType.BEST_MOVE, STARTING_FEN, depth=10))
        print(future.result())
"""

import asyncio
import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor, wait
from pathlib import Path
from typing import List, Optional, Set, Union

from stockfish_client.config import ClientConfig, as_command
from stockfish_client.engine.session import EngineSession
from stockfish_client.exceptions import EngineShutdownError
from stockfish_client.query import Query

logger = logging.getLogger(__name__)


class StockfishClient:
    """
    Thread-safe, asynchronous front end for one engine session.

    Attributes:
        config: Client configuration
        session: The engine session every request runs against
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        command: Optional[Union[str, Path, List[str]]] = None,
        session: Optional[EngineSession] = None,
    ):
        """
        Start the engine (unless a session is given) and the worker thread.

        Args:
            config: Client configuration (uses defaults if None)
            command: Explicit engine argv, overriding config.engine_path
            session: Existing session to dispatch to

        Raises:
            EngineInitError: If the engine can not be started
            FileNotFoundError: If no engine binary can be located
        """
        self.config = config or ClientConfig()

        if session is None:
            if command is not None:
                session = EngineSession.start(
                    as_command(command),
                    options=self.config.options,
                    quit_grace=self.config.quit_grace,
                )
            else:
                session = EngineSession.from_config(self.config)

        self.session = session

        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="stockfish-query")
        self._lock = threading.Lock()
        self._pending: Set[Future] = set()
        self._closed = False

        logger.info("Stockfish client ready")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    @property
    def closed(self) -> bool:
        return self._closed

    def submit(self, query: Query) -> Future:
        """
        Queue a query for the engine.

        Returns:
            Future resolved with the operation result, or failed with the
            session's exception

        Raises:
            RuntimeError: If the client is closed
        """
        logger.debug(f"Submitting {query.type.name} query: {query.fen}")
        return self._submit(self.session.execute, query)

    def new_game(self) -> Future:
        """Queue a ucinewgame reset."""
        return self._submit(self.session.new_game)

    async def query(self, query: Query):
        """Submit a query and await its result from asyncio code."""
        return await asyncio.wrap_future(self.submit(query))

    def close(self):
        """
        Drain the worker, then shut the engine down.

        Waits up to config.shutdown_timeout for queued requests, cancels the
        ones that have not started, and closes the session. Closing the
        session kills the process, which ends an exchange still in flight.
        Both stages always run.

        Raises:
            EngineShutdownError: If the engine could not be shut down
        """
        with self._lock:
            if self._closed:
                return
            self._closed = True
            pending = list(self._pending)

        try:
            self._executor.shutdown(wait=False)

            _, not_done = wait(pending, timeout=self.config.shutdown_timeout)
            if not_done:
                cancelled = sum(1 for future in not_done if future.cancel())
                logger.warning(
                    f"Shutdown timed out after {self.config.shutdown_timeout}s, "
                    f"cancelled {cancelled} queued request(s)"
                )
        finally:
            try:
                self.session.close()
            except EngineShutdownError as e:
                logger.error(f"Can not stop Stockfish. Please, close it manually. ({e})")
                raise EngineShutdownError("Error while closing Stockfish client") from e
            finally:
                self._executor.shutdown(wait=True)

        logger.info("Stockfish client closed")

    def _submit(self, fn, *args) -> Future:
        with self._lock:
            if self._closed:
                raise RuntimeError("Cannot submit to a closed StockfishClient")
            future = self._executor.submit(fn, *args)
            self._pending.add(future)

        future.add_done_callback(self._discard)
        return future

    def _discard(self, future: Future):
        with self._lock:
            self._pending.discard(future)
