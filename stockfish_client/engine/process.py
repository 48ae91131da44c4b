"""
Engine Process Handle

EngineHandle owns the spawned engine process and the LineChannel over its
pipes. The engine's stderr is merged into stdout so every line it prints
arrives through the same channel.
"""

import logging
import subprocess
from typing import List, Optional

from stockfish_client.engine.channel import LineChannel

logger = logging.getLogger(__name__)


class EngineHandle:
    """
    A running engine process plus its line channel.

    Attributes:
        command: argv used to start the process
        process: The subprocess.Popen object
        channel: Line channel over the process pipes
    """

    def __init__(self, command: List[str]):
        """
        Spawn the engine.

        Args:
            command: argv list, executable first

        Raises:
            OSError: If the executable can not be started
        """
        self.command = list(command)
        self.process = subprocess.Popen(
            self.command,
            stdin=subprocess.PIPE,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
        self.channel = LineChannel(self.process.stdout, self.process.stdin)
        self._released = False

        logger.info(f"Started engine process {self.process.pid}: {' '.join(self.command)}")

    @property
    def pid(self) -> int:
        return self.process.pid

    def is_alive(self) -> bool:
        """Check whether the engine process is still running."""
        return self.process.poll() is None

    @property
    def returncode(self) -> Optional[int]:
        """Exit status, or None while the process runs."""
        return self.process.poll()

    def terminate(self, grace: float = 0.0):
        """
        Stop the process and release its pipes.

        Waits up to `grace` seconds for a voluntary exit, then kills the
        process. Safe to call more than once and on an already exited process.

        Args:
            grace: Seconds to wait before killing

        Raises:
            OSError: If the process can not be killed
        """
        if self._released:
            return

        if self.is_alive() and grace > 0:
            try:
                self.process.wait(timeout=grace)
            except subprocess.TimeoutExpired:
                logger.debug(f"Engine {self.pid} did not exit within {grace}s")

        if self.is_alive():
            logger.info(f"Killing engine process {self.pid}")
            self.process.kill()

        self.process.wait()
        self._released = True
        self.channel.close()

        logger.info(f"Engine process {self.pid} exited with status {self.process.returncode}")
