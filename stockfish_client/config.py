"""
Client configuration.
"""

import logging
import shutil
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from stockfish_client.options import EngineOption, Variant

logger = logging.getLogger(__name__)


# Common install locations tried when no engine path is configured
STOCKFISH_CANDIDATES = [
    "stockfish",
    "/usr/local/bin/stockfish",
    "/usr/bin/stockfish",
    "/usr/games/stockfish",
    "/opt/homebrew/bin/stockfish",
]


@dataclass
class ClientConfig:
    """Configuration for StockfishClient and EngineSession."""

    engine_path: Optional[Path] = None
    """Engine executable, or a directory holding release binaries (None = auto-detect)"""

    engine_args: List[str] = field(default_factory=list)
    """Extra command-line arguments passed to the engine"""

    variant: Variant = Variant.DEFAULT
    """Release build to pick when engine_path is a directory"""

    version: str = "15.1"
    """Stockfish version used to build the release binary name"""

    options: Dict[EngineOption, Any] = field(default_factory=dict)
    """UCI options applied once at startup"""

    shutdown_timeout: float = 1.0
    """Seconds close() waits for queued requests before cancelling them"""

    quit_grace: float = 0.5
    """Seconds to wait for the engine to exit after quit before killing it"""

    def __post_init__(self):
        """Validate configuration after initialization."""
        if self.engine_path is not None:
            self.engine_path = Path(self.engine_path)

        if self.shutdown_timeout < 0:
            raise ValueError(
                f"shutdown_timeout must be non-negative, got {self.shutdown_timeout}"
            )

        if self.quit_grace < 0:
            raise ValueError(f"quit_grace must be non-negative, got {self.quit_grace}")

        for option in self.options:
            if not isinstance(option, EngineOption):
                raise ValueError(f"Unknown engine option: {option!r}")

    def resolve_command(self) -> List[str]:
        """
        Build the argv list used to spawn the engine.

        Returns:
            Command list, executable first

        Raises:
            FileNotFoundError: If no engine binary can be located
        """
        return [self._resolve_executable(), *self.engine_args]

    def _resolve_executable(self) -> str:
        if self.engine_path is None:
            return find_stockfish()

        path = self.engine_path
        if path.is_dir():
            path = path / self.variant.file_name(sys.platform.startswith("win"), self.version)

        if not path.exists():
            raise FileNotFoundError(f"Stockfish binary not found at: {path}")

        return str(path.absolute())


def find_stockfish() -> str:
    """
    Auto-detect Stockfish binary location.

    Returns:
        Path to Stockfish binary

    Raises:
        FileNotFoundError: If Stockfish not found
    """
    for candidate in STOCKFISH_CANDIDATES:
        path = shutil.which(candidate)
        if path:
            logger.debug(f"Found Stockfish at {path}")
            return path

    raise FileNotFoundError(
        "Stockfish not found. Install with: brew install stockfish (macOS) "
        "or apt install stockfish (Linux)"
    )


def as_command(command: Union[str, Path, List[str]]) -> List[str]:
    """Normalize an executable path or argv list into an argv list."""
    if isinstance(command, (str, Path)):
        return [str(command)]
    return [str(part) for part in command]
