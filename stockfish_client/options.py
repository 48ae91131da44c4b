"""
Engine Options and Binary Variants

EngineOption names the UCI options Stockfish understands. Each member's value
is the exact option name sent in `setoption name <name> value <value>`.

Variant selects which Stockfish release build to look for when the client is
pointed at a directory of binaries instead of a single executable. As of
writing, BMI2 is the best choice for Intel 4th gen+ and AMD Zen 3+, AVX2 for
older Zen parts.
"""

from enum import Enum
from typing import Any


class EngineOption(Enum):
    """UCI options exposed by Stockfish."""

    THREADS = "Threads"
    HASH = "Hash"
    CLEAR_HASH = "Clear Hash"
    PONDER = "Ponder"
    MULTI_PV = "MultiPV"
    SKILL_LEVEL = "Skill Level"
    MOVE_OVERHEAD = "Move Overhead"
    SLOW_MOVER = "Slow Mover"
    NODES_TIME = "nodestime"
    UCI_CHESS960 = "UCI_Chess960"
    UCI_LIMIT_STRENGTH = "UCI_LimitStrength"
    UCI_ELO = "UCI_Elo"
    UCI_SHOW_WDL = "UCI_ShowWDL"
    SYZYGY_PATH = "SyzygyPath"
    SYZYGY_PROBE_DEPTH = "SyzygyProbeDepth"
    SYZYGY_50_MOVE_RULE = "Syzygy50MoveRule"
    SYZYGY_PROBE_LIMIT = "SyzygyProbeLimit"
    DEBUG_LOG_FILE = "Debug Log File"

    @property
    def option_string(self) -> str:
        return self.value


def format_option_value(value: Any) -> str:
    """
    Render a Python value as a UCI option value.

    Booleans become "true"/"false"; everything else goes through str().
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class Variant(Enum):
    """Stockfish release builds."""

    DEFAULT = ""
    BMI2 = "bmi2"
    AVX2 = "avx2"
    POPCNT = "popcnt"
    MODERN = "modern"

    def file_name(self, windows: bool, version: str) -> str:
        """
        Release binary name for this build.

        Args:
            windows: Whether to append the .exe suffix
            version: Stockfish version string, e.g. "15.1"

        Returns:
            File name such as "stockfish_15.1_x64_avx2" or "stockfish_15.1_x64.exe"
        """
        name = f"stockfish_{version}_x64"
        if self.value:
            name = f"{name}_{self.value}"
        if windows:
            name += ".exe"
        return name
