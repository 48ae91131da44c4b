"""
Main entry point for running the reference UCI engine.

Usage:
    python -m stockfish_client.uci
"""

import sys

from stockfish_client.uci.interface import main

if __name__ == "__main__":
    sys.exit(main())
