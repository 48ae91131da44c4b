#!/usr/bin/env python3
"""
CLI tool for querying a UCI engine.

Usage:
    python tools/query_engine.py bestmove --depth 12
    python tools/query_engine.py legal --fen "<FEN>" --moves "e2e4 e7e5"
    python tools/query_engine.py move --moves e2e4
    python tools/query_engine.py checkers --fen "<FEN>"

    # Against the bundled reference engine instead of Stockfish
    python tools/query_engine.py --reference legal
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from stockfish_client import (
    STARTING_FEN,
    ClientConfig,
    EngineOption,
    Query,
    QueryType,
    StockfishClient,
    StockfishClientError,
    Variant,
)

QUERY_TYPES = {
    "bestmove": QueryType.BEST_MOVE,
    "legal": QueryType.LEGAL_MOVES,
    "move": QueryType.MAKE_MOVES,
    "checkers": QueryType.CHECKERS,
}


def setup_logging(verbose: bool = False):
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def build_client(args) -> StockfishClient:
    """Create a client from command-line arguments."""
    options = {EngineOption.THREADS: args.threads}
    if args.hash:
        options[EngineOption.HASH] = args.hash

    config = ClientConfig(
        engine_path=args.engine,
        variant=Variant[args.variant.upper()],
        version=args.version,
        options=options,
    )

    if args.reference:
        return StockfishClient(config, command=[sys.executable, "-m", "stockfish_client.uci"])

    return StockfishClient(config)


def run_query(args):
    """Run one query and print its result."""
    query = Query(
        QUERY_TYPES[args.command],
        args.fen,
        moves=args.moves,
        difficulty=args.skill,
        depth=args.depth,
        movetime=args.movetime,
        uci_elo=args.elo,
    )

    with build_client(args) as client:
        result = client.submit(query).result()

    if isinstance(result, frozenset):
        print(f"{len(result)} legal moves:")
        print(" ".join(sorted(result)))
    else:
        print(result)


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Query a UCI chess engine",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "command",
        choices=sorted(QUERY_TYPES),
        help="Query to run",
    )
    parser.add_argument(
        "--fen",
        default=STARTING_FEN,
        help="Position in FEN",
    )
    parser.add_argument(
        "--moves",
        default=None,
        help="Space-separated coordinate moves played from the FEN",
    )
    parser.add_argument(
        "--depth",
        type=int,
        default=-1,
        help="Search depth (-1: engine default)",
    )
    parser.add_argument(
        "--movetime",
        type=int,
        default=-1,
        help="Search time in milliseconds (-1: engine default)",
    )
    parser.add_argument(
        "--skill",
        type=int,
        default=-1,
        help="Skill Level 0-20 (-1: full strength)",
    )
    parser.add_argument(
        "--elo",
        type=int,
        default=-1,
        help="Target rating with strength limiting (-1: full strength)",
    )
    parser.add_argument(
        "--engine",
        type=Path,
        default=None,
        help="Engine binary or directory of release binaries (default: auto-detect)",
    )
    parser.add_argument(
        "--variant",
        choices=[v.name.lower() for v in Variant],
        default="default",
        help="Release build to use when --engine is a directory",
    )
    parser.add_argument(
        "--version",
        default="15.1",
        help="Stockfish version of the release binaries",
    )
    parser.add_argument(
        "--threads",
        type=int,
        default=1,
        help="Engine threads",
    )
    parser.add_argument(
        "--hash",
        type=int,
        default=None,
        help="Hash table size in MB",
    )
    parser.add_argument(
        "--reference",
        action="store_true",
        help="Use the bundled reference engine instead of Stockfish",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args()

    setup_logging(verbose=args.verbose)

    try:
        run_query(args)
    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        sys.exit(1)
    except (StockfishClientError, FileNotFoundError) as e:
        print(f"\n\nError: {e}")
        if args.verbose:
            import traceback

            traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
