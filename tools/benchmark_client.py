#!/usr/bin/env python3
"""
Client Throughput Benchmark

Submits a batch of best-move queries from several threads through one
StockfishClient and reports per-query latency.

Usage:
    python tools/benchmark_client.py [--queries 100] [--callers 4] [--depth 8]
    python tools/benchmark_client.py --reference --queries 500
"""

import sys
import argparse
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

import numpy as np
from tqdm import tqdm

from stockfish_client import STARTING_FEN, ClientConfig, Query, QueryType, StockfishClient

# Opening positions cycled through by the benchmark
POSITIONS = [
    STARTING_FEN,
    "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1",
    "r1bqkbnr/pppp1ppp/2n5/4p3/4P3/5N2/PPPP1PPP/RNBQKB1R w KQkq - 2 3",
    "rnbqkb1r/pp2pppp/3p1n2/8/3NP3/8/PPP2PPP/RNBQKB1R w KQkq - 1 5",
    "r1bqk2r/pppp1ppp/2n2n2/2b1p3/2B1P3/5N2/PPPP1PPP/RNBQK2R w KQkq - 4 5",
]


def format_time(seconds: float) -> str:
    """Format time"""
    if seconds < 1:
        return f"{seconds * 1000:.1f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        minutes = int(seconds // 60)
        secs = seconds % 60
        return f"{minutes}m {secs:.0f}s"


def run_benchmark(client: StockfishClient, queries: int, callers: int, depth: int):
    """
    Submit `queries` best-move queries from `callers` threads.

    Args:
        client: Client to benchmark
        queries: Number of queries
        callers: Number of submitting threads
        depth: Search depth per query
    """
    def timed_query(index: int) -> float:
        query = Query(QueryType.BEST_MOVE, POSITIONS[index % len(POSITIONS)], depth=depth)
        start = time.perf_counter()
        client.submit(query).result()
        return time.perf_counter() - start

    start_time = time.perf_counter()
    with ThreadPoolExecutor(max_workers=callers) as pool:
        latencies = np.array(
            list(tqdm(pool.map(timed_query, range(queries)), total=queries, desc="Queries"))
        )
    total_time = time.perf_counter() - start_time

    print("=" * 60)
    print(f"Queries: {queries}  Callers: {callers}  Depth: {depth}")
    print("-" * 60)
    print(f"  Total time:   {format_time(total_time)}")
    print(f"  Queries/sec:  {queries / total_time:,.1f}")
    print(f"  Mean latency: {format_time(float(latencies.mean()))}")
    print(f"  p50 latency:  {format_time(float(np.percentile(latencies, 50)))}")
    print(f"  p95 latency:  {format_time(float(np.percentile(latencies, 95)))}")
    print(f"  Max latency:  {format_time(float(latencies.max()))}")
    print("=" * 60)


def main():
    parser = argparse.ArgumentParser(
        description="Benchmark StockfishClient throughput"
    )
    parser.add_argument("--queries", type=int, default=100, help="Number of queries (default: 100)")
    parser.add_argument("--callers", type=int, default=4, help="Submitting threads (default: 4)")
    parser.add_argument("--depth", type=int, default=8, help="Search depth (default: 8)")
    parser.add_argument("--engine", type=Path, default=None, help="Engine binary (default: auto-detect)")
    parser.add_argument(
        "--reference",
        action="store_true",
        help="Benchmark against the bundled reference engine"
    )

    args = parser.parse_args()

    config = ClientConfig(engine_path=args.engine)
    command = [sys.executable, "-m", "stockfish_client.uci"] if args.reference else None

    try:
        with StockfishClient(config, command=command) as client:
            run_benchmark(client, args.queries, args.callers, args.depth)
    except KeyboardInterrupt:
        print("\n\nBenchmark interrupted by user")
        sys.exit(1)
    except Exception as e:
        print(f"\n\nError running benchmark: {e}")
        import traceback
        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
