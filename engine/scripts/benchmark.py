#!/usr/bin/env python3
"""
Performance benchmarks for the four-in-a-row engine.

Measures:
- Successor generation speed
- State copy and win detection speed
- Single-worker negamax throughput
- Root pass time across worker counts and executors
"""

import argparse
import time
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

import numpy as np
from connectfour.core.bitboard import Board
from connectfour.core.state import GameState, order_successors
from connectfour.core.outcome import check_outcome
from connectfour.ai.negamax import Negamax, SearchConfig, color_for
from connectfour.ai.parallel import search_root

# Mid-game position used by the search benchmarks
MIDGAME = [
    "..........",
    "..........",
    "..........",
    "..........",
    "..........",
    "..........",
    "....o.....",
    "...xo.....",
    "...ox.x...",
    "..xoxoo...",
]


def midgame_state() -> GameState:
    board = Board.from_rows(MIDGAME)
    return GameState(board=board, last_move=(4, 3), current_player=1)


def _timed(name: str, iterations: int, fn) -> dict:
    start = time.perf_counter()
    for _ in range(iterations):
        fn()
    elapsed = time.perf_counter() - start
    return {
        "name": name,
        "iterations": iterations,
        "total_ms": elapsed * 1000,
        "per_call_us": (elapsed / iterations) * 1_000_000,
        "calls_per_sec": iterations / elapsed,
    }


def benchmark_successors(iterations: int = 2000) -> dict:
    """Benchmark successor generation plus ordering."""
    state = midgame_state()
    return _timed("Successor Generation", iterations,
                  lambda: order_successors(state.generate_successors()))


def benchmark_state_copy(iterations: int = 10000) -> dict:
    """Benchmark state copying speed."""
    state = midgame_state()
    return _timed("State Copy", iterations, state.copy)


def benchmark_win_check(iterations: int = 10000) -> dict:
    """Benchmark the win detector on an open cell."""
    state = midgame_state()
    return _timed("Win Check", iterations, lambda: check_outcome(state.board, 5, 2, 1))


def benchmark_negamax(depths: list[int] = [2, 3, 4]) -> list[dict]:
    """Benchmark single-worker negamax from the midgame position."""
    results = []
    state = midgame_state()
    for depth in depths:
        engine = Negamax()
        start = time.perf_counter()
        value = engine.evaluate_root(state, depth)
        elapsed = time.perf_counter() - start
        results.append({
            "name": f"Negamax depth {depth}",
            "value": value,
            "nodes": engine.nodes,
            "total_ms": elapsed * 1000,
            "nodes_per_sec": engine.nodes / elapsed,
        })
    return results


def benchmark_root_pass(depth: int = 4, threads: list[int] = [1, 2, 4, 8],
                        executor: str = "thread", repeats: int = 3) -> list[dict]:
    """Benchmark one root pass across worker counts."""
    results = []
    state = midgame_state()
    successors = order_successors(state.generate_successors())
    color = color_for(state.current_player)
    for num_threads in threads:
        config = SearchConfig(depth=depth, num_threads=num_threads, executor=executor)
        times = []
        for _ in range(repeats):
            result = search_root(successors, depth, color, config)
            times.append(result.elapsed)
        avg = float(np.mean(times))
        results.append({
            "name": f"Root pass depth {depth}, {num_threads} {executor} worker(s)",
            "move": result.move,
            "value": result.value,
            "nodes": result.nodes,
            "avg_ms": avg * 1000,
            "std_ms": float(np.std(times)) * 1000,
        })
    return results


def print_result(result: dict) -> None:
    """Pretty print a benchmark result."""
    name = result.pop("name")
    print(f"\n{name}:")
    for key, value in result.items():
        if isinstance(value, float):
            print(f"  {key}: {value:.2f}")
        else:
            print(f"  {key}: {value}")


def main():
    parser = argparse.ArgumentParser(description='Four-in-a-row Engine Benchmarks')
    parser.add_argument('--all', action='store_true', help='Run all benchmarks')
    parser.add_argument('--core', action='store_true', help='Run core engine benchmarks')
    parser.add_argument('--search', action='store_true', help='Run negamax benchmarks')
    parser.add_argument('--parallel', action='store_true', help='Run root pass benchmarks')
    parser.add_argument('--depth', type=int, default=4, help='Depth for root pass benchmarks')
    parser.add_argument('--executor', choices=['thread', 'process'], default='thread',
                        help='Executor for root pass benchmarks')
    args = parser.parse_args()

    if not any([args.all, args.core, args.search, args.parallel]):
        args.all = True

    print("=" * 50)
    print("Four-in-a-row Engine Benchmarks")
    print("=" * 50)

    if args.all or args.core:
        print("\n### Core Engine ###")
        print_result(benchmark_successors())
        print_result(benchmark_state_copy())
        print_result(benchmark_win_check())

    if args.all or args.search:
        print("\n### Negamax ###")
        for result in benchmark_negamax():
            print_result(result)

    if args.all or args.parallel:
        print("\n### Root Pass ###")
        for result in benchmark_root_pass(depth=args.depth, executor=args.executor):
            print_result(result)

    print("\n" + "=" * 50)
    print("Benchmarks complete")


if __name__ == '__main__':
    main()
