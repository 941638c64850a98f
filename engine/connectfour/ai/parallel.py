"""
Root-level parallel search.

The root's successors are cut into contiguous chunks, one per worker. Each
worker runs its own Negamax over its chunk and reports its best child; the
pass result is the first maximal report in worker order.
"""

from __future__ import annotations
from concurrent.futures import Executor, ThreadPoolExecutor, ProcessPoolExecutor
from dataclasses import dataclass
from typing import Optional
import logging
import time

from ..core.state import GameState
from .negamax import Negamax, SearchConfig, SCORE_BOUND

logger = logging.getLogger(__name__)


@dataclass
class WorkerResult:
    """Best child found by one worker."""
    x: int
    y: int
    value: int
    nodes: int = 0


@dataclass
class PassResult:
    """Merged outcome of one root pass."""
    x: int
    y: int
    value: int
    depth: int
    nodes: int
    workers: int
    elapsed: float = 0.0

    @property
    def move(self) -> tuple[int, int]:
        return self.x, self.y


def partition(count: int, num_threads: int) -> list[tuple[int, int]]:
    """
    Split range(count) into contiguous (start, end) chunks.

    With at least num_threads items there are exactly num_threads chunks of
    count // num_threads, and the first chunk also takes the remainder.
    Otherwise every item gets its own chunk.
    """
    if count <= 0:
        return []
    if count < num_threads:
        return [(i, i + 1) for i in range(count)]

    delta = count // num_threads
    remainder = count % num_threads
    chunks = [(0, delta + remainder)]
    for i in range(1, num_threads):
        start = remainder + delta * i
        chunks.append((start, start + delta))
    return chunks


def search_chunk(chunk: list[GameState], depth: int, color: int, config: SearchConfig) -> WorkerResult:
    """
    Score each child of the root at depth and keep the first best.

    color is the root's color; children are searched from the opponent's
    side and negated back.
    """
    engine = Negamax(config)
    best = WorkerResult(0, 0, -SCORE_BOUND)
    for child in chunk:
        value = -engine.search(child, depth, -SCORE_BOUND, SCORE_BOUND, -color)
        if value > best.value:
            best.x, best.y = child.last_move
            best.value = value
    best.nodes = engine.nodes
    return best


def merge(results: list[WorkerResult]) -> WorkerResult:
    """Highest value wins; ties go to the lowest worker index."""
    if not results:
        raise ValueError("No worker results to merge")
    best = results[0]
    for result in results[1:]:
        if result.value > best.value:
            best = result
    return best


def _make_executor(config: SearchConfig, workers: int) -> Executor:
    if config.executor == "process":
        return ProcessPoolExecutor(max_workers=workers)
    return ThreadPoolExecutor(max_workers=workers, thread_name_prefix="negamax")


def search_root(
    successors: list[GameState],
    depth: int,
    color: int,
    config: Optional[SearchConfig] = None,
) -> PassResult:
    """
    Run one root pass at depth over successors.

    Each successor is searched to depth - 1 (never below 0). All workers are
    joined before merging; if any worker raises, the exception propagates
    and nothing is merged.
    """
    config = config or SearchConfig()
    if not successors:
        raise ValueError("Cannot search a root without successors")

    child_depth = max(depth - 1, 0)
    chunks = partition(len(successors), config.num_threads)
    start = time.perf_counter()

    with _make_executor(config, len(chunks)) as executor:
        futures = [
            executor.submit(search_chunk, successors[lo:hi], child_depth, color, config)
            for lo, hi in chunks
        ]
        results = [future.result() for future in futures]

    for i, ((lo, hi), result) in enumerate(zip(chunks, results)):
        logger.debug(
            "worker %d: children [%d, %d) best (%d, %d) value=%d nodes=%d",
            i, lo, hi, result.x, result.y, result.value, result.nodes,
        )

    best = merge(results)
    return PassResult(
        x=best.x,
        y=best.y,
        value=best.value,
        depth=depth,
        nodes=sum(r.nodes for r in results),
        workers=len(results),
        elapsed=time.perf_counter() - start,
    )
