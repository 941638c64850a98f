"""
Depth-limited negamax with alpha-beta pruning.

Scores are the cached win sentinels of the states themselves: a state whose
last move won carries -1 (player 1 won) or +1 (player 2 won), everything else
is 0. color turns that into the side to move's point of view.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..core.state import GameState, order_successors
from ..core.outcome import WIN_SCORE

# Default search depth in plies
SEARCH_DEPTH = 5

# Default number of root workers
NUM_THREADS = 8

# Window bound, strictly outside every reachable score
SCORE_BOUND = 5 * WIN_SCORE

EXECUTORS = ("thread", "process")


class RefinementMode(str, Enum):
    """How the step controller schedules its passes."""
    SINGLE = "single"        # one pass at the requested depth
    DEEPENING = "deepening"  # depth 1..D, the deepest pass decides
    LEGACY = "legacy"        # D, D-1, ... while the last pass believes a loss


@dataclass
class SearchConfig:
    """Configuration for the search."""
    depth: int = SEARCH_DEPTH
    num_threads: int = NUM_THREADS
    trim: Optional[int] = None  # keep only the best `trim` successors; None = full width
    prune: bool = True  # alpha-beta cutoffs; False searches the full tree
    executor: str = "thread"  # root workers: "thread" or "process"
    refinement: RefinementMode = RefinementMode.SINGLE

    def __post_init__(self):
        if self.depth < 1:
            raise ValueError(f"depth must be at least 1, got {self.depth}")
        if self.num_threads < 1:
            raise ValueError(f"num_threads must be at least 1, got {self.num_threads}")
        if self.trim is not None and self.trim < 1:
            raise ValueError(f"trim must be None or at least 1, got {self.trim}")
        if self.executor not in EXECUTORS:
            raise ValueError(f"executor must be one of {EXECUTORS}, got {self.executor!r}")
        self.refinement = RefinementMode(self.refinement)


def color_for(player: int) -> int:
    """Sign that turns cached points into player's point of view."""
    return 1 if player == 1 else -1


class Negamax:
    """
    Negamax search over GameState trees.

    One instance per worker: the node counter is the only mutable state and
    is never shared between threads.
    """

    def __init__(self, config: Optional[SearchConfig] = None):
        self.config = config or SearchConfig()
        self.nodes = 0

    def search(self, state: GameState, depth: int, alpha: int, beta: int, color: int) -> int:
        """
        Value of state for the side to move.

        Args:
            state: Position to evaluate
            depth: Remaining plies
            alpha: Lower bound of the window
            beta: Upper bound of the window
            color: +1 if player 2 is to move, -1 if player 1 is
        """
        self.nodes += 1

        if depth == 0 or state.points != 0:
            return color * state.points

        children = order_successors(state.generate_successors(), self.config.trim)

        # Board full: draw
        if not children:
            return color * state.points

        best_value = -SCORE_BOUND
        for child in children:
            value = -self.search(child, depth - 1, -beta, -alpha, -color)
            best_value = max(best_value, value)
            alpha = max(alpha, value)
            if self.config.prune and alpha >= beta:
                break

        return best_value

    def evaluate_root(self, state: GameState, depth: int) -> int:
        """Full-window value of state for its side to move."""
        return self.search(state, depth, -SCORE_BOUND, SCORE_BOUND, color_for(state.current_player))
