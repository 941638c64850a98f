"""
Step controller: decides the automated player's move.

Runs one or more root passes depending on the refinement mode and reports
the chosen move together with the belief, the value of the pass run at the
requested depth.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional
import logging

from ..core.state import GameState, order_successors
from ..core.outcome import WIN_SCORE
from .negamax import SearchConfig, RefinementMode, color_for
from .parallel import PassResult, search_root

logger = logging.getLogger(__name__)

# Pass value meaning the side to move is believed lost
LOSS_VALUE = -WIN_SCORE


@dataclass
class StepResult:
    """Decision of the step controller."""
    x: int
    y: int
    # Value of the pass at the requested depth, seen by the side to move:
    # +1 means the mover wins. It is not the absolute win sentinel.
    belief: int
    value: int   # value of the pass that chose the move
    passes: list[PassResult] = field(default_factory=list)

    @property
    def move(self) -> tuple[int, int]:
        return self.x, self.y

    @property
    def nodes(self) -> int:
        return sum(p.nodes for p in self.passes)


def _pass_depths(mode: RefinementMode, depth: int) -> list[int]:
    if mode == RefinementMode.DEEPENING:
        return list(range(1, depth + 1))
    return [depth]


def make_step(state: GameState, config: Optional[SearchConfig] = None) -> Optional[StepResult]:
    """
    Choose a move for state.current_player.

    Returns None when the board is full. The state is not modified.
    """
    config = config or SearchConfig()
    successors = order_successors(state.generate_successors(), config.trim)
    if not successors:
        logger.info("No move available for player %d", state.current_player + 1)
        return None

    color = color_for(state.current_player)
    passes: list[PassResult] = []

    def run(depth: int) -> PassResult:
        result = search_root(successors, depth, color, config)
        logger.debug(
            "pass depth=%d move=(%d, %d) value=%d nodes=%d workers=%d %.3fs",
            depth, result.x, result.y, result.value, result.nodes,
            result.workers, result.elapsed,
        )
        passes.append(result)
        return result

    if config.refinement == RefinementMode.LEGACY:
        depth = config.depth
        result = run(depth)
        belief = result.value
        while (result.value == LOSS_VALUE or depth > 1) and depth > 0:
            depth -= 1
            result = run(depth)
        decision = result
    else:
        for depth in _pass_depths(config.refinement, config.depth):
            run(depth)
        decision = passes[-1]
        belief = decision.value

    step = StepResult(
        x=decision.x,
        y=decision.y,
        belief=belief,
        value=decision.value,
        passes=passes,
    )
    logger.info(
        "Player %d plays (%d, %d) belief=%d after %d pass(es), %d nodes",
        state.current_player + 1, step.x, step.y, step.belief, len(passes), step.nodes,
    )
    return step
