"""
Game session: the surface a front-end talks to.

A front-end only places the human's stones, asks which row a column drop
lands on, and asks the engine for its move. Rendering and input handling
stay on the front-end side.
"""

from __future__ import annotations
from dataclasses import replace
from typing import Optional
import logging

from .core.bitboard import Board
from .core.state import GameState
from .ai.negamax import SearchConfig
from .ai.controller import StepResult, make_step

logger = logging.getLogger(__name__)


class GameSession:
    """Holds the real game position between front-end calls."""

    def __init__(self, config: Optional[SearchConfig] = None, first_player: int = 0):
        self.config = config or SearchConfig()
        self.state = GameState.new_game(first_player)

    @property
    def board(self) -> Board:
        return self.state.board

    @property
    def current_player(self) -> int:
        return self.state.current_player

    def place_human_stone(self, x: int, y: int, player: int) -> None:
        """
        Place player's stone at (x, y).

        Raises IllegalMoveError for an occupied or off-board cell; callers
        should pick y with first_empty_row().
        """
        self.state.apply_move(x, y, player)
        logger.debug("Player %d placed (%d, %d)", player + 1, x, y)

    def first_empty_row(self, column: int) -> Optional[int]:
        """Row a stone dropped in column lands on, or None if it is full."""
        return self.state.first_empty_row(column)

    def compute_ai_move(self, depth: Optional[int] = None) -> Optional[StepResult]:
        """
        Search and play one stone for the side to move.

        Returns None (and plays nothing) when no move is available.
        """
        config = self.config if depth is None else replace(self.config, depth=depth)
        player = self.state.current_player
        step = make_step(self.state, config)
        if step is None:
            return None
        self.state.apply_move(step.x, step.y, player)
        return step

    def last_move(self) -> tuple[int, int]:
        return self.state.last_move

    def outcome_score(self) -> int:
        """Cached outcome of the last move: 0 while nobody has won."""
        return self.state.points

    def winner(self) -> Optional[int]:
        return self.state.get_winner()

    def is_draw(self) -> bool:
        return self.state.points == 0 and self.state.board.is_full()

    def is_over(self) -> bool:
        return self.state.is_terminal()
