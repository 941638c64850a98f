"""
Game state for the four-in-a-row engine.

A state owns its board outright. Successors are produced by copying the
parent and placing exactly one stone, so every search frame works on an
independent snapshot.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional

from .bitboard import (
    BOARD_WIDTH, BOARD_HEIGHT,
    Board, is_valid_cell, player_cell
)
from .outcome import check_outcome

# Neighbour offsets used by the ordering heuristic
NEIGHBOURS = [
    (-1, -1), (-1, 0), (-1, 1), (0, 1),
    (1, 1), (1, 0), (1, -1), (0, -1),
]


class IllegalMoveError(ValueError):
    """Raised when a stone is placed on an occupied or off-board cell."""


@dataclass
class GameState:
    """
    Represents one position of the game.

    Attributes:
        board: Packed board, owned by this state only
        last_move: (x, y) of the most recent stone
        current_player: Side to move, 0 or 1
        points: Cached outcome of last_move: 0, or the win sentinel of the
            player who made it. Only ever computed for the last move.
    """
    board: Board = field(default_factory=Board)
    last_move: tuple[int, int] = (0, 0)
    current_player: int = 0
    points: int = 0

    @classmethod
    def new_game(cls, first_player: int = 0) -> GameState:
        """Create an empty board with first_player to move."""
        return cls(current_player=first_player)

    def copy(self) -> GameState:
        """Deep copy: the board is never shared with the copy."""
        return GameState(
            board=self.board.copy(),
            last_move=self.last_move,
            current_player=self.current_player,
            points=self.points,
        )

    def apply_move(self, x: int, y: int, player: int) -> None:
        """
        Place player's stone at (x, y). Modifies state in-place.

        The outcome is scored against the board as it was before the stone,
        then the turn passes to the other player.
        """
        if not is_valid_cell(x, y):
            raise IllegalMoveError(f"Cell ({x}, {y}) is off the board")
        if not self.board.is_empty(x, y):
            raise IllegalMoveError(f"Cell ({x}, {y}) is already occupied")

        self.points = check_outcome(self.board, x, y, player)
        self.board.set(x, y, player_cell(player))
        self.last_move = (x, y)
        self.current_player = 1 - player

    def first_empty_row(self, column: int) -> Optional[int]:
        """Lowest empty row in column, or None if the column is full."""
        if not 0 <= column < BOARD_WIDTH:
            return None
        for y in range(BOARD_HEIGHT):
            if self.board.is_empty(column, y):
                return y
        return None

    def generate_successors(self) -> list[GameState]:
        """
        One child per non-full column, left to right.

        Each child drops current_player's stone into the first empty row of
        its column and hands the move to the opponent.
        """
        successors = []
        player = self.current_player
        for x in range(BOARD_WIDTH):
            y = self.first_empty_row(x)
            if y is None:
                continue
            child = self.copy()
            child.apply_move(x, y, player)
            successors.append(child)
        return successors

    def surround_count(self) -> int:
        """Number of occupied cells around last_move."""
        lx, ly = self.last_move
        count = 0
        for dx, dy in NEIGHBOURS:
            nx, ny = lx + dx, ly + dy
            if is_valid_cell(nx, ny) and not self.board.is_empty(nx, ny):
                count += 1
        return count

    def is_terminal(self) -> bool:
        """Game over by a win or a full board."""
        return self.points != 0 or self.board.is_full()

    def get_winner(self) -> Optional[int]:
        """Return winner (0 or 1) or None if no winner yet."""
        if self.points == 0:
            return None
        return 0 if self.points < 0 else 1

    def __repr__(self) -> str:
        lines = [repr(self.board)]
        lines.append(f"\nPlayer {self.current_player + 1} to move, "
                     f"last move {self.last_move}, points {self.points}")
        return "\n".join(lines)


def order_successors(successors: list[GameState], trim: Optional[int] = None) -> list[GameState]:
    """
    Sort successors by surround count, highest first.

    Stones next to existing stones are tried first to raise the alpha-beta
    cutoff rate. The sort is stable, so ties keep column order. trim keeps
    only the first trim states; None searches full width.
    """
    ordered = sorted(successors, key=GameState.surround_count, reverse=True)
    if trim is not None:
        ordered = ordered[:trim]
    return ordered
