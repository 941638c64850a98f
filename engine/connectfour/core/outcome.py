"""
Win detection around the move just played.

Only the four lines through the new stone are scanned, so a check costs
O(STONES_TO_WIN) per axis regardless of board size. The function must only
be called for the last move; it never re-validates a whole board.
"""

from __future__ import annotations

from .bitboard import (
    BOARD_WIDTH, BOARD_HEIGHT, STONES_TO_WIN,
    Board, player_cell
)

# Win sentinel magnitude. Player 1 (index 0) wins score negative,
# player 2 (index 1) wins score positive.
WIN_SCORE = 1

# Axes in check order: horizontal, vertical, main diagonal, anti-diagonal.
# Each entry is the forward step; the backward step is its negation.
AXES = [
    (1, 0),
    (0, 1),
    (1, 1),
    (1, -1),
]


def win_score(player: int) -> int:
    """Signed sentinel for a win by player 0 or 1."""
    return WIN_SCORE * (2 * int(player_cell(player)) - 3)


def _run_length(board: Board, x: int, y: int, dx: int, dy: int, cell, total: int) -> int:
    """Extend total along (dx, dy) from (x, y), stopping at STONES_TO_WIN."""
    cx, cy = x + dx, y + dy
    while (total < STONES_TO_WIN
           and 0 <= cx < BOARD_WIDTH and 0 <= cy < BOARD_HEIGHT
           and board.get(cx, cy) == cell):
        total += 1
        cx += dx
        cy += dy
    return total


def check_outcome(board: Board, x: int, y: int, player: int) -> int:
    """
    Score of player's stone at (x, y).

    Returns win_score(player) if the stone completes a run of at least
    STONES_TO_WIN along any axis, else 0. The cell itself always counts,
    so board may be the snapshot before or after the stone is placed.
    """
    cell = player_cell(player)
    for dx, dy in AXES:
        total = _run_length(board, x, y, -dx, -dy, cell, 1)
        total = _run_length(board, x, y, dx, dy, cell, total)
        if total >= STONES_TO_WIN:
            return win_score(player)
    return 0
