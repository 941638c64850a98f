"""Core game logic: packed board, win detection, and game state."""

from .bitboard import *
from .outcome import check_outcome, win_score, WIN_SCORE
from .state import GameState, IllegalMoveError, order_successors
