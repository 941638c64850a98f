"""
Bit-packed board for the 10x10 four-in-a-row game.

Every cell takes two bits of a single Python int:

    bit 2*i     -> stone of player 1
    bit 2*i + 1 -> stone of player 2

with i = x * BOARD_HEIGHT + y. Both bits clear means empty, both set is the
UNDEFINED code, which legal play never produces.

Board layout (x = column, y = row, row 0 printed at the bottom):

  9 | . . . . . . . . . .
  ...
  0 | . . . . . . . . . .
    +--------------------
      0 1 2 3 4 5 6 7 8 9
"""

from __future__ import annotations
from enum import IntEnum
from typing import Iterator

import numpy as np

# Board dimensions
BOARD_WIDTH = 10
BOARD_HEIGHT = 10
NUM_CELLS = BOARD_WIDTH * BOARD_HEIGHT  # 100

# Run length needed to win
STONES_TO_WIN = 4

CELL_BITS = 2
CELL_MASK = 0b11


class Cell(IntEnum):
    """Possible contents of a board cell."""
    EMPTY = 0
    P1 = 1
    P2 = 2
    UNDEFINED = 3


SYMBOLS = {Cell.EMPTY: '.', Cell.P1: 'x', Cell.P2: 'o'}


class InvariantViolation(RuntimeError):
    """Raised when a board holds a code that legal play cannot produce."""


def cell_index(x: int, y: int) -> int:
    """Convert (x, y) to the cell index used for packing."""
    return x * BOARD_HEIGHT + y


def index_to_cell(i: int) -> tuple[int, int]:
    """Convert cell index back to (x, y)."""
    return i // BOARD_HEIGHT, i % BOARD_HEIGHT


def is_valid_cell(x: int, y: int) -> bool:
    """Check if (x, y) is on the board."""
    return 0 <= x < BOARD_WIDTH and 0 <= y < BOARD_HEIGHT


def player_cell(player: int) -> Cell:
    """Cell value for player index 0 or 1."""
    return Cell(player + 1)


class Board:
    """
    Fixed-size grid of cells packed two bits per cell.

    Boards have value semantics: copy() returns an independent board and
    mutating one never affects another.
    """

    __slots__ = ('bits',)

    def __init__(self, bits: int = 0):
        self.bits = bits

    @classmethod
    def from_rows(cls, rows: list[str]) -> Board:
        """
        Build a board from text rows, top row first.

        'x' is player 1, 'o' is player 2, anything else is empty.
        Shorter input is padded with empty rows at the top.
        """
        if len(rows) > BOARD_HEIGHT:
            raise ValueError(f"Expected at most {BOARD_HEIGHT} rows, got {len(rows)}")
        board = cls()
        for offset, line in enumerate(reversed(rows)):
            if len(line) > BOARD_WIDTH:
                raise ValueError(f"Row {offset} is wider than {BOARD_WIDTH}: {line!r}")
            for x, ch in enumerate(line):
                if ch == 'x':
                    board.set(x, offset, Cell.P1)
                elif ch == 'o':
                    board.set(x, offset, Cell.P2)
        return board

    def set(self, x: int, y: int, value: Cell) -> None:
        """Overwrite the 2-bit code of cell (x, y). Bounds are the caller's job."""
        shift = CELL_BITS * cell_index(x, y)
        self.bits = (self.bits & ~(CELL_MASK << shift)) | (int(value) << shift)

    def get(self, x: int, y: int) -> Cell:
        """Decode cell (x, y)."""
        code = (self.bits >> (CELL_BITS * cell_index(x, y))) & CELL_MASK
        if code == Cell.UNDEFINED:
            raise InvariantViolation(f"Undefined cell code at ({x}, {y})")
        return Cell(code)

    def is_empty(self, x: int, y: int) -> bool:
        return (self.bits >> (CELL_BITS * cell_index(x, y))) & CELL_MASK == 0

    def copy(self) -> Board:
        return Board(self.bits)

    def iter_stones(self) -> Iterator[tuple[int, int, Cell]]:
        """Iterate over occupied cells as (x, y, cell)."""
        for i in range(NUM_CELLS):
            code = (self.bits >> (CELL_BITS * i)) & CELL_MASK
            if code:
                x, y = index_to_cell(i)
                yield x, y, self.get(x, y)

    def count_stones(self) -> int:
        """Number of occupied cells."""
        return sum(1 for _ in self.iter_stones())

    def is_full(self) -> bool:
        return self.count_stones() == NUM_CELLS

    def to_array(self) -> np.ndarray:
        """
        Convert to a (BOARD_HEIGHT, BOARD_WIDTH) int8 array indexed [y, x].

        Values are the Cell codes (0 empty, 1 player 1, 2 player 2).
        """
        grid = np.zeros((BOARD_HEIGHT, BOARD_WIDTH), dtype=np.int8)
        for x, y, cell in self.iter_stones():
            grid[y, x] = int(cell)
        return grid

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return False
        return self.bits == other.bits

    # Boards are mutable, so they are not hashable
    __hash__ = None

    def __repr__(self) -> str:
        lines = []
        for y in range(BOARD_HEIGHT - 1, -1, -1):
            row = f"{y} |"
            for x in range(BOARD_WIDTH):
                row += " " + SYMBOLS[self.get(x, y)]
            lines.append(row)
        lines.append("  +" + "-" * (BOARD_WIDTH * 2))
        lines.append("    " + " ".join(str(x) for x in range(BOARD_WIDTH)))
        return "\n".join(lines)
