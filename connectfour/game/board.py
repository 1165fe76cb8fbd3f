"""
board.py - Board representation and win detection for Connect Four

This module implements the Board class: a height x width grid of Piece
markers with column drops, fullness checks and the four-direction win scan.
The board knows nothing about turns; GameEngine in rules.py owns those.
"""

import numpy as np
from typing import Iterable, List, Optional

from connectfour.debug import debug
from connectfour.errors import ColumnFullError, ColumnOutOfRangeError
from connectfour.utils import (ROWS, COLS, CONNECT_N, Coord, Direction, Piece,
                               is_valid_position, line_from, render_board_ascii)


class Board:
    """
    Represents a Connect Four game board.

    Row 0 is the top of the board and row ``height - 1`` the bottom, so a
    dropped piece settles at the highest empty row index of its column.
    """

    def __init__(self, height: int = ROWS, width: int = COLS):
        """
        Initialize an empty board.

        Args:
            height: Number of rows
            width: Number of columns

        Raises:
            ValueError: If either dimension is not a positive integer
        """
        for name, value in (("height", height), ("width", width)):
            if not _is_index(value) or value < 1:
                raise ValueError(f"Board {name} must be a positive integer, got {value!r}")

        self.height = int(height)
        self.width = int(width)
        debug.debug(f"Initializing new {self.height}x{self.width} Board", "board")
        self.reset()

    def reset(self):
        """Reset the board to an empty state."""
        self.grid = np.full((self.height, self.width), Piece.EMPTY.value, dtype=np.int8)

    def copy(self) -> 'Board':
        """
        Create a deep copy of the current board.

        Returns:
            A new Board instance with the same cells
        """
        new_board = Board(self.height, self.width)
        new_board.grid = self.grid.copy()
        return new_board

    @classmethod
    def from_position(cls, values: Iterable[int], height: int = ROWS, width: int = COLS) -> 'Board':
        """
        Build a board from row-major cell values (0 empty, 1 or 2 for a player).

        Raises:
            ValueError: If the number of values or any value is wrong
        """
        values = [int(v) for v in values]
        if len(values) != height * width:
            raise ValueError(f"Position must have {height * width} values, got {len(values)}")

        allowed = {piece.value for piece in Piece}
        bad = sorted(set(values) - allowed)
        if bad:
            raise ValueError(f"Unknown cell values in position: {bad}")

        board = cls(height, width)
        board.grid = np.array(values, dtype=np.int8).reshape(height, width)
        return board

    def __getitem__(self, position: Coord) -> Piece:
        row, col = position
        return Piece(int(self.grid[row, col]))

    def is_column_in_range(self, column) -> bool:
        return _is_index(column) and 0 <= column < self.width

    def is_column_full(self, column: int) -> bool:
        return self.grid[0, column] != Piece.EMPTY.value

    def find_spot_for_col(self, column: int) -> Optional[int]:
        """
        Find where a piece dropped into ``column`` would settle.

        Returns:
            The bottommost empty row index, or None if the column is full
        """
        for row in range(self.height - 1, -1, -1):
            if self.grid[row, column] == Piece.EMPTY.value:
                return row
        return None

    def drop(self, column, piece: Piece) -> int:
        """
        Drop ``piece`` into ``column``.

        Returns:
            The row the piece settled in

        Raises:
            ColumnOutOfRangeError: If the column does not exist
            ColumnFullError: If the column has no empty cell
        """
        if not self.is_column_in_range(column):
            raise ColumnOutOfRangeError(column, self.width)

        row = self.find_spot_for_col(column)
        if row is None:
            raise ColumnFullError(column)

        debug.trace(f"Placing {piece.name} at position ({row}, {column})", "board")
        self.grid[row, column] = piece.value
        return row

    def is_full(self) -> bool:
        """True iff every cell is occupied."""
        return bool(np.all(self.grid != Piece.EMPTY.value))

    def empty_count(self) -> int:
        return int(np.count_nonzero(self.grid == Piece.EMPTY.value))

    def get_valid_moves(self) -> List[int]:
        """
        Get the columns that still have room.

        Returns:
            List of column indices, left to right
        """
        return [col for col in range(self.width) if not self.is_column_full(col)]

    def _is_winning_line(self, cells: List[Coord], piece: Piece) -> bool:
        return all(is_valid_position(r, c, self.height, self.width)
                   and self.grid[r, c] == piece.value
                   for r, c in cells)

    def get_winning_line(self, piece: Piece) -> List[Coord]:
        """
        Scan every cell for a line of CONNECT_N ``piece`` markers starting there.

        Each anchor (y, x) is checked horizontally, vertically, down-right and
        down-left. The first line found is returned.

        Returns:
            Coordinates of the winning line, or an empty list
        """
        if piece == Piece.EMPTY:
            return []

        for row in range(self.height):
            for col in range(self.width):
                for direction in Direction:
                    cells = line_from(row, col, direction, CONNECT_N)
                    if self._is_winning_line(cells, piece):
                        return cells
        return []

    def check_for_win(self, piece: Piece) -> bool:
        """Check whether ``piece`` has four in a row anywhere on the board."""
        return bool(self.get_winning_line(piece))

    def get_state(self) -> np.ndarray:
        """
        Get the current board state as a numpy array.

        Returns:
            Copy of the 2D grid of Piece values
        """
        return self.grid.copy()

    def render(self) -> str:
        return render_board_ascii(self.grid)

    def __str__(self) -> str:
        return self.render()


def _is_index(value) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool)
