"""
utils.py - Shared constants, enumerations and records for Connect Four

Defines the cell marker, the player and game-state records handed to the
presentation layer, the four scan directions, and ASCII rendering.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, List, Optional, Tuple

import numpy as np

# Default board configuration
ROWS = 6
COLS = 7
CONNECT_N = 4  # Number of pieces in a row to win

DEFAULT_COLORS = ("red", "blue")

Coord = Tuple[int, int]


class Piece(Enum):
    """Content of a board cell. EMPTY is an explicit marker, not a falsy value."""
    EMPTY = 0
    ONE = 1
    TWO = 2

    def other(self) -> 'Piece':
        """Get the opposing piece."""
        if self == Piece.ONE:
            return Piece.TWO
        elif self == Piece.TWO:
            return Piece.ONE
        return Piece.EMPTY

    def __str__(self):
        if self == Piece.EMPTY:
            return " "
        elif self == Piece.ONE:
            return "X"
        else:
            return "O"


@dataclass(frozen=True)
class Player:
    """
    One of the two participants.

    Attributes:
        number: Identifier, 1 or 2; selects the piece and the renderer style
        color: Display attribute chosen at setup
    """
    number: int
    color: str

    def __post_init__(self):
        if self.number not in (1, 2):
            raise ValueError(f"Player number must be 1 or 2, got {self.number!r}")

    @property
    def piece(self) -> Piece:
        return Piece(self.number)

    def __str__(self):
        return f"Player {self.number}"


class GameResult(Enum):
    """Terminal flag of a game."""
    IN_PROGRESS = auto()
    WON = auto()
    TIED = auto()


@dataclass(frozen=True)
class GameState:
    """Snapshot of the game outcome: Ongoing, Won(player) or Tied."""
    result: GameResult = GameResult.IN_PROGRESS
    winner: Optional[Player] = None

    @classmethod
    def ongoing(cls) -> 'GameState':
        return cls()

    @classmethod
    def won(cls, player: Player) -> 'GameState':
        return cls(GameResult.WON, player)

    @classmethod
    def tied(cls) -> 'GameState':
        return cls(GameResult.TIED)

    @property
    def is_over(self) -> bool:
        return self.result != GameResult.IN_PROGRESS

    def message(self) -> str:
        """End-of-game text for the presentation layer."""
        if self.result == GameResult.WON:
            return f"Player {self.winner.number} won!"
        if self.result == GameResult.TIED:
            return "Tie!"
        return "Game in progress"


@dataclass(frozen=True)
class Move:
    """Where a dropped piece settled, and whose piece it is."""
    row: int
    column: int
    player: Player


class Direction(Enum):
    """Directions of the line sequences anchored at each cell."""
    HORIZONTAL = auto()
    VERTICAL = auto()
    DIAGONAL_DOWN_RIGHT = auto()
    DIAGONAL_DOWN_LEFT = auto()


# (row, col) step for each direction; rows grow downward
DIRECTION_VECTORS: Dict[Direction, Coord] = {
    Direction.HORIZONTAL: (0, 1),
    Direction.VERTICAL: (1, 0),
    Direction.DIAGONAL_DOWN_RIGHT: (1, 1),
    Direction.DIAGONAL_DOWN_LEFT: (1, -1),
}


def line_from(row: int, col: int, direction: Direction, length: int = CONNECT_N) -> List[Coord]:
    """
    Build the coordinate sequence of ``length`` cells anchored at (row, col).

    Coordinates may fall outside the board; callers bounds-check them.
    """
    dr, dc = DIRECTION_VECTORS[direction]
    return [(row + dr * i, col + dc * i) for i in range(length)]


def is_valid_position(row: int, col: int, height: int = ROWS, width: int = COLS) -> bool:
    """
    Check if a position is within the board boundaries.

    Args:
        row: Row index
        col: Column index
        height: Number of rows on the board
        width: Number of columns on the board

    Returns:
        True if position is valid, False otherwise
    """
    return 0 <= row < height and 0 <= col < width


def render_board_ascii(grid: np.ndarray, symbols: Optional[Dict[Piece, str]] = None) -> str:
    """
    Render a grid as ASCII art with column numbers underneath.

    Args:
        grid: 2-D array of Piece values
        symbols: Optional text per piece, e.g. colored markers

    Returns:
        Multi-line string representation of the board
    """
    height, width = grid.shape
    symbols = symbols or {piece: str(piece) for piece in Piece}
    label_width = len(str(width - 1))

    border = "|" + "-" * (width * (label_width + 1) - 1) + "|"
    result = [border]

    for row in range(height):
        cells = []
        for col in range(width):
            text = symbols[Piece(int(grid[row, col]))]
            # pad on visible length so ANSI codes do not skew the columns
            visible = len(str(Piece(int(grid[row, col]))))
            cells.append(text + " " * (label_width - visible))
        result.append("|" + " ".join(cells) + "|")

    result.append(border)
    result.append("|" + " ".join(str(i).ljust(label_width) for i in range(width)) + "|")

    return "\n".join(result)
