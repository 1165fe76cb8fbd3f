"""
errors.py - Rejected-move exceptions raised by the game engine

A rejected move never changes the board or the turn, so every error here is
recoverable: the caller drops the input and asks again.
"""

from connectfour.utils import GameState


class MoveError(ValueError):
    """Base class for moves the engine refuses to play."""


class ColumnOutOfRangeError(MoveError):
    """Raised when the column index is not in ``[0, width)``."""

    def __init__(self, column, width: int):
        self.column = column
        self.width = width
        super().__init__(f"Column {column!r} outside valid range 0-{width - 1}")


class ColumnFullError(MoveError):
    """Raised when the target column has no empty cell."""

    def __init__(self, column: int):
        self.column = column
        super().__init__(f"Column {column} is full")


class GameOverError(MoveError):
    """Raised when a move arrives after the game was won or tied."""

    def __init__(self, state: GameState):
        self.state = state
        super().__init__(f"Game is over ({state.message()})")
