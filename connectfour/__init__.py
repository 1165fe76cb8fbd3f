"""
connectfour - Connect Four rules engine

This package provides the board representation, move legality, turn
alternation and win detection for Connect Four on any board size, plus a
terminal interface and a Gymnasium environment that drive the engine.
"""

from connectfour.errors import (MoveError, ColumnFullError,
                                ColumnOutOfRangeError, GameOverError)
from connectfour.game.rules import GameEngine, create_game
from connectfour.utils import GameResult, GameState, Move, Piece, Player

__version__ = '0.1.0'

__all__ = ['GameEngine', 'create_game', 'Player', 'Piece', 'Move',
           'GameState', 'GameResult', 'MoveError', 'ColumnFullError',
           'ColumnOutOfRangeError', 'GameOverError']
