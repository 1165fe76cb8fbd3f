"""
connectfour.game - Core game mechanics for Connect Four

This package contains the board representation, the rules engine that
drives turns and outcomes, and the Gymnasium environment wrapper.
"""

from connectfour.game.board import Board
from connectfour.game.rules import GameEngine, ConnectFourEnv, create_game

__all__ = ['Board', 'GameEngine', 'ConnectFourEnv', 'create_game']
