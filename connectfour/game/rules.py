"""
rules.py - Turn loop, game state and Gymnasium environment for Connect Four

This module provides:
1. GameEngine, which owns the board and the current-player pointer and
   applies the rules after every drop
2. create_game, the factory used by presentation layers
3. ConnectFourEnv, a gymnasium-compatible environment driving a GameEngine
"""

import numpy as np
import gymnasium as gym
from gymnasium import spaces
from typing import Dict, List, Optional, Tuple

from connectfour.debug import debug
from connectfour.errors import GameOverError, MoveError
from connectfour.game.board import Board
from connectfour.utils import (ROWS, COLS, DEFAULT_COLORS, Coord, GameResult,
                               GameState, Move, Player)


def next_player_index(index: int) -> int:
    """Alternate between the two slots of the player list."""
    return 1 - index


def default_players() -> Tuple[Player, Player]:
    return Player(1, DEFAULT_COLORS[0]), Player(2, DEFAULT_COLORS[1])


class GameEngine:
    """
    Rules engine for a single game.

    State machine: Ongoing -> Won(player) on a winning drop, Ongoing -> Tied
    when the board fills without a win. Both end states are final; further
    drops raise GameOverError.
    """

    def __init__(self, height: int = ROWS, width: int = COLS,
                 player1: Optional[Player] = None, player2: Optional[Player] = None,
                 first: int = 1):
        """
        Start a new game.

        Args:
            height: Number of rows
            width: Number of columns
            player1: Record for player 1 (default red)
            player2: Record for player 2 (default blue)
            first: Number of the player who moves first

        Raises:
            ValueError: On bad dimensions, player records or starting player
        """
        defaults = default_players()
        players = sorted((player1 or defaults[0], player2 or defaults[1]),
                         key=lambda p: p.number)
        if [p.number for p in players] != [1, 2]:
            raise ValueError("A game needs exactly one player 1 and one player 2")
        if first not in (1, 2):
            raise ValueError(f"Starting player must be 1 or 2, got {first!r}")

        self.board = Board(height, width)
        self._players: Tuple[Player, Player] = (players[0], players[1])
        self._current = first - 1
        self._state = GameState.ongoing()
        self.last_move: Optional[Move] = None

        debug.debug(f"Initializing {self.height}x{self.width} game, "
                    f"player {first} to move", "engine")

    @property
    def height(self) -> int:
        return self.board.height

    @property
    def width(self) -> int:
        return self.board.width

    @property
    def players(self) -> Tuple[Player, Player]:
        return self._players

    def current_player(self) -> Player:
        """The player to move, or the one who made the final move."""
        return self._players[self._current]

    def game_state(self) -> GameState:
        return self._state

    def is_game_over(self) -> bool:
        return self._state.is_over

    def drop_piece(self, column: int) -> Move:
        """
        Drop the current player's piece into ``column``.

        Args:
            column: Column index in [0, width)

        Returns:
            The Move describing where the piece settled

        Raises:
            GameOverError: If the game was already won or tied
            ColumnOutOfRangeError: If the column does not exist
            ColumnFullError: If the column has no empty cell
        """
        player = self.current_player()
        debug.debug(f"Attempting move in column {column} for {player}", "engine")

        if self._state.is_over:
            debug.debug(f"Rejected move: game is over ({self._state.result.name})", "engine")
            raise GameOverError(self._state)

        try:
            row = self.board.drop(column, player.piece)
        except MoveError as e:
            debug.debug(f"Rejected move: {e}", "engine")
            raise

        move = Move(row, int(column), player)
        self.last_move = move

        debug.start_timer("win_check")
        if self.is_win():
            self._state = GameState.won(player)
            debug.info(f"{player} wins after move at ({row}, {column})", "engine")
        elif self.is_full():
            self._state = GameState.tied()
            debug.info("Game ends in a tie", "engine")
        debug.end_timer("win_check", "engine")

        if not self._state.is_over:
            self._current = next_player_index(self._current)
            debug.debug(f"Switching to {self.current_player()}", "engine")

        return move

    def is_win(self) -> bool:
        """Check whether the current player has four in a row."""
        return self.board.check_for_win(self.current_player().piece)

    def is_full(self) -> bool:
        return self.board.is_full()

    def get_valid_moves(self) -> List[int]:
        """
        Get the columns a drop would be accepted in.

        Returns:
            List of column indices, empty once the game is over
        """
        if self._state.is_over:
            return []
        return self.board.get_valid_moves()

    def get_winning_line(self) -> List[Coord]:
        """
        Get the positions of the winning line if the game is won.

        Returns:
            List of (row, col) positions, or an empty list if not won
        """
        if self._state.result != GameResult.WON:
            return []
        return self.board.get_winning_line(self._state.winner.piece)

    def render(self) -> str:
        return self.board.render()


def create_game(height: int, width: int, player1: Player, player2: Player,
                first: int = 1) -> GameEngine:
    """Create a new game between ``player1`` and ``player2``."""
    return GameEngine(height, width, player1, player2, first=first)


class ConnectFourEnv(gym.Env):
    """
    Connect Four environment following the Gymnasium interface.

    Each step drops a piece for whichever player is to move. Rewards are
    given from player 1's point of view.
    """

    metadata = {'render_modes': ['ascii', 'human'], 'render_fps': 4}

    def __init__(self, height: int = ROWS, width: int = COLS,
                 render_mode: Optional[str] = None):
        """
        Initialize the environment.

        Args:
            height: Number of rows
            width: Number of columns
            render_mode: 'ascii' to return the board text, 'human' to print it
        """
        debug.debug("Initializing ConnectFourEnv", "env")

        if render_mode is not None and render_mode not in self.metadata['render_modes']:
            raise ValueError(f"Unsupported render mode: {render_mode}")

        self.engine = GameEngine(height, width)
        self.height = height
        self.width = width
        self.render_mode = render_mode

        self.action_space = spaces.Discrete(width)
        self.observation_space = spaces.Box(
            low=0, high=2, shape=(height, width), dtype=np.int8
        )

        self.reward_win = 1.0
        self.reward_lose = -1.0
        self.reward_draw = 0.1
        self.reward_invalid_move = -0.5
        self.reward_step = -0.01

    def reset(self, seed: Optional[int] = None, options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict]:
        """
        Start a new game.

        Args:
            seed: Random seed for reproducibility
            options: May hold 'first' (1 or 2) to pick the starting player

        Returns:
            Initial observation and info dictionary
        """
        debug.debug("Resetting environment", "env")
        super().reset(seed=seed)

        first = (options or {}).get('first', 1)
        self.engine = GameEngine(self.height, self.width, *self.engine.players, first=first)

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict]:
        """
        Drop a piece for the player to move.

        Args:
            action: Column to place a piece (0-indexed)

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        debug.debug(f"Environment step with action {action}", "env")

        try:
            self.engine.drop_piece(action)
        except MoveError as e:
            debug.warning(f"Invalid action {action}: {e}", "env")
            info = self._get_info()
            info['invalid_move'] = True
            return self._get_observation(), self.reward_invalid_move, False, True, info

        reward = self.reward_step
        terminated = False

        state = self.engine.game_state()
        if state.result == GameResult.WON:
            reward = self.reward_win if state.winner.number == 1 else self.reward_lose
            terminated = True
        elif state.result == GameResult.TIED:
            reward = self.reward_draw
            terminated = True

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), reward, terminated, False, self._get_info()

    def render(self) -> Optional[str]:
        if self.render_mode is None:
            return None

        if self.render_mode == "ascii":
            return self.engine.render()

        print(self.engine.render())
        return None

    def _get_observation(self) -> np.ndarray:
        return self.engine.board.get_state()

    def _get_info(self) -> Dict:
        valid_moves = self.engine.get_valid_moves()
        state = self.engine.game_state()
        last_move = self.engine.last_move

        return {
            'valid_moves': valid_moves,
            'num_valid_moves': len(valid_moves),
            'current_player': self.engine.current_player().number,
            'game_result': state.result.name,
            'winner': state.winner.number if state.winner else None,
            'winning_line': self.engine.get_winning_line(),
            'last_move': (last_move.row, last_move.column) if last_move else None,
        }
