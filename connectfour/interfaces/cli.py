"""
cli.py - Terminal interface for Connect Four

This module is the presentation layer around the rules engine: a renderer
that keeps its own picture of the board, an input source that turns typed
text into columns and player records, and the SimpleCLI command runner
(play, test, benchmark).
"""

import argparse
import random
import sys
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Union

import numpy as np

from connectfour.debug import debug, DebugLevel
from connectfour.errors import MoveError
from connectfour.game.board import Board
from connectfour.game.rules import create_game
from connectfour.utils import (ROWS, COLS, DEFAULT_COLORS, Coord, GameState,
                               Move, Piece, Player, render_board_ascii)

# ANSI color codes for player pieces
COLOR_CODES = {
    "red": "\033[31m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "blue": "\033[34m",
    "magenta": "\033[35m",
    "cyan": "\033[36m",
    "white": "\033[37m",
}
RESET = "\033[0m"

QUIT = "quit"
RESTART = "restart"


class TerminalRenderer:
    """
    Draws the board from the moves it is told about.

    The renderer never reads the engine's grid; it only knows the pieces
    passed to place_piece.
    """

    def __init__(self, height: int, width: int, players: Sequence[Player],
                 write: Callable[[str], None] = print, use_color: bool = True):
        self.height = height
        self.width = width
        self.use_color = use_color
        self.finished = False
        self.message: Optional[str] = None
        self._players: Dict[int, Player] = {p.number: p for p in players}
        self._pieces: Dict[Coord, int] = {}
        self._write = write

    def _symbol(self, piece: Piece) -> str:
        if piece == Piece.EMPTY:
            return str(piece)
        code = COLOR_CODES.get(self._players[piece.value].color.lower())
        if not self.use_color or code is None:
            return str(piece)
        return f"{code}{piece}{RESET}"

    def draw(self) -> str:
        grid = np.zeros((self.height, self.width), dtype=np.int8)
        for (row, col), number in self._pieces.items():
            grid[row, col] = number
        symbols = {piece: self._symbol(piece) for piece in Piece}
        return render_board_ascii(grid, symbols)

    def show(self):
        self._write(self.draw())

    def place_piece(self, move: Move):
        """Record a settled piece and redraw."""
        debug.trace(f"Drawing {move.player} at ({move.row}, {move.column})", "cli")
        self._pieces[(move.row, move.column)] = move.player.number
        self.show()

    def end_game(self, message: str):
        """Freeze the display and announce the outcome."""
        self.finished = True
        self.message = message
        self._write(message)


class ConsoleInput:
    """Reads player setup and column choices from the terminal."""

    def __init__(self, read: Callable[[str], str] = input,
                 write: Callable[[str], None] = print):
        self._read = read
        self._write = write

    def _ask(self, prompt: str) -> Optional[str]:
        try:
            return self._read(prompt).strip()
        except EOFError:
            return None

    def notify(self, message: str):
        self._write(message)

    def read_players(self, defaults: Sequence[str] = DEFAULT_COLORS) -> Tuple[Player, Player]:
        """
        Ask each player for a color. A blank answer keeps the default.

        Returns:
            Player 1 and player 2 records
        """
        players = []
        for number, default in zip((1, 2), defaults):
            answer = self._ask(f"Player {number} color [{default}]: ")
            players.append(Player(number, answer or default))
        return players[0], players[1]

    def read_column(self, player: Player, width: int) -> Union[int, str]:
        """
        Ask ``player`` for a column.

        Returns:
            The column typed (range is checked by the engine), QUIT or RESTART
        """
        while True:
            answer = self._ask(f"{player} ({player.color}), column 0-{width - 1} (q/r): ")
            if answer is None or answer.lower() == 'q':
                return QUIT
            if answer.lower() == 'r':
                return RESTART
            try:
                return int(answer)
            except ValueError:
                self._write("Invalid input. Please enter a column number, 'q' or 'r'.")


def parse_colors(text: str) -> Tuple[str, str]:
    colors = [c.strip() for c in text.split(',') if c.strip()]
    if len(colors) != 2:
        raise argparse.ArgumentTypeError("expected two comma-separated colors, e.g. red,blue")
    return colors[0], colors[1]


def build_parser(epilog: Optional[str] = None) -> argparse.ArgumentParser:
    """Create the argument parser shared by run.py and ``python -m``."""
    parser = argparse.ArgumentParser(
        description='Connect Four',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=epilog,
    )
    parser.add_argument('--debug', action='store_true',
                        help='Enable debug mode (equivalent to --debug_level debug)')
    parser.add_argument('--debug_level',
                        choices=['none', 'error', 'warning', 'info', 'debug', 'trace'],
                        default='warning', help='Set debug level')
    parser.add_argument('--log_file', type=str, default=None,
                        help='Also write log output to this file')
    parser.add_argument('--rows', type=int, default=ROWS, help='Board height')
    parser.add_argument('--cols', type=int, default=COLS, help='Board width')

    subparsers = parser.add_subparsers(dest='command', help='Command to run')

    play_parser = subparsers.add_parser('play', help='Play a two-player game')
    play_parser.add_argument('--first', type=int, choices=[1, 2], default=1,
                             help='Player who moves first')
    play_parser.add_argument('--colors', type=parse_colors, default=DEFAULT_COLORS,
                             help='Default colors for players 1 and 2, e.g. red,yellow')
    play_parser.add_argument('--no-color', dest='use_color', action='store_false',
                             help='Disable ANSI colors')

    test_parser = subparsers.add_parser('test', help='Analyze a board position')
    test_parser.add_argument('--position', type=str, required=True,
                             help='Row-major comma-separated cell values (0 empty, 1, 2)')

    benchmark_parser = subparsers.add_parser('benchmark', help='Benchmark performance')
    benchmark_parser.add_argument('--iterations', type=int, default=1000,
                                  help='Number of random games to play')

    return parser


def configure_debug(args: argparse.Namespace):
    """Apply --debug, --debug_level and --log_file."""
    if getattr(args, 'debug', False):
        debug.configure(level=DebugLevel.DEBUG)
    else:
        debug.set_from_string(getattr(args, 'debug_level', 'warning'))
    if getattr(args, 'log_file', None):
        debug.configure(log_file=args.log_file)


class SimpleCLI:
    """Command-line runner for Connect Four."""

    def __init__(self, args: Optional[argparse.Namespace] = None,
                 console: Optional[ConsoleInput] = None,
                 write: Callable[[str], None] = print):
        self.args = args
        self.console = console or ConsoleInput()
        self.game = None
        self.renderer: Optional[TerminalRenderer] = None
        self._write = write

    def parse_args(self, argv: Optional[List[str]] = None) -> None:
        self.args = build_parser().parse_args(argv)
        configure_debug(self.args)

    def run(self):
        if not self.args:
            self.parse_args()

        if self.args.command == 'play':
            return self.play_game()
        elif self.args.command == 'test':
            return self.test_position()
        elif self.args.command == 'benchmark':
            return self.benchmark()

        self._write("Please specify a command. Use --help for options.")
        sys.exit(1)

    def new_game(self, players: Tuple[Player, Player]):
        """Replace any running game with a fresh one."""
        self.game = create_game(self.args.rows, self.args.cols, *players,
                                first=self.args.first)
        self.renderer = TerminalRenderer(self.game.height, self.game.width, players,
                                         write=self._write,
                                         use_color=getattr(self.args, 'use_color', True))
        debug.info(f"New {self.game.height}x{self.game.width} game", "cli")
        self.renderer.show()

    def play_game(self) -> Optional[GameState]:
        """
        Play a two-player game until it ends or a player quits.

        Returns:
            The final game state, or None if the game was abandoned
        """
        players = self.console.read_players(self.args.colors)
        self.new_game(players)

        while True:
            player = self.game.current_player()
            choice = self.console.read_column(player, self.game.width)

            if choice == QUIT:
                self._write("Quitting game.")
                return None
            if choice == RESTART:
                self._write("Game restarted.")
                self.new_game(players)
                continue

            try:
                move = self.game.drop_piece(choice)
            except MoveError as e:
                self.console.notify(f"Invalid move: {e}")
                continue

            self.renderer.place_piece(move)

            state = self.game.game_state()
            if state.is_over:
                self.renderer.end_game(state.message())
                return state

    def test_position(self) -> None:
        """Print wins, fullness and valid moves for a given position."""
        try:
            board = Board.from_position(self.args.position.split(','),
                                        self.args.rows, self.args.cols)
        except ValueError as e:
            self._write(f"Error parsing position: {e}")
            return

        self._write("Loaded position:")
        self._write(board.render())

        has_win = False
        for piece in (Piece.ONE, Piece.TWO):
            line = board.get_winning_line(piece)
            if line:
                self._write(f"Win for player {piece.value} ({piece}) along {line}")
                has_win = True
        if not has_win:
            self._write("No win detected for any player")

        if board.is_full():
            self._write("Board is full")
        else:
            self._write(f"Empty spaces: {board.empty_count()}")
        self._write(f"Valid moves: {board.get_valid_moves()}")

    def benchmark(self) -> Dict[str, float]:
        """Play random games through the engine and report timings."""
        iterations = self.args.iterations
        self._write(f"Running benchmark with {iterations} games...")

        outcomes = {"1": 0, "2": 0, "tie": 0}
        total_moves = 0

        debug.start_timer("benchmark")
        for _ in range(iterations):
            game = create_game(self.args.rows, self.args.cols,
                               Player(1, DEFAULT_COLORS[0]), Player(2, DEFAULT_COLORS[1]))
            while not game.is_game_over():
                game.drop_piece(random.choice(game.get_valid_moves()))
                total_moves += 1

            state = game.game_state()
            outcomes[str(state.winner.number) if state.winner else "tie"] += 1
        elapsed = debug.end_timer("benchmark", "cli")

        self._write(f"Played {iterations} games with {total_moves} moves in {elapsed:.6f} seconds")
        if total_moves:
            self._write(f"{elapsed / total_moves * 1000:.6f} ms per move")
        self._write(f"Player 1 wins: {outcomes['1']}, Player 2 wins: {outcomes['2']}, "
                    f"Ties: {outcomes['tie']}")

        return {"games": iterations, "moves": total_moves, "seconds": elapsed}


def main():
    """Main entry point for the CLI."""
    cli = SimpleCLI()
    cli.run()


if __name__ == "__main__":
    main()
