"""
Tests for the terminal renderer, console input and SimpleCLI commands.
"""
import argparse

import pytest

from connectfour.interfaces.cli import (QUIT, RESTART, ConsoleInput, SimpleCLI,
                                        TerminalRenderer, build_parser, parse_colors)
from connectfour.utils import GameResult, Move, Player

RED = Player(1, "red")
BLUE = Player(2, "blue")


def scripted(answers):
    """Return an input() replacement that replays ``answers`` then hits EOF."""
    remaining = iter(answers)

    def read(prompt):
        try:
            return next(remaining)
        except StopIteration:
            raise EOFError
    return read


def play_args(**overrides):
    args = build_parser().parse_args(['play'])
    for key, value in overrides.items():
        setattr(args, key, value)
    return args


def test_renderer_tracks_its_own_pieces():
    output = []
    renderer = TerminalRenderer(6, 7, (RED, BLUE), write=output.append, use_color=False)

    renderer.place_piece(Move(5, 0, RED))
    renderer.place_piece(Move(5, 1, BLUE))

    lines = renderer.draw().split("\n")
    assert lines[6].startswith("|X O ")
    assert len(output) == 2


def test_renderer_colors_pieces():
    renderer = TerminalRenderer(6, 7, (RED, Player(2, "mauve")), write=lambda s: None)
    renderer.place_piece(Move(5, 0, RED))
    renderer.place_piece(Move(5, 1, Player(2, "mauve")))

    bottom_row = renderer.draw().split("\n")[6]
    assert bottom_row.startswith("|\033[31mX\033[0m O "), "Unknown colors fall back to plain"


def test_renderer_end_game():
    output = []
    renderer = TerminalRenderer(6, 7, (RED, BLUE), write=output.append)

    renderer.end_game("Player 1 won!")

    assert renderer.finished
    assert renderer.message == "Player 1 won!"
    assert output == ["Player 1 won!"]


def test_console_read_players_uses_defaults():
    console = ConsoleInput(read=scripted(["", "yellow"]), write=lambda s: None)

    player1, player2 = console.read_players(("red", "blue"))

    assert player1 == Player(1, "red")
    assert player2 == Player(2, "yellow")


def test_console_read_column():
    output = []
    console = ConsoleInput(read=scripted(["abc", " 4 ", "r", "Q"]), write=output.append)

    assert console.read_column(RED, 7) == 4
    assert output == ["Invalid input. Please enter a column number, 'q' or 'r'."]
    assert console.read_column(RED, 7) == RESTART
    assert console.read_column(RED, 7) == QUIT
    assert console.read_column(RED, 7) == QUIT, "End of input quits"


def test_parse_colors():
    assert parse_colors("red, yellow") == ("red", "yellow")
    with pytest.raises(argparse.ArgumentTypeError):
        parse_colors("red")


def test_build_parser():
    args = build_parser().parse_args(['--rows', '5', '--cols', '8', 'play',
                                      '--first', '2', '--colors', 'green,cyan'])

    assert args.command == 'play'
    assert (args.rows, args.cols) == (5, 8)
    assert args.first == 2
    assert args.colors == ('green', 'cyan')


def test_play_game_to_a_win():
    """Drive a full game through typed input, including rejected moves."""
    output = []
    answers = ["", "",  # default colors
               "0", "1", "0", "1", "0",
               "x",  # not a number
               "9",  # out of range, rejected by the engine
               "1", "0"]
    console = ConsoleInput(read=scripted(answers), write=output.append)
    cli = SimpleCLI(play_args(use_color=False), console=console, write=output.append)

    state = cli.run()

    assert state.result == GameResult.WON
    assert state.winner == RED
    assert cli.renderer.finished
    assert output[-1] == "Player 1 won!"
    assert any(line.startswith("Invalid move: Column 9") for line in output)


def test_play_game_restart_and_quit():
    output = []
    console = ConsoleInput(read=scripted(["", "", "3", "r", "q"]), write=output.append)
    cli = SimpleCLI(play_args(), console=console, write=output.append)

    assert cli.run() is None
    assert "Game restarted." in output
    assert "Quitting game." in output
    assert cli.game.last_move is None, "Restart starts a fresh engine"


def test_play_game_tie_on_small_board():
    output = []
    answers = ["", "", "0", "1", "2", "0", "1", "2", "0", "1", "2"]
    console = ConsoleInput(read=scripted(answers), write=output.append)
    cli = SimpleCLI(play_args(rows=3, cols=3), console=console, write=output.append)

    state = cli.run()

    assert state.result == GameResult.TIED
    assert output[-1] == "Tie!"


def test_test_position_reports_win():
    output = []
    position = ",".join(["0"] * 35 + ["1", "1", "1", "1", "2", "2", "2"])
    args = build_parser().parse_args(['test', '--position', position])

    SimpleCLI(args, write=output.append).run()

    assert any(line.startswith("Win for player 1") for line in output)
    assert "Empty spaces: 35" in output
    assert "Valid moves: [0, 1, 2, 3, 4, 5, 6]" in output


def test_test_position_bad_input():
    output = []
    args = build_parser().parse_args(['test', '--position', '0,1,2'])

    SimpleCLI(args, write=output.append).run()

    assert output[0].startswith("Error parsing position")


def test_benchmark():
    output = []
    args = build_parser().parse_args(['--rows', '4', '--cols', '5', 'benchmark',
                                      '--iterations', '5'])

    result = SimpleCLI(args, write=output.append).run()

    assert result['games'] == 5
    assert result['moves'] >= 5 * 7
    assert output[0] == "Running benchmark with 5 games..."


def test_missing_command_exits():
    args = build_parser().parse_args([])
    with pytest.raises(SystemExit):
        SimpleCLI(args, write=lambda s: None).run()
