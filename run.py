#!/usr/bin/env python3
"""
run.py - Main entry point for Connect Four
"""

from connectfour.interfaces.cli import SimpleCLI, build_parser, configure_debug

EXAMPLES = """
    Examples:

    # Two players on the standard 6x7 board
    python run.py play

    # Pick default colors and let player 2 start
    python run.py play --colors red,yellow --first 2

    # A larger board
    python run.py --rows 8 --cols 9 play

    # Analyze a position (row-major, 0 empty, 1 or 2 for a player)
    python run.py test --position 0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,1,1,1,1,2,2,2

    # Time 500 random games, logging engine details
    python run.py --debug_level debug benchmark --iterations 500
    """


def main():
    """Main entry point for the Connect Four command line."""
    parser = build_parser(epilog=EXAMPLES)
    args = parser.parse_args()
    configure_debug(args)

    if args.command is None:
        parser.print_help()
        return

    SimpleCLI(args).run()


if __name__ == "__main__":
    main()
