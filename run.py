#!/usr/bin/env python3
"""
run.py - Main entry point for the Hex game engine
"""

import argparse
import os
import sys

# Add the project root to Python path to ensure imports work
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from hexgame.interfaces.cli import main as cli_main

EPILOG = """
    Examples:

    # Play as X against a random player on the default 11x11 board
    python run.py play

    # Two people sharing one terminal on a 9x9 board
    python run.py play --size 9 --player2 human

    # Watch two random players
    python run.py play --player1 random --player2 random --seed 7

    # Benchmark 500 random games with debug logging
    python run.py --debug benchmark --games 500

    # Log everything at trace level to a file
    python run.py --debug-level trace --log-file hex.log play
    """


def main():
    """Main entry point for the Hex game engine."""
    if len(sys.argv) == 1 or sys.argv[1] in ('-h', '--help'):
        parser = argparse.ArgumentParser(
            description='Hex game engine',
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog=EPILOG,
            usage='%(prog)s [--debug] [--debug-level LEVEL] [--log-file FILE] {play,benchmark} ...')
        parser.print_help()
        return 0

    return cli_main(sys.argv[1:])


if __name__ == "__main__":
    sys.exit(main())
