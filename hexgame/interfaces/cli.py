"""
cli.py - Command-line interface for playing and benchmarking Hex

This module provides a CLI to play Hex in the terminal (people, random
players or a mix) and to measure how fast the engine plays full games.
"""

import argparse
import sys
from typing import List, Optional

from hexgame.ai.random_player import RandomPlayer
from hexgame.debug import DebugLevel, debug
from hexgame.game.player import HexPlayer
from hexgame.game.rules import HexGame
from hexgame.interfaces.players import ConsolePlayer
from hexgame.utils import (DEFAULT_BOARD_DIMENSION, MAXIMUM_BOARD_DIMENSION,
                           MINIMUM_BOARD_DIMENSION, Side)

PLAYER_TYPES = ['human', 'random']


def positive_int(value: str) -> int:
    """argparse type for counts that must be at least 1."""
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


class SimpleCLI:
    """Simple command-line interface for Hex."""

    def __init__(self, input_func=input):
        """Initialize the CLI."""
        self.args = None
        self._input = input_func

    def parse_args(self, argv: Optional[List[str]] = None) -> None:
        """Parse command-line arguments."""
        parser = argparse.ArgumentParser(description='Hex CLI')
        parser.add_argument('--debug', action='store_true', help='Enable debug logging')
        parser.add_argument('--debug-level', default='info',
                            choices=[level.name.lower() for level in DebugLevel],
                            help='Logging level')
        parser.add_argument('--log-file', type=str, default=None, help='Also log to this file')

        subparsers = parser.add_subparsers(dest='command', help='Command to run')

        play_parser = subparsers.add_parser('play', help='Play a game interactively')
        play_parser.add_argument('--size', type=int, default=DEFAULT_BOARD_DIMENSION,
                                 help=f'Board size ({MINIMUM_BOARD_DIMENSION}-{MAXIMUM_BOARD_DIMENSION})')
        play_parser.add_argument('--player1', choices=PLAYER_TYPES, default='human',
                                 help='Player 1 (X, top to bottom, moves first)')
        play_parser.add_argument('--player2', choices=PLAYER_TYPES, default='random',
                                 help='Player 2 (O, left to right)')
        play_parser.add_argument('--seed', type=int, default=None, help='Seed for random players')

        benchmark_parser = subparsers.add_parser('benchmark', help='Benchmark performance')
        benchmark_parser.add_argument('--games', type=positive_int, default=100,
                                      help='Number of random games to play')
        benchmark_parser.add_argument('--size', type=int, default=DEFAULT_BOARD_DIMENSION,
                                      help='Board size')
        benchmark_parser.add_argument('--seed', type=int, default=None, help='Seed for random players')

        self.args = parser.parse_args(argv)

        if self.args.debug:
            debug.configure(level=DebugLevel.DEBUG)
        else:
            debug.set_from_string(self.args.debug_level)
        if self.args.log_file:
            debug.configure(log_file=self.args.log_file)

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Run the CLI based on the parsed arguments."""
        if not self.args:
            self.parse_args(argv)

        if self.args.command == 'play':
            return self.play_game()
        elif self.args.command == 'benchmark':
            return self.benchmark()

        print("Please specify a command. Use --help for options.")
        return 1

    def create_player(self, kind: str, side: Side, seed: Optional[int] = None) -> HexPlayer:
        if kind == 'human':
            return ConsolePlayer(side, name=f"Human {side}", input_func=self._input)
        return RandomPlayer(side, seed=seed)

    def play_game(self) -> int:
        """Play Hex interactively until the players stop."""
        seed = self.args.seed
        player1 = self.create_player(self.args.player1, Side.ONE, seed)
        player2 = self.create_player(self.args.player2, Side.TWO,
                                     None if seed is None else seed + 1)
        game = HexGame(player1, player2, self.args.size, self.args.size)

        print("Starting a new game of Hex!")
        print(f"{player1.name} (X) connects top and bottom, "
              f"{player2.name} (O) connects left and right.")

        try:
            while True:
                game.start(blocking=False)
                print(game.render())

                while not game.is_game_over():
                    move = game.step()
                    mover = player1 if move.side == player1.claims_as() else player2
                    print(f"\n{mover.name} plays ({move.row}, {move.column})")
                    print(game.render())

                winner = game.get_winning_player()
                print(f"\nGame over! {winner.name} wins after {len(game.history)} moves.")
                print(f"Winning path: {game.get_winning_path()}")

                if self._input("Play again? [y/N]: ").strip().lower() != 'y':
                    return 0
                game.reset()
        except (KeyboardInterrupt, EOFError):
            print("\nQuitting game.")
            return 0

    def benchmark(self) -> int:
        """Benchmark full random games."""
        games = self.args.games
        size = self.args.size
        seed = self.args.seed
        print(f"Running benchmark with {games} games on {size}x{size}...")

        player1 = RandomPlayer(Side.ONE, seed=seed)
        player2 = RandomPlayer(Side.TWO, seed=None if seed is None else seed + 1)
        game = HexGame(player1, player2, size, size)

        wins = {Side.ONE: 0, Side.TWO: 0}
        total_moves = 0

        debug.start_timer("games")
        for _ in range(games):
            game.start()
            wins[game.get_winner()] += 1
            total_moves += len(game.history)
            game.reset()
        elapsed = debug.end_timer("games", "cli")

        print(f"Played {games} games with {total_moves} total moves: "
              f"{elapsed:.6f} seconds total, "
              f"{elapsed / games * 1000:.6f} ms per game, "
              f"{elapsed / total_moves * 1000:.6f} ms per move")
        print(f"Wins: X={wins[Side.ONE]} O={wins[Side.TWO]}")
        return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    cli = SimpleCLI()
    return cli.run(argv)


if __name__ == "__main__":
    sys.exit(main())
