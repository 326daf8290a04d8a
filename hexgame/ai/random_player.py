"""
Random player for Hex.
"""
import random

from hexgame.game.board import BoardView
from hexgame.game.move import Move
from hexgame.game.player import HexPlayer
from hexgame.utils import Side


class RandomPlayer(HexPlayer):
    """
    A player that claims a uniformly random empty cell.

    Useful as a baseline opponent and for driving games in tests and
    benchmarks.
    """

    def __init__(self, side: Side, seed=None, name: str = None):
        """
        Args:
            side: Side to claim as
            seed (int, optional): Random seed for reproducible games
            name: Display name
        """
        super().__init__(side, name or f"Random {side.name}")
        self.rng = random.Random(seed)

    def request_move(self, board_view: BoardView) -> Move:
        empty_cells = board_view.get_empty_cells()
        if not empty_cells:
            # Cannot happen in a running game: a full Hex board always has a winner
            return None

        row, column = self.rng.choice(empty_cells)
        return Move(row, column, self.claims_as())
