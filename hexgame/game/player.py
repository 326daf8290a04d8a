"""
player.py - The capability the game loop needs from a player

The engine never cares whether a move comes from a person, a GUI or a
search algorithm. It only asks two things: which side the player claims
as, and which move it wants to make next.
"""

from abc import ABC, abstractmethod

from hexgame.game.board import BoardView
from hexgame.game.move import Move
from hexgame.utils import Side


class HexPlayer(ABC):
    """
    Abstract Hex player.

    request_move() may block for as long as it needs (waiting for a click,
    reading stdin, searching). The game loop issues exactly one request at
    a time and waits for its answer before asking again.
    """

    def __init__(self, side: Side, name: str = None):
        if side == Side.EMPTY:
            raise ValueError("a player must claim as Side.ONE or Side.TWO")
        self._side = side
        self.name = name or f"Player {side.name}"

    def claims_as(self) -> Side:
        """The side this player's claims are made for."""
        return self._side

    @abstractmethod
    def request_move(self, board_view: BoardView) -> Move:
        """
        Produce the next move.

        Args:
            board_view: Read-only view of the current board

        Returns:
            A Move for an unclaimed, on-board cell. Anything else costs the
            player a retry.
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._side.name}, {self.name!r})"
