"""
board.py - Board representation for Hex

This module implements the Tile and Board classes. The board owns an N x N
grid of tiles and is the only place a tile's owner can change: a tile is
claimed once and stays claimed until the whole board is reset.
"""

from typing import Callable, List, Tuple

import numpy as np

from hexgame.debug import debug
from hexgame.exceptions import (AlreadyClaimedError, InvalidCoordinateError,
                                InvalidDimensionError)
from hexgame.utils import (DEFAULT_BOARD_DIMENSION, MAXIMUM_BOARD_DIMENSION,
                           MINIMUM_BOARD_DIMENSION, Side, is_valid_dimension,
                           is_valid_position, render_board_ascii)

ClaimListener = Callable[[int, int, Side], None]
ResetListener = Callable[[], None]


class Tile:
    """A single hexagonal cell with fixed coordinates and a current owner."""

    __slots__ = ('_row', '_column', '_owner')

    def __init__(self, row: int, column: int):
        self._row = row
        self._column = column
        self._owner = Side.EMPTY

    @property
    def row(self) -> int:
        return self._row

    @property
    def column(self) -> int:
        return self._column

    @property
    def owner(self) -> Side:
        return self._owner

    def is_claimed(self) -> bool:
        return self._owner != Side.EMPTY

    def __repr__(self) -> str:
        return f"Tile({self._row}, {self._column}, {self._owner.name})"


class Board:
    """
    Represents a square Hex board of size x size tiles.

    Listeners can subscribe to successful claims and to resets. They are
    called synchronously, so anything registered (the BoardWatcher in
    particular) is up to date by the time claim() returns.
    """

    def __init__(self, size: int = DEFAULT_BOARD_DIMENSION):
        """
        Initialize an empty board.

        Args:
            size: Width and height of the board (9-19)

        Raises:
            InvalidDimensionError: if size is outside the allowed range
        """
        if not is_valid_dimension(size):
            raise InvalidDimensionError(size, size, MINIMUM_BOARD_DIMENSION,
                                        MAXIMUM_BOARD_DIMENSION)

        debug.debug(f"Initializing new {size}x{size} Board", "board")
        self.size = size
        self.tiles: List[List[Tile]] = [[Tile(row, col) for col in range(size)]
                                        for row in range(size)]
        self.claimed_count = 0
        self._claim_listeners: List[ClaimListener] = []
        self._reset_listeners: List[ResetListener] = []

    def add_claim_listener(self, listener: ClaimListener) -> None:
        self._claim_listeners.append(listener)

    def add_reset_listener(self, listener: ResetListener) -> None:
        self._reset_listeners.append(listener)

    def is_valid_position(self, row: int, column: int) -> bool:
        return is_valid_position(row, column, self.size)

    def get_tile(self, row: int, column: int) -> Tile:
        """
        Get the tile at a position.

        Raises:
            InvalidCoordinateError: if the position is off the board
        """
        if not self.is_valid_position(row, column):
            raise InvalidCoordinateError(row, column, self.size)
        return self.tiles[row][column]

    def get_owner(self, row: int, column: int) -> Side:
        return self.get_tile(row, column).owner

    def is_empty(self, row: int, column: int) -> bool:
        """Check whether a position is on the board and unclaimed."""
        return (self.is_valid_position(row, column)
                and not self.tiles[row][column].is_claimed())

    def is_full(self) -> bool:
        return self.claimed_count == self.size * self.size

    def claim(self, row: int, column: int, side: Side) -> Tile:
        """
        Claim a tile for a side.

        Args:
            row: Row of the tile (0-indexed)
            column: Column of the tile (0-indexed)
            side: Side.ONE or Side.TWO

        Returns:
            The claimed tile

        Raises:
            InvalidCoordinateError: if the position is off the board
            AlreadyClaimedError: if the tile already has an owner
            ValueError: if side is Side.EMPTY
        """
        if side == Side.EMPTY:
            raise ValueError("a tile cannot be claimed by Side.EMPTY")

        tile = self.get_tile(row, column)
        if tile.is_claimed():
            raise AlreadyClaimedError(row, column, tile.owner)

        debug.trace(f"Claiming ({row}, {column}) for {side.name}", "board")
        tile._owner = side
        self.claimed_count += 1

        for listener in self._claim_listeners:
            listener(row, column, side)

        return tile

    def reset_tiles(self) -> None:
        """Return every tile to the unclaimed state."""
        debug.debug("Resetting board tiles", "board")
        for row in self.tiles:
            for tile in row:
                tile._owner = Side.EMPTY
        self.claimed_count = 0

        for listener in self._reset_listeners:
            listener()

    def get_empty_cells(self) -> List[Tuple[int, int]]:
        """
        Get every unclaimed position.

        Returns:
            List of (row, column) tuples in row-major order
        """
        return [(tile.row, tile.column) for row in self.tiles for tile in row
                if not tile.is_claimed()]

    def get_state(self) -> np.ndarray:
        """
        Get the current board state as a numpy array.

        Returns:
            New size x size int8 array of Side values
        """
        return np.array([[tile.owner.value for tile in row] for row in self.tiles],
                        dtype=np.int8)

    def render(self) -> str:
        return render_board_ascii(self.get_state())

    def __str__(self) -> str:
        return self.render()


class BoardView:
    """
    Read-only facade over a Board, handed to players when they are asked
    for a move.
    """

    def __init__(self, board: Board):
        self._board = board

    @property
    def size(self) -> int:
        return self._board.size

    def is_valid_position(self, row: int, column: int) -> bool:
        return self._board.is_valid_position(row, column)

    def get_owner(self, row: int, column: int) -> Side:
        return self._board.get_owner(row, column)

    def is_empty(self, row: int, column: int) -> bool:
        return self._board.is_empty(row, column)

    def get_empty_cells(self) -> List[Tuple[int, int]]:
        return self._board.get_empty_cells()

    def get_state(self) -> np.ndarray:
        return self._board.get_state()

    def render(self) -> str:
        return self._board.render()

    def __str__(self) -> str:
        return self.render()
