"""
utils.py - Constants, enumerations and helpers shared by the Hex engine

Board coordinates are (row, column) on a rhombus. Row 0 is the top edge,
column 0 is the left edge, and every cell touches up to six neighbours.
"""

from enum import Enum, auto
from typing import List, Tuple

import numpy as np

# Board dimensions
DEFAULT_BOARD_DIMENSION = 11
MINIMUM_BOARD_DIMENSION = 9
MAXIMUM_BOARD_DIMENSION = 19

# The six hex neighbours as (row, column) offsets
HEX_NEIGHBORS = (
    (-1, 0), (1, 0),
    (0, -1), (0, 1),
    (-1, 1), (1, -1),
)


class Side(Enum):
    """Owner of a tile, and the side a player claims as."""
    EMPTY = 0
    ONE = 1    # First player, moves first
    TWO = 2    # Second player

    def other(self) -> 'Side':
        """Get the opposing side."""
        if self == Side.ONE:
            return Side.TWO
        elif self == Side.TWO:
            return Side.ONE
        return Side.EMPTY

    def __str__(self):
        if self == Side.EMPTY:
            return "."
        elif self == Side.ONE:
            return "X"
        else:
            return "O"


class Orientation(Enum):
    """The pair of opposite board edges a side has to connect."""
    TOP_BOTTOM = auto()
    LEFT_RIGHT = auto()


# Fixed at game construction, never reassigned mid-game
DEFAULT_ORIENTATIONS = {
    Side.ONE: Orientation.TOP_BOTTOM,
    Side.TWO: Orientation.LEFT_RIGHT,
}


class GameState(Enum):
    """Lifecycle of a HexGame."""
    NOT_STARTED = auto()
    RUNNING = auto()
    ENDED = auto()


def is_valid_dimension(size: int) -> bool:
    return MINIMUM_BOARD_DIMENSION <= size <= MAXIMUM_BOARD_DIMENSION


def is_valid_position(row: int, col: int, size: int) -> bool:
    """
    Check if a position is within the board boundaries.

    Args:
        row: Row index
        col: Column index
        size: Board dimension

    Returns:
        True if position is valid, False otherwise
    """
    return 0 <= row < size and 0 <= col < size


def get_neighbors(row: int, col: int, size: int) -> List[Tuple[int, int]]:
    """Get the on-board hex neighbours of a cell."""
    neighbors = []
    for dr, dc in HEX_NEIGHBORS:
        r, c = row + dr, col + dc
        if is_valid_position(r, c, size):
            neighbors.append((r, c))
    return neighbors


def render_board_ascii(grid: np.ndarray) -> str:
    """
    Render a board grid as an ASCII rhombus.

    Each row is shifted one step to the right of the row above it so the
    six-neighbour layout is visible.

    Args:
        grid: N x N array of Side values

    Returns:
        ASCII representation of the board
    """
    size = grid.shape[0]
    symbols = {side.value: str(side) for side in Side}

    # Column numbers wrap at 10 to keep one character per cell
    result = ["   " + " ".join(str(col % 10) for col in range(size))]

    for row in range(size):
        cells = " ".join(symbols[int(grid[row, col])] for col in range(size))
        result.append(" " * row + f"{row:2d} {cells} {row}")

    return "\n".join(result)
