"""
move.py - A single claim request produced by a player
"""

from dataclasses import dataclass

from hexgame.utils import Side


@dataclass(frozen=True)
class Move:
    """Request to claim (row, column) as side."""
    row: int
    column: int
    side: Side

    @classmethod
    def from_index(cls, index: int, size: int, side: Side) -> 'Move':
        """Build a move from a row-major cell index."""
        return cls(index // size, index % size, side)

    def to_index(self, size: int) -> int:
        return self.row * size + self.column

    def __str__(self) -> str:
        return f"{self.side.name}@({self.row}, {self.column})"
