"""
watcher.py - Incremental win detection for Hex

The BoardWatcher keeps one disjoint-set forest per side. Every cell of the
board is a node, and each side gets two extra virtual nodes standing for
the two edges it has to connect. Claiming a cell unions it with its
same-side neighbours and, on a boundary, with the matching virtual node.
A side has won as soon as its two virtual nodes share a root, so the win
query never has to scan the board.
"""

from collections import deque
from typing import Dict, List, Optional, Tuple

from hexgame.debug import debug
from hexgame.exceptions import ConnectivityError
from hexgame.game.board import Board
from hexgame.utils import (DEFAULT_ORIENTATIONS, Orientation, Side,
                           get_neighbors)


class UnionFind:
    """Disjoint-set forest with path compression and union by rank."""

    def __init__(self, size: int):
        self.parent = list(range(size))
        self.rank = [0] * size

    def __len__(self) -> int:
        return len(self.parent)

    def find(self, i: int) -> int:
        root = i
        while self.parent[root] != root:
            root = self.parent[root]
        # Path compression
        while self.parent[i] != root:
            self.parent[i], i = root, self.parent[i]
        return root

    def union(self, i: int, j: int) -> bool:
        """
        Merge the sets containing i and j.

        Returns:
            True if two sets were merged, False if already the same set
        """
        root_i = self.find(i)
        root_j = self.find(j)
        if root_i == root_j:
            return False

        if self.rank[root_i] < self.rank[root_j]:
            self.parent[root_i] = root_j
        elif self.rank[root_i] > self.rank[root_j]:
            self.parent[root_j] = root_i
        else:
            self.parent[root_j] = root_i
            self.rank[root_i] += 1
        return True

    def connected(self, i: int, j: int) -> bool:
        return self.find(i) == self.find(j)


class BoardWatcher:
    """
    Tracks, for each side, whether its claimed cells connect its two edges.

    The watcher subscribes to the board it is given, so it sees every
    successful claim and every reset without the game having to forward
    them.
    """

    def __init__(self, board: Board, sides: Dict[Side, Orientation] = None):
        """
        Args:
            board: Board to watch
            sides: Orientation per side; defaults to ONE top/bottom and
                TWO left/right
        """
        orientations = dict(sides or DEFAULT_ORIENTATIONS)
        if set(orientations) != {Side.ONE, Side.TWO}:
            raise ValueError("orientations must be given for Side.ONE and Side.TWO")
        if orientations[Side.ONE] == orientations[Side.TWO]:
            raise ValueError("both sides cannot connect the same pair of edges")

        self.board = board
        self.size = board.size
        self.orientations = orientations
        self.entry_node = self.size * self.size
        self.exit_node = self.entry_node + 1
        self._forests: Dict[Side, UnionFind] = {}

        self.rebuild()
        board.add_claim_listener(self.on_claim)
        board.add_reset_listener(self.rebuild)

    def _index(self, row: int, column: int) -> int:
        return row * self.size + column

    def _boundary_nodes(self, row: int, column: int, side: Side) -> List[int]:
        """Virtual nodes a cell touches for the given side."""
        coordinate = row if self.orientations[side] == Orientation.TOP_BOTTOM else column
        nodes = []
        if coordinate == 0:
            nodes.append(self.entry_node)
        if coordinate == self.size - 1:
            nodes.append(self.exit_node)
        return nodes

    def _forest(self, side: Side) -> UnionFind:
        if side == Side.EMPTY:
            raise ValueError("Side.EMPTY has no connectivity to track")
        forest = self._forests.get(side)
        if forest is None or len(forest) != self.exit_node + 1:
            raise ConnectivityError(f"virtual side nodes missing for {side.name}")
        return forest

    def rebuild(self) -> None:
        """Reset every forest to singletons and replay the board's claims."""
        debug.debug("Rebuilding connectivity forests", "watcher")
        self._forests = {side: UnionFind(self.size * self.size + 2)
                         for side in self.orientations}

        for row in self.board.tiles:
            for tile in row:
                if tile.is_claimed():
                    self.on_claim(tile.row, tile.column, tile.owner)

    def on_claim(self, row: int, column: int, side: Side) -> None:
        """
        Record a claim that the board has already applied.

        Coordinates are trusted. The board validates them before notifying.
        """
        if self.board.tiles[row][column].owner != side:
            raise ConnectivityError(
                f"claim ({row}, {column}) for {side.name} not committed on the board")

        forest = self._forest(side)
        index = self._index(row, column)

        for r, c in get_neighbors(row, column, self.size):
            if self.board.tiles[r][c].owner == side:
                forest.union(index, self._index(r, c))

        for node in self._boundary_nodes(row, column, side):
            forest.union(index, node)

        debug.trace(f"Connected ({row}, {column}) for {side.name}", "watcher")

    def has_won(self, side: Side) -> bool:
        """Check whether a side's two edges are joined by its cells."""
        return self._forest(side).connected(self.entry_node, self.exit_node)

    def winner(self) -> Optional[Side]:
        for side in (Side.ONE, Side.TWO):
            if self.has_won(side):
                return side
        return None

    def winning_path(self, side: Side) -> List[Tuple[int, int]]:
        """
        Get a shortest chain of cells joining the side's two edges.

        Returns:
            Cells ordered from the entry edge to the exit edge, or an
            empty list if the side has not won
        """
        if not self.has_won(side):
            return []

        previous: Dict[Tuple[int, int], Optional[Tuple[int, int]]] = {}
        queue = deque()
        for r in range(self.size):
            for c in range(self.size):
                if (self.board.tiles[r][c].owner == side
                        and self.entry_node in self._boundary_nodes(r, c, side)):
                    previous[(r, c)] = None
                    queue.append((r, c))

        while queue:
            cell = queue.popleft()
            if self.exit_node in self._boundary_nodes(cell[0], cell[1], side):
                path = []
                while cell is not None:
                    path.append(cell)
                    cell = previous[cell]
                return path[::-1]

            for neighbor in get_neighbors(cell[0], cell[1], self.size):
                if (neighbor not in previous
                        and self.board.tiles[neighbor[0]][neighbor[1]].owner == side):
                    previous[neighbor] = cell
                    queue.append(neighbor)

        raise ConnectivityError(f"{side.name} reported a win but no path exists")
