"""
Tests for UnionFind and BoardWatcher.
"""
import pytest

from hexgame.exceptions import ConnectivityError
from hexgame.game.board import Board
from hexgame.game.watcher import BoardWatcher, UnionFind
from hexgame.utils import Orientation, Side, get_neighbors


def make_watched_board(size=9):
    board = Board(size)
    return board, BoardWatcher(board)


def test_union_find_basics():
    """Test union, find and connected."""
    uf = UnionFind(6)
    assert len(uf) == 6
    assert not uf.connected(0, 1)

    assert uf.union(0, 1) is True
    assert uf.union(2, 3) is True
    assert uf.union(1, 0) is False, "Already in the same set"
    assert uf.connected(0, 1)
    assert not uf.connected(1, 2)

    uf.union(1, 3)
    assert uf.connected(0, 2)
    assert uf.find(0) == uf.find(3)
    assert not uf.connected(0, 5)


def test_union_find_long_chain():
    """Test that a long chain stays connected after compression."""
    uf = UnionFind(1000)
    for i in range(999):
        uf.union(i, i + 1)

    root = uf.find(999)
    assert all(uf.find(i) == root for i in range(1000))


def test_empty_board_has_no_winner():
    """Test that nobody has won before any claim."""
    board, watcher = make_watched_board()

    assert watcher.has_won(Side.ONE) is False
    assert watcher.has_won(Side.TWO) is False
    assert watcher.winner() is None
    assert watcher.winning_path(Side.ONE) == []


def test_hex_neighbors():
    """Test the six-neighbour adjacency and clipping at the edges."""
    assert set(get_neighbors(4, 4, 9)) == {(3, 4), (5, 4), (4, 3), (4, 5), (3, 5), (5, 3)}
    assert set(get_neighbors(0, 0, 9)) == {(1, 0), (0, 1)}
    assert set(get_neighbors(0, 8, 9)) == {(1, 8), (0, 7), (1, 7)}
    assert set(get_neighbors(8, 8, 9)) == {(7, 8), (8, 7)}


def test_straight_column_wins_exactly_at_last_move():
    """Test that top-to-bottom for ONE is detected on the completing move."""
    board, watcher = make_watched_board()

    for row in range(8):
        board.claim(row, 4, Side.ONE)
        assert not watcher.has_won(Side.ONE), f"No win expected after row {row}"

    board.claim(8, 4, Side.ONE)
    assert watcher.has_won(Side.ONE)
    assert watcher.winner() == Side.ONE
    assert not watcher.has_won(Side.TWO)


def test_anti_diagonal_chain_is_connected():
    """Test that (r, c) -> (r+1, c-1) steps form a chain."""
    board, watcher = make_watched_board()

    for row in range(9):
        assert not watcher.has_won(Side.ONE)
        board.claim(row, 8 - row, Side.ONE)

    assert watcher.has_won(Side.ONE)


def test_main_diagonal_is_not_connected():
    """Test that (r, c) -> (r+1, c+1) are not neighbours."""
    board, watcher = make_watched_board()

    for i in range(9):
        board.claim(i, i, Side.ONE)

    assert not watcher.has_won(Side.ONE), "Main diagonal cells do not touch"


def test_chain_touching_one_side_only():
    """Test that a chain from the top edge that stops short never wins."""
    board, watcher = make_watched_board()

    for row in range(8):
        board.claim(row, 2, Side.ONE)
    # Fill the whole top row too; still no bottom contact
    for col in range(9):
        if col != 2:
            board.claim(0, col, Side.ONE)

    assert not watcher.has_won(Side.ONE)


def test_orientation_is_per_side():
    """Test that a full top row wins for TWO (left-right) but not for ONE."""
    board, watcher = make_watched_board()
    for col in range(9):
        board.claim(0, col, Side.ONE)
    assert not watcher.has_won(Side.ONE), "ONE connects top to bottom, not left to right"

    board2, watcher2 = make_watched_board()
    for col in range(8):
        board2.claim(0, col, Side.TWO)
        assert not watcher2.has_won(Side.TWO)
    board2.claim(0, 8, Side.TWO)
    assert watcher2.has_won(Side.TWO)
    assert watcher2.winner() == Side.TWO


def test_opponent_cells_do_not_connect():
    """Test that a chain interrupted by the opponent does not win."""
    board, watcher = make_watched_board()

    for row in range(9):
        side = Side.TWO if row == 4 else Side.ONE
        board.claim(row, 4, side)

    assert not watcher.has_won(Side.ONE)

    # Detour around the blocking cell: (3,4) - (4,3) - (5,3) - (5,4)
    board.claim(4, 3, Side.ONE)
    assert not watcher.has_won(Side.ONE), "(4,3) does not touch (5,4)"
    board.claim(5, 3, Side.ONE)
    assert watcher.has_won(Side.ONE)


def test_joining_two_groups_completes_win():
    """Test that the middle cell joining two halves completes the chain."""
    board, watcher = make_watched_board()

    for row in list(range(4)) + list(range(5, 9)):
        board.claim(row, 6, Side.ONE)
    assert not watcher.has_won(Side.ONE)

    board.claim(4, 6, Side.ONE)
    assert watcher.has_won(Side.ONE)


def test_reset_rebuilds_forests():
    """Test that board reset clears every connection."""
    board, watcher = make_watched_board()
    for row in range(9):
        board.claim(row, 0, Side.ONE)
    for col in range(1, 9):
        board.claim(4, col, Side.TWO)
    assert watcher.has_won(Side.ONE)

    board.reset_tiles()

    assert not watcher.has_won(Side.ONE)
    assert not watcher.has_won(Side.TWO)

    # Partial chain after reset must not inherit old connections
    for row in range(8):
        board.claim(row, 0, Side.ONE)
    assert not watcher.has_won(Side.ONE)


def test_watcher_replays_existing_claims():
    """Test that a watcher created on a played board catches up."""
    board = Board(9)
    for row in range(9):
        board.claim(row, 7, Side.ONE)

    watcher = BoardWatcher(board)
    assert watcher.has_won(Side.ONE)


def test_custom_orientations():
    """Test swapping which side connects which edges."""
    board = Board(9)
    watcher = BoardWatcher(board, {Side.ONE: Orientation.LEFT_RIGHT,
                                   Side.TWO: Orientation.TOP_BOTTOM})
    for col in range(9):
        board.claim(3, col, Side.ONE)

    assert watcher.has_won(Side.ONE)


def test_invalid_orientations():
    """Test that both sides need distinct orientations."""
    with pytest.raises(ValueError):
        BoardWatcher(Board(9), {Side.ONE: Orientation.TOP_BOTTOM,
                                Side.TWO: Orientation.TOP_BOTTOM})
    with pytest.raises(ValueError):
        BoardWatcher(Board(9), {Side.ONE: Orientation.TOP_BOTTOM})


def test_uncommitted_claim_is_fatal():
    """Test that reporting a claim the board does not show is an error."""
    board, watcher = make_watched_board()

    with pytest.raises(ConnectivityError):
        watcher.on_claim(3, 3, Side.ONE)

    board.claim(3, 3, Side.TWO)
    with pytest.raises(ConnectivityError):
        watcher.on_claim(3, 3, Side.ONE)


def test_empty_side_query_rejected():
    """Test that Side.EMPTY has no win state."""
    _, watcher = make_watched_board()
    with pytest.raises(ValueError):
        watcher.has_won(Side.EMPTY)


def test_winning_path():
    """Test that the winning path is a connected edge-to-edge chain."""
    board, watcher = make_watched_board()
    path_cells = [(row, 8 - row) for row in range(9)]
    for row, col in path_cells:
        board.claim(row, col, Side.ONE)
    # Extra cells that are not needed for the win
    board.claim(0, 0, Side.ONE)
    board.claim(4, 5, Side.ONE)

    path = watcher.winning_path(Side.ONE)

    assert path[0][0] == 0, "Path starts on the top edge"
    assert path[-1][0] == 8, "Path ends on the bottom edge"
    assert len(path) == 9
    for (r1, c1), (r2, c2) in zip(path, path[1:]):
        assert (r2, c2) in get_neighbors(r1, c1, 9)
    assert all(board.get_owner(r, c) == Side.ONE for r, c in path)
    assert watcher.winning_path(Side.TWO) == []
