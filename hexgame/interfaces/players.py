"""
players.py - Player adapters for people

ConsolePlayer reads moves from a terminal. QueuedPlayer hands moves over
from another thread, which is how a GUI feeds clicks into a game loop
running in the background.
"""

import queue
import threading
from typing import Callable, Optional

from hexgame.debug import debug
from hexgame.exceptions import MoveNotCompletedError
from hexgame.game.board import BoardView
from hexgame.game.move import Move
from hexgame.game.player import HexPlayer
from hexgame.utils import Side


def parse_move_input(text: str) -> Optional[tuple]:
    """
    Parse "row col" or "row,col".

    Returns:
        (row, column) or None if the text is not two integers
    """
    parts = text.replace(',', ' ').split()
    if len(parts) != 2:
        return None
    try:
        return int(parts[0]), int(parts[1])
    except ValueError:
        return None


class ConsolePlayer(HexPlayer):
    """Asks a person at the terminal for each move."""

    def __init__(self, side: Side, name: str = None,
                 input_func: Callable[[str], str] = input,
                 output_func: Callable[[str], None] = print):
        super().__init__(side, name)
        self._input = input_func
        self._output = output_func

    def request_move(self, board_view: BoardView) -> Move:
        """
        Prompt until the input parses as a position.

        Entering 'q' abandons the game by raising KeyboardInterrupt.
        Whether the cell is free is left to the game loop.
        """
        limit = board_view.size - 1
        while True:
            text = self._input(f"{self.name} ({self.claims_as()}) row col [0-{limit}], q: ")
            text = text.strip().lower()
            if text == 'q':
                raise KeyboardInterrupt(f"{self.name} quit the game")

            position = parse_move_input(text)
            if position is None:
                self._output("Invalid input. Enter a row and a column, e.g. '3 4'.")
                continue

            row, column = position
            if not board_view.is_empty(row, column):
                self._output(f"({row}, {column}) is not an empty cell on the board.")
            return Move(row, column, self.claims_as())


class QueuedPlayer(HexPlayer):
    """
    Player whose moves are submitted from another thread.

    request_move() blocks on an internal queue. A GUI calls submit() when
    the user clicks a cell; awaiting_move is set while the game loop is
    waiting so the GUI knows when clicks are accepted.
    """

    def __init__(self, side: Side, name: str = None, timeout: Optional[float] = None):
        """
        Args:
            side: Side to claim as
            name: Display name
            timeout: Seconds to wait per request; on expiry the request
                fails and the game loop asks again
        """
        super().__init__(side, name)
        self.timeout = timeout
        self.awaiting_move = threading.Event()
        self._moves: "queue.Queue[tuple]" = queue.Queue()

    def submit(self, row: int, column: int) -> None:
        self._moves.put((row, column))

    def request_move(self, board_view: BoardView) -> Move:
        self.awaiting_move.set()
        try:
            row, column = self._moves.get(timeout=self.timeout)
        except queue.Empty:
            raise MoveNotCompletedError(f"{self.name} did not move within {self.timeout}s")
        finally:
            self.awaiting_move.clear()

        debug.trace(f"{self.name} received ({row}, {column})", "player")
        return Move(row, column, self.claims_as())
