"""
exceptions.py - Error conditions raised by the Hex engine

Configuration and state errors reach the caller. Move errors are handled
by the game loop, which re-prompts the player. ConnectivityError signals
a broken internal invariant and is never recovered from.
"""


class HexError(Exception):
    """Base class for all Hex engine errors."""


class InvalidDimensionError(HexError, ValueError):
    """Board width and height are unequal or outside the allowed range."""

    def __init__(self, width, height, minimum, maximum):
        self.width = width
        self.height = height
        if width != height:
            message = f"given width {width} and height {height} are not equal"
        else:
            message = (f"given width {width} and height {height} are not in between "
                       f"allowed minimum value {minimum} and maximum value {maximum}")
        super().__init__(message)


class InvalidCoordinateError(HexError, IndexError):
    """A row or column lies outside the board."""

    def __init__(self, row, column, size):
        self.row = row
        self.column = column
        super().__init__(f"position ({row}, {column}) is outside the {size}x{size} board")


class AlreadyClaimedError(HexError):
    """The targeted tile already has an owner."""

    def __init__(self, row, column, owner):
        self.row = row
        self.column = column
        self.owner = owner
        super().__init__(f"tile ({row}, {column}) is already claimed by {owner.name}")


class MoveNotCompletedError(HexError):
    """A player handed back something that is not a usable move."""


class IllegalStateError(HexError, RuntimeError):
    """An operation was requested in the wrong game state."""


class AlreadyStartedError(IllegalStateError):
    pass


class NotYetCompletedError(IllegalStateError):
    pass


class GameNotRunningError(IllegalStateError):
    pass


class ConnectivityError(HexError, AssertionError):
    """The connectivity tracker disagrees with the board."""


class TurnInProgressError(IllegalStateError):
    """Another caller is already playing a turn of this game."""
