"""
hexgame.game - Core game mechanics for Hex

This package contains the board representation, the incremental win
detection, the player capability and the game controller.
"""

from hexgame.game.board import Board, BoardView, Tile
from hexgame.game.move import Move
from hexgame.game.player import HexPlayer
from hexgame.game.watcher import BoardWatcher, UnionFind
from hexgame.game.rules import BoardSnapshot, HexEnv, HexGame

__all__ = ['Board', 'BoardView', 'Tile', 'Move', 'HexPlayer', 'BoardWatcher',
           'UnionFind', 'BoardSnapshot', 'HexEnv', 'HexGame']
