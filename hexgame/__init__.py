"""
hexgame - Two-player Hex game engine

This package provides the board, incremental win detection and the turn
loop for Hex, plus simple players, a command-line interface and a
gymnasium environment built on top of them.
"""

# Version number
__version__ = '0.1.0'
