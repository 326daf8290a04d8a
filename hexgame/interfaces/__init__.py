"""
hexgame.interfaces - User interfaces for Hex

This package contains the command-line interface and the player adapters
that let people take part in a game.
"""

# Don't import anything here to avoid circular imports
__all__ = []
