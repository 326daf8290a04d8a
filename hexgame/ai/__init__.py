"""
hexgame/ai/__init__.py - Automated players for Hex
"""

from hexgame.ai.random_player import RandomPlayer

__all__ = ['RandomPlayer']
