"""
Mini Minesweeper: a one-mine Minesweeper round engine.

Subpackages:
- game: board, engine, countdown, scoreboard, session, environment
- agents: automated players for the environment
"""

__version__ = "0.1.0"
