"""Lichess arena tournament leaderboard builder."""

__version__ = "0.1.0"
