"""Rank per-player statistics from a game server's stats directory."""

__version__ = "0.1.0"
