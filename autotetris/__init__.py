"""Falling-block puzzle game with a heuristic auto-player."""

__version__ = "0.1.0"
