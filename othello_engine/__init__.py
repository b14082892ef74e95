"""Othello/Reversi rules engine with greedy and alpha-beta move selection"""

__version__ = "0.1.0"
