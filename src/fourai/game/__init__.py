"""
Game Package

This package provides the rules engine of the four-in-a-row game.

Exported:
    Board:        The 7x6 game board
    Spot:         Content of a board cell
    InsertResult: Outcome of dropping a piece into a column
"""

from fourai.game.board import Board, Spot, InsertResult, NUM_COLUMNS, NUM_ROWS, WIN_LENGTH

__all__ = [
    'Board',
    'Spot',
    'InsertResult',
    'NUM_COLUMNS',
    'NUM_ROWS',
    'WIN_LENGTH',
]
