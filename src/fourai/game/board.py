"""
Board Module

This module implements the rules engine of the gravity-drop four-in-a-row game
played on a fixed 7x6 grid: holding the board state, dropping pieces into
columns, and detecting wins and draws.

Classes:
    Spot:         Content of one cell (empty, or a piece of either colour)
    InsertResult: Outcome of dropping a piece into a column
    Board:        The game board
"""

from enum   import IntEnum
from typing import NamedTuple

import numpy as np

NUM_COLUMNS = 7
NUM_ROWS    = 6
WIN_LENGTH  = 4

# Unit steps (column, row) along the four axes, in the order they are checked.
# Row 0 is the top of the board, so the ascending diagonal steps up (row - 1).
AXES = (
    (1,  0),  # horizontal
    (0,  1),  # vertical
    (1, -1),  # ascending diagonal  '/'
    (1,  1),  # descending diagonal '\'
)

class Spot(IntEnum):
    """
    Content of a board cell.

    The integer values double as the encoding fed to the neural networks.
    """
    EMPTY  =  0
    FIRST  =  1
    SECOND = -1

    @property
    def opponent(self) -> 'Spot':
        if self is Spot.EMPTY:
            raise ValueError("EMPTY has no opponent")
        return Spot(-self.value)

class InsertResult(NamedTuple):
    """
    Outcome of Board.insert().

    applied: False if the column was already full (the board is unchanged)
    winner:  the colour that completed four in a row, Spot.EMPTY if the move
             filled the board without a winner (draw), None otherwise
    """
    applied: bool
    winner : Spot | None

    @property
    def is_win(self) -> bool:
        return self.winner is not None and self.winner is not Spot.EMPTY

    @property
    def is_draw(self) -> bool:
        return self.winner is Spot.EMPTY

    @property
    def is_terminal(self) -> bool:
        return self.winner is not None

class Board:
    """
    The 7x6 game board.

    Cells are stored column-major: positions[column][row], with row 0 at the
    top. A piece dropped into a column lands on the highest empty row, i.e.
    the bottom-most free cell.

    Public Attributes:
        positions: 7x6 nested list of Spot

    Public Methods:
        insert(column, color): Drop a piece and report the outcome
        get(column, row):      Content of one cell
        column_full(column):   Whether a column accepts no more pieces
        is_full():             Whether all 42 cells are occupied
        flatten():             Network encoding of the board
    """

    def __init__(self):
        self.positions: list[list[Spot]] = [[Spot.EMPTY] * NUM_ROWS for _ in range(NUM_COLUMNS)]

        # Index of the highest empty row of each column; -1 once the column is full
        self._highest: list[int] = [NUM_ROWS - 1] * NUM_COLUMNS
        self._moves  : int       = 0

    @property
    def moves(self) -> int:
        """Number of pieces placed so far."""
        return self._moves

    def get(self, column: int, row: int) -> Spot:
        return self.positions[column][row]

    def column_full(self, column: int) -> bool:
        return self._highest[column] < 0

    def is_full(self) -> bool:
        return self._moves >= NUM_COLUMNS * NUM_ROWS

    def insert(self, column: int, color: Spot) -> InsertResult:
        """
        Drop a piece of the given colour into a column.

        Parameters:
            column: Column index in [0, 7)
            color:  Spot.FIRST or Spot.SECOND

        Returns:
            (False, None)        if the column is full; nothing changes
            (True,  None)        if the game goes on
            (True,  color)       if the move completes four in a row
            (True,  Spot.EMPTY)  if the move fills the board without a winner
        """
        if not 0 <= column < NUM_COLUMNS:
            raise IndexError(f"column {column} is outside the board")
        if color is Spot.EMPTY:
            raise ValueError("cannot insert an EMPTY piece")

        row = self._highest[column]
        if row < 0:
            return InsertResult(False, None)

        self.positions[column][row] = color
        self._highest[column] -= 1
        self._moves += 1

        winner = self._check_win(column, row)
        if winner is not None:
            return InsertResult(True, winner)
        if self.is_full():
            return InsertResult(True, Spot.EMPTY)
        return InsertResult(True, None)

    def _line_through(self, column: int, row: int, step: tuple[int, int]) -> list[Spot]:
        """
        The maximal in-bounds line of cells through (column, row) along 'step'.
        """
        dc, dr = step

        # walk back to the first cell of the line
        c, r = column, row
        while 0 <= c - dc < NUM_COLUMNS and 0 <= r - dr < NUM_ROWS:
            c -= dc
            r -= dr

        line = []
        while 0 <= c < NUM_COLUMNS and 0 <= r < NUM_ROWS:
            line.append(self.positions[c][r])
            c += dc
            r += dr
        return line

    @staticmethod
    def _four_consecutive(line: list[Spot]) -> Spot | None:
        for start in range(len(line) - WIN_LENGTH + 1):
            window = line[start:start + WIN_LENGTH]
            if window[0] is not Spot.EMPTY and all(spot is window[0] for spot in window):
                return window[0]
        return None

    def _check_win(self, column: int, row: int) -> Spot | None:
        """
        Look for four in a row through the cell that was just filled.
        Only the four lines through that cell are examined.
        """
        for step in AXES:
            winner = self._four_consecutive(self._line_through(column, row, step))
            if winner is not None:
                return winner
        return None

    def flatten(self) -> np.ndarray:
        """
        Encode the board as the 42-element network input:
        columns outer, rows inner, EMPTY=0, FIRST=+1, SECOND=-1.
        """
        return np.array([spot.value for col in self.positions for spot in col], dtype=np.float64)

    def __str__(self):
        symbols = {Spot.EMPTY: '.', Spot.FIRST: 'X', Spot.SECOND: 'O'}
        rows = [' '.join(symbols[self.positions[c][r]] for c in range(NUM_COLUMNS))
                for r in range(NUM_ROWS)]
        rows.append(' '.join(str(c + 1) for c in range(NUM_COLUMNS)))
        return '\n'.join(rows)

    def __repr__(self):
        return f"Board(moves={self._moves})"
