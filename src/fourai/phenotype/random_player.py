"""
Random player implementation.

A non-learning player used as a yardstick for the evolved population. It is
never bred: it cannot mutate or crossover.
"""

from typing import Sequence

import numpy as np

from fourai.game                import Board, NUM_COLUMNS
from fourai.phenotype.player    import Player

class RandomPlayer(Player):
    """
    A player that ignores the board.

    Without a reference vector it returns fresh uniform [0, 1) preferences on
    every move, i.e. it plays a random legal column. With a reference vector
    it always returns that vector, i.e. it plays a fixed column order.

    Attributes:
        reference: fixed preference vector, or None for random play
        seed:      optional random seed for reproducibility
    """

    def __init__(self, reference: Sequence[float] | None = None, seed: int | None = None):
        if reference is not None:
            reference = np.asarray(reference, dtype=np.float64)
            if reference.shape != (NUM_COLUMNS,):
                raise ValueError(f"reference vector must have {NUM_COLUMNS} entries")
        self.reference = reference
        self.seed      = seed
        self._rng      = np.random.default_rng(seed)

    def get_move(self, board: Board) -> np.ndarray:
        if self.reference is not None:
            return self.reference.copy()
        return self._rng.random(NUM_COLUMNS)

    def __str__(self):
        return "RandomPlayer()" if self.reference is None else f"RandomPlayer(reference={self.reference.tolist()})"
