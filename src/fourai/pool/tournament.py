"""
Tournament Module

This module plays the games that turn a population of players into fitness
scores. Every ordered pair of distinct players meets in a pairing of two
games with colours swapped, so the first-move advantage cancels out.

The all-pairs evaluation is the dominant cost of training. It can be spread
over several processes with joblib: each worker plays the pairings of a slice
of rows and returns a partial vector of fitness deltas, and the partial
vectors are summed once all workers are done.

Classes:
    Tournament: Plays games and scores them

Functions:
    play_game(first, second): Play one game, return the winner and the number of moves
"""

import numpy as np
from joblib import Parallel, delayed, effective_n_jobs
from typing import Sequence

from fourai.game      import Board, Spot, NUM_COLUMNS, NUM_ROWS
from fourai.phenotype import Player

def play_game(first: Player, second: Player) -> tuple[Spot, int]:
    """
    Play a complete game.

    Parameters:
        first:  the player moving first (Spot.FIRST)
        second: the player moving second (Spot.SECOND)

    Returns:
        (winner, moves) where winner is Spot.FIRST, Spot.SECOND, or Spot.EMPTY
        for a draw, and moves is the number of pieces on the final board
    """
    board   = Board()
    players = {Spot.FIRST: first, Spot.SECOND: second}
    color   = Spot.FIRST

    while True:
        result = players[color].play_move(board, color)
        if result.is_terminal:
            return result.winner, board.moves
        color = color.opponent

class Tournament:
    """
    Plays and scores games between players.

    A won game is worth +amount to the winner and -amount to the loser, a
    draw is worth 0 to both. The amount is either the fixed 'win_amount', or,
    when 'reward_quick_wins' is set, 45 minus the number of moves, so that
    quicker wins (and slower losses) count for more.

    Public Methods:
        score(winner, moves):               Fitness deltas of one game
        pairing(a, b):                      Fitness deltas of a two-game pairing
        evaluate(players, num_jobs):        Fitness deltas of the round-robin tournament
        compare(player, baseline, games):   Fitness of a player against a baseline
    """

    def __init__(self, win_amount: int = 1, reward_quick_wins: bool = False):
        self.win_amount       : int  = win_amount
        self.reward_quick_wins: bool = reward_quick_wins

    def score(self, winner: Spot, moves: int) -> tuple[int, int]:
        """
        Returns:
            (delta for the first player, delta for the second player)
        """
        if winner is Spot.EMPTY:
            return 0, 0

        amount = NUM_COLUMNS * NUM_ROWS + 3 - moves if self.reward_quick_wins else self.win_amount
        if winner is Spot.FIRST:
            return amount, -amount
        return -amount, amount

    def pairing(self, a: Player, b: Player) -> tuple[int, int]:
        """
        Play 'a' against 'b' twice, once with each colour.

        Returns:
            (total delta for a, total delta for b)
        """
        a_first, b_second = self.score(*play_game(a, b))
        b_first, a_second = self.score(*play_game(b, a))
        return a_first + a_second, b_second + b_first

    def _play_rows(self, players: Sequence[Player], rows: Sequence[int]) -> np.ndarray:
        """
        Play the pairings (i, j) for every i in 'rows' and every j != i.

        Returns:
            the fitness deltas of all players produced by these pairings
        """
        deltas = np.zeros(len(players), dtype=np.int64)
        for i in rows:
            for j in range(len(players)):
                if i != j:
                    delta_i, delta_j = self.pairing(players[i], players[j])
                    deltas[i] += delta_i
                    deltas[j] += delta_j
        return deltas

    def evaluate(self, players: Sequence[Player], num_jobs: int = 1) -> np.ndarray:
        """
        Play the full round-robin tournament.

        Parameters:
            players:  the competing players
            num_jobs: number of parallel processes
                       1 = serial (no parallelization)
                      -1 = use all available CPU cores
                      >1 = use specified number of processes

        Returns:
            integer array with the total fitness delta of each player
        """
        num_players = len(players)
        if num_players < 2:
            return np.zeros(num_players, dtype=np.int64)

        if num_jobs == 1:
            return self._play_rows(players, range(num_players))

        # one slice of rows per worker; every row holds the same number of pairings
        num_slices = min(num_players, effective_n_jobs(num_jobs))
        slices     = np.array_split(np.arange(num_players), num_slices)
        partials   = Parallel(num_jobs)(delayed(self._play_rows)(players, rows.tolist()) for rows in slices)
        return np.sum(partials, axis=0)

    def compare(self, player: Player, baseline: Player, games: int = 1) -> int:
        """
        Play 'games' pairings of 'player' against 'baseline'.

        Returns:
            the total fitness delta of 'player'
        """
        fitness = 0
        for _ in range(games):
            delta, _ = self.pairing(player, baseline)
            fitness += delta
        return fitness
