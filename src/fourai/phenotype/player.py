"""
Player Module

This module defines how agents choose their moves. Every player maps a board
to a vector of 7 column preferences; the shared move policy then drops a piece
into the most preferred column that still has room.

Classes:
    Player:       Abstract base class for all players
    NeuralPlayer: Player powered by a Network, able to mutate and crossover
"""

import random
from abc    import ABC, abstractmethod
from typing import Sequence

import numpy as np

from fourai.game              import Board, Spot, InsertResult, NUM_COLUMNS
from fourai.phenotype.network import Network

class Player(ABC):
    """
    Abstract base class for a player.

    Subclasses must implement:
    - get_move(board): return one preference value per column

    Public Methods:
        get_move(board):         Column preferences for the given board
        play_move(board, color): Apply the preferred legal move to the board
    """

    @abstractmethod
    def get_move(self, board: Board) -> np.ndarray:
        """
        Return the preference of this player for each of the 7 columns.
        Higher values are preferred; the values are not normalized.
        """
        pass

    def play_move(self, board: Board, color: Spot) -> InsertResult:
        """
        Drop a piece of 'color' into the most preferred column that is not full.

        Columns are tried in decreasing order of preference: a full column is
        disqualified and the next best one is tried, so a legal move is always
        found unless the board is full. NaN preferences rank below every number.

        Returns:
            The InsertResult of the move that was applied
        """
        preferences = np.array(self.get_move(board), dtype=np.float64)
        if preferences.shape != (NUM_COLUMNS,):
            raise ValueError(f"expected {NUM_COLUMNS} column preferences, got shape {preferences.shape}")
        preferences[np.isnan(preferences)] = -np.inf

        # stable sort: ties go to the lowest column index, as argmax would
        for column in np.argsort(-preferences, kind='stable'):
            result = board.insert(int(column), color)
            if result.applied:
                return result

        raise RuntimeError(f"no legal move left for {color.name} after {board.moves} moves")

class NeuralPlayer(Player):
    """
    A player whose column preferences are the output of a neural network fed
    with the flattened board.

    Public Attributes:
        network: the Network computing the preferences

    Public Methods:
        random(structure, activation_names):   Player with a randomly initialized network
        get_move(board):                       Forward pass of the flattened board
        mutate(mutation_range, probability):   Perturb the weights in place
        crossover(other):                      Inherit whole layers from another player, in place
        clone():                               Independent copy of this player
    """

    def __init__(self, network: Network):
        self.network: Network = network

    @classmethod
    def random(cls, structure: Sequence[int], activation_names: Sequence[str]) -> 'NeuralPlayer':
        return cls(Network.random(structure, activation_names))

    def get_move(self, board: Board) -> np.ndarray:
        return self.network.forward_pass(board.flatten())

    def mutate(self, mutation_range: float, probability: float = 1.0) -> None:
        """
        Perturb the weights of the network.

        Every weight, independently and with the given probability, has a
        value drawn from U[-mutation_range, mutation_range] added to it.
        """
        for w in self.network.weights:
            mask  = np.random.random(w.shape) < probability
            delta = np.random.uniform(-mutation_range, mutation_range, size=w.shape)
            w += np.where(mask, delta, 0.0)

    def crossover(self, other: 'NeuralPlayer') -> None:
        """
        Combine this player's network with another player's network.

        Each layer, with probability 0.5, is replaced by a copy of the
        corresponding layer of 'other'; whole layers are inherited, weights
        are never blended.
        """
        if other.network.structure != self.network.structure:
            raise ValueError("cannot crossover networks with different structures")

        for i, w in enumerate(other.network.weights):
            if random.random() < 0.5:
                self.network.weights[i] = w.copy()

    def clone(self) -> 'NeuralPlayer':
        return NeuralPlayer(self.network.clone())

    def __str__(self):
        return f"NeuralPlayer({self.network})"
