"""
Phenotype Package

This package provides the neural networks and the players built on them.

Exported:
    Network:      Layered feed-forward neural network
    Player:       Abstract base class of all players
    NeuralPlayer: Evolvable player powered by a Network
    RandomPlayer: Non-learning baseline player
"""

from fourai.phenotype.network       import Network, validate_structure
from fourai.phenotype.player        import Player, NeuralPlayer
from fourai.phenotype.random_player import RandomPlayer

__all__ = [
    'Network',
    'validate_structure',
    'Player',
    'NeuralPlayer',
    'RandomPlayer',
]
