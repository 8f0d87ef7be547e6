"""
fourai - neural networks that learn four-in-a-row through a genetic algorithm.

Fixed-topology feed-forward networks read the board and output one preference
per column. A population of such networks plays a round-robin tournament
every generation; the fittest survive and breed the next generation through
crossover and mutation.

Main components:
- game: Board, pieces and win/draw detection
- phenotype: Neural networks and the players built on them
- pool: Agents, tournament, population and checkpoints
- run: Configuration, training sessions, interactive play and the command line
- activations: Activation functions for neural networks

Example:
    >>> from fourai import Config, Trial
    >>> config = Config("config.ini")
    >>> config.generations = 100
    >>> trial = Trial(config)
    >>> trial.run(num_jobs=4)
"""

__version__ = "0.1.0"

# Import main classes for convenient access
from fourai.errors         import ConfigurationError, CheckpointError
from fourai.game           import Board, Spot
from fourai.phenotype      import Network, NeuralPlayer, RandomPlayer
from fourai.pool           import Agent, Population, Tournament, CheckpointStore
from fourai.run.config     import Config
from fourai.run.trial      import Trial

__all__ = [
    "ConfigurationError",
    "CheckpointError",
    "Board",
    "Spot",
    "Network",
    "NeuralPlayer",
    "RandomPlayer",
    "Agent",
    "Population",
    "Tournament",
    "CheckpointStore",
    "Config",
    "Trial",
]
