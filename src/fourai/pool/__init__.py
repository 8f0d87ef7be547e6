"""
Pool Package

This package provides the evolutionary machinery: agents, the tournament
that scores them, the population that breeds them, and the checkpoints that
persist them.

Exported:
    Agent:           A player plus its fitness
    Tournament:      Plays and scores games between players
    Population:      The evolving collection of agents
    CheckpointStore: Save/load of the survivors of a generation
"""

from fourai.pool.agent      import Agent
from fourai.pool.tournament import Tournament, play_game
from fourai.pool.population import Population
from fourai.pool.checkpoint import CheckpointStore

__all__ = [
    'Agent',
    'Tournament',
    'play_game',
    'Population',
    'CheckpointStore',
]
