"""
Agent Module

This module implements the Agent class, the unit the evolutionary algorithm
operates on: a player together with the fitness it earned in the current
generation.

Classes:
    Agent: A player plus its fitness
"""

from itertools import count

from fourai.phenotype import Player

class Agent:
    """
    A member of the population.

    You can regard an agent as a thin wrapper around the player that powers
    it, to which it adds a unique ID and a fitness. Agents are evaluated,
    ranked and reproduced; reproduction always works on copies, so an agent
    is never shared between two populations.

    Public Attributes:
        ID:      Process-wide unique identifier for this agent
        player:  The Player choosing this agent's moves
        fitness: Integer score accumulated during the current tournament

    Public Methods:
        clone():                              Create an offspring identical to this agent
        mate(other):                          Create an offspring by crossover with another agent
        mutate(mutation_range, probability):  Perturb this agent's player in place
    """

    _id_generator = count(0)

    def __init__(self, player: Player):
        self.ID     : int    = next(Agent._id_generator)
        self.player : Player = player
        self.fitness: int    = 0

    def clone(self) -> 'Agent':
        """
        Create a new Agent from a copy of this agent's player; its fitness starts at 0.
        """
        return Agent(self.player.clone())

    def mate(self, other: 'Agent') -> 'Agent':
        """
        Create a new Agent whose player is a copy of this agent's player,
        crossed over with the player of 'other'.
        """
        child = self.clone()
        child.player.crossover(other.player)
        return child

    def mutate(self, mutation_range: float, probability: float) -> None:
        self.player.mutate(mutation_range, probability)

    def __str__(self):
        return f"ID={self.ID}, fitness={self.fitness}, {self.player}"

    def __repr__(self):
        return f"Agent(ID={self.ID}, fitness={self.fitness})"
