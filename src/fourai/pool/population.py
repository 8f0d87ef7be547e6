"""
Population Module

This module implements the Population class, which owns the agents of a
training run and turns one generation into the next: it ranks the agents by
fitness, keeps the best as parents, and refills the population with their
offspring.

Classes:
    Population: The evolving collection of agents
"""

from itertools import cycle, islice, permutations
from typing    import TYPE_CHECKING

from fourai.phenotype  import NeuralPlayer
from fourai.pool.agent import Agent

if TYPE_CHECKING:
    from fourai.run.config import Config

class Population:
    """
    A population of evolving agents.

    The size of the population is fixed by the configuration; it only
    differs from it between select() and repopulate().

    Public Attributes:
        agents: List of all Agent objects in the current generation

    Public Methods:
        get_fittest_agent():     Return the agent with the highest fitness
        select():                Rank the agents and return the survivors
        repopulate(parents):     Build the next generation from the given parents
        spawn_next_generation(): select() followed by repopulate()
    """

    def __init__(self, config: 'Config', agents: list[Agent] | None = None):
        """
        Initialize the population.

        Parameters:
            config: Stores configuration parameters
            agents: The initial agents; if None, 'population_size' agents
                    with randomly initialized networks are created
        """
        self._config = config

        if agents is None:
            agents = [Agent(NeuralPlayer.random(config.structure, config.activations))
                      for _ in range(config.population_size)]
        self.agents: list[Agent] = agents

    def get_fittest_agent(self) -> Agent | None:
        """
        Return the agent with the highest fitness, or None if the population is empty.
        """
        if not self.agents:
            return None
        return max(self.agents, key=lambda agent: agent.fitness)

    def select(self) -> list[Agent]:
        """
        Sort the agents by decreasing fitness and return the 'surviving_amount'
        best ones. Ties keep their current order.
        """
        self.agents.sort(key=lambda agent: agent.fitness, reverse=True)
        return self.agents[:self._config.surviving_amount]

    def repopulate(self, parents: list[Agent]) -> None:
        """
        Replace the agents by the next generation, bred from 'parents'.

        The next generation consists of:
        1. the parents themselves, unchanged (elitism)
        2. up to 'crossover_size' children, each obtained by crossing over a
           parent with another, distinct, parent (cycling through all ordered
           pairs of parents)
        3. copies of the parents (cycling through them) until the population
           reaches 'population_size'

        Children and copies are mutated. Every agent of the next generation,
        parents included, starts with a fitness of 0.

        Parameters:
            parents: the agents selected to reproduce, best first
        """
        if not parents:
            raise ValueError("cannot repopulate from an empty list of parents")

        size   = self._config.population_size
        agents = list(parents[:size])
        for agent in agents:
            agent.fitness = 0

        # Crossover between two distinct parents
        pairs          = list(permutations(parents, 2))
        num_crossovers = min(self._config.crossover_size, size - len(agents)) if pairs else 0
        for mother, father in islice(cycle(pairs), num_crossovers):
            child = mother.mate(father)
            child.mutate(self._config.mutation_range, self._config.mutation_probability)
            agents.append(child)

        # Fill the remainder with mutated copies
        for parent in islice(cycle(parents), size - len(agents)):
            child = parent.clone()
            child.mutate(self._config.mutation_range, self._config.mutation_probability)
            agents.append(child)

        self.agents = agents

    def spawn_next_generation(self) -> None:
        """
        Create the next generation: selection followed by reproduction.
        """
        self.repopulate(self.select())

    def __len__(self):
        return len(self.agents)

    def __str__(self):
        return '\n'.join(str(agent) for agent in self.agents)
