"""
Trial Module

This module runs one training session of the genetic algorithm: it creates a
population (or resumes one from the newest checkpoint), and then, generation
after generation, plays the round-robin tournament, selects the survivors,
checkpoints them, compares the fittest agent with a random player, and breeds
the next generation.

The tournament can be spread over several CPU cores using joblib.

Classes:
    GenerationStats: Statistics for a generation
    Trial:           A training session
"""

import logging
import time
from dataclasses import dataclass
from statistics  import mean

from fourai.phenotype       import RandomPlayer
from fourai.pool            import Agent, CheckpointStore, Population, Tournament
from fourai.run.config      import Config
from fourai.errors          import CheckpointError

logger = logging.getLogger(__name__)

@dataclass
class GenerationStats:
    """Statistics for a generation."""
    generation        : int
    population_size   : int
    top_fitness       : int
    mean_fitness      : float
    comparison_fitness: int | None = None
    duration          : float      = 0.0

class Trial:
    """
    A training session of the genetic algorithm.

    The trial is a small state machine. It is idle until run() is called; it
    then either resumes from the newest checkpoint written under the
    configured prefix, or starts at generation 0 with a random population.
    Each generation then goes through:

    1. Tournament:   every ordered pair of agents plays two games, colours swapped
    2. Selection:    the 'surviving_amount' fittest agents become the parents
    3. Checkpoint:   every 'save_interval' generations the parents are saved
    4. Comparison:   every 'compare_interval' generations the fittest agent
                     plays against a random player
    5. Reproduction: the population is refilled with the parents' offspring

    until 'generations' generations have run (forever, if negative).

    Public Attributes:
        history: GenerationStats of each generation run so far

    Public Properties:
        population: The current Population (None before run())
        generation: The number of the generation about to run

    Public Methods:
        run(): Execute the training session

    Parallelization of the tournament:
        num_jobs=1:  Serial evaluation (no parallelization)
        num_jobs>1:  Use specified number of parallel processes
        num_jobs=-1: Use all available CPU cores
    """

    def __init__(self, config: Config, suppress_output: bool = False):
        """
        Initialize the trial.

        Parameters:
            config:          Configuration parameters, validated here
            suppress_output: If True, suppress progress and final reports
        """
        config.validate()

        self._config            : Config          = config
        self._generation_counter: int             = 0
        self._population        : Population      = None
        self._suppress_output   : bool            = suppress_output
        self._tournament        : Tournament      = Tournament(config.win_amount, config.reward_quick_wins)
        self._checkpoints       : CheckpointStore = CheckpointStore(config.checkpoint_prefix)
        self.history            : list[GenerationStats] = []

    @property
    def population(self) -> Population:
        return self._population

    @property
    def generation(self) -> int:
        return self._generation_counter

    def run(self, num_jobs: int = 1):
        """
        Run the trial.

        Parameters:
            num_jobs: Number of parallel processes for the tournament
                      1 = serial (no parallelization)
                     -1 = use all available CPU cores
                     >1 = use specified number of processes
        """
        # Reset the trial state before starting a new run
        self._reset()

        # Create the initial population, or resume from a checkpoint
        self._start()

        # Evolution loop
        while not self._terminate():
            self._run_generation(num_jobs)
            self._generation_counter += 1

        # Produce final report
        if not self._suppress_output:
            self._final_report()

    def _reset(self):
        """
        Reset the trial state before starting a new run.
        """
        self._generation_counter = 0
        self._population         = None
        self.history             = []
        self._checkpoints.refresh()

    def _start(self):
        """
        Resume from the newest checkpoint if there is one, otherwise create a random population.

        The agents of a checkpoint are the parents of the generation that follows
        it: they breed a full population, which starts running at the generation
        number of the checkpoint.
        """
        logger.info("Looking for previous saves under '%s'", self._config.checkpoint_prefix)
        latest = self._checkpoints.latest()

        if latest is None:
            self._population = Population(self._config)
            self._generation_counter = 0
            logger.info("Starting with a population of %d", len(self._population))
            return

        generation, parents = self._checkpoints.load(latest[0])
        self._check_compatible(parents)

        self._population = Population(self._config, agents=[])
        self._population.repopulate(parents)
        self._generation_counter = generation
        logger.info("Resuming from generation %d with a population of %d", generation, len(self._population))

    def _check_compatible(self, agents: list[Agent]):
        """
        Make sure checkpointed agents can play with networks of the configured structure.
        """
        for agent in agents:
            network = getattr(agent.player, 'network', None)
            if network is None or network.structure != self._config.structure:
                raise CheckpointError(
                    f"checkpointed agent {agent.ID} does not match the network structure {self._config.structure}")

    def _is_due(self, interval: int) -> bool:
        """
        Whether a periodic action with the given interval happens this generation.
        """
        generation = self._generation_counter
        return interval > 0 and generation != 0 and generation % interval == 0

    def _run_generation(self, num_jobs: int):
        """
        Run one generation: tournament, selection, checkpoint, comparison, reproduction.
        """
        start  = time.perf_counter()
        agents = self._population.agents

        # Tournament; every game of the generation is counted before selection
        deltas = self._tournament.evaluate([agent.player for agent in agents], num_jobs)
        for agent, delta in zip(agents, deltas):
            agent.fitness += int(delta)
        mean_fitness = mean(agent.fitness for agent in agents)

        # Selection
        survivors = self._population.select()

        # Checkpoint, before reproduction resets fitness and mutates anything
        if self._is_due(self._config.save_interval):
            self._checkpoints.save(self._generation_counter, survivors)

        # Comparison with a non-learning baseline; does not affect selection
        comparison = None
        if self._is_due(self._config.compare_interval):
            comparison = self._tournament.compare(survivors[0].player, RandomPlayer(), self._config.compare_games)
            logger.info("Generation %d: fitness against a random player = %d", self._generation_counter, comparison)

        stats = GenerationStats(
            generation         = self._generation_counter,
            population_size    = len(agents),
            top_fitness        = survivors[0].fitness,
            mean_fitness       = mean_fitness,
            comparison_fitness = comparison,
        )

        # Reproduction
        self._population.repopulate(survivors)

        stats.duration = time.perf_counter() - start
        self.history.append(stats)
        logger.debug("Generation %d done in %.2fs", stats.generation, stats.duration)

        # Display progress after each generation
        if not self._suppress_output:
            self._generation_report(stats)

    def _terminate(self) -> bool:
        """
        Determine whether the trial should terminate.

        Returns:
            bool: True once 'generations' generations have run; never if 'generations' is negative
        """
        generations = self._config.generations
        return generations >= 0 and self._generation_counter >= generations

    def _generation_report(self, stats: GenerationStats):
        """
        Print a report describing the generation that just ran.

        This method is suppressed by setting 'self._suppress_output' to 'True'.
        """
        s  = f"===============\n"
        s += f"GENERATION {stats.generation:04d}\n"
        s += f"population size = {stats.population_size}\n"
        s += f"top fitness     = {stats.top_fitness}\n"
        s += f"mean fitness    = {stats.mean_fitness:.2f}\n"
        if stats.comparison_fitness is not None:
            s += f"vs random       = {stats.comparison_fitness}\n"
        s += f"time            = {stats.duration:.2f}s\n"
        print(s)

    def _final_report(self):
        """
        Display results at the end of the trial.

        This method is suppressed by setting 'self._suppress_output' to 'True'.
        """
        s  = "\nSUMMARY:\n"
        s += f"Generations run       = {len(self.history)}\n"
        s += f"Next generation       = {self._generation_counter}\n"
        if self.history:
            s += f"Last top fitness      = {self.history[-1].top_fitness}\n"
            s += f"Avg generation time   = {mean(h.duration for h in self.history):.2f}s\n"
        saved = self._checkpoints.generations()
        s += f"Checkpoints on disk   = {len(saved)}"
        if saved:
            s += f" (latest: {saved[-1]})"
        print(s)
