import configparser
import os

from fourai.activations       import activations
from fourai.errors            import ConfigurationError
from fourai.game              import NUM_COLUMNS, NUM_ROWS
from fourai.phenotype.network import validate_structure

# The network reads the whole board and outputs one preference per column
BOARD_INPUTS = NUM_COLUMNS * NUM_ROWS
MOVE_OUTPUTS = NUM_COLUMNS

class Config:

    @staticmethod
    def _parse_structure(raw_structure):
        """
        Parse the network structure from a comma-separated string to a list of ints.

        Parameters:
            raw_structure: Either a comma-separated string, or already a list

        Returns:
            List of layer widths
        """
        if isinstance(raw_structure, str):
            try:
                return [int(width.strip()) for width in raw_structure.split(',') if width.strip()]
            except ValueError:
                raise ConfigurationError(f"Invalid network structure '{raw_structure}'") from None
        return [int(width) for width in raw_structure]

    @staticmethod
    def _parse_activations(raw_activations):
        """
        Parse the activation list from a comma-separated string to a list of names.

        Parameters:
            raw_activations: Either a comma-separated string, or already a list

        Returns:
            List of activation function names
        """
        if isinstance(raw_activations, str):
            parsed = [name.strip().lower() for name in raw_activations.split(',') if name.strip()]
        else:
            parsed = [name.lower() for name in raw_activations]
        for name in parsed:
            if name not in activations:
                raise ConfigurationError(f"Invalid activation function '{name}' in activations")
        return parsed

    def __init__(self, config_file: str | None = None):
        """
        Initialize Config by parsing an INI file, or create a Config holding the defaults.

        Parameters:
            config_file: Path to the INI configuration file.
                         If None, creates a default Config for manual attribute setting.
        """

        # Default config for testing/manual setup
        if config_file is None:
            self.population_size  = 49
            self.surviving_amount = 7
            self.crossover_size   = 42

            self.mutation_probability = 1.0
            self.mutation_range       = 0.05

            self.structure   = [BOARD_INPUTS, 91, 91, 91, MOVE_OUTPUTS]
            self.activations = ['sigmoid'] * 4

            self.generations       = -1
            self.save_interval     = 250
            self.compare_interval  = -1
            self.compare_games     = 10
            self.checkpoint_prefix = './saves/gen'
            self.win_amount        = 1
            self.reward_quick_wins = False
            return

        if not os.path.exists(config_file):
            raise FileNotFoundError(f"Configuration file '{config_file}' not found")

        parser = configparser.ConfigParser()
        try:
            parser.read(config_file)
        except configparser.Error as e:
            raise ConfigurationError(f"Cannot parse configuration file '{config_file}': {e}") from None

        # Sentinel for missing default values
        _NO_DEFAULT = object()

        # Helper function to safely parse values
        def get_value(section, key, value_type, default=_NO_DEFAULT):
            try:
                raw_value = parser.get(section, key)
                if value_type == int:
                    return parser.getint(section, key)
                elif value_type == float:
                    return parser.getfloat(section, key)
                elif value_type == bool:
                    return parser.getboolean(section, key)
                elif value_type == str:
                    return raw_value
            except (configparser.NoSectionError, configparser.NoOptionError):
                if default is not _NO_DEFAULT:
                    return default
                raise ConfigurationError(f"Missing '{key}' in [{section}]") from None
            except ValueError as e:
                raise ConfigurationError(f"Invalid value for '{key}' in [{section}]: {e}") from None

        # [POPULATION]

        # The number of agents in each generation.
        self.population_size = get_value('POPULATION', 'population_size', int)

        # The number of fittest agents that survive a generation and
        # become the parents of the next one.
        self.surviving_amount = get_value('POPULATION', 'surviving_amount', int)

        # The maximum number of children bred by crossover in each generation.
        # Any room left in the population is filled with mutated copies of the survivors.
        self.crossover_size = get_value('POPULATION', 'crossover_size', int)

        # [MUTATION]

        # The probability that mutation changes any given weight.
        self.mutation_probability = get_value('MUTATION', 'mutation_probability', float, default=1.0)

        # Mutation adds to a weight a value drawn uniformly from [-mutation_range, mutation_range].
        self.mutation_range = get_value('MUTATION', 'mutation_range', float, default=0.05)

        # [NETWORK]

        # Layer widths, comma separated. Must start with 42 (the board)
        # and end with 7 (one output per column).
        self.structure = get_value('NETWORK', 'structure', str)

        # One activation function per layer transition, comma separated.
        # Options: sigmoid, elu, relu
        self.activations = get_value('NETWORK', 'activations', str)

        # [TRAINING]

        # The number of generations after which to stop the run.
        # A negative value trains until interrupted.
        self.generations = get_value('TRAINING', 'generations', int, default=-1)

        # Save the survivors every 'save_interval' generations.
        # A negative value disables checkpoints.
        self.save_interval = get_value('TRAINING', 'save_interval', int, default=250)

        # Play the fittest agent against a random player every 'compare_interval' generations.
        # A negative value disables the comparison.
        self.compare_interval = get_value('TRAINING', 'compare_interval', int, default=-1)

        # The number of two-game pairings played in each comparison.
        self.compare_games = get_value('TRAINING', 'compare_games', int, default=10)

        # Checkpoints are written to '<checkpoint_prefix>_<generation>'.
        self.checkpoint_prefix = get_value('TRAINING', 'checkpoint_prefix', str, default='./saves/gen')

        # Fitness won by the winner, and lost by the loser, of a game.
        self.win_amount = get_value('TRAINING', 'win_amount', int, default=1)

        # If 'True', a win is worth 45 minus the number of moves played
        # instead of 'win_amount', rewarding quick wins.
        self.reward_quick_wins = get_value('TRAINING', 'reward_quick_wins', bool, default=False)

    def validate(self) -> None:
        """
        Check the configuration as a whole before any population is created.

        Raises:
            ConfigurationError: describing the first problem found
        """
        validate_structure(self.structure, self.activations)
        if self.structure[0] != BOARD_INPUTS or self.structure[-1] != MOVE_OUTPUTS:
            raise ConfigurationError(
                f"network structure must start with {BOARD_INPUTS} and end with {MOVE_OUTPUTS}, "
                f"got {self.structure}")

        if self.surviving_amount < 1:
            raise ConfigurationError("surviving_amount must be at least 1")
        if self.population_size < self.surviving_amount:
            raise ConfigurationError(
                f"population_size ({self.population_size}) must be at least "
                f"surviving_amount ({self.surviving_amount})")
        if self.crossover_size < 0:
            raise ConfigurationError("crossover_size cannot be negative")

        if not 0.0 <= self.mutation_probability <= 1.0:
            raise ConfigurationError("mutation_probability must be between 0 and 1")
        if self.mutation_range < 0.0:
            raise ConfigurationError("mutation_range cannot be negative")

        for name in ('save_interval', 'compare_interval'):
            if getattr(self, name) == 0:
                raise ConfigurationError(f"{name} must be positive, or negative to disable it")
        if self.compare_games < 1:
            raise ConfigurationError("compare_games must be at least 1")
        if self.win_amount < 1:
            raise ConfigurationError("win_amount must be at least 1")

    def __setattr__(self, name, value):
        """
        Override 'setattr' to automatically parse the network settings when set.
        This allows users to write config.structure = "42, 20, 7" and have it
        automatically converted to a list of layer widths.
        """
        if name == 'structure':
            value = self._parse_structure(value)
        elif name == 'activations':
            value = self._parse_activations(value)
        super().__setattr__(name, value)

    def __str__(self):
        lines = [f"{name} = {value}" for name, value in vars(self).items()]
        return '\n'.join(lines)
