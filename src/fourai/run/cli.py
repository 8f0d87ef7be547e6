"""
Command line entry point.

Usage:
    fourai train --config examples/configs/config_train.ini -j 4
    fourai train -p saves/gen -g 1000 -i 50 -I 10
    fourai play-ai -p saves/gen -f
    fourai play-local
"""

import argparse
import logging
import sys
from pathlib import Path

from fourai.activations import activations
from fourai.errors      import CheckpointError, ConfigurationError
from fourai.run.config  import Config
from fourai.run.play    import play_against_ai, play_local
from fourai.run.trial   import Trial

logger = logging.getLogger(__name__)

# command line option => Config attribute
TRAIN_OVERRIDES = {
    'save_path'       : 'checkpoint_prefix',
    'surviving'       : 'surviving_amount',
    'population'      : 'population_size',
    'crossover'       : 'crossover_size',
    'mutation_prob'   : 'mutation_probability',
    'mutation_range'  : 'mutation_range',
    'generations'     : 'generations',
    'save_interval'   : 'save_interval',
    'compare_interval': 'compare_interval',
    'structure'       : 'structure',
    'activations'     : 'activations',
}

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='fourai', description='Evolve neural networks that play four-in-a-row')
    subparsers = parser.add_subparsers(dest='command', required=True)

    train = subparsers.add_parser('train', help='Train a population of agents')
    train.add_argument('--config', help='INI configuration file; defaults are used when omitted')
    train.add_argument('-p', '--save-path', help='Checkpoint path prefix')
    train.add_argument('-s', '--surviving', type=int, help='Number of agents surviving each generation')
    train.add_argument('-n', '--population', type=int, help='Population size')
    train.add_argument('-c', '--crossover', type=int, help='Number of children bred by crossover')
    train.add_argument('-m', '--mutation-prob', type=float, help='Probability that a weight mutates')
    train.add_argument('-M', '--mutation-range', type=float, help='Maximum change of a mutated weight')
    train.add_argument('-g', '--generations', type=int, help='Number of generations (negative: forever)')
    train.add_argument('-i', '--save-interval', type=int, help='Checkpoint interval (negative: never)')
    train.add_argument('-I', '--compare-interval', type=int, help='Comparison interval (negative: never)')
    train.add_argument('-S', '--structure', type=int, nargs='+', help='Layer widths of the networks')
    train.add_argument('-a', '--activations', nargs='+', choices=sorted(activations),
                       help='Activation function of each layer transition')
    train.add_argument('-j', '--jobs', type=int, default=1, help='Parallel processes for the tournament (-1: all cores)')
    train.add_argument('-v', '--verbose', action='store_true', help='Log debug messages')

    play_ai = subparsers.add_parser('play-ai', help='Play against the fittest agent of a checkpoint')
    play_ai.add_argument('-p', '--save-path', default='./saves/gen', help='Checkpoint path prefix')
    play_ai.add_argument('-n', '--generation', type=int, help='Generation to load (default: newest)')
    play_ai.add_argument('-f', '--ai-first', action='store_true', help='Let the agent make the first move')

    subparsers.add_parser('play-local', help='Two players on the same console')
    return parser

def make_config(args: argparse.Namespace) -> Config:
    """
    Build the training configuration: the INI file (or the defaults), overridden by the command line.
    """
    config = Config(args.config) if args.config else Config()
    for option, attribute in TRAIN_OVERRIDES.items():
        value = getattr(args, option)
        if value is not None:
            setattr(config, attribute, value)
    config.validate()
    return config

def train(args: argparse.Namespace):
    config = make_config(args)
    Path(config.checkpoint_prefix).parent.mkdir(parents=True, exist_ok=True)
    logger.debug("Training configuration:\n%s", config)

    trial = Trial(config)
    try:
        trial.run(num_jobs=args.jobs)
    except KeyboardInterrupt:
        logger.info("Interrupted at generation %d", trial.generation)

def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level  = logging.DEBUG if getattr(args, 'verbose', False) else logging.INFO,
        format = "%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == 'train':
            train(args)
        elif args.command == 'play-ai':
            play_against_ai(args.save_path, ai_first=args.ai_first, generation=args.generation)
        else:
            play_local()
    except (ConfigurationError, CheckpointError, OSError) as e:
        print(f"Failed: {e}", file=sys.stderr)
        return 1
    return 0

if __name__ == '__main__':
    sys.exit(main())
