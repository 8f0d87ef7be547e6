"""
Small Training Run

Trains a small population with small networks for a few generations, then
plays the fittest agent against a random player. It finishes in seconds, so
it is a quick way to check an installation.

Usage:
    python examples/train_small.py
"""

import logging
import tempfile
from pathlib import Path

from fourai                 import Config, RandomPlayer, Tournament, Trial
from fourai.run.play        import load_agent
from fourai.pool            import play_game

if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    with tempfile.TemporaryDirectory() as save_dir:
        config = Config()
        config.population_size   = 12
        config.surviving_amount  = 3
        config.crossover_size    = 6
        config.structure         = "42, 16, 7"
        config.activations       = "elu, sigmoid"
        config.generations       = 21
        config.save_interval     = 10
        config.compare_interval  = 5
        config.checkpoint_prefix = str(Path(save_dir) / 'gen')

        trial = Trial(config)
        trial.run(num_jobs=-1)

        generation, agent = load_agent(config.checkpoint_prefix)
        print(f"\nFittest agent of generation {generation}: {agent}")
        print(f"Against a random player over 50 pairings: "
              f"{Tournament().compare(agent.player, RandomPlayer(seed=0), games=50)}")

        winner, moves = play_game(agent.player, RandomPlayer(seed=1))
        print(f"Sample game: {winner.name} after {moves} moves")
