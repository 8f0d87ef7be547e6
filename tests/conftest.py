"""Pytest configuration and shared fixtures."""

import random
from itertools import count

import numpy as np
import pytest

from fourai.game      import Board, Spot
from fourai.pool      import Agent
from fourai.run       import Config


@pytest.fixture(autouse=True)
def set_random_seeds():
    """Seed both random generators and restart agent IDs from 0."""
    np.random.seed(42)
    random.seed(42)
    Agent._id_generator = count(0)

    yield

    np.random.seed(None)
    random.seed(None)


@pytest.fixture
def small_config(tmp_path):
    """A fast configuration: small networks, a small population, checkpoints in tmp_path."""
    config = Config()
    config.population_size   = 6
    config.surviving_amount  = 2
    config.crossover_size    = 2
    config.structure         = [42, 8, 7]
    config.activations       = ['elu', 'sigmoid']
    config.generations       = 2
    config.save_interval     = -1
    config.compare_interval  = -1
    config.compare_games     = 2
    config.checkpoint_prefix = str(tmp_path / 'saves' / 'gen')
    return config


@pytest.fixture
def board():
    return Board()


# Column order that fills the board without four in a row. Columns are filled
# in pairs (0,1), (2,3), (4,5); read from the bottom, even columns end up
# XXOOXX and odd columns OOXXOO. Column 6 is filled last and alternates XOXOXO.
DRAW_SEQUENCE = [
    0, 1, 0, 1, 1, 0, 1, 0, 0, 1, 0, 1,
    2, 3, 2, 3, 3, 2, 3, 2, 2, 3, 2, 3,
    4, 5, 4, 5, 5, 4, 5, 4, 4, 5, 4, 5,
    6, 6, 6, 6, 6, 6,
]


@pytest.fixture
def draw_moves():
    """42 alternating moves (FIRST starts) that fill the board with no winner."""
    color = Spot.FIRST
    moves = []
    for column in DRAW_SEQUENCE:
        moves.append((column, color))
        color = color.opponent
    return moves
