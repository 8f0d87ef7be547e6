"""
Run Package

This package drives training and play.

Exported:
    Config:          Training configuration, from an INI file or defaults
    Trial:           A training session of the genetic algorithm
    GenerationStats: Statistics for a generation
"""

from fourai.run.config import Config
from fourai.run.trial  import Trial, GenerationStats

__all__ = [
    'Config',
    'Trial',
    'GenerationStats',
]
