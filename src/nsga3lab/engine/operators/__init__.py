"""Variation operators for binary genomes."""

from .binary import (
    bit_flip_mutation,
    hux_crossover,
    one_point_crossover,
    random_binary_population,
    random_mating_pairs,
    two_point_crossover,
    uniform_crossover,
)

__all__ = [
    "random_binary_population",
    "random_mating_pairs",
    "one_point_crossover",
    "two_point_crossover",
    "uniform_crossover",
    "hux_crossover",
    "bit_flip_mutation",
]
