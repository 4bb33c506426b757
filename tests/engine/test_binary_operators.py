"""Binary initialization, mating and variation operators."""

from __future__ import annotations

import numpy as np
import pytest

from nsga3lab.engine.algorithm.nsgaiii.operators import VariationOperators, build_variation_operators
from nsga3lab.engine.operators.binary import (
    bit_flip_mutation,
    hux_crossover,
    one_point_crossover,
    random_binary_population,
    random_mating_pairs,
    two_point_crossover,
    uniform_crossover,
)
from nsga3lab.foundation.exceptions import ConfigurationError, InvalidOperatorError


def _opposite_pairs(n_pairs: int = 8, n_var: int = 10) -> np.ndarray:
    pairs = np.zeros((n_pairs, 2, n_var), dtype=np.int8)
    pairs[:, 1] = 1
    return pairs


def test_random_population_is_binary():
    X = random_binary_population(15, 9, np.random.default_rng(0))
    assert X.shape == (15, 9)
    assert X.dtype == np.int8
    assert set(np.unique(X)) <= {0, 1}


def test_random_population_rejects_empty_shapes():
    with pytest.raises(ValueError):
        random_binary_population(0, 4, np.random.default_rng(0))


def test_mating_pairs_use_distinct_parents():
    pairs = random_mating_pairs(5, 200, np.random.default_rng(1))
    assert pairs.shape == (200, 2)
    assert np.all(pairs[:, 0] != pairs[:, 1])
    assert pairs.min() >= 0 and pairs.max() < 5


@pytest.mark.parametrize("crossover", [one_point_crossover, two_point_crossover, uniform_crossover, hux_crossover])
def test_crossover_exchanges_genes_without_touching_parents(crossover):
    pairs = np.random.default_rng(2).integers(0, 2, size=(12, 2, 16)).astype(np.int8)
    before = pairs.copy()
    children = crossover(pairs, 1.0, np.random.default_rng(3))
    np.testing.assert_array_equal(pairs, before)
    assert children.shape == pairs.shape
    # Genes are swapped, never invented.
    np.testing.assert_array_equal(children.sum(axis=1), pairs.sum(axis=1))


@pytest.mark.parametrize("crossover", [one_point_crossover, two_point_crossover, uniform_crossover, hux_crossover])
def test_crossover_probability_zero_copies(crossover):
    pairs = _opposite_pairs()
    children = crossover(pairs, 0.0, np.random.default_rng(0))
    np.testing.assert_array_equal(children, pairs)
    assert children is not pairs


def test_one_point_crossover_swaps_a_tail():
    children = one_point_crossover(_opposite_pairs(), 1.0, np.random.default_rng(4))
    for child in children[:, 0]:
        cut = int(np.argmax(child))
        assert 0 < cut < child.size
        assert np.all(child[:cut] == 0) and np.all(child[cut:] == 1)


def test_hux_swaps_half_of_the_differences():
    children = hux_crossover(_opposite_pairs(n_var=10), 1.0, np.random.default_rng(5))
    np.testing.assert_array_equal(children[:, 0].sum(axis=1), 5)


def test_bit_flip_mutation():
    X = random_binary_population(6, 8, np.random.default_rng(0))
    flipped = bit_flip_mutation(X, 1.0, np.random.default_rng(0))
    np.testing.assert_array_equal(flipped, 1 - X)
    same = bit_flip_mutation(X, 0.0, np.random.default_rng(0))
    np.testing.assert_array_equal(same, X)
    assert same is not X


def test_offspring_count_and_shape():
    ops = build_variation_operators({}, n_var=7)
    parents = random_binary_population(6, 7, np.random.default_rng(0))
    children = ops.offspring(parents, 9, np.random.default_rng(1))
    assert children.shape == (9, 7)
    assert children.dtype == parents.dtype
    assert ops.offspring(parents, 0, np.random.default_rng(1)).shape == (0, 7)


def test_build_variation_operators_defaults():
    ops = build_variation_operators({}, n_var=20)
    assert isinstance(ops, VariationOperators)
    assert ops.crossover_fn is uniform_crossover
    assert ops.crossover_prob == pytest.approx(0.9)
    assert ops.mutation_prob == pytest.approx(1 / 20)
    assert ops.label == "uniform+bitflip"


def test_build_variation_operators_from_config():
    cfg = {"crossover": ("two_point", {"prob": 0.7}), "mutation": ["bit_flip", {"prob": "2/n"}]}
    ops = build_variation_operators(cfg, n_var=10)
    assert ops.crossover_fn is two_point_crossover
    assert ops.crossover_prob == pytest.approx(0.7)
    assert ops.mutation_prob == pytest.approx(0.2)

    ops = build_variation_operators({"crossover": {"method": "single_point"}}, n_var=10)
    assert ops.crossover_fn is one_point_crossover


def test_build_variation_operators_rejects_unknown():
    with pytest.raises(InvalidOperatorError):
        build_variation_operators({"crossover": ("sbx", {})}, n_var=10)
    with pytest.raises(InvalidOperatorError):
        build_variation_operators({"mutation": ("polynomial", {})}, n_var=10)
    with pytest.raises(ConfigurationError):
        build_variation_operators({"mutation": ("bitflip", {"prob": 1.5})}, n_var=10)
