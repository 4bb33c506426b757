"""Fast non-dominated sorting."""

from __future__ import annotations

import numpy as np
import pytest

from nsga3lab.engine.algorithm.nsgaiii.sorting import (
    dominates,
    domination_matrix,
    fast_non_dominated_sort,
    non_dominated_ranks,
)
from nsga3lab.foundation.metrics import check_fronts


def test_dominates():
    assert dominates([1, 2], [2, 2])
    assert not dominates([1, 2], [1, 2])
    assert not dominates([1, 3], [2, 2])


def test_small_example():
    F = np.array([[1.0, 5.0], [2.0, 2.0], [3.0, 3.0], [5.0, 1.0], [4.0, 4.0], [6.0, 6.0]])
    assert fast_non_dominated_sort(F) == [[0, 1, 3], [2], [4], [5]]
    np.testing.assert_array_equal(non_dominated_ranks(F), [0, 0, 1, 0, 2, 3])


def test_duplicates_share_a_front():
    F = np.array([[1.0, 1.0], [1.0, 1.0], [2.0, 2.0]])
    assert fast_non_dominated_sort(F) == [[0, 1], [2]]


def test_empty_population():
    assert fast_non_dominated_sort(np.empty((0, 3))) == []


@pytest.mark.parametrize("seed", [0, 1, 2])
@pytest.mark.parametrize("n_obj", [2, 3, 5])
def test_random_sort_is_partition_and_consistent(seed, n_obj):
    rng = np.random.default_rng(seed)
    # Integer grid values produce plenty of ties and weak dominance.
    F = rng.integers(0, 5, size=(60, n_obj)).astype(float)
    fronts = fast_non_dominated_sort(F)
    assert check_fronts(F, fronts) == []
    for front in fronts:
        assert front == sorted(front)


def test_domination_matrix_is_irreflexive():
    F = np.random.default_rng(3).random((20, 3))
    D = domination_matrix(F)
    assert not D.diagonal().any()
    assert not (D & D.T).any()
