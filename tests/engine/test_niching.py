"""Reference point niching and survival selection."""

from __future__ import annotations

import numpy as np
import pytest

from nsga3lab.engine.algorithm.components.reference_points import das_dennis
from nsga3lab.engine.algorithm.components.state import RunPhase
from nsga3lab.engine.algorithm.nsgaiii.niching import niche_counts, niching, nsgaiii_survival
from nsga3lab.engine.algorithm.nsgaiii.normalization import associate
from nsga3lab.engine.algorithm.nsgaiii.sorting import fast_non_dominated_sort


def test_niche_counts():
    np.testing.assert_array_equal(niche_counts(np.array([0, 2, 2]), 4), [1, 0, 2, 0])


def test_empty_niche_takes_closest_member():
    counts = np.array([0, 2])
    chosen = niching(1, counts, np.array([0, 0, 1]), np.array([0.5, 0.1, 0.0]), np.random.default_rng(0))
    np.testing.assert_array_equal(chosen, [1])
    np.testing.assert_array_equal(counts, [1, 2])


def test_reference_points_without_members_are_skipped():
    counts = np.array([0, 5, 1])
    chosen = niching(2, counts, np.array([1, 1, 2]), np.zeros(3), np.random.default_rng(0))
    assert chosen[0] == 2
    assert chosen[1] in (0, 1)


def test_niching_never_exceeds_candidates():
    counts = np.zeros(3, dtype=int)
    chosen = niching(5, counts, np.array([0, 1]), np.zeros(2), np.random.default_rng(0))
    assert sorted(chosen.tolist()) == [0, 1]


@pytest.mark.parametrize("seed", [0, 1, 2, 3])
@pytest.mark.parametrize("n_obj, divisions", [(2, 12), (3, 4)])
def test_survival_returns_exactly_pop_size(seed, n_obj, divisions):
    rng = np.random.default_rng(seed)
    F = rng.random((40, n_obj))
    outcome = nsgaiii_survival(F, 20, das_dennis(n_obj, divisions), rng)
    survivors = outcome.survivors
    assert survivors.shape == (20,)
    assert np.unique(survivors).size == 20
    assert survivors.min() >= 0 and survivors.max() < 40


def test_admitted_fronts_survive_completely():
    rng = np.random.default_rng(5)
    F = rng.integers(0, 6, size=(30, 2)).astype(float)
    outcome = nsgaiii_survival(F, 15, das_dennis(2, 6), rng)
    fronts = fast_non_dominated_sort(F)
    chosen = set(outcome.survivors.tolist())
    for front in fronts[: outcome.n_admitted_fronts]:
        assert set(front) <= chosen


def test_survival_with_small_pool_keeps_everyone():
    F = np.random.default_rng(0).random((5, 2))
    outcome = nsgaiii_survival(F, 10, das_dennis(2, 4), np.random.default_rng(0))
    assert sorted(outcome.survivors.tolist()) == [0, 1, 2, 3, 4]


def test_survival_spreads_over_reference_points():
    # Every point of the line f1 + f2 = 10 twice; one survivor per reference point.
    k = np.arange(11, dtype=float)
    F = np.repeat(np.column_stack([k, 10.0 - k]), 2, axis=0)
    outcome = nsgaiii_survival(F, 11, das_dennis(2, 10), np.random.default_rng(1))
    kept = {tuple(row) for row in F[outcome.survivors]}
    assert len(kept) == 11


def test_survival_reports_phases():
    seen = []
    F = np.random.default_rng(2).random((12, 2))
    nsgaiii_survival(F, 6, das_dennis(2, 4), np.random.default_rng(0), on_phase=seen.append)
    assert seen == [RunPhase.SORTING, RunPhase.NORMALIZING, RunPhase.SELECTING]


def test_member_on_the_line_beats_a_nearly_on_line_member():
    F = np.array([[0.7 + 3e-9, 0.7 - 3e-9], [1.0, 1.0]])
    niche, distance = associate(F, np.array([[0.5, 0.5]]))
    assert distance[1] < distance[0]
    chosen = niching(1, np.zeros(1, dtype=int), niche, distance, np.random.default_rng(0))
    np.testing.assert_array_equal(chosen, [1])
