"""Tests for the binary problem adapter and bundled benchmarks."""

from __future__ import annotations

import numpy as np
import pytest

from nsga3lab.foundation.exceptions import ConfigurationError, InvalidProblemError, ProblemDimensionError
from nsga3lab.foundation.problem import (
    LOTZ,
    MLOTZ,
    BinaryFeatureSelectionProblem,
    BinaryKnapsackProblem,
    BinaryQUBOProblem,
    NoisyOneMinMax,
    OneMinMax,
    Problem,
    available_problem_names,
    make_problem,
    objective_signs,
    validate_problem,
)


def _rng(seed: int = 0) -> np.random.Generator:
    return np.random.default_rng(seed)


def test_oneminmax_counts_ones_and_zeros():
    problem = OneMinMax(n_var=6)
    x = np.array([1, 1, 0, 1, 0, 0], dtype=np.int8)
    np.testing.assert_array_equal(problem.evaluate(x, _rng()), [3.0, 3.0])
    assert problem.length == 6


def test_lotz_leading_ones_trailing_zeros():
    problem = LOTZ(n_var=8)
    x = np.array([1, 1, 1, 0, 1, 0, 0, 0])
    np.testing.assert_array_equal(problem.evaluate(x, _rng()), [3.0, 3.0])
    np.testing.assert_array_equal(problem.evaluate(np.ones(8), _rng()), [8.0, 0.0])
    np.testing.assert_array_equal(problem.evaluate(np.zeros(8), _rng()), [0.0, 8.0])


def test_mlotz_splits_genome_into_blocks():
    problem = MLOTZ(n_var=8, n_obj=4)
    x = np.array([1, 1, 0, 0, 0, 0, 0, 1])
    np.testing.assert_array_equal(problem.evaluate(x, _rng()), [2.0, 2.0, 0.0, 0.0])


@pytest.mark.parametrize("n_var, n_obj", [(8, 3), (9, 4)])
def test_mlotz_rejects_bad_dimensions(n_var, n_obj):
    with pytest.raises(ProblemDimensionError):
        MLOTZ(n_var=n_var, n_obj=n_obj)


def test_noisy_oneminmax_uses_evaluation_stream():
    problem = NoisyOneMinMax(n_var=10, sigma=0.5)
    x = np.ones(10, dtype=np.int8)
    a = problem.evaluate(x, _rng(3))
    b = problem.evaluate(x, _rng(3))
    c = problem.evaluate(x, _rng(4))
    np.testing.assert_array_equal(a, b)
    assert not np.array_equal(a, c)


@pytest.mark.parametrize(
    "problem",
    [BinaryFeatureSelectionProblem(n_var=12), BinaryKnapsackProblem(n_var=12), BinaryQUBOProblem(n_var=12)],
)
def test_synthetic_benchmarks_return_finite_pairs(problem):
    x = _rng(1).integers(0, 2, size=problem.n_var)
    f = problem.evaluate(x, _rng())
    assert f.shape == (2,)
    assert np.all(np.isfinite(f))


def test_objective_signs_follow_maximization_flags():
    np.testing.assert_array_equal(objective_signs(OneMinMax(4)), [-1.0, -1.0])
    np.testing.assert_array_equal(objective_signs(BinaryKnapsackProblem(4)), [1.0, -1.0])


def test_objective_signs_reject_wrong_flag_count():
    problem = OneMinMax(4)
    problem.maximization = (True, False, True)
    with pytest.raises(ProblemDimensionError):
        objective_signs(problem)


class _SingleObjective(Problem):
    def __init__(self):
        self.n_var = 4
        self.n_obj = 1


class _Permutation(Problem):
    encoding = "permutation"

    def __init__(self):
        self.n_var = 4
        self.n_obj = 2


def test_validate_problem_returns_dimensions():
    assert validate_problem(LOTZ(n_var=7)) == (7, 2)


@pytest.mark.parametrize("problem", [_SingleObjective(), _Permutation()])
def test_validate_problem_rejects_unsupported(problem):
    with pytest.raises(ConfigurationError):
        validate_problem(problem)


def test_base_problem_requires_objectives():
    class Empty(Problem):
        n_var = 3
        n_obj = 2

    with pytest.raises(NotImplementedError):
        Empty().evaluate(np.zeros(3), _rng())


def test_registry_builds_known_problems():
    assert "oneminmax" in available_problem_names()
    problem = make_problem("LOTZ", n_var=12)
    assert isinstance(problem, LOTZ)
    assert problem.n_var == 12
    many = make_problem("mlotz", n_var=12, n_obj=6)
    assert many.n_obj == 6


def test_registry_rejects_unknown_and_fixed_objectives():
    with pytest.raises(InvalidProblemError):
        make_problem("zdt1")
    with pytest.raises(ProblemDimensionError):
        make_problem("oneminmax", n_obj=3)


def test_instance_seed_controls_generated_data():
    a = BinaryKnapsackProblem(n_var=10, instance_seed=1)
    b = BinaryKnapsackProblem(n_var=10, instance_seed=1)
    c = BinaryKnapsackProblem(n_var=10, instance_seed=2)
    np.testing.assert_array_equal(a.weights, b.weights)
    assert not np.array_equal(a.weights, c.weights)
