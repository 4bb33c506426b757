from __future__ import annotations

import numpy as np

from nsga3lab.foundation.exceptions import ProblemDimensionError
from nsga3lab.foundation.problem.base import Problem


def _as_bits(x: np.ndarray, n_var: int) -> np.ndarray:
    bits = np.asarray(x)
    if bits.ndim != 1 or bits.shape[0] != n_var:
        raise ValueError(f"Expected a bit vector of length {n_var}.")
    return (bits > 0.5).astype(np.int8, copy=False)


def _leading_ones(bits: np.ndarray) -> int:
    zeros = np.flatnonzero(bits == 0)
    return int(zeros[0]) if zeros.size else int(bits.size)


def _trailing_zeros(bits: np.ndarray) -> int:
    ones = np.flatnonzero(bits == 1)
    return int(bits.size - 1 - ones[-1]) if ones.size else int(bits.size)


def _require_positive(n_var: int) -> int:
    if n_var <= 0:
        raise ProblemDimensionError("n_var must be positive.", n_var=n_var)
    return int(n_var)


class OneMinMax(Problem):
    """
    Objective 1: maximize the number of ones.
    Objective 2: maximize the number of zeros.
    Every bit string is Pareto optimal.
    """

    maximization = True

    def __init__(self, n_var: int = 20) -> None:
        self.n_var = _require_positive(n_var)
        self.n_obj = 2

    def objectives(self, x: np.ndarray, rng: np.random.Generator) -> np.ndarray:
        ones = int(_as_bits(x, self.n_var).sum())
        return np.array([ones, self.n_var - ones], dtype=float)


class NoisyOneMinMax(OneMinMax):
    """OneMinMax with additive Gaussian noise drawn from the evaluation stream."""

    def __init__(self, n_var: int = 20, sigma: float = 0.1) -> None:
        super().__init__(n_var)
        self.sigma = float(sigma)

    def objectives(self, x: np.ndarray, rng: np.random.Generator) -> np.ndarray:
        clean = super().objectives(x, rng)
        return clean + rng.normal(0.0, self.sigma, size=clean.shape)


class LOTZ(Problem):
    """
    Leading ones, trailing zeros.
    Objective 1: maximize the length of the prefix of ones.
    Objective 2: maximize the length of the suffix of zeros.
    """

    maximization = True

    def __init__(self, n_var: int = 20) -> None:
        self.n_var = _require_positive(n_var)
        self.n_obj = 2

    def objectives(self, x: np.ndarray, rng: np.random.Generator) -> np.ndarray:
        bits = _as_bits(x, self.n_var)
        return np.array([_leading_ones(bits), _trailing_zeros(bits)], dtype=float)


class MLOTZ(Problem):
    """
    Many-objective LOTZ: the genome is split into ``n_obj // 2`` blocks and each
    block contributes a leading-ones and a trailing-zeros objective.
    """

    maximization = True

    def __init__(self, n_var: int = 24, n_obj: int = 4) -> None:
        self.n_var = _require_positive(n_var)
        if n_obj < 2 or n_obj % 2 != 0:
            raise ProblemDimensionError("MLOTZ needs an even number of objectives.", n_var=n_var, n_obj=n_obj)
        blocks = n_obj // 2
        if self.n_var % blocks != 0:
            raise ProblemDimensionError(
                f"n_var={n_var} must be divisible by the number of blocks ({blocks}).",
                n_var=n_var,
                n_obj=n_obj,
            )
        self.n_obj = int(n_obj)
        self.block = self.n_var // blocks

    def objectives(self, x: np.ndarray, rng: np.random.Generator) -> np.ndarray:
        bits = _as_bits(x, self.n_var)
        values = []
        for start in range(0, self.n_var, self.block):
            chunk = bits[start : start + self.block]
            values.extend([_leading_ones(chunk), _trailing_zeros(chunk)])
        return np.asarray(values, dtype=float)


class BinaryFeatureSelectionProblem(Problem):
    """
    Feature subset selection with fixed random utilities and costs per bit.
    Maximizes summed utility while minimizing summed cost.
    """

    maximization = (True, False)

    def __init__(self, n_var: int = 50, instance_seed: int = 12345) -> None:
        self.n_var = _require_positive(n_var)
        self.n_obj = 2

        rng = np.random.default_rng(instance_seed)
        self.utility = np.abs(rng.normal(loc=1.0, scale=0.5, size=self.n_var)) + 0.05
        self.cost = rng.uniform(0.2, 1.5, size=self.n_var)

    def objectives(self, x: np.ndarray, rng: np.random.Generator) -> np.ndarray:
        bits = _as_bits(x, self.n_var)
        return np.array([bits @ self.utility, bits @ self.cost], dtype=float)


class BinaryKnapsackProblem(Problem):
    """
    Knapsack variant: minimize the distance between packed weight and the
    capacity, maximize packed value.
    """

    maximization = (False, True)

    def __init__(self, n_var: int = 50, capacity_ratio: float = 0.4, instance_seed: int = 2023) -> None:
        self.n_var = _require_positive(n_var)
        self.n_obj = 2

        rng = np.random.default_rng(instance_seed)
        self.weights = rng.uniform(1.0, 10.0, size=self.n_var)
        self.values = rng.uniform(1.0, 5.0, size=self.n_var)
        self.capacity = float(capacity_ratio) * float(self.weights.sum())

    def objectives(self, x: np.ndarray, rng: np.random.Generator) -> np.ndarray:
        bits = _as_bits(x, self.n_var)
        return np.array([abs(bits @ self.weights - self.capacity), bits @ self.values], dtype=float)


class BinaryQUBOProblem(Problem):
    """
    Random symmetric QUBO instance. Minimizes the energy x.Q.x + b.x and
    maximizes the number of set bits.
    """

    maximization = (False, True)

    def __init__(self, n_var: int = 30, instance_seed: int = 7) -> None:
        self.n_var = _require_positive(n_var)
        self.n_obj = 2

        rng = np.random.default_rng(instance_seed)
        base = rng.normal(scale=0.5, size=(self.n_var, self.n_var))
        sym = 0.5 * (base + base.T)
        diag_boost = np.diag(np.abs(rng.normal(scale=0.2, size=self.n_var)))
        self.Q = sym + diag_boost
        self.bias = rng.normal(scale=0.2, size=self.n_var)

    def objectives(self, x: np.ndarray, rng: np.random.Generator) -> np.ndarray:
        bits = _as_bits(x, self.n_var).astype(float)
        energy = bits @ self.Q @ bits + bits @ self.bias
        return np.array([energy, bits.sum()], dtype=float)


__all__ = [
    "OneMinMax",
    "NoisyOneMinMax",
    "LOTZ",
    "MLOTZ",
    "BinaryFeatureSelectionProblem",
    "BinaryKnapsackProblem",
    "BinaryQUBOProblem",
]
