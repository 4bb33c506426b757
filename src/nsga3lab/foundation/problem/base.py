"""
Base class for binary optimization problems.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from nsga3lab.foundation.exceptions import ProblemDimensionError


class Problem:
    """Base class for fixed-length binary problems.

    **Required:** set ``n_var`` (genome length) and ``n_obj`` in ``__init__``
    and override :meth:`objectives`.
    **Optional:** set ``maximization`` to ``True`` (all objectives) or to one
    bool per objective. Objectives are minimized by default.

    Example::

        import numpy as np
        from nsga3lab import NSGAIII, NSGAIIIConfig, Problem

        class CountBits(Problem):
            def __init__(self):
                self.n_var = 16
                self.n_obj = 2
                self.maximization = (True, False)

            def objectives(self, x, rng):
                ones = int(x.sum())
                return np.array([ones, (x[:8] == 0).sum()])

        cfg = NSGAIIIConfig.default(n_obj=2, pop_size=20)
        result = NSGAIII(cfg).run(CountBits())
    """

    encoding: str = "binary"
    """Variable encoding. Only ``"binary"`` is supported."""

    maximization: bool | Sequence[bool] = False
    """Objective direction: one flag for every objective or one per objective."""

    @property
    def length(self) -> int:
        """Genome length, alias for :attr:`n_var`."""
        return int(self.n_var)

    def objectives(self, x: np.ndarray, rng: np.random.Generator) -> np.ndarray:
        """Compute the objective vector of one candidate.

        Override this method in your subclass.

        Args:
            x: Bit vector of shape ``(n_var,)`` with values 0/1.
            rng: Private random stream of this evaluation, for stochastic problems.

        Returns:
            Sequence of ``n_obj`` floats in the problem's own sense (see
            :attr:`maximization`).
        """
        raise NotImplementedError(f"{type(self).__name__} must implement objectives(self, x, rng).")

    def evaluate(self, x: np.ndarray, rng: np.random.Generator) -> np.ndarray:
        """Framework evaluation entry point. Override :meth:`objectives` instead."""
        return np.asarray(self.objectives(np.asarray(x), rng), dtype=float).reshape(-1)


def objective_signs(problem: object) -> np.ndarray:
    """
    Return +1 for minimized and -1 for maximized objectives.

    Multiplying raw objective vectors by the signs converts them to the
    minimization form used internally (and back).
    """
    n_obj = int(getattr(problem, "n_obj"))
    flags = getattr(problem, "maximization", False)
    if isinstance(flags, (bool, np.bool_)):
        flags = [bool(flags)] * n_obj
    flags = [bool(f) for f in flags]
    if len(flags) != n_obj:
        raise ProblemDimensionError(
            f"maximization has {len(flags)} entries but the problem declares {n_obj} objectives.",
            n_obj=n_obj,
        )
    return np.where(np.asarray(flags, dtype=bool), -1.0, 1.0)


def validate_problem(problem: object) -> tuple[int, int]:
    """Check the problem adapter contract and return ``(n_var, n_obj)``."""
    for attr in ("n_var", "n_obj", "evaluate"):
        if not hasattr(problem, attr):
            raise ProblemDimensionError(f"Problem is missing required attribute '{attr}'.")
    encoding = getattr(problem, "encoding", "binary")
    if encoding != "binary":
        raise ProblemDimensionError(f"NSGA-III supports binary problems only, got encoding '{encoding}'.")
    n_var = int(problem.n_var)
    n_obj = int(problem.n_obj)
    if n_var <= 0:
        raise ProblemDimensionError("Genome length n_var must be positive.", n_var=n_var, n_obj=n_obj)
    if n_obj < 2:
        raise ProblemDimensionError(
            "NSGA-III requires at least two objectives.", n_var=n_var, n_obj=n_obj
        )
    objective_signs(problem)
    return n_var, n_obj


__all__ = ["Problem", "objective_signs", "validate_problem"]
