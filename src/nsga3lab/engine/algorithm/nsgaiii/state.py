"""NSGA-III state container and result building."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from nsga3lab.engine.algorithm.components.state import AlgorithmState
from .operators import VariationOperators
from .sorting import fast_non_dominated_sort


@dataclass(frozen=True)
class Individual:
    """Evaluated candidate as reported to callers; objectives in the problem's own sense."""

    genome: tuple[int, ...]
    objectives: tuple[float, ...]


@dataclass
class NSGAIIIState(AlgorithmState):
    """State container for NSGA-III with ask/tell interface.

    Additional Attributes
    ---------------------
    ref_points : np.ndarray
        Reference points on the unit simplex; the row index is the point id.
    signs : np.ndarray
        +1/-1 per objective; raw objectives times signs is minimization form.
    operators : VariationOperators
        Parent selection, crossover and mutation.
    degenerate_hyperplanes : int
        Generations that fell back to per-objective maxima for normalization.
    """

    ref_points: np.ndarray = field(default_factory=lambda: np.empty((0, 0)))
    signs: np.ndarray = field(default_factory=lambda: np.empty(0))
    operators: VariationOperators | None = None
    problem: Any = None
    degenerate_hyperplanes: int = 0
    started_at: float = field(default_factory=time.perf_counter)

    def raw_objectives(self, F: np.ndarray | None = None) -> np.ndarray:
        """Convert minimization-form objectives back to the problem's sense."""
        return (self.F if F is None else F) * self.signs

    def front_indices(self) -> np.ndarray:
        fronts = fast_non_dominated_sort(self.F)
        return np.asarray(fronts[0] if fronts else [], dtype=int)

    def best_objectives(self) -> np.ndarray:
        """Front 0 of the current population, problem's sense."""
        return self.raw_objectives(self.F[self.front_indices()])


def build_nsgaiii_result(state: NSGAIIIState) -> dict[str, Any]:
    """Build NSGA-III result dictionary from state.

    Parameters
    ----------
    state : NSGAIIIState
        Current algorithm state.

    Returns
    -------
    dict
        X and F hold front 0 of the final population (F in the problem's own
        sense); the whole population, reference points and run counters are
        included as well.
    """
    front = state.front_indices()
    result_X = state.X[front].copy()
    result_F = state.raw_objectives(state.F[front])
    individuals = [
        Individual(tuple(int(b) for b in x), tuple(float(v) for v in f)) for x, f in zip(result_X, result_F)
    ]
    return {
        "X": result_X,
        "F": result_F,
        "individuals": individuals,
        "population": {"X": state.X.copy(), "F": state.raw_objectives()},
        "reference_points": state.ref_points.copy(),
        "generation": state.generation,
        "n_eval": state.n_eval,
        "n_failed": state.n_failed,
        "cancelled": state.cancelled,
        "degenerate_hyperplanes": state.degenerate_hyperplanes,
        "execution_time": time.perf_counter() - state.started_at,
    }


__all__ = ["Individual", "NSGAIIIState", "build_nsgaiii_result"]
