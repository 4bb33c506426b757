from __future__ import annotations

from typing import Literal, Sequence, overload

import numpy as np


@overload
def pareto_filter(F: np.ndarray | None, *, return_indices: Literal[False] = False) -> np.ndarray | None: ...


@overload
def pareto_filter(F: np.ndarray | None, *, return_indices: Literal[True]) -> tuple[np.ndarray, np.ndarray]: ...


def pareto_filter(F: np.ndarray | None, *, return_indices: bool = False) -> np.ndarray | tuple[np.ndarray, np.ndarray] | None:
    """
    Return the non-dominated subset of points (first Pareto front), minimization.

    Args:
        F: Objective values array (n_solutions, n_objectives) or None.
        return_indices: When True, also return indices of the front in F.

    Returns:
        Front array, or (front, indices) when return_indices is True.
    """
    if F is None:
        if return_indices:
            return np.empty((0, 0)), np.array([], dtype=int)
        return None
    F = np.asarray(F)
    if F.size == 0 or F.ndim < 2:
        if return_indices:
            n = int(F.shape[0]) if F.ndim > 0 else 0
            idx = np.arange(n, dtype=int)
            return F, idx
        return F
    from nsga3lab.engine.algorithm.nsgaiii.sorting import fast_non_dominated_sort

    fronts = fast_non_dominated_sort(F)
    idx = np.asarray(fronts[0], dtype=int)
    front = F[idx]
    return (front, idx) if return_indices else front


def check_fronts(F: np.ndarray, fronts: Sequence[Sequence[int]]) -> list[str]:
    """
    Verify that ``fronts`` partitions ``F`` and is dominance-consistent.

    Returns a list of violations; an empty list means the fronts are valid.
    """
    from nsga3lab.engine.algorithm.nsgaiii.sorting import domination_matrix

    F = np.asarray(F, dtype=float)
    problems: list[str] = []
    flat = [int(i) for front in fronts for i in front]
    if sorted(flat) != list(range(F.shape[0])):
        problems.append("fronts do not partition the population")
        return problems

    dom = domination_matrix(F)
    for k, front in enumerate(fronts):
        members = np.asarray(front, dtype=int)
        if dom[np.ix_(members, members)].any():
            problems.append(f"front {k} contains a dominated member")
        for j in range(k):
            earlier = np.asarray(fronts[j], dtype=int)
            if dom[np.ix_(members, earlier)].any():
                problems.append(f"front {k} dominates a member of front {j}")
        if k > 0:
            previous = np.asarray(fronts[k - 1], dtype=int)
            if not dom[np.ix_(previous, members)].any(axis=0).all():
                problems.append(f"front {k} has a member not dominated by front {k - 1}")
    return problems


__all__ = ["pareto_filter", "check_fronts"]
