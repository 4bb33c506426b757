"""Non-dominated sorting for minimization problems.

Maximization objectives are negated before they reach this module.
"""

from __future__ import annotations

import numpy as np

__all__ = [
    "dominates",
    "domination_matrix",
    "fast_non_dominated_sort",
    "non_dominated_ranks",
]


def dominates(a: np.ndarray, b: np.ndarray) -> bool:
    """Return True when ``a`` is no worse than ``b`` everywhere and better somewhere."""
    a = np.asarray(a)
    b = np.asarray(b)
    return bool(np.all(a <= b) and np.any(a < b))


def domination_matrix(F: np.ndarray) -> np.ndarray:
    """Boolean matrix ``D`` with ``D[p, q]`` True iff ``F[p]`` dominates ``F[q]``."""
    less_equal = F[:, None, :] <= F[None, :, :]
    strictly_less = F[:, None, :] < F[None, :, :]
    return np.logical_and(
        np.all(less_equal, axis=2),
        np.any(strictly_less, axis=2),
    )


def fast_non_dominated_sort(F: np.ndarray) -> list[list[int]]:
    """
    Classic O(M N^2) fast non-dominated sort.

    Args:
        F: objective matrix (N, M).

    Returns:
        Fronts as lists of row indices, best front first. Indices inside a
        front keep their input order.
    """
    F = np.asarray(F, dtype=float)
    N = F.shape[0]
    if N == 0:
        return []

    dom_matrix = domination_matrix(F)
    dominated_count = dom_matrix.sum(axis=0).astype(np.int64)
    fronts: list[list[int]] = []

    current = np.flatnonzero(dominated_count == 0)
    while current.size > 0:
        fronts.append(current.tolist())
        # Peel the front: everyone it dominates loses one dominator.
        dominated_count -= dom_matrix[current].sum(axis=0)
        dominated_count[current] = -1
        current = np.flatnonzero(dominated_count == 0)

    return fronts


def non_dominated_ranks(F: np.ndarray) -> np.ndarray:
    """Front rank of every row of ``F`` (0 = non-dominated)."""
    F = np.asarray(F, dtype=float)
    rank = np.empty(F.shape[0], dtype=int)
    for level, front in enumerate(fast_non_dominated_sort(F)):
        rank[front] = level
    return rank
