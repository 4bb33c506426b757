"""Variation operators for fixed-length bit strings.

Crossover operators take mating pairs shaped ``(n_pairs, 2, n_var)`` and
return children in the same shape; parents are never modified.
"""

from __future__ import annotations

import numpy as np


def random_binary_population(pop_size: int, n_var: int, rng: np.random.Generator) -> np.ndarray:
    """
    Generate a batch of random bitstrings.
    """
    if pop_size <= 0 or n_var <= 0:
        raise ValueError("pop_size and n_var must be positive integers.")
    return rng.integers(0, 2, size=(pop_size, n_var), dtype=np.int8)


def random_mating_pairs(pop_size: int, n_pairs: int, rng: np.random.Generator) -> np.ndarray:
    """
    Uniform parent selection: ``n_pairs`` index pairs drawn with replacement.
    The two parents of a pair differ whenever the population has more than one member.
    """
    first = rng.integers(0, pop_size, size=n_pairs)
    if pop_size < 2:
        return np.stack([first, first], axis=1)
    # Shift by 1..pop_size-1 so the partner is never the same individual.
    second = (first + rng.integers(1, pop_size, size=n_pairs)) % pop_size
    return np.stack([first, second], axis=1)


def _active_pairs(n_pairs: int, prob: float, rng: np.random.Generator) -> np.ndarray:
    prob = float(np.clip(prob, 0.0, 1.0))
    return np.flatnonzero(rng.random(n_pairs) < prob) if prob > 0.0 else np.array([], dtype=int)


def _swap(pairs: np.ndarray, rows: np.ndarray, mask: np.ndarray) -> np.ndarray:
    """Exchange the genes selected by ``mask`` (n_rows, n_var) between both parents."""
    children = pairs.copy()
    if rows.size == 0:
        return children
    p1 = pairs[rows, 0]
    p2 = pairs[rows, 1]
    children[rows, 0] = np.where(mask, p2, p1)
    children[rows, 1] = np.where(mask, p1, p2)
    return children


def one_point_crossover(pairs: np.ndarray, prob: float, rng: np.random.Generator) -> np.ndarray:
    """
    Classic one-point crossover: the tails after a random cut are exchanged.
    """
    n_pairs, _, D = pairs.shape
    if n_pairs == 0 or D < 2:
        return pairs.copy()
    rows = _active_pairs(n_pairs, prob, rng)
    cuts = rng.integers(1, D, size=rows.size)
    mask = np.arange(D)[None, :] >= cuts[:, None]
    return _swap(pairs, rows, mask)


def two_point_crossover(pairs: np.ndarray, prob: float, rng: np.random.Generator) -> np.ndarray:
    """
    Two-point crossover: the segment between two cuts is exchanged.
    """
    n_pairs, _, D = pairs.shape
    if n_pairs == 0 or D < 2:
        return pairs.copy()
    rows = _active_pairs(n_pairs, prob, rng)
    cuts = np.sort(rng.integers(0, D + 1, size=(rows.size, 2)), axis=1)
    genes = np.arange(D)[None, :]
    mask = (genes >= cuts[:, :1]) & (genes < cuts[:, 1:])
    return _swap(pairs, rows, mask)


def uniform_crossover(pairs: np.ndarray, prob: float, rng: np.random.Generator) -> np.ndarray:
    """
    Uniform crossover with independent swapping per gene.
    """
    n_pairs, _, D = pairs.shape
    if n_pairs == 0:
        return pairs.copy()
    rows = _active_pairs(n_pairs, prob, rng)
    mask = rng.random((rows.size, D)) < 0.5
    return _swap(pairs, rows, mask)


def hux_crossover(pairs: np.ndarray, prob: float, rng: np.random.Generator) -> np.ndarray:
    """
    Half-uniform crossover (HUX): swaps half of the differing bits of each pair.
    """
    n_pairs, _, D = pairs.shape
    if n_pairs == 0:
        return pairs.copy()
    rows = _active_pairs(n_pairs, prob, rng)
    mask = np.zeros((rows.size, D), dtype=bool)
    for k, row in enumerate(rows):
        diff_idx = np.flatnonzero(pairs[row, 0] != pairs[row, 1])
        if diff_idx.size == 0:
            continue
        chosen = rng.choice(diff_idx, size=max(1, diff_idx.size // 2), replace=False)
        mask[k, chosen] = True
    return _swap(pairs, rows, mask)


def bit_flip_mutation(X: np.ndarray, prob: float, rng: np.random.Generator) -> np.ndarray:
    """
    Flip each bit independently with probability ``prob``; returns a new array.
    """
    out = X.copy()
    if out.size == 0:
        return out
    prob = float(np.clip(prob, 0.0, 1.0))
    if prob <= 0.0:
        return out
    mask = rng.random(out.shape) < prob
    out[mask] = 1 - out[mask]
    return out


__all__ = [
    "random_binary_population",
    "random_mating_pairs",
    "one_point_crossover",
    "two_point_crossover",
    "uniform_crossover",
    "hux_crossover",
    "bit_flip_mutation",
]
