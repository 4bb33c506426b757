"""
Seedable random streams.

A run owns one master ``numpy.random.Generator``. Work that may leave the
owning thread (parallel evaluation) receives private sub-streams whose seeds
are drawn sequentially from the master, so results do not depend on how the
work is scheduled.
"""

from __future__ import annotations

import numpy as np

DEFAULT_SEED = 1234

_SEED_UPPER = np.iinfo(np.int64).max


def create_random_stream(seed: int | None = DEFAULT_SEED) -> np.random.Generator:
    """Return the master stream for a run (PCG64)."""
    return np.random.default_rng(seed)


def spawn_substreams(stream: np.random.Generator, n: int) -> list[np.random.Generator]:
    """
    Derive ``n`` independent generators from ``stream``.

    Advances the master stream by exactly one draw of ``n`` integers, so the
    master sequence stays reproducible regardless of what the children do.
    """
    if n <= 0:
        return []
    seeds = stream.integers(0, _SEED_UPPER, size=n, dtype=np.int64)
    return [np.random.default_rng(int(s)) for s in seeds]


__all__ = ["DEFAULT_SEED", "create_random_stream", "spawn_substreams"]
