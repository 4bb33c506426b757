"""
Reference points on the unit simplex for reference-point based survival.

Points follow the Das & Dennis (1998) lattice. For many objectives the
single-layer lattice either explodes in size or puts every point on the
boundary, so a second, inner layer shrunk towards the centroid can be added
(Deb & Jain 2014, Section V).
"""

from __future__ import annotations

import logging
import os
from math import comb
from typing import Optional

import numpy as np

from nsga3lab.foundation.exceptions import ConfigurationError

_logger = logging.getLogger(__name__)

TWO_LAYER_THRESHOLD = 5

# (outer, inner) divisions from Deb & Jain's experiments, keyed by objective count.
_PAPER_DIVISIONS: dict[int, tuple[int, int]] = {
    2: (12, 0),
    3: (12, 0),
    5: (6, 0),
    8: (3, 2),
    10: (3, 2),
    15: (2, 1),
}


def count_lattice_points(n_obj: int, divisions: int) -> int:
    """Number of Das-Dennis points: C(M + p - 1, M - 1)."""
    _validate(n_obj, divisions)
    return comb(divisions + n_obj - 1, n_obj - 1)


def das_dennis(n_obj: int, divisions: int) -> np.ndarray:
    """
    All points whose coordinates are multiples of ``1/divisions`` and sum to 1.

    Rows come out in lexicographic order of the integer lattice coordinates.
    """
    _validate(n_obj, divisions)
    coords: list[tuple[int, ...]] = []

    def rec(remaining: int, depth: int, current: list[int]) -> None:
        if depth == n_obj - 1:
            current.append(remaining)
            coords.append(tuple(current))
            current.pop()
            return
        for value in range(remaining + 1):
            current.append(value)
            rec(remaining - value, depth + 1, current)
            current.pop()

    rec(divisions, 0, [])
    return np.asarray(coords, dtype=float) / divisions


def reference_points(
    n_obj: int,
    divisions: int,
    inner_divisions: Optional[int] = None,
) -> np.ndarray:
    """
    Build the reference set, optionally with an inner layer.

    The inner layer is a lattice with ``inner_divisions`` mapped to
    ``0.5 * w + 0.5 / M``, i.e. shrunk by half towards the simplex centroid.
    """
    outer = das_dennis(n_obj, divisions)
    if not inner_divisions:
        return outer
    if inner_divisions < 1:
        raise ConfigurationError(
            f"inner_divisions must be >= 1 when given, got {inner_divisions}.",
            details={"inner_divisions": inner_divisions},
        )
    inner = das_dennis(n_obj, inner_divisions) * 0.5 + 0.5 / n_obj
    return np.vstack([outer, inner])


def default_divisions(n_obj: int) -> tuple[int, int]:
    """
    Pick (outer, inner) divisions for ``n_obj`` objectives.

    Values from the literature are used where available; otherwise one layer
    up to ``TWO_LAYER_THRESHOLD`` objectives and (3, 2) / (2, 1) above.
    """
    if n_obj < 2:
        raise ConfigurationError(f"At least two objectives are required, got {n_obj}.")
    if n_obj in _PAPER_DIVISIONS:
        return _PAPER_DIVISIONS[n_obj]
    if n_obj <= TWO_LAYER_THRESHOLD:
        return (6, 0) if n_obj > 3 else (12, 0)
    return (3, 2) if n_obj <= 10 else (2, 1)


def resolve_reference_points(
    n_obj: int,
    *,
    divisions: Optional[int] = None,
    inner_divisions: Optional[int] = None,
    path: Optional[str] = None,
) -> np.ndarray:
    """
    Generate the reference set, reusing the file at ``path`` when it matches.

    A cached file is reused only if it has ``n_obj`` columns and, when
    ``divisions`` is given explicitly, the lattice size those divisions imply.
    Otherwise the set is regenerated and the file overwritten.
    """
    explicit = divisions is not None
    if divisions is None:
        divisions, default_inner = default_divisions(n_obj)
        if inner_divisions is None:
            inner_divisions = default_inner
    if path and os.path.exists(path):
        cached = np.atleast_2d(np.loadtxt(path, delimiter=",")).astype(float, copy=False)
        expected = count_lattice_points(n_obj, divisions)
        if inner_divisions:
            expected += count_lattice_points(n_obj, inner_divisions)
        if cached.shape[1] == n_obj and (not explicit or cached.shape[0] == expected):
            _assert_valid_points(cached, n_obj, path)
            return cached
        _logger.info(
            "Reference point file '%s' has shape %s; regenerating %d points for %d objectives.",
            path,
            cached.shape,
            expected,
            n_obj,
        )
    points = reference_points(n_obj, divisions, inner_divisions)
    if path:
        save_reference_points(path, points)
    return points


def load_reference_points(path: str, n_obj: int) -> np.ndarray:
    arr = np.atleast_2d(np.loadtxt(path, delimiter=",")).astype(float, copy=False)
    _assert_valid_points(arr, n_obj, path)
    return arr


def save_reference_points(path: str, points: np.ndarray) -> None:
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    np.savetxt(path, points, delimiter=",")


def _validate(n_obj: int, divisions: int) -> None:
    if n_obj < 2:
        raise ConfigurationError(
            f"Reference points need at least two objectives, got {n_obj}.",
            details={"n_obj": n_obj},
        )
    if divisions < 1:
        raise ConfigurationError(
            f"divisions must be >= 1, got {divisions}.",
            suggestion="Use divisions=12 for 2-3 objectives or see default_divisions().",
            details={"divisions": divisions},
        )


def _assert_valid_points(points: np.ndarray, n_obj: int, path: str) -> None:
    if points.ndim != 2 or points.shape[1] != n_obj:
        raise ConfigurationError(
            f"Reference point file '{path}' must have {n_obj} columns, got shape {points.shape}."
        )
    if np.any(points < 0.0):
        raise ConfigurationError(f"Reference points in '{path}' must be non-negative.")
    # Allow very small numerical drift
    if np.any(np.abs(points.sum(axis=1) - 1.0) > 1e-6):
        raise ConfigurationError(f"Each reference point in '{path}' must sum to 1.")


__all__ = [
    "TWO_LAYER_THRESHOLD",
    "count_lattice_points",
    "das_dennis",
    "reference_points",
    "default_divisions",
    "resolve_reference_points",
    "load_reference_points",
    "save_reference_points",
]
