"""Adaptive normalization and reference point association.

Objectives are translated by the ideal point, scaled by the intercepts of
the hyperplane through the extreme points, and every individual is then
attached to the reference line closest to it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from nsga3lab.foundation.exceptions import DegenerateHyperplane

_logger = logging.getLogger(__name__)

__all__ = [
    "ASF_EPSILON",
    "Normalization",
    "ideal_point",
    "find_extreme_points",
    "compute_intercepts",
    "normalize",
    "associate",
    "normalize_and_associate",
]

ASF_EPSILON = 1e-6
_INTERCEPT_TOL = 1e-10


@dataclass(frozen=True)
class Normalization:
    """Per-generation normalization summary for the individuals it was built from."""

    ideal: np.ndarray
    extremes: np.ndarray
    intercepts: np.ndarray
    degenerate: bool
    normalized: np.ndarray
    niche: np.ndarray
    distance: np.ndarray


def ideal_point(F: np.ndarray) -> np.ndarray:
    """Per-objective minimum."""
    return np.asarray(F, dtype=float).min(axis=0)


def find_extreme_points(shifted: np.ndarray) -> np.ndarray:
    """Indices of the individual minimizing the achievement scalarizing function per axis.

    Parameters
    ----------
    shifted : np.ndarray
        Objective values translated by the ideal point, shape (n, n_obj).

    Returns
    -------
    np.ndarray
        One row index per objective.
    """
    if shifted.size == 0:
        return np.array([], dtype=int)
    n_obj = shifted.shape[1]
    extremes = np.empty(n_obj, dtype=int)
    for i in range(n_obj):
        weights = np.full(n_obj, ASF_EPSILON)
        weights[i] = 1.0
        asf = (shifted / weights).max(axis=1)
        extremes[i] = int(np.argmin(asf))
    return extremes


def _solve_intercepts(extreme_pts: np.ndarray) -> np.ndarray:
    n_obj = extreme_pts.shape[1]
    try:
        plane = np.linalg.solve(extreme_pts, np.ones(n_obj))
    except np.linalg.LinAlgError as exc:
        raise DegenerateHyperplane("Extreme points are linearly dependent.") from exc
    with np.errstate(divide="ignore"):
        intercepts = 1.0 / plane
    if not np.all(np.isfinite(intercepts)) or np.any(intercepts <= _INTERCEPT_TOL):
        raise DegenerateHyperplane("Hyperplane intercepts are not all positive.", intercepts=intercepts)
    return intercepts


def compute_intercepts(shifted: np.ndarray, extreme_idx: np.ndarray) -> tuple[np.ndarray, bool]:
    """Axis intercepts of the hyperplane through the extreme points.

    Falls back to the per-objective maxima of ``shifted`` when the hyperplane
    is degenerate. Zero-width objectives get an intercept of 1.

    Returns
    -------
    tuple
        (intercepts, degenerate)
    """
    n_obj = shifted.shape[1]
    if extreme_idx.size == 0:
        return np.ones(n_obj, dtype=float), False
    degenerate = False
    try:
        intercepts = _solve_intercepts(shifted[extreme_idx])
    except DegenerateHyperplane as exc:
        _logger.warning("%s Falling back to per-objective maxima.", exc.message)
        intercepts = shifted.max(axis=0)
        degenerate = True
    intercepts = np.where(intercepts > _INTERCEPT_TOL, intercepts, 1.0)
    return intercepts, degenerate


def normalize(F: np.ndarray, ideal: np.ndarray, intercepts: np.ndarray) -> np.ndarray:
    """(f - z*) / a for every row."""
    return (np.asarray(F, dtype=float) - ideal) / intercepts


def associate(
    normalized_F: np.ndarray,
    ref_points: np.ndarray,
) -> tuple[np.ndarray, np.ndarray]:
    """Attach each individual to the closest reference line through the origin.

    Parameters
    ----------
    normalized_F : np.ndarray
        Normalized objective values, shape (n, n_obj).
    ref_points : np.ndarray
        Reference points, shape (n_ref, n_obj). They need not be unit length.

    Returns
    -------
    tuple
        (niche, distance): index of the closest reference point and the
        perpendicular distance to its line.
    """
    directions = ref_points / np.linalg.norm(ref_points, axis=1, keepdims=True)
    projection = normalized_F @ directions.T
    # Explicit residuals: |f|^2 - (f.u)^2 cancels badly for points on a line.
    residual = normalized_F[:, None, :] - projection[..., None] * directions[None, :, :]
    dist = np.linalg.norm(residual, axis=2)
    niche = np.argmin(dist, axis=1)
    distance = dist[np.arange(dist.shape[0]), niche]
    return niche, distance


def normalize_and_associate(F: np.ndarray, ref_points: np.ndarray) -> Normalization:
    """Normalize ``F`` using only its own rows and associate them with ``ref_points``."""
    F = np.asarray(F, dtype=float)
    ideal = ideal_point(F)
    shifted = F - ideal
    extremes = find_extreme_points(shifted)
    intercepts, degenerate = compute_intercepts(shifted, extremes)
    normalized = shifted / intercepts
    niche, distance = associate(normalized, ref_points)
    return Normalization(
        ideal=ideal,
        extremes=extremes,
        intercepts=intercepts,
        degenerate=degenerate,
        normalized=normalized,
        niche=niche,
        distance=distance,
    )
