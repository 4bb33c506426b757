"""NSGA-III survival: front-by-front filling plus reference point niching."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import numpy as np

from nsga3lab.engine.algorithm.components.state import RunPhase
from .normalization import Normalization, normalize_and_associate
from .sorting import fast_non_dominated_sort

__all__ = [
    "SurvivalOutcome",
    "niche_counts",
    "niching",
    "nsgaiii_survival",
]


@dataclass(frozen=True)
class SurvivalOutcome:
    """Survivors (indices into the merged population) and the data used to pick them."""

    survivors: np.ndarray
    fronts: list[list[int]]
    n_admitted_fronts: int
    normalization: Normalization | None
    candidates: np.ndarray


def niche_counts(niche: np.ndarray, n_ref: int) -> np.ndarray:
    """Number of already admitted individuals attached to each reference point."""
    return np.bincount(np.asarray(niche, dtype=int), minlength=n_ref).astype(int)


def niching(
    n_remaining: int,
    counts: np.ndarray,
    niche: np.ndarray,
    distance: np.ndarray,
    rng: np.random.Generator,
) -> np.ndarray:
    """Pick ``n_remaining`` members of the overflow front by niche count.

    Parameters
    ----------
    n_remaining : int
        Number of slots left in the next population.
    counts : np.ndarray
        Niche count per reference point from the admitted fronts. Updated in place.
    niche : np.ndarray
        Reference point of every overflow-front member.
    distance : np.ndarray
        Perpendicular distance of every overflow-front member to its line.
    rng : np.random.Generator
        Shared stream for the random tie-breaks.

    Returns
    -------
    np.ndarray
        Positions (into ``niche``) of the chosen members, in selection order.
    """
    n_candidates = niche.shape[0]
    n_remaining = min(int(n_remaining), n_candidates)
    available = np.ones(n_candidates, dtype=bool)
    # Reference points with no member in this front are never considered.
    active = np.zeros(counts.shape[0], dtype=bool)
    active[np.unique(niche)] = True
    selected: list[int] = []

    while len(selected) < n_remaining:
        refs = np.flatnonzero(active)
        ref_counts = counts[refs]
        tied = refs[ref_counts == ref_counts.min()]
        ref = int(tied[0]) if tied.size == 1 else int(rng.choice(tied))

        members = np.flatnonzero(available & (niche == ref))
        if members.size == 0:
            active[ref] = False
            continue
        if counts[ref] == 0:
            pick = int(members[np.argmin(distance[members])])
        else:
            pick = int(rng.choice(members))

        available[pick] = False
        selected.append(pick)
        counts[ref] += 1
        if not np.any(available & (niche == ref)):
            active[ref] = False

    return np.asarray(selected, dtype=int)


def nsgaiii_survival(
    F: np.ndarray,
    pop_size: int,
    ref_points: np.ndarray,
    rng: np.random.Generator,
    on_phase: Callable[[RunPhase], None] | None = None,
) -> SurvivalOutcome:
    """Select the next population from merged parents and offspring.

    Parameters
    ----------
    F : np.ndarray
        Objective values (minimization form) of the merged population.
    pop_size : int
        Target size N.
    ref_points : np.ndarray
        Reference points on the unit simplex.
    rng : np.random.Generator
        Shared stream, used only for niching tie-breaks.
    on_phase : callable, optional
        Notified when sorting, normalization and selection start.

    Returns
    -------
    SurvivalOutcome
        Exactly ``min(pop_size, len(F))`` survivor indices.
    """
    notify = on_phase or (lambda _phase: None)
    F = np.asarray(F, dtype=float)
    notify(RunPhase.SORTING)
    fronts = fast_non_dominated_sort(F)
    target = min(int(pop_size), F.shape[0])

    admitted: list[int] = []
    overflow: list[int] | None = None
    n_admitted_fronts = 0
    for front in fronts:
        if len(admitted) + len(front) <= target:
            admitted.extend(front)
            n_admitted_fronts += 1
            if len(admitted) == target:
                break
        else:
            overflow = front
            break

    # Normalization only ever looks at the admitted fronts plus the overflow front.
    candidates = np.asarray(admitted + (overflow or []), dtype=int)
    if candidates.size == 0:
        return SurvivalOutcome(np.array([], dtype=int), fronts, 0, None, candidates)
    notify(RunPhase.NORMALIZING)
    norm = normalize_and_associate(F[candidates], ref_points)
    notify(RunPhase.SELECTING)

    if overflow is None:
        return SurvivalOutcome(candidates, fronts, n_admitted_fronts, norm, candidates)

    n_admitted = len(admitted)
    counts = niche_counts(norm.niche[:n_admitted], ref_points.shape[0])
    chosen = niching(
        target - n_admitted,
        counts,
        norm.niche[n_admitted:],
        norm.distance[n_admitted:],
        rng,
    )
    overflow_arr = np.asarray(overflow, dtype=int)
    survivors = np.concatenate([np.asarray(admitted, dtype=int), overflow_arr[chosen]])
    return SurvivalOutcome(survivors, fronts, n_admitted_fronts, norm, candidates)
