from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Sequence

import numpy as np

from nsga3lab.foundation.exceptions import EvaluationFailure, ProblemDimensionError
from nsga3lab.foundation.random_stream import spawn_substreams

if TYPE_CHECKING:
    from . import EvaluationBackend, EvaluationResult

_logger = logging.getLogger(__name__)


def evaluate_candidate(problem: Any, x: np.ndarray, rng: np.random.Generator) -> np.ndarray:
    """
    Evaluate one candidate and validate the objective vector.

    Raises:
        EvaluationFailure: the problem raised or returned non-finite values.
        ProblemDimensionError: the objective vector has the wrong length.
    """
    try:
        f = np.asarray(problem.evaluate(x, rng), dtype=float).reshape(-1)
    except Exception as exc:
        raise EvaluationFailure(f"evaluate() raised {type(exc).__name__}: {exc}", candidate=x) from exc
    n_obj = int(problem.n_obj)
    if f.shape[0] != n_obj:
        raise ProblemDimensionError(
            f"Problem returned {f.shape[0]} objectives, expected {n_obj}.",
            n_var=int(problem.n_var),
            n_obj=n_obj,
        )
    if not np.all(np.isfinite(f)):
        raise EvaluationFailure(f"evaluate() returned non-finite objectives {f.tolist()}", candidate=x)
    return f


def evaluate_population(
    problem: Any,
    X: np.ndarray,
    streams: Sequence[np.random.Generator],
) -> "EvaluationResult":
    """
    Evaluate every row of ``X`` with its own stream.
    Failures are recorded per row instead of aborting the batch.
    """
    from . import EvaluationResult

    n = X.shape[0]
    if len(streams) != n:
        raise ValueError(f"Expected {n} random streams, got {len(streams)}.")
    F = np.full((n, int(problem.n_obj)), np.nan, dtype=float)
    failed = np.zeros(n, dtype=bool)
    errors: dict[int, str] = {}
    for i in range(n):
        try:
            F[i] = evaluate_candidate(problem, X[i], streams[i])
        except EvaluationFailure as exc:
            failed[i] = True
            errors[i] = exc.message
    return EvaluationResult(F=F, failed=failed, errors=errors)


@dataclass
class EvaluatedBatch:
    """Surviving candidates of a batch after the retry round."""

    X: np.ndarray
    F: np.ndarray
    n_eval: int
    n_failed: int
    n_dropped: int


def evaluate_with_retry(
    X: np.ndarray,
    problem: Any,
    backend: "EvaluationBackend",
    rng: np.random.Generator,
    regenerate: Callable[[int], np.ndarray],
) -> EvaluatedBatch:
    """
    Evaluate a batch, regenerate failed candidates once, drop repeat failures.

    ``regenerate(k)`` must return ``k`` fresh candidates; it is expected to
    draw from ``rng``. Each evaluation receives a private sub-stream spawned
    from ``rng`` so the outcome does not depend on the backend.
    """
    result = backend.evaluate(X, problem, spawn_substreams(rng, X.shape[0]))
    n_eval = int(X.shape[0])
    failed_idx = np.flatnonzero(result.failed)
    if failed_idx.size == 0:
        return EvaluatedBatch(X=X, F=result.F, n_eval=n_eval, n_failed=0, n_dropped=0)

    for i in failed_idx:
        _logger.warning("Discarding candidate %d: %s; regenerating once.", i, result.errors.get(int(i), "failed"))

    X = X.copy()
    F = result.F.copy()
    X_retry = np.asarray(regenerate(failed_idx.size), dtype=X.dtype)
    retry = backend.evaluate(X_retry, problem, spawn_substreams(rng, failed_idx.size))
    n_eval += failed_idx.size
    X[failed_idx] = X_retry
    F[failed_idx] = retry.F

    keep = np.ones(X.shape[0], dtype=bool)
    dropped = failed_idx[retry.failed]
    keep[dropped] = False
    for j, i in enumerate(failed_idx):
        if retry.failed[j]:
            _logger.warning(
                "Dropping candidate %d after a second failure: %s", i, retry.errors.get(j, "failed")
            )
    return EvaluatedBatch(
        X=X[keep],
        F=F[keep],
        n_eval=n_eval,
        n_failed=int(failed_idx.size + retry.n_failed),
        n_dropped=int(dropped.size),
    )


__all__ = ["evaluate_candidate", "evaluate_population", "EvaluatedBatch", "evaluate_with_retry"]
