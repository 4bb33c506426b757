from __future__ import annotations

import math
import os
from concurrent.futures import Executor, ProcessPoolExecutor, ThreadPoolExecutor, as_completed
from typing import Any, Optional, Sequence

import numpy as np

from nsga3lab.foundation.eval.population import evaluate_population
from nsga3lab.foundation.exceptions import ConfigurationError
from . import EvaluationBackend, EvaluationResult


def _eval_chunk(problem, X_chunk: np.ndarray, streams: Sequence[np.random.Generator]) -> EvaluationResult:
    """Worker helper to evaluate a chunk; kept at module level for pickling."""
    return evaluate_population(problem, X_chunk, streams)


def _merge_chunks(n: int, n_obj: int, parts: list[tuple[int, EvaluationResult]]) -> EvaluationResult:
    F = np.full((n, n_obj), np.nan, dtype=float)
    failed = np.zeros(n, dtype=bool)
    errors: dict[int, str] = {}
    for start, part in sorted(parts, key=lambda p: p[0]):
        size = part.F.shape[0]
        F[start : start + size] = part.F
        failed[start : start + size] = part.failed
        errors.update({start + i: msg for i, msg in part.errors.items()})
    return EvaluationResult(F=F, failed=failed, errors=errors)


class SerialEvalBackend(EvaluationBackend):
    """Synchronous in-process evaluation (default)."""

    def evaluate(self, X: np.ndarray, problem: Any, streams: Sequence[np.random.Generator]) -> EvaluationResult:
        return evaluate_population(problem, X, streams)


class _PooledEvalBackend(EvaluationBackend):
    def __init__(self, n_workers: Optional[int] = None, chunk_size: Optional[int] = None):
        self.n_workers = max(1, n_workers or os.cpu_count() or 1)
        self.chunk_size = chunk_size

    def _executor(self) -> Executor:
        raise NotImplementedError

    def evaluate(self, X: np.ndarray, problem: Any, streams: Sequence[np.random.Generator]) -> EvaluationResult:
        if self.n_workers <= 1 or X.shape[0] <= 1:
            return SerialEvalBackend().evaluate(X, problem, streams)

        n = X.shape[0]
        if self.chunk_size is not None and self.chunk_size > 0:
            chunk_size = self.chunk_size
        else:
            chunk_size = max(1, math.ceil(n / self.n_workers))
        slices = [(i, min(i + chunk_size, n)) for i in range(0, n, chunk_size)]

        parts: list[tuple[int, EvaluationResult]] = []
        with self._executor() as ex:
            future_map = {
                ex.submit(_eval_chunk, problem, X[start:end], list(streams[start:end])): start
                for start, end in slices
            }
            for fut in as_completed(future_map):
                parts.append((future_map[fut], fut.result()))

        # Restore original order
        return _merge_chunks(n, int(problem.n_obj), parts)


class ThreadPoolEvalBackend(_PooledEvalBackend):
    """
    Parallel evaluation on worker threads.

    Notes:
        - The problem's evaluate() must be thread-safe.
        - Worthwhile when evaluation releases the GIL (numpy, I/O, subprocesses).
    """

    def _executor(self) -> Executor:
        return ThreadPoolExecutor(max_workers=self.n_workers)


class MultiprocessingEvalBackend(_PooledEvalBackend):
    """
    Parallel evaluation using multiprocessing.

    Notes:
        - Requires the problem instance to be picklable.
        - Best suited for expensive evaluations; overhead dominates for tiny problems.
    """

    def _executor(self) -> Executor:
        return ProcessPoolExecutor(max_workers=self.n_workers)


def resolve_eval_backend(
    name: str | None,
    *,
    n_workers: Optional[int] = None,
    chunk_size: Optional[int] = None,
) -> EvaluationBackend:
    key = (name or "serial").lower()
    if key in {"threads", "thread", "threading"}:
        return ThreadPoolEvalBackend(n_workers=n_workers, chunk_size=chunk_size)
    if key in {"processes", "multiprocessing"}:
        return MultiprocessingEvalBackend(n_workers=n_workers, chunk_size=chunk_size)
    if key != "serial":
        raise ConfigurationError(f"Unknown evaluation backend '{name}'.")
    return SerialEvalBackend()


__all__ = [
    "SerialEvalBackend",
    "ThreadPoolEvalBackend",
    "MultiprocessingEvalBackend",
    "resolve_eval_backend",
]
