from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol, Sequence

import numpy as np


@dataclass
class EvaluationResult:
    """Container for per-candidate evaluation outputs.

    Rows of ``F`` that belong to failed candidates are NaN.
    """

    F: np.ndarray
    failed: np.ndarray
    errors: dict[int, str] = field(default_factory=dict)

    @property
    def n_failed(self) -> int:
        return int(np.count_nonzero(self.failed))


class EvaluationBackend(Protocol):
    """Protocol for evaluation backends."""

    def evaluate(
        self,
        X: np.ndarray,
        problem: Any,
        streams: Sequence[np.random.Generator],
    ) -> EvaluationResult: ...

    def close(self) -> None:  # pragma: no cover - optional for pooled backends
        """Clean up any resources (executors, pools)."""
        return None


from .population import EvaluatedBatch, evaluate_candidate, evaluate_population, evaluate_with_retry  # noqa: E402
from .backends import (  # noqa: E402
    MultiprocessingEvalBackend,
    SerialEvalBackend,
    ThreadPoolEvalBackend,
    resolve_eval_backend,
)

__all__ = [
    "EvaluationBackend",
    "EvaluationResult",
    "EvaluatedBatch",
    "evaluate_candidate",
    "evaluate_population",
    "evaluate_with_retry",
    "SerialEvalBackend",
    "ThreadPoolEvalBackend",
    "MultiprocessingEvalBackend",
    "resolve_eval_backend",
]
