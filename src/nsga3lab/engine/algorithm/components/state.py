"""
Base state shared by generational algorithms.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

import numpy as np

from nsga3lab.foundation.exceptions import ConfigurationError


class RunPhase(str, Enum):
    INITIALIZING = "initializing"
    EVALUATING = "evaluating"
    SORTING = "sorting"
    NORMALIZING = "normalizing"
    SELECTING = "selecting"
    TERMINATED = "terminated"


@dataclass
class AlgorithmState:
    """
    Base state container for evolutionary algorithms.

    Attributes
    ----------
    X : np.ndarray
        Genomes, shape (pop_size, n_var).
    F : np.ndarray
        Objective values in minimization form, shape (pop_size, n_obj).
    rng : np.random.Generator
        Master random stream of the run.
    pop_size : int
        Target population size.
    generation : int
        Completed generations (0 after initialization).
    n_eval : int
        Total number of evaluations so far, retries included.
    """

    X: np.ndarray
    F: np.ndarray
    rng: np.random.Generator

    pop_size: int = 100
    generation: int = 0
    n_eval: int = 0
    n_failed: int = 0

    phase: RunPhase = RunPhase.INITIALIZING
    cancelled: bool = False

    # Pending offspring for ask/tell
    pending_offspring: np.ndarray | None = None


def parse_termination(
    termination: tuple[str, Any] | None,
    default_max_generations: int,
    algorithm_name: str = "algorithm",
) -> int:
    """
    Parse a termination criterion into a generation budget.

    Parameters
    ----------
    termination : tuple[str, Any] | None
        ``("n_gen", k)`` or None for the configured default.
    default_max_generations : int
        Budget used when ``termination`` is None.
    algorithm_name : str
        Algorithm name for error messages.

    Raises
    ------
    ConfigurationError
        If the criterion is unsupported or the budget is negative.
    """
    if termination is None:
        return int(default_max_generations)
    term_type, term_val = termination
    if term_type not in {"n_gen", "max_generations"}:
        raise ConfigurationError(
            f"Unsupported termination criterion '{term_type}' for {algorithm_name}.",
            suggestion="Use ('n_gen', k).",
        )
    max_gen = int(term_val)
    if max_gen < 0:
        raise ConfigurationError(f"Generation budget must be non-negative, got {max_gen}.")
    return max_gen


__all__ = ["RunPhase", "AlgorithmState", "parse_termination"]
