"""NSGA-III initialization and setup routines.

This module handles algorithm setup including:
- Validating the problem adapter
- Parsing the generation budget
- Reference point generation
- Building the variation operators
- Initial population generation and evaluation
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Mapping

import numpy as np

from nsga3lab.engine.algorithm.components.reference_points import resolve_reference_points
from nsga3lab.engine.algorithm.components.state import RunPhase, parse_termination
from nsga3lab.engine.operators.binary import random_binary_population
from nsga3lab.foundation.eval import evaluate_with_retry, resolve_eval_backend
from nsga3lab.foundation.exceptions import EvaluationFailure
from nsga3lab.foundation.problem.base import objective_signs, validate_problem
from nsga3lab.foundation.random_stream import create_random_stream
from .operators import build_variation_operators
from .state import NSGAIIIState

if TYPE_CHECKING:
    from nsga3lab.foundation.eval import EvaluationBackend

_logger = logging.getLogger(__name__)


__all__ = [
    "initialize_nsgaiii_run",
    "initialize_population",
]


def initialize_nsgaiii_run(
    config: Mapping[str, Any],
    problem: Any,
    termination: tuple[str, Any] | None,
    seed: int | None,
    eval_backend: "EvaluationBackend | None" = None,
) -> tuple[NSGAIIIState, int, "EvaluationBackend"]:
    """Initialize NSGA-III run and create state.

    Every configuration check happens here, before the first generation.

    Parameters
    ----------
    config : Mapping
        Algorithm configuration (``NSGAIIIConfigData.to_dict()``).
    problem : Problem
        Binary problem adapter.
    termination : tuple or None
        ``("n_gen", k)``; None uses ``config["max_generations"]``.
    seed : int or None
        Master stream seed; None uses ``config["seed"]``.
    eval_backend : EvaluationBackend, optional
        Evaluation backend; built from ``config["evaluation"]`` when omitted.

    Returns
    -------
    tuple
        (state, max_generations, eval_backend)
    """
    n_var, n_obj = validate_problem(problem)
    signs = objective_signs(problem)
    max_generations = parse_termination(termination, config["max_generations"], "NSGA-III")
    pop_size = int(config["pop_size"])

    operators = build_variation_operators(config, n_var)

    dir_cfg = config.get("reference_directions") or {}
    ref_points = resolve_reference_points(
        n_obj,
        divisions=dir_cfg.get("divisions"),
        inner_divisions=dir_cfg.get("inner_divisions"),
        path=dir_cfg.get("path"),
    )

    owns_backend = eval_backend is None
    if eval_backend is None:
        eval_cfg = config.get("evaluation") or {}
        eval_backend = resolve_eval_backend(
            eval_cfg.get("backend", "serial"),
            n_workers=eval_cfg.get("n_workers"),
            chunk_size=eval_cfg.get("chunk_size"),
        )

    rng = create_random_stream(config.get("seed") if seed is None else seed)
    _logger.info(
        "NSGA-III: pop_size=%d, n_obj=%d, n_var=%d, %d reference points, %d generations",
        pop_size,
        n_obj,
        n_var,
        ref_points.shape[0],
        max_generations,
    )

    state = NSGAIIIState(
        X=np.empty((0, n_var), dtype=np.int8),
        F=np.empty((0, n_obj)),
        rng=rng,
        pop_size=pop_size,
        ref_points=ref_points,
        signs=signs,
        operators=operators,
        problem=problem,
    )
    try:
        initialize_population(state, eval_backend)
    except Exception:
        if owns_backend:
            eval_backend.close()
        raise
    return state, max_generations, eval_backend


def initialize_population(state: NSGAIIIState, eval_backend: "EvaluationBackend") -> None:
    """Fill ``state`` with ``pop_size`` random genomes and evaluate them.

    Failed candidates are replaced once by fresh random genomes; if every
    candidate is lost the run cannot start.

    Raises
    ------
    EvaluationFailure
        If no initial candidate could be evaluated.
    """
    problem = state.problem
    n_var = int(problem.n_var)
    state.phase = RunPhase.EVALUATING
    X = random_binary_population(state.pop_size, n_var, state.rng)
    batch = evaluate_with_retry(
        X,
        problem,
        eval_backend,
        state.rng,
        regenerate=lambda k: random_binary_population(k, n_var, state.rng),
    )
    state.n_eval += batch.n_eval
    state.n_failed += batch.n_failed
    if batch.X.shape[0] == 0:
        raise EvaluationFailure("Every candidate of the initial population failed to evaluate.")
    if batch.n_dropped:
        _logger.warning(
            "Initial population starts with %d of %d individuals.", batch.X.shape[0], state.pop_size
        )
    state.X = batch.X
    state.F = batch.F * state.signs
    state.generation = 0
