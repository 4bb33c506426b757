"""NSGA-III core algorithm implementation.

Non-dominated Sorting Genetic Algorithm III uses reference points for
many-objective optimization (3+ objectives), here over binary genomes.

References:
    K. Deb and H. Jain, "An Evolutionary Many-Objective Optimization Algorithm
    Using Reference-Point-Based Nondominated Sorting Approach, Part I: Solving
    Problems With Box Constraints," IEEE Trans. Evolutionary Computation,
    vol. 18, no. 4, 2014.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Mapping

import numpy as np

from nsga3lab.engine.algorithm.components.state import RunPhase
from nsga3lab.foundation.cancellation import CancellationSignal, as_cancellation_signal
from nsga3lab.foundation.eval import evaluate_with_retry
from nsga3lab.foundation.exceptions import ProblemDimensionError
from nsga3lab.foundation.logging import run_context
from nsga3lab.foundation.observer import ResultsSink, resolve_results_sink
from .initialization import initialize_nsgaiii_run
from .niching import nsgaiii_survival
from .operators import VariationOperators
from .state import NSGAIIIState, build_nsgaiii_result

if TYPE_CHECKING:
    from nsga3lab.foundation.eval import EvaluationBackend

_logger = logging.getLogger(__name__)


__all__ = ["NSGAIII"]


class NSGAIII:
    """Non-dominated Sorting Genetic Algorithm III for binary problems.

    Each generation creates ``pop_size`` offspring from uniformly chosen
    parents, merges them with the parents, and keeps the best fronts. The
    front that does not fit completely is thinned by reference point
    niching so the survivors spread across the reference directions.

    Parameters
    ----------
    config : NSGAIIIConfigData or dict
        Algorithm configuration with keys:
        - pop_size (int): Population size N
        - max_generations (int): Generation budget
        - crossover (tuple): Crossover operator config
        - mutation (tuple): Mutation operator config
        - reference_directions (dict, optional): divisions / inner_divisions / path
        - evaluation (dict, optional): backend / n_workers / chunk_size
        - seed (int, optional): Master stream seed

    Examples
    --------
    Basic usage:

    >>> from nsga3lab import NSGAIIIConfig, OneMinMax
    >>> config = NSGAIIIConfig().pop_size(20).max_generations(50).reference_directions(divisions=12).fixed()
    >>> result = NSGAIII(config).run(OneMinMax(n_var=10), seed=1234)

    Ask/tell interface:

    >>> nsga3 = NSGAIII(config)
    >>> nsga3.initialize(problem, seed=42)
    >>> while not nsga3.should_terminate():
    ...     X = nsga3.ask()
    ...     F = evaluate(X)
    ...     nsga3.tell(X, F)
    >>> result = nsga3.result()
    """

    def __init__(self, config: Any):
        if not hasattr(config, "to_dict"):
            # Lazy import: the config module imports this package's operator registry.
            from nsga3lab.engine.algorithm.config import NSGAIIIConfigData

            config = NSGAIIIConfigData.from_dict(config)
        self.cfg: Mapping[str, Any] = config.to_dict()
        self._st: NSGAIIIState | None = None
        self._eval_backend: "EvaluationBackend | None" = None
        self._max_generations: int = 0
        self._sink: ResultsSink = resolve_results_sink(None)
        self._cancel: CancellationSignal = as_cancellation_signal(None)

    # -------------------------------------------------------------------------
    # Main run method (batch mode)
    # -------------------------------------------------------------------------

    def run(
        self,
        problem: Any,
        termination: tuple[str, Any] | None = None,
        seed: int | None = None,
        eval_backend: "EvaluationBackend | None" = None,
        results_sink: ResultsSink | None = None,
        cancellation: Any = None,
    ) -> dict[str, Any]:
        """Run the NSGA-III generation loop.

        Parameters
        ----------
        problem : Problem
            Binary problem to optimize.
        termination : tuple, optional
            ``("n_gen", k)``; defaults to the configured ``max_generations``.
        seed : int, optional
            Master stream seed; defaults to the configured seed.
        eval_backend : EvaluationBackend, optional
            Backend for (parallel) evaluation.
        results_sink : ResultsSink, optional
            Receives ``report(generation, best_objectives)`` after every generation.
        cancellation : CancellationSignal, threading.Event or callable, optional
            Polled once per generation boundary.

        Returns
        -------
        dict
            Result dictionary, see ``build_nsgaiii_result``.
        """
        self.initialize(problem, termination, seed, eval_backend, results_sink, cancellation)
        st = self._state()
        try:
            while not self.should_terminate():
                self._step(st)
        finally:
            if eval_backend is None and self._eval_backend is not None:
                self._eval_backend.close()
        return self.result()

    # -------------------------------------------------------------------------
    # Generation logic
    # -------------------------------------------------------------------------

    def _step(self, st: NSGAIIIState) -> None:
        """Evaluate one batch of offspring and select the next population."""
        ops = self._operators(st)
        st.phase = RunPhase.EVALUATING
        X_off = ops.offspring(st.X, st.pop_size, st.rng)
        batch = evaluate_with_retry(
            X_off,
            st.problem,
            self._eval_backend,
            st.rng,
            regenerate=lambda k: ops.offspring(st.X, k, st.rng),
        )
        st.n_eval += batch.n_eval
        st.n_failed += batch.n_failed
        if batch.n_dropped:
            _logger.warning(
                "Generation %d proceeds with %d of %d offspring.",
                st.generation + 1,
                batch.X.shape[0],
                st.pop_size,
                extra=run_context(st.generation + 1, st.phase),
            )
        self._survive(st, batch.X, batch.F * st.signs)

    def _survive(self, st: NSGAIIIState, X_off: np.ndarray, F_off: np.ndarray) -> None:
        X_all = np.vstack([st.X, X_off])
        F_all = np.vstack([st.F, F_off])

        def on_phase(phase: RunPhase) -> None:
            st.phase = phase

        outcome = nsgaiii_survival(F_all, st.pop_size, st.ref_points, st.rng, on_phase=on_phase)
        st.X = X_all[outcome.survivors]
        st.F = F_all[outcome.survivors]
        if outcome.normalization is not None and outcome.normalization.degenerate:
            st.degenerate_hyperplanes += 1
        st.generation += 1
        _logger.debug(
            "Generation %d: %d fronts, %d admitted whole, %d evaluations",
            st.generation,
            len(outcome.fronts),
            outcome.n_admitted_fronts,
            st.n_eval,
            extra=run_context(st.generation, st.phase),
        )
        self._sink.report(st.generation, st.best_objectives())

    def _state(self) -> NSGAIIIState:
        if self._st is None:
            raise RuntimeError("Algorithm not initialized. Call initialize() first.")
        return self._st

    @staticmethod
    def _operators(st: NSGAIIIState) -> VariationOperators:
        if st.operators is None:
            raise RuntimeError("State has no variation operators; build it with initialize().")
        return st.operators

    # -------------------------------------------------------------------------
    # Ask/Tell Interface
    # -------------------------------------------------------------------------

    def initialize(
        self,
        problem: Any,
        termination: tuple[str, Any] | None = None,
        seed: int | None = None,
        eval_backend: "EvaluationBackend | None" = None,
        results_sink: ResultsSink | None = None,
        cancellation: Any = None,
    ) -> None:
        """Initialize algorithm for the ask/tell loop.

        Builds the reference points and operators, evaluates the initial
        population and reports it as generation 0.

        Raises
        ------
        ConfigurationError
            For invalid population size, objective count, divisions, genome
            length, operators, or an objective vector of the wrong length.
        """
        self._sink = resolve_results_sink(results_sink)
        self._cancel = as_cancellation_signal(cancellation)
        self._st, self._max_generations, self._eval_backend = initialize_nsgaiii_run(
            self.cfg, problem, termination, seed, eval_backend
        )
        self._st.pending_offspring = None
        self._sink.report(0, self._st.best_objectives())

    def ask(self) -> np.ndarray:
        """Generate offspring for evaluation.

        Returns
        -------
        np.ndarray
            Offspring genomes to evaluate.

        Raises
        ------
        RuntimeError
            If algorithm not initialized or previous offspring not consumed.
        """
        st = self._state()
        if st.pending_offspring is not None:
            raise RuntimeError("Previous offspring not yet consumed by tell().")
        ops = self._operators(st)
        st.phase = RunPhase.EVALUATING
        offspring = ops.offspring(st.X, st.pop_size, st.rng)
        st.pending_offspring = offspring
        return offspring.copy()

    def tell(self, X: np.ndarray, F: np.ndarray) -> None:
        """Receive evaluated offspring and update population.

        Parameters
        ----------
        X : np.ndarray
            Evaluated genomes.
        F : np.ndarray
            Objective values in the problem's own sense. Rows with non-finite
            values are dropped.

        Raises
        ------
        RuntimeError
            If algorithm not initialized or no pending offspring.
        ProblemDimensionError
            If ``F`` does not have one column per objective.
        """
        st = self._state()
        if st.pending_offspring is None:
            raise RuntimeError("No pending offspring. Call ask() first.")
        st.pending_offspring = None

        X = np.asarray(X, dtype=st.X.dtype)
        F = np.atleast_2d(np.asarray(F, dtype=float))
        n_obj = st.F.shape[1]
        if F.shape != (X.shape[0], n_obj):
            raise ProblemDimensionError(
                f"Expected objectives of shape ({X.shape[0]}, {n_obj}), got {F.shape}.",
                n_var=X.shape[1],
                n_obj=n_obj,
            )
        valid = np.all(np.isfinite(F), axis=1)
        if not valid.all():
            _logger.warning(
                "Dropping %d offspring with non-finite objectives.",
                int((~valid).sum()),
                extra=run_context(st.generation + 1, st.phase),
            )
        st.n_eval += X.shape[0]
        st.n_failed += int((~valid).sum())
        self._survive(st, X[valid], F[valid] * st.signs)

    def should_terminate(self) -> bool:
        """Check the generation budget and the cancellation signal.

        Returns
        -------
        bool
            True if algorithm should stop.
        """
        st = self._st
        if st is None:
            return True
        if st.phase is RunPhase.TERMINATED:
            return True
        if st.generation >= self._max_generations:
            st.phase = RunPhase.TERMINATED
            return True
        if self._cancel.is_cancelled():
            st.cancelled = True
            st.phase = RunPhase.TERMINATED
            _logger.info(
                "Cancellation observed after generation %d.", st.generation, extra=run_context(st.generation, st.phase)
            )
            return True
        return False

    def result(self) -> dict[str, Any]:
        """Get current result.

        Raises
        ------
        RuntimeError
            If algorithm not initialized.
        """
        st = self._state()
        result = build_nsgaiii_result(st)
        _logger.info(
            "NSGA-III finished after %d generations (%d evaluations, %d failed, front size %d).",
            st.generation,
            st.n_eval,
            st.n_failed,
            result["X"].shape[0],
        )
        return result

    @property
    def state(self) -> NSGAIIIState | None:
        """Access current algorithm state."""
        return self._st
