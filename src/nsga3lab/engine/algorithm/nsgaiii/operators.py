"""NSGA-III operator registration and building for binary genomes."""

from __future__ import annotations

from typing import Any, Callable, Mapping

import numpy as np

from nsga3lab.engine.algorithm.components.utils import resolve_prob_expression
from nsga3lab.engine.operators.binary import (
    bit_flip_mutation,
    hux_crossover,
    one_point_crossover,
    random_mating_pairs,
    two_point_crossover,
    uniform_crossover,
)
from nsga3lab.foundation.exceptions import InvalidOperatorError


__all__ = [
    "BINARY_CROSSOVER",
    "BINARY_MUTATION",
    "VariationOperators",
    "build_variation_operators",
]


# -------------------------------------------------------------------------
# Operator registries
# -------------------------------------------------------------------------

BINARY_CROSSOVER: dict[str, Callable[..., np.ndarray]] = {
    "one_point": one_point_crossover,
    "single_point": one_point_crossover,
    "1point": one_point_crossover,
    "two_point": two_point_crossover,
    "2point": two_point_crossover,
    "uniform": uniform_crossover,
    "hux": hux_crossover,
}

BINARY_MUTATION: dict[str, Callable[..., np.ndarray]] = {
    "bitflip": bit_flip_mutation,
    "bit_flip": bit_flip_mutation,
}


class VariationOperators:
    """Uniform parent selection, crossover and bit-flip mutation bound to their parameters."""

    def __init__(
        self,
        crossover_fn: Callable[..., np.ndarray],
        crossover_prob: float,
        mutation_fn: Callable[..., np.ndarray],
        mutation_prob: float,
        label: str,
    ) -> None:
        self.crossover_fn = crossover_fn
        self.crossover_prob = crossover_prob
        self.mutation_fn = mutation_fn
        self.mutation_prob = mutation_prob
        self.label = label

    def offspring(self, X: np.ndarray, n_offspring: int, rng: np.random.Generator) -> np.ndarray:
        """Produce ``n_offspring`` children from uniformly chosen parent pairs."""
        if n_offspring <= 0:
            return np.empty((0, X.shape[1]), dtype=X.dtype)
        n_pairs = (n_offspring + 1) // 2
        mates = random_mating_pairs(X.shape[0], n_pairs, rng)
        children = self.crossover_fn(X[mates], self.crossover_prob, rng)
        children = children.reshape(-1, X.shape[1])[:n_offspring]
        return self.mutation_fn(children, self.mutation_prob, rng)


def _unpack(cfg: Any, default_method: str) -> tuple[str, dict[str, Any]]:
    if cfg is None:
        return default_method, {}
    if isinstance(cfg, Mapping):
        params = dict(cfg)
        return str(params.pop("method", default_method)), params
    method, params = cfg
    return str(method), dict(params or {})


def build_variation_operators(config: Mapping[str, Any], n_var: int) -> VariationOperators:
    """Build the variation pipeline from ``config["crossover"]`` and ``config["mutation"]``.

    Both entries are ``(method, params)`` tuples (lists after a JSON round
    trip work too). Mutation probability defaults to ``1/n_var``.

    Raises
    ------
    InvalidOperatorError
        If an operator name is not registered.
    """
    cross_method, cross_params = _unpack(config.get("crossover"), "uniform")
    mut_method, mut_params = _unpack(config.get("mutation"), "bitflip")

    if cross_method not in BINARY_CROSSOVER:
        raise InvalidOperatorError("crossover", cross_method, sorted(BINARY_CROSSOVER))
    if mut_method not in BINARY_MUTATION:
        raise InvalidOperatorError("mutation", mut_method, sorted(BINARY_MUTATION))

    cross_prob = resolve_prob_expression(cross_params.get("prob"), n_var, 0.9)
    mut_prob = resolve_prob_expression(mut_params.get("prob"), n_var, 1.0 / max(1, n_var))
    return VariationOperators(
        BINARY_CROSSOVER[cross_method],
        cross_prob,
        BINARY_MUTATION[mut_method],
        mut_prob,
        label=f"{cross_method}+{mut_method}",
    )
