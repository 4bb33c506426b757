"""NSGA-III configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from nsga3lab.engine.algorithm.components.reference_points import (
    count_lattice_points,
    default_divisions,
)
from nsga3lab.engine.algorithm.components.utils import resolve_prob_expression
from nsga3lab.engine.algorithm.nsgaiii.operators import BINARY_CROSSOVER, BINARY_MUTATION
from nsga3lab.foundation.exceptions import ConfigurationError, InvalidOperatorError
from nsga3lab.foundation.random_stream import DEFAULT_SEED

from .base import _SerializableConfig, _require_fields

EVALUATION_BACKENDS = ("serial", "threads", "processes")
DEFAULT_MAX_GENERATIONS = 10000


@dataclass(frozen=True)
class NSGAIIIConfigData(_SerializableConfig):
    pop_size: int
    max_generations: int
    crossover: Tuple[str, Dict[str, Any]] = field(default_factory=lambda: ("uniform", {"prob": 0.9}))
    mutation: Tuple[str, Dict[str, Any]] = field(default_factory=lambda: ("bitflip", {"prob": "1/n"}))
    reference_directions: Dict[str, Optional[int | str]] = field(default_factory=dict)
    evaluation: Dict[str, Any] = field(default_factory=lambda: {"backend": "serial"})
    seed: Optional[int] = DEFAULT_SEED

    def __post_init__(self) -> None:
        if not isinstance(self.pop_size, int) or self.pop_size < 2:
            raise ConfigurationError(
                f"pop_size must be an integer >= 2, got {self.pop_size!r}.",
                details={"pop_size": self.pop_size},
            )
        if not isinstance(self.max_generations, int) or self.max_generations < 0:
            raise ConfigurationError(
                f"max_generations must be a non-negative integer, got {self.max_generations!r}.",
                details={"max_generations": self.max_generations},
            )
        cross_method, cross_params = self.crossover
        if cross_method not in BINARY_CROSSOVER:
            raise InvalidOperatorError("crossover", cross_method, sorted(BINARY_CROSSOVER))
        mut_method, mut_params = self.mutation
        if mut_method not in BINARY_MUTATION:
            raise InvalidOperatorError("mutation", mut_method, sorted(BINARY_MUTATION))
        # "k/n" expressions are resolved against the genome length at run time.
        resolve_prob_expression(cross_params.get("prob"), 1, 0.9)
        resolve_prob_expression(mut_params.get("prob"), 1, 0.1)

        divisions = self.reference_directions.get("divisions")
        if divisions is not None and (not isinstance(divisions, int) or divisions < 1):
            raise ConfigurationError(f"divisions must be an integer >= 1, got {divisions!r}.")
        inner = self.reference_directions.get("inner_divisions")
        if inner is not None and (not isinstance(inner, int) or inner < 0):
            raise ConfigurationError(f"inner_divisions must be a non-negative integer, got {inner!r}.")

        backend = self.evaluation.get("backend", "serial")
        if backend not in EVALUATION_BACKENDS:
            raise ConfigurationError(
                f"Unknown evaluation backend '{backend}'.",
                suggestion=f"Available backends: {', '.join(EVALUATION_BACKENDS)}",
            )


class NSGAIIIConfig:
    """
    Declarative configuration holder for NSGA-III settings.

    Examples:
        cfg = NSGAIIIConfig.default(n_obj=3)
        cfg = NSGAIIIConfig().pop_size(92).max_generations(200).crossover("uniform", prob=0.9).fixed()
    """

    def __init__(self) -> None:
        self._cfg: Dict[str, Any] = {}

    @classmethod
    def default(
        cls,
        pop_size: int | None = None,
        n_obj: int = 3,
        max_generations: int = DEFAULT_MAX_GENERATIONS,
    ) -> "NSGAIIIConfigData":
        """
        Create a default NSGA-III configuration.

        Args:
            pop_size: Population size; by default the smallest multiple of 4
                holding one individual per reference point
            n_obj: Number of objectives (for reference directions)
            max_generations: Generation budget
        """
        divisions, inner = default_divisions(n_obj)
        if pop_size is None:
            n_ref = count_lattice_points(n_obj, divisions)
            if inner:
                n_ref += count_lattice_points(n_obj, inner)
            pop_size = 4 * ((n_ref + 3) // 4)
        return (
            cls()
            .pop_size(pop_size)
            .max_generations(max_generations)
            .crossover("uniform", prob=0.9)
            .mutation("bitflip", prob="1/n")
            .reference_directions(divisions=divisions, inner_divisions=inner or None)
            .fixed()
        )

    def pop_size(self, value: int) -> "NSGAIIIConfig":
        self._cfg["pop_size"] = value
        return self

    def max_generations(self, value: int) -> "NSGAIIIConfig":
        self._cfg["max_generations"] = value
        return self

    def crossover(self, method: str, **kwargs) -> "NSGAIIIConfig":
        self._cfg["crossover"] = (method, kwargs)
        return self

    def mutation(self, method: str, **kwargs) -> "NSGAIIIConfig":
        self._cfg["mutation"] = (method, kwargs)
        return self

    def reference_directions(
        self,
        *,
        divisions: Optional[int] = None,
        inner_divisions: Optional[int] = None,
        path: Optional[str] = None,
    ) -> "NSGAIIIConfig":
        self._cfg["reference_directions"] = {
            "divisions": divisions,
            "inner_divisions": inner_divisions,
            "path": path,
        }
        return self

    def evaluation(
        self,
        backend: str = "serial",
        *,
        n_workers: Optional[int] = None,
        chunk_size: Optional[int] = None,
    ) -> "NSGAIIIConfig":
        self._cfg["evaluation"] = {"backend": backend, "n_workers": n_workers, "chunk_size": chunk_size}
        return self

    def seed(self, value: Optional[int]) -> "NSGAIIIConfig":
        self._cfg["seed"] = value
        return self

    def fixed(self) -> NSGAIIIConfigData:
        _require_fields(self._cfg, ("pop_size", "max_generations"), "NSGAIII")
        return NSGAIIIConfigData(**self._cfg)
