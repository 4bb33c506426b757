"""
Problem registry: specs and factories for the bundled binary benchmarks.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from nsga3lab.foundation.exceptions import InvalidProblemError, ProblemDimensionError
from .binary import (
    LOTZ,
    MLOTZ,
    BinaryFeatureSelectionProblem,
    BinaryKnapsackProblem,
    BinaryQUBOProblem,
    NoisyOneMinMax,
    OneMinMax,
)

ProblemFactory = Callable[[int, int], object]


@dataclass(frozen=True)
class ProblemSpec:
    """Metadata and factory for a benchmark problem."""

    key: str
    label: str
    default_n_var: int
    default_n_obj: int
    allow_n_obj_override: bool
    factory: ProblemFactory
    description: str = ""

    def resolve_dimensions(self, *, n_var: int | None, n_obj: int | None) -> tuple[int, int]:
        """
        Apply default dimensions and enforce override rules.
        """
        if self.allow_n_obj_override:
            actual_n_obj = n_obj if n_obj is not None else self.default_n_obj
        else:
            actual_n_obj = self.default_n_obj
            if n_obj is not None and n_obj != actual_n_obj:
                raise ProblemDimensionError(
                    f"Problem '{self.label}' has a fixed number of objectives ({self.default_n_obj}).",
                    n_obj=n_obj,
                )
        actual_n_var = self.default_n_var if n_var is None else n_var
        if actual_n_var <= 0:
            raise ProblemDimensionError("n_var must be a positive integer.", n_var=actual_n_var)
        return actual_n_var, actual_n_obj


_PROBLEM_SPECS: dict[str, ProblemSpec] = {
    spec.key: spec
    for spec in (
        ProblemSpec(
            key="oneminmax",
            label="OneMinMax",
            default_n_var=20,
            default_n_obj=2,
            allow_n_obj_override=False,
            description="Maximize ones and zeros simultaneously; every string is Pareto optimal.",
            factory=lambda n_var, _n_obj: OneMinMax(n_var=n_var),
        ),
        ProblemSpec(
            key="noisy_oneminmax",
            label="Noisy OneMinMax",
            default_n_var=20,
            default_n_obj=2,
            allow_n_obj_override=False,
            description="OneMinMax with Gaussian evaluation noise.",
            factory=lambda n_var, _n_obj: NoisyOneMinMax(n_var=n_var),
        ),
        ProblemSpec(
            key="lotz",
            label="LOTZ",
            default_n_var=20,
            default_n_obj=2,
            allow_n_obj_override=False,
            description="Leading ones and trailing zeros.",
            factory=lambda n_var, _n_obj: LOTZ(n_var=n_var),
        ),
        ProblemSpec(
            key="mlotz",
            label="mLOTZ",
            default_n_var=24,
            default_n_obj=4,
            allow_n_obj_override=True,
            description="Many-objective LOTZ over n_obj/2 genome blocks.",
            factory=lambda n_var, n_obj: MLOTZ(n_var=n_var, n_obj=n_obj),
        ),
        ProblemSpec(
            key="bin_feat",
            label="Binary Feature Selection",
            default_n_var=50,
            default_n_obj=2,
            allow_n_obj_override=False,
            description="Synthetic feature-selection style binary benchmark.",
            factory=lambda n_var, _n_obj: BinaryFeatureSelectionProblem(n_var=n_var),
        ),
        ProblemSpec(
            key="bin_knapsack",
            label="Binary Knapsack",
            default_n_var=50,
            default_n_obj=2,
            allow_n_obj_override=False,
            description="Knapsack-like binary benchmark trading value vs capacity deviation.",
            factory=lambda n_var, _n_obj: BinaryKnapsackProblem(n_var=n_var),
        ),
        ProblemSpec(
            key="bin_qubo",
            label="Binary QUBO",
            default_n_var=30,
            default_n_obj=2,
            allow_n_obj_override=False,
            description="Quadratic unconstrained binary optimization surrogate.",
            factory=lambda n_var, _n_obj: BinaryQUBOProblem(n_var=n_var),
        ),
    )
}


def get_problem_specs() -> dict[str, ProblemSpec]:
    return dict(_PROBLEM_SPECS)


def available_problem_names() -> tuple[str, ...]:
    return tuple(_PROBLEM_SPECS.keys())


def make_problem(name: str, *, n_var: int | None = None, n_obj: int | None = None) -> object:
    """Instantiate a registered benchmark by key."""
    key = name.lower()
    spec = _PROBLEM_SPECS.get(key)
    if spec is None:
        raise InvalidProblemError(name, list(available_problem_names()))
    actual_n_var, actual_n_obj = spec.resolve_dimensions(n_var=n_var, n_obj=n_obj)
    return spec.factory(actual_n_var, actual_n_obj)


__all__ = [
    "ProblemSpec",
    "ProblemFactory",
    "get_problem_specs",
    "available_problem_names",
    "make_problem",
]
