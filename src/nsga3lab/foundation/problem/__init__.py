from .base import Problem, objective_signs, validate_problem
from .binary import (
    LOTZ,
    MLOTZ,
    BinaryFeatureSelectionProblem,
    BinaryKnapsackProblem,
    BinaryQUBOProblem,
    NoisyOneMinMax,
    OneMinMax,
)
from .registry import ProblemSpec, available_problem_names, make_problem

__all__ = [
    "Problem",
    "objective_signs",
    "validate_problem",
    "OneMinMax",
    "NoisyOneMinMax",
    "LOTZ",
    "MLOTZ",
    "BinaryFeatureSelectionProblem",
    "BinaryKnapsackProblem",
    "BinaryQUBOProblem",
    "ProblemSpec",
    "available_problem_names",
    "make_problem",
]
