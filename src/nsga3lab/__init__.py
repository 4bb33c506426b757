"""
nsga3lab: NSGA-III for binary multi- and many-objective problems.

Quick start::

    from nsga3lab import NSGAIII, NSGAIIIConfig, OneMinMax

    config = NSGAIIIConfig().pop_size(20).max_generations(50).reference_directions(divisions=12).fixed()
    result = NSGAIII(config).run(OneMinMax(n_var=10), seed=1234)
    print(result["F"])
"""

from nsga3lab.engine.algorithm.config import NSGAIIIConfig, NSGAIIIConfigData
from nsga3lab.engine.algorithm.nsgaiii import NSGAIII, Individual
from nsga3lab.engine.algorithm.components.reference_points import reference_points
from nsga3lab.foundation.cancellation import CancellationToken
from nsga3lab.foundation.eval import SerialEvalBackend, ThreadPoolEvalBackend, MultiprocessingEvalBackend
from nsga3lab.foundation.exceptions import (
    ConfigurationError,
    DegenerateHyperplane,
    EvaluationFailure,
    NSGA3LabError,
)
from nsga3lab.foundation.logging import configure_nsga3lab_logging
from nsga3lab.foundation.observer import HistoryResultsSink, LoggingResultsSink, NullResultsSink, ResultsSink
from nsga3lab.foundation.problem import (
    LOTZ,
    MLOTZ,
    BinaryFeatureSelectionProblem,
    BinaryKnapsackProblem,
    BinaryQUBOProblem,
    NoisyOneMinMax,
    OneMinMax,
    Problem,
    available_problem_names,
    make_problem,
)

__version__ = "0.1.0"

__all__ = [
    "NSGAIII",
    "NSGAIIIConfig",
    "NSGAIIIConfigData",
    "Individual",
    "reference_points",
    "CancellationToken",
    "SerialEvalBackend",
    "ThreadPoolEvalBackend",
    "MultiprocessingEvalBackend",
    "NSGA3LabError",
    "ConfigurationError",
    "DegenerateHyperplane",
    "EvaluationFailure",
    "configure_nsga3lab_logging",
    "ResultsSink",
    "NullResultsSink",
    "HistoryResultsSink",
    "LoggingResultsSink",
    "Problem",
    "OneMinMax",
    "NoisyOneMinMax",
    "LOTZ",
    "MLOTZ",
    "BinaryFeatureSelectionProblem",
    "BinaryKnapsackProblem",
    "BinaryQUBOProblem",
    "available_problem_names",
    "make_problem",
]
