# algorithm/components/__init__.py
"""
Shared algorithm components.

- reference_points: Das-Dennis lattices and two-layer reference point sets
- state: Base state container, run phases and termination parsing
- utils: Shared utility functions
"""
from nsga3lab.engine.algorithm.components.reference_points import (
    TWO_LAYER_THRESHOLD,
    count_lattice_points,
    das_dennis,
    default_divisions,
    load_reference_points,
    reference_points,
    resolve_reference_points,
    save_reference_points,
)
from nsga3lab.engine.algorithm.components.state import AlgorithmState, RunPhase, parse_termination
from nsga3lab.engine.algorithm.components.utils import resolve_prob_expression

__all__ = [
    "TWO_LAYER_THRESHOLD",
    "count_lattice_points",
    "das_dennis",
    "default_divisions",
    "load_reference_points",
    "reference_points",
    "resolve_reference_points",
    "save_reference_points",
    "AlgorithmState",
    "RunPhase",
    "parse_termination",
    "resolve_prob_expression",
]
