"""
NSGA-III algorithm module.

This package provides NSGA-III for binary genomes with modular components:
- `nsgaiii.py`: main NSGAIII class (run/ask/tell loop)
- `initialization.py`: run setup and initial population
- `state.py`: NSGAIIIState + result building
- `operators.py`: variation operator building
- `sorting.py`: fast non-dominated sorting
- `normalization.py`: ideal point, intercepts and reference point association
- `niching.py`: reference point niching, survival selection

References:
    K. Deb and H. Jain, "An Evolutionary Many-Objective Optimization Algorithm
    Using Reference-Point-Based Nondominated Sorting Approach, Part I: Solving
    Problems With Box Constraints," IEEE Trans. Evolutionary Computation,
    vol. 18, no. 4, 2014.
"""

from .nsgaiii import NSGAIII
from .niching import SurvivalOutcome, niche_counts, niching, nsgaiii_survival
from .normalization import Normalization, associate, compute_intercepts, normalize_and_associate
from .operators import VariationOperators, build_variation_operators
from .initialization import initialize_nsgaiii_run
from .sorting import fast_non_dominated_sort, non_dominated_ranks
from .state import Individual, NSGAIIIState, build_nsgaiii_result

__all__ = [
    "NSGAIII",
    # Survival
    "SurvivalOutcome",
    "niche_counts",
    "niching",
    "nsgaiii_survival",
    "Normalization",
    "associate",
    "compute_intercepts",
    "normalize_and_associate",
    "fast_non_dominated_sort",
    "non_dominated_ranks",
    # Operators
    "VariationOperators",
    "build_variation_operators",
    # Setup
    "initialize_nsgaiii_run",
    # State
    "Individual",
    "NSGAIIIState",
    "build_nsgaiii_result",
]
