"""Algorithm configuration module.

Examples:
    from nsga3lab.engine.algorithm.config import NSGAIIIConfig

    # Fluent builder
    cfg = NSGAIIIConfig().pop_size(92).max_generations(500).fixed()

    # Quick defaults
    cfg = NSGAIIIConfig.default(n_obj=3)
"""

from .nsgaiii import DEFAULT_MAX_GENERATIONS, EVALUATION_BACKENDS, NSGAIIIConfig, NSGAIIIConfigData

__all__ = [
    "NSGAIIIConfig",
    "NSGAIIIConfigData",
    "DEFAULT_MAX_GENERATIONS",
    "EVALUATION_BACKENDS",
]
