"""
Engine layer: the NSGA-III implementation.

The algorithm lives in `nsga3lab.engine.algorithm.nsgaiii`; shared building
blocks are under `nsga3lab.engine.algorithm.components`.
"""
