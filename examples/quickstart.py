"""
Minimal nsga3lab quickstart example.

Runs NSGA-III on the LOTZ benchmark and prints the final front.

Usage:
    python examples/quickstart.py

Requirements:
    pip install -e .
"""
from __future__ import annotations

from nsga3lab import LOTZ, NSGAIII, LoggingResultsSink, NSGAIIIConfig, configure_nsga3lab_logging


def main():
    configure_nsga3lab_logging()

    # 1. Define the problem
    problem = LOTZ(n_var=20)

    # 2. Configure the algorithm
    config = (
        NSGAIIIConfig()
        .pop_size(24)
        .max_generations(300)
        .crossover("uniform", prob=0.9)
        .mutation("bitflip", prob="1/n")
        .reference_directions(divisions=20)
        .fixed()
    )

    # 3. Run optimization
    result = NSGAIII(config).run(problem, seed=1234, results_sink=LoggingResultsSink(every=50))

    # 4. Analyze results
    F = result["F"]
    print(f"Found {len(F)} Pareto-optimal solutions after {result['generation']} generations")
    print(f"Execution time: {result['execution_time']:.2f}s")
    for ind in sorted(result["individuals"], key=lambda i: i.objectives):
        bits = "".join(str(b) for b in ind.genome)
        print(f"  {bits}  leading ones={ind.objectives[0]:.0f}  trailing zeros={ind.objectives[1]:.0f}")


if __name__ == "__main__":
    main()
