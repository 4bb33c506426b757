"""
Cooperative cancellation from another thread.

A timer cancels the run after half a second; the loop finishes the
generation in flight and returns the population it has.
"""
from __future__ import annotations

import threading

from nsga3lab import CancellationToken, NSGAIII, NSGAIIIConfig, make_problem


def main():
    problem = make_problem("bin_knapsack", n_var=60)
    config = NSGAIIIConfig.default(n_obj=2, max_generations=100000)
    token = CancellationToken()
    threading.Timer(0.5, token.cancel).start()

    result = NSGAIII(config).run(problem, cancellation=token)
    print(f"cancelled={result['cancelled']} after {result['generation']} generations")
    print(f"front size={len(result['F'])}, evaluations={result['n_eval']}")


if __name__ == "__main__":
    main()
