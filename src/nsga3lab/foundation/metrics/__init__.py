from .pareto import check_fronts, pareto_filter

__all__ = ["pareto_filter", "check_fronts"]
