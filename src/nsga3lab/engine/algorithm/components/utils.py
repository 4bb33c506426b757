"""
Shared helpers for algorithm configuration values.
"""

from __future__ import annotations

from nsga3lab.foundation.exceptions import ConfigurationError


def resolve_prob_expression(
    value: str | float | None,
    n_var: int,
    default: float = 0.1,
) -> float:
    """
    Parse probability expressions like "1/n" or direct float values.

    Parameters
    ----------
    value : str | float | None
        Probability value. Can be:
        - None: returns default
        - float: returned as-is (must lie in [0, 1])
        - str ending with "/n": numerator divided by n_var (e.g., "2/n" → 2/n_var)
    n_var : int
        Genome length (used for "k/n" expressions).
    default : float
        Default value if value is None.

    Returns
    -------
    float
        Probability value in [0, 1].

    Examples
    --------
    >>> resolve_prob_expression("1/n", 10)
    0.1
    >>> resolve_prob_expression(None, 30, default=0.9)
    0.9
    """
    if value is None:
        return default

    if isinstance(value, str):
        text = value.lower().strip()
        if text.endswith("/n"):
            numerator_str = text[:-2].strip()
            try:
                numerator = float(numerator_str) if numerator_str else 1.0
            except ValueError as exc:
                raise ConfigurationError(f"Invalid probability expression '{value}'.") from exc
            return min(1.0, max(0.0, numerator / max(1, n_var)))
        try:
            prob = float(text)
        except ValueError as exc:
            raise ConfigurationError(
                f"Invalid probability expression '{value}'.",
                suggestion="Use a float in [0, 1] or an expression such as '1/n'.",
            ) from exc
    else:
        prob = float(value)

    if not 0.0 <= prob <= 1.0:
        raise ConfigurationError(f"Probability must lie in [0, 1], got {prob}.")
    return prob


__all__ = ["resolve_prob_expression"]
