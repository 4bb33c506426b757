"""
nsga3lab exception hierarchy.

Every error raised by the library derives from NSGA3LabError and carries an
optional suggestion and a details dict.

Example:
    try:
        result = NSGAIII(config).run(problem)
    except ConfigurationError as e:
        print(f"Invalid setup: {e}")
        print(f"Suggestion: {e.suggestion}")
"""

from __future__ import annotations

from typing import Any


class NSGA3LabError(Exception):
    """
    Base exception for all nsga3lab errors.

    Attributes:
        message: Human-readable error description
        suggestion: Optional suggestion for fixing the error
        details: Optional dict with additional context
    """

    def __init__(
        self,
        message: str,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the full error message with suggestion."""
        msg = self.message
        if self.suggestion:
            msg += f"\n\nSuggestion: {self.suggestion}"
        return msg

    def __reduce__(self) -> tuple[Any, ...]:
        # Subclass constructors take different arguments; rebuild from the stored fields.
        return (_restore_error, (type(self), self.message, self.suggestion, self.details))


def _restore_error(
    cls: type[NSGA3LabError], message: str, suggestion: str | None, details: dict[str, Any]
) -> NSGA3LabError:
    err = cls.__new__(cls)
    NSGA3LabError.__init__(err, message, suggestion, details)
    return err


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(NSGA3LabError):
    """Raised when configuration is invalid or incomplete."""

    pass


class InvalidOperatorError(ConfigurationError):
    """Raised when an unknown variation operator is specified."""

    def __init__(
        self,
        operator_type: str,
        operator_name: str,
        available: list[str] | None = None,
    ) -> None:
        message = f"Unknown {operator_type} operator '{operator_name}'."
        suggestion = f"Available {operator_type} operators: {', '.join(available)}" if available else None
        super().__init__(
            message,
            suggestion,
            {"operator_type": operator_type, "operator_name": operator_name},
        )


class MissingConfigError(ConfigurationError):
    """Raised when required configuration is missing."""

    def __init__(self, field: str, config_class: str | None = None) -> None:
        message = f"Missing required configuration: '{field}'."
        suggestion = f"Add '{field}' to your configuration"
        if config_class:
            suggestion += f" or use {config_class}.default() for sensible defaults"
        super().__init__(message, suggestion, {"field": field})


# =============================================================================
# Problem Errors
# =============================================================================


class ProblemError(NSGA3LabError):
    """Base class for problem-related errors."""

    pass


class InvalidProblemError(ProblemError):
    """Raised when an unknown problem is specified."""

    def __init__(self, problem: str, available: list[str] | None = None) -> None:
        message = f"Unknown problem '{problem}'."
        if available:
            suggestion = f"Available problems: {', '.join(available)}."
        else:
            suggestion = "Use available_problem_names() to see registered problems."
        super().__init__(message, suggestion, {"problem": problem})


class ProblemDimensionError(ProblemError, ConfigurationError):
    """Raised when problem dimensions are invalid or an objective vector has the wrong length."""

    def __init__(
        self,
        message: str,
        n_var: int | None = None,
        n_obj: int | None = None,
    ) -> None:
        suggestion = "Check problem dimensions: n_var (genome length), n_obj (objectives)"
        super().__init__(message, suggestion, {"n_var": n_var, "n_obj": n_obj})


# =============================================================================
# Runtime Conditions
# =============================================================================


class OptimizationError(NSGA3LabError):
    """Raised when optimization fails during execution."""

    pass


class EvaluationFailure(OptimizationError):
    """Raised when a single candidate cannot be evaluated (exception or non-finite objectives)."""

    def __init__(self, message: str, candidate: Any = None) -> None:
        suggestion = "Check your problem's evaluate() function for errors"
        super().__init__(message, suggestion, {"candidate": candidate})


class DegenerateHyperplane(OptimizationError):
    """Raised when extreme points do not span a usable normalization hyperplane."""

    def __init__(self, message: str, intercepts: Any = None) -> None:
        super().__init__(message, None, {"intercepts": intercepts})


__all__ = [
    # Base
    "NSGA3LabError",
    # Configuration
    "ConfigurationError",
    "InvalidOperatorError",
    "MissingConfigError",
    # Problem
    "ProblemError",
    "InvalidProblemError",
    "ProblemDimensionError",
    # Runtime
    "OptimizationError",
    "EvaluationFailure",
    "DegenerateHyperplane",
]
