"""Tests for the nsga3lab exception hierarchy."""

from __future__ import annotations

import pytest


class TestNSGA3LabError:
    """Test base NSGA3LabError class."""

    def test_basic_error(self):
        from nsga3lab.foundation.exceptions import NSGA3LabError

        err = NSGA3LabError("Something went wrong")
        assert "Something went wrong" in str(err)
        assert err.message == "Something went wrong"
        assert err.suggestion is None
        assert err.details == {}

    def test_error_with_suggestion(self):
        """The suggestion is appended to the rendered message."""
        from nsga3lab.foundation.exceptions import NSGA3LabError

        err = NSGA3LabError("Something went wrong", suggestion="Try this instead")
        assert "Suggestion: Try this instead" in str(err)
        assert err.suggestion == "Try this instead"

    def test_error_with_details(self):
        from nsga3lab.foundation.exceptions import NSGA3LabError

        err = NSGA3LabError("Error", details={"key": "value"})
        assert err.details == {"key": "value"}


class TestConfigurationErrors:
    def test_invalid_operator_lists_available(self):
        from nsga3lab.foundation.exceptions import ConfigurationError, InvalidOperatorError

        err = InvalidOperatorError("crossover", "sbx", ["one_point", "uniform"])
        assert isinstance(err, ConfigurationError)
        assert "sbx" in str(err)
        assert "one_point, uniform" in str(err)
        assert err.details["operator_type"] == "crossover"

    def test_missing_config_mentions_default(self):
        from nsga3lab.foundation.exceptions import MissingConfigError

        err = MissingConfigError("pop_size", "NSGAIIIConfig")
        assert "pop_size" in str(err)
        assert "NSGAIIIConfig.default()" in str(err)


class TestProblemErrors:
    def test_dimension_error_is_configuration_error(self):
        """A wrong objective length must be fatal like any other setup error."""
        from nsga3lab.foundation.exceptions import ConfigurationError, ProblemDimensionError, ProblemError

        err = ProblemDimensionError("bad length", n_var=10, n_obj=2)
        assert isinstance(err, ProblemError)
        assert isinstance(err, ConfigurationError)
        assert err.details == {"n_var": 10, "n_obj": 2}

    def test_invalid_problem_lists_available(self):
        from nsga3lab.foundation.exceptions import InvalidProblemError

        err = InvalidProblemError("zdt1", ["oneminmax", "lotz"])
        assert "zdt1" in str(err)
        assert "oneminmax, lotz" in str(err)


class TestRuntimeConditions:
    def test_evaluation_failure_keeps_candidate(self):
        from nsga3lab.foundation.exceptions import EvaluationFailure, OptimizationError

        err = EvaluationFailure("boom", candidate=[0, 1])
        assert isinstance(err, OptimizationError)
        assert err.details["candidate"] == [0, 1]

    def test_degenerate_hyperplane_keeps_intercepts(self):
        from nsga3lab.foundation.exceptions import DegenerateHyperplane

        err = DegenerateHyperplane("flat", intercepts=[1.0, -1.0])
        assert err.details["intercepts"] == [1.0, -1.0]
        assert err.suggestion is None

    def test_all_errors_share_base(self):
        from nsga3lab.foundation import exceptions

        for name in exceptions.__all__:
            cls = getattr(exceptions, name)
            assert issubclass(cls, exceptions.NSGA3LabError)

    def test_catchable_as_base(self):
        from nsga3lab.foundation.exceptions import EvaluationFailure, NSGA3LabError

        with pytest.raises(NSGA3LabError):
            raise EvaluationFailure("lost candidate")


class TestPickling:
    """Errors raised in worker processes cross the process boundary by pickling."""

    @pytest.mark.parametrize(
        "factory",
        [
            lambda E: E.ProblemDimensionError("Objective vector has length 3, expected 2.", n_var=10, n_obj=2),
            lambda E: E.EvaluationFailure("Candidate crashed.", candidate=[0, 1, 1]),
            lambda E: E.InvalidOperatorError("mutation", "gaussian", ["bitflip"]),
            lambda E: E.MissingConfigError("pop_size", "NSGAIIIConfig"),
        ],
    )
    def test_round_trip_keeps_message_and_details(self, factory):
        import pickle

        from nsga3lab.foundation import exceptions

        err = factory(exceptions)
        clone = pickle.loads(pickle.dumps(err))
        assert type(clone) is type(err)
        assert str(clone) == str(err)
        assert str(clone).count("Suggestion:") == 1
        assert clone.message == err.message
        assert clone.suggestion == err.suggestion
        assert clone.details == err.details
