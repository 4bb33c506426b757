"""NSGA-III configuration builder and probability expressions."""

from __future__ import annotations

import json

import pytest

from nsga3lab.engine.algorithm.components.utils import resolve_prob_expression
from nsga3lab.engine.algorithm.config import DEFAULT_MAX_GENERATIONS, NSGAIIIConfig, NSGAIIIConfigData
from nsga3lab.foundation.exceptions import ConfigurationError, InvalidOperatorError, MissingConfigError


def _builder() -> NSGAIIIConfig:
    return NSGAIIIConfig().pop_size(20).max_generations(50)


def test_builder_defaults():
    cfg = _builder().fixed()
    assert isinstance(cfg, NSGAIIIConfigData)
    assert cfg.crossover == ("uniform", {"prob": 0.9})
    assert cfg.mutation == ("bitflip", {"prob": "1/n"})
    assert cfg.evaluation == {"backend": "serial"}
    assert cfg.seed == 1234


def test_builder_round_trips_to_json():
    cfg = (
        _builder()
        .crossover("two_point", prob=0.8)
        .mutation("bitflip", prob="2/n")
        .reference_directions(divisions=12)
        .evaluation("threads", n_workers=2)
        .seed(7)
        .fixed()
    )
    data = json.loads(cfg.to_json())
    assert data["pop_size"] == 20
    assert data["crossover"] == ["two_point", {"prob": 0.8}]
    assert data["reference_directions"]["divisions"] == 12
    assert data["evaluation"]["backend"] == "threads"
    assert data["seed"] == 7
    assert cfg.to_dict()["max_generations"] == 50


def test_missing_fields_raise():
    with pytest.raises(MissingConfigError) as info:
        NSGAIIIConfig().max_generations(10).fixed()
    assert "NSGAIIIConfig.default()" in str(info.value)
    with pytest.raises(MissingConfigError):
        NSGAIIIConfig().pop_size(10).fixed()


@pytest.mark.parametrize("pop_size", [0, 1, -4, 2.5])
def test_invalid_population_size(pop_size):
    with pytest.raises(ConfigurationError):
        NSGAIIIConfig().pop_size(pop_size).max_generations(5).fixed()


def test_invalid_values_raise():
    with pytest.raises(ConfigurationError):
        NSGAIIIConfig().pop_size(10).max_generations(-1).fixed()
    with pytest.raises(InvalidOperatorError):
        _builder().crossover("sbx").fixed()
    with pytest.raises(InvalidOperatorError):
        _builder().mutation("gaussian").fixed()
    with pytest.raises(ConfigurationError):
        _builder().mutation("bitflip", prob=2.0).fixed()
    with pytest.raises(ConfigurationError):
        _builder().reference_directions(divisions=0).fixed()
    with pytest.raises(ConfigurationError):
        _builder().reference_directions(divisions=4, inner_divisions=-1).fixed()
    with pytest.raises(ConfigurationError):
        _builder().evaluation("gpu").fixed()


@pytest.mark.parametrize("n_obj, pop_size", [(2, 16), (3, 92), (8, 156)])
def test_default_population_covers_reference_points(n_obj, pop_size):
    cfg = NSGAIIIConfig.default(n_obj=n_obj)
    assert cfg.pop_size == pop_size
    assert cfg.max_generations == DEFAULT_MAX_GENERATIONS


def test_default_with_explicit_pop_size():
    cfg = NSGAIIIConfig.default(pop_size=40, n_obj=3, max_generations=25)
    assert cfg.pop_size == 40
    assert cfg.max_generations == 25
    assert cfg.reference_directions["divisions"] == 12


def test_resolve_prob_expression():
    assert resolve_prob_expression("1/n", 10) == pytest.approx(0.1)
    assert resolve_prob_expression("3/n", 2) == 1.0
    assert resolve_prob_expression(None, 30, default=0.9) == 0.9
    assert resolve_prob_expression("0.25", 10) == 0.25
    assert resolve_prob_expression(0.5, 10) == 0.5


@pytest.mark.parametrize("value", ["bogus", "x/n", 1.5, -0.1])
def test_resolve_prob_expression_rejects_invalid(value):
    with pytest.raises(ConfigurationError):
        resolve_prob_expression(value, 10)


def test_from_json_restores_operator_tuples():
    cfg = _builder().crossover("hux", prob=0.6).seed(3).fixed()
    restored = NSGAIIIConfigData.from_json(cfg.to_json())
    assert restored == cfg
    assert restored.crossover == ("hux", {"prob": 0.6})


def test_from_dict_validates():
    cfg = NSGAIIIConfigData.from_dict({"pop_size": 12, "max_generations": 4})
    assert cfg.mutation == ("bitflip", {"prob": "1/n"})
    with pytest.raises(MissingConfigError):
        NSGAIIIConfigData.from_dict({"pop_size": 12})
    with pytest.raises(ConfigurationError):
        NSGAIIIConfigData.from_dict({"pop_size": 12, "max_generations": 4, "engine": "numba"})
    with pytest.raises(InvalidOperatorError):
        NSGAIIIConfigData.from_dict({"pop_size": 12, "max_generations": 4, "crossover": ["sbx", {}]})
