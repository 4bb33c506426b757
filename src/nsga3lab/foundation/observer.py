from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

import numpy as np

_logger = logging.getLogger(__name__)


@runtime_checkable
class ResultsSink(Protocol):
    """
    Receives progress reports from the generation loop.
    The loop never consumes a return value.
    """

    def report(self, generation: int, best_objectives: np.ndarray) -> None:
        """Called after the initial population (generation 0) and after every generation."""
        ...


class NullResultsSink:
    """Default no-op implementation."""

    def report(self, generation: int, best_objectives: np.ndarray) -> None:
        return None


@dataclass
class GenerationReport:
    generation: int
    best_objectives: np.ndarray


@dataclass
class HistoryResultsSink:
    """Keeps every report in memory."""

    records: list[GenerationReport] = field(default_factory=list)

    def report(self, generation: int, best_objectives: np.ndarray) -> None:
        self.records.append(GenerationReport(generation, np.array(best_objectives, copy=True)))

    @property
    def generations(self) -> list[int]:
        return [r.generation for r in self.records]

    def last(self) -> GenerationReport | None:
        return self.records[-1] if self.records else None


class LoggingResultsSink:
    """Logs the size and per-objective range of front 0."""

    def __init__(self, every: int = 1, logger: logging.Logger | None = None) -> None:
        self.every = max(1, int(every))
        self.logger = logger or _logger

    def report(self, generation: int, best_objectives: np.ndarray) -> None:
        if generation % self.every != 0:
            return
        F = np.asarray(best_objectives)
        if F.size == 0:
            self.logger.info("generation %d: empty front", generation)
            return
        self.logger.info(
            "generation %d: front size=%d, min=%s, max=%s",
            generation,
            F.shape[0],
            np.array2string(F.min(axis=0), precision=4),
            np.array2string(F.max(axis=0), precision=4),
        )


def resolve_results_sink(sink: ResultsSink | None) -> ResultsSink:
    return sink if sink is not None else NullResultsSink()


__all__ = [
    "ResultsSink",
    "NullResultsSink",
    "GenerationReport",
    "HistoryResultsSink",
    "LoggingResultsSink",
    "resolve_results_sink",
]
