"""
Opt-in console logging for nsga3lab.

Library modules only create loggers; nothing is printed until an application
calls ``configure_nsga3lab_logging()``. Records logged by the generation loop
carry the generation number and run phase (``extra=run_context(...)``) and the
default format prints them, so interleaved output from several runs stays
readable.
"""

from __future__ import annotations

import logging
from typing import IO, Any

PACKAGE_LOGGER = "nsga3lab"
DEFAULT_FORMAT = "%(levelname)s [gen %(generation)s %(phase)s] %(message)s"


def run_context(generation: int, phase: Any) -> dict[str, Any]:
    """``extra`` mapping tagging a record with the generation and phase."""
    return {"generation": int(generation), "phase": getattr(phase, "value", phase)}


class RunContextFilter(logging.Filter):
    """Fill in placeholder run fields for records logged outside the generation loop."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "generation"):
            record.generation = "-"
        if not hasattr(record, "phase"):
            record.phase = "-"
        return True


def configure_nsga3lab_logging(
    *,
    level: int = logging.INFO,
    stream: IO[str] | None = None,
    fmt: str = DEFAULT_FORMAT,
) -> logging.Handler | None:
    """
    Attach a console handler to the "nsga3lab" logger.

    Nothing happens when the root logger or the package logger already has
    handlers. Returns the new handler, or None when it was not attached.
    """
    root = logging.getLogger()
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if root.handlers or package_logger.handlers:
        return None

    handler = logging.StreamHandler(stream)
    # On the handler, not the logger: records from child loggers skip logger filters.
    handler.addFilter(RunContextFilter())
    handler.setFormatter(logging.Formatter(fmt))
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    package_logger.propagate = False
    return handler


__all__ = ["DEFAULT_FORMAT", "RunContextFilter", "configure_nsga3lab_logging", "run_context"]
