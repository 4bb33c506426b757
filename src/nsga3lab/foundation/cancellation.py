"""
Cooperative cancellation.

The generation loop polls the signal once per generation boundary; a
generation in flight always runs to completion.
"""

from __future__ import annotations

import threading
from typing import Any, Callable, Protocol, runtime_checkable


@runtime_checkable
class CancellationSignal(Protocol):
    def is_cancelled(self) -> bool: ...


class CancellationToken:
    """Thread-safe flag that another thread (or a results sink) can set."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    def is_cancelled(self) -> bool:
        return self._event.is_set()


class NeverCancelled:
    def is_cancelled(self) -> bool:
        return False


class _EventSignal:
    def __init__(self, event: threading.Event) -> None:
        self._event = event

    def is_cancelled(self) -> bool:
        return self._event.is_set()


class _CallableSignal:
    def __init__(self, fn: Callable[[], bool]) -> None:
        self._fn = fn

    def is_cancelled(self) -> bool:
        return bool(self._fn())


def as_cancellation_signal(signal: Any) -> CancellationSignal:
    """
    Normalize the accepted cancellation inputs.

    Accepts None, any object with ``is_cancelled()``, a ``threading.Event``
    or a zero-argument callable returning a bool.
    """
    if signal is None:
        return NeverCancelled()
    if isinstance(signal, CancellationSignal):
        return signal
    if isinstance(signal, threading.Event):
        return _EventSignal(signal)
    if callable(signal):
        return _CallableSignal(signal)
    raise TypeError(f"Unsupported cancellation signal of type {type(signal).__name__}.")


__all__ = [
    "CancellationSignal",
    "CancellationToken",
    "NeverCancelled",
    "as_cancellation_signal",
]
