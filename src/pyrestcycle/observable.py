"""Subscription handles and the thread-safe latest-value cell.

The detector reads telemetry through a :class:`TelemetrySource` and publishes
finished cycles into a :class:`RestCycleSink`. :class:`LatestValue` is the
reference sink: a single slot that overwrites its previous value and notifies
its own subscribers.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Generic, Protocol, TypeVar

from pyrestcycle.models.cycle import RestCycle
from pyrestcycle.models.telemetry import TelemetrySample

_logger = logging.getLogger(__name__)

T = TypeVar("T")


class Subscription:
    """Handle returned by ``subscribe``; call :meth:`unsubscribe` to detach."""

    def __init__(self, on_unsubscribe: Callable[[], None]) -> None:
        self._on_unsubscribe: Callable[[], None] | None = on_unsubscribe
        self._lock = threading.Lock()

    @property
    def active(self) -> bool:
        return self._on_unsubscribe is not None

    def unsubscribe(self) -> None:
        """Detach the callback. Calling this more than once is a no-op."""
        with self._lock:
            callback, self._on_unsubscribe = self._on_unsubscribe, None
        if callback is not None:
            callback()


class TelemetrySource(Protocol):
    """Anything that pushes telemetry samples to subscribed callbacks."""

    def subscribe(self, callback: Callable[[TelemetrySample], None]) -> Subscription: ...


class RestCycleSink(Protocol):
    """Single-slot output the detector writes finished cycles into."""

    def set(self, value: RestCycle) -> None: ...


class LatestValue(Generic[T]):
    """Lock-guarded holder of the most recent value.

    ``set`` overwrites the slot and then notifies subscribers, outside the
    lock, in registration order. A subscriber that raises is logged and does
    not prevent delivery to the others.
    """

    def __init__(self, initial: T | None = None) -> None:
        self._lock = threading.Lock()
        self._value: T | None = initial
        self._subscribers: dict[int, Callable[[T], None]] = {}
        self._next_token = 0

    def get(self) -> T | None:
        with self._lock:
            return self._value

    def set(self, value: T) -> None:
        with self._lock:
            self._value = value
            subscribers = list(self._subscribers.values())
        for callback in subscribers:
            try:
                callback(value)
            except Exception:
                _logger.debug("LatestValue subscriber failed", exc_info=True)

    def clear(self) -> None:
        """Empty the slot without notifying subscribers."""
        with self._lock:
            self._value = None

    def subscribe(self, callback: Callable[[T], None]) -> Subscription:
        with self._lock:
            token = self._next_token
            self._next_token += 1
            self._subscribers[token] = callback
        return Subscription(lambda: self._remove(token))

    def _remove(self, token: int) -> None:
        with self._lock:
            self._subscribers.pop(token, None)
