"""In-memory telemetry source."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from pyrestcycle.exceptions import RestCycleStateError
from pyrestcycle.models.telemetry import TelemetrySample
from pyrestcycle.observable import Subscription

_logger = logging.getLogger(__name__)


class TelemetryFeed:
    """Push samples to subscribers one at a time.

    Delivery is serialized: concurrent ``publish`` calls from different
    threads wait for each other, and a ``publish`` issued from inside a
    subscriber callback raises :class:`RestCycleStateError` instead of
    re-entering the handlers.
    """

    def __init__(self) -> None:
        self._subscribers: dict[int, Callable[[TelemetrySample], None]] = {}
        self._registry_lock = threading.Lock()
        self._dispatch_lock = threading.RLock()
        self._dispatching = False
        self._next_token = 0

    @property
    def subscriber_count(self) -> int:
        with self._registry_lock:
            return len(self._subscribers)

    def subscribe(self, callback: Callable[[TelemetrySample], None]) -> Subscription:
        with self._registry_lock:
            token = self._next_token
            self._next_token += 1
            self._subscribers[token] = callback
        _logger.debug("Telemetry subscriber registered token=%d", token)
        return Subscription(lambda: self._remove(token))

    def publish(self, sample: TelemetrySample) -> None:
        """Deliver *sample* to every active subscriber in registration order."""
        with self._dispatch_lock:
            if self._dispatching:
                raise RestCycleStateError("re-entrant telemetry publish is not supported")
            self._dispatching = True
            try:
                with self._registry_lock:
                    subscribers = list(self._subscribers.values())
                for callback in subscribers:
                    callback(sample)
            finally:
                self._dispatching = False

    def _remove(self, token: int) -> None:
        with self._registry_lock:
            self._subscribers.pop(token, None)
        _logger.debug("Telemetry subscriber removed token=%d", token)
