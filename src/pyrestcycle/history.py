"""In-memory record of emitted rest cycles for trend reporting."""

from __future__ import annotations

import threading
from datetime import timedelta

from pyrestcycle.models.cycle import RestCycle
from pyrestcycle.observable import LatestValue, Subscription


class RestCycleHistory:
    """Collect every cycle published into a :class:`LatestValue` sink."""

    def __init__(self, sink: LatestValue[RestCycle] | None = None) -> None:
        self._lock = threading.Lock()
        self._cycles: list[RestCycle] = []
        self._subscription: Subscription | None = None
        if sink is not None:
            self.attach(sink)

    def attach(self, sink: LatestValue[RestCycle]) -> Subscription:
        if self._subscription is not None:
            self._subscription.unsubscribe()
        self._subscription = sink.subscribe(self.record)
        return self._subscription

    def detach(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    def record(self, cycle: RestCycle) -> None:
        with self._lock:
            self._cycles.append(cycle)

    @property
    def cycles(self) -> list[RestCycle]:
        with self._lock:
            return list(self._cycles)

    def __len__(self) -> int:
        with self._lock:
            return len(self._cycles)

    @property
    def total_rest_time(self) -> timedelta:
        return sum((cycle.duration for cycle in self.cycles), timedelta(0))

    @property
    def average_range_loss_per_hour(self) -> float | None:
        """Range lost per hour across all recorded rests, weighted by duration."""
        cycles = self.cycles
        hours = sum(cycle.duration.total_seconds() for cycle in cycles) / 3600
        if hours <= 0:
            return None
        lost = sum(cycle.range_lost or 0.0 for cycle in cycles)
        return lost / hours
