"""Wire the rest cycle state machine to a telemetry source and a sink."""

from __future__ import annotations

import logging
from datetime import timedelta

from pyrestcycle._constants import DEFAULT_VOLTAGE_THRESHOLD, MIN_REST_PERIOD
from pyrestcycle.config import RestMonitorConfig
from pyrestcycle.cycles.machine import CycleState, CycleStateMachine
from pyrestcycle.cycles.window import TimeWindowFilter
from pyrestcycle.models.telemetry import TelemetrySample
from pyrestcycle.models.window import ClockTimeWindow
from pyrestcycle.observable import RestCycleSink, TelemetrySource

_logger = logging.getLogger(__name__)


class RestCycleDetector:
    """Derive rest cycles from a telemetry subscription.

    The detector subscribes to *source* once, at construction, and writes
    every finished cycle into *sink* with ``sink.set(cycle)``. All behaviour
    is driven by the subscription callback. The caller must make sure the
    source never delivers samples concurrently.

    :meth:`close` ends the subscription. A cycle that is open at that point is
    dropped, never flushed to the sink.
    """

    def __init__(
        self,
        source: TelemetrySource,
        sink: RestCycleSink,
        window: ClockTimeWindow | None = None,
        *,
        voltage_threshold: float = DEFAULT_VOLTAGE_THRESHOLD,
        min_rest_period: timedelta = MIN_REST_PERIOD,
    ) -> None:
        self._sink = sink
        self._machine = CycleStateMachine(
            TimeWindowFilter(window or ClockTimeWindow.disabled()),
            sink.set,
            voltage_threshold=voltage_threshold,
            min_rest_period=min_rest_period,
        )
        self._subscription = source.subscribe(self._on_sample)

    @classmethod
    def from_config(
        cls,
        source: TelemetrySource,
        sink: RestCycleSink,
        config: RestMonitorConfig,
    ) -> RestCycleDetector:
        return cls(
            source,
            sink,
            config.window(),
            voltage_threshold=config.voltage_threshold,
            min_rest_period=config.min_rest_period,
        )

    @property
    def state(self) -> CycleState:
        return self._machine.state

    @property
    def active(self) -> bool:
        return self._subscription.active

    def close(self) -> None:
        """Stop receiving samples without emitting an open cycle."""
        if self._machine.state is CycleState.CYCLE_OPEN:
            _logger.debug("Detector closed with a rest cycle in progress; it will not be emitted")
        self._subscription.unsubscribe()

    def _on_sample(self, sample: TelemetrySample) -> None:
        self._machine.handle(sample)
