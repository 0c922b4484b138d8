"""Rest cycle state machine.

The machine is either waiting for the vehicle to go idle or holding one open
:class:`RestCycle`. It is deterministic: the same sample sequence with the
same configuration always produces the same emitted cycles.

Samples must be handled one at a time. A cycle still open when the sample
stream stops is never finalized.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import timedelta
from enum import StrEnum

from pyrestcycle._constants import DEFAULT_VOLTAGE_THRESHOLD, MIN_REST_PERIOD
from pyrestcycle.cycles.window import TimeWindowFilter
from pyrestcycle.models.cycle import RestCycle
from pyrestcycle.models.telemetry import TelemetrySample

_logger = logging.getLogger(__name__)


class CycleState(StrEnum):
    NO_CYCLE = "no_cycle"
    CYCLE_OPEN = "cycle_open"


class CycleStateMachine:
    """Track an in-progress rest cycle and emit it once it is complete."""

    def __init__(
        self,
        window_filter: TimeWindowFilter,
        emit: Callable[[RestCycle], None],
        *,
        voltage_threshold: float = DEFAULT_VOLTAGE_THRESHOLD,
        min_rest_period: timedelta = MIN_REST_PERIOD,
    ) -> None:
        self._filter = window_filter
        self._emit = emit
        self._voltage_threshold = voltage_threshold
        self._min_rest_period = min_rest_period
        self._cycle: RestCycle | None = None

    @property
    def state(self) -> CycleState:
        return CycleState.NO_CYCLE if self._cycle is None else CycleState.CYCLE_OPEN

    @property
    def current_cycle(self) -> RestCycle | None:
        """Snapshot of the open cycle, if any."""
        return None if self._cycle is None else self._cycle.model_copy()

    def is_idle(self, sample: TelemetrySample) -> bool:
        return sample.speed == 0 and sample.voltage < self._voltage_threshold

    def handle(self, sample: TelemetrySample) -> RestCycle | None:
        """Advance the machine with one sample.

        Returns the cycle written to the sink, or ``None`` when nothing was
        emitted for this sample.
        """
        if self._filter.is_out_of_range(sample.timestamp):
            if self._cycle is None:
                return None
            _logger.debug("Sample at %s outside window; closing open cycle", sample.timestamp)
            return self._finalize(self._cycle, sample)

        idle = self.is_idle(sample)
        if self._cycle is None:
            if idle:
                self._cycle = RestCycle.start(sample)
                _logger.debug("Rest cycle started at %s range=%s", sample.timestamp, sample.estimated_range)
            return None

        if idle:
            self._cycle.update(sample)
            return None
        return self._finalize(self._cycle, sample)

    def _finalize(self, cycle: RestCycle, sample: TelemetrySample) -> RestCycle | None:
        self._cycle = None
        cycle.update(sample)

        if cycle.duration <= self._min_rest_period:
            _logger.debug("Rest cycle discarded: duration %s too short", cycle.duration)
            return None
        # A telemetry gap can hide a charge, making the rest appear to gain range.
        # NaN never satisfies the emit condition.
        if cycle.end_range is None or not cycle.end_range <= cycle.start_range:
            _logger.debug(
                "Rest cycle discarded: range went from %s to %s",
                cycle.start_range,
                cycle.end_range,
            )
            return None

        _logger.debug(
            "Rest cycle emitted start=%s end=%s range %s -> %s",
            cycle.start_time,
            cycle.end_time,
            cycle.start_range,
            cycle.end_range,
        )
        self._emit(cycle)
        return cycle
