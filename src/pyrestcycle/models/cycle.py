"""Rest cycle model."""

from __future__ import annotations

from datetime import datetime, timedelta

from pydantic import BaseModel, ConfigDict

from pyrestcycle.models.telemetry import TelemetrySample


class RestCycle(BaseModel):
    """A period during which the vehicle was stationary and idle.

    While a cycle is open it is owned and mutated by the state machine; the
    ``end_*`` fields and the position are ``None`` until the first update.
    Once emitted, a cycle satisfies ``end_time - start_time`` greater than the
    minimum rest period and ``end_range <= start_range``.
    """

    model_config = ConfigDict(extra="forbid")

    start_time: datetime
    start_range: float
    start_soc: float
    end_time: datetime | None = None
    end_range: float | None = None
    end_soc: float | None = None
    latitude: float | None = None
    longitude: float | None = None

    @classmethod
    def start(cls, sample: TelemetrySample) -> RestCycle:
        return cls(
            start_time=sample.timestamp,
            start_range=sample.estimated_range,
            start_soc=sample.state_of_charge,
        )

    def update(self, sample: TelemetrySample) -> None:
        """Record *sample* as the latest reading of this cycle."""
        self.end_time = sample.timestamp
        self.end_range = sample.estimated_range
        self.end_soc = sample.state_of_charge
        self.latitude = sample.latitude
        self.longitude = sample.longitude

    @property
    def duration(self) -> timedelta:
        if self.end_time is None:
            return timedelta(0)
        return self.end_time - self.start_time

    @property
    def range_lost(self) -> float | None:
        if self.end_range is None:
            return None
        return self.start_range - self.end_range

    @property
    def soc_lost(self) -> float | None:
        if self.end_soc is None:
            return None
        return self.start_soc - self.end_soc

    @property
    def range_loss_per_hour(self) -> float | None:
        """Range lost per hour of rest, ``None`` for an empty cycle."""
        lost = self.range_lost
        hours = self.duration.total_seconds() / 3600
        if lost is None or hours <= 0:
            return None
        return lost / hours
