"""Telemetry sample model."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from pyrestcycle.ingestion.normalize import safe_float
from pyrestcycle.models._base import SampleTimestamp, TelemetryFloat


class TelemetrySample(BaseModel):
    """One periodic telemetry reading from a vehicle.

    Samples are immutable and are expected to arrive in non-decreasing
    timestamp order. Field ranges are not validated.

    Parameters
    ----------
    timestamp : datetime
        Instant the sample was taken. Epoch seconds or milliseconds are
        accepted and converted to UTC; naive values are read as local time.
    speed : float
        Vehicle speed.
    voltage : float
        Battery voltage as reported by the vehicle.
    state_of_charge : float
        Battery charge level.
    estimated_range : float
        Projected driving distance remaining.
    latitude : float or None
        Latitude in degrees.
    longitude : float or None
        Longitude in degrees.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    timestamp: SampleTimestamp = Field(validation_alias=AliasChoices("timestamp", "time", "ts"))
    speed: TelemetryFloat = Field(validation_alias=AliasChoices("speed", "vehicleSpeed"))
    voltage: TelemetryFloat = Field(validation_alias=AliasChoices("voltage", "chargerVoltage", "batteryVoltage"))
    state_of_charge: TelemetryFloat = Field(
        validation_alias=AliasChoices("state_of_charge", "stateOfCharge", "soc", "batteryLevel"),
    )
    estimated_range: TelemetryFloat = Field(
        validation_alias=AliasChoices("estimated_range", "estimatedRange", "estRange", "range"),
    )
    latitude: float | None = Field(default=None, validation_alias=AliasChoices("latitude", "lat"))
    longitude: float | None = Field(default=None, validation_alias=AliasChoices("longitude", "lng", "lon"))

    @field_validator("latitude", "longitude", mode="before")
    @classmethod
    def _coerce_position(cls, value: Any) -> float | None:
        return safe_float(value)
