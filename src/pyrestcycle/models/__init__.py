"""Data models for telemetry samples, rest cycles and clock windows."""

from pyrestcycle.models._base import SampleTimestamp, TelemetryFloat
from pyrestcycle.models.cycle import RestCycle
from pyrestcycle.models.telemetry import TelemetrySample
from pyrestcycle.models.window import ClockTimeWindow, TimeOfDay

__all__ = [
    "ClockTimeWindow",
    "RestCycle",
    "SampleTimestamp",
    "TelemetryFloat",
    "TelemetrySample",
    "TimeOfDay",
]
