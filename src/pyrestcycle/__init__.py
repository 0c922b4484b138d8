"""pyrestcycle - Detect vehicle rest cycles from live telemetry samples."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyrestcycle")
except PackageNotFoundError:
    __version__ = "0+local"
from pyrestcycle._constants import DEFAULT_VOLTAGE_THRESHOLD, MIN_REST_PERIOD
from pyrestcycle.config import RestMonitorConfig
from pyrestcycle.cycles import CycleState, CycleStateMachine, RestCycleDetector, TimeWindowFilter
from pyrestcycle.exceptions import (
    RestCycleConfigError,
    RestCycleError,
    RestCycleStateError,
    TelemetryError,
)
from pyrestcycle.feed import TelemetryFeed
from pyrestcycle.history import RestCycleHistory
from pyrestcycle.models import ClockTimeWindow, RestCycle, TelemetrySample, TimeOfDay
from pyrestcycle.observable import LatestValue, RestCycleSink, Subscription, TelemetrySource

__all__ = [
    "__version__",
    "DEFAULT_VOLTAGE_THRESHOLD",
    "MIN_REST_PERIOD",
    "ClockTimeWindow",
    "CycleState",
    "CycleStateMachine",
    "LatestValue",
    "RestCycle",
    "RestCycleConfigError",
    "RestCycleDetector",
    "RestCycleError",
    "RestCycleHistory",
    "RestCycleSink",
    "RestCycleStateError",
    "RestMonitorConfig",
    "Subscription",
    "TelemetryError",
    "TelemetryFeed",
    "TelemetrySample",
    "TelemetrySource",
    "TimeOfDay",
    "TimeWindowFilter",
]
