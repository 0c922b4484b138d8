"""Detector configuration for pyrestcycle."""

from __future__ import annotations

import dataclasses
import math
import os
from datetime import time, timedelta
from typing import Any

from pydantic import ValidationError

from pyrestcycle._constants import DEFAULT_VOLTAGE_THRESHOLD, MIN_REST_PERIOD
from pyrestcycle.exceptions import RestCycleConfigError
from pyrestcycle.models.window import ClockTimeWindow


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _parse_clock(name: str, value: str) -> time:
    try:
        return time.fromisoformat(value.strip())
    except ValueError as exc:
        raise RestCycleConfigError(f"{name} must be HH:MM or HH:MM:SS, got {value!r}") from exc


def _parse_number(name: str, value: str) -> float:
    try:
        number = float(value)
    except ValueError as exc:
        raise RestCycleConfigError(f"{name} must be numeric, got {value!r}") from exc
    if not math.isfinite(number):
        raise RestCycleConfigError(f"{name} must be a finite number, got {value!r}")
    return number


@dataclasses.dataclass(frozen=True)
class RestMonitorConfig:
    """Rest cycle detector configuration.

    Parameters
    ----------
    window_enabled : bool
        Only consider samples inside the daily window when ``True``.
    window_from : time
        Start of the active window.
    window_to : time
        End of the active window. Earlier than ``window_from`` means the
        window wraps past midnight.
    time_zone : str or None
        IANA zone used to read sample wall-clock times. ``None`` uses the
        system local zone.
    voltage_threshold : float
        Samples with zero speed and a voltage below this count as idle.
    min_rest_period : timedelta
        A rest cycle must last strictly longer than this to be emitted.
    """

    window_enabled: bool = False
    window_from: time = time(0, 0)
    window_to: time = time(0, 0)
    time_zone: str | None = None
    voltage_threshold: float = DEFAULT_VOLTAGE_THRESHOLD
    min_rest_period: timedelta = MIN_REST_PERIOD

    def __post_init__(self) -> None:
        if self.min_rest_period <= timedelta(0):
            raise RestCycleConfigError(f"min_rest_period must be positive, got {self.min_rest_period}")

    def window(self) -> ClockTimeWindow:
        """Build the clock window described by this configuration."""
        try:
            return ClockTimeWindow(
                enabled=self.window_enabled,
                from_time=self.window_from,
                to_time=self.window_to,
                time_zone=self.time_zone,
            )
        except ValidationError as exc:
            raise RestCycleConfigError(f"invalid monitoring window: {exc}") from exc

    @classmethod
    def from_env(cls, **overrides: Any) -> RestMonitorConfig:
        """Create configuration from ``RESTCYCLE_*`` environment variables.

        Explicit keyword arguments override environment values.

        Raises
        ------
        RestCycleConfigError
            When a variable cannot be parsed.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        if "window_enabled" not in overrides:
            config_kwargs["window_enabled"] = _env_bool(env.get("RESTCYCLE_WINDOW_ENABLED"), False)

        from_env = env.get("RESTCYCLE_WINDOW_FROM")
        if from_env is not None and "window_from" not in overrides:
            config_kwargs["window_from"] = _parse_clock("RESTCYCLE_WINDOW_FROM", from_env)

        to_env = env.get("RESTCYCLE_WINDOW_TO")
        if to_env is not None and "window_to" not in overrides:
            config_kwargs["window_to"] = _parse_clock("RESTCYCLE_WINDOW_TO", to_env)

        zone_env = env.get("RESTCYCLE_TIME_ZONE")
        if zone_env and "time_zone" not in overrides:
            config_kwargs["time_zone"] = zone_env.strip()

        threshold_env = env.get("RESTCYCLE_VOLTAGE_THRESHOLD")
        if threshold_env is not None and "voltage_threshold" not in overrides:
            config_kwargs["voltage_threshold"] = _parse_number("RESTCYCLE_VOLTAGE_THRESHOLD", threshold_env)

        minutes_env = env.get("RESTCYCLE_MIN_REST_MINUTES")
        if minutes_env is not None and "min_rest_period" not in overrides:
            minutes = _parse_number("RESTCYCLE_MIN_REST_MINUTES", minutes_env)
            config_kwargs["min_rest_period"] = timedelta(minutes=minutes)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
