"""Custom exception hierarchy for pyrestcycle."""

from __future__ import annotations

from typing import Any


class RestCycleError(Exception):
    """Base exception for all pyrestcycle errors."""


class RestCycleConfigError(RestCycleError):
    """Invalid or missing configuration."""


class TelemetryError(RestCycleError):
    """A raw telemetry payload could not be turned into a sample."""

    def __init__(self, message: str, *, payload: dict[str, Any] | None = None) -> None:
        self.payload = payload or {}
        super().__init__(message)


class RestCycleStateError(RestCycleError):
    """Samples were delivered re-entrantly into a serialized feed.

    The detector owns a single mutable in-progress cycle and cannot
    handle a sample while another one is still being processed.
    """
