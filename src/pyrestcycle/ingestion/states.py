"""Build telemetry samples from vehicle live-state payloads.

A vehicle typically reports charge information (battery voltage, state of
charge, estimated range) and driving information (speed, position) through
separate feeds. :func:`sample_from_states` merges the latest payload of each
into one :class:`TelemetrySample`.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from pydantic import ValidationError

from pyrestcycle.exceptions import TelemetryError
from pyrestcycle.ingestion.normalize import first_present, parse_timestamp
from pyrestcycle.models.telemetry import TelemetrySample

_CHARGE_KEYS: dict[str, tuple[str, ...]] = {
    "voltage": ("voltage", "chargerVoltage", "charger_voltage", "batteryVoltage"),
    "state_of_charge": ("state_of_charge", "soc", "batteryLevel", "battery_level", "elecPercent"),
    "estimated_range": ("estimated_range", "estRange", "est_battery_range", "range", "enduranceMileage"),
}

_STREAM_KEYS: dict[str, tuple[str, ...]] = {
    "speed": ("speed", "vehicleSpeed"),
    "latitude": ("latitude", "lat", "estLat"),
    "longitude": ("longitude", "lng", "lon", "estLng"),
}

_TIMESTAMP_KEYS = ("timestamp", "time", "ts")


def _pick(data: Mapping[str, Any], keys: dict[str, tuple[str, ...]]) -> dict[str, Any]:
    source = dict(data)
    picked: dict[str, Any] = {}
    for field_name, aliases in keys.items():
        value = first_present(source, *aliases)
        if value is not None:
            picked[field_name] = value
    return picked


def _latest_timestamp(*payloads: Mapping[str, Any]) -> datetime | None:
    latest: datetime | None = None
    for payload in payloads:
        parsed = parse_timestamp(first_present(dict(payload), *_TIMESTAMP_KEYS))
        if not isinstance(parsed, datetime):
            continue
        if latest is None or parsed.timestamp() > latest.timestamp():
            latest = parsed
    return latest


def sample_from_states(
    charge_state: Mapping[str, Any],
    stream_state: Mapping[str, Any] | None = None,
) -> TelemetrySample:
    """Merge a charge-state and a stream-state payload into one sample.

    The sample takes the newer of the two payload timestamps. A missing
    speed is read as ``0`` since a vehicle that is not streaming is parked.

    Raises
    ------
    TelemetryError
        When a required value is missing or cannot be parsed.
    """
    stream_state = stream_state or {}
    fields = _pick(stream_state, _STREAM_KEYS)
    fields.update(_pick(charge_state, _CHARGE_KEYS))
    fields.setdefault("speed", 0.0)
    fields["timestamp"] = _latest_timestamp(stream_state, charge_state)

    try:
        return TelemetrySample.model_validate(fields)
    except ValidationError as exc:
        raise TelemetryError(f"cannot build telemetry sample: {exc}", payload=fields) from exc


def sample_from_payload(payload: Mapping[str, Any]) -> TelemetrySample:
    """Validate a flat payload that already carries every sample field."""
    try:
        return TelemetrySample.model_validate(dict(payload))
    except ValidationError as exc:
        raise TelemetryError(f"cannot build telemetry sample: {exc}", payload=dict(payload)) from exc
