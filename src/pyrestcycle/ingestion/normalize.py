"""Normalization helpers.

Centralizes defensive parsing of raw telemetry values.
"""

from __future__ import annotations

import math
from datetime import UTC, datetime
from typing import Any

from pyrestcycle._constants import MS_THRESHOLD


def safe_float(value: Any) -> float | None:
    if value is None or value == "" or value == "--":
        return None
    if isinstance(value, bool):
        return float(value)
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(result):
        return None
    return result


def normalize_timestamp_seconds(value: Any) -> float | None:
    """Normalize epoch timestamps to seconds.

    - Empty/missing -> None
    - <= 0 -> None
    - Milliseconds (> 1e11) -> seconds
    """

    if value is None or value == "":
        return None
    try:
        ts = float(value)
    except (TypeError, ValueError):
        return None
    if ts <= 0:
        return None
    if ts > MS_THRESHOLD:
        ts /= 1000.0
    return ts


def _as_aware(value: datetime) -> datetime:
    if value.tzinfo is None:
        # Naive values are wall-clock times in the system local zone.
        return value.astimezone()
    return value


def parse_timestamp(value: Any) -> Any:
    """Coerce epoch seconds/milliseconds, ISO strings and datetimes to an aware datetime.

    Epoch values become UTC. Naive datetimes and ISO strings without an
    offset are read as local wall-clock time, so every sample carries an
    absolute instant. Anything else is passed through so pydantic reports
    the validation error.
    """
    if value is None:
        return value
    if isinstance(value, datetime):
        return _as_aware(value)
    if isinstance(value, str) and safe_float(value) is None:
        try:
            return _as_aware(datetime.fromisoformat(value))
        except ValueError:
            pass
    seconds = normalize_timestamp_seconds(value)
    if seconds is None:
        return value
    return datetime.fromtimestamp(seconds, tz=UTC)


def first_present(data: dict[str, Any], *keys: str) -> Any:
    """Return the value of the first key in *keys* that holds a usable value."""
    for key in keys:
        value = data.get(key)
        if value is not None and value != "" and value != "--":
            return value
    return None
