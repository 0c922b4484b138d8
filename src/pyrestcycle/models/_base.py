"""Shared annotated types for pyrestcycle models."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any

from pydantic import BeforeValidator

from pyrestcycle.ingestion.normalize import parse_timestamp, safe_float

SampleTimestamp = Annotated[datetime, BeforeValidator(parse_timestamp)]
"""Annotated type that coerces epoch ints (seconds or ms), ISO strings and naive datetimes to aware datetimes."""


def _coerce_float(value: Any) -> Any:
    parsed = safe_float(value)
    return value if parsed is None else parsed


TelemetryFloat = Annotated[float, BeforeValidator(_coerce_float)]
"""Float that also accepts numeric strings as reported by vehicle feeds."""
