from __future__ import annotations

from datetime import UTC, datetime

import pytest

from pyrestcycle.exceptions import TelemetryError
from pyrestcycle.ingestion.normalize import normalize_timestamp_seconds, parse_timestamp, safe_float
from pyrestcycle.ingestion.states import sample_from_payload, sample_from_states
from pyrestcycle.models.telemetry import TelemetrySample

_TS = 1_773_450_000
_TS_MS = _TS * 1000


class TestNormalize:
    def test_safe_float(self) -> None:
        assert safe_float("12.5") == 12.5
        assert safe_float("--") is None
        assert safe_float("") is None
        assert safe_float(float("nan")) is None
        assert safe_float("abc") is None

    def test_timestamp_seconds_and_millis(self) -> None:
        assert normalize_timestamp_seconds(_TS) == float(_TS)
        assert normalize_timestamp_seconds(_TS_MS) == float(_TS)
        assert normalize_timestamp_seconds(0) is None
        assert normalize_timestamp_seconds("") is None

    def test_parse_timestamp(self) -> None:
        expected = datetime.fromtimestamp(_TS, tz=UTC)
        assert parse_timestamp(_TS_MS) == expected
        assert parse_timestamp("2026-03-14T08:00:00+00:00") == datetime(2026, 3, 14, 8, tzinfo=UTC)
        naive = datetime(2026, 3, 14, 8)
        assert parse_timestamp(naive) == naive.astimezone()

    def test_naive_values_become_aware(self) -> None:
        for value in (datetime(2026, 3, 14, 8), "2026-03-14T08:00:00"):
            parsed = parse_timestamp(value)
            assert isinstance(parsed, datetime)
            assert parsed.tzinfo is not None
        assert parse_timestamp("2026-03-14T08:00:00") == datetime(2026, 3, 14, 8).astimezone()


class TestTelemetrySample:
    def test_accepts_aliases_and_strings(self) -> None:
        sample = TelemetrySample.model_validate(
            {
                "time": _TS_MS,
                "speed": "0",
                "chargerVoltage": "2",
                "soc": "81",
                "estRange": "240.5",
                "lat": "52.1",
                "lng": "--",
            }
        )
        assert sample.timestamp == datetime.fromtimestamp(_TS, tz=UTC)
        assert sample.speed == 0.0
        assert sample.voltage == 2.0
        assert sample.state_of_charge == 81.0
        assert sample.estimated_range == 240.5
        assert sample.latitude == 52.1
        assert sample.longitude is None

    def test_is_frozen(self) -> None:
        sample = sample_from_payload(
            {"timestamp": _TS, "speed": 0, "voltage": 1, "state_of_charge": 50, "estimated_range": 100}
        )
        with pytest.raises(ValueError):
            sample.speed = 3.0  # type: ignore[misc]


class TestSampleFromStates:
    CHARGE = {"chargerVoltage": 1, "batteryLevel": 77, "estRange": 210.0, "time": _TS_MS}
    STREAM = {"speed": 0, "estLat": 37.39, "estLng": -122.15, "timestamp": _TS_MS + 30_000}

    def test_merges_charge_and_stream_state(self) -> None:
        sample = sample_from_states(self.CHARGE, self.STREAM)
        assert sample.voltage == 1.0
        assert sample.state_of_charge == 77.0
        assert sample.estimated_range == 210.0
        assert sample.latitude == 37.39
        assert sample.longitude == -122.15

    def test_uses_newest_timestamp(self) -> None:
        sample = sample_from_states(self.CHARGE, self.STREAM)
        assert sample.timestamp == datetime.fromtimestamp(_TS + 30, tz=UTC)

    def test_missing_stream_state_means_parked(self) -> None:
        sample = sample_from_states(self.CHARGE)
        assert sample.speed == 0.0
        assert sample.latitude is None
        assert sample.timestamp == datetime.fromtimestamp(_TS, tz=UTC)

    def test_missing_required_value_raises(self) -> None:
        with pytest.raises(TelemetryError) as excinfo:
            sample_from_states({"chargerVoltage": 1, "time": _TS_MS})
        assert "voltage" in excinfo.value.payload

    def test_missing_timestamp_raises(self) -> None:
        with pytest.raises(TelemetryError):
            sample_from_states({"chargerVoltage": 1, "batteryLevel": 50, "estRange": 100})

    def test_flat_payload_errors_are_wrapped(self) -> None:
        with pytest.raises(TelemetryError):
            sample_from_payload({"timestamp": _TS, "speed": "fast"})
