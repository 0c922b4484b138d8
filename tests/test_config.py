from __future__ import annotations

from datetime import UTC, time, timedelta

import pytest

from pyrestcycle._constants import DEFAULT_VOLTAGE_THRESHOLD, MIN_REST_PERIOD
from pyrestcycle.config import RestMonitorConfig
from pyrestcycle.exceptions import RestCycleConfigError

_ENV_KEYS = (
    "RESTCYCLE_WINDOW_ENABLED",
    "RESTCYCLE_WINDOW_FROM",
    "RESTCYCLE_WINDOW_TO",
    "RESTCYCLE_TIME_ZONE",
    "RESTCYCLE_VOLTAGE_THRESHOLD",
    "RESTCYCLE_MIN_REST_MINUTES",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults() -> None:
    config = RestMonitorConfig.from_env()
    assert config.window_enabled is False
    assert config.voltage_threshold == DEFAULT_VOLTAGE_THRESHOLD == 100.0
    assert config.min_rest_period == MIN_REST_PERIOD == timedelta(minutes=60)
    assert config.window().enabled is False


def test_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RESTCYCLE_WINDOW_ENABLED", "yes")
    monkeypatch.setenv("RESTCYCLE_WINDOW_FROM", "22:00")
    monkeypatch.setenv("RESTCYCLE_WINDOW_TO", "06:30:15")
    monkeypatch.setenv("RESTCYCLE_TIME_ZONE", "Europe/Amsterdam")
    monkeypatch.setenv("RESTCYCLE_VOLTAGE_THRESHOLD", "42.5")
    monkeypatch.setenv("RESTCYCLE_MIN_REST_MINUTES", "90")

    config = RestMonitorConfig.from_env()

    assert config.window_enabled is True
    assert config.window_from == time(22, 0)
    assert config.window_to == time(6, 30, 15)
    assert config.time_zone == "Europe/Amsterdam"
    assert config.voltage_threshold == 42.5
    assert config.min_rest_period == timedelta(minutes=90)

    window = config.window()
    assert window.wraps
    assert window.time_zone == "Europe/Amsterdam"


def test_overrides_win_over_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RESTCYCLE_WINDOW_ENABLED", "1")
    monkeypatch.setenv("RESTCYCLE_VOLTAGE_THRESHOLD", "not-a-number")

    config = RestMonitorConfig.from_env(window_enabled=False, voltage_threshold=12.0)

    assert config.window_enabled is False
    assert config.voltage_threshold == 12.0


def test_unrecognised_boolean_falls_back_to_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RESTCYCLE_WINDOW_ENABLED", "maybe")
    assert RestMonitorConfig.from_env().window_enabled is False


@pytest.mark.parametrize(
    ("key", "value"),
    [
        ("RESTCYCLE_WINDOW_FROM", "25:00"),
        ("RESTCYCLE_WINDOW_TO", "noon"),
        ("RESTCYCLE_VOLTAGE_THRESHOLD", "high"),
        ("RESTCYCLE_MIN_REST_MINUTES", "-5"),
        ("RESTCYCLE_MIN_REST_MINUTES", "0"),
        ("RESTCYCLE_MIN_REST_MINUTES", "nan"),
        ("RESTCYCLE_MIN_REST_MINUTES", "inf"),
        ("RESTCYCLE_VOLTAGE_THRESHOLD", "nan"),
    ],
)
def test_invalid_environment_raises_config_error(monkeypatch: pytest.MonkeyPatch, key: str, value: str) -> None:
    monkeypatch.setenv(key, value)
    with pytest.raises(RestCycleConfigError):
        RestMonitorConfig.from_env()


def test_zero_rest_period_rejected() -> None:
    with pytest.raises(RestCycleConfigError):
        RestMonitorConfig(min_rest_period=timedelta(0))


def test_zoned_window_time_raises_config_error() -> None:
    config = RestMonitorConfig(window_enabled=True, window_from=time(22, tzinfo=UTC), window_to=time(6))
    with pytest.raises(RestCycleConfigError):
        config.window()


def test_unknown_time_zone_raises_config_error() -> None:
    config = RestMonitorConfig(window_enabled=True, time_zone="Nowhere/Special")
    with pytest.raises(RestCycleConfigError):
        config.window()


def test_config_is_frozen() -> None:
    config = RestMonitorConfig()
    with pytest.raises(AttributeError):
        config.voltage_threshold = 1.0  # type: ignore[misc]
