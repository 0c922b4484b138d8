"""Time-of-day value type and the clock window configuration model."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time, timedelta
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, ConfigDict, field_validator

from pyrestcycle._constants import DAY_MICROSECONDS


@dataclass(frozen=True, order=True)
class TimeOfDay:
    """A wall-clock time with no date, stored as microseconds since midnight.

    Ordering is plain clock ordering (``00:00`` is the smallest value).
    :meth:`until` measures the *forward* distance to another time of day,
    wrapping past midnight, which is what window membership is built on.
    """

    microseconds: int

    def __post_init__(self) -> None:
        if not 0 <= self.microseconds < DAY_MICROSECONDS:
            raise ValueError(f"time of day out of range: {self.microseconds}us")

    @classmethod
    def from_time(cls, value: time) -> TimeOfDay:
        return cls(((value.hour * 60 + value.minute) * 60 + value.second) * 1_000_000 + value.microsecond)

    @classmethod
    def of(cls, instant: datetime) -> TimeOfDay:
        """Time of day of *instant* as shown on its own wall clock."""
        return cls.from_time(instant.time())

    @classmethod
    def parse(cls, text: str) -> TimeOfDay:
        """Parse ``HH:MM`` or ``HH:MM:SS``."""
        return cls.from_time(time.fromisoformat(text.strip()))

    def until(self, other: TimeOfDay) -> timedelta:
        """Distance going forward in time from this time of day to *other*.

        ``22:00.until(06:00)`` is 8 hours; the distance to itself is zero.
        """
        return timedelta(microseconds=(other.microseconds - self.microseconds) % DAY_MICROSECONDS)

    def to_time(self) -> time:
        seconds, micros = divmod(self.microseconds, 1_000_000)
        minutes, second = divmod(seconds, 60)
        hour, minute = divmod(minutes, 60)
        return time(hour, minute, second, micros)

    def __str__(self) -> str:
        return self.to_time().isoformat()


class ClockTimeWindow(BaseModel):
    """Daily active monitoring window.

    Samples whose time of day falls outside ``from_time``..``to_time`` are
    ignored for cycle detection. The window spans forward from ``from_time``
    and wraps past midnight when ``to_time`` is earlier than ``from_time``.

    Parameters
    ----------
    enabled : bool
        When ``False`` no sample is ever excluded.
    from_time : time
        Start of the active window (inclusive).
    to_time : time
        End of the active window (inclusive).
    time_zone : str or None
        IANA zone used to read the wall clock of timezone-aware timestamps.
        ``None`` uses the system local zone. Naive timestamps are read as
        wall-clock time unchanged.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    enabled: bool = False
    from_time: time = time(0, 0)
    to_time: time = time(0, 0)
    time_zone: str | None = None

    @field_validator("from_time", "to_time")
    @classmethod
    def _naive_clock(cls, value: time) -> time:
        if value.tzinfo is not None:
            raise ValueError("window times must not carry a time zone; use time_zone instead")
        return value

    @field_validator("time_zone")
    @classmethod
    def _known_zone(cls, value: str | None) -> str | None:
        if value is None:
            return value
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"unknown time zone {value!r}") from exc
        return value

    @classmethod
    def disabled(cls) -> ClockTimeWindow:
        return cls(enabled=False)

    @property
    def wraps(self) -> bool:
        """Whether the window crosses midnight."""
        return self.to_time < self.from_time

    def zone(self) -> ZoneInfo | None:
        return ZoneInfo(self.time_zone) if self.time_zone else None
