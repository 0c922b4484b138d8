"""Time-of-day gating of telemetry samples.

Pure function of the window configuration and the sample's wall-clock time.
"""

from __future__ import annotations

from datetime import datetime

from pyrestcycle.models.window import ClockTimeWindow, TimeOfDay


class TimeWindowFilter:
    """Decide whether a timestamp falls outside the active monitoring window.

    A time of day ``c`` is inside the window when the forward distance from
    ``from_time`` to ``c`` does not exceed the forward distance from
    ``from_time`` to ``to_time``. For a plain window this is
    ``from_time <= c <= to_time``; for a window that wraps past midnight it
    excludes exactly the gap after ``to_time`` and before ``from_time``.
    """

    def __init__(self, window: ClockTimeWindow) -> None:
        self._window = window
        self._zone = window.zone()
        self._start = TimeOfDay.from_time(window.from_time)
        self._span = self._start.until(TimeOfDay.from_time(window.to_time))

    @property
    def window(self) -> ClockTimeWindow:
        return self._window

    def clock_time(self, timestamp: datetime) -> TimeOfDay:
        if timestamp.tzinfo is not None:
            timestamp = timestamp.astimezone(self._zone)
        return TimeOfDay.of(timestamp)

    def is_out_of_range(self, timestamp: datetime) -> bool:
        if not self._window.enabled:
            return False
        return self._start.until(self.clock_time(timestamp)) > self._span
