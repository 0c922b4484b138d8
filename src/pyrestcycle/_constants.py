"""Internal constants shared across the library."""

from datetime import timedelta

#: A rest period must last strictly longer than this to be emitted.
MIN_REST_PERIOD = timedelta(minutes=60)

#: Samples with zero speed and a voltage below this value count as idle.
#: The unit is whatever the telemetry source reports; the value has no
#: documented physical meaning and is kept configurable.
DEFAULT_VOLTAGE_THRESHOLD: float = 100.0

#: Length of a day in microseconds, used for time-of-day arithmetic.
DAY_MICROSECONDS: int = 24 * 3600 * 1_000_000

# Threshold to distinguish epoch seconds from milliseconds.
MS_THRESHOLD: float = 1e11
