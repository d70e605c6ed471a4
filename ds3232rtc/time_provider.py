# Time Provider Abstraction
#
# TimeProvider (host clock) and RTCTimeProvider (DS3232-backed) share one
# small API so loggers and scripts never call the driver directly for
# timestamps.
#
# Providers do not raise: on failure they return sentinel defaults
# ('TIME_ERROR', zeros) instead.

import time


class TimeProvider:
    """
    Time provider backed by the host clock (time.localtime()).

    Implementations provide a consistent API for querying current time,
    independent of the underlying clock or testing mocks.
    """

    def _now(self) -> tuple:
        """Return (second, minute, hour, weekday, day, month, year)."""
        t = time.localtime()
        return (int(t[5]), int(t[4]), int(t[3]), int(t[6]) + 1, int(t[2]), int(t[1]), int(t[0]))

    def now_timestamp(self) -> str:
        """
        Return current time as ISO-8601 timestamp string.

        Returns:
            str: Timestamp in format 'YYYY-MM-DD HH:MM:SS'

        Example:
            '2026-01-29 14:35:42'
        """
        try:
            sec, minute, hour, _, day, month, year = self._now()
            return f'{year:04d}-{month:02d}-{day:02d} {hour:02d}:{minute:02d}:{sec:02d}'
        except Exception:
            return 'TIME_ERROR'

    def now_date_tuple(self) -> tuple:
        """
        Return current date as (year, month, day).

        Example:
            (2026, 1, 29)
        """
        try:
            t = self._now()
            return (t[6], t[5], t[4])
        except Exception:
            return (0, 0, 0)

    def get_seconds_since_midnight(self) -> int:
        """
        Return seconds elapsed since midnight (00:00:00).

        Example:
            At 14:35:42 returns: 14*3600 + 35*60 + 42 = 52542
        """
        try:
            t = self._now()
            return t[0] + t[1] * 60 + t[2] * 3600
        except Exception:
            return 0

    def get_time_tuple(self) -> tuple:
        """
        Return raw time tuple (second, minute, hour, weekday, day, month, year).

        Weekday is 1-7, 1 = Monday, matching the chip's register.
        """
        try:
            return self._now()
        except Exception:
            return (0, 0, 0, 0, 0, 0, 0)


class RTCTimeProvider(TimeProvider):
    """
    TimeProvider backed by the DS3232 chip.

    Every query is one read_time() on the driver; transport errors turn
    into the base class fallbacks.
    """

    def __init__(self, rtc):
        """
        Wrap an existing driver.

        Args:
            rtc: ds3232rtc.DS3232RTC instance

        Example:
            rtc = DS3232RTC(SMBusI2C(1))
            time_provider = RTCTimeProvider(rtc)
        """
        self.rtc = rtc

    def _now(self) -> tuple:
        return self.rtc.read_time().as_tuple()
