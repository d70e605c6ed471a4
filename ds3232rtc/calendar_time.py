# Time Codec
#
# Maps the 7-byte timekeeping block (0x00-0x06) to and from CalendarTime.
#
# Register layout: [sec, min, hour, wday, date, month, year]
# - hour is always written in 24-hour mode (bit 6 clear)
# - month bit 7 is the century flag; ignored on read, written clear
# - year register holds YY, the calendar year is 2000 + YY
#
# Epoch conversion is delegated to the host time library (UTC).

import calendar
import time
from dataclasses import dataclass

from ds3232rtc.bcd import bcd_to_dec, dec_to_bcd
from ds3232rtc.registers import CENTURY, DS1307_CH, HR1224, TIME_FIELDS, bit

Y2K_BASE = 2000


@dataclass(frozen=True)
class CalendarTime:
    """
    Broken-down calendar time as stored on the chip.

    Attributes:
        second (int): 0-59
        minute (int): 0-59
        hour (int): 0-23 (always 24-hour form)
        weekday (int): 1-7, 1 = Monday
        day (int): 1-31
        month (int): 1-12
        year (int): Full calendar year (2000-2099)
    """

    second: int
    minute: int
    hour: int
    weekday: int
    day: int
    month: int
    year: int

    def as_tuple(self) -> tuple:
        """Return RTC-style tuple (second, minute, hour, weekday, day, month, year)."""
        return (self.second, self.minute, self.hour, self.weekday, self.day, self.month, self.year)

    def timestamp(self) -> str:
        """Return 'YYYY-MM-DD HH:MM:SS'."""
        return (
            f"{self.year:04d}-{self.month:02d}-{self.day:02d} "
            f"{self.hour:02d}:{self.minute:02d}:{self.second:02d}"
        )


def encode_time(ct: CalendarTime) -> bytes:
    """
    Build the 7-byte BCD payload for the timekeeping registers.

    Parameters
    ----------
    ct : CalendarTime
        Time to encode. Field ranges are trusted, not validated.

    Returns
    -------
    bytes
        [sec, min, hour, wday, date, month, year]; hour in 24-hour mode,
        century bit clear.
    """
    return bytes(
        [
            dec_to_bcd(ct.second),
            dec_to_bcd(ct.minute),
            dec_to_bcd(ct.hour),  # bit 6 clear -> 24-hour mode
            ct.weekday,
            dec_to_bcd(ct.day),
            dec_to_bcd(ct.month),
            dec_to_bcd(ct.year - Y2K_BASE),
        ]
    )


def decode_time(buf) -> CalendarTime:
    """
    Decode the 7 timekeeping registers.

    Args:
        buf: At least 7 bytes read from RTC_SECONDS onward

    Returns:
        CalendarTime: hour in 24-hour form, year rebased to 2000 + YY
    """
    if len(buf) < TIME_FIELDS:
        raise ValueError(f"need {TIME_FIELDS} time registers, got {len(buf)}")
    return CalendarTime(
        second=bcd_to_dec(buf[0] & ~bit(DS1307_CH) & 0xFF),
        minute=bcd_to_dec(buf[1]),
        hour=bcd_to_dec(buf[2] & ~bit(HR1224) & 0xFF),  # assumes 24-hour clock
        weekday=buf[3],
        day=bcd_to_dec(buf[4]),
        month=bcd_to_dec(buf[5] & ~bit(CENTURY) & 0xFF),
        year=bcd_to_dec(buf[6]) + Y2K_BASE,
    )


def from_epoch(seconds) -> CalendarTime:
    """Break a Unix timestamp (UTC) into a CalendarTime."""
    t = time.gmtime(int(seconds))
    return CalendarTime(
        second=t.tm_sec,
        minute=t.tm_min,
        hour=t.tm_hour,
        weekday=t.tm_wday + 1,  # tm_wday: 0 = Monday
        day=t.tm_mday,
        month=t.tm_mon,
        year=t.tm_year,
    )


def to_epoch(ct: CalendarTime) -> int:
    """Return the Unix timestamp (UTC) for *ct*; weekday is ignored."""
    return calendar.timegm((ct.year, ct.month, ct.day, ct.hour, ct.minute, ct.second, 0, 0, 0))


def from_localtime(t) -> CalendarTime:
    """Build a CalendarTime from a time.localtime()-style tuple."""
    return CalendarTime(
        second=t[5],
        minute=t[4],
        hour=t[3],
        weekday=t[6] + 1,
        day=t[2],
        month=t[1],
        year=t[0],
    )
