# ds3232rtc - driver for the DS3232 / DS3231 I2C real-time clock

from ds3232rtc.alarm import (
    ALM1_EVERY_SECOND,
    ALM1_MATCH_DATE,
    ALM1_MATCH_DAY,
    ALM1_MATCH_HOURS,
    ALM1_MATCH_MINUTES,
    ALM1_MATCH_SECONDS,
    ALM2_EVERY_MINUTE,
    ALM2_MATCH_DATE,
    ALM2_MATCH_DAY,
    ALM2_MATCH_HOURS,
    ALM2_MATCH_MINUTES,
    AlarmSpec,
)
from ds3232rtc.calendar_time import CalendarTime
from ds3232rtc.control import SQWAVE_1_HZ, SQWAVE_1024_HZ, SQWAVE_4096_HZ, SQWAVE_8192_HZ, SQWAVE_NONE
from ds3232rtc.ds3232rtc import DS3232RTC
from ds3232rtc.transport import TransportError

__version__ = "1.0.0"
