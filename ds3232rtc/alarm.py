# Alarm Codec
#
# Alarm 1 occupies 0x07-0x0A (sec, min, hour, day/date), alarm 2 occupies
# 0x0B-0x0D (min, hour, day/date; no seconds register).
#
# Match mask (5 bits, caller supplied):
#   0x01 -> seconds byte bit 7   (A1M1)
#   0x02 -> minutes byte bit 7   (AxM2)
#   0x04 -> hours byte bit 7     (AxM3)
#   0x08 -> day/date byte bit 7  (AxM4)
#   0x10 -> day/date byte bit 6  (DY/DT: match day of week, not day of month)
# A set AxMn bit makes that field "always matches".

from dataclasses import dataclass

from ds3232rtc.bcd import bcd_to_dec, dec_to_bcd
from ds3232rtc.registers import A1M1, A1M2, A1M3, A1M4, ALM1_SECONDS, ALM2_MINUTES, DYDT, bit

MASK_SECONDS = 0x01
MASK_MINUTES = 0x02
MASK_HOURS = 0x04
MASK_DAYDATE = 0x08
MASK_DAY_OF_WEEK = 0x10
MASK_BITS = 0x1F

ALARM_2_SELECT = 0x80  # Alarm-type bit selecting alarm 2

# Alarm types: bit 0x80 selects alarm 2, low 5 bits are the match mask
ALM1_EVERY_SECOND = 0x0F
ALM1_MATCH_SECONDS = 0x0E
ALM1_MATCH_MINUTES = 0x0C  # match minutes *and* seconds
ALM1_MATCH_HOURS = 0x08  # match hours *and* minutes, seconds
ALM1_MATCH_DATE = 0x00  # match date *and* hours, minutes, seconds
ALM1_MATCH_DAY = 0x10  # match day *and* hours, minutes, seconds
ALM2_EVERY_MINUTE = 0x8E
ALM2_MATCH_MINUTES = 0x8C  # match minutes
ALM2_MATCH_HOURS = 0x88  # match hours *and* minutes
ALM2_MATCH_DATE = 0x80  # match date *and* hours, minutes
ALM2_MATCH_DAY = 0x90  # match day *and* hours, minutes

ALARM_TYPES = (
    ALM1_EVERY_SECOND,
    ALM1_MATCH_SECONDS,
    ALM1_MATCH_MINUTES,
    ALM1_MATCH_HOURS,
    ALM1_MATCH_DATE,
    ALM1_MATCH_DAY,
    ALM2_EVERY_MINUTE,
    ALM2_MATCH_MINUTES,
    ALM2_MATCH_HOURS,
    ALM2_MATCH_DATE,
    ALM2_MATCH_DAY,
)

_ALARM_BASE = {1: ALM1_SECONDS, 2: ALM2_MINUTES}
_ALARM_SIZE = {1: 4, 2: 3}


def check_alarm_number(alarm_number: int) -> int:
    """Return *alarm_number* if it is 1 or 2, else raise ValueError."""
    if alarm_number not in (1, 2):
        raise ValueError(f"Invalid alarm number: {alarm_number}")
    return alarm_number


def alarm_register_range(alarm_number: int) -> range:
    """Register addresses belonging to the given alarm."""
    base = _ALARM_BASE[check_alarm_number(alarm_number)]
    return range(base, base + _ALARM_SIZE[alarm_number])


@dataclass(frozen=True)
class AlarmSpec:
    """
    One alarm's match fields and mask.

    Attributes:
        alarm_number (int): 1 or 2
        minutes (int): 0-59
        hours (int): 0-23
        day_date (int): Day of week (1-7) or day of month (1-31)
        seconds (int): 0-59; accepted for alarm 2 but never written
        mask (int): 5-bit match mask (MASK_* flags)
    """

    alarm_number: int
    minutes: int
    hours: int
    day_date: int
    seconds: int = 0
    mask: int = 0

    @classmethod
    def from_type(cls, alarm_type: int, seconds: int = 0, minutes: int = 0, hours: int = 0, day_date: int = 0):
        """
        Build a spec from one of the ALM1_* / ALM2_* alarm types.

        Example:
            AlarmSpec.from_type(ALM2_MATCH_HOURS, minutes=30, hours=6)
        """
        if alarm_type not in ALARM_TYPES:
            raise ValueError(f"Invalid alarm type: 0x{alarm_type:02X}")
        alarm_number = 2 if alarm_type & ALARM_2_SELECT else 1
        return cls(alarm_number, minutes, hours, day_date, seconds, alarm_type & MASK_BITS)

    @property
    def match_day_of_week(self) -> bool:
        """True if the day/date field compares against the day of week."""
        return bool(self.mask & MASK_DAY_OF_WEEK)


def encode_alarm(spec: AlarmSpec) -> tuple:
    """
    Encode an alarm into its register block.

    Mask bits are ORed into the BCD-encoded bytes; nothing else is set.

    Returns:
        tuple: (base_register, payload) - 4 bytes at 0x07 for alarm 1,
        3 bytes at 0x0B for alarm 2
    """
    check_alarm_number(spec.alarm_number)
    mask = spec.mask
    seconds = dec_to_bcd(spec.seconds)
    minutes = dec_to_bcd(spec.minutes)
    hours = dec_to_bcd(spec.hours)
    day_date = dec_to_bcd(spec.day_date)
    if mask & MASK_SECONDS:
        seconds |= bit(A1M1)
    if mask & MASK_MINUTES:
        minutes |= bit(A1M2)
    if mask & MASK_HOURS:
        hours |= bit(A1M3)
    if mask & MASK_DAY_OF_WEEK:
        day_date |= bit(DYDT)
    if mask & MASK_DAYDATE:
        day_date |= bit(A1M4)

    if spec.alarm_number == 1:
        return ALM1_SECONDS, bytes([seconds, minutes, hours, day_date])
    return ALM2_MINUTES, bytes([minutes, hours, day_date])


def decode_alarm(alarm_number: int, buf) -> AlarmSpec:
    """
    Decode an alarm register block read back from the chip.

    Args:
        alarm_number (int): 1 (buf = 4 bytes) or 2 (buf = 3 bytes)
        buf: Raw register bytes starting at the alarm's base register
    """
    check_alarm_number(alarm_number)
    if alarm_number == 1:
        raw_seconds, raw = buf[0], buf[1:4]
    else:
        raw_seconds, raw = None, buf[0:3]
    raw_minutes, raw_hours, raw_day_date = raw

    mask = 0
    seconds = 0
    if raw_seconds is not None:
        if raw_seconds & bit(A1M1):
            mask |= MASK_SECONDS
        seconds = bcd_to_dec(raw_seconds & 0x7F)
    if raw_minutes & bit(A1M2):
        mask |= MASK_MINUTES
    if raw_hours & bit(A1M3):
        mask |= MASK_HOURS
    if raw_day_date & bit(A1M4):
        mask |= MASK_DAYDATE
    if raw_day_date & bit(DYDT):
        mask |= MASK_DAY_OF_WEEK

    return AlarmSpec(
        alarm_number=alarm_number,
        minutes=bcd_to_dec(raw_minutes & 0x7F),
        hours=bcd_to_dec(raw_hours & 0x3F),
        day_date=bcd_to_dec(raw_day_date & 0x3F),
        seconds=seconds,
        mask=mask,
    )
