# Control / Status Register Logic
#
# Pure bit arithmetic for the control (0x0E) and status (0x0F) registers.
# Each field shares its byte with unrelated bits, so callers apply these
# helpers inside a read-modify-write, never as a blind write.

from ds3232rtc.alarm import check_alarm_number
from ds3232rtc.registers import A1F, A1IE, INTCN, OSF, RS1, RS2, bit

# Square-wave rates (RS2:RS1 value); SQWAVE_NONE routes INT/SQW to interrupts
SQWAVE_1_HZ = 0
SQWAVE_1024_HZ = 1
SQWAVE_4096_HZ = 2
SQWAVE_8192_HZ = 3
SQWAVE_NONE = 4

SQWAVE_FREQS = {
    SQWAVE_1_HZ: 1,
    SQWAVE_1024_HZ: 1024,
    SQWAVE_4096_HZ: 4096,
    SQWAVE_8192_HZ: 8192,
    SQWAVE_NONE: 0,
}

SQWAVE_FIELD_MASK = bit(INTCN) | bit(RS2) | bit(RS1)  # ~0xE3


def check_square_wave_rate(rate: int) -> int:
    if rate not in SQWAVE_FREQS:
        raise ValueError(f"Invalid square-wave rate: {rate}")
    return rate


def square_wave_control(control: int, rate: int) -> int:
    """
    Return the control register value selecting square-wave *rate*.

    SQWAVE_NONE only sets INTCN and leaves the rate bits alone. Any other
    rate clears INTCN, RS2 and RS1 and ORs in the rate. Alarm enables and
    oscillator bits are preserved either way.
    """
    check_square_wave_rate(rate)
    if rate == SQWAVE_NONE:
        return (control | bit(INTCN)) & 0xFF
    return (control & ~SQWAVE_FIELD_MASK & 0xFF) | (rate << RS1)


def alarm_enable_mask(alarm_number: int) -> int:
    """Control register bit enabling the interrupt of *alarm_number*."""
    return bit(A1IE) << (check_alarm_number(alarm_number) - 1)


def alarm_flag_mask(alarm_number: int) -> int:
    """Status register bit flagging that *alarm_number* fired."""
    return bit(A1F) << (check_alarm_number(alarm_number) - 1)


def alarm_interrupt_control(control: int, alarm_number: int, enabled: bool) -> int:
    """Return *control* with the alarm interrupt-enable bit set or cleared."""
    mask = alarm_enable_mask(alarm_number)
    if enabled:
        return (control | mask) & 0xFF
    return control & ~mask & 0xFF


def osc_stop_flag(status: int) -> bool:
    return bool(status & bit(OSF))
