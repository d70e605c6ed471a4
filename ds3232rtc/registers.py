# DS3232 / DS3231 Register Map
#
# Addresses and bit positions of the chip's register file. Every module that
# touches the device goes through these names instead of raw offsets.

RTC_ADDR = 0x68  # 7-bit I2C device address

# ── Timekeeping registers ────────────────────────────────────────────
RTC_SECONDS = 0x00
RTC_MINUTES = 0x01
RTC_HOURS = 0x02
RTC_DAY = 0x03  # Day of week (1-7)
RTC_DATE = 0x04  # Day of month
RTC_MONTH = 0x05
RTC_YEAR = 0x06
TIME_FIELDS = 7  # sec, min, hour, wday, date, month, year

# ── Alarm registers ──────────────────────────────────────────────────
ALM1_SECONDS = 0x07
ALM1_MINUTES = 0x08
ALM1_HOURS = 0x09
ALM1_DAYDATE = 0x0A
ALM2_MINUTES = 0x0B
ALM2_HOURS = 0x0C
ALM2_DAYDATE = 0x0D

# ── Control / status / aging / temperature ──────────────────────────
RTC_CONTROL = 0x0E
RTC_STATUS = 0x0F
RTC_AGING = 0x10
RTC_TEMP_MSB = 0x11
RTC_TEMP_LSB = 0x12
SRAM_START_ADDR = 0x14  # DS3232 only
SRAM_SIZE = 236

REGISTER_DUMP_SIZE = 0x13  # 0x00..0x12

# ── Bit positions ────────────────────────────────────────────────────
# Alarm registers
A1M1 = 7
A1M2 = 7
A1M3 = 7
A1M4 = 7
A2M2 = 7
A2M3 = 7
A2M4 = 7
DYDT = 6

# Control register
EOSC = 7
BBSQW = 6
CONV = 5
RS2 = 4
RS1 = 3
INTCN = 2
A2IE = 1
A1IE = 0

# Status register
OSF = 7
BB32KHZ = 6
CRATE1 = 5
CRATE0 = 4
EN32KHZ = 3
BSY = 2
A2F = 1
A1F = 0

# Time registers
DS1307_CH = 7  # Seconds register bit 7
HR1224 = 6  # Hours register: 1 = 12-hour mode
CENTURY = 7  # Month register


def bit(n: int) -> int:
    """Return the single-bit mask for bit position *n*."""
    return 1 << n
