# Temperature Reader
#
# The sensor result lives in 0x11 (MSB, integer part) and 0x12 (LSB, top two
# bits are the fraction). Taken together as a signed 16-bit value the unit is
# 1/256 degC with only the upper 10 bits meaningful; dividing by 64 gives
# quarter degrees.


def int16_le(lo: int, hi: int) -> int:
    """Assemble a signed 16-bit integer from little-endian bytes."""
    value = ((hi & 0xFF) << 8) | (lo & 0xFF)
    if value & 0x8000:
        value -= 0x10000
    return value


def decode_temperature(msb: int, lsb: int) -> int:
    """
    Convert the raw temperature register pair to quarter degrees Celsius.

    Args:
        msb (int): Register 0x11
        lsb (int): Register 0x12

    Returns:
        int: Temperature * 4, e.g. 100 for +25.0 degC, -1 for -0.25 degC

    Integer division truncates toward zero.
    """
    raw = int16_le(lsb, msb)
    quarters = abs(raw) // 64
    return -quarters if raw < 0 else quarters


def quarter_to_celsius(quarters: int) -> float:
    return quarters / 4
