# BCD Codec
#
# The chip keeps every calendar field as packed binary-coded decimal:
# tens digit in the high nibble, ones digit in the low nibble.
# Status bits sharing a byte (12/24, century, CH) must be masked off by the
# caller before decoding.


def dec_to_bcd(val: int) -> int:
    """Convert a decimal value (0-99) to BCD encoding."""
    return val + 6 * (val // 10)


def bcd_to_dec(val: int) -> int:
    """Convert a BCD byte to its decimal value (0-99)."""
    return val - 6 * (val >> 4)
