# Register Transport Adapter
#
# Addressed single- and multi-byte register access on top of a bus object
# shaped like MicroPython's machine.I2C (writeto / readfrom).
#
# Every register read is a two-phase transaction: a one-byte write that sets
# the chip's internal register pointer, then a sequential read. Failures are
# surfaced as TransportError carrying the bus status code; nothing is retried.

import errno

from ds3232rtc.registers import RTC_ADDR

# ── Bus status codes ─────────────────────────────────────────────────
STATUS_OK = 0
STATUS_DATA_TOO_LONG = 1
STATUS_ADDR_NACK = 2
STATUS_DATA_NACK = 3
STATUS_OTHER = 4
STATUS_TIMEOUT = 5

STATUS_NAMES = {
    STATUS_OK: "ok",
    STATUS_DATA_TOO_LONG: "data too long",
    STATUS_ADDR_NACK: "address not acknowledged",
    STATUS_DATA_NACK: "data not acknowledged",
    STATUS_OTHER: "bus error",
    STATUS_TIMEOUT: "bus timeout",
}

# Bus buffer limits (pointer byte + 31 data bytes per write, 32 per read)
MAX_WRITE_BYTES = 31
MAX_READ_BYTES = 32

_ADDR_NACK_ERRNOS = (
    errno.ENODEV,
    errno.ENXIO,
    getattr(errno, "EREMOTEIO", 121),
)
_TIMEOUT_ERRNOS = (errno.ETIMEDOUT, errno.EAGAIN)


class TransportError(OSError):
    """
    A bus transaction failed.

    The bus status lives in `code`; `errno` is the bus driver's errno when
    the failure came from an OSError, else None.

    Attributes:
        code (int): Bus status code (STATUS_* constant), never 0
        register (int): Register the failed transaction addressed, or None
        message (str): Human-readable description
    """

    def __init__(self, code: int, message: str = None, register: int = None, bus_errno: int = None):
        self.code = code
        self.register = register
        if message is None:
            message = STATUS_NAMES.get(code, f"status {code}")
        self.message = message
        if bus_errno is None:
            super().__init__(message)
        else:
            super().__init__(bus_errno, message)

    def __str__(self) -> str:
        where = f" (reg 0x{self.register:02X})" if self.register is not None else ""
        return f"[status {self.code}] {self.message}{where}"


def status_from_oserror(exc: OSError) -> int:
    """
    Map an OSError raised by the bus driver to a bus status code.

    Args:
        exc: Exception raised by machine.I2C / smbus2

    Returns:
        int: STATUS_* code (never STATUS_OK)
    """
    if isinstance(exc, TransportError):
        return exc.code
    code = exc.errno
    if code is None and exc.args and isinstance(exc.args[0], int):
        code = exc.args[0]
    if code in _ADDR_NACK_ERRNOS:
        return STATUS_ADDR_NACK
    if code == errno.EIO:
        return STATUS_DATA_NACK
    if code in _TIMEOUT_ERRNOS:
        return STATUS_TIMEOUT
    return STATUS_OTHER


class RegisterTransport:
    """
    Addressed register reads/writes against one device on a shared bus.

    The bus is borrowed, never owned: opening/closing it is the caller's job.

    Attributes:
        i2c: Bus object with writeto(addr, buf) and readfrom(addr, nbytes)
        address (int): 7-bit device address
    """

    def __init__(self, i2c, address: int = RTC_ADDR):
        self.i2c = i2c
        self.address = address

    def _writeto(self, buf: bytes, register: int) -> None:
        try:
            acks = self.i2c.writeto(self.address, buf)
        except OSError as e:
            raise TransportError(status_from_oserror(e), register=register, bus_errno=e.errno) from e
        # machine.I2C reports how many bytes were ACKed; smbus2 raises instead
        if isinstance(acks, int) and acks < len(buf):
            code = STATUS_ADDR_NACK if acks == 0 else STATUS_DATA_NACK
            raise TransportError(code, register=register)

    def write(self, register: int, data) -> None:
        """
        Write one or more bytes starting at *register*.

        Args:
            register (int): First register address (0-255, unchecked)
            data: bytes-like payload, at most MAX_WRITE_BYTES long

        Raises:
            TransportError: On any bus failure
        """
        register &= 0xFF
        data = bytes(data)
        if len(data) > MAX_WRITE_BYTES:
            raise TransportError(STATUS_DATA_TOO_LONG, register=register)
        self._writeto(bytes([register]) + data, register)

    def read(self, register: int, count: int) -> bytes:
        """
        Read *count* sequential bytes starting at *register*.

        The register pointer is set first; if that write fails the data read
        is never issued.

        Raises:
            TransportError: On any bus failure or short read
        """
        register &= 0xFF
        if count > MAX_READ_BYTES:
            raise TransportError(STATUS_DATA_TOO_LONG, register=register)
        self._writeto(bytes([register]), register)
        try:
            data = self.i2c.readfrom(self.address, count)
        except OSError as e:
            raise TransportError(status_from_oserror(e), register=register, bus_errno=e.errno) from e
        if data is None or len(data) != count:
            raise TransportError(STATUS_OTHER, "short read", register=register)
        return bytes(data)

    def read_byte(self, register: int) -> int:
        return self.read(register, 1)[0]

    def write_byte(self, register: int, value: int) -> None:
        self.write(register, bytes([value & 0xFF]))

    def update(self, register: int, clear_mask: int = 0, set_mask: int = 0) -> int:
        """
        Read-modify-write a single register.

        Bits in *clear_mask* are cleared, then bits in *set_mask* are set; all
        other bits are written back unchanged. The write is always issued,
        even when the value does not change.

        Returns:
            int: The value written
        """
        old = self.read_byte(register)
        new = ((old & ~clear_mask) | set_mask) & 0xFF
        self.write_byte(register, new)
        return new
