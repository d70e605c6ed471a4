# SMBus Bus Adapter
#
# Presents a Linux i2c-dev bus (via smbus2) with the machine.I2C calls the
# register transport uses, so the same driver runs on a Raspberry Pi and on a
# MicroPython board.
#
# Plain i2c_msg transactions are used instead of the SMBus block helpers so
# the pointer write and the data read stay two separate bus transactions.

from smbus2 import SMBus, i2c_msg


class SMBusI2C:
    """
    machine.I2C-compatible wrapper around smbus2.SMBus.

    Attributes:
        bus: smbus2.SMBus instance (opened here unless one is passed in)
    """

    def __init__(self, bus=1):
        """
        Args:
            bus: Bus number (e.g. 1 for /dev/i2c-1) or an already opened
                smbus2.SMBus instance. A passed-in instance is not closed by
                close().
        """
        if isinstance(bus, int):
            self.bus = SMBus(bus)
            self._owns_bus = True
        else:
            self.bus = bus
            self._owns_bus = False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def writeto(self, addr: int, buf, stop: bool = True) -> int:
        """Write *buf* to device *addr*; returns the number of bytes sent."""
        msg = i2c_msg.write(addr, list(buf))
        self.bus.i2c_rdwr(msg)
        return len(buf)

    def readfrom(self, addr: int, nbytes: int, stop: bool = True) -> bytes:
        """Read *nbytes* from device *addr*."""
        msg = i2c_msg.read(addr, nbytes)
        self.bus.i2c_rdwr(msg)
        return bytes(list(msg))

    def scan(self) -> list:
        """Return addresses (0x08-0x77) that acknowledge a one-byte read."""
        found = []
        for addr in range(0x08, 0x78):
            try:
                self.bus.read_byte(addr)
            except OSError:
                continue
            found.append(addr)
        return found

    def close(self) -> None:
        if self._owns_bus and self.bus is not None:
            self.bus.close()
        self.bus = None
