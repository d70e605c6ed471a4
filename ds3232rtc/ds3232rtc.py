# DS3232 / DS3231 Real-Time Clock Driver
#
# One driver instance per chip, bound to a bus supplied by the caller
# (machine.I2C on a board, SMBusI2C on Linux). No module-level instance.
#
# Writes flow model -> codec -> transport, reads the other way. Bit-level
# edits of the control/status registers are always read-modify-write.
#
# Error handling: every bus-touching call raises TransportError on failure.
# last_error keeps the most recent status code for diagnostics only.
#
# Not thread-safe: concurrent users of one chip must serialise externally.

from ds3232rtc import alarm as alarm_codec
from ds3232rtc import calendar_time, control, temperature as temp_codec
from ds3232rtc.registers import (
    OSF,
    REGISTER_DUMP_SIZE,
    RTC_ADDR,
    RTC_CONTROL,
    RTC_SECONDS,
    RTC_STATUS,
    RTC_TEMP_MSB,
    TIME_FIELDS,
    bit,
)
from ds3232rtc.transport import STATUS_OK, RegisterTransport, TransportError

_MODULE = "DS3232RTC"


class DS3232RTC:
    """
    Driver for the DS3232 / DS3231 I2C real-time clock.

    Attributes:
        transport (RegisterTransport): Register access on the borrowed bus
        logger: Optional EventLogger for diagnostics
        last_error (int): Status code of the last failed transaction, 0 after
            a successful operation
    """

    def __init__(self, i2c, address: int = RTC_ADDR, logger=None):
        """
        Bind the driver to a bus.

        Args:
            i2c: machine.I2C or SMBusI2C instance (borrowed, not owned)
            address (int): I2C address (default 0x68)
            logger: EventLogger instance (optional)
        """
        self.transport = RegisterTransport(i2c, address)
        self.logger = logger
        self.last_error = STATUS_OK

    # ── Diagnostics ───────────────────────────────────────────────────

    def _failed(self, operation: str, exc: TransportError) -> None:
        # Log first: an RTC-stamped logger reads the chip, which resets last_error
        if self.logger is not None:
            self.logger.warning(_MODULE, f"{operation} failed: {exc}")
        self.last_error = exc.code

    def _ok(self) -> None:
        self.last_error = STATUS_OK

    def _debug(self, message: str) -> None:
        if self.logger is not None:
            self.logger.debug(_MODULE, message)

    # ── Raw register access ───────────────────────────────────────────

    def read_registers(self, address: int, count: int) -> bytes:
        """Read *count* bytes starting at register *address* (0-255, unchecked)."""
        try:
            data = self.transport.read(address, count)
        except TransportError as e:
            self._failed("read_registers", e)
            raise
        self._ok()
        return data

    def write_registers(self, address: int, data) -> None:
        """Write *data* starting at register *address* (0-255, unchecked)."""
        try:
            self.transport.write(address, data)
        except TransportError as e:
            self._failed("write_registers", e)
            raise
        self._ok()

    def read_register(self, address: int) -> int:
        return self.read_registers(address, 1)[0]

    def write_register(self, address: int, value: int) -> None:
        self.write_registers(address, bytes([value & 0xFF]))

    # ── Time ──────────────────────────────────────────────────────────

    def read_time(self) -> calendar_time.CalendarTime:
        """
        Read the current time from the chip.

        Returns:
            CalendarTime: Decoded time (hour always 24-hour form)

        Raises:
            TransportError: Pointer write or data read failed; no partial
                time is ever returned
        """
        try:
            buf = self.transport.read(RTC_SECONDS, TIME_FIELDS)
        except TransportError as e:
            self._failed("read_time", e)
            raise
        self._ok()
        return calendar_time.decode_time(buf)

    def write_time(self, ct: calendar_time.CalendarTime) -> None:
        """
        Set the chip's time and clear the oscillator stop flag.

        The 7 time registers are written in one transaction (24-hour mode).
        If that succeeds the OSF bit is cleared by read-modify-write, even
        when already clear. If the time write fails, OSF is left untouched.

        Raises:
            TransportError: From whichever step failed first; the failing
                register (0x00 for the time block, 0x0F for the OSF clear)
                is available as exc.register
        """
        try:
            self.transport.write(RTC_SECONDS, calendar_time.encode_time(ct))
        except TransportError as e:
            self._failed("write_time", e)
            raise
        try:
            self.transport.update(RTC_STATUS, clear_mask=bit(OSF))
        except TransportError as e:
            self._failed("write_time (clear OSF)", e)
            raise
        self._ok()
        self._debug(f"Time set to {ct.timestamp()}")

    def get(self) -> int:
        """Return the chip's time as a Unix timestamp (UTC)."""
        return calendar_time.to_epoch(self.read_time())

    def set(self, seconds) -> None:
        """Set the chip's time from a Unix timestamp (UTC)."""
        self.write_time(calendar_time.from_epoch(seconds))

    # ── Alarms ────────────────────────────────────────────────────────

    def set_alarm(self, spec: alarm_codec.AlarmSpec) -> None:
        """
        Write an alarm's match registers.

        Only the alarm's own register block is written. Use alarm_interrupt()
        to have a match assert the INT pin.
        """
        register, payload = alarm_codec.encode_alarm(spec)
        try:
            self.transport.write(register, payload)
        except TransportError as e:
            self._failed(f"set_alarm({spec.alarm_number})", e)
            raise
        self._ok()
        self._debug(f"Alarm {spec.alarm_number} set: {payload.hex()} at 0x{register:02X}")

    def read_alarm(self, alarm_number: int) -> alarm_codec.AlarmSpec:
        """Read back an alarm's match fields and mask."""
        span = alarm_codec.alarm_register_range(alarm_number)
        try:
            buf = self.transport.read(span.start, len(span))
        except TransportError as e:
            self._failed(f"read_alarm({alarm_number})", e)
            raise
        self._ok()
        return alarm_codec.decode_alarm(alarm_number, buf)

    def alarm_interrupt(self, alarm_number: int, enabled: bool) -> None:
        """Enable or disable the INT pin assertion for an alarm."""
        alarm_codec.check_alarm_number(alarm_number)
        try:
            current = self.transport.read_byte(RTC_CONTROL)
            self.transport.write_byte(
                RTC_CONTROL, control.alarm_interrupt_control(current, alarm_number, enabled)
            )
        except TransportError as e:
            self._failed(f"alarm_interrupt({alarm_number})", e)
            raise
        self._ok()

    def check_and_clear_alarm(self, alarm_number: int) -> bool:
        """
        Return True if the alarm fired, clearing its flag.

        Only the alarm's own flag bit is cleared. When the flag is not set no
        write is issued.
        """
        mask = control.alarm_flag_mask(alarm_number)
        try:
            status = self.transport.read_byte(RTC_STATUS)
            if not status & mask:
                self._ok()
                return False
            self.transport.write_byte(RTC_STATUS, status & ~mask)
        except TransportError as e:
            self._failed(f"check_and_clear_alarm({alarm_number})", e)
            raise
        self._ok()
        return True

    # ── Control / status ──────────────────────────────────────────────

    def square_wave(self, rate: int) -> None:
        """
        Select the square-wave output rate.

        Args:
            rate (int): control.SQWAVE_* constant; SQWAVE_NONE switches the
                INT/SQW pin to interrupt mode
        """
        control.check_square_wave_rate(rate)
        try:
            current = self.transport.read_byte(RTC_CONTROL)
            self.transport.write_byte(RTC_CONTROL, control.square_wave_control(current, rate))
        except TransportError as e:
            self._failed("square_wave", e)
            raise
        self._ok()

    def osc_stopped(self, clear: bool = True) -> bool:
        """
        Return the oscillator stop flag (OSF).

        A set flag means the oscillator stopped at some point and the time
        may be invalid. If set and *clear* is True, only OSF is cleared.

        Returns:
            bool: The flag as read, before any clear
        """
        try:
            status = self.transport.read_byte(RTC_STATUS)
            stopped = control.osc_stop_flag(status)
            if stopped and clear:
                self.transport.write_byte(RTC_STATUS, status & ~bit(OSF))
        except TransportError as e:
            self._failed("osc_stopped", e)
            raise
        self._ok()
        if stopped and self.logger is not None:
            self.logger.warning(_MODULE, "Oscillator stop flag set; time may be invalid")
        return stopped

    def temperature(self) -> int:
        """Return the die temperature in quarter degrees Celsius."""
        try:
            msb, lsb = self.transport.read(RTC_TEMP_MSB, 2)
        except TransportError as e:
            self._failed("temperature", e)
            raise
        self._ok()
        return temp_codec.decode_temperature(msb, lsb)

    def dump_registers(self) -> str:
        """Debug dump of registers 0x00-0x12: address, hex, nibbles."""
        buf = self.read_registers(0, REGISTER_DUMP_SIZE)
        s = ""
        for n, v in enumerate(buf):
            s = f"{s}0x{n:02x} 0x{v:02x} {v >> 4:04b} {v & 0xF:04b}\n"
            if not (n + 1) % 4:
                s = f"{s}\n"
        return s
