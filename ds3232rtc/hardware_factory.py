# Hardware Factory - Coordinated Bus and RTC Initialization
#
# Builds the I2C bus for the configured backend and the DS3232RTC driver on
# top of it, once, then hands them out via dependency injection.
#
# Backends:
# - 'smbus2'  : Linux i2c-dev (Raspberry Pi etc.) through SMBusI2C
# - 'machine' : MicroPython machine.I2C on a board

from config import DEVICE_CONFIG
from ds3232rtc.control import SQWAVE_1_HZ, SQWAVE_1024_HZ, SQWAVE_4096_HZ, SQWAVE_8192_HZ, SQWAVE_NONE
from ds3232rtc.ds3232rtc import DS3232RTC

SQUARE_WAVE_SETTINGS = {
    '1hz': SQWAVE_1_HZ,
    '1024hz': SQWAVE_1024_HZ,
    '4096hz': SQWAVE_4096_HZ,
    '8192hz': SQWAVE_8192_HZ,
    'none': SQWAVE_NONE,
}


class HardwareFactory:
    """
    Factory for creating the I2C bus and the RTC driver.

    Coordinates initialization order:
    1. I2C bus (backend from config)
    2. RTC driver (verified with a time read)
    3. Square-wave setting and oscillator-stop check

    Errors are collected instead of raised so callers can report them.

    Attributes:
        config (dict): Device configuration from config.py
        logger: EventLogger passed to the driver (optional)
        i2c: Bus instance (machine.I2C or SMBusI2C)
        rtc (DS3232RTC): Driver instance
        osc_stopped (bool): OSF as seen at startup (None if unknown)
        errors (list): Errors encountered during initialization
    """

    def __init__(self, config=None, logger=None):
        """
        Does not touch hardware here; call setup() to perform it.

        Args:
            config (dict, optional): Device configuration (default: DEVICE_CONFIG from config.py)
            logger: EventLogger instance handed to the driver (optional)
        """
        self.config = config or DEVICE_CONFIG
        self.logger = logger
        self.i2c = None
        self.rtc = None
        self.osc_stopped = None
        self.errors = []

    def setup(self) -> bool:
        """
        Perform all hardware initialization.

        Returns:
            bool: True if the RTC answered, False otherwise
        """
        print('[HardwareFactory] Starting initialization...')

        if not self._init_i2c():
            print('[HardwareFactory] ERROR: I2C initialization failed')
            return False

        if not self._init_rtc():
            print('[HardwareFactory] ERROR: RTC initialization failed')
            return False
        print('[HardwareFactory] RTC initialized')

        self._init_square_wave()
        self._check_oscillator()

        print(f'[HardwareFactory] Setup complete. Errors: {len(self.errors)}')
        return True

    def _init_i2c(self) -> bool:
        """
        Create the bus for the configured backend.

        Returns True on success, False on failure.
        """
        try:
            i2c_config = self.config.get('i2c', {})
            backend = i2c_config.get('backend', 'smbus2')

            if backend == 'smbus2':
                from ds3232rtc.smbus_i2c import SMBusI2C
                self.i2c = SMBusI2C(i2c_config.get('bus', 1))
            elif backend == 'machine':
                from machine import I2C, Pin
                self.i2c = I2C(
                    i2c_config.get('port', 0),
                    sda=Pin(i2c_config.get('sda', 0)),
                    scl=Pin(i2c_config.get('scl', 1)),
                    freq=i2c_config.get('freq', 100000),
                )
            else:
                self.errors.append(f'Unknown I2C backend: {backend}')
                return False
            return True
        except Exception as e:
            self.errors.append(f'I2C init failed: {e}')
            return False

    def _init_rtc(self) -> bool:
        """
        Create the driver on the bus and verify the chip responds.

        Returns True on success, False on failure.
        """
        try:
            address = self.config.get('rtc', {}).get('address', 0x68)
            self.rtc = DS3232RTC(self.i2c, address=address, logger=self.logger)
            self.rtc.read_time()
            return True
        except Exception as e:
            self.errors.append(f'RTC init failed: {e}')
            self.rtc = None
            return False

    def _init_square_wave(self) -> bool:
        """Apply the configured square-wave setting (non-fatal)."""
        setting = self.config.get('rtc', {}).get('square_wave')
        if setting is None:
            return True
        try:
            self.rtc.square_wave(SQUARE_WAVE_SETTINGS[setting])
            return True
        except Exception as e:
            self.errors.append(f'Square-wave setup failed: {e}')
            return False

    def _check_oscillator(self) -> bool:
        """
        Read the oscillator stop flag (non-fatal).

        Clears it only when config rtc.clear_osf_on_start is True; normally
        rtc_set_time.py clears it by setting the time.
        """
        clear = self.config.get('rtc', {}).get('clear_osf_on_start', False)
        try:
            self.osc_stopped = self.rtc.osc_stopped(clear=clear)
            if self.osc_stopped:
                self.errors.append('Oscillator stop flag set: RTC time may be invalid')
            return True
        except Exception as e:
            self.errors.append(f'Oscillator check failed: {e}')
            return False

    def get_rtc(self):
        """Return RTC instance (or None if init failed)."""
        return self.rtc

    def get_errors(self) -> list:
        """Return list of initialization errors encountered."""
        return self.errors.copy()

    def close(self) -> None:
        """Release the bus if the backend supports it."""
        close = getattr(self.i2c, 'close', None)
        if close is not None:
            close()
        self.i2c = None

    def print_status(self):
        """Print human-readable initialization status to console."""
        print('[HardwareFactory] Status Report:')
        print(f'  I2C: {"OK" if self.i2c else "FAILED"}')
        print(f'  RTC: {"OK" if self.rtc else "FAILED"}')
        if self.osc_stopped is None:
            print('  Oscillator: UNKNOWN')
        else:
            print(f'  Oscillator: {"STOPPED (set time!)" if self.osc_stopped else "OK"}')
        if self.errors:
            print('  Errors:')
            for err in self.errors:
                print(f'    - {err}')
        else:
            print('  No errors')
