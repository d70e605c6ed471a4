# DS3232 RTC Configuration
#
# Central configuration for the bus backend, chip address, logging and the
# monitor loop. Modify values here to tune behavior without editing module
# code.

DEVICE_CONFIG = {
    # I2C bus
    'i2c': {
        'backend': 'smbus2',            # 'smbus2' (Linux i2c-dev) or 'machine' (MicroPython)
        'bus': 1,                       # smbus2: /dev/i2c-<bus>
        'port': 1,                      # machine: I2C peripheral (0 or 1)
        'sda': 2,                       # machine: SDA GPIO
        'scl': 3,                       # machine: SCL GPIO
        'freq': 100000,                 # machine: bus frequency (Hz)
    },

    # RTC chip
    'rtc': {
        'address': 0x68,                # Fixed DS3231/DS3232 address
        'clear_osf_on_start': False,    # Clear oscillator stop flag at startup
        'square_wave': 'none',          # '1hz', '1024hz', '4096hz', '8192hz', 'none' (INT mode) or None (leave as is)
    },

    # Event Logger Configuration
    'event_logger': {
        'logfile': 'rtc.log',           # None for console only
        'max_size': 50000,              # Max log file size (bytes) before rotation
        'log_level': 'INFO',            # DEBUG, INFO, WARN, ERR
    },

    # Monitor loop (main.py)
    'monitor': {
        'interval_s': 10,               # Seconds between status lines
    },
}

_BACKENDS = ('smbus2', 'machine')
_SQUARE_WAVE = ('1hz', '1024hz', '4096hz', '8192hz', 'none', None)
_LOG_LEVELS = ('DEBUG', 'INFO', 'WARN', 'ERR')


def validate_config():
    """
    Validate configuration dictionary at startup.

    Checks for required keys and reasonable value ranges.

    Returns:
        bool: True if config is valid

    Raises:
        ValueError: If required keys are missing or values out of range
    """
    required_keys = {
        'i2c': ['backend', 'bus', 'port', 'sda', 'scl', 'freq'],
        'rtc': ['address', 'clear_osf_on_start', 'square_wave'],
        'event_logger': ['logfile', 'max_size', 'log_level'],
        'monitor': ['interval_s'],
    }

    for section, keys in required_keys.items():
        if section not in DEVICE_CONFIG:
            raise ValueError(f"Missing config section: {section}")
        for key in keys:
            if key not in DEVICE_CONFIG[section]:
                raise ValueError(f"Missing config key: {section}.{key}")

    if DEVICE_CONFIG['i2c']['backend'] not in _BACKENDS:
        raise ValueError(f"i2c.backend must be one of {_BACKENDS}")

    if not 0x08 <= DEVICE_CONFIG['rtc']['address'] <= 0x77:
        raise ValueError("rtc.address must be a 7-bit address (0x08-0x77)")

    if DEVICE_CONFIG['rtc']['square_wave'] not in _SQUARE_WAVE:
        raise ValueError(f"rtc.square_wave must be one of {_SQUARE_WAVE}")

    if DEVICE_CONFIG['event_logger']['max_size'] <= 0:
        raise ValueError("event_logger.max_size must be > 0")

    if DEVICE_CONFIG['event_logger']['log_level'] not in _LOG_LEVELS:
        raise ValueError(f"event_logger.log_level must be one of {_LOG_LEVELS}")

    if DEVICE_CONFIG['monitor']['interval_s'] <= 0:
        raise ValueError("monitor.interval_s must be > 0")

    return True
