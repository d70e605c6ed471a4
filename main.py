# DS3232 RTC - Monitor
#
# Periodically reports the chip's time, die temperature, alarm flags and
# oscillator health.
#
# Initialization sequence:
# 1. Validate configuration (config.py)
# 2. Create EventLogger (host clock timestamps until the RTC is up)
# 3. Initialize bus + RTC via HardwareFactory
# 4. Switch logger timestamps to RTCTimeProvider
# 5. Run the monitor loop
#
# HOW TO RUN:
# 1. First time only: run rtc_set_time.py to set the chip
# 2. python main.py

import asyncio

from config import DEVICE_CONFIG, validate_config
from ds3232rtc.event_logger import EventLogger
from ds3232rtc.hardware_factory import HardwareFactory
from ds3232rtc.temperature import quarter_to_celsius
from ds3232rtc.time_provider import RTCTimeProvider, TimeProvider
from ds3232rtc.transport import TransportError


def read_status(rtc) -> dict:
    """
    Take one snapshot of the chip.

    Alarm flags are cleared as they are reported.

    Returns:
        dict: timestamp, temperature_c, alarm1, alarm2, osc_stopped
    """
    return {
        'timestamp': rtc.read_time().timestamp(),
        'temperature_c': quarter_to_celsius(rtc.temperature()),
        'alarm1': rtc.check_and_clear_alarm(1),
        'alarm2': rtc.check_and_clear_alarm(2),
        'osc_stopped': rtc.osc_stopped(clear=False),
    }


async def monitor_loop(rtc, logger, interval_s=10, iterations=None):
    """
    Log a status line every *interval_s* seconds.

    Transport errors are logged and the loop keeps going.

    Args:
        rtc: DS3232RTC instance
        logger: EventLogger instance
        interval_s (float): Seconds between snapshots
        iterations (int): Stop after N snapshots (None = forever)

    Returns:
        int: Number of failed snapshots
    """
    failures = 0
    count = 0
    while iterations is None or count < iterations:
        count += 1
        try:
            status = read_status(rtc)
        except TransportError as e:
            failures += 1
            logger.warning('MONITOR', f'RTC read failed: {e}')
        else:
            logger.info(
                'MONITOR',
                f"{status['timestamp']} {status['temperature_c']:.2f}C"
                f" A1={int(status['alarm1'])} A2={int(status['alarm2'])}"
                f" OSF={int(status['osc_stopped'])}",
            )
            if status['alarm1'] or status['alarm2']:
                logger.info('MONITOR', 'Alarm fired')
        logger.check_size()
        if iterations is None or count < iterations:
            await asyncio.sleep(interval_s)
    return failures


async def main():
    """Main async entry point: set up hardware and run the monitor."""
    print('[STARTUP] Initializing RTC monitor...')

    try:
        validate_config()
        print('[STARTUP] Configuration validated')
    except ValueError as e:
        print(f'[STARTUP ERROR] Config validation failed: {e}')
        return

    logger_config = DEVICE_CONFIG.get('event_logger', {})
    logger = EventLogger(
        TimeProvider(),
        logfile=logger_config.get('logfile'),
        max_size=logger_config.get('max_size', 50000),
        log_level=logger_config.get('log_level', 'INFO'),
    )

    hardware = HardwareFactory(DEVICE_CONFIG, logger=logger)
    if not hardware.setup():
        print('[STARTUP ERROR] RTC initialization failed')
        hardware.print_status()
        hardware.close()
        return
    hardware.print_status()

    rtc = hardware.get_rtc()
    logger.time_provider = RTCTimeProvider(rtc)
    logger.info('MAIN', 'Monitor startup')
    if hardware.osc_stopped:
        logger.warning('MAIN', 'Oscillator stop flag set; run rtc_set_time.py')

    try:
        await monitor_loop(rtc, logger, DEVICE_CONFIG.get('monitor', {}).get('interval_s', 10))
    finally:
        logger.flush()
        hardware.close()


if __name__ == '__main__':
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        print('[SHUTDOWN] Keyboard interrupt')
