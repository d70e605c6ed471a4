# Sync the DS3232 RTC to the host clock (UTC).
#
# Setting the time also clears the oscillator stop flag.
#
# HOW TO RUN:
#   python rtc_set_time.py

import time


def read_time_or_none(rtc):
    """Return rtc.read_time(), or None if the chip does not answer."""
    try:
        return rtc.read_time()
    except OSError:
        return None


def sync_rtc(rtc, now=None):
    """
    Write the host time to the RTC.

    Parameters
    ----------
    rtc : DS3232RTC
        Driver instance.
    now : float, optional
        Unix timestamp to write (default: time.time()).

    Returns
    -------
    tuple
        (old, new): CalendarTime before and after the write; old is None if
        the chip could not be read beforehand.

    Raises
    ------
    TransportError
        If writing the time or reading it back fails.
    """
    old = read_time_or_none(rtc)
    rtc.set(time.time() if now is None else now)
    new = rtc.read_time()
    return old, new


def main():
    """Sync the RTC to the system clock."""
    from config import DEVICE_CONFIG, validate_config
    from ds3232rtc.hardware_factory import HardwareFactory

    validate_config()
    hardware = HardwareFactory(DEVICE_CONFIG)
    if not hardware.setup():
        hardware.print_status()
        hardware.close()
        return
    try:
        rtc = hardware.get_rtc()
        print("Oscillator stopped:", hardware.osc_stopped)
        old, new = sync_rtc(rtc)
        print("Old:", old.timestamp() if old else "unreadable")
        print("New:", new.timestamp())
        print("Host (UTC):", time.strftime("%Y-%m-%d %H:%M:%S", time.gmtime()))
        print("Time written to RTC chip.")
    finally:
        hardware.close()


if __name__ == "__main__":  # pragma: no cover
    main()
