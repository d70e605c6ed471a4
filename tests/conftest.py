# pytest Configuration and Fixtures
# conftest.py - register-file bus stub + driver fixtures
#
# Installs tests/stubs/machine.py as the `machine` module ONCE at session
# start so the MicroPython bus backend can be exercised on the host.
# Provides reusable fixtures for all ds3232rtc modules under test.

import sys
from pathlib import Path
from unittest.mock import Mock, patch

# ---------------------------------------------------------------------------
# Path setup: ensure project root and stubs are importable
# ---------------------------------------------------------------------------
_tests_dir = Path(__file__).resolve().parent
_project_root = str(_tests_dir.parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)
_stubs_dir = str(_tests_dir / 'stubs')
if _stubs_dir not in sys.path:
    sys.path.insert(0, _stubs_dir)

# --- machine module (MicroPython only) ---
import machine as _machine_stub  # noqa: E402  resolves to tests/stubs/machine.py

sys.modules['machine'] = _machine_stub

import pytest  # noqa: E402

from ds3232rtc.calendar_time import CalendarTime  # noqa: E402


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: integration tests")


# ---------------------------------------------------------------------------
# Fixtures: Time
# ---------------------------------------------------------------------------

# Reference time: 2026-01-29 14:23:45 (Thursday, day 29 of year)
FAKE_LOCALTIME = (2026, 1, 29, 14, 23, 45, 3, 29, -1)


@pytest.fixture
def fake_localtime():
    with patch('time.localtime', return_value=FAKE_LOCALTIME):
        yield FAKE_LOCALTIME


@pytest.fixture
def sample_time():
    """2026-01-29 14:23:45, Thursday (weekday 4, 1 = Monday)."""
    return CalendarTime(second=45, minute=23, hour=14, weekday=4, day=29, month=1, year=2026)


# ---------------------------------------------------------------------------
# Fixtures: Bus / driver
# ---------------------------------------------------------------------------

@pytest.fixture
def fake_i2c():
    """Register-file I2C stub with an empty (all-zero) DS3232."""
    return _machine_stub.I2C(1)


@pytest.fixture
def rtc(fake_i2c):
    """DS3232RTC bound to the register-file stub, no logger."""
    from ds3232rtc.ds3232rtc import DS3232RTC
    return DS3232RTC(fake_i2c)


@pytest.fixture
def mock_event_logger():
    """Lightweight mock EventLogger for tests that don't need real logging."""
    logger = Mock()
    logger.debug = Mock()
    logger.info = Mock()
    logger.warning = Mock()
    logger.error = Mock()
    logger.flush = Mock()
    logger.check_size = Mock()
    return logger


@pytest.fixture
def logged_rtc(fake_i2c, mock_event_logger):
    """DS3232RTC with a mock logger attached."""
    from ds3232rtc.ds3232rtc import DS3232RTC
    return DS3232RTC(fake_i2c, logger=mock_event_logger)


# ---------------------------------------------------------------------------
# Fixtures: Logging
# ---------------------------------------------------------------------------

@pytest.fixture
def base_time_provider():
    """Host-clock TimeProvider."""
    from ds3232rtc.time_provider import TimeProvider
    return TimeProvider()


@pytest.fixture
def event_logger(base_time_provider, tmp_path):
    """EventLogger writing to a temporary log file."""
    from ds3232rtc.event_logger import EventLogger
    return EventLogger(
        base_time_provider,
        logfile=str(tmp_path / 'rtc.log'),
        max_size=10000,
    )
