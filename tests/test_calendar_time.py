# Tests for ds3232rtc/calendar_time.py
# Covers encode_time/decode_time register layout, status-bit masking and
# epoch conversion.

import pytest

from ds3232rtc.calendar_time import (
    CalendarTime,
    decode_time,
    encode_time,
    from_epoch,
    from_localtime,
    to_epoch,
)

Y2K_EPOCH = 946684800  # 2000-01-01 00:00:00 UTC, a Saturday


class TestEncodeTime:
    """Tests for the 7-byte time payload."""

    def test_known_time(self, sample_time):
        assert encode_time(sample_time) == bytes([0x45, 0x23, 0x14, 0x04, 0x29, 0x01, 0x26])

    def test_hour_written_in_24_hour_mode(self):
        ct = CalendarTime(0, 0, 23, 7, 31, 12, 2099)
        payload = encode_time(ct)
        assert payload[2] == 0x23
        assert not payload[2] & 0x40

    def test_century_bit_clear(self):
        payload = encode_time(CalendarTime(0, 0, 0, 1, 1, 12, 2000))
        assert payload[5] == 0x12
        assert payload[6] == 0x00

    def test_payload_length_always_seven(self):
        for month in range(1, 13):
            assert len(encode_time(CalendarTime(0, 0, 0, 1, 1, month, 2026))) == 7


class TestDecodeTime:
    """Tests for decoding the timekeeping registers."""

    def test_known_registers(self, sample_time):
        assert decode_time(bytes([0x45, 0x23, 0x14, 0x04, 0x29, 0x01, 0x26])) == sample_time

    def test_hour_12_24_bit_masked(self):
        """Hour is returned in 24-hour form even with bit 6 set."""
        ct = decode_time(bytes([0x00, 0x00, 0x40 | 0x14, 0x01, 0x01, 0x01, 0x26]))
        assert ct.hour == 14

    def test_century_bit_masked(self):
        ct = decode_time(bytes([0x00, 0x00, 0x00, 0x01, 0x01, 0x80 | 0x11, 0x26]))
        assert ct.month == 11
        assert ct.year == 2026

    def test_clock_halt_bit_masked(self):
        ct = decode_time(bytes([0x80 | 0x45, 0x00, 0x00, 0x01, 0x01, 0x01, 0x26]))
        assert ct.second == 45

    def test_weekday_is_raw(self):
        ct = decode_time(bytes([0x00, 0x00, 0x00, 0x07, 0x01, 0x01, 0x26]))
        assert ct.weekday == 7

    def test_year_rebased_to_2000(self):
        ct = decode_time(bytes([0x00, 0x00, 0x00, 0x01, 0x01, 0x01, 0x99]))
        assert ct.year == 2099

    def test_too_short_raises(self):
        with pytest.raises(ValueError):
            decode_time(b'\x00' * 6)


class TestEpochConversion:
    """Tests for the host calendar conversion (UTC)."""

    def test_from_epoch_y2k(self):
        assert from_epoch(Y2K_EPOCH) == CalendarTime(0, 0, 0, 6, 1, 1, 2000)

    def test_to_epoch_y2k(self):
        assert to_epoch(CalendarTime(0, 0, 0, 6, 1, 1, 2000)) == Y2K_EPOCH

    def test_to_epoch_ignores_weekday(self):
        assert to_epoch(CalendarTime(0, 0, 0, 1, 1, 1, 2000)) == Y2K_EPOCH

    def test_leap_day(self):
        ct = from_epoch(Y2K_EPOCH + 59 * 86400 + 3661)
        assert (ct.year, ct.month, ct.day) == (2000, 2, 29)
        assert (ct.hour, ct.minute, ct.second) == (1, 1, 1)
        assert ct.weekday == 2  # Tuesday

    def test_epoch_round_trip(self, sample_time):
        assert from_epoch(to_epoch(sample_time)) == sample_time


class TestHelpers:
    """Tests for CalendarTime helpers."""

    def test_from_localtime(self, fake_localtime, sample_time):
        assert from_localtime(fake_localtime) == sample_time

    def test_timestamp(self, sample_time):
        assert sample_time.timestamp() == '2026-01-29 14:23:45'

    def test_as_tuple(self, sample_time):
        assert sample_time.as_tuple() == (45, 23, 14, 4, 29, 1, 2026)
