# Tests for ds3232rtc/transport.py
# Covers addressed reads/writes, pointer short-circuit, status mapping,
# read-modify-write and transfer limits.

import errno
from unittest.mock import Mock

import pytest

from ds3232rtc.transport import (
    MAX_WRITE_BYTES,
    STATUS_ADDR_NACK,
    STATUS_DATA_NACK,
    STATUS_DATA_TOO_LONG,
    STATUS_OTHER,
    STATUS_TIMEOUT,
    RegisterTransport,
    TransportError,
    status_from_oserror,
)


@pytest.fixture
def transport(fake_i2c):
    return RegisterTransport(fake_i2c)


class TestWrite:
    """Tests for addressed writes."""

    def test_write_sends_pointer_then_data(self, transport, fake_i2c):
        transport.write(0x0E, b'\x1c\x00')
        assert fake_i2c.writes() == [b'\x0e\x1c\x00']
        assert fake_i2c.peek(0x0E, 2) == b'\x1c\x00'

    def test_write_byte(self, transport, fake_i2c):
        transport.write_byte(0x10, 0x1F5)
        assert fake_i2c.peek(0x10) == b'\xf5'

    def test_register_masked_to_8_bits(self, transport, fake_i2c):
        transport.write(0x114, b'\x01')
        assert fake_i2c.writes() == [b'\x14\x01']

    def test_oversized_write_rejected_without_bus_traffic(self, transport, fake_i2c):
        with pytest.raises(TransportError) as exc_info:
            transport.write(0x14, bytes(MAX_WRITE_BYTES + 1))
        assert exc_info.value.code == STATUS_DATA_TOO_LONG
        assert fake_i2c.log == []

    def test_no_acks_is_address_nack(self, transport, fake_i2c):
        fake_i2c.short_acks = 0
        with pytest.raises(TransportError) as exc_info:
            transport.write(0x00, b'\x00')
        assert exc_info.value.code == STATUS_ADDR_NACK

    def test_partial_acks_is_data_nack(self, transport, fake_i2c):
        fake_i2c.short_acks = 1
        with pytest.raises(TransportError) as exc_info:
            transport.write(0x00, b'\x00\x00')
        assert exc_info.value.code == STATUS_DATA_NACK

    def test_none_return_accepted(self):
        """smbus-style buses return None from writeto."""
        bus = Mock()
        bus.writeto.return_value = None
        RegisterTransport(bus).write(0x0E, b'\x00')
        bus.writeto.assert_called_once_with(0x68, b'\x0e\x00')


class TestRead:
    """Tests for pointer-set + sequential reads."""

    def test_read_sets_pointer_then_reads(self, transport, fake_i2c):
        fake_i2c.poke(0x11, 0x19, 0x40)
        assert transport.read(0x11, 2) == b'\x19\x40'
        assert fake_i2c.log == [('write', 0x68, b'\x11'), ('read', 0x68, 2)]

    def test_read_byte(self, transport, fake_i2c):
        fake_i2c.poke(0x0F, 0x88)
        assert transport.read_byte(0x0F) == 0x88

    def test_pointer_failure_short_circuits(self, transport, fake_i2c):
        """A failed pointer write never issues the data read."""
        fake_i2c.fail_on('write', errno.ENODEV)
        with pytest.raises(TransportError) as exc_info:
            transport.read(0x00, 7)
        assert exc_info.value.code == STATUS_ADDR_NACK
        assert fake_i2c.reads() == []

    def test_read_failure(self, transport, fake_i2c):
        fake_i2c.fail_on('read', errno.EIO)
        with pytest.raises(TransportError) as exc_info:
            transport.read(0x00, 7)
        assert exc_info.value.code == STATUS_DATA_NACK
        assert exc_info.value.register == 0x00

    def test_short_read(self):
        bus = Mock()
        bus.writeto.return_value = 1
        bus.readfrom.return_value = b'\x00'
        with pytest.raises(TransportError) as exc_info:
            RegisterTransport(bus).read(0x11, 2)
        assert exc_info.value.code == STATUS_OTHER

    def test_wrong_address_is_address_nack(self, fake_i2c):
        with pytest.raises(TransportError) as exc_info:
            RegisterTransport(fake_i2c, address=0x57).read(0x00, 1)
        assert exc_info.value.code == STATUS_ADDR_NACK

    def test_oversized_read_rejected(self, transport, fake_i2c):
        with pytest.raises(TransportError) as exc_info:
            transport.read(0x14, 33)
        assert exc_info.value.code == STATUS_DATA_TOO_LONG
        assert fake_i2c.log == []


class TestUpdate:
    """Tests for read-modify-write."""

    def test_update_preserves_other_bits(self, transport, fake_i2c):
        fake_i2c.poke(0x0E, 0b1001_0011)
        assert transport.update(0x0E, clear_mask=0x02, set_mask=0x04) == 0b1001_0101
        assert fake_i2c.peek(0x0E) == bytes([0b1001_0101])

    def test_update_always_writes(self, transport, fake_i2c):
        fake_i2c.poke(0x0F, 0x03)
        transport.update(0x0F, clear_mask=0x80)
        assert fake_i2c.writes()[-1] == b'\x0f\x03'


class TestStatusMapping:
    """Tests for OSError -> status code mapping."""

    @pytest.mark.parametrize('err, code', [
        (errno.ENODEV, STATUS_ADDR_NACK),
        (errno.ENXIO, STATUS_ADDR_NACK),
        (errno.EIO, STATUS_DATA_NACK),
        (errno.ETIMEDOUT, STATUS_TIMEOUT),
        (errno.EINVAL, STATUS_OTHER),
    ])
    def test_errno_mapping(self, err, code):
        assert status_from_oserror(OSError(err, 'x')) == code

    def test_bare_oserror_is_other(self):
        assert status_from_oserror(OSError('I2C read error')) == STATUS_OTHER

    def test_transport_error_passes_through(self):
        assert status_from_oserror(TransportError(STATUS_TIMEOUT)) == STATUS_TIMEOUT


class TestTransportError:
    """Tests for the TransportError exception type."""

    def test_is_oserror(self):
        exc = TransportError(STATUS_ADDR_NACK, register=0x0F)
        assert isinstance(exc, OSError)
        assert exc.code == STATUS_ADDR_NACK

    def test_errno_not_status_code(self):
        """errno never carries the bus status; it is None without a bus errno."""
        exc = TransportError(STATUS_ADDR_NACK)
        assert exc.errno is None
        assert exc.message == 'address not acknowledged'

    def test_bus_errno_kept(self, fake_i2c):
        fake_i2c.fail_on('write', errno.ENXIO)
        with pytest.raises(TransportError) as exc_info:
            RegisterTransport(fake_i2c).read(0x00, 7)
        assert exc_info.value.code == STATUS_ADDR_NACK
        assert exc_info.value.errno == errno.ENXIO
        assert isinstance(exc_info.value.__cause__, OSError)

    def test_str_names_status_and_register(self):
        text = str(TransportError(STATUS_ADDR_NACK, register=0x0F))
        assert 'status 2' in text
        assert 'address not acknowledged' in text
        assert '0x0F' in text
