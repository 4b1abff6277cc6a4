import io

import pytest

from yamf.serialization import (
    Deserializer,
    NonCanonicalError,
    OutOfDataError,
    Serializer,
    ValueTooBigError,
    WriteError,
)
from yamf.serialization.encoding.type_value import decode_type_value, encode_type_value
from yamf.type_value import TypeValue, set_max_value_size


def _decode(data):
    return decode_type_value(Deserializer.build_bytes_deserializer(data))


@pytest.mark.parametrize('type_value, encoded', [
    (TypeValue(0), '0000'),
    (TypeValue(1, b'test'), '010474657374'),
    (TypeValue(248, b'\x00'), 'f8f80100'),
    (TypeValue(2**64 - 1, b''), 'ffffffffffffffffff00'),
])
def test_known_encodings(type_value, encoded):
    serializer = Serializer.build_bytes_serializer()
    assert encode_type_value(serializer, type_value) == len(encoded) // 2
    assert bytes(serializer.finalize()).hex() == encoded

    read = _decode(bytes.fromhex(encoded)).unwrap()
    assert read.type_value == type_value
    assert read.size == len(encoded) // 2
    assert read.is_canonical


@pytest.mark.parametrize('encoded', ['', '00', '0001', '000201', 'f8', '01f9', '01f904'])
def test_truncated_frame(encoded):
    result = _decode(bytes.fromhex(encoded))
    assert isinstance(result.unwrap_err(), OutOfDataError)


def test_value_above_ceiling_is_not_read():
    data = bytes.fromhex('00f90401') + bytes(1025)
    deserializer = Deserializer.build_bytes_deserializer(data)
    result = decode_type_value(deserializer)
    assert isinstance(result.unwrap_err(), ValueTooBigError)
    # only the type and length fields were consumed
    assert len(bytes(deserializer.read_all())) == len(data) - 4


def test_value_at_ceiling():
    data = bytes.fromhex('00f90400') + bytes(1024)
    read = _decode(data).unwrap()
    assert len(read.type_value.value) == 1024
    assert read.size == len(data)


def test_ceiling_checked_before_truncation():
    # declares 1025 bytes but carries none
    assert isinstance(_decode(bytes.fromhex('00f90401')).unwrap_err(), ValueTooBigError)


def test_custom_ceiling():
    set_max_value_size(3)
    assert isinstance(_decode(bytes.fromhex('000461626364')).unwrap_err(), ValueTooBigError)
    assert _decode(bytes.fromhex('0003616263')).unwrap().type_value == TypeValue(0, b'abc')


@pytest.mark.parametrize('ceiling', [0, -1])
def test_unlimited_ceiling(ceiling):
    set_max_value_size(ceiling)
    data = bytes.fromhex('07fa010000') + bytes(65536)
    read = _decode(data).unwrap()
    assert read.type_value == TypeValue(7, bytes(65536))


def test_unlimited_ceiling_still_fails_on_missing_data():
    set_max_value_size(0)
    assert isinstance(_decode(bytes.fromhex('00ffffffffffffffffff')).unwrap_err(), ValueTooBigError)
    assert isinstance(_decode(bytes.fromhex('00fa01000000')).unwrap_err(), OutOfDataError)


@pytest.mark.parametrize('encoded, non_canonical_size', [
    # type field only
    ('f82a0101', 2),
    # length field only
    ('2af80101', 2),
    # both, the length field is reported
    ('f82af9000101', 3),
])
def test_non_canonical_frame(encoded, non_canonical_size):
    read = _decode(bytes.fromhex(encoded)).unwrap()
    assert read.type_value == TypeValue(42, b'\x01')
    assert read.size == len(encoded) // 2
    assert isinstance(read.non_canonical, NonCanonicalError)
    assert read.non_canonical.size == non_canonical_size


def test_fatal_error_wins_over_non_canonical():
    # non-canonical type, then a truncated value
    assert isinstance(_decode(bytes.fromhex('f82a0201')).unwrap_err(), OutOfDataError)
    # non-canonical type, then a length above the ceiling
    assert isinstance(_decode(bytes.fromhex('f82af90401')).unwrap_err(), ValueTooBigError)


def test_trailing_data_is_left_unread():
    deserializer = Deserializer.build_bytes_deserializer(bytes.fromhex('0104746573740000'))
    assert decode_type_value(deserializer).unwrap().type_value == TypeValue(1, b'test')
    assert decode_type_value(deserializer).unwrap().type_value == TypeValue(0)
    assert deserializer.is_empty()


class _FailingStream(io.RawIOBase):
    """Accepts up to `limit` bytes and then fails every write."""

    def __init__(self, limit):
        self.limit = limit
        self.data = bytearray()

    def writable(self):
        return True

    def write(self, b):
        room = self.limit - len(self.data)
        if room <= 0:
            raise OSError('no space left')
        chunk = bytes(b[:room])
        self.data += chunk
        return len(chunk)


@pytest.mark.parametrize('limit', range(0, 6))
def test_write_failure_reports_written_bytes(limit):
    stream = _FailingStream(limit)
    serializer = Serializer.build_stream_serializer(stream)
    with pytest.raises(WriteError) as exc_info:
        encode_type_value(serializer, TypeValue(1, b'test'))
    assert exc_info.value.written == limit
    assert serializer.cur_pos() == limit
    assert bytes(stream.data) == bytes.fromhex('010474657374')[:limit]
