import pytest

from transcode.serialization import MaxBytesExceededError, Serializer, TooLongError
from transcode.serialization.encoding.bool import encode_bool
from transcode.serialization.encoding.bytes import encode_bytes
from transcode.serialization.encoding.int import encode_int
from transcode.serialization.encoding.utf8 import encode_utf8


def test_writes_are_appended_in_order() -> None:
    serializer = Serializer.build_bytes_serializer()
    serializer.write_byte(0x01)
    serializer.write_bytes(b'\x02\x03')
    encode_bool(serializer, True)
    encode_int(serializer, 0x0504, length=2, signed=False)
    assert serializer.cur_pos() == 6
    assert bytes(serializer.finalize()) == b'\x01\x02\x03\x01\x04\x05'


def test_write_byte_range() -> None:
    serializer = Serializer.build_bytes_serializer()
    with pytest.raises(OverflowError):
        serializer.write_byte(256)


def test_write_bytes_default_limit() -> None:
    serializer = Serializer.build_bytes_serializer()
    with pytest.raises(TooLongError):
        serializer.write_bytes(b'\x00' * (2**16 + 1))
    serializer.write_bytes(b'\x00' * (2**16 + 1), max_bytes=None)
    assert serializer.cur_pos() == 2**16 + 1


def test_max_bytes_adapter() -> None:
    serializer = Serializer.build_bytes_serializer()
    limited = serializer.with_max_bytes(4)
    limited.write_bytes(b'abc')
    limited.write_byte(ord('d'))
    assert limited.cur_pos() == 4
    with pytest.raises(MaxBytesExceededError, match='limited to 4 bytes'):
        limited.write_byte(ord('e'))
    assert bytes(serializer.finalize()) == b'abcd'


def test_with_optional_max_bytes() -> None:
    serializer = Serializer.build_bytes_serializer()
    assert serializer.with_optional_max_bytes(None) is serializer
    assert serializer.with_optional_max_bytes(1).inner is serializer


@pytest.mark.parametrize(
    ['number', 'length', 'expected'],
    [
        (0, 1, '00'),
        (0xff, 1, 'ff'),
        (0x0102, 2, '0201'),
        (0x01020304, 4, '04030201'),
        (1, 16, '01' + '00' * 15),
    ]
)
def test_encode_int_little_endian(number: int, length: int, expected: str) -> None:
    serializer = Serializer.build_bytes_serializer()
    encode_int(serializer, number, length=length, signed=False)
    assert bytes(serializer.finalize()).hex() == expected


def test_encode_bytes_checks_length_before_writing() -> None:
    serializer = Serializer.build_bytes_serializer()
    with pytest.raises(TooLongError):
        encode_bytes(serializer, b'12345', max_bytes=4)
    assert serializer.cur_pos() == 0


def test_encode_utf8_counts_bytes() -> None:
    serializer = Serializer.build_bytes_serializer()
    encode_utf8(serializer, 'ação')
    # 4 characters, 6 bytes
    assert bytes(serializer.finalize()).hex() == '18' + 'ação'.encode('utf-8').hex()
