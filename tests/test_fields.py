import pytest

from ysstorage.fields import read_bytes, read_str, read_u8, read_u16, read_u32


def test_read_u8_in_range_and_beyond():
    data = bytes([7, 9])
    assert read_u8(data, 1) == 9
    assert read_u8(data, 5) == 0


def test_read_u16_little_endian():
    assert read_u16(b"\x34\x12", 0) == 0x1234


def test_read_u32_little_endian():
    assert read_u32(b"\x00\x78\x56\x34\x12", 1) == 0x12345678


def test_read_u32_out_of_range():
    with pytest.raises(IndexError):
        read_u32(b"\x01\x02", 0)


def test_read_bytes():
    assert read_bytes(b"mkfs.fat!", 0, 8) == b"mkfs.fat"
    with pytest.raises(IndexError):
        read_bytes(b"abc", 2, 4)


def test_read_str_valid_and_invalid():
    assert read_str(b"xxFAT16   ", 2, 8) == "FAT16   "
    assert read_str(b"\xff\xfe", 0, 2) == ""