"""Little-endian field readers for on-disk structures."""

from __future__ import annotations


def _slice(data: bytes, offset: int, length: int) -> bytes:
    chunk = bytes(data[offset : offset + length])
    if offset < 0 or len(chunk) != length:
        raise IndexError(f"field at {offset:#x} of {length} bytes is out of range")
    return chunk


def read_u8(data: bytes, offset: int) -> int:
    """Return the byte at ``offset``, or 0 when it lies beyond the data."""
    if 0 <= offset < len(data):
        return data[offset]
    return 0


def read_u16(data: bytes, offset: int) -> int:
    """Return the little-endian 16-bit value at ``offset``."""
    return int.from_bytes(_slice(data, offset, 2), "little")


def read_u32(data: bytes, offset: int) -> int:
    """Return the little-endian 32-bit value at ``offset``."""
    return int.from_bytes(_slice(data, offset, 4), "little")


def read_bytes(data: bytes, offset: int, length: int) -> bytes:
    """Return ``length`` raw bytes starting at ``offset``."""
    return _slice(data, offset, length)


def read_str(data: bytes, offset: int, length: int) -> str:
    """Return the field decoded as UTF-8, or an empty string if it is not valid."""
    try:
        return _slice(data, offset, length).decode("utf-8")
    except UnicodeDecodeError:
        return ""