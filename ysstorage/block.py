"""Fixed-size blocks and the block device interface."""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from typing import Optional, Union

from .errors import DeviceError, DeviceErrorKind, FsError, FsErrorKind

BLOCK_SIZE_512 = 512
BLOCK_SIZE_4096 = 4096


class Block:
    """A mutable block of bytes whose length never changes."""

    def __init__(self, data: Optional[bytes] = None, size: Optional[int] = None) -> None:
        if data is None:
            self._contents = bytearray(BLOCK_SIZE_512 if size is None else size)
        else:
            if size is not None and len(data) != size:
                raise ValueError(f"block data is {len(data)} bytes, expected {size}")
            self._contents = bytearray(data)

    def __len__(self) -> int:
        return len(self._contents)

    def __bytes__(self) -> bytes:
        return bytes(self._contents)

    def __getitem__(self, index: Union[int, slice]) -> Union[int, bytes]:
        if isinstance(index, slice):
            return bytes(self._contents[index])
        return self._contents[index]

    def __setitem__(self, index: Union[int, slice], value) -> None:
        if isinstance(index, slice):
            span = len(range(*index.indices(len(self._contents))))
            if len(value) != span:
                raise ValueError("slice assignment must not change the block size")
        self._contents[index] = value

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Block):
            return self._contents == other._contents
        if isinstance(other, (bytes, bytearray)):
            return self._contents == other
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def hexdump(self) -> str:
        """Render the block as rows of four big-endian 64-bit words."""
        lines = ["Block:"]
        for start in range(0, len(self._contents), 32):
            chunk = bytes(self._contents[start : start + 32]).ljust(32, b"\0")
            words = (int.from_bytes(chunk[i : i + 8], "big") for i in range(0, 32, 8))
            lines.append("    " + " ".join(f"{w:016x}" for w in words))
        return "\n".join(lines) + "\n"

    def __repr__(self) -> str:
        return f"Block(size={len(self)})"


class BlockDevice(ABC):
    """A device addressed in whole blocks."""

    BLOCK_SIZE = BLOCK_SIZE_512

    @abstractmethod
    def block_count(self) -> int:
        """Return the number of blocks on the device."""

    @abstractmethod
    def read_block(self, offset: int) -> Block:
        """Return the block at ``offset``."""

    @abstractmethod
    def write_block(self, offset: int, block: Block) -> None:
        """Store ``block`` at ``offset``."""

    def block_size(self) -> int:
        return self.BLOCK_SIZE


class ImageBlockDevice(BlockDevice):
    """A block device backed by a disk image file."""

    def __init__(self, path: Union[str, os.PathLike], block_size: int = BLOCK_SIZE_512) -> None:
        if block_size <= 0:
            raise ValueError("block size must be positive")
        if not os.path.isfile(path):
            raise DeviceError(DeviceErrorKind.UNKNOWN_DEVICE)
        self.path = os.fspath(path)
        self.BLOCK_SIZE = block_size

    def block_count(self) -> int:
        return os.path.getsize(self.path) // self.BLOCK_SIZE

    def _check_offset(self, offset: int) -> None:
        if offset < 0 or offset >= self.block_count():
            raise FsError(FsErrorKind.INVALID_OFFSET)

    def read_block(self, offset: int) -> Block:
        self._check_offset(offset)
        try:
            with open(self.path, "rb") as image:
                image.seek(offset * self.BLOCK_SIZE)
                data = image.read(self.BLOCK_SIZE)
        except OSError as exc:
            raise DeviceError(DeviceErrorKind.READ_ERROR) from exc
        if len(data) != self.BLOCK_SIZE:
            raise DeviceError(DeviceErrorKind.READ_ERROR)
        return Block(data)

    def write_block(self, offset: int, block: Block) -> None:
        self._check_offset(offset)
        data = bytes(block)
        if len(data) != self.BLOCK_SIZE:
            raise FsError(FsErrorKind.INVALID_OPERATION)
        try:
            with open(self.path, "r+b") as image:
                image.seek(offset * self.BLOCK_SIZE)
                image.write(data)
        except OSError as exc:
            raise DeviceError(DeviceErrorKind.WRITE_ERROR) from exc

    def __repr__(self) -> str:
        return f"ImageBlockDevice({self.path!r}, block_size={self.BLOCK_SIZE})"