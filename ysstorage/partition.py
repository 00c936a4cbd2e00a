"""Partitions and the MBR partition table."""

from __future__ import annotations

from typing import List, Sequence

from .block import Block, BlockDevice
from .errors import FsError, FsErrorKind
from .fields import read_u8, read_u32

MBR_ENTRY_OFFSET = 0x1BE
MBR_ENTRY_SIZE = 16
MBR_ENTRY_COUNT = 4


class Partition(BlockDevice):
    """A window of ``size`` blocks starting at ``offset`` on another device."""

    def __init__(self, inner: BlockDevice, offset: int, size: int) -> None:
        self.inner = inner
        self.offset = offset
        self.size = size

    def block_count(self) -> int:
        return self.inner.block_count()

    def _check_offset(self, offset: int) -> None:
        if offset < 0 or offset >= self.size:
            raise FsError(FsErrorKind.INVALID_OFFSET)

    def read_block(self, offset: int) -> Block:
        self._check_offset(offset)
        return self.inner.read_block(self.offset + offset)

    def write_block(self, offset: int, block: Block) -> None:
        self._check_offset(offset)
        self.inner.write_block(self.offset + offset, block)

    def block_size(self) -> int:
        return self.inner.block_size()

    def __repr__(self) -> str:
        return f"Partition(offset={self.offset}, size={self.size})"


class MbrPartition:
    """One 16-byte entry of an MBR partition table."""

    def __init__(self, data: bytes = bytes(MBR_ENTRY_SIZE)) -> None:
        data = bytes(data)
        if len(data) != MBR_ENTRY_SIZE:
            raise ValueError(f"partition entry must be {MBR_ENTRY_SIZE} bytes, got {len(data)}")
        self._data = data

    def status(self) -> int:
        return read_u8(self._data, 0x00)

    def is_active(self) -> bool:
        return self.status() == 0x80

    def begin_head(self) -> int:
        return read_u8(self._data, 0x01)

    def begin_sector(self) -> int:
        return read_u8(self._data, 0x02) & 0x3F

    def begin_cylinder(self) -> int:
        return ((read_u8(self._data, 0x02) & 0xC0) << 2) | read_u8(self._data, 0x03)

    def partition_type(self) -> int:
        return read_u8(self._data, 0x04)

    def end_head(self) -> int:
        return read_u8(self._data, 0x05)

    def end_sector(self) -> int:
        return read_u8(self._data, 0x06) & 0x3F

    def end_cylinder(self) -> int:
        return ((read_u8(self._data, 0x06) & 0xC0) << 2) | read_u8(self._data, 0x07)

    def begin_lba(self) -> int:
        return read_u32(self._data, 0x08)

    def total_lba(self) -> int:
        return read_u32(self._data, 0x0C)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MbrPartition):
            return NotImplemented
        return self._data == other._data

    def __hash__(self) -> int:
        return hash(self._data)

    def __repr__(self) -> str:
        return (
            "MbrPartition("
            f"active={self.is_active()}, "
            f"begin_head=0x{self.begin_head():02x}, "
            f"begin_sector=0x{self.begin_sector():04x}, "
            f"begin_cylinder=0x{self.begin_cylinder():04x}, "
            f"partition_type=0x{self.partition_type():02x}, "
            f"end_head=0x{self.end_head():02x}, "
            f"end_sector=0x{self.end_sector():04x}, "
            f"end_cylinder=0x{self.end_cylinder():04x}, "
            f"begin_lba=0x{self.begin_lba():08x}, "
            f"total_lba=0x{self.total_lba():08x})"
        )


class MbrTable:
    """The partition table found in the first sector of a disk."""

    def __init__(self, inner: BlockDevice, entries: Sequence[MbrPartition]) -> None:
        entries = list(entries)
        if len(entries) != MBR_ENTRY_COUNT:
            raise ValueError(f"an MBR holds {MBR_ENTRY_COUNT} entries, got {len(entries)}")
        self.inner = inner
        self.entries = entries

    @classmethod
    def parse(cls, inner: BlockDevice) -> "MbrTable":
        """Read the first block of ``inner`` and decode its four entries."""
        sector = bytes(inner.read_block(0))
        entries = [
            MbrPartition(sector[start : start + MBR_ENTRY_SIZE])
            for start in range(
                MBR_ENTRY_OFFSET,
                MBR_ENTRY_OFFSET + MBR_ENTRY_COUNT * MBR_ENTRY_SIZE,
                MBR_ENTRY_SIZE,
            )
        ]
        return cls(inner, entries)

    def partitions(self) -> List[Partition]:
        """Return the active partitions as block devices."""
        return [
            Partition(self.inner, entry.begin_lba(), entry.total_lba())
            for entry in self.entries
            if entry.is_active()
        ]

    def __repr__(self) -> str:
        return f"MbrTable(entries={self.entries!r})"