"""The FAT16 BIOS parameter block."""

from __future__ import annotations

from .errors import FsError, FsErrorKind
from .fields import read_bytes, read_str, read_u8, read_u16, read_u32

BPB_SIZE = 512
BPB_TRAIL = 0xAA55


class Fat16Bpb:
    """The first sector of a FAT16 volume, describing its layout."""

    def __init__(self, data: bytes) -> None:
        data = bytes(data)
        if len(data) != BPB_SIZE:
            raise FsError(FsErrorKind.INVALID_OPERATION)
        self._data = data
        if self.trail() != BPB_TRAIL:
            raise FsError(FsErrorKind.INVALID_OPERATION)

    def oem_name(self) -> bytes:
        return read_bytes(self._data, 0x03, 8)

    def oem_name_str(self) -> str:
        return read_str(self._data, 0x03, 8)

    def bytes_per_sector(self) -> int:
        return read_u16(self._data, 0x0B)

    def sectors_per_cluster(self) -> int:
        return read_u8(self._data, 0x0D)

    def reserved_sector_count(self) -> int:
        return read_u16(self._data, 0x0E)

    def fat_count(self) -> int:
        return read_u8(self._data, 0x10)

    def root_entries_count(self) -> int:
        return read_u16(self._data, 0x11)

    def total_sectors_16(self) -> int:
        return read_u16(self._data, 0x13)

    def media_descriptor(self) -> int:
        return read_u8(self._data, 0x15)

    def sectors_per_fat(self) -> int:
        return read_u16(self._data, 0x16)

    def sectors_per_track(self) -> int:
        return read_u16(self._data, 0x18)

    def track_count(self) -> int:
        return read_u16(self._data, 0x1A)

    def hidden_sectors(self) -> int:
        return read_u32(self._data, 0x1C)

    def total_sectors_32(self) -> int:
        return read_u32(self._data, 0x20)

    def drive_number(self) -> int:
        return read_u8(self._data, 0x24)

    def reserved_flags(self) -> int:
        return read_u8(self._data, 0x25)

    def boot_signature(self) -> int:
        return read_u8(self._data, 0x26)

    def volume_id(self) -> int:
        return read_u32(self._data, 0x27)

    def volume_label(self) -> bytes:
        return read_bytes(self._data, 0x2B, 11)

    def volume_label_str(self) -> str:
        return read_str(self._data, 0x2B, 11)

    def system_identifier(self) -> bytes:
        return read_bytes(self._data, 0x36, 8)

    def system_identifier_str(self) -> str:
        return read_str(self._data, 0x36, 8)

    def trail(self) -> int:
        return read_u16(self._data, 0x1FE)

    def total_sectors(self) -> int:
        """Return the sector count from whichever field holds it."""
        small = self.total_sectors_16()
        return self.total_sectors_32() if small == 0 else small

    def __repr__(self) -> str:
        fields = [
            ("oem_name", repr(self.oem_name_str())),
            ("bytes_per_sector", self.bytes_per_sector()),
            ("sectors_per_cluster", self.sectors_per_cluster()),
            ("reserved_sector_count", self.reserved_sector_count()),
            ("fat_count", self.fat_count()),
            ("root_entries_count", self.root_entries_count()),
            ("total_sectors", self.total_sectors()),
            ("media_descriptor", self.media_descriptor()),
            ("sectors_per_fat", self.sectors_per_fat()),
            ("sectors_per_track", self.sectors_per_track()),
            ("track_count", self.track_count()),
            ("hidden_sectors", self.hidden_sectors()),
            ("drive_number", self.drive_number()),
            ("reserved_flags", self.reserved_flags()),
            ("boot_signature", self.boot_signature()),
            ("volume_id", self.volume_id()),
            ("volume_label", repr(self.volume_label_str())),
            ("system_identifier", repr(self.system_identifier_str())),
            ("trail", self.trail()),
        ]
        return "Fat16Bpb(" + ", ".join(f"{k}={v}" for k, v in fields) + ")"