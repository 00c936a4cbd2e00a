"""FAT16 directory entries in the standard 8.3 format."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Flag
from typing import ClassVar, Union

from .errors import FilenameError, FilenameErrorKind
from .fields import read_u8, read_u16, read_u32
from .metadata import FileType, Metadata

_U32_MAX = 0xFFFF_FFFF
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_INVALID_NAME_BYTES = frozenset(range(0x00, 0x21)) | frozenset(
    [0x22, 0x2A, 0x2B, 0x2C, 0x2F, 0x3A, 0x3B, 0x3C, 0x3D, 0x3E, 0x3F, 0x5B, 0x5C, 0x5D, 0x7C]
)


@dataclass(frozen=True, order=True)
class Cluster:
    """A cluster number on a FAT volume."""

    value: int

    INVALID: ClassVar["Cluster"]
    BAD: ClassVar["Cluster"]
    EMPTY: ClassVar["Cluster"]
    ROOT_DIR: ClassVar["Cluster"]
    END_OF_FILE: ClassVar["Cluster"]

    def __add__(self, other: Union["Cluster", int]) -> "Cluster":
        if isinstance(other, Cluster):
            other = other.value
        elif not isinstance(other, int):
            return NotImplemented
        total = self.value + other
        if not 0 <= total <= _U32_MAX:
            raise OverflowError("cluster number out of range")
        return Cluster(total)

    def __str__(self) -> str:
        return f"0x{self.value:08X}"

    __repr__ = __str__


Cluster.INVALID = Cluster(0xFFFF_FFF6)
Cluster.BAD = Cluster(0xFFFF_FFF7)
Cluster.EMPTY = Cluster(0x0000_0000)
Cluster.ROOT_DIR = Cluster(0xFFFF_FFFC)
Cluster.END_OF_FILE = Cluster(0xFFFF_FFFF)


class Attributes(Flag):
    """File attribute bits of a directory entry."""

    READ_ONLY = 0x01
    HIDDEN = 0x02
    SYSTEM = 0x04
    VOLUME_ID = 0x08
    DIRECTORY = 0x10
    ARCHIVE = 0x20
    LFN = 0x0F


def parse_datetime(value: int) -> datetime:
    """Decode a packed FAT date (high 16 bits) and time (low 16 bits)."""
    date = (value >> 16) & 0xFFFF
    time = value & 0xFFFF
    try:
        return datetime(
            ((date >> 9) & 0x7F) + 1980,
            (date >> 5) & 0x0F,
            date & 0x1F,
            (time >> 11) & 0x1F,
            (time >> 5) & 0x3F,
            (time & 0x1F) * 2,
            tzinfo=timezone.utc,
        )
    except ValueError:
        return _EPOCH


@dataclass(frozen=True)
class ShortFileName:
    """An 8.3 file name, space padded."""

    name: bytes
    ext: bytes

    def __post_init__(self) -> None:
        if len(self.name) != 8 or len(self.ext) != 3:
            raise ValueError("short file names have an 8-byte name and 3-byte extension")

    @classmethod
    def from_bytes(cls, buf: bytes) -> "ShortFileName":
        buf = bytes(buf)
        if len(buf) < 11:
            raise FilenameError(FilenameErrorKind.UNABLE_TO_PARSE)
        return cls(buf[:8], buf[8:11])

    def basename(self) -> str:
        try:
            return self.name.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise FilenameError(FilenameErrorKind.UTF8_ERROR) from exc

    def extension(self) -> str:
        try:
            return self.ext.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise FilenameError(FilenameErrorKind.UTF8_ERROR) from exc

    def is_eod(self) -> bool:
        return self.name[0] == 0x00 and self.ext[0] == 0x00

    def is_unused(self) -> bool:
        return self.name[0] == 0xE5

    def matches(self, other: "ShortFileName") -> bool:
        return self.name == other.name and self.ext == other.ext

    @classmethod
    def parse(cls, name: str) -> "ShortFileName":
        """Build a short name from text such as ``kernel.elf``."""
        base = bytearray(b" " * 8)
        ext = bytearray(b" " * 3)
        idx = 0
        seen_dot = False
        for ch in name.encode("utf-8"):
            if ch in _INVALID_NAME_BYTES:
                raise FilenameError(FilenameErrorKind.INVALID_CHARACTER)
            if ch == ord("."):
                if 1 <= idx <= 8:
                    seen_dot = True
                    idx = 8
                    continue
                raise FilenameError(FilenameErrorKind.MISPLACED_PERIOD)
            upper = ord(chr(ch).upper()) if ch < 0x80 else ch
            if seen_dot:
                if not 8 <= idx < 11:
                    raise FilenameError(FilenameErrorKind.NAME_TOO_LONG)
                ext[idx - 8] = upper
            else:
                if idx >= 8:
                    raise FilenameError(FilenameErrorKind.NAME_TOO_LONG)
                base[idx] = upper
            idx += 1
        if idx == 0:
            raise FilenameError(FilenameErrorKind.FILENAME_EMPTY)
        return cls(bytes(base), bytes(ext))

    def __str__(self) -> str:
        if self.ext[0] == 0x20:
            return self.basename().rstrip()
        return f"{self.basename().rstrip()}.{self.extension().rstrip()}"


@dataclass(frozen=True)
class DirEntry:
    """A parsed 32-byte directory entry."""

    LEN: ClassVar[int] = 0x20

    name: ShortFileName
    modified_time: datetime
    created_time: datetime
    accessed_time: datetime
    cluster: Cluster
    attributes: Attributes
    size: int

    @classmethod
    def parse(cls, data: bytes) -> "DirEntry":
        data = bytes(data)
        if len(data) < cls.LEN:
            raise FilenameError(FilenameErrorKind.UNABLE_TO_PARSE)
        created = (read_u16(data, 0x10) << 16) | read_u16(data, 0x0E)
        accessed = read_u16(data, 0x12) << 16
        modified = (read_u16(data, 0x18) << 16) | read_u16(data, 0x16)
        cluster = (read_u16(data, 0x14) << 16) | read_u16(data, 0x1A)
        return cls(
            name=ShortFileName.from_bytes(data[:11]),
            modified_time=parse_datetime(modified),
            created_time=parse_datetime(created),
            accessed_time=parse_datetime(accessed),
            cluster=Cluster(cluster),
            attributes=Attributes(read_u8(data, 0x0B) & 0x3F),
            size=read_u32(data, 0x1C),
        )

    def filename(self) -> str:
        """Return the displayable name, or ``unknown`` for unusable entries."""
        if self.is_valid() and not self.is_long_name():
            return str(self.name)
        return "unknown"

    def is_valid(self) -> bool:
        return not self.name.is_eod() and not self.name.is_unused()

    def is_long_name(self) -> bool:
        return self.attributes == Attributes.LFN

    def is_directory(self) -> bool:
        return Attributes.DIRECTORY in self.attributes

    def as_meta(self) -> Metadata:
        return Metadata(
            name=self.filename(),
            entry_type=FileType.DIRECTORY if self.is_directory() else FileType.FILE,
            length=self.size,
            created=self.created_time,
            modified=self.modified_time,
            accessed=self.accessed_time,
        )