"""File entry metadata and open file handles."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from .fileio import FileIO, SeekFrom


class FileType(Enum):
    """Kind of a directory entry."""

    FILE = "file"
    DIRECTORY = "directory"


@dataclass
class Metadata:
    """Name, type, length and timestamps of an entry."""

    name: str
    entry_type: FileType
    length: int
    created: Optional[datetime] = None
    modified: Optional[datetime] = None
    accessed: Optional[datetime] = None

    def is_file(self) -> bool:
        return self.entry_type is FileType.FILE

    def is_dir(self) -> bool:
        return self.entry_type is FileType.DIRECTORY


class FileHandle:
    """An open file together with its metadata."""

    def __init__(self, meta: Metadata, file: FileIO) -> None:
        self.meta = meta
        self._file = file

    def read(self, size: int) -> bytes:
        return self._file.read(size)

    def read_all(self) -> bytes:
        return self._file.read_all()

    def write(self, data: bytes) -> int:
        return self._file.write(data)

    def flush(self) -> None:
        self._file.flush()

    def seek(self, pos: SeekFrom) -> int:
        return self._file.seek(pos)

    def __repr__(self) -> str:
        return f"FileHandle(meta={self.meta!r})"