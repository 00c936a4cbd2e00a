"""Byte-stream reading, writing and seeking for open files."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from .errors import FsError, FsErrorKind

_READ_CHUNK = 512


class Whence(Enum):
    """Reference point for a seek."""

    START = "start"
    END = "end"
    CURRENT = "current"


@dataclass(frozen=True)
class SeekFrom:
    """A seek target: an offset relative to a reference point."""

    whence: Whence
    offset: int

    @classmethod
    def start(cls, offset: int) -> "SeekFrom":
        if offset < 0:
            raise ValueError("offset from the start cannot be negative")
        return cls(Whence.START, offset)

    @classmethod
    def end(cls, offset: int) -> "SeekFrom":
        return cls(Whence.END, offset)

    @classmethod
    def current(cls, offset: int) -> "SeekFrom":
        return cls(Whence.CURRENT, offset)


class FileIO(ABC):
    """An open file that can be read, written and sought."""

    @abstractmethod
    def read(self, size: int) -> bytes:
        """Return up to ``size`` bytes; an empty result means end of data."""

    def read_all(self) -> bytes:
        """Read until the source is exhausted or reports an error."""
        buf = bytearray()
        while True:
            try:
                chunk = self.read(_READ_CHUNK)
            except FsError:
                break
            if not chunk:
                break
            buf += chunk
        return bytes(buf)

    @abstractmethod
    def write(self, data: bytes) -> int:
        """Write some of ``data`` and return how many bytes were taken."""

    @abstractmethod
    def flush(self) -> None:
        """Push buffered data to its destination."""

    def write_all(self, data: bytes) -> None:
        """Write the whole of ``data``."""
        view = memoryview(bytes(data))
        while view:
            written = self.write(bytes(view))
            if written == 0:
                raise FsError(FsErrorKind.WRITE_ZERO)
            view = view[written:]

    @abstractmethod
    def seek(self, pos: SeekFrom) -> int:
        """Move the cursor and return the new absolute position."""