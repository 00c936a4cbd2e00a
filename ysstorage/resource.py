"""Per-process open resources addressed by small file descriptors."""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from enum import Enum
from typing import BinaryIO, Dict, Optional, TextIO


class StdIO(Enum):
    STDIN = "stdin"
    STDOUT = "stdout"
    STDERR = "stderr"


class Resource(ABC):
    """Something a descriptor refers to; None from an operation means unsupported."""

    @abstractmethod
    def read(self, size: int) -> Optional[bytes]:
        ...

    @abstractmethod
    def write(self, data: bytes) -> Optional[int]:
        ...


class ConsoleResource(Resource):
    """One of the three console streams."""

    def __init__(
        self,
        stdio: StdIO,
        stdin: Optional[BinaryIO] = None,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
    ) -> None:
        self.stdio = StdIO(stdio)
        self._stdin = stdin
        self._stdout = stdout
        self._stderr = stderr

    def read(self, size: int) -> Optional[bytes]:
        if self.stdio is not StdIO.STDIN:
            return None
        stream = self._stdin if self._stdin is not None else sys.stdin.buffer
        return stream.read(size)

    def write(self, data: bytes) -> Optional[int]:
        if self.stdio is StdIO.STDIN:
            return None
        text = bytes(data).decode("utf-8", errors="replace")
        if self.stdio is StdIO.STDOUT:
            stream = self._stdout if self._stdout is not None else sys.stdout
        else:
            stream = self._stderr if self._stderr is not None else sys.stderr
        stream.write(text)
        return len(data)

    def __repr__(self) -> str:
        return f"ConsoleResource({self.stdio.name})"


class NullResource(Resource):
    """Reads nothing and swallows everything written."""

    def read(self, size: int) -> Optional[bytes]:
        return b""

    def write(self, data: bytes) -> Optional[int]:
        return len(data)

    def __repr__(self) -> str:
        return "NullResource()"


class ResourceSet:
    """The descriptor table of a process, opened with the three console streams."""

    def __init__(
        self,
        stdin: Optional[BinaryIO] = None,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
    ) -> None:
        self.handles: Dict[int, Resource] = {}
        for stdio in StdIO:
            self.open(ConsoleResource(stdio, stdin, stdout, stderr))

    def open(self, resource: Resource) -> int:
        fd = len(self.handles)
        self.handles[fd] = resource
        return fd

    def close(self, fd: int) -> bool:
        return self.handles.pop(fd, None) is not None

    def read(self, fd: int, size: int) -> bytes:
        """Read from ``fd``; OSError if it is not open or cannot be read."""
        handle = self.handles.get(fd)
        data = handle.read(size) if handle is not None else None
        if data is None:
            raise OSError(f"cannot read from descriptor {fd}")
        return data

    def write(self, fd: int, data: bytes) -> int:
        """Write to ``fd``; OSError if it is not open or cannot be written."""
        handle = self.handles.get(fd)
        count = handle.write(data) if handle is not None else None
        if count is None:
            raise OSError(f"cannot write to descriptor {fd}")
        return count