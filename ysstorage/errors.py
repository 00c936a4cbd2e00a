"""Error types raised by the storage layer."""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional


class FsErrorKind(Enum):
    """Broad categories of file system failures."""

    FILE_NOT_FOUND = "file not found"
    NOT_IN_SECTOR = "not in sector"
    END_OF_FILE = "end of file"
    WRITE_ZERO = "write zero"
    NOT_A_DIRECTORY = "not a directory"
    NOT_A_FILE = "not a file"
    READ_ONLY = "read only"
    INVALID_OPERATION = "invalid operation"
    NOT_SUPPORTED = "not supported"
    BAD_CLUSTER = "bad cluster"
    INVALID_OFFSET = "invalid offset"
    FILE_NAME_ERROR = "file name error"
    DEVICE_ERROR = "device error"
    INVALID_PATH = "invalid path"


class DeviceErrorKind(Enum):
    """Reasons a block device can fail."""

    BUSY = "busy"
    UNKNOWN_DEVICE = "unknown device"
    UNKNOWN = "unknown"
    INVALID_OPERATION = "invalid operation"
    READ_ERROR = "read error"
    WRITE_ERROR = "write error"
    WITH_STATUS = "with status"


class FilenameErrorKind(Enum):
    """Reasons a file name can be rejected."""

    INVALID_CHARACTER = "invalid character"
    FILENAME_EMPTY = "filename empty"
    NAME_TOO_LONG = "name too long"
    MISPLACED_PERIOD = "misplaced period"
    UTF8_ERROR = "utf-8 error"
    UNABLE_TO_PARSE = "unable to parse"


class FsError(Exception):
    """A file system operation failed."""

    def __init__(self, kind: FsErrorKind, detail: Any = None) -> None:
        self.kind = FsErrorKind(kind)
        self.detail = detail
        super().__init__(self._message())

    def _message(self) -> str:
        if self.detail is None:
            return self.kind.value
        shown = self.detail.value if isinstance(self.detail, Enum) else self.detail
        return f"{self.kind.value}: {shown}"

    def _key(self) -> tuple:
        return (self.kind, self.detail)

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return self._key() == other._key()  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self).__name__,) + self._key())

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._message()!r})"


class DeviceError(FsError):
    """A block device reported a failure."""

    def __init__(self, reason: DeviceErrorKind, status: Optional[int] = None) -> None:
        reason = DeviceErrorKind(reason)
        if reason is DeviceErrorKind.WITH_STATUS and status is None:
            raise ValueError("a status code is required for WITH_STATUS")
        if reason is not DeviceErrorKind.WITH_STATUS and status is not None:
            raise ValueError("a status code is only allowed for WITH_STATUS")
        self.reason = reason
        self.status = status
        super().__init__(FsErrorKind.DEVICE_ERROR, reason)

    def _message(self) -> str:
        text = f"{self.kind.value}: {self.reason.value}"
        if self.status is not None:
            text += f" ({self.status:#x})"
        return text

    def _key(self) -> tuple:
        return (self.kind, self.reason, self.status)


class FilenameError(FsError):
    """A file name could not be used."""

    def __init__(self, reason: FilenameErrorKind) -> None:
        self.reason = FilenameErrorKind(reason)
        super().__init__(FsErrorKind.FILE_NAME_ERROR, self.reason)