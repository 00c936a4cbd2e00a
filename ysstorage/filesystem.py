"""The file system interface and mount points."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterator

from .errors import FsError, FsErrorKind
from .metadata import FileHandle, Metadata


class FileSystem(ABC):
    """A file system addressed by slash-separated paths."""

    @abstractmethod
    def read_dir(self, path: str) -> Iterator[Metadata]:
        """Iterate over the direct children of the directory at ``path``."""

    @abstractmethod
    def open_file(self, path: str) -> FileHandle:
        """Open the file at ``path`` for reading."""

    @abstractmethod
    def metadata(self, path: str) -> Metadata:
        """Return the metadata of the entry at ``path``."""

    @abstractmethod
    def exists(self, path: str) -> bool:
        """Return whether an entry exists at ``path``."""

    def create_file(self, path: str) -> FileHandle:
        raise FsError(FsErrorKind.NOT_SUPPORTED)

    def append_file(self, path: str) -> FileHandle:
        raise FsError(FsErrorKind.NOT_SUPPORTED)

    def remove_file(self, path: str) -> FileHandle:
        raise FsError(FsErrorKind.NOT_SUPPORTED)

    def remove_dir(self, path: str) -> FileHandle:
        raise FsError(FsErrorKind.NOT_SUPPORTED)

    def copy_file(self, src: str, dst: str) -> None:
        raise FsError(FsErrorKind.NOT_SUPPORTED)

    def move_file(self, src: str, dst: str) -> None:
        raise FsError(FsErrorKind.NOT_SUPPORTED)

    def move_dir(self, src: str, dst: str) -> None:
        raise FsError(FsErrorKind.NOT_SUPPORTED)


class Mount(FileSystem):
    """A file system attached at a mount point; the point is stripped from paths."""

    def __init__(self, fs: FileSystem, mount_point: str) -> None:
        self.fs = fs
        self.mount_point = mount_point

    def _trim(self, path: str) -> str:
        prefix = self.mount_point
        if not prefix:
            return path
        while path.startswith(prefix):
            path = path[len(prefix) :]
        return path

    def read_dir(self, path: str) -> Iterator[Metadata]:
        return self.fs.read_dir(self._trim(path))

    def open_file(self, path: str) -> FileHandle:
        return self.fs.open_file(self._trim(path))

    def metadata(self, path: str) -> Metadata:
        return self.fs.metadata(self._trim(path))

    def exists(self, path: str) -> bool:
        return self.fs.exists(self._trim(path))

    def __repr__(self) -> str:
        return f"Mount(mount_point={self.mount_point!r}, fs={self.fs!r})"