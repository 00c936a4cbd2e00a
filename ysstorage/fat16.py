"""A read-only FAT16 file system on top of a block device."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional

from .block import BlockDevice
from .bpb import Fat16Bpb
from .direntry import Attributes, Cluster, DirEntry, ShortFileName
from .errors import FsError, FsErrorKind
from .fileio import FileIO, SeekFrom, Whence
from .filesystem import FileSystem
from .metadata import FileHandle, FileType, Metadata

BLOCK_SIZE = 512
_FAT_ENTRY_SIZE = 2


@dataclass
class Directory:
    """A directory listing: its first cluster and, except for the root, its entry."""

    cluster: Cluster
    entry: Optional[DirEntry] = None

    @classmethod
    def root(cls) -> "Directory":
        return cls(Cluster.ROOT_DIR, None)

    @classmethod
    def from_entry(cls, entry: DirEntry) -> "Directory":
        return cls(entry.cluster, entry)

    def __str__(self) -> str:
        return f"Directory(cluster: {self.cluster}, entry: {self.entry!r})"


class Fat16(FileSystem):
    """A FAT16 volume read through a block device."""

    def __init__(self, inner: BlockDevice) -> None:
        self.inner = inner
        self.bpb = Fat16Bpb(bytes(inner.read_block(0)))
        bps = self.bpb.bytes_per_sector()
        self.fat_start = self.bpb.reserved_sector_count()
        self.root_dir_size = (self.bpb.root_entries_count() * DirEntry.LEN + bps - 1) // bps
        self.first_root_dir_sector = (
            self.fat_start + self.bpb.fat_count() * self.bpb.sectors_per_fat()
        )
        self.first_data_sector = self.first_root_dir_sector + self.root_dir_size

    def cluster_to_sector(self, cluster: Cluster) -> int:
        if cluster == Cluster.ROOT_DIR:
            return self.first_root_dir_sector
        return (cluster.value - 2) * self.bpb.sectors_per_cluster() + self.first_data_sector

    def next_cluster(self, cluster: Cluster) -> Cluster:
        """Follow the FAT from ``cluster`` to the next one in its chain."""
        byte_offset = cluster.value * _FAT_ENTRY_SIZE
        bps = self.bpb.bytes_per_sector()
        sector = self.fat_start + byte_offset // bps
        within = byte_offset % bps
        data = bytes(self.inner.read_block(sector))
        value = int.from_bytes(data[within : within + 2], "little")
        if value == 0xFFF7:
            return Cluster.BAD
        if value >= 0xFFF8:
            return Cluster.END_OF_FILE
        if value < 2:
            raise FsError(FsErrorKind.BAD_CLUSTER)
        return Cluster(value)

    def _directory_sectors(self, directory: Directory) -> Iterator[int]:
        if directory.cluster == Cluster.ROOT_DIR:
            yield from range(
                self.first_root_dir_sector, self.first_root_dir_sector + self.root_dir_size
            )
            return
        cluster = directory.cluster
        while True:
            first = self.cluster_to_sector(cluster)
            yield from range(first, first + self.bpb.sectors_per_cluster())
            cluster = self.next_cluster(cluster)
            if cluster == Cluster.END_OF_FILE:
                return
            if cluster == Cluster.BAD:
                raise FsError(FsErrorKind.BAD_CLUSTER)

    def iter_entries(self, directory: Directory) -> Iterator[DirEntry]:
        """Yield the usable entries of ``directory`` in on-disk order."""
        for sector in self._directory_sectors(directory):
            data = bytes(self.inner.read_block(sector))
            for start in range(0, len(data), DirEntry.LEN):
                entry = DirEntry.parse(data[start : start + DirEntry.LEN])
                if entry.name.is_eod():
                    return
                if not entry.is_valid() or entry.is_long_name():
                    continue
                if Attributes.VOLUME_ID in entry.attributes:
                    continue
                yield entry

    def find_entry(self, directory: Directory, name: str) -> DirEntry:
        wanted = ShortFileName.parse(name)
        for entry in self.iter_entries(directory):
            if entry.name.matches(wanted):
                return entry
        raise FsError(FsErrorKind.FILE_NOT_FOUND)

    def resolve(self, path: str) -> Optional[DirEntry]:
        """Return the entry at ``path``, or None for the root directory."""
        parts = [p for p in path.split("/") if p]
        directory = Directory.root()
        entry: Optional[DirEntry] = None
        for index, part in enumerate(parts):
            entry = self.find_entry(directory, part)
            if index < len(parts) - 1:
                if not entry.is_directory():
                    raise FsError(FsErrorKind.NOT_A_DIRECTORY)
                directory = Directory.from_entry(entry)
        return entry

    def _directory_at(self, path: str) -> Directory:
        entry = self.resolve(path)
        if entry is None:
            return Directory.root()
        if not entry.is_directory():
            raise FsError(FsErrorKind.NOT_A_DIRECTORY)
        return Directory.from_entry(entry)

    def read_dir(self, path: str) -> Iterator[Metadata]:
        directory = self._directory_at(path)
        return iter([entry.as_meta() for entry in self.iter_entries(directory)])

    def open_file(self, path: str) -> FileHandle:
        entry = self.resolve(path)
        if entry is None or entry.is_directory():
            raise FsError(FsErrorKind.NOT_A_FILE)
        return FileHandle(entry.as_meta(), Fat16File(self, entry))

    def metadata(self, path: str) -> Metadata:
        entry = self.resolve(path)
        if entry is None:
            return Metadata("/", FileType.DIRECTORY, 0)
        return entry.as_meta()

    def exists(self, path: str) -> bool:
        try:
            self.resolve(path)
        except FsError as exc:
            if exc.kind in (FsErrorKind.FILE_NOT_FOUND, FsErrorKind.FILE_NAME_ERROR):
                return False
            raise
        return True

    def __repr__(self) -> str:
        return f"Fat16(bpb={self.bpb!r})"


class Fat16File(FileIO):
    """An open file on a FAT16 volume; reading follows the cluster chain."""

    def __init__(self, fs: Fat16, entry: DirEntry) -> None:
        self.fs = fs
        self.entry = entry
        self.offset = 0
        self.current_cluster = entry.cluster

    def length(self) -> int:
        return self.entry.size

    def _cluster_bytes(self) -> int:
        return self.fs.bpb.sectors_per_cluster() * self.fs.bpb.bytes_per_sector()

    def read(self, size: int) -> bytes:
        remaining = max(0, min(size, self.length() - self.offset))
        out = bytearray()
        cluster_bytes = self._cluster_bytes()
        bps = self.fs.bpb.bytes_per_sector()
        while remaining:
            if self.current_cluster in (Cluster.END_OF_FILE, Cluster.BAD):
                raise FsError(FsErrorKind.BAD_CLUSTER)
            within = self.offset % cluster_bytes
            sector = self.fs.cluster_to_sector(self.current_cluster) + within // bps
            data = bytes(self.fs.inner.read_block(sector))
            start = within % bps
            take = min(remaining, bps - start)
            out += data[start : start + take]
            self.offset += take
            remaining -= take
            if self.offset % cluster_bytes == 0 and self.offset < self.length():
                self.current_cluster = self.fs.next_cluster(self.current_cluster)
        return bytes(out)

    def seek(self, pos: SeekFrom) -> int:
        base = {Whence.START: 0, Whence.CURRENT: self.offset, Whence.END: self.length()}
        target = base[pos.whence] + pos.offset
        if target < 0:
            raise FsError(FsErrorKind.INVALID_OFFSET)
        cluster = self.entry.cluster
        for _ in range(min(target, max(self.length() - 1, 0)) // self._cluster_bytes()):
            cluster = self.fs.next_cluster(cluster)
        self.current_cluster = cluster
        self.offset = target
        return target

    def write(self, data: bytes) -> int:
        raise FsError(FsErrorKind.READ_ONLY)

    def flush(self) -> None:
        """The volume is read-only, so flushing is refused like writing."""
        raise FsError(FsErrorKind.READ_ONLY)