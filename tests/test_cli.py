import logging
import struct
from datetime import datetime, timezone

import pytest

from ysstorage import cli
from ysstorage.errors import FsError
from ysstorage.filesystem import Mount
from ysstorage.metadata import FileType, Metadata

SECTOR = 512
FILE_CONTENT = b"hello"


def _dir_entry(name: bytes, attr: int, cluster: int, size: int) -> bytes:
    entry = bytearray(32)
    entry[0:11] = name
    entry[0x0B] = attr
    # time 0xbe0f and date 0x50d0 taken from the directory entry test data
    struct.pack_into("<H", entry, 0x0E, 0xBE0F)
    struct.pack_into("<H", entry, 0x10, 0x50D0)
    struct.pack_into("<H", entry, 0x12, 0x50D0)
    struct.pack_into("<H", entry, 0x16, 0xBE0F)
    struct.pack_into("<H", entry, 0x18, 0x50D0)
    struct.pack_into("<H", entry, 0x1A, cluster)
    struct.pack_into("<I", entry, 0x1C, size)
    return bytes(entry)


def _build_image(active: bool = True) -> bytes:
    part_sectors = 16
    mbr = bytearray(SECTOR)
    entry = bytearray(16)
    entry[0] = 0x80 if active else 0x00
    entry[4] = 0x06
    struct.pack_into("<I", entry, 8, 1)
    struct.pack_into("<I", entry, 12, part_sectors)
    mbr[0x1BE:0x1CE] = entry
    mbr[510:512] = b"\x55\xaa"

    bpb = bytearray(SECTOR)
    bpb[0:3] = b"\xeb\x3c\x90"
    bpb[3:11] = b"mkfs.fat"
    struct.pack_into("<H", bpb, 0x0B, SECTOR)
    bpb[0x0D] = 1
    struct.pack_into("<H", bpb, 0x0E, 1)
    bpb[0x10] = 1
    struct.pack_into("<H", bpb, 0x11, 16)
    struct.pack_into("<H", bpb, 0x13, part_sectors)
    bpb[0x15] = 0xF8
    struct.pack_into("<H", bpb, 0x16, 1)
    bpb[510:512] = b"\x55\xaa"

    fat = bytearray(SECTOR)
    struct.pack_into("<HHHH", fat, 0, 0xFFF8, 0xFFFF, 0xFFFF, 0xFFFF)

    root = bytearray(SECTOR)
    root[0:32] = _dir_entry(b"HELLO   TXT", 0x20, 2, len(FILE_CONTENT))
    root[32:64] = _dir_entry(b"DOCS       ", 0x10, 3, 0)

    data = bytearray(SECTOR)
    data[: len(FILE_CONTENT)] = FILE_CONTENT

    sectors = [bytes(bpb), bytes(fat), bytes(root), bytes(data), bytes(SECTOR)]
    sectors += [bytes(SECTOR)] * (part_sectors - len(sectors))
    return bytes(mbr) + b"".join(sectors)


@pytest.fixture
def image(tmp_path):
    path = tmp_path / "disk.img"
    path.write_bytes(_build_image())
    return path


def test_mount_image_reads_file(image):
    fs = cli.mount_image(image)
    assert isinstance(fs, Mount)
    assert fs.mount_point == cli.ROOT_MOUNT_POINT
    assert fs.exists("/hello.txt") is True
    assert fs.open_file("/hello.txt").read_all() == FILE_CONTENT


def test_mount_image_without_active_partition(tmp_path):
    path = tmp_path / "empty.img"
    path.write_bytes(_build_image(active=False))
    with pytest.raises(FsError):
        cli.mount_image(path)


def test_mount_image_missing_file(tmp_path):
    with pytest.raises(FsError):
        cli.mount_image(tmp_path / "absent.img")


def test_format_listing_marks_directories():
    when = datetime(2020, 6, 16, 23, 48, 30, tzinfo=timezone.utc)
    entries = [
        Metadata("A.TXT", FileType.FILE, 10, modified=when),
        Metadata("SUB", FileType.DIRECTORY, 0),
    ]
    lines = cli.format_listing(entries).splitlines()
    assert lines[0] == cli.LISTING_HEADER
    assert len(lines) == len(entries) + 1
    assert lines[1].endswith("| A.TXT")
    assert "2020-06-16 23:48:30" in lines[1]
    assert lines[2].endswith("SUB/")


def test_format_listing_empty_is_header_only():
    assert cli.format_listing([]) == cli.LISTING_HEADER + "\n"


def test_ls_root(image, capsys):
    fs = cli.mount_image(image)
    listing = cli.ls(fs, "/")
    out = capsys.readouterr().out
    assert listing == out
    assert "HELLO.TXT" in listing
    assert "DOCS/" in listing
    assert listing.splitlines()[0] == cli.LISTING_HEADER


def test_ls_empty_directory(image):
    fs = cli.mount_image(image)
    listing = cli.ls(fs, "/docs")
    assert listing.splitlines() == [cli.LISTING_HEADER]


def test_ls_missing_path_warns(image, caplog):
    fs = cli.mount_image(image)
    with caplog.at_level(logging.WARNING, logger=cli.__name__):
        result = cli.ls(fs, "/nothere")
    assert result is None
    assert any(record.levelno == logging.WARNING for record in caplog.records)


def test_ls_on_file_warns(image, caplog):
    fs = cli.mount_image(image)
    with caplog.at_level(logging.WARNING, logger=cli.__name__):
        assert cli.ls(fs, "/hello.txt") is None
    assert caplog.records


def test_main_lists_image(image, capsys):
    assert cli.main([str(image)]) == 0
    out = capsys.readouterr().out
    assert "HELLO.TXT" in out
    assert "DOCS/" in out


def test_main_missing_image(tmp_path, capsys):
    assert cli.main([str(tmp_path / "absent.img")]) == 1
    assert "error" in capsys.readouterr().err


def test_main_missing_directory(image):
    assert cli.main([str(image), "/nothere"]) == 1