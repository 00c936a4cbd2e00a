import pytest

from ysstorage.bpb import Fat16Bpb
from ysstorage.errors import FsError, FsErrorKind

DATA_1 = bytes.fromhex(
    """EB 3C 90 6D 6B 66 73 2E 66 61 74 00 02 10 01 00
    02 00 02 00 00 F8 20 00 3F 00 FF 00 00 00 00 00
    00 E0 01 00 80 01 29 BB B0 71 77 62 6F 6F 74 20
    20 20 20 20 20 20 46 41 54 31 36 20 20 20 0E 1F
    BE 5B 7C AC 22 C0 74 0B 56 B4 0E BB 07 00 CD 10
    5E EB F0 32 E4 CD 16 CD 19 EB FE 54 68 69 73 20
    69 73 20 6E 6F 74 20 61 20 62 6F 6F 74 61 62 6C
    65 20 64 69 73 6B 2E 20 20 50 6C 65 61 73 65 20
    69 6E 73 65 72 74 20 61 20 62 6F 6F 74 61 62 6C
    65 20 66 6C 6F 70 70 79 20 61 6E 64 0D 0A 70 72
    65 73 73 20 61 6E 79 20 6B 65 79 20 74 6F 20 74
    72 79 20 61 67 61 69 6E 20 2E 2E 2E 20 0D 0A 00"""
)

DATA_2 = bytes.fromhex(
    """EB 3E 90 4D 53 57 49 4E 34 2E 31 00 02 10 01 00
    02 00 02 00 00 F8 FC 00 3F 00 10 00 3F 00 00 00
    C1 BF 0F 00 80 00 29 FD 1A BE FA 51 45 4D 55 20
    56 56 46 41 54 20 46 41 54 31 36 20 20 20 00 00"""
)


def sector(data):
    return data.ljust(510, b"\0") + b"\x55\xaa"


def test_fat16_bpb_1():
    bpb = Fat16Bpb(sector(DATA_1))
    assert bpb.oem_name() == b"mkfs.fat"
    assert bpb.bytes_per_sector() == 512
    assert bpb.sectors_per_cluster() == 16
    assert bpb.reserved_sector_count() == 1
    assert bpb.fat_count() == 2
    assert bpb.root_entries_count() == 512
    assert bpb.total_sectors_16() == 0
    assert bpb.media_descriptor() == 0xF8
    assert bpb.sectors_per_fat() == 32
    assert bpb.sectors_per_track() == 63
    assert bpb.track_count() == 255
    assert bpb.hidden_sectors() == 0
    assert bpb.total_sectors_32() == 0x1E000
    assert bpb.drive_number() == 128
    assert bpb.reserved_flags() == 1
    assert bpb.boot_signature() == 0x29
    assert bpb.volume_id() == 0x7771B0BB
    assert bpb.volume_label() == b"boot       "
    assert bpb.system_identifier() == b"FAT16   "
    assert bpb.total_sectors() == 0x1E000


def test_fat16_bpb_2():
    bpb = Fat16Bpb(sector(DATA_2))
    assert bpb.oem_name() == b"MSWIN4.1"
    assert bpb.oem_name_str() == "MSWIN4.1"
    assert bpb.bytes_per_sector() == 512
    assert bpb.sectors_per_cluster() == 16
    assert bpb.reserved_sector_count() == 1
    assert bpb.fat_count() == 2
    assert bpb.root_entries_count() == 512
    assert bpb.total_sectors_16() == 0
    assert bpb.media_descriptor() == 0xF8
    assert bpb.sectors_per_fat() == 0xFC
    assert bpb.sectors_per_track() == 63
    assert bpb.track_count() == 16
    assert bpb.hidden_sectors() == 63
    assert bpb.total_sectors_32() == 0xFBFC1
    assert bpb.drive_number() == 128
    assert bpb.reserved_flags() == 0
    assert bpb.boot_signature() == 0x29
    assert bpb.volume_id() == 0xFABE1AFD
    assert bpb.volume_label() == b"QEMU VVFAT "
    assert bpb.volume_label_str() == "QEMU VVFAT "
    assert bpb.system_identifier() == b"FAT16   "
    assert bpb.system_identifier_str() == "FAT16   "
    assert bpb.total_sectors() == 0xFBFC1


def test_trail_value():
    assert Fat16Bpb(sector(DATA_2)).trail() == 0xAA55


def test_total_sectors_prefers_16_bit_field():
    data = bytearray(sector(DATA_2))
    data[0x13:0x15] = (1000).to_bytes(2, "little")
    assert Fat16Bpb(bytes(data)).total_sectors() == 1000


def test_missing_trail_rejected():
    with pytest.raises(FsError) as info:
        Fat16Bpb(DATA_2.ljust(512, b"\0"))
    assert info.value.kind is FsErrorKind.INVALID_OPERATION


def test_wrong_length_rejected():
    with pytest.raises(FsError) as info:
        Fat16Bpb(DATA_2)
    assert info.value.kind is FsErrorKind.INVALID_OPERATION