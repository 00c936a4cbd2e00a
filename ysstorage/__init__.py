"""Block devices, MBR partitions, a read-only FAT16 filesystem and small kernel-side helpers."""

__version__ = "0.4.0"