# ysstorage

A small storage stack for reading raw disk images:

- fixed-size blocks (`ysstorage.block.Block`) and block devices (`BlockDevice`), including `ImageBlockDevice`, which reads and writes blocks of an image file;
- MBR partition tables (`ysstorage.partition.MbrTable`, `MbrPartition`, `Partition`);
- the FAT16 BIOS parameter block (`ysstorage.bpb.Fat16Bpb`) and 8.3 directory entries (`ysstorage.direntry.DirEntry`, `ShortFileName`, `Cluster`, `Attributes`);
- a read-only FAT16 filesystem (`ysstorage.fat16.Fat16`) with directory listing, metadata, existence checks and file reading;
- a `Mount` wrapper (`ysstorage.filesystem`) that strips a mount point from paths before handing them to a filesystem.

It also has a few kernel-side helpers: file-descriptor tables (`ysstorage.resource.ResourceSet`, with `ConsoleResource` and `NullResource`), system call numbers and decoded arguments (`ysstorage.syscall.Syscall`, `SyscallArgs`), a register dump (`ysstorage.registers.RegistersValue`) and size formatting (`ysstorage.units.humanized_size`, `humanized_size_short`).

## Installation

```
pip install .
```

## Command line

To list a directory on the first active partition of a disk image:

```
ysstorage disk.img /
```

The path defaults to `/`. Each line shows the size in short units, the modification time and the name; directory names end with `/`. The command exits with status 1 if the image cannot be mounted or the directory cannot be read.

## Library use

```python
from ysstorage.cli import mount_image, ls

fs = mount_image("disk.img")
for meta in fs.read_dir("/"):
    print(meta.name, meta.length, meta.is_dir())

ls(fs, "/")  # prints the same table as the command

handle = fs.open_file("/KERNEL.ELF")
data = handle.read_all()
```

Paths are matched against 8.3 short names; `ShortFileName.parse` upper-cases the name, so `/kernel.elf` finds the same file.

Filesystem errors are raised as `ysstorage.errors.FsError`, whose `kind` is an `FsErrorKind`. Bad file names raise `FilenameError` and device failures raise `DeviceError`; both are subclasses of `FsError`.

## What it does not do

- The FAT16 filesystem is read-only: writing or flushing an open file raises `FsError` with kind `READ_ONLY`, and creating, removing, copying or moving entries raises `NOT_SUPPORTED`.
- Long file names are not read; such entries are skipped and only 8.3 names are listed.
- Only the first active MBR partition is mounted by the command; GPT and other partition schemes are not understood.

## Tests

```
pip install .[test]
pytest
```