"""Mount a disk image's first partition as FAT16 and list directories."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Iterable, Optional, Sequence, Union

from .block import ImageBlockDevice
from .errors import FsError, FsErrorKind
from .fat16 import Fat16
from .filesystem import FileSystem, Mount
from .metadata import Metadata
from .partition import MbrTable
from .units import humanized_size_short

logger = logging.getLogger(__name__)

ROOT_MOUNT_POINT = "/"
LISTING_HEADER = "  Size  | Last Modified       | Name"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_DATE_WIDTH = 19


def mount_image(path: Union[str, os.PathLike]) -> Mount:
    """Open a disk image, take its first active partition and mount it at the root."""
    drive = ImageBlockDevice(path)
    partitions = MbrTable.parse(drive).partitions()
    if not partitions:
        raise FsError(FsErrorKind.INVALID_OPERATION, "no active partition")
    part = partitions[0]
    logger.info("Mounting filesystem...")
    mount = Mount(Fat16(part), ROOT_MOUNT_POINT)
    logger.debug("Root filesystem: %r", mount)
    return mount


def _format_entry(meta: Metadata) -> str:
    size, unit = humanized_size_short(meta.length)
    modified = (
        meta.modified.strftime(_DATE_FORMAT) if meta.modified is not None else "-"
    )
    name = meta.name + "/" if meta.is_dir() else meta.name
    return f"{size:6.1f} {unit:<1} | {modified:<{_DATE_WIDTH}} | {name}"


def format_listing(entries: Iterable[Metadata]) -> str:
    """Render entries as a table under a header, one entry per line."""
    lines = [LISTING_HEADER]
    lines.extend(_format_entry(meta) for meta in entries)
    return "\n".join(lines) + "\n"


def ls(fs: FileSystem, root_path: str) -> Optional[str]:
    """Print the listing of ``root_path``; warn and return None if it cannot be read."""
    try:
        entries = list(fs.read_dir(root_path))
    except FsError as err:
        logger.warning("%r", err)
        return None
    listing = format_listing(entries)
    print(listing, end="")
    return listing


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="ysstorage", description="List a directory of a FAT16 disk image."
    )
    parser.add_argument("image", help="path of the disk image")
    parser.add_argument("path", nargs="?", default=ROOT_MOUNT_POINT, help="directory to list")
    args = parser.parse_args(argv)

    try:
        fs = mount_image(args.image)
    except FsError as err:
        print(f"error: {err}", file=sys.stderr)
        return 1
    return 0 if ls(fs, args.path) is not None else 1