"""Human-readable sizes and the banner."""

from __future__ import annotations

from typing import Tuple

SHORT_UNITS = ("B", "K", "M", "G")
UNITS = ("B", "KiB", "MiB", "GiB")

_BANNER = r"""
__  __      __  _____            ____  _____
\ \/ /___ _/ /_/ ___/___  ____  / __ \/ ___/
 \  / __ `/ __/\__ \/ _ \/ __ \/ / / /\__ \
 / / /_/ / /_ ___/ /  __/ / / / /_/ /___/ /
/_/\__,_/\__//____/\___/_/ /_/\____//____/

                                       v"""


def _humanized(size: int, units: Tuple[str, ...]) -> Tuple[float, str]:
    value = float(size)
    unit = 0
    while value >= 1024 and unit < len(units):
        value /= 1024
        unit += 1
    if unit >= len(units):
        raise ValueError(f"size {size} is too large to humanize")
    return value, units[unit]


def humanized_size(size: int) -> Tuple[float, str]:
    return _humanized(size, UNITS)


def humanized_size_short(size: int) -> Tuple[float, str]:
    return _humanized(size, SHORT_UNITS)


def ascii_header(version: str) -> str:
    return _BANNER + version