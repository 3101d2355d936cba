"""
Unit conversions used throughout the dive tables.

Depths are in feet of seawater, pressures in ATA (33 fsw per atmosphere).
None of these functions validate their input; range checks belong to callers.
"""

import re
from typing import Union

from .errors import InvalidGroup

FEET_PER_ATA = 33.0

_INTERVAL_RE = re.compile(r"^\s*(\d+):(\d{1,2})\s*$")


def depth_to_pressure(depth_ft: float) -> float:
    """Ambient pressure (ATA) at a depth in feet of seawater."""
    return 1.0 + depth_ft / FEET_PER_ATA


def pressure_to_depth(ata: float) -> float:
    """Depth (ft) at which ambient pressure equals ``ata``."""
    return (ata - 1.0) * FEET_PER_ATA


def percent_to_fraction(percent: float) -> float:
    return percent / 100.0


def fraction_to_percent(fraction: float) -> float:
    return fraction * 100.0


def parse_interval(value: Union[str, int]) -> int:
    """Convert an "H:MM" surface interval to total minutes.

    Integers are taken as minutes already. Minutes must be 0-59.

    Raises:
        InvalidGroup: if the value cannot be parsed.
    """
    if isinstance(value, bool):
        raise InvalidGroup(f"Invalid surface interval: {value!r}")
    if isinstance(value, int):
        if value < 0:
            raise InvalidGroup(f"Surface interval must be non-negative, got {value}")
        return value
    if not isinstance(value, str):
        raise InvalidGroup(f"Invalid surface interval: {value!r}")

    match = _INTERVAL_RE.match(value)
    if not match:
        raise InvalidGroup(f"Surface interval must look like H:MM, got {value!r}")
    hours, minutes = int(match.group(1)), int(match.group(2))
    if minutes >= 60:
        raise InvalidGroup(f"Surface interval minutes must be 0-59, got {value!r}")
    return hours * 60 + minutes


def format_interval(minutes: int) -> str:
    """Format total minutes as "H:MM"."""
    hours, mins = divmod(int(minutes), 60)
    return f"{hours}:{mins:02d}"
