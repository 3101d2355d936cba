"""
Nitrox (EANx) depth translation and oxygen limits.

Air tables are reused for nitrox by looking them up at the equivalent air
depth (EAD): the air depth with the same pN2 as the nitrox dive. Depths are
in feet, O2 content in percent.
"""

from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np

from .errors import InvalidGasMix
from .navy_tables import NDL_DEPTHS
from .units import pressure_to_depth

AIR_O2_PERCENT = 21.0
AIR_N2_FRACTION = 0.79
DEFAULT_PO2_LIMIT = 1.4  # ATA
NARCOSIS_DEPTH = 100.0  # ft

# EAD = (D + 10) * fN2 / 0.79 - 10
_EAD_OFFSET = 10.0


def validate_o2_percent(o2_percent: float) -> float:
    """Return ``o2_percent`` as float if it is within [21, 100].

    Raises:
        InvalidGasMix: otherwise.
    """
    try:
        value = float(o2_percent)
    except (TypeError, ValueError):
        raise InvalidGasMix(f"O2 percent must be a number, got {o2_percent!r}") from None
    if not (AIR_O2_PERCENT <= value <= 100.0):
        raise InvalidGasMix(f"O2 percent must be in [21, 100], got {o2_percent}")
    return value


def _n2_ratio(o2_percent: float) -> float:
    """Nitrogen fraction of the mix relative to air."""
    return (100.0 - o2_percent) / 100.0 / AIR_N2_FRACTION


def equivalent_air_depth(depth: float, o2_percent: float) -> float:
    """Air depth with the same nitrogen partial pressure as ``depth`` on nitrox."""
    o2_percent = validate_o2_percent(o2_percent)
    return (depth + _EAD_OFFSET) * _n2_ratio(o2_percent) - _EAD_OFFSET


def actual_depth_from_ead(ead: float, o2_percent: float) -> float:
    """Inverse of :func:`equivalent_air_depth`.

    Raises:
        InvalidGasMix: for pure oxygen, where every depth has the same EAD.
    """
    o2_percent = validate_o2_percent(o2_percent)
    ratio = _n2_ratio(o2_percent)
    if ratio <= 0:
        raise InvalidGasMix("Actual depth is undefined for a mix without nitrogen")
    return (ead + _EAD_OFFSET) / ratio - _EAD_OFFSET


def max_operating_depth(o2_percent: float, po2_limit: float = DEFAULT_PO2_LIMIT) -> float:
    """Deepest depth (ft) at which the mix stays at or below ``po2_limit``."""
    o2_percent = validate_o2_percent(o2_percent)
    if po2_limit <= 0:
        raise ValueError(f"po2_limit must be positive, got {po2_limit}")
    return pressure_to_depth(po2_limit / (o2_percent / 100.0))


def exceeds_mod(depth: float, o2_percent: float, po2_limit: float = DEFAULT_PO2_LIMIT) -> bool:
    return depth > max_operating_depth(o2_percent, po2_limit)


def is_narcosis_risk(depth: float) -> bool:
    """True at 100 ft and deeper."""
    return depth >= NARCOSIS_DEPTH


def actual_depth_bands(
    o2_percent: float, depths: Sequence[int] = NDL_DEPTHS
) -> List[Tuple[int, float]]:
    """Actual nitrox depth for each air table depth.

    Presentation helper: pairs each table key with the depth a diver on the
    given mix may go to while still using that row.
    """
    air = np.asarray(depths, dtype=float)
    actual = actual_depth_from_ead(air, o2_percent)
    return [(int(a), float(d)) for a, d in zip(air, actual)]


@dataclass(frozen=True)
class GasMix:
    """Breathing gas described by its O2 percentage (21 = air)."""
    o2_percent: float = AIR_O2_PERCENT

    def __post_init__(self):
        validate_o2_percent(self.o2_percent)

    @property
    def o2_fraction(self) -> float:
        return self.o2_percent / 100.0

    @property
    def n2_fraction(self) -> float:
        return 1.0 - self.o2_fraction

    @property
    def is_air(self) -> bool:
        return self.o2_percent == AIR_O2_PERCENT

    def max_operating_depth(self, po2_limit: float = DEFAULT_PO2_LIMIT) -> float:
        return max_operating_depth(self.o2_percent, po2_limit)

    def equivalent_air_depth(self, depth: float) -> float:
        return equivalent_air_depth(depth, self.o2_percent)


AIR = GasMix(AIR_O2_PERCENT)
