"""
Dalton's law "triangle" solver.

Given any two of depth, O2 fraction and pO2 the third is derived, along with
ambient pressure and pN2. Warning classification is kept separate so callers
can apply it to any pair of partial pressures.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .errors import InvalidGasMix, InvalidInputCombination
from .units import depth_to_pressure, pressure_to_depth

PO2_CAUTION = 1.4  # ATA, recreational maximum
PO2_DANGER = 1.6  # ATA, oxygen toxicity
PN2_CAUTION = 3.94  # ATA, nitrogen narcosis


class WarningLevel(str, Enum):
    OK = "ok"
    CAUTION = "caution"
    DANGER = "danger"


@dataclass(frozen=True)
class DaltonWarning:
    o2_status: WarningLevel
    n2_status: WarningLevel


@dataclass(frozen=True)
class DaltonResult:
    """Solved Dalton's triangle. Pressures in ATA, depth in feet."""
    depth: float
    o2_fraction: float
    pressure: float
    po2: float
    pn2: float

    def warnings(self) -> DaltonWarning:
        return classify_daltons_warning(self.po2, self.pn2)


def classify_daltons_warning(po2: float, pn2: float) -> DaltonWarning:
    """Classify partial pressures against oxygen and narcosis thresholds.

    pO2 above 1.6 ATA is a danger, above 1.4 ATA a caution. pN2 above
    3.94 ATA is a narcosis caution.
    """
    if po2 > PO2_DANGER:
        o2_status = WarningLevel.DANGER
    elif po2 > PO2_CAUTION:
        o2_status = WarningLevel.CAUTION
    else:
        o2_status = WarningLevel.OK

    n2_status = WarningLevel.CAUTION if pn2 > PN2_CAUTION else WarningLevel.OK
    return DaltonWarning(o2_status=o2_status, n2_status=n2_status)


def daltons_triangle(
    depth: Optional[float] = None,
    o2_fraction: Optional[float] = None,
    po2: Optional[float] = None,
    precision: Optional[int] = 2,
) -> DaltonResult:
    """Solve for the missing side of Dalton's triangle.

    Exactly two of ``depth`` (ft), ``o2_fraction`` and ``po2`` (ATA) must be
    given. Calculation is done at full precision and only the returned values
    are rounded to ``precision`` decimal places (None disables rounding).

    Raises:
        InvalidInputCombination: if zero, one or three values are given.
        InvalidGasMix: if the O2 fraction is not in (0, 1].
    """
    known = sum(v is not None for v in (depth, o2_fraction, po2))
    if known != 2:
        raise InvalidInputCombination(
            "Provide exactly 2 of the 3 values: depth, o2_fraction, po2 "
            f"(got {known})"
        )
    if o2_fraction is not None and not (0.0 < o2_fraction <= 1.0):
        raise InvalidGasMix(f"o2_fraction must be in (0, 1.0], got {o2_fraction}")

    if po2 is None:
        pressure = depth_to_pressure(depth)
        po2 = pressure * o2_fraction
    elif depth is None:
        pressure = po2 / o2_fraction
        depth = pressure_to_depth(pressure)
    else:
        pressure = depth_to_pressure(depth)
        if pressure <= 0:
            raise InvalidInputCombination(
                f"Depth {depth:g} ft gives no absolute pressure; cannot solve for fO2"
            )
        o2_fraction = po2 / pressure

    pn2 = pressure * (1.0 - o2_fraction)

    def _out(value: float) -> float:
        return value if precision is None else round(value, precision)

    return DaltonResult(
        depth=_out(depth),
        o2_fraction=_out(o2_fraction),
        pressure=_out(pressure),
        po2=_out(po2),
        pn2=_out(pn2),
    )
