"""
Dive-table resolver: chained lookups through the three navy tables.

Every function takes all inputs explicitly and returns a fresh result; nothing
is cached between calls. Depths are actual depths in feet. When ``o2_percent``
is above 21 the depth is first converted to its equivalent air depth, and the
air tables are consulted at that depth.

Typical repetitive dive flow:
    1. single_dive(depth, bottom_time)           -> pressure group
    2. surface_interval(group, "H:MM")           -> new group
    3. repetitive_dive(new_group, next_depth)    -> RNT / adjusted NDL
    4. final_group(next_depth, actual_time, RNT) -> group after the second dive
"""

import logging
from dataclasses import dataclass
from typing import Optional, Union

from .depth import closest_depth, threshold_index
from .errors import DepthOutOfRange, InvalidGroup, InvalidInputCombination
from .navy_tables import (
    CLEAN_INTERVAL,
    MIN_SURFACE_INTERVAL,
    NDL_BY_DEPTH,
    NDL_DEPTHS,
    RNT_DEPTHS,
    RNT_TABLE,
    SURFACE_INTERVAL_TABLE,
    Minutes,
    TableMark,
    group_index,
    is_pressure_group,
    normalize_group,
)
from .nitrox import AIR_O2_PERCENT, equivalent_air_depth, validate_o2_percent
from .units import parse_interval

logger = logging.getLogger(__name__)

REASON_EXCEEDS_NDL = "bottom time exceeds NDL"
REASON_INVALID_COMBINATION = "invalid depth/group combination"
REASON_NOT_ADVISABLE = "repetitive dive not advisable at this depth/group"

SHORT_NDL = 10  # minutes


@dataclass(frozen=True)
class SingleDiveResult:
    """Table 1 lookup for one dive."""
    depth: float
    equivalent_air_depth: float
    table_depth: int
    no_deco_limit: int
    pressure_group: Optional[str]
    exceeded: bool = False
    reason: Optional[str] = None

    @property
    def short_ndl(self) -> bool:
        """True when the limit at this depth is 10 minutes or less."""
        return self.no_deco_limit <= SHORT_NDL


@dataclass(frozen=True)
class RepetitiveDiveResult:
    """Table 3 lookup for a repetitive dive."""
    depth: float
    equivalent_air_depth: float
    table_depth: Optional[int]
    residual_nitrogen_time: Optional[Minutes]
    adjusted_no_deco_limit: Optional[Minutes]
    exceeded: bool = False
    reason: Optional[str] = None


@dataclass(frozen=True)
class RepetitivePlan:
    """Outcome of the full surface interval -> repetitive dive chain.

    When the surface interval clears all residual nitrogen ``new_group`` is
    None, ``repetitive`` is False and ``single`` holds the first-dive lookup.
    """
    previous_group: str
    surface_interval: int
    new_group: Optional[str]
    repetitive: bool
    dive: Optional[RepetitiveDiveResult] = None
    single: Optional[SingleDiveResult] = None
    final_group: Optional[str] = None


def _lookup_depth(depth: float, o2_percent: float) -> float:
    """Depth used for table lookups: EAD for nitrox, the depth itself for air."""
    o2_percent = validate_o2_percent(o2_percent)
    if o2_percent == AIR_O2_PERCENT:
        return depth
    # round away float noise so an exact table depth is not pushed a band deeper
    ead = round(equivalent_air_depth(depth, o2_percent), 6)
    logger.debug(f"EAD for {depth:g} ft on EAN{o2_percent:g}: {ead:g} ft")
    return ead


def single_dive(
    depth: float, bottom_time: float, o2_percent: float = AIR_O2_PERCENT
) -> SingleDiveResult:
    """No-decompression limit and pressure group for a single dive.

    A bottom time equal to a table time gets that time's group. Bottom times
    of zero or less produce no group.

    Raises:
        DepthOutOfRange: if the (equivalent air) depth is beyond 130 ft.
        InvalidGasMix: if ``o2_percent`` is outside [21, 100].
    """
    ead = _lookup_depth(depth, o2_percent)
    table_depth = closest_depth(ead, NDL_DEPTHS)
    band = NDL_BY_DEPTH[table_depth]

    if bottom_time > band.max_no_deco_limit:
        logger.warning(
            f"Bottom time {bottom_time:g} min exceeds the {band.max_no_deco_limit} min "
            f"no-decompression limit at {table_depth} ft"
        )
        return SingleDiveResult(
            depth=depth,
            equivalent_air_depth=ead,
            table_depth=table_depth,
            no_deco_limit=band.max_no_deco_limit,
            pressure_group=None,
            exceeded=True,
            reason=REASON_EXCEEDS_NDL,
        )

    group = None
    if bottom_time > 0:
        idx = threshold_index(bottom_time, band.times)
        if idx < len(band.thresholds):
            group = band.groups[idx]

    return SingleDiveResult(
        depth=depth,
        equivalent_air_depth=ead,
        table_depth=table_depth,
        no_deco_limit=band.max_no_deco_limit,
        pressure_group=group,
    )


def surface_interval(current_group: str, elapsed: Union[str, int]) -> Optional[str]:
    """New pressure group after spending ``elapsed`` ("H:MM") on the surface.

    Returns None once the interval is long enough that no residual nitrogen
    remains. Intervals under 10 minutes earn no credit, so the current group
    is returned unchanged.

    Raises:
        InvalidGroup: for an unknown group or an unparseable interval.
    """
    group = normalize_group(current_group)
    minutes = parse_interval(elapsed)

    if minutes < MIN_SURFACE_INTERVAL:
        logger.debug(f"Surface interval of {minutes} min earns no credit")
        return group

    for credit in SURFACE_INTERVAL_TABLE[group]:
        if credit.contains(minutes):
            logger.debug(
                f"Group {group} after {minutes} min -> {credit.target} "
                f"({credit.min_minutes}-{credit.max_minutes})"
            )
            return credit.target

    # ranges tile [10, inf); reaching this means the table is broken
    raise RuntimeError(f"No surface interval range for group {group} at {minutes} min")


def repetitive_dive(
    pressure_group: str, depth: float, o2_percent: float = AIR_O2_PERCENT
) -> RepetitiveDiveResult:
    """Residual nitrogen time and adjusted no-decompression limit.

    Unsafe or unknown combinations are reported through ``exceeded`` and
    ``reason`` rather than raised.

    The depth is rounded up against the residual nitrogen table's own rows
    (10, 20, ..., 130 ft), so 15, 25 and 35 ft use the next 10 ft row instead
    of being rejected as missing from the table.
    """
    ead = _lookup_depth(depth, o2_percent)

    try:
        table_depth = closest_depth(ead, RNT_DEPTHS)
    except DepthOutOfRange:
        table_depth = None

    if table_depth is None or not is_pressure_group(pressure_group):
        logger.warning(f"No residual nitrogen entry for group {pressure_group!r} at {depth:g} ft")
        return RepetitiveDiveResult(
            depth=depth,
            equivalent_air_depth=ead,
            table_depth=table_depth,
            residual_nitrogen_time=None,
            adjusted_no_deco_limit=None,
            exceeded=True,
            reason=REASON_INVALID_COMBINATION,
        )

    entry = RNT_TABLE[table_depth][normalize_group(pressure_group)]
    if not entry.permitted:
        logger.warning(f"Repetitive dive not advisable for group {pressure_group} at {table_depth} ft")
        return RepetitiveDiveResult(
            depth=depth,
            equivalent_air_depth=ead,
            table_depth=table_depth,
            residual_nitrogen_time=entry.residual_nitrogen_time,
            adjusted_no_deco_limit=entry.adjusted_no_deco_limit,
            exceeded=True,
            reason=REASON_NOT_ADVISABLE,
        )

    return RepetitiveDiveResult(
        depth=depth,
        equivalent_air_depth=ead,
        table_depth=table_depth,
        residual_nitrogen_time=entry.residual_nitrogen_time,
        adjusted_no_deco_limit=entry.adjusted_no_deco_limit,
    )


def final_group(
    depth: float,
    actual_bottom_time: float,
    residual_nitrogen_time: Minutes,
    o2_percent: float = AIR_O2_PERCENT,
) -> Optional[str]:
    """Pressure group after a repetitive dive.

    Total bottom time is the actual bottom time plus residual nitrogen time,
    both truncated to whole minutes. Returns None if that total exceeds the
    no-decompression limit.

    Raises:
        InvalidInputCombination: if the residual nitrogen time is missing or
            a table mark rather than minutes.
    """
    if residual_nitrogen_time is None:
        raise InvalidInputCombination("No residual nitrogen time; invalid depth/group combination")
    if isinstance(residual_nitrogen_time, TableMark):
        raise InvalidInputCombination(
            f"Residual nitrogen time is {residual_nitrogen_time.value}; no repetitive dive"
        )
    total = int(actual_bottom_time) + int(residual_nitrogen_time)
    return single_dive(depth, total, o2_percent).pressure_group


def minimum_surface_interval(start_group: str, target_group: Optional[str]) -> Optional[int]:
    """Shortest surface interval (minutes) that takes ``start_group`` to ``target_group``.

    A target of None asks for the interval after which no residual nitrogen
    remains. Returns None when the target is more severe than the start group,
    since waiting cannot increase loading.

    Raises:
        InvalidGroup: for unknown groups.
    """
    start = normalize_group(start_group)
    if target_group is None:
        return CLEAN_INTERVAL
    target = normalize_group(target_group)

    if group_index(target) > group_index(start):
        return None
    for credit in SURFACE_INTERVAL_TABLE[start]:
        if credit.target == target:
            return credit.min_minutes
    raise InvalidGroup(f"No surface interval entry from {start} to {target}")


def plan_repetitive_dive(
    previous_group: str,
    elapsed: Union[str, int],
    depth: float,
    actual_bottom_time: Optional[float] = None,
    o2_percent: float = AIR_O2_PERCENT,
) -> RepetitivePlan:
    """Run the surface interval, repetitive dive and final group lookups in order.

    Args:
        previous_group: pressure group at the end of the previous dive
        elapsed: surface interval as "H:MM" or minutes
        depth: depth of the next dive (ft)
        actual_bottom_time: planned bottom time of the next dive, if known
        o2_percent: O2 content of the gas for the next dive
    """
    previous = normalize_group(previous_group)
    minutes = parse_interval(elapsed)
    new_group = surface_interval(previous, minutes)

    if new_group is None:
        single = None
        if actual_bottom_time is not None:
            single = single_dive(depth, actual_bottom_time, o2_percent)
        return RepetitivePlan(
            previous_group=previous,
            surface_interval=minutes,
            new_group=None,
            repetitive=False,
            single=single,
            final_group=single.pressure_group if single else None,
        )

    dive = repetitive_dive(new_group, depth, o2_percent)
    final = None
    if actual_bottom_time is not None and not dive.exceeded:
        final = final_group(depth, actual_bottom_time, dive.residual_nitrogen_time, o2_percent)

    return RepetitivePlan(
        previous_group=previous,
        surface_interval=minutes,
        new_group=new_group,
        repetitive=True,
        dive=dive,
        final_group=final,
    )
