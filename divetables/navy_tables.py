"""
U.S. Navy air no-decompression reference tables.

Single source of truth for the three dive tables:
    - Table 1: no-decompression limits and repetitive group designation
    - Table 2: surface interval credit (ranges per starting group)
    - Table 3: residual nitrogen time / adjusted no-decompression limit

All data is immutable and keyed by air depth in feet. Nitrox dives are looked up
through their equivalent air depth, the tables themselves never change.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple, Union

from .errors import InvalidGroup
from .units import parse_interval

# Ordered by increasing residual nitrogen loading
PRESSURE_GROUPS: Tuple[str, ...] = (
    "A", "B", "C", "D", "E", "F", "G", "H", "I", "J", "K",
)

# Surface intervals shorter than this are not credited
MIN_SURFACE_INTERVAL = 10
# Residual nitrogen is considered gone after 12 hours
CLEAN_INTERVAL = 12 * 60


def normalize_group(group) -> str:
    """Upper-case and validate a pressure group letter.

    Raises:
        InvalidGroup: if ``group`` is not one of A-K.
    """
    if isinstance(group, str):
        letter = group.strip().upper()
        if letter in PRESSURE_GROUPS:
            return letter
    raise InvalidGroup(f"Unknown pressure group: {group!r}")


def is_pressure_group(group) -> bool:
    return isinstance(group, str) and group.strip().upper() in PRESSURE_GROUPS


def group_index(group) -> int:
    """Position of ``group`` in the A-K order (A=0)."""
    return PRESSURE_GROUPS.index(normalize_group(group))


class TableMark(Enum):
    """Non-numeric table entries."""

    NOT_PERMITTED = "N/P"  # no repetitive dive allowed
    NO_LIMIT = "N/L"  # adjusted limit does not apply


# --- Table 1 ---------------------------------------------------------------


@dataclass(frozen=True)
class NoDecoBand:
    """One depth row of table 1.

    thresholds: (max_bottom_time, group) pairs, ascending. A bottom time equal
    to a threshold belongs to that threshold's group.
    """
    depth: int
    max_no_deco_limit: int
    thresholds: Tuple[Tuple[int, str], ...]

    def __post_init__(self):
        times = [t for t, _ in self.thresholds]
        if any(b <= a for a, b in zip(times, times[1:])):
            raise ValueError(f"Thresholds for {self.depth} ft must be strictly increasing")
        # the 15 ft row runs past its NDL (350 vs 300), so only a shortfall is rejected
        if times and times[-1] < self.max_no_deco_limit:
            raise ValueError(
                f"Last threshold for {self.depth} ft ({times[-1]}) is below "
                f"the no-decompression limit ({self.max_no_deco_limit})"
            )
        for _, group in self.thresholds:
            normalize_group(group)

    @property
    def times(self) -> Tuple[int, ...]:
        return tuple(t for t, _ in self.thresholds)

    @property
    def groups(self) -> Tuple[str, ...]:
        return tuple(g for _, g in self.thresholds)


def _band(depth: int, ndl: int, *pairs: Tuple[int, str]) -> NoDecoBand:
    return NoDecoBand(depth=depth, max_no_deco_limit=ndl, thresholds=tuple(pairs))


# 10 and 15 ft are effectively unlimited; 5 hours is used as the ceiling.
NDL_TABLE: Tuple[NoDecoBand, ...] = (
    _band(10, 300, (60, "A"), (120, "B"), (210, "C"), (300, "D")),
    _band(15, 300, (35, "A"), (70, "B"), (110, "C"), (160, "D"), (225, "E"), (350, "F")),
    _band(20, 325, (25, "A"), (50, "B"), (75, "C"), (100, "D"), (135, "E"), (180, "F"),
          (240, "G"), (325, "H")),
    _band(25, 245, (20, "A"), (35, "B"), (55, "C"), (75, "D"), (100, "E"), (125, "F"),
          (160, "G"), (195, "H"), (245, "I")),
    _band(30, 205, (15, "A"), (30, "B"), (45, "C"), (60, "D"), (75, "E"), (95, "F"),
          (120, "G"), (145, "H"), (170, "I"), (205, "J")),
    _band(35, 160, (5, "A"), (15, "B"), (25, "C"), (40, "D"), (50, "E"), (60, "F"),
          (80, "G"), (100, "H"), (120, "I"), (140, "J"), (160, "K")),
    _band(40, 130, (5, "A"), (15, "B"), (25, "C"), (30, "D"), (40, "E"), (50, "F"),
          (70, "G"), (80, "H"), (100, "I"), (110, "J"), (130, "K")),
    _band(50, 70, (10, "B"), (15, "C"), (25, "D"), (30, "E"), (40, "F"), (50, "G"),
          (60, "H"), (70, "I")),
    _band(60, 50, (10, "B"), (15, "C"), (20, "D"), (25, "E"), (30, "F"), (40, "G"), (50, "H")),
    _band(70, 40, (5, "B"), (10, "C"), (15, "D"), (20, "E"), (30, "F"), (35, "G"), (40, "H")),
    _band(80, 30, (5, "B"), (10, "C"), (15, "D"), (20, "E"), (25, "F"), (30, "G")),
    _band(90, 25, (5, "B"), (10, "C"), (12, "D"), (15, "E"), (20, "F"), (25, "G")),
    _band(100, 20, (5, "B"), (7, "C"), (10, "D"), (15, "E"), (20, "F")),
    _band(110, 15, (5, "B"), (10, "C"), (13, "D"), (15, "E")),
    _band(120, 10, (5, "C"), (10, "D")),
    _band(130, 5, (5, "D")),
)

NDL_DEPTHS: Tuple[int, ...] = tuple(b.depth for b in NDL_TABLE)
NDL_BY_DEPTH: Mapping[int, NoDecoBand] = MappingProxyType({b.depth: b for b in NDL_TABLE})


# --- Table 2 ---------------------------------------------------------------


@dataclass(frozen=True)
class CreditRange:
    """Surface interval range [min_minutes, max_minutes] leading to ``target``.

    target is None for the "no residual nitrogen" range, whose max is None.
    """
    target: Optional[str]
    min_minutes: int
    max_minutes: Optional[int]

    def contains(self, minutes: int) -> bool:
        if minutes < self.min_minutes:
            return False
        return self.max_minutes is None or minutes <= self.max_minutes


# Last minute of each new group, most severe first. Group A always runs up to
# the 12 hour mark, after which the diver is clean.
_CREDIT_UPPER_BOUNDS: Dict[str, Tuple[Tuple[str, str], ...]] = {
    "A": (),
    "B": (("B", "2:39"),),
    "C": (("C", "1:39"), ("B", "4:49")),
    "D": (("D", "1:09"), ("C", "2:38"), ("B", "5:48")),
    "E": (("E", "0:54"), ("D", "1:57"), ("C", "3:24"), ("B", "6:34")),
    "F": (("F", "0:45"), ("E", "1:29"), ("D", "2:28"), ("C", "3:57"), ("B", "7:05")),
    "G": (("G", "0:40"), ("F", "1:15"), ("E", "1:59"), ("D", "2:58"), ("C", "4:25"),
          ("B", "7:35")),
    "H": (("H", "0:36"), ("G", "1:06"), ("F", "1:41"), ("E", "2:23"), ("D", "3:20"),
          ("C", "4:49"), ("B", "7:59")),
    "I": (("I", "0:33"), ("H", "0:59"), ("G", "1:29"), ("F", "2:02"), ("E", "2:44"),
          ("D", "3:43"), ("C", "5:12"), ("B", "8:21")),
    "J": (("J", "0:31"), ("I", "0:54"), ("H", "1:19"), ("G", "1:47"), ("F", "2:20"),
          ("E", "3:04"), ("D", "4:02"), ("C", "5:40"), ("B", "8:50")),
    "K": (("K", "0:28"), ("J", "0:49"), ("I", "1:11"), ("H", "1:35"), ("G", "2:03"),
          ("F", "2:38"), ("E", "3:21"), ("D", "4:19"), ("C", "5:48"), ("B", "8:58")),
}


def _build_credit_ranges(bounds: Tuple[Tuple[str, str], ...]) -> Tuple[CreditRange, ...]:
    """Turn upper bounds into contiguous ranges tiling [10 min, inf)."""
    ranges = []
    start = MIN_SURFACE_INTERVAL
    for target, upper in bounds:
        end = parse_interval(upper)
        if end < start:
            raise ValueError(f"Surface interval bound {upper} for {target} is out of order")
        ranges.append(CreditRange(target, start, end))
        start = end + 1
    ranges.append(CreditRange("A", start, CLEAN_INTERVAL - 1))
    ranges.append(CreditRange(None, CLEAN_INTERVAL, None))
    return tuple(ranges)


SURFACE_INTERVAL_TABLE: Mapping[str, Tuple[CreditRange, ...]] = MappingProxyType({
    group: _build_credit_ranges(bounds) for group, bounds in _CREDIT_UPPER_BOUNDS.items()
})


# --- Table 3 ---------------------------------------------------------------

Minutes = Union[int, TableMark]


@dataclass(frozen=True)
class ResidualNitrogenEntry:
    """Residual nitrogen time and adjusted no-decompression limit."""
    residual_nitrogen_time: Minutes
    adjusted_no_deco_limit: Minutes

    def __post_init__(self):
        if self.residual_nitrogen_time is TableMark.NOT_PERMITTED and self.adjusted_no_deco_limit != 0:
            raise ValueError("Entries without a permitted repetitive dive must have ANDL 0")

    @property
    def permitted(self) -> bool:
        """False when no repetitive dive is allowed for this depth/group."""
        return (
            self.residual_nitrogen_time is not TableMark.NOT_PERMITTED
            and self.adjusted_no_deco_limit != 0
        )


NP = TableMark.NOT_PERMITTED
NL = TableMark.NO_LIMIT


def _row(*pairs: Tuple[Minutes, Minutes]) -> Mapping[str, ResidualNitrogenEntry]:
    if len(pairs) != len(PRESSURE_GROUPS):
        raise ValueError("Residual nitrogen rows need one entry per pressure group")
    return MappingProxyType({
        group: ResidualNitrogenEntry(rnt, andl)
        for group, (rnt, andl) in zip(PRESSURE_GROUPS, pairs)
    })


_BLOCKED = (NP, 0)

RNT_TABLE: Mapping[int, Mapping[str, ResidualNitrogenEntry]] = MappingProxyType({
    10: _row((39, NL), (88, NL), (159, NL), (279, NL), *[_BLOCKED] * 7),
    20: _row((18, NL), (39, NL), (62, NL), (88, NL), (120, NL), (159, NL), (208, NL),
             (279, NL), (399, NL), _BLOCKED, _BLOCKED),
    30: _row((12, 193), (25, 180), (39, 166), (54, 151), (70, 135), (88, 117), (109, 96),
             (132, 73), (159, 46), (190, 15), _BLOCKED),
    40: _row((7, 123), (17, 113), (25, 105), (37, 93), (49, 81), (61, 69), (73, 57),
             (87, 43), (101, 29), (116, 14), (138, 0)),
    50: _row((6, 64), (13, 57), (21, 49), (29, 41), (38, 32), (47, 23), (56, 14), (66, 4),
             *[_BLOCKED] * 3),
    60: _row((5, 45), (11, 39), (17, 33), (24, 26), (30, 20), (36, 14), (44, 6),
             *[_BLOCKED] * 4),
    70: _row((4, 36), (9, 31), (15, 25), (20, 20), (26, 14), (31, 9), (37, 3),
             *[_BLOCKED] * 4),
    80: _row((4, 26), (8, 22), (13, 17), (18, 12), (23, 7), (28, 2), *[_BLOCKED] * 5),
    90: _row((3, 22), (7, 18), (11, 14), (16, 9), (20, 5), (24, 1), *[_BLOCKED] * 5),
    100: _row((3, 17), (7, 13), (10, 10), (14, 6), (18, 2), *[_BLOCKED] * 6),
    110: _row((3, 12), (6, 9), (9, 6), (12, 3), (15, 0), *[_BLOCKED] * 6),
    120: _row((3, 7), (6, 4), (9, 1), *[_BLOCKED] * 8),
    130: _row((3, 2), *[_BLOCKED] * 10),
})

RNT_DEPTHS: Tuple[int, ...] = tuple(sorted(RNT_TABLE))
