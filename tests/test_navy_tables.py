"""Structural invariants of the three navy reference tables."""

import pytest

from divetables.errors import InvalidGroup
from divetables.navy_tables import (
    PRESSURE_GROUPS,
    NDL_TABLE,
    NDL_DEPTHS,
    NDL_BY_DEPTH,
    SURFACE_INTERVAL_TABLE,
    RNT_TABLE,
    RNT_DEPTHS,
    CLEAN_INTERVAL,
    MIN_SURFACE_INTERVAL,
    NoDecoBand,
    ResidualNitrogenEntry,
    TableMark,
    group_index,
    is_pressure_group,
    normalize_group,
)


class TestPressureGroups:

    def test_alphabet(self):
        assert PRESSURE_GROUPS == tuple("ABCDEFGHIJK")

    def test_normalize_accepts_lower_case(self):
        assert normalize_group("k") == "K"
        assert normalize_group(" d ") == "D"

    def test_normalize_rejects_unknown(self):
        with pytest.raises(InvalidGroup, match="Unknown pressure group"):
            normalize_group("Z")
        with pytest.raises(InvalidGroup):
            normalize_group(None)

    def test_group_index_order(self):
        assert group_index("A") == 0
        assert group_index("K") == 10
        assert group_index("C") < group_index("D")

    def test_is_pressure_group(self):
        assert is_pressure_group("H")
        assert not is_pressure_group("L")
        assert not is_pressure_group(3)


class TestNoDecoTable:
    """Table 1: NDL and group designation."""

    def test_depths(self):
        assert NDL_DEPTHS == (10, 15, 20, 25, 30, 35, 40, 50, 60, 70, 80, 90, 100, 110, 120, 130)

    def test_thresholds_strictly_increasing(self):
        for band in NDL_TABLE:
            times = band.times
            assert all(b > a for a, b in zip(times, times[1:])), band.depth

    def test_last_threshold_covers_ndl(self):
        """Every bottom time within the NDL has a group."""
        for band in NDL_TABLE:
            assert band.times[-1] >= band.max_no_deco_limit, band.depth

    def test_groups_never_decrease(self):
        for band in NDL_TABLE:
            idx = [group_index(g) for g in band.groups]
            assert idx == sorted(idx), band.depth

    def test_ndl_decreases_with_depth(self):
        limits = [NDL_BY_DEPTH[d].max_no_deco_limit for d in NDL_DEPTHS[2:]]
        assert limits == sorted(limits, reverse=True)

    def test_known_values(self):
        assert NDL_BY_DEPTH[60].max_no_deco_limit == 50
        assert NDL_BY_DEPTH[130].thresholds == ((5, "D"),)

    def test_band_rejects_unordered_thresholds(self):
        with pytest.raises(ValueError, match="strictly increasing"):
            NoDecoBand(depth=45, max_no_deco_limit=20, thresholds=((10, "A"), (10, "B")))

    def test_band_rejects_short_thresholds(self):
        with pytest.raises(ValueError, match="below"):
            NoDecoBand(depth=45, max_no_deco_limit=20, thresholds=((10, "A"),))

    def test_band_accepts_threshold_past_ndl(self):
        """The 15 ft row tabulates 350 min against a 300 min NDL."""
        band = NDL_BY_DEPTH[15]
        assert band.times[-1] == 350
        assert band.max_no_deco_limit == 300
        NoDecoBand(depth=45, max_no_deco_limit=20, thresholds=((10, "A"), (25, "B")))

    def test_band_is_frozen(self):
        with pytest.raises(Exception):
            NDL_BY_DEPTH[60].max_no_deco_limit = 100


class TestSurfaceIntervalTable:
    """Table 2: ranges must tile [10 min, inf) for every group."""

    def test_every_group_present(self):
        assert set(SURFACE_INTERVAL_TABLE) == set(PRESSURE_GROUPS)

    def test_ranges_contiguous(self):
        for group, ranges in SURFACE_INTERVAL_TABLE.items():
            assert ranges[0].min_minutes == MIN_SURFACE_INTERVAL
            for prev, nxt in zip(ranges, ranges[1:]):
                assert nxt.min_minutes == prev.max_minutes + 1, group

    def test_first_range_keeps_group(self):
        for group, ranges in SURFACE_INTERVAL_TABLE.items():
            assert ranges[0].target == group

    def test_targets_decrease_in_severity(self):
        for group, ranges in SURFACE_INTERVAL_TABLE.items():
            letters = [r.target for r in ranges[:-1]]
            idx = [group_index(g) for g in letters]
            assert idx == sorted(idx, reverse=True)
            assert len(set(idx)) == len(idx)
            assert letters == list(reversed(PRESSURE_GROUPS[: group_index(group) + 1]))

    def test_clean_range_is_open_ended(self):
        for ranges in SURFACE_INTERVAL_TABLE.values():
            last = ranges[-1]
            assert last.target is None
            assert last.min_minutes == CLEAN_INTERVAL
            assert last.max_minutes is None
            assert ranges[-2].target == "A"
            assert ranges[-2].max_minutes == CLEAN_INTERVAL - 1

    def test_known_ranges(self):
        k = SURFACE_INTERVAL_TABLE["K"]
        assert (k[0].min_minutes, k[0].max_minutes) == (10, 28)
        assert (k[1].target, k[1].min_minutes, k[1].max_minutes) == ("J", 29, 49)
        b = SURFACE_INTERVAL_TABLE["B"]
        assert (b[1].target, b[1].min_minutes) == ("A", 160)

    def test_contains(self):
        j = SURFACE_INTERVAL_TABLE["K"][1]
        assert not j.contains(28)
        assert j.contains(29)
        assert j.contains(49)
        assert not j.contains(50)
        assert SURFACE_INTERVAL_TABLE["K"][-1].contains(10_000)


class TestResidualNitrogenTable:
    """Table 3: RNT / adjusted NDL."""

    def test_depths(self):
        assert RNT_DEPTHS == tuple(range(10, 140, 10))

    def test_every_group_per_depth(self):
        for depth in RNT_DEPTHS:
            assert tuple(RNT_TABLE[depth]) == PRESSURE_GROUPS

    def test_not_permitted_has_zero_andl(self):
        for depth in RNT_DEPTHS:
            for entry in RNT_TABLE[depth].values():
                if entry.residual_nitrogen_time is TableMark.NOT_PERMITTED:
                    assert entry.adjusted_no_deco_limit == 0
                    assert not entry.permitted

    def test_no_limit_only_shallow(self):
        for depth in RNT_DEPTHS:
            has_no_limit = any(
                e.adjusted_no_deco_limit is TableMark.NO_LIMIT for e in RNT_TABLE[depth].values()
            )
            assert has_no_limit == (depth in (10, 20))

    def test_rnt_increases_with_group(self):
        for depth in RNT_DEPTHS:
            times = [
                e.residual_nitrogen_time for e in RNT_TABLE[depth].values()
                if isinstance(e.residual_nitrogen_time, int)
            ]
            assert times == sorted(times)

    def test_known_entry(self):
        entry = RNT_TABLE[30]["D"]
        assert entry.residual_nitrogen_time == 54
        assert entry.adjusted_no_deco_limit == 151
        assert entry.permitted

    def test_zero_andl_not_permitted(self):
        entry = RNT_TABLE[110]["E"]
        assert entry.residual_nitrogen_time == 15
        assert not entry.permitted

    def test_entry_validation(self):
        with pytest.raises(ValueError, match="ANDL 0"):
            ResidualNitrogenEntry(TableMark.NOT_PERMITTED, 5)
