"""Tests for rounding requested depths onto table depths."""

import pytest

from divetables.depth import closest_depth, threshold_index
from divetables.errors import DepthOutOfRange
from divetables.navy_tables import NDL_DEPTHS, RNT_DEPTHS


class TestClosestDepth:

    def test_exact_table_depth(self):
        assert closest_depth(60) == 60

    def test_rounds_up(self):
        assert closest_depth(61) == 70
        assert closest_depth(12) == 15
        assert closest_depth(40.01) == 50

    def test_never_rounds_down(self):
        """69 ft uses the 70 ft row even though 60 is nearly as close."""
        assert closest_depth(69) == 70
        assert closest_depth(51) == 60

    def test_shallow_uses_first_row(self):
        assert closest_depth(5) == 10
        assert closest_depth(0) == 10
        assert closest_depth(-3) == 10

    def test_deepest_row(self):
        assert closest_depth(130) == 130
        assert closest_depth(121) == 130

    def test_beyond_table(self):
        with pytest.raises(DepthOutOfRange, match="130 ft"):
            closest_depth(131)

    def test_rnt_depths(self):
        """Table 3 has no 15, 25 or 35 ft rows."""
        assert closest_depth(15, RNT_DEPTHS) == 20
        assert closest_depth(25, RNT_DEPTHS) == 30
        assert closest_depth(35, RNT_DEPTHS) == 40

    def test_every_table_depth_maps_to_itself(self):
        for depth in NDL_DEPTHS:
            assert closest_depth(depth) == depth

    def test_returns_int(self):
        assert isinstance(closest_depth(55.5), int)

    def test_empty_depths(self):
        with pytest.raises(ValueError):
            closest_depth(10, ())


class TestThresholdIndex:

    def test_equal_selects_threshold(self):
        assert threshold_index(50, (10, 15, 20, 25, 30, 40, 50)) == 6

    def test_between_thresholds(self):
        assert threshold_index(41, (10, 15, 20, 25, 30, 40, 50)) == 6

    def test_beyond_last(self):
        assert threshold_index(51, (10, 15, 20, 25, 30, 40, 50)) == 7

    def test_below_first(self):
        assert threshold_index(0, (10, 15)) == 0
