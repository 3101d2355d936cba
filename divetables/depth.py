"""
Depth normalization onto table depth bands.

Tables are only defined at discrete depths, so a requested depth is rounded
up to the next table depth (never down). Depths shallower than the first row
use the first row; depths past the last row have no safe table entry.
"""

import logging
from typing import Sequence

import numpy as np

from .errors import DepthOutOfRange
from .navy_tables import NDL_DEPTHS

logger = logging.getLogger(__name__)


def threshold_index(value: float, thresholds: Sequence[float]) -> int:
    """Index of the first threshold >= value.

    Equal values select the equal threshold. Returns len(thresholds) when
    value is beyond the last threshold.
    """
    return int(np.searchsorted(np.asarray(thresholds, dtype=float), value, side="left"))


def closest_depth(depth: float, depths: Sequence[int] = NDL_DEPTHS) -> int:
    """Smallest table depth that is not shallower than ``depth``.

    Args:
        depth: requested depth in feet
        depths: ascending table depths

    Raises:
        DepthOutOfRange: if ``depth`` is deeper than the last table depth.
    """
    if not len(depths):
        raise ValueError("No table depths to search")
    idx = threshold_index(depth, depths)
    if idx >= len(depths):
        raise DepthOutOfRange(
            f"Depth {depth:g} ft exceeds maximum table depth of {depths[-1]} ft"
        )
    table_depth = int(depths[idx])
    logger.debug(f"Depth {depth:g} ft uses table depth {table_depth} ft")
    return table_depth
