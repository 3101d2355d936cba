"""
U.S. Navy no-decompression dive table calculations.

Modules:
    - units: depth/pressure and interval conversions
    - navy_tables: NDL, surface interval credit and residual nitrogen tables
    - daltons: Dalton's triangle solver and pO2/pN2 warnings
    - depth: rounding requested depths onto table depths
    - nitrox: equivalent air depth, maximum operating depth, GasMix
    - resolver: single dive, surface interval and repetitive dive lookups
    - config: YAML configuration loading
"""

from .errors import (
    DiveTableError,
    InvalidInputCombination,
    DepthOutOfRange,
    InvalidGroup,
    InvalidGasMix,
    ConfigError,
)
from .units import depth_to_pressure, pressure_to_depth, parse_interval, format_interval
from .navy_tables import (
    PRESSURE_GROUPS,
    NDL_TABLE,
    NDL_DEPTHS,
    RNT_TABLE,
    RNT_DEPTHS,
    SURFACE_INTERVAL_TABLE,
    TableMark,
)
from .daltons import DaltonResult, WarningLevel, daltons_triangle, classify_daltons_warning
from .depth import closest_depth
from .nitrox import (
    AIR,
    GasMix,
    equivalent_air_depth,
    actual_depth_from_ead,
    actual_depth_bands,
    max_operating_depth,
    exceeds_mod,
    is_narcosis_risk,
)
from .resolver import (
    SingleDiveResult,
    RepetitiveDiveResult,
    RepetitivePlan,
    single_dive,
    surface_interval,
    repetitive_dive,
    final_group,
    minimum_surface_interval,
    plan_repetitive_dive,
)
from .config import load_effective_config

__all__ = [
    "DiveTableError",
    "InvalidInputCombination",
    "DepthOutOfRange",
    "InvalidGroup",
    "InvalidGasMix",
    "ConfigError",
    "depth_to_pressure",
    "pressure_to_depth",
    "parse_interval",
    "format_interval",
    "PRESSURE_GROUPS",
    "NDL_TABLE",
    "NDL_DEPTHS",
    "RNT_TABLE",
    "RNT_DEPTHS",
    "SURFACE_INTERVAL_TABLE",
    "TableMark",
    "DaltonResult",
    "WarningLevel",
    "daltons_triangle",
    "classify_daltons_warning",
    "closest_depth",
    "AIR",
    "GasMix",
    "equivalent_air_depth",
    "actual_depth_from_ead",
    "actual_depth_bands",
    "max_operating_depth",
    "exceeds_mod",
    "is_narcosis_risk",
    "SingleDiveResult",
    "RepetitiveDiveResult",
    "RepetitivePlan",
    "single_dive",
    "surface_interval",
    "repetitive_dive",
    "final_group",
    "minimum_surface_interval",
    "plan_repetitive_dive",
    "load_effective_config",
]
