"""
Analysis module for the square well solver.

Contains the depth scan and level spacing tools.
"""

from square_well_solver.analysis.depth_scan import (
    DepthScanner,
    DepthScanResult,
    energy_vs_depth,
)
from square_well_solver.analysis.spacing import (
    SpacingPair,
    EqualSpacingSearch,
    spacing_pair,
    spacing_ratios,
    find_equal_spacing,
    infinite_well_ratios,
)

__all__ = [
    "DepthScanner",
    "DepthScanResult",
    "energy_vs_depth",
    "SpacingPair",
    "EqualSpacingSearch",
    "spacing_pair",
    "spacing_ratios",
    "find_equal_spacing",
    "infinite_well_ratios",
]
