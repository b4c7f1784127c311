"""
Core module for the square well solver.

Contains the unit convention, tunable constants, the z <-> energy
conversion and the well parameter dataclass.

Conventions (natural units, hbar^2/2m = 1):
- z0 = a sqrt(V0)
- E  = -V0 + (z/a)^2
"""

from square_well_solver.core.constants import (
    HBAR2_OVER_2M,
    BOUNDARY_EPSILON,
    ROOT_XTOL,
    MAX_INTERVALS,
    TUNNELING_PREFACTOR,
    DECAY_ENERGY_FACTOR,
    DEPTH_FLOOR,
    SEPARATION_FLOOR,
    INFEASIBLE_PENALTY,
    DEFAULT_TARGET_RATIO,
    DEFAULT_INITIAL_GUESS,
)
from square_well_solver.core.conversion import (
    dimensionless_depth,
    energy_from_z,
    z_from_energy,
)
from square_well_solver.core.parameters import WellParameters

__all__ = [
    # Constants
    "HBAR2_OVER_2M",
    "BOUNDARY_EPSILON",
    "ROOT_XTOL",
    "MAX_INTERVALS",
    "TUNNELING_PREFACTOR",
    "DECAY_ENERGY_FACTOR",
    "DEPTH_FLOOR",
    "SEPARATION_FLOOR",
    "INFEASIBLE_PENALTY",
    "DEFAULT_TARGET_RATIO",
    "DEFAULT_INITIAL_GUESS",
    # Conversion
    "dimensionless_depth",
    "energy_from_z",
    "z_from_energy",
    # Parameters
    "WellParameters",
]
