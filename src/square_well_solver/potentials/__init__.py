"""
Potentials module for the square well solver.

Contains the single and double finite square well potential profiles.
"""

from square_well_solver.potentials.square_well import (
    SquareWellPotential,
    DoubleSquareWellPotential,
)

__all__ = [
    "SquareWellPotential",
    "DoubleSquareWellPotential",
]
