"""
Conversion between the dimensionless root variable z and physical energy.

Uses the convention fixed in core.constants:

    z0 = a * sqrt(V0)
    E  = -V0 + (z / a)^2

in natural units hbar^2/(2m) = 1.
"""

import numpy as np
from numpy.typing import NDArray
from typing import Union

from square_well_solver.core.constants import HBAR2_OVER_2M

ArrayLike = Union[float, NDArray[np.floating]]


def dimensionless_depth(depth: float, width: float = 1.0) -> float:
    """
    Dimensionless well depth z0 = a * sqrt(V0).

    Bounds the admissible root domain (0, z0). Non-positive depths
    give z0 = 0 (no admissible roots).

    Args:
        depth: Well depth V0.
        width: Well half-width a.

    Returns:
        z0
    """
    if depth <= 0:
        return 0.0
    return float(width * np.sqrt(depth / HBAR2_OVER_2M))


def energy_from_z(z: ArrayLike, depth: float, width: float = 1.0) -> ArrayLike:
    """
    Energy of a bound state from its root z.

    E = -V0 + (hbar^2/2m) (z/a)^2

    Args:
        z: Root(s) of the boundary-matching equation, in (0, z0).
        depth: Well depth V0.
        width: Well half-width a.

    Returns:
        Energy (or array of energies) relative to the continuum threshold.
    """
    return -depth + HBAR2_OVER_2M * (z / width) ** 2


def z_from_energy(energy: ArrayLike, depth: float, width: float = 1.0) -> ArrayLike:
    """Inverse of energy_from_z: z = a * sqrt(E + V0)."""
    return width * np.sqrt((energy + depth) / HBAR2_OVER_2M)
