"""
Finite square well potentials in one dimension.

The length `a` is the well HALF-width, the same `a` that enters the solver
through z = k a and z0 = a sqrt(V0): a single well occupies |x - center| < a
and its infinite-well levels are E_n + V0 = (n pi / 2a)^2.

The symmetric double well is two such wells whose inner walls are a
barrier of width d apart. The potential is -V0 inside a well and 0
outside (continuum threshold).
"""

import numpy as np
from numpy.typing import NDArray
from typing import Tuple, Union

from square_well_solver.core.parameters import WellParameters


class SquareWellPotential:
    """
    Single finite square well.

    V(x) = -V0  for |x - center| < a
           0    otherwise

    Attributes:
        V0: Well depth. Must be non-negative.
        a: Well half-width. Must be positive.
        center: Position of the well center.
    """

    def __init__(self, V0: float, a: float = 1.0, center: float = 0.0):
        if V0 < 0:
            raise ValueError(f"V0 must be non-negative, got {V0}")
        if a <= 0:
            raise ValueError(f"a must be positive, got {a}")

        self.V0 = V0
        self.a = a
        self.center = center

    def __call__(
        self,
        x: Union[float, NDArray[np.floating]]
    ) -> Union[float, NDArray[np.floating]]:
        """
        Evaluate the potential at given position(s).

        Args:
            x: Position(s) in units of length.

        Returns:
            Potential value(s).
        """
        return np.where(np.abs(np.asarray(x) - self.center) < self.a, -self.V0, 0.0)

    @property
    def edges(self) -> Tuple[float, float]:
        """Positions of the two well walls."""
        return self.center - self.a, self.center + self.a


class DoubleSquareWellPotential:
    """
    Symmetric double finite square well.

    Two wells of depth V0 and half-width a whose inner walls are a distance
    d apart. The barrier is centered at x = 0:

    V(x) = -V0  for d/2 < |x| < d/2 + 2a
           0    otherwise

    Attributes:
        V0: Depth of each well.
        a: Half-width of each well.
        d: Barrier width between the wells.
        wells: The left and right SquareWellPotential.
    """

    def __init__(self, V0: float, d: float, a: float = 1.0):
        if d < 0:
            raise ValueError(f"d must be non-negative, got {d}")

        offset = 0.5 * d + a
        self.wells = (
            SquareWellPotential(V0, a=a, center=-offset),
            SquareWellPotential(V0, a=a, center=offset),
        )
        self.V0 = V0
        self.a = a
        self.d = d

    @classmethod
    def from_parameters(cls, params: WellParameters) -> "DoubleSquareWellPotential":
        """Build from a WellParameters instance."""
        return cls(V0=params.depth, d=params.separation, a=params.width)

    def __call__(
        self,
        x: Union[float, NDArray[np.floating]]
    ) -> Union[float, NDArray[np.floating]]:
        """Evaluate the potential at given position(s)."""
        # Open intervals: the wells never overlap, even at d = 0
        left, right = self.wells
        return left(x) + right(x)

    @property
    def well_centers(self) -> NDArray[np.floating]:
        """Centers of the left and right wells."""
        return np.array([well.center for well in self.wells])

    @property
    def extent(self) -> float:
        """Distance between the outer walls: 4a + d."""
        return 4 * self.a + self.d

    def grid(self, n_points: int = 1000, padding: float = 0.5) -> NDArray[np.floating]:
        """
        Evenly spaced x values covering both wells plus padding each side.

        Args:
            n_points: Number of grid points.
            padding: Extra length beyond each outer wall, in units of a.
        """
        half = 0.5 * self.extent + padding * self.a
        return np.linspace(-half, half, n_points)
