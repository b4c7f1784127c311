"""
Well parameters dataclass for configuring the solvers.

The parameters define a single finite square well (depth, width) or a
symmetric pair of such wells separated by a barrier of width `separation`.
"""

from dataclasses import dataclass, field
from typing import Optional

from square_well_solver.core.conversion import dimensionless_depth


@dataclass(frozen=True)
class WellParameters:
    """
    Parameters of a finite square well (or double well).

    Attributes:
        depth: Well depth V0 (units of hbar^2/(2m a^2)). Non-positive depths
               are accepted and simply support no bound states.
        width: Well half-width a (the well spans 2a). Natural length
               unit, default 1.0.
        separation: Barrier width d between the two wells of a double well.
                    Ignored for a single well.
        z0: Dimensionless depth a*sqrt(V0), derived.
    """

    depth: float
    width: float = 1.0
    separation: float = 0.0

    z0: Optional[float] = field(default=None, init=False, compare=False)

    def __post_init__(self):
        """Validate and compute derived parameters after initialization."""
        self._validate()
        object.__setattr__(self, "z0", dimensionless_depth(self.depth, self.width))

    def _validate(self):
        """Validate parameter values."""
        if not self.width > 0:
            raise ValueError(f"width must be positive, got {self.width}")
        if self.separation < 0:
            raise ValueError(f"separation must be non-negative, got {self.separation}")

    @property
    def is_bound(self) -> bool:
        """True if depth > 0; the root search may still return no states."""
        return self.depth > 0

    @property
    def total_extent(self) -> float:
        """Outer-wall distance of the double well: 4a + d (a is the half-width)."""
        return 4 * self.width + self.separation
