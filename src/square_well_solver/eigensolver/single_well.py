"""
Bound states of a single finite square well.

Orchestrates the root search over both parity branches and converts the
roots to energies:

    z0 = a sqrt(V0)
    E  = -V0 + (z/a)^2

Energies are returned ascending (deepest state first) and lie strictly
inside (-V0, 0). A shallow well returns fewer states than requested;
callers must check the length.
"""

from typing import List, Optional

from square_well_solver.core.conversion import energy_from_z
from square_well_solver.core.parameters import WellParameters
from square_well_solver.eigensolver.transcendental import (
    RootCandidate,
    TranscendentalRootFinder,
)


class SingleWellSolver:
    """
    Bound-state solver for a single finite square well of fixed width.

    Attributes:
        width: Well half-width a.
        root_finder: TranscendentalRootFinder used for both parity branches.
    """

    def __init__(
        self,
        width: float = 1.0,
        root_finder: Optional[TranscendentalRootFinder] = None,
    ):
        if not width > 0:
            raise ValueError(f"width must be positive, got {width}")
        self.width = width
        self.root_finder = root_finder or TranscendentalRootFinder()

    def bound_state_roots(self, depth: float, max_states: Optional[int] = None) -> List[RootCandidate]:
        """Roots (with parity labels) of the lowest bound states at this depth."""
        params = WellParameters(depth=depth, width=self.width)
        if not params.is_bound:
            return []
        return self.root_finder.find_bound_states(params.z0, max_states=max_states)

    def solve(self, depth: float, max_states: int = 3) -> List[float]:
        """
        Solve for the lowest bound-state energies.

        Args:
            depth: Well depth V0. Non-positive depth gives [].
            max_states: Number of states requested.

        Returns:
            Ascending list of at most max_states energies in (-depth, 0).
        """
        if max_states < 0:
            raise ValueError(f"max_states must be non-negative, got {max_states}")
        if max_states == 0:
            return []

        roots = self.bound_state_roots(depth, max_states=max_states)
        return [float(energy_from_z(r.z, depth, self.width)) for r in roots]

    def count_bound_states(self, depth: float) -> int:
        """Number of bound states the root search finds at this depth."""
        return len(self.bound_state_roots(depth))


def solve_single_well(depth: float, width: float = 1.0, max_states: int = 3) -> List[float]:
    """
    Solve for bound states of a single finite square well.

    Args:
        depth: Well depth V0 (units of hbar^2/(2m a^2)).
        width: Well half-width a.
        max_states: Number of states to compute.

    Returns:
        Energy eigenvalues, ascending; possibly fewer than max_states.
    """
    return SingleWellSolver(width=width).solve(depth, max_states=max_states)
