"""
Tight-binding approximation for a symmetric double finite square well.

This is a forward model, not a Schrodinger solve. Two identical wells of
depth V0 and half-width a, separated by a barrier of width d, are treated as
weakly coupled copies of the single well:

1. Solve the single well for its two lowest states E1, E2.
2. Decay constant in the barrier from the ground state:
       kappa = sqrt(-DECAY_ENERGY_FACTOR * E1)
3. Tunneling splitting of the ground doublet:
       Delta = C |E1| exp(-kappa d),   C = TUNNELING_PREFACTOR
4. Levels: E1 - Delta/2 (bonding), E1 + Delta/2 (antibonding), and E2
   (left unsplit), sorted ascending.

The prefactor C is an empirical calibration constant (see core.constants).
The model keeps the ratio optimization two-dimensional and cheap; its
levels are approximate by construction.
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from square_well_solver.core.constants import (
    TUNNELING_PREFACTOR,
    DECAY_ENERGY_FACTOR,
)
from square_well_solver.eigensolver.single_well import SingleWellSolver


@dataclass(frozen=True)
class DoubleWellLevels:
    """Intermediate quantities and levels of one double-well evaluation."""

    depth: float
    separation: float
    single_well: Tuple[float, float]  # (E1, E2) of the isolated well
    kappa: float
    splitting: float
    energies: Tuple[float, float, float]  # sorted ascending

    @property
    def doublet_gap(self) -> float:
        """Gap between the two lowest levels."""
        return self.energies[1] - self.energies[0]


class DoubleWellApproximator:
    """
    Approximate three-level spectrum of a symmetric double square well.

    Attributes:
        width: Half-width a of each well.
        prefactor: Splitting prefactor C.
        decay_factor: Factor in kappa = sqrt(-factor * E1).
        solver: SingleWellSolver for the isolated well.
    """

    def __init__(
        self,
        width: float = 1.0,
        prefactor: float = TUNNELING_PREFACTOR,
        decay_factor: float = DECAY_ENERGY_FACTOR,
        solver: Optional[SingleWellSolver] = None,
    ):
        if prefactor <= 0:
            raise ValueError(f"prefactor must be positive, got {prefactor}")
        if decay_factor <= 0:
            raise ValueError(f"decay_factor must be positive, got {decay_factor}")

        self.solver = solver or SingleWellSolver(width=width)
        self.width = self.solver.width
        self.prefactor = prefactor
        self.decay_factor = decay_factor

    def base_states(self, depth: float) -> Optional[Tuple[float, float]]:
        """Two lowest single-well energies, or None if the well has fewer."""
        energies = self.solver.solve(depth, max_states=2)
        if len(energies) < 2:
            return None
        return energies[0], energies[1]

    def decay_constant(self, energy: float) -> float:
        """Barrier decay constant kappa for a bound state at this energy."""
        return math.sqrt(-self.decay_factor * energy)

    def splitting(self, energy: float, separation: float) -> float:
        """Tunneling splitting Delta = C |E| exp(-kappa d)."""
        kappa = self.decay_constant(energy)
        return self.prefactor * abs(energy) * math.exp(-kappa * separation)

    def levels(self, depth: float, separation: float) -> Optional[DoubleWellLevels]:
        """
        Evaluate the model at (V0, d).

        Returns:
            DoubleWellLevels, or None when the point is infeasible
            (separation <= 0 or fewer than two single-well states).
        """
        if separation <= 0:
            return None
        base = self.base_states(depth)
        if base is None:
            return None

        E1, E2 = base
        kappa = self.decay_constant(E1)
        delta = self.splitting(E1, separation)

        energies = sorted([E1 - 0.5 * delta, E1 + 0.5 * delta, E2])
        return DoubleWellLevels(
            depth=depth,
            separation=separation,
            single_well=(E1, E2),
            kappa=kappa,
            splitting=delta,
            energies=(energies[0], energies[1], energies[2]),
        )

    def solve(self, depth: float, separation: float, n_states: int = 3) -> List[float]:
        """
        Approximate double-well energies.

        Args:
            depth: Well depth V0.
            separation: Barrier width d.
            n_states: Number of levels (at most 3).

        Returns:
            Ascending energies, or [] when infeasible.
        """
        if n_states < 0:
            raise ValueError(f"n_states must be non-negative, got {n_states}")
        result = self.levels(depth, separation)
        if result is None:
            return []
        return list(result.energies[:n_states])


def solve_double_well(
    depth: float,
    separation: float,
    width: float = 1.0,
    n_states: int = 3,
) -> List[float]:
    """
    Solve for the approximate bound states of a double finite square well.

    Args:
        depth: Well depth V0.
        separation: Well separation d.
        width: Half-width a of each well.
        n_states: Number of states to compute (at most 3).

    Returns:
        Energy levels ascending; empty if the parameters are infeasible.
    """
    return DoubleWellApproximator(width=width).solve(depth, separation, n_states=n_states)
