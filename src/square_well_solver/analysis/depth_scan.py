"""
Sweep of the lowest bound-state energies over a range of well depths.

Depths that support fewer than the requested number of levels are dropped
from the result. This is the expected outcome below the three-state
threshold (V0 ~ (3 pi / 2)^2 ~ 22.21 for a = 1) and is not an error.
"""

from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence

import numpy as np
from numpy.typing import NDArray

from square_well_solver.eigensolver.single_well import SingleWellSolver


@dataclass
class DepthScanResult:
    """
    Valid depths of a scan and their energies.

    Attributes:
        depths: Depths that supported `levels` bound states, in scan order.
        energies: Array of shape (len(depths), levels), ascending per row.
    """

    depths: NDArray[np.floating]
    energies: NDArray[np.floating]

    def __iter__(self) -> Iterator[NDArray]:
        # Allows `depths, energies = energy_vs_depth(...)`
        yield self.depths
        yield self.energies

    def __len__(self) -> int:
        return len(self.depths)

    @property
    def levels(self) -> int:
        return self.energies.shape[1]

    def level(self, index: int) -> NDArray[np.floating]:
        """Energies of one level (0 = ground state) across the valid depths."""
        return self.energies[:, index]

    def relative_to_floor(self) -> NDArray[np.floating]:
        """Energies measured from the well floor, E + V0."""
        return self.energies + self.depths[:, None]


class DepthScanner:
    """
    Evaluates the single-well spectrum over a sequence of depths.

    Attributes:
        levels: Number of lowest levels required per depth.
        solver: SingleWellSolver for the fixed width.
    """

    def __init__(
        self,
        width: float = 1.0,
        levels: int = 3,
        solver: Optional[SingleWellSolver] = None,
    ):
        if levels < 1:
            raise ValueError(f"levels must be >= 1, got {levels}")
        self.solver = solver or SingleWellSolver(width=width)
        self.levels = levels

    @property
    def width(self) -> float:
        return self.solver.width

    def scan(self, depth_values: Sequence[float]) -> DepthScanResult:
        """
        Solve at every depth and keep those with enough bound states.

        Args:
            depth_values: Candidate depths, in the order to report them.

        Returns:
            DepthScanResult in input order.
        """
        valid_depths: List[float] = []
        rows: List[List[float]] = []

        for depth in depth_values:
            energies = self.solver.solve(float(depth), max_states=self.levels)
            if len(energies) >= self.levels:
                valid_depths.append(float(depth))
                rows.append(energies[:self.levels])

        energy_matrix = np.array(rows, dtype=float).reshape(len(rows), self.levels)
        return DepthScanResult(depths=np.array(valid_depths, dtype=float), energies=energy_matrix)


def energy_vs_depth(
    depth_values: Sequence[float],
    width: float = 1.0,
    levels: int = 3,
) -> DepthScanResult:
    """
    Compute the lowest energy levels as a function of well depth.

    Args:
        depth_values: Range of well depths to scan.
        width: Well half-width a.
        levels: Number of levels per depth.

    Returns:
        DepthScanResult (unpacks as (valid_depths, energy_matrix)).
    """
    return DepthScanner(width=width, levels=levels).scan(depth_values)
