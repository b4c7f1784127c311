"""
Level spacings and spacing ratios.

For the three lowest levels E1 <= E2 <= E3:

    E12   = E2 - E1
    E23   = E3 - E2
    ratio = E23 / E12

A ratio exists only when both spacings are strictly positive. Degenerate
or misordered input yields no ratio (None / nan), never a numeric zero.
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray


# |E23 - E12| below this counts as equal spacing
EQUAL_SPACING_TOL = 1e-6


@dataclass(frozen=True)
class SpacingPair:
    """First and second level spacings and their ratio."""

    E12: float
    E23: float
    ratio: float


def spacing_pair(energies: Sequence[float]) -> Optional[SpacingPair]:
    """
    Spacings of the three lowest levels.

    Args:
        energies: Ascending energy sequence with at least three entries.

    Returns:
        SpacingPair, or None when fewer than three levels are given or
        either spacing is not strictly positive.
    """
    if len(energies) < 3:
        return None
    E1, E2, E3 = energies[0], energies[1], energies[2]
    E12 = E2 - E1
    E23 = E3 - E2
    if E12 <= 0 or E23 <= 0:
        return None
    return SpacingPair(E12=float(E12), E23=float(E23), ratio=float(E23 / E12))


def spacing_ratios(energy_matrix: NDArray) -> Tuple[NDArray, NDArray, NDArray]:
    """
    Vectorized spacings for a depth-scan table.

    Args:
        energy_matrix: Array of shape (N, >=3), one row of ascending energies
                       per depth.

    Returns:
        (E12, E23, ratio) arrays of length N. ratio is nan where E12 <= 0.
    """
    E = np.asarray(energy_matrix, dtype=float)
    if E.ndim != 2 or E.shape[1] < 3:
        raise ValueError(f"energy_matrix must have shape (N, >=3), got {E.shape}")

    E12 = E[:, 1] - E[:, 0]
    E23 = E[:, 2] - E[:, 1]
    ratio = np.full(E12.shape, np.nan)
    valid = E12 > 0
    ratio[valid] = E23[valid] / E12[valid]
    return E12, E23, ratio


@dataclass
class EqualSpacingSearch:
    """Closest approach to E12 = E23 over a depth scan."""

    depth: float
    E12: float
    E23: float
    ratio: float
    ratio_min: float
    ratio_max: float
    equal_spacing_found: bool

    @property
    def gap(self) -> float:
        """|E23 - E12| at the closest approach."""
        return abs(self.E23 - self.E12)


def find_equal_spacing(
    depths: Sequence[float],
    energy_matrix: NDArray,
    tol: float = EQUAL_SPACING_TOL,
) -> Optional[EqualSpacingSearch]:
    """
    Search a depth scan for evenly spaced lowest levels.

    Args:
        depths: Depths of the scan rows.
        energy_matrix: Matching (N, >=3) energy table.
        tol: |E23 - E12| below which spacing counts as equal.

    Returns:
        EqualSpacingSearch at the depth minimizing |E23 - E12|, or None for
        an empty scan.
    """
    depths = np.asarray(depths, dtype=float)
    if depths.size == 0:
        return None

    E12, E23, ratio = spacing_ratios(energy_matrix)
    diff = np.abs(E23 - E12)
    idx = int(np.argmin(diff))

    return EqualSpacingSearch(
        depth=float(depths[idx]),
        E12=float(E12[idx]),
        E23=float(E23[idx]),
        ratio=float(ratio[idx]),
        ratio_min=float(np.nanmin(ratio)),
        ratio_max=float(np.nanmax(ratio)),
        equal_spacing_found=bool(diff[idx] < tol),
    )


def infinite_well_ratios(energies: Sequence[float], depth: float) -> Tuple[float, float]:
    """
    Level ratios E2'/E1' and E3'/E1' measured from the well floor.

    E' = E + V0. These tend to 4 and 9 as the well becomes infinitely deep.
    """
    if len(energies) < 3:
        raise ValueError(f"need three energies, got {len(energies)}")
    E_rel = np.asarray(energies[:3], dtype=float) + depth
    return float(E_rel[1] / E_rel[0]), float(E_rel[2] / E_rel[0])
