"""
Eigensolver module for the square well solver.

Provides the bound-state solvers:

- TranscendentalRootFinder: even/odd boundary-matching roots in (0, z0)
- SingleWellSolver: sorted bound-state energies of one finite well
- DoubleWellApproximator: tight-binding three-level double-well model
"""

from square_well_solver.eigensolver.transcendental import (
    ParityBranch,
    IntervalStatus,
    RootCandidate,
    IntervalResult,
    TranscendentalRootFinder,
    transcendental_even,
    transcendental_odd,
)
from square_well_solver.eigensolver.single_well import (
    SingleWellSolver,
    solve_single_well,
)
from square_well_solver.eigensolver.double_well import (
    DoubleWellApproximator,
    DoubleWellLevels,
    solve_double_well,
)

__all__ = [
    "ParityBranch",
    "IntervalStatus",
    "RootCandidate",
    "IntervalResult",
    "TranscendentalRootFinder",
    "transcendental_even",
    "transcendental_odd",
    "SingleWellSolver",
    "solve_single_well",
    "DoubleWellApproximator",
    "DoubleWellLevels",
    "solve_double_well",
]
