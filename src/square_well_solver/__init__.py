"""
Square Well Solver - bound states of finite square wells

Computes bound-state energies of one-dimensional finite square wells by
root finding on the transcendental boundary-matching equations, and
searches double-well parameters for a target level-spacing ratio.

Main Interface:
    from square_well_solver import solve_single_well, optimize_double_well

    energies = solve_single_well(50.0, width=1.0, max_states=3)
    depth, separation, residual = optimize_double_well((75.0, 0.4), target_ratio=2.0)

Components:
- TranscendentalRootFinder: even/odd roots in (0, z0)
- SingleWellSolver: sorted bound-state energies
- DepthScanner: lowest levels over a range of depths
- DoubleWellApproximator: tight-binding double-well levels
- RatioOptimizer: Nelder-Mead search for a target E23/E12

Units: hbar^2/2m = 1; bound-state energies lie in (-V0, 0).
"""

__version__ = "0.1.0"

from square_well_solver.core import (
    WellParameters,
    dimensionless_depth,
    energy_from_z,
    z_from_energy,
)
from square_well_solver.eigensolver import (
    ParityBranch,
    TranscendentalRootFinder,
    SingleWellSolver,
    DoubleWellApproximator,
    solve_single_well,
    solve_double_well,
)
from square_well_solver.analysis import (
    DepthScanner,
    DepthScanResult,
    SpacingPair,
    energy_vs_depth,
    spacing_pair,
)
from square_well_solver.optimization import (
    RatioOptimizer,
    OptimizationResult,
    optimize_double_well,
)

__all__ = [
    # Main interface
    "solve_single_well",
    "energy_vs_depth",
    "solve_double_well",
    "optimize_double_well",
    # Components
    "WellParameters",
    "ParityBranch",
    "TranscendentalRootFinder",
    "SingleWellSolver",
    "DepthScanner",
    "DepthScanResult",
    "SpacingPair",
    "spacing_pair",
    "DoubleWellApproximator",
    "RatioOptimizer",
    "OptimizationResult",
    # Conversion
    "dimensionless_depth",
    "energy_from_z",
    "z_from_energy",
]
