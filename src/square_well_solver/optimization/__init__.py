"""
Optimization module for the square well solver.

Nelder-Mead search for double-well parameters (V0, d) with a target
spacing ratio E23/E12.
"""

from square_well_solver.optimization.ratio_optimizer import (
    RatioOptimizer,
    OptimizationResult,
    optimize_double_well,
    double_well_objective,
    ratio_map,
)

__all__ = [
    'RatioOptimizer',
    'OptimizationResult',
    'optimize_double_well',
    'double_well_objective',
    'ratio_map',
]
