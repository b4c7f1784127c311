"""
Double-Well Ratio Optimizer.

Finds double-well parameters (V0, d) whose approximate spectrum has a
target spacing ratio E23/E12 (default 2.0).

OBJECTIVE:
==========
    f(V0, d) = |E23/E12 - target|

with the levels from DoubleWellApproximator. Points outside the admissible
region (V0 < depth floor, d < separation floor), points where the
approximator has too few single-well states, and points with non-positive
spacings all evaluate to a large fixed penalty. The objective is therefore
finite everywhere, but it is not smooth (penalty plateaus and the root
finder's branch structure), so no gradient is used.

ALGORITHM:
==========
Nelder-Mead simplex (scipy.optimize.minimize) over the 2D parameter
space, terminating on an iteration cap or when both the simplex spread
(xatol) and objective spread (fatol) fall below tolerance.

The ratio E23/E12 = 2 is reached along a curve in (V0, d), so the result
is a local minimum on that curve and depends on the initial guess.
Non-convergence is reported, not raised: the best point found is returned
with its residual.
"""

import time
import warnings
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray
from scipy.optimize import minimize, OptimizeResult

from square_well_solver.core.constants import (
    DEFAULT_INITIAL_GUESS,
    DEFAULT_TARGET_RATIO,
    DEPTH_FLOOR,
    SEPARATION_FLOOR,
    INFEASIBLE_PENALTY,
    OPTIMIZER_MAX_ITER,
    OPTIMIZER_XATOL,
    OPTIMIZER_FATOL,
)
from square_well_solver.core.parameters import WellParameters
from square_well_solver.analysis.spacing import spacing_pair
from square_well_solver.eigensolver.double_well import DoubleWellApproximator


# =============================================================================
# Optimization Result
# =============================================================================

@dataclass
class OptimizationResult:
    """Result of the double-well ratio optimization."""

    # Optimal parameters
    depth: float
    separation: float

    # Fit quality: |ratio - target| at the optimum
    residual: float

    target_ratio: float = DEFAULT_TARGET_RATIO
    ratio: Optional[float] = None
    energies: List[float] = field(default_factory=list)
    width: float = 1.0

    # Optimization metadata
    converged: bool = False
    iterations: int = 0
    function_evaluations: int = 0
    time_seconds: float = 0.0
    message: str = ""

    # Original scipy result
    scipy_result: Optional[OptimizeResult] = None

    def __iter__(self) -> Iterator[float]:
        # Allows `depth, separation, residual = optimize_double_well(...)`
        yield self.depth
        yield self.separation
        yield self.residual

    @property
    def parameters(self) -> WellParameters:
        return WellParameters(depth=self.depth, width=self.width, separation=self.separation)

    def summary(self) -> str:
        """Generate a summary of optimization results."""
        lines = [
            "=" * 70,
            "DOUBLE-WELL SPACING RATIO OPTIMIZATION",
            "=" * 70,
            "",
            "OPTIMAL PARAMETERS:",
            f"  V0 (depth)      = {self.depth:.4f}",
            f"  d  (separation) = {self.separation:.4f} a",
            "",
            f"TARGET RATIO: {self.target_ratio:.4f}",
        ]
        if self.ratio is not None and len(self.energies) == 3:
            E1, E2, E3 = self.energies
            lines.extend([
                f"ACHIEVED RATIO: {self.ratio:.6f}",
                f"  E1 = {E1:.6f},  E2 = {E2:.6f},  E3 = {E3:.6f}",
                f"  E12 = {E2 - E1:.6f},  E23 = {E3 - E2:.6f}",
            ])
        else:
            lines.append("ACHIEVED RATIO: (no valid three-level spectrum)")
        lines.extend([
            "",
            f"CONVERGENCE: {'[OK] YES' if self.converged else '[FAIL] NO'}",
            f"Residual: {self.residual:.3e}",
            f"Iterations: {self.iterations}",
            f"Function evaluations: {self.function_evaluations}",
            f"Time: {self.time_seconds:.2f} s",
            "=" * 70,
        ])
        return "\n".join(lines)


# =============================================================================
# Optimizer
# =============================================================================

class RatioOptimizer:
    """
    Nelder-Mead search for double-well parameters with a target ratio.

    The optimizer is stateless between calls to optimize() apart from
    evaluation bookkeeping, which is reset at the start of every run.
    """

    def __init__(
        self,
        target_ratio: float = DEFAULT_TARGET_RATIO,
        width: float = 1.0,
        approximator: Optional[DoubleWellApproximator] = None,
        depth_floor: float = DEPTH_FLOOR,
        separation_floor: float = SEPARATION_FLOOR,
        penalty: float = INFEASIBLE_PENALTY,
        max_iter: int = OPTIMIZER_MAX_ITER,
        xatol: float = OPTIMIZER_XATOL,
        fatol: float = OPTIMIZER_FATOL,
        verbose: bool = False,
        log_file: Optional[str] = None,
    ):
        """
        Initialize the optimizer.

        Args:
            target_ratio: Desired E23/E12.
            width: Half-width a of each well (ignored if approximator given).
            approximator: Forward model; built from width if None.
            depth_floor: Depths below this are penalized.
            separation_floor: Separations below this are penalized.
            penalty: Objective value for infeasible points.
            max_iter: Nelder-Mead iteration cap.
            xatol: Simplex spread tolerance.
            fatol: Objective spread tolerance.
            verbose: Print progress information.
            log_file: Path to log file for progress updates (optional).
        """
        if target_ratio <= 0:
            raise ValueError(f"target_ratio must be positive, got {target_ratio}")
        if separation_floor <= 0:
            raise ValueError(f"separation_floor must be positive, got {separation_floor}")
        if max_iter < 1:
            raise ValueError(f"max_iter must be >= 1, got {max_iter}")

        self.target_ratio = target_ratio
        self.approximator = approximator or DoubleWellApproximator(width=width)
        self.depth_floor = depth_floor
        self.separation_floor = separation_floor
        self.penalty = penalty
        self.max_iter = max_iter
        self.xatol = xatol
        self.fatol = fatol
        self.verbose = verbose
        self.log_file = log_file

        # Tracking
        self._eval_count = 0
        self._best_residual = float('inf')
        self._best_params: Optional[Tuple[float, float]] = None
        self._start_time: Optional[float] = None

    @property
    def width(self) -> float:
        return self.approximator.width

    def _log(self, message: str):
        """Write message to log file if configured."""
        if self.log_file:
            with open(self.log_file, 'a', encoding='utf-8') as f:
                f.write(message + '\n')
                f.flush()

    def ratio(self, depth: float, separation: float) -> Optional[float]:
        """E23/E12 of the model at (V0, d), or None if undefined."""
        levels = self.approximator.levels(depth, separation)
        if levels is None:
            return None
        pair = spacing_pair(levels.energies)
        if pair is None:
            return None
        return pair.ratio

    def objective(self, params: Sequence[float]) -> float:
        """
        Objective function: |E23/E12 - target|, or the penalty.

        Args:
            params: [V0, d]

        Returns:
            Non-negative residual.
        """
        depth, separation = float(params[0]), float(params[1])
        self._eval_count += 1

        if depth < self.depth_floor or separation < self.separation_floor:
            return self.penalty

        ratio = self.ratio(depth, separation)
        if ratio is None:
            return self.penalty

        residual = abs(ratio - self.target_ratio)

        is_best = residual < self._best_residual
        if is_best:
            self._best_residual = residual
            self._best_params = (depth, separation)

        if self.log_file and is_best:
            self._log(f"Eval {self._eval_count}: V0={depth:.6f}, d={separation:.6f} "
                      f"-> ratio={ratio:.6f}, residual={residual:.3e} *** BEST ***")

        if self.verbose and (self._eval_count % 100 == 0 or is_best):
            print(f"Eval {self._eval_count}: V0={depth:.4f}, d={separation:.4f}, "
                  f"ratio={ratio:.6f}, residual={residual:.3e}")

        return residual

    def optimize(
        self,
        initial_guess: Tuple[float, float] = DEFAULT_INITIAL_GUESS,
    ) -> OptimizationResult:
        """
        Run Nelder-Mead from the initial guess.

        Args:
            initial_guess: Starting point (V0, d).

        Returns:
            OptimizationResult with the best point found.
        """
        x0 = np.array(initial_guess, dtype=float)
        if x0.shape != (2,):
            raise ValueError(f"initial_guess must be (depth, separation), got {initial_guess}")

        self._eval_count = 0
        self._best_residual = float('inf')
        self._best_params = None
        self._start_time = time.time()

        if self.verbose:
            print("=" * 70)
            print("DOUBLE-WELL RATIO OPTIMIZATION")
            print(f"Target E23/E12 = {self.target_ratio}")
            print(f"Initial guess: V0={x0[0]}, d={x0[1]}")
            print("-" * 70)

        if self.log_file:
            with open(self.log_file, 'w', encoding='utf-8') as f:
                f.write("=" * 70 + "\n")
                f.write("DOUBLE-WELL RATIO OPTIMIZATION\n")
                f.write(f"Started: {time.strftime('%Y-%m-%d %H:%M:%S')}\n")
                f.write(f"Target: {self.target_ratio}, initial guess: {tuple(x0)}\n")
                f.write("=" * 70 + "\n")

        result = minimize(
            self.objective,
            x0,
            method='Nelder-Mead',
            options={
                'maxiter': self.max_iter,
                'xatol': self.xatol,
                'fatol': self.fatol,
            },
        )

        elapsed = time.time() - self._start_time

        depth_opt, sep_opt = float(result.x[0]), float(result.x[1])
        residual = float(result.fun)
        admissible = self._best_params is not None
        converged = bool(result.success) and admissible

        # Nelder-Mead returns its best vertex; keep the tracked best if lower
        if admissible and self._best_residual <= residual:
            depth_opt, sep_opt = self._best_params
            residual = self._best_residual

        if not admissible:
            warnings.warn(
                "No admissible point was evaluated (every evaluation hit the "
                f"penalty); returning V0={depth_opt:.4f}, d={sep_opt:.4f} "
                f"with residual {residual:.3e}",
                RuntimeWarning,
            )
        elif not result.success:
            warnings.warn(
                f"Nelder-Mead did not converge ({result.message}); "
                f"returning best point with residual {residual:.3e}",
                RuntimeWarning,
            )

        energies: List[float] = []
        ratio: Optional[float] = None
        if admissible:
            levels = self.approximator.levels(depth_opt, sep_opt)
            energies = list(levels.energies) if levels is not None else []
            ratio = self.ratio(depth_opt, sep_opt)

        opt_result = OptimizationResult(
            depth=depth_opt,
            separation=sep_opt,
            residual=residual,
            target_ratio=self.target_ratio,
            ratio=ratio,
            energies=energies,
            width=self.width,
            converged=converged,
            iterations=int(result.nit),
            function_evaluations=int(result.nfev),
            time_seconds=elapsed,
            message=str(result.message),
            scipy_result=result,
        )

        if self.verbose:
            print("\n" + opt_result.summary())
        self._log(opt_result.summary())

        return opt_result


def double_well_objective(
    depth: float,
    separation: float,
    width: float = 1.0,
    target_ratio: float = DEFAULT_TARGET_RATIO,
) -> float:
    """|E23/E12 - target| of the double-well model, or the penalty."""
    return RatioOptimizer(target_ratio=target_ratio, width=width).objective([depth, separation])


def ratio_map(
    depths: Sequence[float],
    separations: Sequence[float],
    width: float = 1.0,
) -> NDArray[np.floating]:
    """
    Spacing ratio E23/E12 on a (separation, depth) grid.

    Args:
        depths: Depth values (columns).
        separations: Separation values (rows).
        width: Well half-width a.

    Returns:
        Array of shape (len(separations), len(depths)); nan where the model
        has no valid ratio.
    """
    optimizer = RatioOptimizer(width=width)
    out = np.full((len(separations), len(depths)), np.nan)
    for i, separation in enumerate(separations):
        for j, depth in enumerate(depths):
            ratio = optimizer.ratio(float(depth), float(separation))
            if ratio is not None:
                out[i, j] = ratio
    return out


def optimize_double_well(
    initial_guess: Tuple[float, float] = DEFAULT_INITIAL_GUESS,
    target_ratio: float = DEFAULT_TARGET_RATIO,
    width: float = 1.0,
    **kwargs,
) -> OptimizationResult:
    """
    Optimize double well parameters to achieve E23 = target * E12.

    Args:
        initial_guess: Starting point (V0, d).
        target_ratio: Desired E23/E12.
        width: Half-width a of each well.
        **kwargs: Passed to RatioOptimizer (max_iter, verbose, ...).

    Returns:
        OptimizationResult (unpacks as (depth, separation, residual)).
    """
    optimizer = RatioOptimizer(target_ratio=target_ratio, width=width, **kwargs)
    return optimizer.optimize(initial_guess)
