"""
Root finder for the finite square well boundary-matching equations.

For a symmetric well the bound states split into two parity classes.
With z = k a and z0 = a sqrt(V0) (see core.constants) the matching
conditions at the well edge are

    Even:   z tan(z) - sqrt(z0^2 - z^2) = 0
    Odd:   -z cot(z) - sqrt(z0^2 - z^2) = 0

Neither has a closed form. Each root is isolated in a canonical interval
on which tan (or cot) is continuous and monotonic:

    Even roots:  (n pi,        n pi + pi/2)
    Odd roots:   (n pi + pi/2, (n+1) pi)

Both ends of every interval are pulled in by a small epsilon to stay clear
of the tan/cot poles and of the branch point at z = z0, then the sign of
the equation is checked at the two ends. A sign change brackets exactly
one root, which is polished with Brent's method.

Every searched interval produces an IntervalResult. An interval with no
sign change (or with non-finite endpoint values, or a failed bracketed
solve) carries a non-root status; this is the normal outcome near the edge
of the admissible domain and is never raised as an error.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterator, List, Optional, Tuple

import numpy as np
from scipy.optimize import brentq

from square_well_solver.core.constants import (
    BOUNDARY_EPSILON,
    ROOT_XTOL,
    MAX_INTERVALS,
)


class ParityBranch(Enum):
    """Reflection symmetry of a bound state about the well center."""

    EVEN = "even"
    ODD = "odd"


class IntervalStatus(Enum):
    """Outcome of the search in one canonical interval."""

    ROOT_FOUND = "root_found"
    NO_SIGN_CHANGE = "no_sign_change"
    NON_FINITE = "non_finite"
    SOLVER_FAILURE = "solver_failure"


@dataclass(frozen=True)
class RootCandidate:
    """A root z in (0, z0) of the equation for one parity branch."""

    parity: ParityBranch
    z: float


@dataclass(frozen=True)
class IntervalResult:
    """Search result for a single (shrunk) canonical interval."""

    parity: ParityBranch
    n: int
    left: float
    right: float
    status: IntervalStatus
    z: Optional[float] = None

    @property
    def found(self) -> bool:
        return self.status is IntervalStatus.ROOT_FOUND

    def as_candidate(self) -> Optional[RootCandidate]:
        if not self.found:
            return None
        return RootCandidate(parity=self.parity, z=self.z)


def transcendental_even(z: float, z0: float) -> float:
    """
    Even-parity matching function z tan(z) - sqrt(z0^2 - z^2).

    Returns nan outside the open domain (0, z0).
    """
    if z <= 0 or z >= z0:
        return math.nan
    return z * math.tan(z) - math.sqrt(z0 * z0 - z * z)


def transcendental_odd(z: float, z0: float) -> float:
    """
    Odd-parity matching function -z cot(z) - sqrt(z0^2 - z^2).

    Returns nan outside the open domain (0, z0).
    """
    if z <= 0 or z >= z0:
        return math.nan
    return -z / math.tan(z) - math.sqrt(z0 * z0 - z * z)


_EQUATIONS = {
    ParityBranch.EVEN: transcendental_even,
    ParityBranch.ODD: transcendental_odd,
}


def canonical_interval(n: int, parity: ParityBranch) -> Tuple[float, float]:
    """Unshrunk interval (left, right) holding the n-th root of a branch."""
    if parity is ParityBranch.EVEN:
        return n * math.pi, n * math.pi + 0.5 * math.pi
    return n * math.pi + 0.5 * math.pi, (n + 1) * math.pi


class TranscendentalRootFinder:
    """
    Locates all roots of the even/odd matching equations in (0, z0).

    Two admission rules for the last canonical interval are available:

    - clip_to_domain=False (default): an interval is searched only when its
      shrunk right edge lies below z0, i.e. the whole interval sits inside
      the admissible domain. The three-state threshold is then
      z0 = 3 pi / 2, i.e. V0 = (3 pi / 2)^2 ~ 22.21 for a = 1.
    - clip_to_domain=True: the right edge is clipped to z0 - epsilon and
      the search continues while the left edge is below z0. This also picks
      up the state whose canonical interval straddles z0, so a state appears
      as soon as the well can bind it.

    Attributes:
        epsilon: Margin kept from interval ends and from z0.
        xtol: Absolute tolerance handed to brentq.
        max_intervals: Hard cap on intervals examined per parity branch.
        clip_to_domain: Admission rule for the last interval (see above).
    """

    def __init__(
        self,
        epsilon: float = BOUNDARY_EPSILON,
        xtol: float = ROOT_XTOL,
        max_intervals: int = MAX_INTERVALS,
        clip_to_domain: bool = False,
    ):
        if epsilon <= 0 or epsilon >= 0.25 * math.pi:
            raise ValueError(f"epsilon must lie in (0, pi/4), got {epsilon}")
        if xtol <= 0:
            raise ValueError(f"xtol must be positive, got {xtol}")
        if max_intervals < 1:
            raise ValueError(f"max_intervals must be >= 1, got {max_intervals}")

        self.epsilon = epsilon
        self.xtol = xtol
        self.max_intervals = max_intervals
        self.clip_to_domain = clip_to_domain

    def interval_cap(self, z0: float) -> int:
        """Number of intervals per branch that can possibly hold a root."""
        return min(self.max_intervals, int(math.ceil(2.0 * z0 / math.pi)) + 2)

    def _intervals(self, z0: float, parity: ParityBranch) -> Iterator[Tuple[int, float, float]]:
        """Yield (n, left, right) for the shrunk intervals admitted for z0."""
        for n in range(self.interval_cap(z0)):
            left, right = canonical_interval(n, parity)
            left += self.epsilon
            right -= self.epsilon

            if left >= z0:
                return
            if right >= z0:
                if not self.clip_to_domain:
                    return
                right = z0 - self.epsilon
                if right <= left:
                    return
            yield n, left, right

    def _solve_interval(
        self,
        func: Callable[[float, float], float],
        z0: float,
        parity: ParityBranch,
        n: int,
        left: float,
        right: float,
    ) -> IntervalResult:
        f_left = func(left, z0)
        f_right = func(right, z0)

        def result(status: IntervalStatus, z: Optional[float] = None) -> IntervalResult:
            return IntervalResult(parity=parity, n=n, left=left, right=right, status=status, z=z)

        if not (np.isfinite(f_left) and np.isfinite(f_right)):
            return result(IntervalStatus.NON_FINITE)
        if f_left * f_right >= 0:
            return result(IntervalStatus.NO_SIGN_CHANGE)

        try:
            z, info = brentq(func, left, right, args=(z0,), xtol=self.xtol, full_output=True)
        except (RuntimeError, ValueError):
            return result(IntervalStatus.SOLVER_FAILURE)

        if not info.converged:
            return result(IntervalStatus.SOLVER_FAILURE)
        return result(IntervalStatus.ROOT_FOUND, float(z))

    def search(self, z0: float, parity: ParityBranch) -> List[IntervalResult]:
        """
        Search every admitted interval of one parity branch.

        Args:
            z0: Dimensionless well depth.
            parity: Branch to search.

        Returns:
            One IntervalResult per admitted interval, in order of n.
        """
        if z0 <= 0:
            return []
        func = _EQUATIONS[parity]
        return [
            self._solve_interval(func, z0, parity, n, left, right)
            for n, left, right in self._intervals(z0, parity)
        ]

    def find_roots(self, z0: float, parity: ParityBranch) -> List[RootCandidate]:
        """Roots of one parity branch, ascending in z."""
        return [r.as_candidate() for r in self.search(z0, parity) if r.found]

    def find_bound_states(
        self,
        z0: float,
        max_states: Optional[int] = None,
    ) -> List[RootCandidate]:
        """
        Roots of both parity branches, merged and sorted by z.

        Args:
            z0: Dimensionless well depth.
            max_states: Truncate to this many lowest roots (None = all).

        Returns:
            List of RootCandidate, lowest z (deepest state) first.
        """
        roots = self.find_roots(z0, ParityBranch.EVEN) + self.find_roots(z0, ParityBranch.ODD)
        roots.sort(key=lambda r: r.z)
        if max_states is not None:
            roots = roots[:max_states]
        return roots
