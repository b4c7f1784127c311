"""
Tests for the tight-binding double-well approximation.
"""

import math

import numpy as np
import pytest
from numpy.testing import assert_allclose

from square_well_solver import solve_double_well, solve_single_well
from square_well_solver.eigensolver.double_well import DoubleWellApproximator


@pytest.fixture
def approximator():
    return DoubleWellApproximator(width=1.0)


@pytest.mark.unit
class TestDoubleWellModel:
    """Test the forward model at a few fixed points."""

    def test_invalid_constants_raise(self):
        with pytest.raises(ValueError):
            DoubleWellApproximator(prefactor=0.0)
        with pytest.raises(ValueError):
            DoubleWellApproximator(decay_factor=-1.0)

    def test_three_sorted_levels(self, study_constants):
        energies = solve_double_well(study_constants['double_well_depth'], 0.4)
        assert len(energies) == 3
        assert energies == sorted(energies)
        for E in energies:
            assert -study_constants['double_well_depth'] < E < 0

    def test_levels_follow_formula(self, approximator):
        depth, separation = 75.0, 0.4
        E1, E2 = solve_single_well(depth, 1.0, 2)

        levels = approximator.levels(depth, separation)
        kappa = math.sqrt(-2.0 * E1)
        delta = 2.0 * abs(E1) * math.exp(-kappa * separation)

        assert levels.single_well == (E1, E2)
        assert_allclose(levels.kappa, kappa)
        assert_allclose(levels.splitting, delta)
        assert_allclose(levels.energies, sorted([E1 - delta / 2, E1 + delta / 2, E2]))
        assert_allclose(levels.doublet_gap, delta)

    def test_ground_doublet_symmetric_about_E1(self, approximator):
        levels = approximator.levels(75.0, 0.5)
        E1 = levels.single_well[0]
        assert_allclose(0.5 * (levels.energies[0] + levels.energies[1]), E1)

    def test_second_state_unsplit(self, approximator):
        E2 = solve_single_well(75.0, 1.0, 2)[1]
        assert_allclose(approximator.solve(75.0, 0.6)[2], E2)

    def test_antibonding_above_E2_is_resorted(self, approximator):
        """Small separations push E1 + Delta/2 past E2; output stays ascending."""
        levels = approximator.levels(75.0, 0.05)
        E1, E2 = levels.single_well
        assert E1 + 0.5 * levels.splitting > E2
        assert_allclose(levels.energies[1], E2)
        assert list(levels.energies) == sorted(levels.energies)

    def test_n_states_truncation(self, approximator):
        full = approximator.solve(75.0, 0.4, n_states=3)
        assert approximator.solve(75.0, 0.4, n_states=2) == full[:2]
        assert approximator.solve(75.0, 0.4, n_states=0) == []
        with pytest.raises(ValueError):
            approximator.solve(75.0, 0.4, n_states=-1)

    def test_width_is_passed_through(self):
        approx = DoubleWellApproximator(width=2.0)
        assert approx.width == 2.0
        E1 = solve_single_well(75.0, 2.0, 1)[0]
        assert_allclose(approx.levels(75.0, 0.4).single_well[0], E1)


@pytest.mark.unit
class TestInfeasiblePoints:
    """Points outside the model's domain give an empty result."""

    @pytest.mark.parametrize("separation", [0.0, -0.3])
    def test_non_positive_separation(self, approximator, separation):
        assert solve_double_well(75.0, separation) == []
        assert approximator.levels(75.0, separation) is None

    def test_too_few_single_well_states(self, approximator):
        """V0 = 5 binds a single state."""
        assert len(solve_single_well(5.0, 1.0, 3)) == 1
        assert solve_double_well(5.0, 0.4) == []
        assert approximator.base_states(5.0) is None

    def test_no_bound_states(self):
        assert solve_double_well(0.0, 0.4) == []
        assert solve_double_well(-10.0, 0.4) == []


@pytest.mark.unit
class TestSplittingVsSeparation:
    """Tunneling splitting decays with barrier width."""

    def test_monotonic_decrease(self, approximator):
        separations = np.linspace(0.3, 1.5, 25)
        splittings = [approximator.levels(75.0, d).splitting for d in separations]
        assert all(b < a for a, b in zip(splittings, splittings[1:]))

    def test_doublet_collapses_for_wide_barrier(self, approximator):
        E1 = approximator.base_states(75.0)[0]
        assert approximator.splitting(E1, 10.0) < 1e-40

    def test_doublet_gap_shrinks(self, approximator):
        gaps = [approximator.levels(75.0, d).doublet_gap for d in (0.3, 0.6, 1.2)]
        assert gaps[0] > gaps[1] > gaps[2] > 0

    def test_decay_constant(self, approximator):
        assert_allclose(approximator.decay_constant(-50.0), 10.0)
