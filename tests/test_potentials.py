"""
Tests for potential functions.
"""

import numpy as np
import pytest
from numpy.testing import assert_allclose

from square_well_solver import solve_single_well
from square_well_solver.core.parameters import WellParameters
from square_well_solver.potentials.square_well import (
    DoubleSquareWellPotential,
    SquareWellPotential,
)


class TestSquareWellPotential:
    """Test the single square well."""

    def test_creation(self):
        """Test potential creation."""
        pot = SquareWellPotential(V0=30.0, a=2.0)

        assert pot.V0 == 30.0
        assert pot.a == 2.0
        assert pot.center == 0.0

    def test_negative_V0_raises(self):
        """Test that negative V0 raises error."""
        with pytest.raises(ValueError):
            SquareWellPotential(V0=-1.0)

    def test_non_positive_width_raises(self):
        with pytest.raises(ValueError):
            SquareWellPotential(V0=1.0, a=0.0)

    def test_inside_and_outside(self):
        """Test -V0 for |x| < a and 0 outside."""
        pot = SquareWellPotential(V0=30.0, a=1.0)

        assert_allclose(pot(0.0), -30.0)
        assert_allclose(pot(0.99), -30.0)
        assert_allclose(pot(-0.99), -30.0)
        assert_allclose(pot(1.01), 0.0)
        assert_allclose(pot(-3.0), 0.0)

    def test_symmetric(self):
        """Test that the potential is even in x."""
        pot = SquareWellPotential(V0=10.0, a=1.3)
        x = np.linspace(0, 2, 101)
        assert_allclose(pot(x), pot(-x))

    def test_edges(self):
        assert_allclose(SquareWellPotential(V0=1.0, a=2.0).edges, (-2.0, 2.0))
        assert_allclose(SquareWellPotential(V0=1.0, a=0.5, center=1.0).edges, (0.5, 1.5))

    def test_shifted_center(self):
        pot = SquareWellPotential(V0=4.0, a=0.5, center=2.0)
        assert_allclose(pot([1.6, 2.0, 2.4]), [-4.0, -4.0, -4.0])
        assert_allclose(pot([0.0, 1.4, 2.6]), [0.0, 0.0, 0.0])

    def test_drawn_width_matches_solver(self):
        """A deep well's ground level sits at (pi / L)^2 above the floor, L the drawn width."""
        depth = 20000.0
        pot = SquareWellPotential(V0=depth, a=1.0)
        left, right = pot.edges
        E1 = solve_single_well(depth, width=pot.a, max_states=1)[0]
        assert_allclose(E1 + depth, (np.pi / (right - left)) ** 2, rtol=0.02)


class TestDoubleSquareWellPotential:
    """Test the double square well."""

    def test_negative_separation_raises(self):
        with pytest.raises(ValueError):
            DoubleSquareWellPotential(V0=10.0, d=-0.1)

    def test_negative_V0_raises(self):
        with pytest.raises(ValueError):
            DoubleSquareWellPotential(V0=-10.0, d=0.4)

    def test_barrier_and_wells(self):
        """Test barrier at the center and wells of width 2a on either side."""
        pot = DoubleSquareWellPotential(V0=75.0, d=0.4, a=1.0)

        assert_allclose(pot(0.0), 0.0)
        assert_allclose(pot(0.19), 0.0)
        assert_allclose(pot(0.21), -75.0)
        assert_allclose(pot(-2.19), -75.0)
        assert_allclose(pot(2.21), 0.0)

    def test_well_centers(self):
        pot = DoubleSquareWellPotential(V0=75.0, d=0.4, a=1.0)
        assert_allclose(pot.well_centers, [-1.2, 1.2])
        assert_allclose(pot(pot.well_centers), [-75.0, -75.0])

    def test_wells_are_single_wells(self):
        pot = DoubleSquareWellPotential(V0=75.0, d=0.4, a=0.5)
        left, right = pot.wells
        assert isinstance(left, SquareWellPotential)
        assert_allclose(left.edges, (-1.2, -0.2))
        assert_allclose(right.edges, (0.2, 1.2))

    def test_extent(self):
        assert_allclose(DoubleSquareWellPotential(V0=1.0, d=0.5, a=2.0).extent, 8.5)

    def test_zero_separation_merges_wells(self):
        """With d = 0 the two wells form one well of width 4a (except x = 0)."""
        pot = DoubleSquareWellPotential(V0=5.0, d=0.0, a=0.5)
        assert_allclose(pot(np.array([-0.9, -0.5, 0.5, 0.9])), [-5.0, -5.0, -5.0, -5.0])
        assert_allclose(pot(np.array([-1.5, 1.5])), [0.0, 0.0])
        assert_allclose(pot(0.0), 0.0)

    def test_grid_covers_wells(self):
        pot = DoubleSquareWellPotential(V0=10.0, d=0.4, a=1.0)
        x = pot.grid(n_points=501, padding=0.5)

        assert len(x) == 501
        assert_allclose([x[0], x[-1]], [-2.7, 2.7])
        assert np.all(pot(x[[0, -1]]) == 0.0)
        assert np.sum(pot(x) < 0) > 0

    def test_from_parameters(self):
        params = WellParameters(depth=40.0, width=0.5, separation=0.3)
        pot = DoubleSquareWellPotential.from_parameters(params)

        assert pot.V0 == 40.0
        assert pot.a == 0.5
        assert pot.d == 0.3
        assert_allclose(pot.extent, params.total_extent)
