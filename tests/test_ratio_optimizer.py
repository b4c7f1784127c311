"""
Tests for the double-well ratio optimizer.
"""

import math

import numpy as np
import pytest
from numpy.testing import assert_allclose

from square_well_solver import optimize_double_well
from square_well_solver.analysis.spacing import spacing_pair
from square_well_solver.core.constants import INFEASIBLE_PENALTY
from square_well_solver.eigensolver.double_well import solve_double_well
from square_well_solver.optimization.ratio_optimizer import (
    OptimizationResult,
    RatioOptimizer,
    double_well_objective,
    ratio_map,
)


@pytest.mark.unit
class TestObjective:
    """Test the objective and its penalty region."""

    def test_invalid_settings_raise(self):
        with pytest.raises(ValueError):
            RatioOptimizer(target_ratio=0.0)
        with pytest.raises(ValueError):
            RatioOptimizer(separation_floor=0.0)
        with pytest.raises(ValueError):
            RatioOptimizer(max_iter=0)

    def test_matches_model_ratio(self):
        energies = solve_double_well(75.0, 0.4)
        pair = spacing_pair(energies)
        assert_allclose(double_well_objective(75.0, 0.4), abs(pair.ratio - 2.0))

    def test_other_target(self):
        ratio = RatioOptimizer().ratio(75.0, 0.4)
        assert_allclose(double_well_objective(75.0, 0.4, target_ratio=3.0), abs(ratio - 3.0))

    @pytest.mark.parametrize("params", [(20.0, 0.4), (75.0, 0.01), (24.9, 0.049)])
    def test_outside_floors_is_penalized(self, params):
        optimizer = RatioOptimizer()
        assert optimizer.objective(list(params)) == INFEASIBLE_PENALTY

    def test_infeasible_model_is_penalized(self):
        """Relaxed floors expose the model's own infeasible region."""
        optimizer = RatioOptimizer(depth_floor=0.0)
        assert optimizer.objective([5.0, 0.4]) == INFEASIBLE_PENALTY
        assert optimizer.ratio(5.0, 0.4) is None

    def test_objective_always_finite(self):
        optimizer = RatioOptimizer()
        for depth in (-5.0, 0.0, 26.0, 75.0, 500.0):
            for sep in (-1.0, 0.0, 0.05, 0.4, 3.0):
                value = optimizer.objective([depth, sep])
                assert math.isfinite(value)
                assert value >= 0


@pytest.mark.integration
class TestOptimization:
    """Run Nelder-Mead from the default starting point."""

    def test_reaches_target(self, study_constants):
        result = optimize_double_well(
            initial_guess=study_constants['initial_guess'],
            target_ratio=study_constants['target_ratio'],
        )

        assert isinstance(result, OptimizationResult)
        assert result.residual < 1e-3
        assert result.depth >= 25.0
        assert result.separation >= 0.05
        assert_allclose(result.ratio, 2.0, atol=1e-3)

        E1, E2, E3 = result.energies
        assert_allclose((E3 - E2) / (E2 - E1), 2.0, atol=1e-3)

    def test_unpacks_as_triple(self, study_constants):
        result = optimize_double_well(study_constants['initial_guess'])
        depth, separation, residual = result
        assert (depth, separation, residual) == (result.depth, result.separation, result.residual)
        assert 0.05 <= separation < 1.0

    def test_metadata_and_summary(self):
        result = optimize_double_well((75.0, 0.4))
        assert result.function_evaluations >= result.iterations > 0
        assert result.time_seconds >= 0
        assert result.scipy_result is not None
        assert result.parameters.depth == result.depth

        text = result.summary()
        assert "DOUBLE-WELL SPACING RATIO OPTIMIZATION" in text
        assert "TARGET RATIO: 2.0000" in text

    def test_non_convergence_warns(self):
        with pytest.warns(RuntimeWarning):
            result = optimize_double_well((75.0, 0.4), max_iter=5)
        assert not result.converged
        assert math.isfinite(result.residual)
        assert result.residual <= double_well_objective(75.0, 0.4)

    def test_start_inside_penalty_region(self):
        """A start below the depth floor never leaves the penalty plateau."""
        with pytest.warns(RuntimeWarning, match="No admissible point"):
            result = optimize_double_well((10.0, 0.4))

        assert not result.converged
        assert result.residual == INFEASIBLE_PENALTY
        assert result.ratio is None
        assert result.energies == []
        assert "no valid three-level spectrum" in result.summary()

    def test_log_file_written(self, tmp_path):
        log_path = tmp_path / "optimization.log"
        optimize_double_well((75.0, 0.4), log_file=str(log_path))

        content = log_path.read_text(encoding="utf-8")
        assert content.startswith("=" * 70)
        assert "*** BEST ***" in content
        assert "CONVERGENCE" in content

    def test_verbose_prints_progress(self, capsys):
        optimize_double_well((75.0, 0.4), max_iter=20, verbose=True)
        out = capsys.readouterr().out
        assert "Target E23/E12 = 2.0" in out
        assert "Eval" in out

    def test_bad_initial_guess_raises(self):
        with pytest.raises(ValueError):
            RatioOptimizer().optimize((75.0, 0.4, 1.0))


@pytest.mark.unit
class TestRatioMap:

    def test_shape_and_infeasible_cells(self):
        depths = [5.0, 50.0, 75.0]
        separations = [0.2, 0.4]
        grid = ratio_map(depths, separations)

        assert grid.shape == (2, 3)
        assert np.all(np.isnan(grid[:, 0]))
        assert np.all(np.isfinite(grid[:, 1:]))

    def test_values_match_optimizer_ratio(self):
        grid = ratio_map([75.0], [0.4])
        assert_allclose(grid[0, 0], RatioOptimizer().ratio(75.0, 0.4))
