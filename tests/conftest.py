"""
Pytest configuration for the square well solver test suite.
"""

import pytest
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from square_well_solver.eigensolver.single_well import SingleWellSolver
from square_well_solver.eigensolver.transcendental import TranscendentalRootFinder


def pytest_configure(config):
    """Called after command line options have been parsed."""
    # Add markers for test organization
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )


@pytest.fixture
def root_finder():
    """Root finder with default settings (complete-interval admission)."""
    return TranscendentalRootFinder()


@pytest.fixture
def clipping_root_finder():
    """Root finder that also searches the interval straddling z0."""
    return TranscendentalRootFinder(clip_to_domain=True)


@pytest.fixture
def solver():
    """Single-well solver at unit width."""
    return SingleWellSolver(width=1.0)


@pytest.fixture
def study_constants():
    """Reference values used across the suite."""
    return {
        'three_state_threshold': (1.5 * 3.141592653589793) ** 2,  # ~22.21
        'deep_depth': 2000.0,
        'double_well_depth': 75.0,
        'initial_guess': (75.0, 0.4),
        'target_ratio': 2.0,
    }
