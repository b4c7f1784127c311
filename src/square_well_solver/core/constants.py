"""
Numerical conventions and calibration constants for the square well solver.

All quantities are in natural units with hbar^2/(2m) = 1, the well half-width
as length unit, and energies measured from the continuum threshold at 0
(bound states are negative, between -V0 and 0).

Tunable values (boundary epsilon, tunneling prefactor, optimizer settings)
are loaded from constants.json if available, otherwise default values are
used.
"""

import json
from pathlib import Path
from typing import Dict, Any, Tuple

# =============================================================================
# Load Tunable Constants from JSON
# =============================================================================

# Path to constants.json (same directory as this file)
_CONSTANTS_JSON_PATH = Path(__file__).parent / "constants.json"

# Default values (used if constants.json is missing or incomplete)
_DEFAULT_CONSTANTS: Dict[str, Any] = {
    "boundary_epsilon": 1.0e-3,  # margin kept from tan/cot poles and from z0
    "root_xtol": 1.0e-12,  # absolute tolerance of the bracketed solver
    "max_intervals": 10000,  # hard cap on searched intervals per parity
    "tunneling_prefactor": 2.0,  # C in Delta = C |E1| exp(-kappa d)
    "decay_energy_factor": 2.0,  # kappa = sqrt(-factor * E1)
    "depth_floor": 25.0,  # optimizer rejects V0 below this
    "separation_floor": 0.05,  # optimizer rejects d below this
    "infeasible_penalty": 1.0e10,  # objective value for infeasible points
    "target_ratio": 2.0,  # default E23/E12 target
    "initial_depth": 75.0,  # default optimizer start, V0
    "initial_separation": 0.4,  # default optimizer start, d
    "optimizer_max_iter": 5000,
    "optimizer_xatol": 1.0e-8,
    "optimizer_fatol": 1.0e-8,
}


def load_constants_from_json() -> Dict[str, Any]:
    """
    Load tunable constants from constants.json.

    If the file doesn't exist or is invalid, returns default values.

    Returns:
        Dictionary with constant names as keys and values.
    """
    if _CONSTANTS_JSON_PATH.exists():
        try:
            with open(_CONSTANTS_JSON_PATH, 'r', encoding='utf-8') as f:
                loaded = json.load(f)
                # Merge with defaults to ensure all keys exist
                result = _DEFAULT_CONSTANTS.copy()
                result.update(loaded)
                return result
        except (json.JSONDecodeError, IOError) as e:
            print(f"Warning: Failed to load constants.json: {e}. Using defaults.")
            return _DEFAULT_CONSTANTS.copy()
    else:
        return _DEFAULT_CONSTANTS.copy()


def save_constants_to_json(constants: Dict[str, Any]) -> None:
    """
    Save tunable constants to constants.json.

    Args:
        constants: Dictionary with constant names and values. Keys not
                   present fall back to defaults on the next load.
    """
    with open(_CONSTANTS_JSON_PATH, 'w', encoding='utf-8') as f:
        json.dump(constants, f, indent=4)


def get_constants_json_path() -> Path:
    """Return the path to the constants.json file."""
    return _CONSTANTS_JSON_PATH


# Load constants at module import time
_LOADED_CONSTANTS = load_constants_from_json()

# =============================================================================
# Unit Convention (fixed, not configurable)
# =============================================================================
#
# hbar^2/(2m) = 1. For a well of depth V0 spanning -a < x < a (half-width a):
#
#     k  = sqrt(E + V0)          wavenumber inside the well
#     z  = k * a                 dimensionless root variable
#     z0 = a * sqrt(V0)          dimensionless depth, roots lie in (0, z0)
#     E  = -V0 + (z / a)^2       inverse conversion
#
# Even states:  z tan(z)  = sqrt(z0^2 - z^2)
# Odd states:  -z cot(z)  = sqrt(z0^2 - z^2)
#
# Both the equations and the conversion use this single convention.

HBAR2_OVER_2M: float = 1.0

# =============================================================================
# Root Finder
# =============================================================================

# Margin kept from the interval ends, where tan/cot diverge and where
# sqrt(z0^2 - z^2) vanishes.
BOUNDARY_EPSILON: float = float(_LOADED_CONSTANTS["boundary_epsilon"])

ROOT_XTOL: float = float(_LOADED_CONSTANTS["root_xtol"])

MAX_INTERVALS: int = int(_LOADED_CONSTANTS["max_intervals"])

# =============================================================================
# Double-Well Tight-Binding Model
# =============================================================================
# Status: PHENOMENOLOGICAL (calibration knob, not a derived law)
#
# Splitting of the ground doublet:
#     Delta = TUNNELING_PREFACTOR * |E1| * exp(-kappa * d)
#     kappa = sqrt(-DECAY_ENERGY_FACTOR * E1)
#
# The prefactor shifts the optimized (V0, d) directly. With C = 2.0 the
# target ratio 2.0 is reached near V0 = 75, d = 0.34.

TUNNELING_PREFACTOR: float = float(_LOADED_CONSTANTS["tunneling_prefactor"])
DECAY_ENERGY_FACTOR: float = float(_LOADED_CONSTANTS["decay_energy_factor"])

# =============================================================================
# Ratio Optimizer
# =============================================================================

DEPTH_FLOOR: float = float(_LOADED_CONSTANTS["depth_floor"])
SEPARATION_FLOOR: float = float(_LOADED_CONSTANTS["separation_floor"])
INFEASIBLE_PENALTY: float = float(_LOADED_CONSTANTS["infeasible_penalty"])

DEFAULT_TARGET_RATIO: float = float(_LOADED_CONSTANTS["target_ratio"])
DEFAULT_INITIAL_GUESS: Tuple[float, float] = (
    float(_LOADED_CONSTANTS["initial_depth"]),
    float(_LOADED_CONSTANTS["initial_separation"]),
)

OPTIMIZER_MAX_ITER: int = int(_LOADED_CONSTANTS["optimizer_max_iter"])
OPTIMIZER_XATOL: float = float(_LOADED_CONSTANTS["optimizer_xatol"])
OPTIMIZER_FATOL: float = float(_LOADED_CONSTANTS["optimizer_fatol"])

# =============================================================================
# Reference Values
# =============================================================================

# Infinite-well level ratios E_n/E_1 = n^2, measured from the well floor
INFINITE_WELL_RATIOS: Tuple[float, float] = (4.0, 9.0)

# Spacing ratio (E3-E2)/(E2-E1) of the infinite well
INFINITE_WELL_SPACING_RATIO: float = 5.0 / 3.0
