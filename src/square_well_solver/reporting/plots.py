"""
Matplotlib figures for the square well study.

Each function returns a Figure and leaves saving (and the choice of
backend) to the caller.
"""

from typing import Optional, Sequence

import matplotlib.pyplot as plt
from matplotlib.figure import Figure
import numpy as np

from square_well_solver.analysis.depth_scan import energy_vs_depth
from square_well_solver.analysis.spacing import spacing_ratios
from square_well_solver.eigensolver.double_well import DoubleWellApproximator
from square_well_solver.optimization.ratio_optimizer import ratio_map
from square_well_solver.potentials.square_well import DoubleSquareWellPotential

_LEVEL_COLORS = ("tab:blue", "tab:red", "tab:green")
_LEVEL_LABELS = ("E$_1$ (ground state)", "E$_2$ (first excited)", "E$_3$ (second excited)")


def plot_energy_levels(depth_values: Sequence[float], a: float = 1.0) -> Figure:
    """Energy levels of the single finite square well vs well depth."""
    depths, E = energy_vs_depth(depth_values, width=a, levels=3)

    fig, ax = plt.subplots(figsize=(8, 6))
    for i in range(3):
        ax.plot(depths, E[:, i], label=_LEVEL_LABELS[i], linewidth=2, color=_LEVEL_COLORS[i])

    ax.set_xlabel("Well Depth V$_0$ ($\\hbar^2/2ma^2$)")
    ax.set_ylabel("Energy ($\\hbar^2/2ma^2$)")
    ax.set_title("Energy Levels of Finite Square Well vs Well Depth")
    ax.legend(loc="upper right")
    return fig


def plot_energy_differences(depth_values: Sequence[float], a: float = 1.0) -> Figure:
    """Level spacings E12 and E23 vs well depth."""
    depths, E = energy_vs_depth(depth_values, width=a, levels=3)
    E12, E23, _ = spacing_ratios(E)

    fig, ax = plt.subplots(figsize=(8, 6))
    ax.plot(depths, E12, label="E$_2$ - E$_1$", linewidth=2, color="tab:blue")
    ax.plot(depths, E23, label="E$_3$ - E$_2$", linewidth=2, color="tab:red")

    ax.set_xlabel("Well Depth V$_0$ ($\\hbar^2/2ma^2$)")
    ax.set_ylabel("Energy Difference ($\\hbar^2/2ma^2$)")
    ax.set_title("Energy Level Spacings vs Well Depth")
    ax.legend(loc="upper left")
    return fig


def plot_energy_ratio(depth_values: Sequence[float], a: float = 1.0) -> Figure:
    """Spacing ratio E23/E12 vs well depth, with reference lines at 1 and 2."""
    depths, E = energy_vs_depth(depth_values, width=a, levels=3)
    _, _, ratio = spacing_ratios(E)

    fig, ax = plt.subplots(figsize=(8, 6))
    ax.plot(depths, ratio, linewidth=2, color="tab:purple", label="E$_{23}$/E$_{12}$")
    ax.axhline(2.0, linestyle="--", color="black", linewidth=2, label="Ratio = 2")
    ax.axhline(1.0, linestyle="--", color="gray", alpha=0.5, linewidth=1, label="Ratio = 1")

    ax.set_xlabel("Well Depth V$_0$ ($\\hbar^2/2ma^2$)")
    ax.set_ylabel("Ratio E$_{23}$/E$_{12}$")
    ax.set_title("Ratio of Energy Spacings vs Well Depth")
    ax.set_ylim(0.5, 2.5)
    ax.legend(loc="lower right")
    return fig


def plot_double_well_contour(
    depths: Sequence[float],
    separations: Sequence[float],
    a: float = 1.0,
    target_ratio: float = 2.0,
) -> Figure:
    """Filled contour of E23/E12 over (V0, d) with the target level marked."""
    ratios = ratio_map(depths, separations, width=a)

    fig, ax = plt.subplots(figsize=(8, 6))
    mesh = ax.contourf(depths, separations, np.clip(ratios, 0.0, 2.0 * target_ratio), levels=40)
    fig.colorbar(mesh, ax=ax, label="E$_{23}$/E$_{12}$")
    if np.any(np.isfinite(ratios)):
        ax.contour(depths, separations, ratios, levels=[target_ratio], colors="white", linewidths=2)

    ax.set_xlabel("Well Depth V$_0$")
    ax.set_ylabel("Separation d / a")
    ax.set_title(f"Double Well Spacing Ratio (target = {target_ratio:g})")
    return fig


def plot_double_well_configuration(
    depth: float,
    separation: float,
    a: float = 1.0,
    approximator: Optional[DoubleWellApproximator] = None,
) -> Optional[Figure]:
    """
    Potential profile of the double well with its three levels drawn in.

    Returns:
        Figure, or None when the parameters give no valid spectrum.
    """
    approximator = approximator or DoubleWellApproximator(width=a)
    levels = approximator.levels(depth, separation)
    if levels is None:
        return None

    potential = DoubleSquareWellPotential(V0=depth, d=separation, a=a)
    x = potential.grid()

    fig, ax = plt.subplots(figsize=(8, 6))
    ax.plot(x, potential(x), color="black", linewidth=2, label="V(x)")
    for i, energy in enumerate(levels.energies):
        ax.hlines(energy, x[0], x[-1], colors=_LEVEL_COLORS[i], linestyles="--",
                  label=f"E$_{i + 1}$ = {energy:.3f}")

    ax.set_xlabel("x / a")
    ax.set_ylabel("Energy ($\\hbar^2/2ma^2$)")
    ax.set_title(f"Double Well: V$_0$ = {depth:.2f}, d = {separation:.3f} a")
    ax.legend(loc="lower right")
    return fig
