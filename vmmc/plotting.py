"""
Built-in plotting utilities for simulation results.

Provides simple one-line plotting functions for common visualizations.

Example:
    >>> from vmmc import simulate, plotting
    >>> result = simulate.patchy_discs(n_particles=100)
    >>> plotting.energy(result, show=False)
    >>> plotting.save("patchy_discs.png")
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from .simulate import SimulationResult
    from .system import ParticleState

# Try to import matplotlib, but don't fail if not available
try:
    import matplotlib.pyplot as plt

    HAS_MATPLOTLIB = True
except ImportError:
    HAS_MATPLOTLIB = False
    plt = None


def _check_matplotlib():
    """Check if matplotlib is available."""
    if not HAS_MATPLOTLIB:
        raise ImportError(
            "matplotlib is required for plotting. "
            "Install it with: pip install matplotlib"
        )


def energy(
    result: SimulationResult,
    show: bool = True,
    figsize: tuple[float, float] = (8, 5),
) -> None:
    """
    Plot energy per particle against sweeps.

    Args:
        result: SimulationResult from a simulation.
        show: Whether to display the plot immediately.
        figsize: Figure size (width, height) in inches.

    Example:
        >>> result = simulate.patchy_discs()
        >>> plotting.energy(result)
    """
    _check_matplotlib()

    fig, ax = plt.subplots(figsize=figsize)

    ax.plot(result.sweeps, result.energy_per_particle, "k-", lw=1.5)
    ax.set_xlabel("Sweeps")
    ax.set_ylabel("Energy per particle (kBT)")
    ax.set_title(f"Energy (mean: {result.mean_energy_per_particle:.3f})")
    ax.grid(True, alpha=0.3)

    plt.tight_layout()
    if show:
        plt.show()


def acceptance(
    result: SimulationResult,
    show: bool = True,
    figsize: tuple[float, float] = (8, 5),
) -> None:
    """
    Plot the running acceptance ratio and the rejections by reason.

    Args:
        result: SimulationResult from a simulation.
        show: Whether to display the plot immediately.
        figsize: Figure size (width, height) in inches.
    """
    _check_matplotlib()

    fig, axes = plt.subplots(1, 2, figsize=figsize)

    ax = axes[0]
    ax.plot(result.sweeps, result.acceptance, "b-", lw=1.5)
    ax.set_xlabel("Sweeps")
    ax.set_ylabel("Acceptance ratio")
    ax.set_ylim(0, 1)
    ax.set_title(f"Acceptance (final: {result.acceptance_ratio:.3f})")
    ax.grid(True, alpha=0.3)

    ax = axes[1]
    if result.statistics is not None:
        reasons = list(result.statistics.rejections)
        counts = [result.statistics.rejections[reason] for reason in reasons]
        ax.bar(reasons, counts, color="r", alpha=0.7)
        ax.tick_params(axis="x", rotation=45)
    ax.set_ylabel("Rejected moves")
    ax.set_title("Rejections by Reason")

    plt.tight_layout()
    if show:
        plt.show()


def snapshot(
    state: ParticleState,
    radius: float = 0.5,
    n_patches: int = 0,
    show: bool = True,
    figsize: tuple[float, float] = (8, 8),
) -> None:
    """
    Draw a two-dimensional configuration.

    Discs are drawn with their patches, if any, as small dots on the rim
    starting from the orientation vector.

    Args:
        state: Two-dimensional particle state.
        radius: Disc radius.
        n_patches: Number of patches to mark on each disc.
        show: Whether to display the plot immediately.
        figsize: Figure size (width, height) in inches.

    Example:
        >>> result = simulate.patchy_discs()
        >>> plotting.snapshot(result.final_state, n_patches=3)
    """
    _check_matplotlib()

    if state.dimension != 2:
        print("Snapshots are only available for two-dimensional systems")
        return

    fig, ax = plt.subplots(figsize=figsize)

    for position in state.positions:
        ax.add_patch(plt.Circle(position, radius, fc="lightblue", ec="k", lw=0.5))

    if n_patches > 0:
        angles = np.arctan2(state.orientations[:, 1], state.orientations[:, 0])
        for k in range(n_patches):
            theta = angles + 2.0 * np.pi * k / n_patches
            tips = state.positions + radius * np.column_stack(
                [np.cos(theta), np.sin(theta)]
            )
            ax.scatter(tips[:, 0], tips[:, 1], s=4, color="r")

    length_x, length_y = state.box.lengths
    ax.set_xlim(0, length_x)
    ax.set_ylim(0, length_y)
    ax.set_xlabel("x (σ)")
    ax.set_ylabel("y (σ)")
    ax.set_title(f"Configuration (N = {state.n_particles})")
    ax.set_aspect("equal")

    plt.tight_layout()
    if show:
        plt.show()


def summary(
    result: SimulationResult,
    show: bool = True,
    figsize: tuple[float, float] = (12, 5),
) -> None:
    """
    Plot energy and acceptance side by side.

    Args:
        result: SimulationResult from a simulation.
        show: Whether to display the plot immediately.
        figsize: Figure size (width, height) in inches.
    """
    _check_matplotlib()

    fig, axes = plt.subplots(1, 2, figsize=figsize)

    ax = axes[0]
    ax.plot(result.sweeps, result.energy_per_particle, "k-", lw=1)
    ax.set_xlabel("Sweeps")
    ax.set_ylabel("Energy per particle (kBT)")
    ax.set_title(f"Energy (mean: {result.mean_energy_per_particle:.3f})")
    ax.grid(True, alpha=0.3)

    ax = axes[1]
    ax.plot(result.sweeps, result.acceptance, "b-", lw=1)
    ax.set_xlabel("Sweeps")
    ax.set_ylabel("Acceptance ratio")
    ax.set_title(f"Acceptance (mean cluster: {result.mean_cluster_size:.2f})")
    ax.grid(True, alpha=0.3)

    plt.tight_layout()
    if show:
        plt.show()


def save(filename: str | Path, dpi: int = 150) -> None:
    """
    Save the current figure to a file.

    Args:
        filename: Output filename (e.g., "plot.png", "plot.pdf").
        dpi: Resolution in dots per inch.

    Example:
        >>> plotting.energy(result, show=False)
        >>> plotting.save("energy.png")
    """
    _check_matplotlib()
    plt.savefig(filename, dpi=dpi, bbox_inches="tight")
    print(f"Saved plot to {filename}")


def show() -> None:
    """
    Display all pending plots.

    Use this after creating plots with show=False.
    """
    _check_matplotlib()
    plt.show()
