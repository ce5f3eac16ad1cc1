"""
Simple high-level simulation API.

This module provides one-call drivers for the bundled models.

Example:
    >>> from vmmc import simulate
    >>> result = simulate.patchy_discs(n_particles=100, n_sweeps=100)
    >>> print(result.mean_energy_per_particle)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import numpy as np
from numpy.typing import NDArray

from .engines import (
    VMMC,
    CallbackReporter,
    EnergyReporter,
    MoveStatistics,
    TrajectoryReporter,
    VMMCConfig,
    XYZReporter,
)
from .initialise import box_length_for_density, cell_list, random_configuration
from .io import write_vmd_script
from .models import PatchyDisc, SquareWell
from .system import Box, ParticleState


@dataclass
class SimulationResult:
    """Results from a simulation run."""

    # Trajectory data
    positions: NDArray[np.floating] = field(default_factory=lambda: np.array([]))
    orientations: NDArray[np.floating] = field(default_factory=lambda: np.array([]))
    final_state: ParticleState | None = None

    # Time series, one entry per report
    sweeps: NDArray[np.integer] = field(default_factory=lambda: np.array([]))
    energy: NDArray[np.floating] = field(default_factory=lambda: np.array([]))
    energy_per_particle: NDArray[np.floating] = field(
        default_factory=lambda: np.array([])
    )
    acceptance: NDArray[np.floating] = field(default_factory=lambda: np.array([]))

    # Summary statistics
    mean_energy_per_particle: float = 0.0
    acceptance_ratio: float = 0.0
    mean_cluster_size: float = 0.0
    statistics: MoveStatistics | None = None

    # Metadata
    n_particles: int = 0
    n_sweeps: int = 0
    box_length: float = 0.0


def _run(
    engine: VMMC,
    n_sweeps: int,
    report_interval: int,
    verbose: bool,
    trajectory: str | Path | None,
) -> SimulationResult:
    """Run an engine with the standard reporters and collect results."""
    state = engine.state
    n_particles = state.n_particles

    energies = EnergyReporter(frequency=report_interval)
    frames = TrajectoryReporter(frequency=report_interval, include_orientations=True)
    engine.add_reporter(energies)
    engine.add_reporter(frames)

    if trajectory is not None:
        engine.add_reporter(
            XYZReporter(trajectory, frequency=report_interval, include_orientations=True)
        )
        write_vmd_script(
            state.box, Path(trajectory).with_suffix(".tcl"), trajectory=trajectory
        )

    if verbose:

        def progress(state: ParticleState, sweep: int, info: dict) -> None:
            print(
                f"sweeps = {sweep:9.4e}, energy = {info['energy'] / n_particles:5.4f}"
            )

        engine.add_reporter(CallbackReporter(progress, frequency=report_interval))

    engine.run(n_sweeps)

    energy = energies.energy
    stats = engine.statistics
    result = SimulationResult(
        positions=frames.positions,
        orientations=frames.orientations,
        final_state=state.copy(),
        sweeps=energies.sweeps,
        energy=energy,
        energy_per_particle=energy / n_particles,
        acceptance=energies.acceptance,
        mean_energy_per_particle=(
            float(np.mean(energy)) / n_particles if len(energy) else 0.0
        ),
        acceptance_ratio=stats.acceptance_ratio,
        mean_cluster_size=stats.mean_cluster_size,
        statistics=stats,
        n_particles=n_particles,
        n_sweeps=n_sweeps,
        box_length=float(state.box.lengths[0]),
    )

    if verbose:
        print("\nResults:")
        print(f"  Mean energy per particle: {result.mean_energy_per_particle:.4f}")
        print(f"  Acceptance ratio: {result.acceptance_ratio:.3f}")
        print(f"  Mean accepted cluster size: {result.mean_cluster_size:.3f}")
        print("\nComplete!")

    return result


def patchy_discs(
    n_particles: int = 200,
    density: float = 0.2,
    n_patches: int = 3,
    interaction_energy: float = 8.0,
    patch_range: float = 0.1,
    n_sweeps: int = 200,
    report_interval: int = 10,
    seed: int = 42,
    verbose: bool = True,
    trajectory: str | Path | None = None,
) -> SimulationResult:
    """
    Run a patchy disc simulation.

    Hard discs of unit diameter with attractive patches self-assemble into
    networks (three patches) or chains (two patches) when the bond energy is
    several kBT. Collective cluster moves let bonded aggregates diffuse
    without breaking.

    Args:
        n_particles: Number of discs (default: 200).
        density: Area fraction (default: 0.2).
        n_patches: Patches per disc (default: 3).
        interaction_energy: Bond energy in kBT (default: 8.0).
        patch_range: Patch tip interaction distance (default: 0.1).
        n_sweeps: Number of sweeps (default: 200).
        report_interval: Sweeps between reports (default: 10).
        seed: Random seed for reproducibility (default: 42).
        verbose: Print progress (default: True).
        trajectory: Optional XYZ trajectory path; a VMD script is written
            next to it.

    Returns:
        SimulationResult with trajectory and energy data.

    Example:
        >>> result = patchy_discs(n_particles=100, n_sweeps=50)
        >>> print(f"Acceptance: {result.acceptance_ratio:.3f}")
    """
    rng = np.random.default_rng(seed)

    box = Box.square(box_length_for_density(n_particles, density, 2))
    state = random_configuration(n_particles, box, rng=rng)
    cells = cell_list(state, 1.0 + patch_range)
    model = PatchyDisc(
        state,
        cells,
        n_patches=n_patches,
        interaction_energy=interaction_energy,
        patch_range=patch_range,
    )
    config = VMMCConfig(
        max_trial_translation=0.15,
        max_trial_rotation=0.2,
        prob_translate=0.5,
        reference_radius=0.5,
        max_interactions=12,
    )
    engine = VMMC(state, model, config, rng=rng)

    if verbose:
        print(
            f"Patchy discs: N={n_particles}, density={density}, "
            f"patches={n_patches}, epsilon={interaction_energy}"
        )

    return _run(engine, n_sweeps, report_interval, verbose, trajectory)


def square_well_fluid(
    n_particles: int = 100,
    density: float = 0.3,
    dimension: int = 2,
    interaction_energy: float = 2.0,
    interaction_range: float = 1.5,
    n_sweeps: int = 200,
    report_interval: int = 10,
    seed: int = 42,
    verbose: bool = True,
    trajectory: str | Path | None = None,
) -> SimulationResult:
    """
    Run a square-well fluid simulation.

    Args:
        n_particles: Number of particles (default: 100).
        density: Area or volume fraction (default: 0.3).
        dimension: 2 or 3 (default: 2).
        interaction_energy: Well depth in kBT (default: 2.0).
        interaction_range: Well edge in particle diameters (default: 1.5).
        n_sweeps: Number of sweeps (default: 200).
        report_interval: Sweeps between reports (default: 10).
        seed: Random seed for reproducibility (default: 42).
        verbose: Print progress (default: True).
        trajectory: Optional XYZ trajectory path.

    Returns:
        SimulationResult with trajectory and energy data.
    """
    rng = np.random.default_rng(seed)

    length = box_length_for_density(n_particles, density, dimension)
    box = Box.orthorhombic(*([length] * dimension))
    state = random_configuration(n_particles, box, rng=rng, is_isotropic=True)
    cells = cell_list(state, interaction_range)
    model = SquareWell(
        state,
        cells,
        interaction_energy=interaction_energy,
        interaction_range=interaction_range,
    )
    # Trial poses may overlap several neighbors on top of the well partners
    config = VMMCConfig(max_interactions=20 if dimension == 2 else 60)
    engine = VMMC(state, model, config, rng=rng)

    if verbose:
        print(
            f"Square-well fluid: N={n_particles}, d={dimension}, "
            f"density={density}, epsilon={interaction_energy}"
        )

    return _run(engine, n_sweeps, report_interval, verbose, trajectory)
