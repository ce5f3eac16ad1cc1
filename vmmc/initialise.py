"""Initial particle configurations."""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .errors import ConfigurationError
from .neighborlists import CellList
from .system import Box, ParticleState


def box_length_for_density(
    n_particles: int, density: float, dimension: int = 2
) -> float:
    """
    Get the edge of a square or cubic box holding unit-diameter particles
    at a given packing fraction.

    Args:
        n_particles: Number of particles.
        density: Area (2D) or volume (3D) fraction.
        dimension: 2 or 3.

    Returns:
        Box edge length.
    """
    if not density > 0:
        raise ConfigurationError(f"Density must be positive, got {density}")
    if dimension == 2:
        return math.sqrt(n_particles * math.pi / (4.0 * density))
    if dimension == 3:
        return (n_particles * math.pi / (6.0 * density)) ** (1.0 / 3.0)
    raise ConfigurationError(f"Dimension must be 2 or 3, got {dimension}")


def cell_list(state: ParticleState, minimum_cell_size: float) -> CellList:
    """Create a cell list over the state's box and insert every particle."""
    cells = CellList()
    cells.initialise(state.box.lengths, minimum_cell_size)
    cells.build(state.positions)
    return cells


def random_orientations(
    rng: np.random.Generator, n_particles: int, dimension: int
) -> NDArray[np.floating]:
    """Draw unit vectors uniformly on the circle or sphere."""
    if dimension == 2:
        angles = 2.0 * np.pi * rng.random(n_particles)
        return np.column_stack([np.cos(angles), np.sin(angles)])

    vectors = rng.normal(size=(n_particles, dimension))
    return vectors / np.linalg.norm(vectors, axis=1, keepdims=True)


def random_configuration(
    n_particles: int,
    box: Box,
    rng: np.random.Generator | None = None,
    seed: int | None = None,
    diameter: float = 1.0,
    is_isotropic: ArrayLike | bool = False,
    max_attempts: int = 100000,
) -> ParticleState:
    """
    Place hard particles at random without overlaps.

    Particles are inserted one at a time at uniformly random positions and
    re-drawn until they overlap none of the particles already placed.
    Orientations are uniformly random.

    Args:
        n_particles: Number of particles.
        box: Simulation box.
        rng: Random generator. Defaults to numpy.random.default_rng(seed).
        seed: Seed for the default generator.
        diameter: Minimum allowed center-to-center distance.
        is_isotropic: Per-particle isotropy flags, or one flag for all.
        max_attempts: Insertion attempts per particle before giving up.

    Returns:
        New ParticleState.

    Raises:
        RuntimeError: If a particle cannot be placed within max_attempts.
    """
    if n_particles < 1:
        raise ConfigurationError(f"n_particles must be >= 1, got {n_particles}")
    if rng is None:
        rng = np.random.default_rng(seed)

    dimension = box.dimension
    positions = np.zeros((n_particles, dimension), dtype=np.float64)

    # The cell list needs cells no larger than half the box
    cells = None
    if diameter <= 0.5 * box.lengths.min():
        cells = CellList()
        cells.initialise(box.lengths, diameter)

    for i in range(n_particles):
        for _ in range(max_attempts):
            trial = rng.random(dimension) * box.lengths
            if cells is not None:
                others = list(cells.candidates(trial))
            else:
                others = list(range(i))
            if not others:
                break
            distances = box.minimum_image_distance(positions[others], trial)
            if np.all(distances >= diameter):
                break
        else:
            raise RuntimeError(
                f"Could not place particle {i} after {max_attempts} attempts; "
                f"the box is probably too dense"
            )

        positions[i] = box.wrap_positions(trial)
        if cells is not None:
            cells.insert(positions[i])

    return ParticleState.create(
        positions,
        box,
        orientations=random_orientations(rng, n_particles, dimension),
        is_isotropic=is_isotropic,
    )
