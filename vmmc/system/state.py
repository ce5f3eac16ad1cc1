"""Particle state representation."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ..errors import ConfigurationError
from .box import Box


@dataclass(frozen=True)
class Particle:
    """
    Read-only view of a single particle.

    Attributes:
        index: Particle index, stable for the lifetime of the simulation.
        position: Position vector, shape (d,).
        orientation: Orientation unit vector, shape (d,).
        is_isotropic: Whether the particle's potential ignores orientation.
    """

    index: int
    position: NDArray[np.floating]
    orientation: NDArray[np.floating]
    is_isotropic: bool


@dataclass
class ParticleState:
    """
    Committed configuration of a particle system.

    A plain data container: the engine only writes to it when an accepted
    cluster move is committed. Orientations are carried for every particle,
    including isotropic ones, so that all particles are handled uniformly.

    Attributes:
        positions: Particle positions, shape (N, d).
        orientations: Orientation unit vectors, shape (N, d).
        box: Simulation box.
        is_isotropic: Per-particle isotropy flags, shape (N,).
        step: Number of trial moves attempted on this state.
    """

    positions: NDArray[np.floating]
    orientations: NDArray[np.floating]
    box: Box
    is_isotropic: NDArray[np.bool_]
    step: int = 0

    def __post_init__(self) -> None:
        """Validate and convert arrays."""
        self.positions = np.asarray(self.positions, dtype=np.float64)
        self.orientations = np.asarray(self.orientations, dtype=np.float64)
        self.is_isotropic = np.asarray(self.is_isotropic, dtype=bool)

        n_particles = len(self.positions)
        dimension = self.box.dimension
        if n_particles == 0:
            raise ConfigurationError("System must contain at least one particle")
        if self.positions.shape != (n_particles, dimension):
            raise ConfigurationError(
                f"positions shape {self.positions.shape} incompatible with "
                f"{dimension}-dimensional box"
            )
        if self.orientations.shape != (n_particles, dimension):
            raise ConfigurationError(
                f"orientations shape {self.orientations.shape} incompatible with "
                f"{n_particles} particles in {dimension} dimensions"
            )
        if self.is_isotropic.shape != (n_particles,):
            raise ConfigurationError(
                f"is_isotropic shape {self.is_isotropic.shape} incompatible with "
                f"{n_particles} particles"
            )

        norms = np.linalg.norm(self.orientations, axis=1)
        if np.any(norms == 0):
            raise ConfigurationError("Orientation vectors must be non-zero")
        if not np.all(norms == 1.0):
            self.orientations = self.orientations / norms[:, np.newaxis]
        self.positions = self.box.wrap_positions(self.positions)

    @property
    def n_particles(self) -> int:
        """Return number of particles."""
        return len(self.positions)

    @property
    def dimension(self) -> int:
        """Return number of spatial dimensions."""
        return self.box.dimension

    @classmethod
    def create(
        cls,
        positions: ArrayLike,
        box: Box,
        orientations: ArrayLike | None = None,
        is_isotropic: ArrayLike | bool = False,
        step: int = 0,
    ) -> ParticleState:
        """
        Create a ParticleState with optional orientation initialization.

        Args:
            positions: Particle positions, shape (N, d).
            box: Simulation box.
            orientations: Orientation vectors, shape (N, d). Defaults to the
                first unit axis for every particle.
            is_isotropic: Per-particle flags, or a single flag for all.
            step: Current step number.

        Returns:
            New ParticleState instance.
        """
        positions = np.asarray(positions, dtype=np.float64)
        n_particles = len(positions)

        if orientations is None:
            orientations = np.zeros((n_particles, box.dimension), dtype=np.float64)
            orientations[:, 0] = 1.0
        if np.ndim(is_isotropic) == 0:
            is_isotropic = np.full(n_particles, bool(is_isotropic))

        return cls(
            positions=positions,
            orientations=orientations,
            box=box,
            is_isotropic=is_isotropic,
            step=step,
        )

    def particle(self, index: int) -> Particle:
        """Return a read-only view of one particle."""
        if not 0 <= index < self.n_particles:
            raise IndexError(
                f"Particle index {index} out of range [0, {self.n_particles})"
            )
        position = self.positions[index].copy()
        orientation = self.orientations[index].copy()
        position.flags.writeable = False
        orientation.flags.writeable = False
        return Particle(
            index=index,
            position=position,
            orientation=orientation,
            is_isotropic=bool(self.is_isotropic[index]),
        )

    def copy(self) -> ParticleState:
        """Create a deep copy of this state."""
        return ParticleState(
            positions=self.positions.copy(),
            orientations=self.orientations.copy(),
            box=self.box,  # Box is immutable
            is_isotropic=self.is_isotropic.copy(),
            step=self.step,
        )
