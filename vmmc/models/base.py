"""Base interface for model adapters."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from ..errors import ConfigurationError

if TYPE_CHECKING:
    from ..neighborlists import NeighborIndex
    from ..system import ParticleState

# Pair energy returned for a hard overlap.
OVERLAP = math.inf


class ModelAdapter(ABC):
    """
    Abstract base class for the physical model consumed by the engine.

    This is the boundary between the VMMC engine and a physical potential.
    The engine never evaluates energies itself; everything it knows about
    the system comes through these four operations. Energies are in units
    of kBT.

    Every query must be a pure function of its arguments and the committed
    particle state: the engine evaluates trial poses that it may later
    discard, and relies on repeated calls giving identical answers.
    """

    @abstractmethod
    def particle_energy(self, index: int) -> float:
        """
        Compute the total pair energy felt by one particle.

        Args:
            index: Particle index, evaluated at its committed pose.

        Returns:
            Sum of pair energies with all other particles.
        """
        ...

    @abstractmethod
    def pair_energy(
        self,
        index1: int,
        position1: NDArray[np.floating],
        orientation1: NDArray[np.floating],
        index2: int,
        position2: NDArray[np.floating],
        orientation2: NDArray[np.floating],
    ) -> float:
        """
        Compute the energy between two particles at arbitrary poses.

        Returns:
            Pair energy, or OVERLAP if the poses overlap.
        """
        ...

    @abstractmethod
    def interactions(
        self,
        index: int,
        position: NDArray[np.floating],
        orientation: NDArray[np.floating],
    ) -> list[int]:
        """
        Enumerate the interaction partners of a particle at a given pose.

        Args:
            index: Particle index.
            position: Position to evaluate, possibly a trial position.
            orientation: Orientation to evaluate, possibly a trial orientation.

        Returns:
            Indices of particles within interaction range (excluding index).
        """
        ...

    def commit(
        self,
        index: int,
        position: NDArray[np.floating],
        orientation: NDArray[np.floating],
    ) -> None:
        """
        Update cached model state after a particle's move was accepted.

        Called once per cluster member after the engine has written the new
        pose into the particle state. Must be idempotent: calling it again
        with the same arguments leaves the model unchanged.
        """
        return None

    def total_energy(self) -> float:
        """Compute the total energy of the committed configuration."""
        raise NotImplementedError


class PairModel(ModelAdapter):
    """
    Model adapter for short-ranged pairwise potentials.

    Holds the committed particle state and a neighbor index, and implements
    everything except the pair potential itself: per-particle energies,
    interaction enumeration from neighbor candidates, and keeping the
    neighbor index in step with committed moves. Subclasses only define
    pair_energy().

    The neighbor index may be shared with the engine; relocation is
    idempotent, so both may update it.

    Attributes:
        state: Committed particle state (shared with the engine).
        neighbor_index: Spatial index over committed positions.
        interaction_range: Center-to-center distance beyond which the pair
            energy is zero.
    """

    def __init__(
        self,
        state: ParticleState,
        neighbor_index: NeighborIndex,
        interaction_range: float,
    ) -> None:
        """
        Initialize pair model.

        Args:
            state: Committed particle state.
            neighbor_index: Neighbor index built from state.positions,
                with cells no smaller than interaction_range.
            interaction_range: Cutoff distance of the potential.
        """
        if interaction_range <= 0:
            raise ConfigurationError(
                f"Interaction range must be positive, got {interaction_range}"
            )
        self.state = state
        self.box = state.box
        self.neighbor_index = neighbor_index
        self.interaction_range = float(interaction_range)

    def particle_energy(self, index: int) -> float:
        """Compute the total pair energy of a particle at its committed pose."""
        return self.energy_at(
            index, self.state.positions[index], self.state.orientations[index]
        )

    def energy_at(
        self,
        index: int,
        position: NDArray[np.floating],
        orientation: NDArray[np.floating],
    ) -> float:
        """Compute the energy of a particle at an arbitrary pose."""
        energy = 0.0
        for neighbor in sorted(self.neighbor_index.candidates(position)):
            if neighbor == index:
                continue
            energy += self.pair_energy(
                index,
                position,
                orientation,
                neighbor,
                self.state.positions[neighbor],
                self.state.orientations[neighbor],
            )
            if energy == OVERLAP:
                break
        return energy

    def interactions(
        self,
        index: int,
        position: NDArray[np.floating],
        orientation: NDArray[np.floating],
    ) -> list[int]:
        """Enumerate partners with a non-zero pair energy at a pose."""
        partners = []
        for neighbor in sorted(self.neighbor_index.candidates(position)):
            if neighbor == index:
                continue
            energy = self.pair_energy(
                index,
                position,
                orientation,
                neighbor,
                self.state.positions[neighbor],
                self.state.orientations[neighbor],
            )
            if energy != 0.0:
                partners.append(neighbor)
        return partners

    def commit(
        self,
        index: int,
        position: NDArray[np.floating],
        orientation: NDArray[np.floating],
    ) -> None:
        """Move the particle to its new cell in the neighbor index."""
        self.neighbor_index.relocate(index, position)

    def total_energy(self) -> float:
        """Compute the total energy, counting each pair once."""
        energy = 0.0
        for i in range(self.state.n_particles):
            energy += self.particle_energy(i)
        return 0.5 * energy
