"""Patchy disc potential."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from ..errors import ConfigurationError
from .base import OVERLAP, PairModel

if TYPE_CHECKING:
    from ..neighborlists import NeighborIndex
    from ..system import ParticleState


class PatchyDisc(PairModel):
    """
    Two-dimensional hard discs decorated with attractive patches.

    Each disc has unit diameter and n_patches patches spaced evenly around
    its rim, the first one along the orientation vector. Two discs that do
    not overlap gain -epsilon for every pair of patch tips closer than the
    patch range. With a small patch range each patch binds at most one
    partner, so a disc has at most n_patches bonds.

    Attributes:
        n_patches: Number of patches per disc.
        interaction_energy: Bond energy epsilon in units of kBT.
        patch_range: Maximum tip-to-tip distance for a bond.
    """

    def __init__(
        self,
        state: ParticleState,
        neighbor_index: NeighborIndex,
        n_patches: int = 3,
        interaction_energy: float = 8.0,
        patch_range: float = 0.1,
    ) -> None:
        """
        Initialize patchy disc model.

        Args:
            state: Committed particle state (two-dimensional).
            neighbor_index: Neighbor index with cells >= 1 + patch_range.
            n_patches: Number of patches per disc.
            interaction_energy: Bond energy in units of kBT.
            patch_range: Maximum tip-to-tip distance for a bond.
        """
        if state.dimension != 2:
            raise ConfigurationError(
                f"Patchy discs are two-dimensional, got dimension {state.dimension}"
            )
        if n_patches < 1:
            raise ConfigurationError(f"n_patches must be >= 1, got {n_patches}")
        if patch_range <= 0:
            raise ConfigurationError(
                f"Patch range must be positive, got {patch_range}"
            )

        super().__init__(state, neighbor_index, 1.0 + patch_range)
        self.n_patches = int(n_patches)
        self.interaction_energy = float(interaction_energy)
        self.patch_range = float(patch_range)

        # Rotation matrices taking the orientation vector to each patch
        angles = 2.0 * np.pi * np.arange(self.n_patches) / self.n_patches
        cos, sin = np.cos(angles), np.sin(angles)
        self._patch_rotations = np.stack(
            [np.stack([cos, -sin], axis=-1), np.stack([sin, cos], axis=-1)], axis=1
        )
        self._range_sq = self.interaction_range**2
        self._patch_range_sq = self.patch_range**2

    def patch_directions(
        self, orientation: NDArray[np.floating]
    ) -> NDArray[np.floating]:
        """
        Get unit vectors pointing at each patch.

        Args:
            orientation: Orientation unit vector, shape (2,).

        Returns:
            Patch directions, shape (n_patches, 2).
        """
        return self._patch_rotations @ np.asarray(orientation, dtype=np.float64)

    def pair_energy(
        self,
        index1: int,
        position1: NDArray[np.floating],
        orientation1: NDArray[np.floating],
        index2: int,
        position2: NDArray[np.floating],
        orientation2: NDArray[np.floating],
    ) -> float:
        """Compute patchy disc energy between two particles."""
        dr = self.box.minimum_image(position1, position2)
        r_sq = float(np.dot(dr, dr))

        if r_sq < 1.0:
            return OVERLAP
        if r_sq >= self._range_sq:
            return 0.0

        # Patch tips relative to particle 1, using the minimum image of 2
        tips1 = 0.5 * self.patch_directions(orientation1)
        tips2 = dr + 0.5 * self.patch_directions(orientation2)

        separation = tips1[:, np.newaxis, :] - tips2[np.newaxis, :, :]
        tip_sq = np.sum(separation**2, axis=-1)
        n_bonds = int(np.count_nonzero(tip_sq < self._patch_range_sq))
        if n_bonds == 0:
            return 0.0

        return -self.interaction_energy * n_bonds
